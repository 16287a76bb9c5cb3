"""UserFavorite aggregate: a product a shopper has saved to their wishlist."""

from datetime import UTC, datetime

from protean.fields import DateTime, Identifier

from storefront.domain import storefront


@storefront.aggregate
class UserFavorite:
    user_id: Identifier(required=True)
    product_id: Identifier(required=True)
    created_at: DateTime()

    @classmethod
    def mark(cls, user_id, product_id):
        return cls(user_id=user_id, product_id=product_id, created_at=datetime.now(UTC))


@storefront.repository(part_of=UserFavorite)
class UserFavoriteRepository:
    def find(self, user_id, product_id) -> UserFavorite | None:
        return self._dao.query.filter(user_id=str(user_id), product_id=str(product_id)).all().first

    def for_user(self, user_id) -> list[UserFavorite]:
        return self._dao.query.filter(user_id=str(user_id)).order_by("-created_at").limit(1000).all().items
