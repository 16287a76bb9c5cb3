"""Category aggregate: a flat grouping of products."""

from datetime import UTC, datetime

from protean.fields import DateTime, String

from storefront.domain import storefront


@storefront.aggregate
class Category:
    """A named group products are filed under.

    Names are unique across the catalogue. A category that still has products
    filed under it cannot be deleted.
    """

    name: String(required=True, max_length=100)
    created_at: DateTime()
    updated_at: DateTime()

    @classmethod
    def create(cls, name):
        from storefront.catalogue.category.events import CategoryCreated

        now = datetime.now(UTC)
        category = cls(name=name.strip(), created_at=now, updated_at=now)
        category.raise_(CategoryCreated(category_id=category.id, name=category.name))
        return category

    def rename(self, name):
        from storefront.catalogue.category.events import CategoryRenamed

        previous_name = self.name
        self.name = name.strip()
        self.updated_at = datetime.now(UTC)

        self.raise_(
            CategoryRenamed(
                category_id=self.id,
                previous_name=previous_name,
                name=self.name,
            )
        )


@storefront.repository(part_of=Category)
class CategoryRepository:
    def find_by_name(self, name: str) -> Category | None:
        return self._dao.query.filter(name=name.strip()).all().first

    def list_all(self) -> list[Category]:
        return self._dao.query.order_by("name").limit(1000).all().items
