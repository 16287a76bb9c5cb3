"""Toggle a product in or out of a shopper's favourites."""

from protean import handle
from protean.fields import Identifier
from protean.utils.globals import current_domain

from storefront.domain import storefront
from storefront.identity.favorite.favorite import UserFavorite


@storefront.command(part_of="UserFavorite")
class ToggleFavorite:
    user_id: Identifier(required=True)
    product_id: Identifier(required=True)


@storefront.command_handler(part_of=UserFavorite)
class ToggleFavoriteHandler:
    @handle(ToggleFavorite)
    def toggle_favorite(self, command):
        """Return True when the product is now a favourite, False when it was removed."""
        from storefront.catalogue.product.product import Product

        repo = current_domain.repository_for(UserFavorite)
        existing = repo.find(command.user_id, command.product_id)
        if existing is not None:
            repo._dao.delete(existing)
            return False

        current_domain.repository_for(Product).get(command.product_id)
        repo.add(UserFavorite.mark(command.user_id, command.product_id))
        return True


def user_favorites(user_id) -> list[str]:
    return [str(favorite.product_id) for favorite in current_domain.repository_for(UserFavorite).for_user(user_id)]
