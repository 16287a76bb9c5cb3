"""Category management: commands and handlers."""

from protean import handle
from protean.exceptions import ValidationError
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from storefront.catalogue.category.category import Category
from storefront.domain import logger, storefront


@storefront.command(part_of="Category")
class CreateCategory:
    name: String(required=True, max_length=100)


@storefront.command(part_of="Category")
class UpdateCategory:
    category_id: Identifier(required=True)
    name: String(required=True, max_length=100)


@storefront.command(part_of="Category")
class DeleteCategory:
    category_id: Identifier(required=True)


@storefront.command_handler(part_of=Category)
class ManageCategoryHandler:
    @handle(CreateCategory)
    def create_category(self, command):
        repo = current_domain.repository_for(Category)
        if repo.find_by_name(command.name) is not None:
            raise ValidationError({"name": ["Category name already exists"]})

        category = Category.create(name=command.name)
        repo.add(category)
        logger.info("category_created", category_id=str(category.id), name=category.name)
        return str(category.id)

    @handle(UpdateCategory)
    def update_category(self, command):
        repo = current_domain.repository_for(Category)
        category = repo.get(command.category_id)

        existing = repo.find_by_name(command.name)
        if existing is not None and str(existing.id) != str(category.id):
            raise ValidationError({"name": ["Category name already exists"]})

        category.rename(command.name)
        repo.add(category)

    @handle(DeleteCategory)
    def delete_category(self, command):
        from storefront.catalogue.product.product import Product

        repo = current_domain.repository_for(Category)
        category = repo.get(command.category_id)

        in_use = current_domain.repository_for(Product).count_in_category(category.id)
        if in_use:
            logger.warning(
                "category_delete_refused",
                category_id=str(category.id),
                product_count=in_use,
            )
            return False

        repo._dao.delete(category)
        logger.info("category_deleted", category_id=str(category.id))
        return True
