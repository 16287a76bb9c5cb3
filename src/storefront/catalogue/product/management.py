"""Product management: commands and handlers."""

import json

from protean import handle
from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.fields import Boolean, Float, Identifier, Integer, String, Text
from protean.utils.globals import current_domain

from storefront.catalogue.product.product import Product
from storefront.domain import logger, storefront


@storefront.command(part_of="Product")
class CreateProduct:
    name: String(required=True, max_length=255)
    description: Text()
    price: Float(required=True, min_value=0.0)
    has_discount: Boolean(default=False)
    discount_price: Float(min_value=0.0)
    quantity: Integer(default=0, min_value=0)
    images: Text()  # JSON array of URLs
    category_id: Identifier(required=True)


@storefront.command(part_of="Product")
class UpdateProduct:
    product_id: Identifier(required=True)
    name: String(max_length=255)
    description: Text()
    price: Float(min_value=0.0)
    has_discount: Boolean()
    discount_price: Float(min_value=0.0)
    quantity: Integer(min_value=0)
    images: Text()  # JSON array of URLs
    category_id: Identifier()


@storefront.command(part_of="Product")
class DeleteProduct:
    product_id: Identifier(required=True)


def _ensure_category_exists(category_id):
    from storefront.catalogue.category.category import Category

    try:
        current_domain.repository_for(Category).get(category_id)
    except ObjectNotFoundError:
        raise ValidationError({"category_id": ["Category not found"]})


@storefront.command_handler(part_of=Product)
class ManageProductHandler:
    @handle(CreateProduct)
    def create_product(self, command):
        _ensure_category_exists(command.category_id)

        product = Product.create(
            name=command.name,
            description=command.description,
            price=command.price,
            has_discount=command.has_discount,
            discount_price=command.discount_price,
            quantity=command.quantity,
            images=json.loads(command.images) if command.images else [],
            category_id=command.category_id,
        )
        current_domain.repository_for(Product).add(product)
        logger.info("product_created", product_id=str(product.id), name=product.name)
        return str(product.id)

    @handle(UpdateProduct)
    def update_product(self, command):
        repo = current_domain.repository_for(Product)
        product = repo.get(command.product_id)

        changes = {
            field: getattr(command, field)
            for field in ("name", "description", "price", "has_discount", "discount_price", "quantity")
            if getattr(command, field) is not None
        }
        if command.images is not None:
            changes["images"] = json.loads(command.images)
        if command.category_id is not None:
            _ensure_category_exists(command.category_id)
            changes["category_id"] = command.category_id
        if changes.get("has_discount") is False:
            changes["discount_price"] = None

        product.update_details(**changes)
        repo.add(product)

    @handle(DeleteProduct)
    def delete_product(self, command):
        repo = current_domain.repository_for(Product)
        product = repo.get(command.product_id)
        repo._dao.delete(product)
        logger.info("product_deleted", product_id=str(product.id))
        return True
