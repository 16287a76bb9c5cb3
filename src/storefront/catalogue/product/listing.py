"""Paged, filtered and sorted product listing for the storefront grid."""

import math
from dataclasses import dataclass, field

from protean.exceptions import ValidationError
from protean.utils.globals import current_domain

from storefront.catalogue.product.product import Product

SORTABLE_FIELDS = ("created_at", "updated_at", "name", "price", "quantity")
MAX_PAGE_SIZE = 100


@dataclass
class ProductFilter:
    category_id: str | None = None
    name: str | None = None
    min_price: float | None = None
    max_price: float | None = None


@dataclass
class ProductSort:
    field: str = "created_at"
    order: int = -1  # 1 ascending, -1 descending


@dataclass
class ProductPage:
    items: list = field(default_factory=list)
    total: int = 0
    page: int = 1
    total_pages: int = 0


def list_products(
    page: int = 1,
    limit: int = 10,
    filters: ProductFilter | None = None,
    sort: ProductSort | None = None,
) -> ProductPage:
    filters = filters or ProductFilter()
    sort = sort or ProductSort()

    if page < 1:
        raise ValidationError({"page": ["Page must be 1 or greater"]})
    if not 1 <= limit <= MAX_PAGE_SIZE:
        raise ValidationError({"limit": [f"Limit must be between 1 and {MAX_PAGE_SIZE}"]})
    if sort.field not in SORTABLE_FIELDS:
        raise ValidationError({"sort": [f"Cannot sort by {sort.field}"]})

    criteria = {}
    if filters.category_id:
        criteria["category_id"] = filters.category_id
    if filters.name:
        criteria["name__icontains"] = filters.name
    if filters.min_price is not None:
        criteria["price__gte"] = filters.min_price
    if filters.max_price is not None:
        criteria["price__lte"] = filters.max_price

    ordering = sort.field if sort.order == 1 else f"-{sort.field}"

    result = (
        current_domain.repository_for(Product)
        ._dao.query.filter(**criteria)
        .order_by(ordering)
        .offset((page - 1) * limit)
        .limit(limit)
        .all()
    )

    return ProductPage(
        items=result.items,
        total=result.total,
        page=page,
        total_pages=math.ceil(result.total / limit),
    )
