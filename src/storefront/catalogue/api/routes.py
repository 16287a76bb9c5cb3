"""FastAPI endpoints for categories, products and product images."""

import json

from fastapi import APIRouter, Depends, File, Query, UploadFile
from protean.utils.globals import current_domain

from storefront.catalogue.api.schemas import (
    CategoryIdResponse,
    CategoryRequest,
    CategoryResponse,
    CreateProductRequest,
    DeletedResponse,
    ProductIdResponse,
    ProductPageResponse,
    ProductResponse,
    UpdateProductRequest,
    UploadResponse,
)
from storefront.catalogue.category.category import Category
from storefront.catalogue.category.management import CreateCategory, DeleteCategory, UpdateCategory
from storefront.catalogue.product.images import store_upload
from storefront.catalogue.product.listing import ProductFilter, ProductSort, list_products
from storefront.catalogue.product.management import CreateProduct, DeleteProduct, UpdateProduct
from storefront.catalogue.product.product import Product
from storefront.identity.api.deps import admin_user
from storefront.identity.user.user import User

product_router = APIRouter(prefix="/products", tags=["products"])
category_router = APIRouter(prefix="/categories", tags=["categories"])


# --- Category endpoints ---


@category_router.get("", response_model=list[CategoryResponse])
async def list_categories() -> list[CategoryResponse]:
    categories = current_domain.repository_for(Category).list_all()
    return [CategoryResponse.from_category(category) for category in categories]


@category_router.get("/{category_id}", response_model=CategoryResponse)
async def get_category(category_id: str) -> CategoryResponse:
    return CategoryResponse.from_category(current_domain.repository_for(Category).get(category_id))


@category_router.post("", status_code=201, response_model=CategoryIdResponse)
async def create_category(body: CategoryRequest, _: User = Depends(admin_user)) -> CategoryIdResponse:
    result = current_domain.process(CreateCategory(name=body.name), asynchronous=False)
    return CategoryIdResponse(category_id=result)


@category_router.put("/{category_id}", response_model=CategoryResponse)
async def update_category(
    category_id: str, body: CategoryRequest, _: User = Depends(admin_user)
) -> CategoryResponse:
    current_domain.process(UpdateCategory(category_id=category_id, name=body.name), asynchronous=False)
    return CategoryResponse.from_category(current_domain.repository_for(Category).get(category_id))


@category_router.delete("/{category_id}", response_model=DeletedResponse)
async def delete_category(category_id: str, _: User = Depends(admin_user)) -> DeletedResponse:
    deleted = current_domain.process(DeleteCategory(category_id=category_id), asynchronous=False)
    return DeletedResponse(deleted=deleted)


# --- Product endpoints ---


@product_router.get("", response_model=ProductPageResponse)
async def get_products(
    page: int = Query(1),
    limit: int = Query(10),
    category_id: str | None = None,
    name: str | None = None,
    min_price: float | None = None,
    max_price: float | None = None,
    sort_field: str = "created_at",
    sort_order: int = Query(-1),
) -> ProductPageResponse:
    result = list_products(
        page=page,
        limit=limit,
        filters=ProductFilter(
            category_id=category_id,
            name=name,
            min_price=min_price,
            max_price=max_price,
        ),
        sort=ProductSort(field=sort_field, order=sort_order),
    )
    return ProductPageResponse(
        items=[ProductResponse.from_product(product) for product in result.items],
        total=result.total,
        page=result.page,
        total_pages=result.total_pages,
    )


@product_router.get("/{product_id}", response_model=ProductResponse)
async def get_product(product_id: str) -> ProductResponse:
    product = current_domain.repository_for(Product).get(product_id)
    category = current_domain.repository_for(Category)._dao.query.filter(id=product.category_id).all().first
    return ProductResponse.from_product(product, category)


@product_router.post("", status_code=201, response_model=ProductIdResponse)
async def create_product(body: CreateProductRequest, _: User = Depends(admin_user)) -> ProductIdResponse:
    command = CreateProduct(
        name=body.name,
        description=body.description,
        price=body.price,
        has_discount=body.has_discount,
        discount_price=body.discount_price,
        quantity=body.quantity,
        images=json.dumps(body.images),
        category_id=body.category_id,
    )
    result = current_domain.process(command, asynchronous=False)
    return ProductIdResponse(product_id=result)


@product_router.put("/{product_id}", response_model=ProductResponse)
async def update_product(
    product_id: str, body: UpdateProductRequest, _: User = Depends(admin_user)
) -> ProductResponse:
    command = UpdateProduct(
        product_id=product_id,
        name=body.name,
        description=body.description,
        price=body.price,
        has_discount=body.has_discount,
        discount_price=body.discount_price,
        quantity=body.quantity,
        images=json.dumps(body.images) if body.images is not None else None,
        category_id=body.category_id,
    )
    current_domain.process(command, asynchronous=False)
    return ProductResponse.from_product(current_domain.repository_for(Product).get(product_id))


@product_router.delete("/{product_id}", response_model=DeletedResponse)
async def delete_product(product_id: str, _: User = Depends(admin_user)) -> DeletedResponse:
    deleted = current_domain.process(DeleteProduct(product_id=product_id), asynchronous=False)
    return DeletedResponse(deleted=deleted)


@product_router.post("/images", status_code=201, response_model=UploadResponse)
async def upload_image(file: UploadFile = File(...), _: User = Depends(admin_user)) -> UploadResponse:
    content = await file.read()
    return UploadResponse(url=store_upload(file.filename, content))
