"""Pydantic request/response schemas for the catalogue API."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field

from storefront.catalogue.category.category import Category
from storefront.catalogue.product.product import Product

# --- Category Schemas ---


class CategoryRequest(BaseModel):
    model_config = {"json_schema_extra": {"examples": [{"name": "Ceramics"}]}}

    name: str = Field(..., min_length=1, max_length=100)


class CategoryResponse(BaseModel):
    id: str
    name: str
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @classmethod
    def from_category(cls, category: Category) -> CategoryResponse:
        return cls(
            id=str(category.id),
            name=category.name,
            created_at=category.created_at,
            updated_at=category.updated_at,
        )


class CategoryIdResponse(BaseModel):
    category_id: str


# --- Product Request Schemas ---


class CreateProductRequest(BaseModel):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "name": "Stoneware Mug",
                    "description": "Hand-thrown 350ml mug with a speckled glaze.",
                    "price": 24.0,
                    "has_discount": True,
                    "discount_price": 19.5,
                    "quantity": 40,
                    "images": ["/uploads/1718000000000-mug.jpg"],
                    "category_id": "2f0c9b7e-0d7c-4a55-9d64-2b0f2c1b9a11",
                }
            ]
        }
    }

    name: str = Field(..., min_length=1, max_length=255)
    description: str | None = None
    price: float = Field(..., ge=0)
    has_discount: bool = False
    discount_price: float | None = Field(None, ge=0)
    quantity: int = Field(0, ge=0)
    images: list[str] = Field(default_factory=list)
    category_id: str


class UpdateProductRequest(BaseModel):
    model_config = {"json_schema_extra": {"examples": [{"price": 22.0, "quantity": 35}]}}

    name: str | None = Field(None, min_length=1, max_length=255)
    description: str | None = None
    price: float | None = Field(None, ge=0)
    has_discount: bool | None = None
    discount_price: float | None = Field(None, ge=0)
    quantity: int | None = Field(None, ge=0)
    images: list[str] | None = None
    category_id: str | None = None


# --- Product Response Schemas ---


class ProductResponse(BaseModel):
    id: str
    name: str
    description: str | None = None
    price: float
    has_discount: bool
    discount_price: float | None = None
    effective_price: float
    quantity: int
    images: list[str]
    category_id: str
    category: CategoryResponse | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @classmethod
    def from_product(cls, product: Product, category: Category | None = None) -> ProductResponse:
        return cls(
            id=str(product.id),
            name=product.name,
            description=product.description,
            price=product.price,
            has_discount=bool(product.has_discount),
            discount_price=product.discount_price,
            effective_price=product.effective_price,
            quantity=product.quantity,
            images=product.image_urls,
            category_id=str(product.category_id),
            category=CategoryResponse.from_category(category) if category else None,
            created_at=product.created_at,
            updated_at=product.updated_at,
        )


class ProductPageResponse(BaseModel):
    items: list[ProductResponse]
    total: int
    page: int
    total_pages: int


class ProductIdResponse(BaseModel):
    product_id: str


class UploadResponse(BaseModel):
    url: str


class DeletedResponse(BaseModel):
    deleted: bool
