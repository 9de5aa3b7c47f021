"""Pydantic request/response schemas for the catalogue API.

These are external contracts, separate from the internal Protean commands.
"""

from datetime import datetime

from pydantic import BaseModel, Field


# ---------------------------------------------------------------------------
# Shared sub-models
# ---------------------------------------------------------------------------
class SizeStockSchema(BaseModel):
    size: str
    stock: int = Field(ge=0, default=0)


class ColorSchema(BaseModel):
    name: str
    hex: str
    images: list[str] = Field(default_factory=list)


# ---------------------------------------------------------------------------
# Products
# ---------------------------------------------------------------------------
class CreateProductRequest(BaseModel):
    name: str = Field(max_length=200)
    description: str = Field(max_length=2000)
    price: float = Field(ge=0)
    original_price: float | None = Field(default=None, ge=0)
    category_id: str
    sub_category_id: str | None = None
    collection_id: str | None = None
    sizes: list[SizeStockSchema] = Field(default_factory=list)
    colors: list[ColorSchema]
    featured_image: str | None = None
    tags: list[str] = Field(default_factory=list)
    is_featured: bool = False
    sku: str | None = None
    seo_url: str | None = None
    meta_title: str | None = None
    meta_description: str | None = None

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "name": "Linen Shirt",
                    "description": "Breathable summer shirt",
                    "price": 49.0,
                    "category_id": "<category id>",
                    "sizes": [{"size": "M", "stock": 3}],
                    "colors": [{"name": "Sand", "hex": "#d8c8a8", "images": ["https://img/1.jpg"]}],
                }
            ]
        }
    }


class UpdateProductRequest(BaseModel):
    name: str | None = Field(default=None, max_length=200)
    description: str | None = Field(default=None, max_length=2000)
    price: float | None = Field(default=None, ge=0)
    original_price: float | None = Field(default=None, ge=0)
    category_id: str | None = None
    sub_category_id: str | None = None
    collection_id: str | None = None
    sizes: list[SizeStockSchema] | None = None
    colors: list[ColorSchema] | None = None
    featured_image: str | None = None
    tags: list[str] | None = None
    is_featured: bool | None = None
    is_active: bool | None = None
    sku: str | None = None
    seo_url: str | None = None
    meta_title: str | None = None
    meta_description: str | None = None


class LikeRequest(BaseModel):
    liked: bool = True


class LikeResponse(BaseModel):
    likes: int
    liked: bool


# ---------------------------------------------------------------------------
# Taxonomy
# ---------------------------------------------------------------------------
class CategoryRequest(BaseModel):
    name: str = Field(max_length=100)
    description: str | None = Field(default=None, max_length=500)
    image: str | None = None
    display_order: int = 0
    is_active: bool = True


class UpdateCategoryRequest(BaseModel):
    name: str | None = Field(default=None, max_length=100)
    description: str | None = Field(default=None, max_length=500)
    image: str | None = None
    display_order: int | None = None
    is_active: bool | None = None


class SubCategoryRequest(CategoryRequest):
    category_id: str


class UpdateSubCategoryRequest(UpdateCategoryRequest):
    category_id: str | None = None


class CollectionRequest(BaseModel):
    name: str = Field(max_length=100)
    description: str | None = Field(default=None, max_length=500)
    image: str | None = None
    season: str | None = None
    year: int | None = None
    is_active: bool = True
    is_featured: bool = False
    start_date: datetime | None = None
    end_date: datetime | None = None


class UpdateCollectionRequest(BaseModel):
    name: str | None = Field(default=None, max_length=100)
    description: str | None = Field(default=None, max_length=500)
    image: str | None = None
    season: str | None = None
    year: int | None = None
    is_active: bool | None = None
    is_featured: bool | None = None
    start_date: datetime | None = None
    end_date: datetime | None = None
