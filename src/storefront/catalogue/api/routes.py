"""FastAPI endpoints for the catalogue: products, likes and taxonomy.

Writes go through domain commands and are admin only, except likes which any
signed-in shopper may record. Reads are public.
"""

import json

from fastapi import APIRouter, Depends, Query
from protean.utils.globals import current_domain

from storefront.api.auth import Caller, current_caller, require_admin
from storefront.api.schemas import IdResponse, StatusResponse
from storefront.catalogue import queries
from storefront.catalogue.api.schemas import (
    CategoryRequest,
    CollectionRequest,
    CreateProductRequest,
    LikeRequest,
    LikeResponse,
    SubCategoryRequest,
    UpdateCategoryRequest,
    UpdateCollectionRequest,
    UpdateProductRequest,
    UpdateSubCategoryRequest,
)
from storefront.catalogue.category.category import Category
from storefront.catalogue.category.management import CreateCategory, DeleteCategory, UpdateCategory
from storefront.catalogue.collection.collection import Collection
from storefront.catalogue.collection.management import CreateCollection, DeleteCollection, UpdateCollection
from storefront.catalogue.product.likes import LikeProduct, liked_products
from storefront.catalogue.product.management import CreateProduct, DeactivateProduct, UpdateProduct
from storefront.catalogue.subcategory.management import CreateSubCategory, DeleteSubCategory, UpdateSubCategory
from storefront.catalogue.subcategory.subcategory import SubCategory

product_router = APIRouter(prefix="/products", tags=["products"])
likes_router = APIRouter(prefix="/likes", tags=["likes"])
category_router = APIRouter(prefix="/categories", tags=["categories"])
subcategory_router = APIRouter(prefix="/subcategories", tags=["subcategories"])
collection_router = APIRouter(prefix="/collections", tags=["collections"])


def _split(value: str | None) -> list[str] | None:
    if not value:
        return None
    return [part.strip() for part in value.split(",") if part.strip()]


def _json_or_none(items):
    if items is None:
        return None
    return json.dumps([i.model_dump() for i in items])


# --- Product endpoints ---


@product_router.get("")
async def list_products(
    category: str | None = None,
    subcategory: str | None = None,
    collection: str | None = None,
    featured: bool | None = None,
    sizes: str | None = Query(default=None, description="Comma-separated sizes"),
    colors: str | None = Query(default=None, description="Comma-separated color names"),
    min_price: float | None = Query(default=None, ge=0),
    max_price: float | None = Query(default=None, ge=0),
    search: str | None = None,
    sort: str = Query(default="newest", pattern="^(newest|price-low|price-high|name)$"),
    limit: int = Query(default=queries.DEFAULT_LIMIT, ge=1, le=queries.DEFAULT_LIMIT),
) -> list[dict]:
    return queries.list_products(
        category=category,
        subcategory=subcategory,
        collection=collection,
        featured=featured,
        sizes=_split(sizes),
        colors=_split(colors),
        min_price=min_price,
        max_price=max_price,
        search=search,
        sort=sort,
        limit=limit,
    )


@product_router.post("", status_code=201, response_model=IdResponse)
async def create_product(body: CreateProductRequest, caller: Caller = Depends(require_admin)) -> IdResponse:
    command = CreateProduct(
        name=body.name,
        description=body.description,
        price=body.price,
        original_price=body.original_price,
        category_id=body.category_id,
        sub_category_id=body.sub_category_id,
        collection_id=body.collection_id,
        sizes=_json_or_none(body.sizes),
        colors=_json_or_none(body.colors),
        featured_image=body.featured_image,
        tags=json.dumps(body.tags),
        is_featured=body.is_featured,
        sku=body.sku,
        seo_url=body.seo_url,
        meta_title=body.meta_title,
        meta_description=body.meta_description,
    )
    result = current_domain.process(command, asynchronous=False)
    return IdResponse(id=result)


@product_router.get("/{product_id}")
async def get_product(product_id: str) -> dict:
    return queries.product_detail(product_id)


@product_router.put("/{product_id}", response_model=StatusResponse)
async def update_product(
    product_id: str, body: UpdateProductRequest, caller: Caller = Depends(require_admin)
) -> StatusResponse:
    command = UpdateProduct(
        product_id=product_id,
        name=body.name,
        description=body.description,
        price=body.price,
        original_price=body.original_price,
        category_id=body.category_id,
        sub_category_id=body.sub_category_id,
        collection_id=body.collection_id,
        sizes=_json_or_none(body.sizes),
        colors=_json_or_none(body.colors),
        featured_image=body.featured_image,
        tags=json.dumps(body.tags) if body.tags is not None else None,
        is_featured=body.is_featured,
        is_active=body.is_active,
        sku=body.sku,
        seo_url=body.seo_url,
        meta_title=body.meta_title,
        meta_description=body.meta_description,
    )
    current_domain.process(command, asynchronous=False)
    return StatusResponse()


@product_router.delete("/{product_id}", response_model=StatusResponse)
async def deactivate_product(product_id: str, caller: Caller = Depends(require_admin)) -> StatusResponse:
    current_domain.process(DeactivateProduct(product_id=product_id), asynchronous=False)
    return StatusResponse()


@product_router.post("/{product_id}/like", response_model=LikeResponse)
async def like_product(
    product_id: str, body: LikeRequest, caller: Caller = Depends(current_caller)
) -> LikeResponse:
    command = LikeProduct(user_id=caller.user_id, product_id=product_id, liked=body.liked)
    likes = current_domain.process(command, asynchronous=False)
    return LikeResponse(likes=likes, liked=body.liked)


@likes_router.get("")
async def list_liked_products(caller: Caller = Depends(current_caller)) -> list[dict]:
    return [queries.serialize_product(p) for p in liked_products(caller.user_id)]


# --- Category endpoints ---


@category_router.get("")
async def list_categories(include_inactive: bool = False) -> list[dict]:
    return queries.list_categories(include_inactive)


@category_router.post("", status_code=201, response_model=IdResponse)
async def create_category(body: CategoryRequest, caller: Caller = Depends(require_admin)) -> IdResponse:
    command = CreateCategory(
        name=body.name,
        description=body.description,
        image=body.image,
        display_order=body.display_order,
        is_active=body.is_active,
    )
    return IdResponse(id=current_domain.process(command, asynchronous=False))


@category_router.get("/{category_id}")
async def get_category(category_id: str) -> dict:
    category = current_domain.repository_for(Category).get(category_id)
    data = queries.serialize_category(category)
    data["subcategories"] = [
        queries.serialize_subcategory(s) for s in current_domain.repository_for(SubCategory).for_category(category_id)
    ]
    return data


@category_router.put("/{category_id}", response_model=StatusResponse)
async def update_category(
    category_id: str, body: UpdateCategoryRequest, caller: Caller = Depends(require_admin)
) -> StatusResponse:
    command = UpdateCategory(category_id=category_id, **body.model_dump())
    current_domain.process(command, asynchronous=False)
    return StatusResponse()


@category_router.delete("/{category_id}", response_model=StatusResponse)
async def delete_category(category_id: str, caller: Caller = Depends(require_admin)) -> StatusResponse:
    current_domain.process(DeleteCategory(category_id=category_id), asynchronous=False)
    return StatusResponse()


# --- SubCategory endpoints ---


@subcategory_router.get("")
async def list_subcategories(category: str | None = None, include_inactive: bool = False) -> list[dict]:
    repo = current_domain.repository_for(SubCategory)
    if category:
        subcategories = repo.for_category(category, include_inactive)
    else:
        subcategories = repo.listing(include_inactive)
    return [queries.serialize_subcategory(s) for s in subcategories]


@subcategory_router.post("", status_code=201, response_model=IdResponse)
async def create_subcategory(body: SubCategoryRequest, caller: Caller = Depends(require_admin)) -> IdResponse:
    command = CreateSubCategory(**body.model_dump())
    return IdResponse(id=current_domain.process(command, asynchronous=False))


@subcategory_router.get("/{subcategory_id}")
async def get_subcategory(subcategory_id: str) -> dict:
    return queries.serialize_subcategory(current_domain.repository_for(SubCategory).get(subcategory_id))


@subcategory_router.put("/{subcategory_id}", response_model=StatusResponse)
async def update_subcategory(
    subcategory_id: str, body: UpdateSubCategoryRequest, caller: Caller = Depends(require_admin)
) -> StatusResponse:
    command = UpdateSubCategory(subcategory_id=subcategory_id, **body.model_dump())
    current_domain.process(command, asynchronous=False)
    return StatusResponse()


@subcategory_router.delete("/{subcategory_id}", response_model=StatusResponse)
async def delete_subcategory(subcategory_id: str, caller: Caller = Depends(require_admin)) -> StatusResponse:
    current_domain.process(DeleteSubCategory(subcategory_id=subcategory_id), asynchronous=False)
    return StatusResponse()


# --- Collection endpoints ---


@collection_router.get("")
async def list_collections(featured: bool | None = None, include_inactive: bool = False) -> list[dict]:
    collections = current_domain.repository_for(Collection).listing(include_inactive, featured)
    return [queries.serialize_collection(c) for c in collections]


@collection_router.post("", status_code=201, response_model=IdResponse)
async def create_collection(body: CollectionRequest, caller: Caller = Depends(require_admin)) -> IdResponse:
    command = CreateCollection(**body.model_dump())
    return IdResponse(id=current_domain.process(command, asynchronous=False))


@collection_router.get("/{collection_id}")
async def get_collection(collection_id: str) -> dict:
    return queries.serialize_collection(current_domain.repository_for(Collection).get(collection_id))


@collection_router.put("/{collection_id}", response_model=StatusResponse)
async def update_collection(
    collection_id: str, body: UpdateCollectionRequest, caller: Caller = Depends(require_admin)
) -> StatusResponse:
    command = UpdateCollection(collection_id=collection_id, **body.model_dump())
    current_domain.process(command, asynchronous=False)
    return StatusResponse()


@collection_router.delete("/{collection_id}", response_model=StatusResponse)
async def delete_collection(collection_id: str, caller: Caller = Depends(require_admin)) -> StatusResponse:
    current_domain.process(DeleteCollection(collection_id=collection_id), asynchronous=False)
    return StatusResponse()
