"""Product management — create, update and deactivate, with reference checks.

Sizes, colors and tags travel through commands as JSON text; the aggregate
builds its entities from the decoded lists.
"""

import json

import structlog
from protean import handle
from protean.exceptions import ObjectNotFoundError
from protean.fields import Boolean, Float, Identifier, String, Text
from protean.utils.globals import current_domain

from storefront.catalogue.category.category import Category
from storefront.catalogue.collection.collection import Collection
from storefront.catalogue.product.product import Product
from storefront.catalogue.subcategory.subcategory import SubCategory
from storefront.domain import storefront
from storefront.errors import NotFound

logger = structlog.get_logger(__name__)


@storefront.command(part_of="Product")
class CreateProduct:
    name: String(required=True, max_length=200)
    description: String(required=True, max_length=2000)
    price: Float(required=True, min_value=0.0)
    original_price: Float(min_value=0.0)
    category_id: Identifier(required=True)
    sub_category_id: Identifier()
    collection_id: Identifier()
    sizes: Text()  # JSON: [{"size": "M", "stock": 3}]
    colors: Text(required=True)  # JSON: [{"name", "hex", "images": [...]}]
    featured_image: String(max_length=500)
    tags: Text()
    is_featured: Boolean(default=False)
    sku: String(max_length=50)
    seo_url: String(max_length=255)
    meta_title: String(max_length=200)
    meta_description: String(max_length=500)


@storefront.command(part_of="Product")
class UpdateProduct:
    product_id: Identifier(required=True)
    name: String(max_length=200)
    description: String(max_length=2000)
    price: Float(min_value=0.0)
    original_price: Float(min_value=0.0)
    category_id: Identifier()
    sub_category_id: Identifier()
    collection_id: Identifier()
    sizes: Text()
    colors: Text()
    featured_image: String(max_length=500)
    tags: Text()
    is_featured: Boolean()
    is_active: Boolean()
    sku: String(max_length=50)
    seo_url: String(max_length=255)
    meta_title: String(max_length=200)
    meta_description: String(max_length=500)


@storefront.command(part_of="Product")
class DeactivateProduct:
    product_id: Identifier(required=True)


def _decode(raw):
    return json.loads(raw) if raw else None


def verify_references(category_id, sub_category_id=None, collection_id=None):
    """Check that referenced taxonomy exists; returns the category."""
    try:
        category = current_domain.repository_for(Category).get(category_id)
    except ObjectNotFoundError:
        raise NotFound("Category not found") from None

    if sub_category_id:
        try:
            subcategory = current_domain.repository_for(SubCategory).get(sub_category_id)
        except ObjectNotFoundError:
            raise NotFound("Subcategory not found") from None
        if str(subcategory.category_id) != str(category_id):
            raise NotFound("Subcategory not found in the selected category")

    if collection_id:
        try:
            current_domain.repository_for(Collection).get(collection_id)
        except ObjectNotFoundError:
            raise NotFound("Collection not found") from None

    return category


@storefront.command_handler(part_of=Product)
class ManageProductHandler:
    @handle(CreateProduct)
    def create_product(self, command):
        category = verify_references(command.category_id, command.sub_category_id, command.collection_id)

        product = Product.create(
            name=command.name,
            description=command.description,
            price=command.price,
            original_price=command.original_price,
            category_id=command.category_id,
            sub_category_id=command.sub_category_id,
            collection_id=command.collection_id,
            sizes=_decode(command.sizes),
            colors=_decode(command.colors),
            featured_image=command.featured_image,
            tags=_decode(command.tags),
            is_featured=command.is_featured,
            sku=command.sku,
            seo_url=command.seo_url,
            meta_title=command.meta_title,
            meta_description=command.meta_description,
            category_name=category.name,
        )
        current_domain.repository_for(Product).add(product)
        logger.info("product_created", product_id=str(product.id), sku=product.sku)
        return str(product.id)

    @handle(UpdateProduct)
    def update_product(self, command):
        repo = current_domain.repository_for(Product)
        product = repo.get(command.product_id)

        if command.category_id or command.sub_category_id or command.collection_id:
            verify_references(
                command.category_id or product.category_id,
                command.sub_category_id,
                command.collection_id,
            )

        product.update_details(
            name=command.name,
            description=command.description,
            price=command.price,
            original_price=command.original_price,
            category_id=command.category_id,
            sub_category_id=command.sub_category_id,
            collection_id=command.collection_id,
            sizes=_decode(command.sizes),
            colors=_decode(command.colors),
            featured_image=command.featured_image,
            tags=_decode(command.tags),
            is_featured=command.is_featured,
            is_active=command.is_active,
            sku=command.sku,
            seo_url=command.seo_url,
            meta_title=command.meta_title,
            meta_description=command.meta_description,
        )
        repo.add(product)

    @handle(DeactivateProduct)
    def deactivate_product(self, command):
        repo = current_domain.repository_for(Product)
        product = repo.get(command.product_id)
        product.deactivate()
        repo.add(product)
        logger.info("product_deactivated", product_id=str(product.id))
