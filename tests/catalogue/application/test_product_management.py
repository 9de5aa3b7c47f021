"""Application tests for product management commands."""

import json

import pytest
from protean import current_domain
from storefront.catalogue.category.category import Category
from storefront.catalogue.collection.collection import Collection
from storefront.catalogue.product.management import CreateProduct, DeactivateProduct, UpdateProduct
from storefront.catalogue.product.product import Product
from storefront.catalogue.subcategory.subcategory import SubCategory
from storefront.errors import NotFound

COLORS = json.dumps([{"name": "Sand", "hex": "#d8c8a8", "images": ["https://img.example/1.jpg"]}])
SIZES = json.dumps([{"size": "M", "stock": 3}])


def _create(category_id, **overrides):
    fields = {
        "name": "Linen Shirt",
        "description": "Breathable",
        "price": 49.0,
        "category_id": category_id,
        "colors": COLORS,
        "sizes": SIZES,
    }
    fields.update(overrides)
    return current_domain.process(CreateProduct(**fields), asynchronous=False)


class TestCreateProduct:
    def test_create_persists(self, category):
        product_id = _create(category.id)
        product = current_domain.repository_for(Product).get(product_id)
        assert product.name == "Linen Shirt"
        assert product.size_entry("M").stock == 3
        assert product.sku.startswith("SHI-")

    def test_unknown_category(self):
        with pytest.raises(NotFound):
            _create("missing-category")

    def test_subcategory_must_belong_to_category(self, category):
        other = Category.create(name="Trousers")
        current_domain.repository_for(Category).add(other)
        foreign = SubCategory.create(name="Chinos", category_id=other.id)
        current_domain.repository_for(SubCategory).add(foreign)

        with pytest.raises(NotFound):
            _create(category.id, sub_category_id=foreign.id)

    def test_unknown_collection(self, category):
        with pytest.raises(NotFound):
            _create(category.id, collection_id="missing-collection")

    def test_with_subcategory_and_collection(self, category):
        subcategory = SubCategory.create(name="Oxford", category_id=category.id)
        current_domain.repository_for(SubCategory).add(subcategory)
        collection = Collection.create(name="Summer")
        current_domain.repository_for(Collection).add(collection)

        product_id = _create(category.id, sub_category_id=subcategory.id, collection_id=collection.id)
        product = current_domain.repository_for(Product).get(product_id)
        assert product.sub_category_id == subcategory.id
        assert product.collection_id == collection.id


class TestUpdateAndDeactivate:
    def test_update_price_and_stock(self, product):
        current_domain.process(
            UpdateProduct(
                product_id=product.id,
                price=39.0,
                sizes=json.dumps([{"size": "M", "stock": 10}]),
            ),
            asynchronous=False,
        )
        updated = current_domain.repository_for(Product).get(product.id)
        assert updated.price == 39.0
        assert updated.size_entry("M").stock == 10

    def test_update_to_unknown_category(self, product):
        with pytest.raises(NotFound):
            current_domain.process(
                UpdateProduct(product_id=product.id, category_id="missing"),
                asynchronous=False,
            )

    def test_deactivate_is_soft(self, product):
        current_domain.process(DeactivateProduct(product_id=product.id), asynchronous=False)
        stored = current_domain.repository_for(Product).get(product.id)
        assert stored.is_active is False
