"""Application tests for category, subcategory and collection commands."""

import pytest
from protean import current_domain
from protean.exceptions import ValidationError
from storefront.catalogue.category.category import Category
from storefront.catalogue.category.management import CreateCategory, DeleteCategory, UpdateCategory
from storefront.catalogue.collection.collection import Collection
from storefront.catalogue.collection.management import CreateCollection, DeleteCollection
from storefront.catalogue.product.product import Product
from storefront.catalogue.queries import list_categories
from storefront.catalogue.subcategory.management import (
    CreateSubCategory,
    DeleteSubCategory,
    UpdateSubCategory,
)
from storefront.catalogue.subcategory.subcategory import SubCategory
from storefront.errors import DuplicateName, NotFound


def _process(command):
    return current_domain.process(command, asynchronous=False)


class TestCategories:
    def test_create(self):
        category_id = _process(CreateCategory(name="Shirts", description="Tops"))
        assert current_domain.repository_for(Category).get(category_id).name == "Shirts"

    def test_duplicate_name_ignores_case(self):
        _process(CreateCategory(name="Shirts"))
        with pytest.raises(DuplicateName):
            _process(CreateCategory(name="sHIRTS"))

    def test_rename_to_existing_name(self):
        _process(CreateCategory(name="Shirts"))
        other_id = _process(CreateCategory(name="Trousers"))
        with pytest.raises(DuplicateName):
            _process(UpdateCategory(category_id=other_id, name="shirts"))

    def test_rename_to_own_name(self):
        category_id = _process(CreateCategory(name="Shirts"))
        _process(UpdateCategory(category_id=category_id, name="SHIRTS"))
        assert current_domain.repository_for(Category).get(category_id).name == "SHIRTS"

    def test_delete_refused_with_active_products(self, product, category):
        with pytest.raises(ValidationError):
            _process(DeleteCategory(category_id=category.id))

    def test_delete_allowed_once_products_are_inactive(self, product, category):
        product.deactivate()
        current_domain.repository_for(Product).add(product)
        _process(DeleteCategory(category_id=category.id))
        assert current_domain.repository_for(Category).listing(include_inactive=True) == []

    def test_delete_refused_with_subcategories(self, category):
        _process(CreateSubCategory(name="Oxford", category_id=category.id))
        with pytest.raises(ValidationError):
            _process(DeleteCategory(category_id=category.id))

    def test_listing_order_and_nesting(self):
        late = _process(CreateCategory(name="Accessories", display_order=2))
        early = _process(CreateCategory(name="Shirts", display_order=1))
        _process(CreateCategory(name="Archive", is_active=False))
        _process(CreateSubCategory(name="Oxford", category_id=early))

        listing = list_categories()
        assert [c["id"] for c in listing] == [early, late]
        assert [s["name"] for s in listing[0]["subcategories"]] == ["Oxford"]


class TestSubCategories:
    def test_parent_must_exist(self):
        with pytest.raises(NotFound):
            _process(CreateSubCategory(name="Oxford", category_id="missing"))

    def test_name_unique_within_category(self, category):
        _process(CreateSubCategory(name="Oxford", category_id=category.id))
        with pytest.raises(DuplicateName):
            _process(CreateSubCategory(name="oxford", category_id=category.id))

    def test_same_name_in_other_category(self, category):
        other = _process(CreateCategory(name="Trousers"))
        _process(CreateSubCategory(name="Classic", category_id=category.id))
        _process(CreateSubCategory(name="Classic", category_id=other))
        assert len(current_domain.repository_for(SubCategory).listing()) == 2

    def test_update_into_clashing_category(self, category):
        other = _process(CreateCategory(name="Trousers"))
        _process(CreateSubCategory(name="Classic", category_id=category.id))
        moving = _process(CreateSubCategory(name="Classic", category_id=other))
        with pytest.raises(DuplicateName):
            _process(UpdateSubCategory(subcategory_id=moving, category_id=category.id))

    def test_delete_refused_with_active_products(self, category, make_product):
        subcategory_id = _process(CreateSubCategory(name="Oxford", category_id=category.id))
        make_product(sub_category_id=subcategory_id)
        with pytest.raises(ValidationError):
            _process(DeleteSubCategory(subcategory_id=subcategory_id))

    def test_delete(self, category):
        subcategory_id = _process(CreateSubCategory(name="Oxford", category_id=category.id))
        _process(DeleteSubCategory(subcategory_id=subcategory_id))
        assert current_domain.repository_for(SubCategory).for_category(category.id) == []


class TestCollections:
    def test_duplicate_name(self):
        _process(CreateCollection(name="Summer"))
        with pytest.raises(DuplicateName):
            _process(CreateCollection(name="SUMMER"))

    def test_delete_refused_with_active_products(self, make_product):
        collection_id = _process(CreateCollection(name="Summer"))
        make_product(collection_id=collection_id)
        with pytest.raises(ValidationError):
            _process(DeleteCollection(collection_id=collection_id))

    def test_delete(self):
        collection_id = _process(CreateCollection(name="Summer"))
        _process(DeleteCollection(collection_id=collection_id))
        assert current_domain.repository_for(Collection).listing(include_inactive=True) == []


class TestLargeTaxonomy:
    def test_duplicate_category_beyond_first_hundred(self):
        for i in range(101):
            _process(CreateCategory(name=f"Category {i}"))
        with pytest.raises(DuplicateName):
            _process(CreateCategory(name="category 100"))

    def test_duplicate_collection_beyond_first_hundred(self):
        for i in range(101):
            _process(CreateCollection(name=f"Collection {i}"))
        with pytest.raises(DuplicateName):
            _process(CreateCollection(name="COLLECTION 100"))
