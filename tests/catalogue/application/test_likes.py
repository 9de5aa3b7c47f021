"""Application tests for product likes."""

from protean import current_domain
from storefront.catalogue.product.likes import LikeProduct, ProductLike, liked_products
from storefront.catalogue.product.product import Product


def _like(product_id, user_id="user-001", liked=True):
    return current_domain.process(LikeProduct(user_id=user_id, product_id=product_id, liked=liked), asynchronous=False)


class TestLikeProduct:
    def test_like_returns_new_count(self, product):
        assert _like(product.id) == 1
        assert current_domain.repository_for(Product).get(product.id).likes == 1

    def test_liking_twice_is_idempotent(self, product):
        _like(product.id)
        assert _like(product.id) == 1
        assert len(current_domain.repository_for(ProductLike).for_user("user-001")) == 1

    def test_two_users_like(self, product):
        _like(product.id, user_id="user-001")
        assert _like(product.id, user_id="user-002") == 2

    def test_unlike(self, product):
        _like(product.id)
        assert _like(product.id, liked=False) == 0
        assert current_domain.repository_for(ProductLike).for_user("user-001") == []

    def test_unlike_without_like_stays_at_zero(self, product):
        assert _like(product.id, liked=False) == 0


class TestLikedProducts:
    def test_lists_liked_active_products(self, make_product):
        shirt = make_product(name="Shirt")
        scarf = make_product(name="Scarf")
        make_product(name="Hat")
        _like(shirt.id)
        _like(scarf.id)

        assert {p.name for p in liked_products("user-001")} == {"Shirt", "Scarf"}

    def test_inactive_products_are_hidden(self, product):
        _like(product.id)
        stored = current_domain.repository_for(Product).get(product.id)
        stored.deactivate()
        current_domain.repository_for(Product).add(stored)

        assert liked_products("user-001") == []
