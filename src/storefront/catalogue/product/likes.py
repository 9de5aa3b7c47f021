"""Product likes — a (user, product) record plus the product's like counter.

Liking twice or unliking something never liked leaves both the record set
and the counter untouched.
"""

from datetime import UTC, datetime

import structlog
from protean import handle
from protean.fields import Boolean, DateTime, Identifier
from protean.utils.globals import current_domain

from storefront.catalogue.product.product import Product
from storefront.domain import storefront

logger = structlog.get_logger(__name__)


@storefront.aggregate
class ProductLike:
    user_id = Identifier(required=True)
    product_id = Identifier(required=True)
    created_at = DateTime()


@storefront.repository(part_of=ProductLike)
class ProductLikeRepository:
    def find_for(self, user_id, product_id):
        return self._dao.query.filter(user_id=str(user_id), product_id=str(product_id)).all().first

    def for_user(self, user_id):
        likes = self._dao.query.filter(user_id=str(user_id)).limit(None).all().items
        return sorted(likes, key=lambda like: like.created_at, reverse=True)


@storefront.command(part_of="ProductLike")
class LikeProduct:
    user_id = Identifier(required=True)
    product_id = Identifier(required=True)
    liked = Boolean(default=True)


@storefront.command_handler(part_of=ProductLike)
class ProductLikeHandler:
    @handle(LikeProduct)
    def like_product(self, command):
        """Record or withdraw a like; returns the product's like count."""
        product_repo = current_domain.repository_for(Product)
        product = product_repo.get(command.product_id)

        like_repo = current_domain.repository_for(ProductLike)
        existing = like_repo.find_for(command.user_id, command.product_id)

        if command.liked and existing is None:
            like_repo.add(
                ProductLike(
                    user_id=command.user_id,
                    product_id=command.product_id,
                    created_at=datetime.now(UTC),
                )
            )
        elif not command.liked and existing is not None:
            like_repo._dao.delete(existing)
        else:
            return product.likes or 0

        product.record_like(command.user_id, command.liked)
        product_repo.add(product)
        logger.info(
            "product_like_changed",
            product_id=str(product.id),
            user_id=str(command.user_id),
            liked=command.liked,
            likes=product.likes,
        )
        return product.likes


def liked_products(user_id):
    """Active products the user has liked, most recently liked first."""
    product_repo = current_domain.repository_for(Product)
    products = []
    for like in current_domain.repository_for(ProductLike).for_user(user_id):
        product = product_repo._dao.query.filter(id=str(like.product_id), is_active=True).all().first
        if product is not None:
            products.append(product)
    return products
