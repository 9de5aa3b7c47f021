"""Domain events for the Product aggregate."""

from protean.fields import Boolean, DateTime, Float, Identifier, Integer, String, Text

from storefront.domain import storefront


@storefront.event(part_of="Product")
class ProductCreated:
    """A new product was added to the catalogue."""

    __version__ = 1

    product_id: Identifier(required=True)
    name: String(required=True)
    sku: String()
    price: Float(required=True)
    category_id: Identifier(required=True)
    created_at: DateTime(required=True)


@storefront.event(part_of="Product")
class ProductUpdated:
    """One or more product attributes changed."""

    __version__ = 1

    product_id: Identifier(required=True)
    changed_fields: Text()  # JSON array of field names
    price: Float()
    updated_at: DateTime(required=True)


@storefront.event(part_of="Product")
class ProductDeactivated:
    """A product was soft-deleted and no longer appears in listings."""

    __version__ = 1

    product_id: Identifier(required=True)
    deactivated_at: DateTime(required=True)


@storefront.event(part_of="Product")
class ProductLikesChanged:
    __version__ = 1

    product_id: Identifier(required=True)
    user_id: Identifier(required=True)
    liked: Boolean(required=True)
    likes: Integer(required=True)
