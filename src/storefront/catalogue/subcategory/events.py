"""Domain events for the SubCategory aggregate."""

from protean.fields import Identifier, String

from storefront.domain import storefront


@storefront.event(part_of="SubCategory")
class SubCategoryCreated:
    __version__ = 1

    subcategory_id: Identifier(required=True)
    category_id: Identifier(required=True)
    name: String(required=True)


@storefront.event(part_of="SubCategory")
class SubCategoryUpdated:
    __version__ = 1

    subcategory_id: Identifier(required=True)
    category_id: Identifier(required=True)
    name: String(required=True)
