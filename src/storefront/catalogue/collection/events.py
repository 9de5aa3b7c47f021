"""Domain events for the Collection aggregate."""

from protean.fields import Boolean, Identifier, Integer, String

from storefront.domain import storefront


@storefront.event(part_of="Collection")
class CollectionCreated:
    __version__ = 1

    collection_id: Identifier(required=True)
    name: String(required=True)
    season: String()
    year: Integer()


@storefront.event(part_of="Collection")
class CollectionUpdated:
    __version__ = 1

    collection_id: Identifier(required=True)
    name: String(required=True)
    is_active: Boolean()
    is_featured: Boolean()
