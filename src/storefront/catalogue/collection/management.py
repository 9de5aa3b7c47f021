"""Collection management — commands and handlers."""

import structlog
from protean import handle
from protean.exceptions import ValidationError
from protean.fields import Boolean, DateTime, Identifier, Integer, String
from protean.utils.globals import current_domain

from storefront.catalogue.collection.collection import Collection, Season
from storefront.catalogue.product.product import Product
from storefront.domain import storefront
from storefront.errors import DuplicateName

logger = structlog.get_logger(__name__)


@storefront.command(part_of="Collection")
class CreateCollection:
    name: String(required=True, max_length=100)
    description: String(max_length=500)
    image: String(max_length=500)
    season: String(choices=Season)
    year: Integer()
    is_active: Boolean(default=True)
    is_featured: Boolean(default=False)
    start_date: DateTime()
    end_date: DateTime()


@storefront.command(part_of="Collection")
class UpdateCollection:
    collection_id: Identifier(required=True)
    name: String(max_length=100)
    description: String(max_length=500)
    image: String(max_length=500)
    season: String(choices=Season)
    year: Integer()
    is_active: Boolean()
    is_featured: Boolean()
    start_date: DateTime()
    end_date: DateTime()


@storefront.command(part_of="Collection")
class DeleteCollection:
    collection_id: Identifier(required=True)


@storefront.command_handler(part_of=Collection)
class ManageCollectionHandler:
    @handle(CreateCollection)
    def create_collection(self, command):
        repo = current_domain.repository_for(Collection)
        if repo.find_by_name(command.name) is not None:
            raise DuplicateName("Collection name already exists")

        collection = Collection.create(
            name=command.name,
            description=command.description,
            image=command.image,
            season=command.season,
            year=command.year,
            is_active=command.is_active,
            is_featured=command.is_featured,
            start_date=command.start_date,
            end_date=command.end_date,
        )
        repo.add(collection)
        logger.info("collection_created", collection_id=str(collection.id), name=collection.name)
        return str(collection.id)

    @handle(UpdateCollection)
    def update_collection(self, command):
        repo = current_domain.repository_for(Collection)
        collection = repo.get(command.collection_id)

        if command.name is not None:
            clash = repo.find_by_name(command.name)
            if clash is not None and str(clash.id) != str(collection.id):
                raise DuplicateName("Collection name already exists")

        collection.update_details(
            name=command.name,
            description=command.description,
            image=command.image,
            season=command.season,
            year=command.year,
            is_active=command.is_active,
            is_featured=command.is_featured,
            start_date=command.start_date,
            end_date=command.end_date,
        )
        repo.add(collection)

    @handle(DeleteCollection)
    def delete_collection(self, command):
        repo = current_domain.repository_for(Collection)
        collection = repo.get(command.collection_id)

        collection_id = str(collection.id)
        if current_domain.repository_for(Product).has_active(collection_id=collection_id):
            raise ValidationError({"collection": ["Cannot delete collection with associated products"]})

        repo._dao.delete(collection)
        logger.info("collection_deleted", collection_id=collection_id)
