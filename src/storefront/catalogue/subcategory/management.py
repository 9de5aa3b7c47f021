"""SubCategory management — commands and handlers."""

import structlog
from protean import handle
from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.fields import Boolean, Identifier, Integer, String
from protean.utils.globals import current_domain

from storefront.catalogue.category.category import Category
from storefront.catalogue.product.product import Product
from storefront.catalogue.subcategory.subcategory import SubCategory
from storefront.domain import storefront
from storefront.errors import DuplicateName, NotFound

logger = structlog.get_logger(__name__)


@storefront.command(part_of="SubCategory")
class CreateSubCategory:
    name: String(required=True, max_length=100)
    category_id: Identifier(required=True)
    description: String(max_length=500)
    image: String(max_length=500)
    display_order: Integer(default=0)
    is_active: Boolean(default=True)


@storefront.command(part_of="SubCategory")
class UpdateSubCategory:
    subcategory_id: Identifier(required=True)
    name: String(max_length=100)
    category_id: Identifier()
    description: String(max_length=500)
    image: String(max_length=500)
    display_order: Integer()
    is_active: Boolean()


@storefront.command(part_of="SubCategory")
class DeleteSubCategory:
    subcategory_id: Identifier(required=True)


def _require_category(category_id):
    try:
        return current_domain.repository_for(Category).get(category_id)
    except ObjectNotFoundError:
        raise NotFound("Category not found") from None


@storefront.command_handler(part_of=SubCategory)
class ManageSubCategoryHandler:
    @handle(CreateSubCategory)
    def create_subcategory(self, command):
        _require_category(command.category_id)

        repo = current_domain.repository_for(SubCategory)
        if repo.find_in_category(command.category_id, command.name) is not None:
            raise DuplicateName("Subcategory with this name already exists in this category")

        subcategory = SubCategory.create(
            name=command.name,
            category_id=command.category_id,
            description=command.description,
            image=command.image,
            display_order=command.display_order,
            is_active=command.is_active,
        )
        repo.add(subcategory)
        logger.info(
            "subcategory_created",
            subcategory_id=str(subcategory.id),
            category_id=str(command.category_id),
        )
        return str(subcategory.id)

    @handle(UpdateSubCategory)
    def update_subcategory(self, command):
        repo = current_domain.repository_for(SubCategory)
        subcategory = repo.get(command.subcategory_id)

        if command.category_id is not None:
            _require_category(command.category_id)

        target_category = command.category_id or subcategory.category_id
        target_name = command.name or subcategory.name
        clash = repo.find_in_category(target_category, target_name)
        if clash is not None and str(clash.id) != str(subcategory.id):
            raise DuplicateName("Subcategory with this name already exists in this category")

        subcategory.update_details(
            name=command.name,
            category_id=command.category_id,
            description=command.description,
            image=command.image,
            display_order=command.display_order,
            is_active=command.is_active,
        )
        repo.add(subcategory)

    @handle(DeleteSubCategory)
    def delete_subcategory(self, command):
        repo = current_domain.repository_for(SubCategory)
        subcategory = repo.get(command.subcategory_id)

        subcategory_id = str(subcategory.id)
        if current_domain.repository_for(Product).has_active(sub_category_id=subcategory_id):
            raise ValidationError({"subcategory": ["Cannot delete subcategory with associated products"]})

        repo._dao.delete(subcategory)
        logger.info("subcategory_deleted", subcategory_id=subcategory_id)
