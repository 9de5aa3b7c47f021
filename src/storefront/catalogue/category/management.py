"""Category management — commands and handlers."""

import structlog
from protean import handle
from protean.exceptions import ValidationError
from protean.fields import Boolean, Identifier, Integer, String
from protean.utils.globals import current_domain

from storefront.catalogue.category.category import Category
from storefront.catalogue.product.product import Product
from storefront.catalogue.subcategory.subcategory import SubCategory
from storefront.domain import storefront
from storefront.errors import DuplicateName

logger = structlog.get_logger(__name__)


@storefront.command(part_of="Category")
class CreateCategory:
    name: String(required=True, max_length=100)
    description: String(max_length=500)
    image: String(max_length=500)
    display_order: Integer(default=0)
    is_active: Boolean(default=True)


@storefront.command(part_of="Category")
class UpdateCategory:
    category_id: Identifier(required=True)
    name: String(max_length=100)
    description: String(max_length=500)
    image: String(max_length=500)
    display_order: Integer()
    is_active: Boolean()


@storefront.command(part_of="Category")
class DeleteCategory:
    category_id: Identifier(required=True)


def _ensure_unique_name(repo, name, own_id=None):
    existing = repo.find_by_name(name)
    if existing is not None and str(existing.id) != str(own_id):
        raise DuplicateName("Category name already exists")


@storefront.command_handler(part_of=Category)
class ManageCategoryHandler:
    @handle(CreateCategory)
    def create_category(self, command):
        repo = current_domain.repository_for(Category)
        _ensure_unique_name(repo, command.name)

        category = Category.create(
            name=command.name,
            description=command.description,
            image=command.image,
            display_order=command.display_order,
            is_active=command.is_active,
        )
        repo.add(category)
        logger.info("category_created", category_id=str(category.id), name=category.name)
        return str(category.id)

    @handle(UpdateCategory)
    def update_category(self, command):
        repo = current_domain.repository_for(Category)
        category = repo.get(command.category_id)

        if command.name is not None:
            _ensure_unique_name(repo, command.name, own_id=category.id)

        category.update_details(
            name=command.name,
            description=command.description,
            image=command.image,
            display_order=command.display_order,
            is_active=command.is_active,
        )
        repo.add(category)

    @handle(DeleteCategory)
    def delete_category(self, command):
        repo = current_domain.repository_for(Category)
        category = repo.get(command.category_id)

        category_id = str(category.id)
        if current_domain.repository_for(Product).has_active(category_id=category_id):
            raise ValidationError({"category": ["Cannot delete category with associated products"]})
        if current_domain.repository_for(SubCategory).for_category(category_id):
            raise ValidationError({"category": ["Cannot delete category with associated subcategories"]})

        repo._dao.delete(category)
        logger.info("category_deleted", category_id=category_id)
