"""Category aggregate — top level of the catalogue taxonomy."""

from datetime import UTC, datetime

from protean.fields import Boolean, DateTime, Integer, String

from storefront.catalogue.category.events import CategoryCreated, CategoryUpdated
from storefront.domain import storefront


@storefront.aggregate
class Category:
    """A named grouping of products, ordered for display by ``display_order``.

    Names are unique regardless of case; the uniqueness check is done by the
    command handler since it needs to look at every other category.
    """

    name: String(required=True, max_length=100)
    description: String(max_length=500)
    image: String(max_length=500)
    display_order: Integer(default=0)
    is_active: Boolean(default=True)
    created_at: DateTime()
    updated_at: DateTime()

    @classmethod
    def create(cls, name, description=None, image=None, display_order=0, is_active=True):
        now = datetime.now(UTC)
        category = cls(
            name=name.strip(),
            description=description,
            image=image,
            display_order=display_order or 0,
            is_active=is_active,
            created_at=now,
            updated_at=now,
        )
        category.raise_(CategoryCreated(category_id=str(category.id), name=category.name))
        return category

    def update_details(self, name=None, description=None, image=None, display_order=None, is_active=None):
        if name is not None:
            self.name = name.strip()
        if description is not None:
            self.description = description
        if image is not None:
            self.image = image
        if display_order is not None:
            self.display_order = display_order
        if is_active is not None:
            self.is_active = is_active
        self.updated_at = datetime.now(UTC)

        self.raise_(
            CategoryUpdated(
                category_id=str(self.id),
                name=self.name,
                is_active=self.is_active,
            )
        )


@storefront.repository(part_of=Category)
class CategoryRepository:
    def find_by_name(self, name):
        """Case-insensitive lookup by name."""
        wanted = name.strip().lower()
        return next((c for c in self._dao.query.limit(None).all().items if c.name.lower() == wanted), None)

    def listing(self, include_inactive=False):
        categories = self._dao.query.limit(None).all().items
        if not include_inactive:
            categories = [c for c in categories if c.is_active]
        return sorted(categories, key=lambda c: (c.display_order or 0, c.name.lower()))
