"""SubCategory aggregate — second level of the taxonomy, owned by a Category."""

from datetime import UTC, datetime

from protean.fields import Boolean, DateTime, Identifier, Integer, String

from storefront.catalogue.subcategory.events import SubCategoryCreated, SubCategoryUpdated
from storefront.domain import storefront


@storefront.aggregate
class SubCategory:
    name: String(required=True, max_length=100)
    category_id: Identifier(required=True)
    description: String(max_length=500)
    image: String(max_length=500)
    display_order: Integer(default=0)
    is_active: Boolean(default=True)
    created_at: DateTime()
    updated_at: DateTime()

    @classmethod
    def create(cls, name, category_id, description=None, image=None, display_order=0, is_active=True):
        now = datetime.now(UTC)
        subcategory = cls(
            name=name.strip(),
            category_id=category_id,
            description=description,
            image=image,
            display_order=display_order or 0,
            is_active=is_active,
            created_at=now,
            updated_at=now,
        )
        subcategory.raise_(
            SubCategoryCreated(
                subcategory_id=str(subcategory.id),
                category_id=str(category_id),
                name=subcategory.name,
            )
        )
        return subcategory

    def update_details(
        self, name=None, category_id=None, description=None, image=None, display_order=None, is_active=None
    ):
        if name is not None:
            self.name = name.strip()
        if category_id is not None:
            self.category_id = category_id
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
            SubCategoryUpdated(
                subcategory_id=str(self.id),
                category_id=str(self.category_id),
                name=self.name,
            )
        )


@storefront.repository(part_of=SubCategory)
class SubCategoryRepository:
    def for_category(self, category_id, include_inactive=True):
        subcategories = self._dao.query.filter(category_id=str(category_id)).limit(None).all().items
        if not include_inactive:
            subcategories = [s for s in subcategories if s.is_active]
        return sorted(subcategories, key=lambda s: (s.display_order or 0, s.name.lower()))

    def find_in_category(self, category_id, name):
        """Case-insensitive lookup of a name within one category."""
        wanted = name.strip().lower()
        return next((s for s in self.for_category(category_id) if s.name.lower() == wanted), None)

    def listing(self, include_inactive=False):
        subcategories = self._dao.query.limit(None).all().items
        if not include_inactive:
            subcategories = [s for s in subcategories if s.is_active]
        return sorted(subcategories, key=lambda s: (s.display_order or 0, s.name.lower()))
