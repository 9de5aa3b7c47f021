"""Collection aggregate — a seasonal or themed grouping of products."""

from datetime import UTC, datetime
from enum import Enum

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import Boolean, DateTime, Integer, String

from storefront.catalogue.collection.events import CollectionCreated, CollectionUpdated
from storefront.domain import storefront


class Season(Enum):
    SPRING = "Spring"
    SUMMER = "Summer"
    FALL = "Fall"
    WINTER = "Winter"
    ALL_SEASON = "All Season"
    HOLIDAY = "Holiday"
    RESORT = "Resort"


@storefront.aggregate
class Collection:
    name: String(required=True, max_length=100)
    description: String(max_length=500)
    image: String(max_length=500)
    season: String(choices=Season, default=Season.ALL_SEASON.value)
    year: Integer()
    is_active: Boolean(default=True)
    is_featured: Boolean(default=False)
    start_date: DateTime()
    end_date: DateTime()
    created_at: DateTime()
    updated_at: DateTime()

    @invariant.post
    def end_date_must_follow_start_date(self):
        if self.start_date and self.end_date and self.end_date < self.start_date:
            raise ValidationError({"end_date": ["End date must be after start date"]})

    @classmethod
    def create(
        cls,
        name,
        description=None,
        image=None,
        season=None,
        year=None,
        is_active=True,
        is_featured=False,
        start_date=None,
        end_date=None,
    ):
        now = datetime.now(UTC)
        collection = cls(
            name=name.strip(),
            description=description,
            image=image,
            season=season or Season.ALL_SEASON.value,
            year=year or now.year,
            is_active=is_active,
            is_featured=is_featured,
            start_date=start_date,
            end_date=end_date,
            created_at=now,
            updated_at=now,
        )
        collection.raise_(
            CollectionCreated(
                collection_id=str(collection.id),
                name=collection.name,
                season=collection.season,
                year=collection.year,
            )
        )
        return collection

    def update_details(self, **changes):
        for field_name in (
            "name",
            "description",
            "image",
            "season",
            "year",
            "is_active",
            "is_featured",
            "start_date",
            "end_date",
        ):
            value = changes.get(field_name)
            if value is not None:
                setattr(self, field_name, value.strip() if field_name == "name" else value)
        self.updated_at = datetime.now(UTC)

        self.raise_(
            CollectionUpdated(
                collection_id=str(self.id),
                name=self.name,
                is_active=self.is_active,
                is_featured=self.is_featured,
            )
        )


@storefront.repository(part_of=Collection)
class CollectionRepository:
    def find_by_name(self, name):
        wanted = name.strip().lower()
        return next((c for c in self._dao.query.limit(None).all().items if c.name.lower() == wanted), None)

    def listing(self, include_inactive=False, featured=None):
        collections = self._dao.query.limit(None).all().items
        if not include_inactive:
            collections = [c for c in collections if c.is_active]
        if featured is not None:
            collections = [c for c in collections if bool(c.is_featured) == featured]
        return sorted(collections, key=lambda c: c.created_at or datetime.min.replace(tzinfo=UTC), reverse=True)
