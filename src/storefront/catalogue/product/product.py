"""Product aggregate — a sellable item with per-size stock and per-color imagery.

Stock lives on the product itself, one ``SizeStock`` row per offered size.
The cart reads these rows before it accepts a quantity; nothing here
decrements stock.
"""

import json
import random
import re
from datetime import UTC, datetime
from enum import Enum

from protean import atomic_change, invariant
from protean.exceptions import ValidationError
from protean.fields import Boolean, DateTime, Float, HasMany, Identifier, Integer, String, Text

from storefront.catalogue.product.events import (
    ProductCreated,
    ProductDeactivated,
    ProductLikesChanged,
    ProductUpdated,
)
from storefront.domain import storefront


class Size(Enum):
    XS = "XS"
    S = "S"
    M = "M"
    L = "L"
    XL = "XL"
    XXL = "XXL"
    XXXL = "XXXL"
    XXXXL = "XXXXL"
    XXXXXL = "XXXXXL"
    XXXXXXL = "XXXXXXL"
    W26 = "26"
    W28 = "28"
    W30 = "30"
    W31 = "31"
    W32 = "32"
    W33 = "33"
    W34 = "34"
    W36 = "36"
    W38 = "38"
    W40 = "40"
    W42 = "42"
    W44 = "44"
    W46 = "46"
    W48 = "48"
    W50 = "50"
    W52 = "52"
    W54 = "54"
    W56 = "56"
    W58 = "58"
    W60 = "60"


def slugify(value):
    return re.sub(r"(^-|-$)+", "", re.sub(r"[^a-z0-9]+", "-", value.lower()))


def generate_sku(category_name=None):
    code = category_name[:3].upper() if category_name else "GEN"
    return f"{code}-{random.randint(1000, 9999)}"


# ---------------------------------------------------------------------------
# Entities
# ---------------------------------------------------------------------------
@storefront.entity(part_of="Product")
class SizeStock:
    size = String(required=True, choices=Size)
    stock = Integer(default=0, min_value=0)


@storefront.entity(part_of="Product")
class ProductColor:
    name = String(required=True, max_length=100)
    hex = String(required=True, max_length=20)
    images = Text()  # JSON array of image URLs

    def image_urls(self):
        return json.loads(self.images) if self.images else []


def _build_sizes(sizes_data):
    return [SizeStock(size=str(s["size"]), stock=int(s.get("stock", 0) or 0)) for s in sizes_data or []]


def _build_colors(colors_data):
    return [
        ProductColor(
            name=c["name"],
            hex=c["hex"],
            images=json.dumps(list(c.get("images") or [])),
        )
        for c in colors_data or []
    ]


# ---------------------------------------------------------------------------
# Aggregate Root
# ---------------------------------------------------------------------------
@storefront.aggregate
class Product:
    name = String(required=True, max_length=200)
    description = String(required=True, max_length=2000)
    price = Float(required=True, min_value=0.0)
    original_price = Float(min_value=0.0)

    category_id = Identifier(required=True)
    sub_category_id = Identifier()
    collection_id = Identifier()

    sizes = HasMany(SizeStock)
    colors = HasMany(ProductColor)
    featured_image = String(max_length=500)
    tags = Text()  # JSON array of strings

    likes = Integer(default=0, min_value=0)
    is_active = Boolean(default=True)
    is_featured = Boolean(default=False)

    sku = String(max_length=50)
    seo_url = String(max_length=255)
    meta_title = String(max_length=200)
    meta_description = String(max_length=500)

    created_at = DateTime()
    updated_at = DateTime()

    @invariant.post
    def must_have_at_least_one_color(self):
        if not self.colors:
            raise ValidationError({"colors": ["At least one color is required"]})

    @invariant.post
    def every_color_must_have_an_image(self):
        for color in self.colors:
            if not color.image_urls():
                raise ValidationError({"colors": ["Each color must have at least one image"]})

    # -------------------------------------------------------------------
    # Factory
    # -------------------------------------------------------------------
    @classmethod
    def create(
        cls,
        name,
        description,
        price,
        category_id,
        colors,
        sizes=None,
        original_price=None,
        sub_category_id=None,
        collection_id=None,
        featured_image=None,
        tags=None,
        is_featured=False,
        sku=None,
        seo_url=None,
        meta_title=None,
        meta_description=None,
        category_name=None,
    ):
        now = datetime.now(UTC)
        color_entities = _build_colors(colors)
        if not featured_image and color_entities and color_entities[0].image_urls():
            featured_image = color_entities[0].image_urls()[0]

        product = cls(
            name=name.strip(),
            description=description,
            price=float(price),
            original_price=float(original_price) if original_price is not None else None,
            category_id=category_id,
            sub_category_id=sub_category_id or None,
            collection_id=collection_id or None,
            sizes=_build_sizes(sizes),
            colors=color_entities,
            featured_image=featured_image,
            tags=json.dumps(tags or []),
            is_featured=is_featured,
            sku=sku or generate_sku(category_name),
            seo_url=seo_url or slugify(name),
            meta_title=meta_title,
            meta_description=meta_description,
            created_at=now,
            updated_at=now,
        )
        product.raise_(
            ProductCreated(
                product_id=str(product.id),
                name=product.name,
                sku=product.sku,
                price=product.price,
                category_id=str(category_id),
                created_at=now,
            )
        )
        return product

    # -------------------------------------------------------------------
    # Stock lookups
    # -------------------------------------------------------------------
    def size_entry(self, size):
        return next((s for s in self.sizes if s.size == str(size)), None)

    def total_stock(self):
        return sum(s.stock or 0 for s in self.sizes)

    def tag_list(self):
        return json.loads(self.tags) if self.tags else []

    # -------------------------------------------------------------------
    # Updates
    # -------------------------------------------------------------------
    def update_details(self, **changes):
        """Apply a partial update. ``sizes`` and ``colors`` replace the whole list."""
        simple_fields = (
            "name",
            "description",
            "price",
            "original_price",
            "category_id",
            "sub_category_id",
            "collection_id",
            "featured_image",
            "is_featured",
            "is_active",
            "sku",
            "seo_url",
            "meta_title",
            "meta_description",
        )
        changed = sorted(k for k, v in changes.items() if v is not None)

        with atomic_change(self):
            for field_name in simple_fields:
                value = changes.get(field_name)
                if value is None:
                    continue
                if field_name in ("price", "original_price"):
                    value = float(value)
                setattr(self, field_name, value)

            if changes.get("tags") is not None:
                self.tags = json.dumps(changes["tags"])

            if changes.get("sizes") is not None:
                for entry in list(self.sizes):
                    self.remove_sizes(entry)
                for entry in _build_sizes(changes["sizes"]):
                    self.add_sizes(entry)

            if changes.get("colors") is not None:
                for color in list(self.colors):
                    self.remove_colors(color)
                for color in _build_colors(changes["colors"]):
                    self.add_colors(color)
                if not changes.get("featured_image") and self.colors and self.colors[0].image_urls():
                    self.featured_image = self.colors[0].image_urls()[0]

        now = datetime.now(UTC)
        self.updated_at = now

        self.raise_(
            ProductUpdated(
                product_id=str(self.id),
                changed_fields=json.dumps(changed),
                price=self.price,
                updated_at=now,
            )
        )

    def deactivate(self):
        self.is_active = False
        now = datetime.now(UTC)
        self.updated_at = now
        self.raise_(ProductDeactivated(product_id=str(self.id), deactivated_at=now))

    # -------------------------------------------------------------------
    # Likes
    # -------------------------------------------------------------------
    def record_like(self, user_id, liked):
        previous = self.likes or 0
        self.likes = previous + 1 if liked else max(0, previous - 1)
        self.raise_(
            ProductLikesChanged(
                product_id=str(self.id),
                user_id=str(user_id),
                liked=liked,
                likes=self.likes,
            )
        )


@storefront.repository(part_of=Product)
class ProductRepository:
    def find_active(self, **filters):
        return self._dao.query.filter(is_active=True, **filters).limit(None).all().items

    def has_active(self, **filters):
        return bool(self.find_active(**filters))
