"""Read side of the catalogue: products and taxonomy as plain dicts."""

from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from storefront.catalogue.category.category import Category
from storefront.catalogue.collection.collection import Collection
from storefront.catalogue.product.product import Product
from storefront.catalogue.subcategory.subcategory import SubCategory
from storefront.errors import NotFound

SORTS = ("newest", "price-low", "price-high", "name")
DEFAULT_LIMIT = 100


def _name_lookup(aggregate_cls):
    rows = current_domain.repository_for(aggregate_cls)._dao.query.limit(None).all().items
    return {str(obj.id): obj.name for obj in rows}


def _ref(ref_id, names):
    if not ref_id:
        return None
    return {"id": str(ref_id), "name": names.get(str(ref_id))}


def serialize_product(product, categories=None, subcategories=None, collections=None):
    categories = categories if categories is not None else _name_lookup(Category)
    subcategories = subcategories if subcategories is not None else _name_lookup(SubCategory)
    collections = collections if collections is not None else _name_lookup(Collection)

    return {
        "id": str(product.id),
        "name": product.name,
        "description": product.description,
        "price": product.price,
        "original_price": product.original_price,
        "category": _ref(product.category_id, categories),
        "sub_category": _ref(product.sub_category_id, subcategories),
        "collection": _ref(product.collection_id, collections),
        "sizes": [{"size": s.size, "stock": s.stock} for s in product.sizes],
        "colors": [{"name": c.name, "hex": c.hex, "images": c.image_urls()} for c in product.colors],
        "featured_image": product.featured_image,
        "tags": product.tag_list(),
        "likes": product.likes or 0,
        "is_active": product.is_active,
        "is_featured": product.is_featured,
        "sku": product.sku,
        "seo_url": product.seo_url,
        "meta_title": product.meta_title,
        "meta_description": product.meta_description,
        "created_at": product.created_at.isoformat() if product.created_at else None,
    }


def product_summary(product):
    """Compact shape embedded in carts, orders and reviews."""
    if product is None:
        return None
    return {
        "id": str(product.id),
        "name": product.name,
        "price": product.price,
        "featured_image": product.featured_image,
    }


def find_product(product_id):
    """Product by id or ``None``; used where a missing product is tolerated."""
    try:
        return current_domain.repository_for(Product).get(product_id)
    except ObjectNotFoundError:
        return None


def _matches_search(product, term):
    haystack = [product.name or "", product.description or "", *product.tag_list()]
    return any(term in text.lower() for text in haystack)


def list_products(
    category=None,
    subcategory=None,
    collection=None,
    featured=None,
    sizes=None,
    colors=None,
    min_price=None,
    max_price=None,
    search=None,
    sort="newest",
    limit=DEFAULT_LIMIT,
):
    """Active products narrowed by the given filters.

    ``sizes`` and ``colors`` match when the product offers any of the listed
    values; ``search`` is a case-insensitive substring test over name,
    description and tags.
    """
    exact = {}
    if category:
        exact["category_id"] = str(category)
    if subcategory:
        exact["sub_category_id"] = str(subcategory)
    if collection:
        exact["collection_id"] = str(collection)
    if featured is not None:
        exact["is_featured"] = featured

    products = current_domain.repository_for(Product).find_active(**exact)

    if sizes:
        wanted = set(sizes)
        products = [p for p in products if wanted & {s.size for s in p.sizes}]
    if colors:
        wanted = {c.lower() for c in colors}
        products = [p for p in products if wanted & {c.name.lower() for c in p.colors}]
    if min_price is not None:
        products = [p for p in products if p.price >= min_price]
    if max_price is not None:
        products = [p for p in products if p.price <= max_price]
    if search:
        term = search.strip().lower()
        products = [p for p in products if _matches_search(p, term)]

    if sort == "price-low":
        products.sort(key=lambda p: p.price)
    elif sort == "price-high":
        products.sort(key=lambda p: p.price, reverse=True)
    elif sort == "name":
        products.sort(key=lambda p: p.name.lower())
    else:
        products.sort(key=lambda p: p.created_at, reverse=True)

    categories = _name_lookup(Category)
    subcategories = _name_lookup(SubCategory)
    collections = _name_lookup(Collection)
    return [serialize_product(p, categories, subcategories, collections) for p in products[:limit]]


def product_detail(product_id):
    product = find_product(product_id)
    if product is None:
        raise NotFound("Product not found")
    return serialize_product(product)


def list_categories(include_inactive=False):
    """Categories in display order, each carrying its subcategories."""
    subcategory_repo = current_domain.repository_for(SubCategory)
    result = []
    for category in current_domain.repository_for(Category).listing(include_inactive):
        data = serialize_category(category)
        data["subcategories"] = [
            serialize_subcategory(s) for s in subcategory_repo.for_category(category.id, include_inactive)
        ]
        result.append(data)
    return result


def serialize_category(category):
    return {
        "id": str(category.id),
        "name": category.name,
        "description": category.description,
        "image": category.image,
        "display_order": category.display_order,
        "is_active": category.is_active,
    }


def serialize_subcategory(subcategory):
    return {
        "id": str(subcategory.id),
        "name": subcategory.name,
        "category_id": str(subcategory.category_id),
        "description": subcategory.description,
        "image": subcategory.image,
        "display_order": subcategory.display_order,
        "is_active": subcategory.is_active,
    }


def serialize_collection(collection):
    return {
        "id": str(collection.id),
        "name": collection.name,
        "description": collection.description,
        "image": collection.image,
        "season": collection.season,
        "year": collection.year,
        "is_active": collection.is_active,
        "is_featured": collection.is_featured,
        "start_date": collection.start_date.isoformat() if collection.start_date else None,
        "end_date": collection.end_date.isoformat() if collection.end_date else None,
    }
