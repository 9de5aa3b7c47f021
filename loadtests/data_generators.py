"""Faker-based data generators for Locust load test scenarios.

Payloads match the field names of the storefront API's Pydantic request
schemas and pass the domain's validation rules (every color carries an
image, sizes come from the offered range, ratings are 1-5).
"""

import random
import uuid

from faker import Faker

fake = Faker()

LETTER_SIZES = ["XS", "S", "M", "L", "XL", "XXL"]
WAIST_SIZES = ["28", "30", "32", "34", "36", "38"]


def shopper_id() -> str:
    return f"lt-user-{uuid.uuid4().hex[:12]}"


def admin_headers(user_id: str = "lt-admin") -> dict:
    return {"X-User-Id": user_id, "X-User-Role": "admin"}


def shopper_headers(user_id: str) -> dict:
    return {"X-User-Id": user_id, "X-User-Role": "user"}


# ---------- Catalogue ----------


def category_data() -> dict:
    """Category names must be unique, so each carries a short random suffix."""
    return {
        "name": f"{fake.word().capitalize()} {uuid.uuid4().hex[:6]}",
        "description": fake.sentence(nb_words=8)[:500],
        "display_order": random.randint(0, 20),
    }


def subcategory_data(category_id: str) -> dict:
    data = category_data()
    data["category_id"] = category_id
    return data


def collection_data() -> dict:
    year = random.choice([2025, 2026])
    return {
        "name": f"{fake.color_name()} {year} {uuid.uuid4().hex[:6]}",
        "season": random.choice(["Spring", "Summer", "Fall", "Winter", "All Season"]),
        "year": year,
        "is_featured": random.random() < 0.3,
    }


def color_data() -> dict:
    return {
        "name": fake.color_name(),
        "hex": fake.hex_color(),
        "images": [fake.image_url() for _ in range(random.randint(1, 3))],
    }


def product_data(category_id: str, subcategory_id: str | None = None, collection_id: str | None = None) -> dict:
    """CreateProductRequest payload with one to three colors and a size run."""
    sizes = random.choice([LETTER_SIZES, WAIST_SIZES])
    price = round(random.uniform(10.0, 250.0), 2)
    return {
        "name": f"{fake.word().capitalize()} {random.choice(['Shirt', 'Trousers', 'Jacket', 'Scarf'])}",
        "description": fake.paragraph(nb_sentences=3)[:2000],
        "price": price,
        "original_price": round(price * random.uniform(1.0, 1.4), 2),
        "category_id": category_id,
        "sub_category_id": subcategory_id,
        "collection_id": collection_id,
        "sizes": [{"size": s, "stock": random.randint(0, 25)} for s in random.sample(sizes, k=4)],
        "colors": [color_data() for _ in range(random.randint(1, 3))],
        "tags": fake.words(nb=3),
        "is_featured": random.random() < 0.2,
    }


# ---------- Ordering ----------


def customer_info() -> dict:
    return {
        "full_name": fake.name()[:200],
        "phone_number": fake.phone_number()[:30],
        "address": fake.address().replace("\n", ", ")[:1000],
        "notes": random.choice([None, "Leave at the door", "Call on arrival"]),
    }


def order_payload(cart: dict) -> dict:
    """PlaceOrderRequest built from the cart contents the API returned."""
    return {
        "items": [
            {
                "product_id": line["product_id"],
                "size": line["size"],
                "color": line["color"],
                "quantity": line["quantity"],
                "price": line["price"],
            }
            for line in cart["items"]
        ],
        "total": cart["total"],
        "customer_info": customer_info(),
        "payment_method": "cash_on_delivery",
    }


# ---------- Reviews ----------


def review_data(product_id: str, order_id: str) -> dict:
    return {
        "product_id": product_id,
        "order_id": order_id,
        "rating": random.choices([1, 2, 3, 4, 5], weights=[1, 1, 2, 4, 6])[0],
        "title": fake.sentence(nb_words=4)[:100],
        "comment": fake.paragraph(nb_sentences=2)[:1000],
    }
