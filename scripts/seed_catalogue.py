"""Seed a development catalogue through the storefront's domain commands.

Creates categories with subcategories, a couple of collections and a run of
products with random sizes, stock and colors. Every record goes through the
same commands the API uses, so uniqueness and image rules apply.

Prerequisites:
    Database ready: python src/manage.py setup-db (production overlay only)

Usage:
    python scripts/seed_catalogue.py --products 200
    PROTEAN_ENV=production python scripts/seed_catalogue.py --categories 6 --products 500
"""

import argparse
import json
import random
import sys
import time
import uuid

# Add src/ to path so we can import domain modules
sys.path.insert(0, "src")


def main():
    parser = argparse.ArgumentParser(
        description="Seed a development catalogue",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--categories", type=int, default=4, help="Number of categories (default: 4)")
    parser.add_argument("--products", type=int, default=100, help="Number of products (default: 100)")
    parser.add_argument("--batch-size", type=int, default=25, help="Print progress every N products (default: 25)")
    args = parser.parse_args()

    from faker import Faker
    from protean.exceptions import ValidationError

    from storefront.catalogue.category.management import CreateCategory
    from storefront.catalogue.collection.management import CreateCollection
    from storefront.catalogue.product.management import CreateProduct
    from storefront.catalogue.subcategory.management import CreateSubCategory
    from storefront.domain import storefront
    from storefront.errors import StorefrontError
    from storefront.utils.logging import configure_logging

    configure_logging()
    storefront.init()
    fake = Faker()

    print(f"\n{'=' * 60}")
    print("  Storefront Catalogue Seed")
    print(f"{'=' * 60}")
    print(f"  Categories: {args.categories:,}")
    print(f"  Products:   {args.products:,}")
    print(f"{'=' * 60}\n")

    created = 0
    errors = 0
    start = time.monotonic()

    with storefront.domain_context():
        taxonomy = []
        for i in range(args.categories):
            category_id = storefront.process(
                CreateCategory(name=f"{fake.word().capitalize()} {uuid.uuid4().hex[:4]}", display_order=i),
                asynchronous=False,
            )
            subcategory_ids = [
                storefront.process(
                    CreateSubCategory(name=fake.word().capitalize(), category_id=category_id, display_order=j),
                    asynchronous=False,
                )
                for j in range(random.randint(1, 3))
            ]
            taxonomy.append((category_id, subcategory_ids))

        collection_ids = [
            storefront.process(
                CreateCollection(name=f"{season} {uuid.uuid4().hex[:4]}", season=season),
                asynchronous=False,
            )
            for season in ("Summer", "Winter")
        ]

        for i in range(args.products):
            category_id, subcategory_ids = random.choice(taxonomy)
            sizes = random.sample(["XS", "S", "M", "L", "XL", "XXL"], k=4)
            colors = [
                {"name": fake.color_name(), "hex": fake.hex_color(), "images": [fake.image_url()]}
                for _ in range(random.randint(1, 3))
            ]
            try:
                storefront.process(
                    CreateProduct(
                        name=f"{fake.word().capitalize()} {random.choice(['Shirt', 'Jacket', 'Scarf'])}",
                        description=fake.paragraph(nb_sentences=3),
                        price=round(random.uniform(10.0, 250.0), 2),
                        category_id=category_id,
                        sub_category_id=random.choice(subcategory_ids),
                        collection_id=random.choice([None, *collection_ids]),
                        sizes=json.dumps([{"size": s, "stock": random.randint(0, 20)} for s in sizes]),
                        colors=json.dumps(colors),
                        tags=json.dumps(fake.words(nb=3)),
                        is_featured=random.random() < 0.1,
                    ),
                    asynchronous=False,
                )
                created += 1
            except (ValidationError, StorefrontError) as e:
                errors += 1
                if errors <= 5:
                    print(f"  [ERROR] Product {i + 1}: {e}")
                elif errors == 6:
                    print("  [ERROR] Suppressing further error messages...")

            if (i + 1) % args.batch_size == 0:
                elapsed = time.monotonic() - start
                print(f"  [{time.strftime('%H:%M:%S')}] Seeded {i + 1:,}/{args.products:,} ({errors} errors)")

    elapsed = time.monotonic() - start
    print(f"\n{'=' * 60}")
    print("  Seed Complete")
    print(f"{'=' * 60}")
    print(f"  Total time:  {elapsed:.1f}s")
    print(f"  Products:    {created:,}")
    print(f"  Errors:      {errors:,}")
    print(f"{'=' * 60}\n")


if __name__ == "__main__":
    main()
