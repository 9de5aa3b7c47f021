import os
from pathlib import Path

import pytest
from protean.integrations.pytest import DomainFixture


def pytest_addoption(parser):
    parser.addoption(
        "--env",
        action="store",
        default="test",
        help="Config environment to run tests on",
    )


def pytest_sessionstart(session):
    """Select the config overlay before the domain is imported and initialized."""
    os.environ["PROTEAN_ENV"] = session.config.option.env


def pytest_collection_modifyitems(config, items):
    """Automatically mark tests based on their directory location."""
    for item in items:
        test_path = str(Path(item.fspath))

        if "/domain/" in test_path:
            item.add_marker(pytest.mark.domain)
        elif "/application/" in test_path:
            item.add_marker(pytest.mark.application)
        elif "/integration/" in test_path:
            item.add_marker(pytest.mark.integration)
            if not any(m.name == "fast" for m in item.iter_markers()):
                item.add_marker(pytest.mark.slow)
        elif "/bdd/" in test_path:
            item.add_marker(pytest.mark.bdd)


@pytest.fixture(scope="session")
def storefront_bed():
    from storefront.domain import storefront

    bed = DomainFixture(storefront)
    bed.setup()
    yield bed
    bed.teardown()


@pytest.fixture(autouse=True)
def _ctx(storefront_bed):
    with storefront_bed.domain_context():
        yield

        from protean import current_domain

        for _, provider in current_domain.providers.items():
            provider._data_reset()
        current_domain.event_store.store._data_reset()


# ---------------------------------------------------------------------------
# Catalogue data shared by every context's tests
# ---------------------------------------------------------------------------
def color(name="Sand", hex_="#d8c8a8", images=("https://img.example/sand-1.jpg",)):
    return {"name": name, "hex": hex_, "images": list(images)}


@pytest.fixture()
def category():
    from protean import current_domain
    from storefront.catalogue.category.category import Category

    category = Category.create(name="Shirts", description="Tops with buttons")
    current_domain.repository_for(Category).add(category)
    return category


@pytest.fixture()
def make_product(category):
    """Factory persisting an active product; sizes default to M with 3 in stock."""
    from protean import current_domain
    from storefront.catalogue.product.product import Product

    def _make(name="Linen Shirt", price=50.0, sizes=None, colors=None, **kwargs):
        product = Product.create(
            name=name,
            description=kwargs.pop("description", f"{name} description"),
            price=price,
            category_id=kwargs.pop("category_id", category.id),
            colors=colors or [color()],
            sizes=sizes if sizes is not None else [{"size": "M", "stock": 3}],
            category_name=category.name,
            **kwargs,
        )
        current_domain.repository_for(Product).add(product)
        return product

    return _make


@pytest.fixture()
def product(make_product):
    return make_product()
