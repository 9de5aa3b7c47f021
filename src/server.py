"""Protean Engine runner for the storefront domain.

Only needed when PROTEAN_ENV selects asynchronous event processing
(the ``production`` overlay). The engine then runs the rating projector and
the notification fan-out outside the request cycle.

Usage:
    PROTEAN_ENV=production python src/server.py
"""

import asyncio

from protean.server.engine import Engine

from storefront.domain import storefront
from storefront.utils.logging import configure_logging


async def run():
    storefront.init()
    engine = Engine(storefront)
    await engine.run()


def main():
    configure_logging()
    asyncio.run(run())


if __name__ == "__main__":
    main()
