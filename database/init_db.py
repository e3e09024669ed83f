"""
Create the ``users`` and ``qr_codes`` tables.

Run once before starting the application::

    python -m database.init_db
"""

from __future__ import annotations

import asyncio
import logging
import sys

from config.settings import config
from database.session import Database

logger = logging.getLogger(__name__)


async def init_db(database: Database) -> None:
    await database.ping()
    await database.create_all()
    logger.info("Tables created (users, qr_codes)")


async def _main() -> int:
    database = Database.from_settings(config)
    try:
        await init_db(database)
    except Exception:
        logger.exception("Database setup failed")
        return 1
    finally:
        await database.dispose()
    return 0


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format="%(asctime)s  %(levelname)-8s  %(name)s — %(message)s")
    sys.exit(asyncio.run(_main()))
