"""Load exercises from a JSON array into the catalog (upsert by name).

Usage: python scripts/import_exercises.py exercises.json
"""

import argparse
import asyncio
import logging
import os
import sys

# Add parent directory to path so we can import fittrack modules
sys.path.append(os.path.join(os.path.dirname(__file__), ".."))

from fittrack.core.config import get_settings
from fittrack.core.logging_config import configure_logging
from fittrack.db.session import async_session_maker, engine
from fittrack.services.exercise_catalog import import_exercises, load_documents

logger = logging.getLogger("import_exercises")


async def main(path: str) -> None:
    documents = load_documents(path)
    logger.info("Read %d exercise documents from %s", len(documents), path)
    async with async_session_maker() as db:
        try:
            created, updated = await import_exercises(db, documents)
            await db.commit()
        except Exception:
            await db.rollback()
            raise
    await engine.dispose()
    print(f"Created {created}, updated {updated}")


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("path", help="JSON file holding an array of exercise documents")
    args = parser.parse_args()
    configure_logging(get_settings())
    asyncio.run(main(args.path))
