"""
Job to seed the sample catalog.

Inserts every sample game whose name is not already in the catalog.
Can be run as a standalone script or called at application startup.
"""

import asyncio
import logging

from sqlalchemy.ext.asyncio import AsyncSession

from gamestore.db.database import async_session_factory, init_db
from gamestore.db.operations import create_game, game_exists_by_name
from gamestore.services.sample_catalog import get_sample_games

logger = logging.getLogger(__name__)


async def seed_catalog(session: AsyncSession) -> int:
    """
    Insert missing sample games.

    Returns:
        Number of games inserted
    """
    inserted = 0
    for game in get_sample_games():
        if await game_exists_by_name(session, game.name):
            logger.debug("Skipping existing game: %s", game.name)
            continue
        await create_game(session, game)
        inserted += 1

    logger.info("Seeded %d sample games", inserted)
    return inserted


async def run_seed() -> int:
    """Create tables if needed, seed, and commit."""
    await init_db()
    async with async_session_factory() as session:
        count = await seed_catalog(session)
        await session.commit()
    return count


def main() -> None:
    """CLI entry point for seeding the catalog."""
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    asyncio.run(run_seed())


if __name__ == "__main__":
    main()
