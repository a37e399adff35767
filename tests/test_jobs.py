"""Tests for the catalog seeding job."""

from unittest.mock import AsyncMock, patch

from sqlalchemy.ext.asyncio import AsyncSession

from gamestore.db.operations import count_games, create_game, list_games
from gamestore.jobs.seed_catalog import run_seed, seed_catalog
from gamestore.models.game import Game
from gamestore.services.sample_catalog import SAMPLE_GAMES, get_sample_games


class TestSampleCatalog:
    def test_twelve_games(self) -> None:
        games = get_sample_games()
        assert len(games) == 12
        assert len({g.name for g in games}) == 12

    def test_has_free_and_adult_titles(self) -> None:
        games = get_sample_games()
        assert sum(1 for g in games if g.is_free()) == 2
        assert sum(1 for g in games if g.age_rating == 18) == 2

    def test_fresh_objects_each_call(self) -> None:
        assert get_sample_games()[0] is not get_sample_games()[0]


class TestSeedCatalog:
    async def test_seeds_empty_catalog(self, session: AsyncSession) -> None:
        inserted = await seed_catalog(session)

        assert inserted == len(SAMPLE_GAMES)
        assert await count_games(session) == len(SAMPLE_GAMES)

    async def test_seed_is_idempotent(self, session: AsyncSession) -> None:
        await seed_catalog(session)
        await session.commit()

        assert await seed_catalog(session) == 0
        assert await count_games(session) == len(SAMPLE_GAMES)

    async def test_keeps_existing_entries(self, session: AsyncSession) -> None:
        await create_game(session, Game(name="Minecraft", price=1, category="Custom", age_rating=0))

        inserted = await seed_catalog(session)

        assert inserted == len(SAMPLE_GAMES) - 1
        minecraft = [g for g in await list_games(session) if g.name == "Minecraft"]
        assert minecraft[0].category == "Custom"


class TestRunSeed:
    async def test_run_seed_commits(self) -> None:
        mock_session = AsyncMock()
        mock_session.__aenter__ = AsyncMock(return_value=mock_session)
        mock_session.__aexit__ = AsyncMock(return_value=None)
        mock_session.commit = AsyncMock()

        with (
            patch("gamestore.jobs.seed_catalog.init_db", new_callable=AsyncMock),
            patch(
                "gamestore.jobs.seed_catalog.async_session_factory",
                return_value=mock_session,
            ),
            patch(
                "gamestore.jobs.seed_catalog.seed_catalog",
                new_callable=AsyncMock,
                return_value=5,
            ),
        ):
            result = await run_seed()

        assert result == 5
        mock_session.commit.assert_awaited_once()
