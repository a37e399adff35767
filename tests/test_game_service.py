"""Tests for catalog rules."""

from decimal import Decimal

import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from gamestore.models.failure import ConflictError, GameNotFoundError, InvalidInputError
from gamestore.services import game_service
from gamestore.services.game_service import PriceOrder


@pytest.fixture
async def catalog(session: AsyncSession) -> dict[str, int]:
    """Four games; returns name -> id."""
    specs = [
        ("Minecraft", "89.90", "Adventure", 10, True),
        ("Fortnite", "0.00", "Battle Royale", 12, True),
        ("Stardew Valley", "24.99", "Simulation", 0, True),
        ("Grand Theft Auto V", "149.90", "Action", 18, False),
    ]
    ids = {}
    for name, price, category, rating, available in specs:
        game = await game_service.create_game(
            session,
            name=name,
            price=Decimal(price),
            category=category,
            age_rating=rating,
            available=available,
        )
        ids[name] = game.id
    return ids


class TestCreateGame:
    async def test_create(self, session: AsyncSession) -> None:
        game = await game_service.create_game(
            session, name="Hades", price=Decimal("79.90"), category="Roguelike", age_rating=14
        )
        assert game.id is not None
        assert await game_service.count_games(session) == 1

    async def test_duplicate_name(self, session: AsyncSession, catalog: dict[str, int]) -> None:
        with pytest.raises(ConflictError) as exc_info:
            await game_service.create_game(
                session, name="Minecraft", price=Decimal("1"), category="X", age_rating=0
            )
        assert exc_info.value.status_code == 409

    async def test_invalid_price(self, session: AsyncSession) -> None:
        with pytest.raises(InvalidInputError):
            await game_service.create_game(
                session, name="Bad", price=Decimal("-1"), category="X", age_rating=0
            )


class TestFindAndList:
    async def test_find_by_id(self, session: AsyncSession, catalog: dict[str, int]) -> None:
        game = await game_service.find_game_by_id(session, catalog["Fortnite"])
        assert game.name == "Fortnite"
        assert game.is_free()

    async def test_find_by_id_missing(self, session: AsyncSession) -> None:
        with pytest.raises(GameNotFoundError) as exc_info:
            await game_service.find_game_by_id(session, 42)
        assert exc_info.value.message == "Game not found with ID: 42"

    async def test_find_by_name(self, session: AsyncSession, catalog: dict[str, int]) -> None:
        assert (await game_service.find_game_by_name(session, "Minecraft")) is not None
        assert await game_service.find_game_by_name(session, "minecraft") is None
        assert await game_service.find_game_by_name(session, "") is None

    async def test_list_available(self, session: AsyncSession, catalog: dict[str, int]) -> None:
        names = [g.name for g in await game_service.list_available_games(session)]
        assert names == ["Minecraft", "Fortnite", "Stardew Valley"]
        assert len(await game_service.list_all_games(session)) == 4

    async def test_sorted_by_price(self, session: AsyncSession, catalog: dict[str, int]) -> None:
        ascending = await game_service.list_games_sorted_by_price(session)
        descending = await game_service.list_games_sorted_by_price(session, ascending=False)
        assert [g.name for g in ascending] == ["Fortnite", "Stardew Valley", "Minecraft"]
        assert [g.name for g in descending] == ["Minecraft", "Stardew Valley", "Fortnite"]

    async def test_filter_by_category(self, session: AsyncSession, catalog: dict[str, int]) -> None:
        assert [g.name for g in await game_service.filter_games_by_category(session, "Action")] == [
            "Grand Theft Auto V"
        ]
        assert len(await game_service.filter_games_by_category(session, " ")) == 3

    async def test_filter_by_price_range(self, session: AsyncSession, catalog: dict[str, int]) -> None:
        games = await game_service.filter_games_by_price_range(session, Decimal("20"), Decimal("90"))
        assert [g.name for g in games] == ["Minecraft", "Stardew Valley"]
        assert len(await game_service.filter_games_by_price_range(session)) == 4

    async def test_inverted_price_range(self, session: AsyncSession) -> None:
        with pytest.raises(InvalidInputError):
            await game_service.filter_games_by_price_range(session, Decimal("10"), Decimal("5"))

    async def test_filter_for_age(self, session: AsyncSession, catalog: dict[str, int]) -> None:
        games = await game_service.filter_games_for_age(session, 10)
        assert [g.name for g in games] == ["Minecraft", "Stardew Valley"]
        with pytest.raises(InvalidInputError):
            await game_service.filter_games_for_age(session, -1)

    async def test_free_games(self, session: AsyncSession, catalog: dict[str, int]) -> None:
        assert [g.name for g in await game_service.list_free_games(session)] == ["Fortnite"]

    async def test_browse_combines_filters(self, session: AsyncSession, catalog: dict[str, int]) -> None:
        games = await game_service.browse_games(
            session,
            max_price=Decimal("100"),
            max_age_rating=12,
            sort=PriceOrder.DESCENDING,
        )
        assert [g.name for g in games] == ["Minecraft", "Stardew Valley", "Fortnite"]

        everything = await game_service.browse_games(session, include_unavailable=True)
        assert len(everything) == 4


class TestUpdateGame:
    async def test_partial_update(self, session: AsyncSession, catalog: dict[str, int]) -> None:
        game = await game_service.update_game(
            session, catalog["Minecraft"], price=Decimal("59.90"), available=False
        )
        assert game.price == Decimal("59.90")
        assert game.available is False
        assert game.category == "Adventure"

    async def test_rename_conflict(self, session: AsyncSession, catalog: dict[str, int]) -> None:
        with pytest.raises(ConflictError):
            await game_service.update_game(session, catalog["Minecraft"], name="Fortnite")

    async def test_invalid_values(self, session: AsyncSession, catalog: dict[str, int]) -> None:
        with pytest.raises(InvalidInputError):
            await game_service.update_game(session, catalog["Minecraft"], price=Decimal("-1"))
        with pytest.raises(InvalidInputError):
            await game_service.update_game(session, catalog["Minecraft"], age_rating=30)

    async def test_blank_name_ignored(self, session: AsyncSession, catalog: dict[str, int]) -> None:
        game = await game_service.update_game(session, catalog["Minecraft"], name="  ")
        assert game.name == "Minecraft"

    async def test_update_missing(self, session: AsyncSession) -> None:
        with pytest.raises(GameNotFoundError):
            await game_service.update_game(session, 99, price=Decimal("1"))


class TestDeleteGame:
    async def test_delete(self, session: AsyncSession, catalog: dict[str, int]) -> None:
        await game_service.delete_game(session, catalog["Fortnite"])
        assert await game_service.count_games(session) == 3

    async def test_delete_missing_changes_nothing(
        self, session: AsyncSession, catalog: dict[str, int]
    ) -> None:
        """Deleting an unknown id fails with NotFound and leaves the catalog intact."""
        before = await game_service.count_games(session)

        with pytest.raises(GameNotFoundError) as exc_info:
            await game_service.delete_game(session, 12345)

        assert exc_info.value.status_code == 404
        assert await game_service.count_games(session) == before
