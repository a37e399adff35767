"""
Catalog Service: rules around creating, changing and browsing games.

Raises KnownError subclasses for invalid input, duplicate names and
unknown ids. Returns domain Game objects.
"""

import logging
from decimal import Decimal
from enum import Enum

from sqlalchemy.ext.asyncio import AsyncSession

from gamestore.config import DEFAULT_MAX_PRICE, MAX_AGE_RATING, MAX_MONEY_AMOUNT, MIN_AGE_RATING
from gamestore.db import operations as ops
from gamestore.models.db import GameDB
from gamestore.models.failure import ConflictError, GameNotFoundError, InvalidInputError
from gamestore.models.game import Game
from gamestore.models.validation import is_valid_age_rating, is_valid_string

logger = logging.getLogger(__name__)


class PriceOrder(str, Enum):
    ASCENDING = "price_asc"
    DESCENDING = "price_desc"


async def _require_game(session: AsyncSession, game_id: int) -> GameDB:
    db_game = await ops.get_game(session, game_id)
    if db_game is None:
        raise GameNotFoundError(game_id)
    return db_game


async def create_game(
    session: AsyncSession,
    name: str,
    price: Decimal,
    category: str,
    age_rating: int,
    description: str = "",
    available: bool = True,
) -> Game:
    """
    Add a game to the catalog.

    Raises:
        InvalidInputError: Empty name/category, negative price, bad age rating
        ConflictError: A game with this name already exists
    """
    game = Game(
        name=name,
        price=price,
        category=category,
        age_rating=age_rating,
        description=description,
        available=available,
    )
    if await ops.game_exists_by_name(session, name):
        raise ConflictError(f"Game with name '{name}' already exists")

    await ops.create_game(session, game)
    logger.info("GAME_CREATE id=%s name=%r price=%s", game.id, game.name, game.price)
    return game


async def find_game_by_id(session: AsyncSession, game_id: int) -> Game:
    """
    Raises:
        GameNotFoundError: Unknown id
    """
    return ops.game_to_model(await _require_game(session, game_id))


async def find_game_by_name(session: AsyncSession, name: str) -> Game | None:
    if not is_valid_string(name):
        return None
    db_game = await ops.get_game_by_name(session, name)
    return ops.game_to_model(db_game) if db_game else None


async def list_all_games(session: AsyncSession) -> list[Game]:
    return [ops.game_to_model(g) for g in await ops.list_games(session)]


async def list_available_games(session: AsyncSession) -> list[Game]:
    return [ops.game_to_model(g) for g in await ops.list_games(session, available_only=True)]


async def list_games_sorted_by_price(session: AsyncSession, ascending: bool = True) -> list[Game]:
    """Available games ordered by price. Ties keep catalog order."""
    games = await list_available_games(session)
    return sorted(games, key=lambda game: game.price, reverse=not ascending)


async def filter_games_by_category(session: AsyncSession, category: str | None) -> list[Game]:
    """Games in a category; a blank category means all available games."""
    if category is None or not is_valid_string(category):
        return await list_available_games(session)
    return [ops.game_to_model(g) for g in await ops.list_games(session, category=category)]


def _price_bounds(
    min_price: Decimal | None, max_price: Decimal | None
) -> tuple[Decimal, Decimal]:
    low = Decimal("0") if min_price is None else min_price
    high = DEFAULT_MAX_PRICE if max_price is None else max_price
    if low > high:
        raise InvalidInputError(
            "Min price cannot be greater than max price",
            detail=f"min={low}, max={high}",
        )
    return low, high


async def filter_games_by_price_range(
    session: AsyncSession,
    min_price: Decimal | None = None,
    max_price: Decimal | None = None,
) -> list[Game]:
    """
    Games priced within [min_price, max_price].

    Raises:
        InvalidInputError: min_price is greater than max_price
    """
    low, high = _price_bounds(min_price, max_price)
    db_games = await ops.list_games(session, min_price=low, max_price=high)
    return [ops.game_to_model(g) for g in db_games]


async def filter_games_for_age(session: AsyncSession, customer_age: int) -> list[Game]:
    """
    Games whose age rating a customer of this age meets.

    Raises:
        InvalidInputError: Negative age
    """
    if customer_age < 0:
        raise InvalidInputError("Age cannot be negative", detail=f"age={customer_age}")
    db_games = await ops.list_games(session, max_age_rating=customer_age)
    return [ops.game_to_model(g) for g in db_games]


async def list_free_games(session: AsyncSession) -> list[Game]:
    return [ops.game_to_model(g) for g in await ops.list_games(session, free_only=True)]


async def browse_games(
    session: AsyncSession,
    *,
    category: str | None = None,
    min_price: Decimal | None = None,
    max_price: Decimal | None = None,
    max_age_rating: int | None = None,
    include_unavailable: bool = False,
    free_only: bool = False,
    sort: PriceOrder | None = None,
) -> list[Game]:
    """
    Catalog listing with every filter combined (AND).

    Only available games are listed unless include_unavailable is set.
    Without a sort order, games come back in catalog order.

    Raises:
        InvalidInputError: Inverted price range or negative age
    """
    if max_age_rating is not None and max_age_rating < 0:
        raise InvalidInputError("Age cannot be negative", detail=f"age={max_age_rating}")
    low: Decimal | None = None
    high: Decimal | None = None
    if min_price is not None or max_price is not None:
        low, high = _price_bounds(min_price, max_price)

    db_games = await ops.list_games(
        session,
        category=category if category and is_valid_string(category) else None,
        min_price=low,
        max_price=high,
        max_age_rating=max_age_rating,
        available_only=not include_unavailable,
        free_only=free_only,
    )
    games = [ops.game_to_model(g) for g in db_games]
    if sort is not None:
        games.sort(key=lambda game: game.price, reverse=sort == PriceOrder.DESCENDING)
    return games


async def update_game(
    session: AsyncSession,
    game_id: int,
    *,
    name: str | None = None,
    price: Decimal | None = None,
    category: str | None = None,
    age_rating: int | None = None,
    description: str | None = None,
    available: bool | None = None,
) -> Game:
    """
    Change selected fields of a game. None means "leave as is".

    Blank name or category are ignored, matching the mutators.

    Raises:
        GameNotFoundError: Unknown id
        ConflictError: New name is taken by another game
        InvalidInputError: Price or age rating out of range
    """
    db_game = await _require_game(session, game_id)
    game = ops.game_to_model(db_game)

    if name is not None and is_valid_string(name) and name != game.name:
        if await ops.game_exists_by_name(session, name):
            raise ConflictError(f"Game with name '{name}' already exists")
        game.set_name(name)

    if price is not None and not game.set_price(price):
        raise InvalidInputError(
            f"Price must be between 0.00 and {MAX_MONEY_AMOUNT}", detail=f"price={price}"
        )

    if category is not None:
        game.set_category(category)

    if age_rating is not None and not is_valid_age_rating(age_rating):
        raise InvalidInputError(
            f"Age rating must be between {MIN_AGE_RATING} and {MAX_AGE_RATING}",
            detail=f"age_rating={age_rating}",
        )
    if age_rating is not None:
        game.set_age_rating(age_rating)

    if description is not None:
        game.set_description(description)

    if available is not None:
        game.set_available(available)

    await ops.update_game(session, db_game, game)
    logger.info("GAME_UPDATE id=%s name=%r", game_id, game.name)
    return game


async def delete_game(session: AsyncSession, game_id: int) -> None:
    """
    Remove a game from the catalog.

    Cart lines for the game are dropped. Customers who bought it keep it in
    their library.

    Raises:
        GameNotFoundError: Unknown id (nothing is changed)
    """
    owners = len(await ops.get_game_ownership(session, game_id))
    if not await ops.delete_game(session, game_id):
        raise GameNotFoundError(game_id)
    logger.info("GAME_DELETE id=%s library_entries_kept=%d", game_id, owners)



async def count_games(session: AsyncSession) -> int:
    return await ops.count_games(session)
