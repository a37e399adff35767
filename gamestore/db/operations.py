"""
Database CRUD operations.

Provides async functions for creating, reading, updating, and deleting
games, customers and cart lines, plus conversion to domain models.
"""

from collections.abc import Sequence
from datetime import UTC, datetime
from decimal import Decimal

from sqlalchemy import Select, delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from gamestore.models.cart import Cart, CartItem
from gamestore.models.customer import Customer
from gamestore.models.db import CartItemDB, CustomerDB, GameDB, GameOwnershipDB
from gamestore.models.game import Game

# --- Game Operations ---


async def get_game(session: AsyncSession, game_id: int) -> GameDB | None:
    """Get a game by id. Returns None if it does not exist."""
    return await session.get(GameDB, game_id)


async def get_game_by_name(session: AsyncSession, name: str) -> GameDB | None:
    """Get a game by its exact (case-sensitive) name."""
    result = await session.execute(select(GameDB).where(GameDB.name == name))
    return result.scalar_one_or_none()


async def game_exists_by_name(session: AsyncSession, name: str) -> bool:
    return await get_game_by_name(session, name) is not None


async def get_games_by_ids(session: AsyncSession, game_ids: Sequence[int]) -> list[GameDB]:
    """
    Get games for a list of ids, in the order requested.

    Unknown ids are skipped; repeated ids yield repeated entries.
    """
    if not game_ids:
        return []
    result = await session.execute(select(GameDB).where(GameDB.id.in_(set(game_ids))))
    by_id = {game.id: game for game in result.scalars().all()}
    return [by_id[game_id] for game_id in game_ids if game_id in by_id]


async def list_games(
    session: AsyncSession,
    *,
    category: str | None = None,
    min_price: Decimal | None = None,
    max_price: Decimal | None = None,
    max_age_rating: int | None = None,
    available_only: bool = False,
    free_only: bool = False,
) -> list[GameDB]:
    """
    List catalog entries, optionally filtered.

    Filters combine with AND. Results are ordered by id (insertion order).
    """
    query = select(GameDB)
    if category is not None:
        query = query.where(GameDB.category == category)
    if min_price is not None:
        query = query.where(GameDB.price >= min_price)
    if max_price is not None:
        query = query.where(GameDB.price <= max_price)
    if max_age_rating is not None:
        query = query.where(GameDB.age_rating <= max_age_rating)
    if available_only:
        query = query.where(GameDB.available.is_(True))
    if free_only:
        query = query.where(GameDB.price == 0)

    result = await session.execute(query.order_by(GameDB.id))
    return list(result.scalars().all())


async def create_game(session: AsyncSession, game: Game) -> GameDB:
    """
    Insert a new catalog entry and assign its id to the domain object.

    Raises IntegrityError if a game with the same name exists.
    """
    db_game = GameDB(
        name=game.name,
        price=game.price,
        category=game.category,
        age_rating=game.age_rating,
        description=game.description,
        available=game.available,
    )
    session.add(db_game)
    await session.flush()
    game.id = db_game.id
    return db_game


async def update_game(session: AsyncSession, db_game: GameDB, game: Game) -> GameDB:
    """Copy a domain game's fields onto its database row."""
    db_game.name = game.name
    db_game.price = game.price
    db_game.category = game.category
    db_game.age_rating = game.age_rating
    db_game.description = game.description
    db_game.available = game.available
    await session.flush()
    return db_game


async def delete_game(session: AsyncSession, game_id: int) -> bool:
    """
    Delete a game and any cart lines for it.

    Library entries are kept: they are detached from the game and carry on
    with the copy taken at acquisition.

    Returns True if deleted, False if not found.
    """
    db_game = await get_game(session, game_id)
    if not db_game:
        return False

    # Explicit so the cleanup does not depend on the backend enforcing FKs
    await session.execute(delete(CartItemDB).where(CartItemDB.game_id == game_id))
    for entry in await get_game_ownership(session, game_id):
        entry.game = None
    await session.delete(db_game)
    await session.flush()
    return True


async def get_game_ownership(session: AsyncSession, game_id: int) -> list[GameOwnershipDB]:
    """Get every library entry for a game."""
    result = await session.execute(
        select(GameOwnershipDB).where(GameOwnershipDB.game_id == game_id)
    )
    return list(result.scalars().all())


async def count_games(session: AsyncSession) -> int:
    result = await session.execute(select(func.count()).select_from(GameDB))
    return int(result.scalar_one())


def game_to_model(db_game: GameDB) -> Game:
    """Convert a database game to a domain model."""
    return Game(
        id=db_game.id,
        name=db_game.name,
        price=db_game.price,
        category=db_game.category,
        age_rating=db_game.age_rating,
        description=db_game.description or "",
        available=db_game.available,
    )


# --- Customer Operations ---


def _customer_query() -> Select[tuple[CustomerDB]]:
    return select(CustomerDB).options(
        selectinload(CustomerDB.ownership).selectinload(GameOwnershipDB.game),
    )


async def get_customer(session: AsyncSession, customer_id: int) -> CustomerDB | None:
    """
    Get a customer by id, with the owned-games library eagerly loaded.

    Returns None if no customer exists with this id.
    """
    result = await session.execute(_customer_query().where(CustomerDB.id == customer_id))
    return result.scalar_one_or_none()


async def get_customer_by_email(session: AsyncSession, email: str) -> CustomerDB | None:
    result = await session.execute(_customer_query().where(CustomerDB.email == email))
    return result.scalar_one_or_none()


async def customer_exists_by_email(session: AsyncSession, email: str) -> bool:
    result = await session.execute(select(CustomerDB.id).where(CustomerDB.email == email))
    return result.first() is not None


async def list_customers(
    session: AsyncSession,
    *,
    name_contains: str | None = None,
    min_age: int | None = None,
    max_age: int | None = None,
    min_balance: Decimal | None = None,
) -> list[CustomerDB]:
    """
    List customers, optionally filtered.

    name_contains matches case-insensitively. Results are ordered by id.
    """
    query = _customer_query()
    if name_contains:
        query = query.where(CustomerDB.name.ilike(f"%{name_contains}%"))
    if min_age is not None:
        query = query.where(CustomerDB.age >= min_age)
    if max_age is not None:
        query = query.where(CustomerDB.age <= max_age)
    if min_balance is not None:
        query = query.where(CustomerDB.balance >= min_balance)

    result = await session.execute(query.order_by(CustomerDB.id))
    return list(result.scalars().all())


async def create_customer(session: AsyncSession, customer: Customer) -> CustomerDB:
    """
    Insert a new customer and assign its id to the domain object.

    Raises IntegrityError if the email is already registered.
    """
    db_customer = CustomerDB(
        name=customer.name,
        email=customer.email,
        balance=customer.balance,
        age=customer.age,
        ownership=[],
        cart_items=[],
    )
    session.add(db_customer)
    await session.flush()
    customer.id = db_customer.id
    return db_customer


async def save_customer(
    session: AsyncSession, db_customer: CustomerDB, customer: Customer
) -> CustomerDB:
    """
    Write a domain customer back to its row.

    Copies scalar fields and appends library entries for newly owned games.
    Always issues an UPDATE, so the version check runs even when only the
    library changed (free games leave the balance untouched).

    Raises:
        ValueError: If a newly owned game has never been persisted
        StaleDataError: If another session updated the customer first
    """
    db_customer.name = customer.name
    db_customer.email = customer.email
    db_customer.balance = customer.balance
    db_customer.age = customer.age
    db_customer.updated_at = datetime.now(UTC)

    owned_ids = {entry.game_id for entry in db_customer.ownership if entry.game_id is not None}
    detached_names = {entry.game_name for entry in db_customer.ownership if entry.game_id is None}
    new_ids: list[int] = []
    for game in customer.owned_games:
        if game.id is None:
            if game.name in detached_names:
                continue
            raise ValueError(f"Game '{game.name}' has no id and cannot be owned")
        if game.id not in owned_ids:
            new_ids.append(game.id)
            owned_ids.add(game.id)

    # Attach the game rows so the library stays fully loaded in this session
    for db_game in await get_games_by_ids(session, new_ids):
        db_customer.ownership.append(
            GameOwnershipDB(
                game_id=db_game.id,
                game=db_game,
                game_name=db_game.name,
                game_price=db_game.price,
                game_category=db_game.category,
                game_age_rating=db_game.age_rating,
            )
        )

    await session.flush()
    return db_customer


async def delete_customer(session: AsyncSession, customer_id: int) -> bool:
    """
    Delete a customer with their library and cart.

    Returns True if deleted, False if not found.
    """
    db_customer = await get_customer(session, customer_id)
    if not db_customer:
        return False

    await session.execute(delete(CartItemDB).where(CartItemDB.customer_id == customer_id))
    await session.delete(db_customer)
    await session.flush()
    return True


async def count_customers(session: AsyncSession) -> int:
    result = await session.execute(select(func.count()).select_from(CustomerDB))
    return int(result.scalar_one())


def ownership_to_model(entry: GameOwnershipDB) -> Game:
    """
    Convert a library entry to the game it holds.

    An entry whose game was deleted becomes an unavailable game without an
    id, built from the copy taken at acquisition.
    """
    if entry.game is not None:
        return game_to_model(entry.game)
    return Game(
        name=entry.game_name,
        price=entry.game_price,
        category=entry.game_category,
        age_rating=entry.game_age_rating,
        available=False,
    )


def customer_to_model(db_customer: CustomerDB) -> Customer:
    """Convert a database customer (library loaded) to a domain model."""
    return Customer(
        id=db_customer.id,
        name=db_customer.name,
        email=db_customer.email,
        balance=db_customer.balance,
        age=db_customer.age,
        owned_games=[ownership_to_model(entry) for entry in db_customer.ownership],
    )


# --- Cart Operations ---


async def get_cart_items(session: AsyncSession, customer_id: int) -> list[CartItemDB]:
    """Get a customer's cart lines in insertion order, with games loaded."""
    result = await session.execute(
        select(CartItemDB)
        .where(CartItemDB.customer_id == customer_id)
        .options(selectinload(CartItemDB.game))
        .order_by(CartItemDB.id)
    )
    return list(result.scalars().all())


async def add_cart_item(
    session: AsyncSession, customer_id: int, db_game: GameDB, quantity: int
) -> CartItemDB:
    """
    Add a game to a cart.

    If the game already has a line, its quantity grows and the captured
    unit price is kept. Otherwise a new line records the current price.
    """
    result = await session.execute(
        select(CartItemDB).where(
            CartItemDB.customer_id == customer_id,
            CartItemDB.game_id == db_game.id,
        )
    )
    existing = result.scalar_one_or_none()
    if existing:
        existing.quantity += quantity
        await session.flush()
        return existing

    item = CartItemDB(
        customer_id=customer_id,
        game_id=db_game.id,
        quantity=quantity,
        unit_price=db_game.price,
    )
    session.add(item)
    await session.flush()
    return item


async def remove_cart_item(session: AsyncSession, customer_id: int, game_id: int) -> bool:
    """
    Remove a game's line from a cart.

    Returns True if a line was removed.
    """
    result = await session.execute(
        delete(CartItemDB).where(
            CartItemDB.customer_id == customer_id,
            CartItemDB.game_id == game_id,
        )
    )
    # rowcount is available on DELETE results; type stubs incomplete for async
    return int(result.rowcount) > 0  # type: ignore[attr-defined]


async def clear_cart(session: AsyncSession, customer_id: int) -> int:
    """
    Remove every line from a cart.

    Returns the number of deleted lines.
    """
    result = await session.execute(delete(CartItemDB).where(CartItemDB.customer_id == customer_id))
    return int(result.rowcount)  # type: ignore[attr-defined]


def cart_to_model(customer_id: int, items: Sequence[CartItemDB]) -> Cart:
    """Convert cart lines (games loaded) to a domain cart."""
    return Cart(
        customer_id=customer_id,
        items=[
            CartItem(
                game=game_to_model(item.game),
                quantity=item.quantity,
                unit_price=item.unit_price,
            )
            for item in items
        ],
    )
