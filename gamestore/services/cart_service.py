"""
Cart Service: a persisted cart per customer.

A game may only enter a cart when the customer could buy it on
availability and age grounds. Ownership and balance are judged at
checkout, where every problem is reported at once.
"""

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from gamestore.db import operations as ops
from gamestore.models.cart import Cart
from gamestore.models.failure import (
    CustomerNotFoundError,
    FailureKind,
    GameNotFoundError,
    InvalidInputError,
    RefusalError,
)
from gamestore.services.eligibility import can_customer_buy_game

logger = logging.getLogger(__name__)


async def _require_customer_age(session: AsyncSession, customer_id: int) -> int:
    db_customer = await ops.get_customer(session, customer_id)
    if db_customer is None:
        raise CustomerNotFoundError(customer_id)
    return db_customer.age


async def get_cart(session: AsyncSession, customer_id: int) -> Cart:
    """
    Raises:
        CustomerNotFoundError: Unknown customer id
    """
    await _require_customer_age(session, customer_id)
    return ops.cart_to_model(customer_id, await ops.get_cart_items(session, customer_id))


async def add_to_cart(
    session: AsyncSession, customer_id: int, game_id: int, quantity: int = 1
) -> Cart:
    """
    Put a game in the cart (or raise its quantity).

    Raises:
        InvalidInputError: quantity is not positive
        CustomerNotFoundError: Unknown customer id
        GameNotFoundError: Unknown game id
        RefusalError: Game is unavailable or not appropriate for the customer's age
    """
    if quantity <= 0:
        raise InvalidInputError("Quantity must be positive", detail=f"quantity={quantity}")

    age = await _require_customer_age(session, customer_id)
    db_game = await ops.get_game(session, game_id)
    if db_game is None:
        raise GameNotFoundError(game_id)

    game = ops.game_to_model(db_game)
    if not can_customer_buy_game(game, age):
        raise RefusalError(
            kind=FailureKind.PURCHASE_REFUSED,
            message=f"Game '{game.name}' cannot be added to the cart",
            detail=f"available={game.available}, age_rating={game.age_rating}, age={age}",
            suggestion="Only available, age-appropriate games can be added.",
        )

    await ops.add_cart_item(session, customer_id, db_game, quantity)
    logger.info("CART_ADD customer=%s game=%s qty=%d", customer_id, game_id, quantity)
    return await get_cart(session, customer_id)


async def remove_from_cart(session: AsyncSession, customer_id: int, game_id: int) -> Cart:
    """
    Drop a game's line. Removing a game that is not in the cart is a no-op.

    Raises:
        CustomerNotFoundError: Unknown customer id
    """
    await _require_customer_age(session, customer_id)
    await ops.remove_cart_item(session, customer_id, game_id)
    return await get_cart(session, customer_id)


async def clear_cart(session: AsyncSession, customer_id: int) -> int:
    """
    Empty the cart. Returns the number of lines removed.

    Raises:
        CustomerNotFoundError: Unknown customer id
    """
    await _require_customer_age(session, customer_id)
    removed = await ops.clear_cart(session, customer_id)
    logger.info("CART_CLEAR customer=%s lines=%d", customer_id, removed)
    return removed
