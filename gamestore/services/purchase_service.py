"""
Purchase Service: resolves ids, runs the allocator, commits the outcome.

Lookup failures (unknown customer or game id) raise NotFoundError before
any PurchaseResult exists. Business rule rejections come back as a failed
PurchaseResult and never raise.

COMMIT:
The debit, the library additions and the cart clear are written in one
unit of work. If any write fails (including an optimistic-lock conflict
from a concurrent purchase by the same customer), the whole session is
rolled back and the caller receives a failed PurchaseResult. Nothing is
left half-applied.
"""

import logging
from collections.abc import Sequence

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from gamestore.db.operations import (
    cart_to_model,
    clear_cart,
    customer_to_model,
    game_to_model,
    get_cart_items,
    get_customer,
    get_game,
    get_games_by_ids,
    list_games,
    save_customer,
)
from gamestore.models.db import CustomerDB
from gamestore.models.failure import CustomerNotFoundError, GameNotFoundError
from gamestore.models.purchase import Allocation, PurchaseResult
from gamestore.services.purchase_allocator import (
    allocate_cart,
    allocate_maximum,
    allocate_single,
)

logger = logging.getLogger(__name__)

MSG_COMMIT_FAILED = "Failed to process purchase"


async def _load_customer(session: AsyncSession, customer_id: int) -> CustomerDB:
    db_customer = await get_customer(session, customer_id)
    if db_customer is None:
        raise CustomerNotFoundError(customer_id)
    return db_customer


async def _commit(
    session: AsyncSession,
    db_customer: CustomerDB,
    allocation: Allocation,
    *,
    clear_cart_after: bool = False,
) -> PurchaseResult:
    """
    Persist a successful allocation, or roll everything back.

    Failed allocations pass through untouched.
    """
    if not allocation.success or allocation.customer is None:
        return allocation.result

    customer_id = db_customer.id
    try:
        await save_customer(session, db_customer, allocation.customer)
        if clear_cart_after:
            await clear_cart(session, customer_id)
    except (SQLAlchemyError, ValueError) as e:
        await session.rollback()
        logger.error("PURCHASE_COMMIT_FAILED customer=%s error=%s", customer_id, e)
        return PurchaseResult.failed(f"{MSG_COMMIT_FAILED}: {e}")

    result = allocation.result
    logger.info(
        "PURCHASE_COMMIT customer=%s games=%d total=%s",
        customer_id,
        result.games_count,
        result.total_amount,
    )
    return result


async def purchase_game(session: AsyncSession, customer_id: int, game_id: int) -> PurchaseResult:
    """
    Buy one game.

    Raises:
        CustomerNotFoundError: Unknown customer id
        GameNotFoundError: Unknown game id
    """
    db_customer = await _load_customer(session, customer_id)
    db_game = await get_game(session, game_id)
    if db_game is None:
        raise GameNotFoundError(game_id)

    allocation = allocate_single(customer_to_model(db_customer), game_to_model(db_game))
    return await _commit(session, db_customer, allocation)


async def purchase_cart(session: AsyncSession, customer_id: int) -> PurchaseResult:
    """
    Check out the customer's stored cart.

    The cart is cleared only when the purchase succeeds.

    Raises:
        CustomerNotFoundError: Unknown customer id
    """
    db_customer = await _load_customer(session, customer_id)
    cart = cart_to_model(customer_id, await get_cart_items(session, customer_id))

    allocation = allocate_cart(customer_to_model(db_customer), cart)
    return await _commit(session, db_customer, allocation, clear_cart_after=True)


async def purchase_maximum_games(
    session: AsyncSession,
    customer_id: int,
    game_ids: Sequence[int] | None = None,
) -> PurchaseResult:
    """
    Buy as many games as the balance allows, cheapest first.

    Args:
        session: Database session
        customer_id: Buyer
        game_ids: Candidate pool. None means every available catalog game.

    Raises:
        CustomerNotFoundError: Unknown customer id
        GameNotFoundError: A candidate id does not exist
    """
    db_customer = await _load_customer(session, customer_id)

    if game_ids is None:
        db_games = await list_games(session, available_only=True)
    else:
        db_games = await get_games_by_ids(session, game_ids)
        found = {db_game.id for db_game in db_games}
        missing = [game_id for game_id in game_ids if game_id not in found]
        if missing:
            raise GameNotFoundError(missing[0])

    candidates = [game_to_model(db_game) for db_game in db_games]
    allocation = allocate_maximum(customer_to_model(db_customer), candidates)
    return await _commit(session, db_customer, allocation)
