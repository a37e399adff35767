"""
Purchase Allocator: decides what a customer acquires.

Pure functions over domain objects; nothing here touches storage.
Each allocator works on a working copy of the customer and returns an
Allocation. The caller's customer is never modified, so a purchase is
all-or-nothing: either the caller persists the updated copy, or it
discards it and nothing happened.

Three modes:
- single: one game, all eligibility rules collected
- cart: every line checked, affordability judged against the cart total
- maximum: greedy, cheapest first, as many games as the balance allows

The greedy mode maximizes the NUMBER of games bought under one budget.
It is not a general knapsack solver and does not maximize value spent.
"""

import logging
from collections.abc import Iterable
from decimal import Decimal

from gamestore.models.cart import Cart
from gamestore.models.customer import Customer
from gamestore.models.game import Game
from gamestore.models.purchase import Allocation, PurchaseResult
from gamestore.services.eligibility import can_customer_buy_game, check_eligibility

logger = logging.getLogger(__name__)

VIOLATION_SEPARATOR = "; "

MSG_PURCHASE_OK = "Purchase completed successfully"
MSG_CART_OK = "Cart purchase completed successfully"
MSG_CART_EMPTY = "Cart is empty"
MSG_CART_INSUFFICIENT = "Insufficient balance for cart"
MSG_NO_CANDIDATES = "No games available"
MSG_NOTHING_AFFORDABLE = "No game could be purchased with the available balance"


def allocate_single(customer: Customer, game: Game) -> Allocation:
    """
    Decide a single-game purchase.

    Returns a failed Allocation joining every violation message with "; "
    when the game is not eligible.
    """
    violations = check_eligibility(customer, game)
    if violations:
        message = VIOLATION_SEPARATOR.join(v.message for v in violations)
        logger.info(
            "PURCHASE_REJECT customer=%s game=%r reasons=%s",
            customer.id,
            game.name,
            [v.kind.value for v in violations],
        )
        return Allocation(result=PurchaseResult.failed(message))

    working = customer.copy()
    working.deduct_balance(game.price)
    working.add_owned_game(game)

    return Allocation(
        result=PurchaseResult(
            success=True,
            message=MSG_PURCHASE_OK,
            total_amount=game.price,
            games=(game,),
        ),
        customer=working,
    )


def allocate_cart(customer: Customer, cart: Cart) -> Allocation:
    """
    Decide a cart checkout.

    The whole cart is charged at its total value (unit price x quantity
    per line). Availability, age and ownership are checked per line;
    per-line messages are prefixed with the game name.
    """
    if cart.is_empty():
        return Allocation(result=PurchaseResult.failed(MSG_CART_EMPTY))

    total = cart.total_value()
    errors: list[str] = []

    if total > 0 and not customer.has_sufficient_balance(total):
        errors.append(MSG_CART_INSUFFICIENT)

    for item in cart.items:
        for violation in check_eligibility(customer, item.game, check_balance=False):
            errors.append(f"{item.game.name}: {violation.message}")

    if errors:
        logger.info(
            "CART_REJECT customer=%s lines=%d errors=%d",
            customer.id,
            len(cart.items),
            len(errors),
        )
        return Allocation(result=PurchaseResult.failed(VIOLATION_SEPARATOR.join(errors)))

    working = customer.copy()
    working.deduct_balance(total)
    games = cart.games()
    for game in games:
        working.add_owned_game(game)

    return Allocation(
        result=PurchaseResult(
            success=True,
            message=MSG_CART_OK,
            total_amount=total,
            games=tuple(games),
        ),
        customer=working,
    )


def select_candidates(customer: Customer, candidates: Iterable[Game]) -> list[Game]:
    """
    Greedy phase 1 and 2: filter, then order cheapest first.

    Keeps games that are available, age-appropriate and not owned.
    Balance is NOT filtered here. sorted() is stable, so equal prices
    keep their original relative order.
    """
    suitable = [
        game
        for game in candidates
        if can_customer_buy_game(game, customer.age) and not customer.owns_game(game)
    ]
    return sorted(suitable, key=lambda game: game.price)


def allocate_maximum(customer: Customer, candidates: Iterable[Game]) -> Allocation:
    """
    Buy as many games as possible from a candidate pool.

    Walks the eligible candidates cheapest first with a running balance.
    A game is bought when the remaining balance covers it; otherwise it is
    skipped and the walk continues, so every candidate is tried in turn.
    A game listed more than once in the pool is bought at most once.
    """
    pool = list(candidates)
    if not pool:
        return Allocation(result=PurchaseResult.failed(MSG_NO_CANDIDATES))

    ordered = select_candidates(customer, pool)

    working = customer.copy()
    remaining = working.balance
    acquired: list[Game] = []
    total_spent = Decimal("0.00")

    for game in ordered:
        # Only a repeated pool entry can already be owned here
        if working.owns_game(game):
            continue
        if remaining >= game.price:
            remaining -= game.price
            working.deduct_balance(game.price)
            working.add_owned_game(game)
            acquired.append(game)
            total_spent += game.price

    if not acquired:
        logger.info(
            "MAXIMUM_NONE customer=%s candidates=%d eligible=%d balance=%s",
            customer.id,
            len(pool),
            len(ordered),
            customer.balance,
        )
        return Allocation(result=PurchaseResult.failed(MSG_NOTHING_AFFORDABLE))

    logger.info(
        "MAXIMUM_PICK customer=%s acquired=%d spent=%s remaining=%s",
        customer.id,
        len(acquired),
        total_spent,
        remaining,
    )
    return Allocation(
        result=PurchaseResult(
            success=True,
            message=f"Purchased {len(acquired)} games successfully",
            total_amount=total_spent,
            games=tuple(acquired),
        ),
        customer=working,
    )
