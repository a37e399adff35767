"""
Eligibility: can this customer buy this game?

Four independent rules. All of them are evaluated every time (no
short-circuit), so a rejection can report every reason at once:

1. The game is available.
2. The customer's age is at least the game's age rating.
3. The customer does not already own the game.
4. The balance covers the price. Free games are always affordable.
"""

from dataclasses import dataclass
from enum import Enum

from gamestore.models.customer import Customer
from gamestore.models.game import Game


class Violation(str, Enum):
    """Reasons a game cannot be bought."""

    UNAVAILABLE = "unavailable"
    AGE_RESTRICTED = "age_restricted"
    ALREADY_OWNED = "already_owned"
    INSUFFICIENT_BALANCE = "insufficient_balance"


VIOLATION_MESSAGES: dict[Violation, str] = {
    Violation.UNAVAILABLE: "Game is not available",
    Violation.AGE_RESTRICTED: "Game is not appropriate for customer age",
    Violation.ALREADY_OWNED: "Customer already owns this game",
    Violation.INSUFFICIENT_BALANCE: "Insufficient balance",
}


@dataclass(frozen=True, slots=True)
class EligibilityViolation:
    kind: Violation
    game_name: str

    @property
    def message(self) -> str:
        return VIOLATION_MESSAGES[self.kind]


def can_customer_buy_game(game: Game, customer_age: int) -> bool:
    """Availability and age rules only (balance and ownership not considered)."""
    return game.available and game.is_age_appropriate(customer_age)


def check_eligibility(
    customer: Customer,
    game: Game,
    *,
    check_balance: bool = True,
) -> list[EligibilityViolation]:
    """
    Evaluate every rule for one game.

    Args:
        customer: The prospective buyer
        game: The game to buy
        check_balance: Skip rule 4 when affordability is judged elsewhere
            (a cart is checked against its total, not per line)

    Returns:
        All violations found; empty means eligible
    """
    violations: list[EligibilityViolation] = []

    if not game.available:
        violations.append(EligibilityViolation(Violation.UNAVAILABLE, game.name))

    if not game.is_age_appropriate(customer.age):
        violations.append(EligibilityViolation(Violation.AGE_RESTRICTED, game.name))

    if customer.owns_game(game):
        violations.append(EligibilityViolation(Violation.ALREADY_OWNED, game.name))

    if check_balance and not (game.is_free() or customer.has_sufficient_balance(game.price)):
        violations.append(EligibilityViolation(Violation.INSUFFICIENT_BALANCE, game.name))

    return violations


def eligibility_errors(customer: Customer, game: Game) -> list[str]:
    """Violation messages for one game; empty means eligible."""
    return [violation.message for violation in check_eligibility(customer, game)]
