from dataclasses import dataclass, field
from decimal import Decimal

from gamestore.models.customer import Customer
from gamestore.models.game import Game


@dataclass(frozen=True, slots=True)
class PurchaseResult:
    """
    Outcome of one purchase attempt.

    Business rule rejections (unavailable, age, already owned, balance)
    are reported here with success=False; they are never raised.
    """

    success: bool
    message: str
    total_amount: Decimal = Decimal("0.00")
    games: tuple[Game, ...] = ()

    @classmethod
    def failed(cls, message: str) -> "PurchaseResult":
        return cls(success=False, message=message)

    @property
    def games_count(self) -> int:
        return len(self.games)


@dataclass(frozen=True, slots=True)
class Allocation:
    """
    A purchase decision that has not been persisted yet.

    customer is the updated working copy when the allocation succeeded,
    and None otherwise. The customer the allocation was computed from
    is never modified.
    """

    result: PurchaseResult
    customer: Customer | None = field(default=None)

    @property
    def success(self) -> bool:
        return self.result.success
