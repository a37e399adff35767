"""
Game: a catalog entry.

INVARIANT: Identity is the name (business key). Two Game objects with the
same name are equal and hash alike, regardless of storage id.

INVARIANT: 0 <= price <= MAX_MONEY_AMOUNT and age_rating in [0, 18] at all times.
Construction rejects invalid values by raising InvalidInputError.
Mutators never raise: they return False and keep the current value.
"""

from decimal import Decimal

from gamestore.config import MAX_AGE_RATING, MAX_MONEY_AMOUNT, MIN_AGE_RATING
from gamestore.models.failure import InvalidInputError
from gamestore.models.validation import (
    is_valid_age_rating,
    is_valid_price,
    is_valid_string,
    to_money,
)


class Game:
    """A game sold by the store."""

    def __init__(
        self,
        name: str,
        price: Decimal | int | str,
        category: str,
        age_rating: int,
        description: str = "",
        available: bool = True,
        id: int | None = None,
    ) -> None:
        if not is_valid_string(name):
            raise InvalidInputError("Game name cannot be empty")
        if not is_valid_string(category):
            raise InvalidInputError("Game category cannot be empty")
        try:
            amount = to_money(price)
        except ValueError as e:
            raise InvalidInputError("Game price must be a number", detail=str(e)) from e
        if amount > MAX_MONEY_AMOUNT:
            raise InvalidInputError(
                f"Game price cannot exceed {MAX_MONEY_AMOUNT}", detail=f"price={amount}"
            )
        if not is_valid_price(amount):
            raise InvalidInputError("Game price cannot be negative", detail=f"price={amount}")
        if not is_valid_age_rating(age_rating):
            raise InvalidInputError(
                f"Age rating must be between {MIN_AGE_RATING} and {MAX_AGE_RATING}",
                detail=f"age_rating={age_rating}",
            )

        self.id = id
        self._name = name
        self._price = amount
        self._category = category
        self._age_rating = age_rating
        self._description = description or ""
        self.available = available

    # -------------------------------------------------------------------------
    # Read access
    # -------------------------------------------------------------------------

    @property
    def name(self) -> str:
        return self._name

    @property
    def price(self) -> Decimal:
        return self._price

    @property
    def category(self) -> str:
        return self._category

    @property
    def age_rating(self) -> int:
        return self._age_rating

    @property
    def description(self) -> str:
        return self._description

    # -------------------------------------------------------------------------
    # Validated mutators (return True when the value was applied)
    # -------------------------------------------------------------------------

    def set_name(self, name: str | None) -> bool:
        if name is None or not is_valid_string(name):
            return False
        self._name = name
        return True

    def set_price(self, price: Decimal | int | str | None) -> bool:
        if price is None:
            return False
        try:
            amount = to_money(price)
        except ValueError:
            return False
        if not is_valid_price(amount):
            return False
        self._price = amount
        return True

    def set_category(self, category: str | None) -> bool:
        if category is None or not is_valid_string(category):
            return False
        self._category = category
        return True

    def set_age_rating(self, age_rating: int) -> bool:
        if not is_valid_age_rating(age_rating):
            return False
        self._age_rating = age_rating
        return True

    def set_description(self, description: str | None) -> bool:
        self._description = description or ""
        return True

    def set_available(self, available: bool) -> bool:
        self.available = available
        return True

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    def is_free(self) -> bool:
        """A game priced at exactly zero."""
        return self._price == 0

    def is_age_appropriate(self, customer_age: int) -> bool:
        """Customers whose age equals the rating qualify."""
        return customer_age >= self._age_rating

    def __eq__(self, other: object) -> bool:
        if self is other:
            return True
        if not isinstance(other, Game):
            return NotImplemented
        return self._name == other._name

    def __hash__(self) -> int:
        return hash(self._name)

    def __repr__(self) -> str:
        return (
            f"Game(name={self._name!r}, price={self._price}, "
            f"category={self._category!r}, age_rating={self._age_rating})"
        )
