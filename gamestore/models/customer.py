"""
Customer: a store account.

INVARIANT: Identity is the email (business key), not the storage id.

INVARIANT: balance >= 0 at all times. deduct_balance refuses to overdraw.
A zero-amount deduction is a no-op that skips the sufficiency check,
so free games can always be acquired.

INVARIANT: owned_games holds each game at most once, keyed by game name.
"""

from collections.abc import Iterable
from decimal import Decimal

from gamestore.config import MAX_CUSTOMER_AGE, MAX_MONEY_AMOUNT, MIN_CUSTOMER_AGE
from gamestore.models.failure import InsufficientBalanceError, InvalidInputError
from gamestore.models.game import Game
from gamestore.models.validation import (
    is_valid_age,
    is_valid_email,
    is_valid_price,
    is_valid_string,
    to_money,
)


class Customer:
    """A store customer with a balance and a library of owned games."""

    def __init__(
        self,
        name: str,
        email: str,
        balance: Decimal | int | str = Decimal("0.00"),
        age: int = 0,
        owned_games: Iterable[Game] = (),
        id: int | None = None,
    ) -> None:
        if not is_valid_string(name):
            raise InvalidInputError("Customer name cannot be empty")
        if not is_valid_email(email):
            raise InvalidInputError("Invalid email format", detail=f"email={email!r}")
        try:
            amount = to_money(balance)
        except ValueError as e:
            raise InvalidInputError("Balance must be a number", detail=str(e)) from e
        if amount > MAX_MONEY_AMOUNT:
            raise InvalidInputError(
                f"Balance cannot exceed {MAX_MONEY_AMOUNT}", detail=f"balance={amount}"
            )
        if not is_valid_price(amount):
            raise InvalidInputError("Balance cannot be negative", detail=f"balance={amount}")
        if not is_valid_age(age):
            raise InvalidInputError(
                f"Age must be between {MIN_CUSTOMER_AGE} and {MAX_CUSTOMER_AGE}",
                detail=f"age={age}",
            )

        self.id = id
        self._name = name
        self._email = email
        self._balance = amount
        self._age = age
        self._owned: dict[str, Game] = {}
        for game in owned_games:
            self.add_owned_game(game)

    @property
    def name(self) -> str:
        return self._name

    @property
    def email(self) -> str:
        return self._email

    @property
    def balance(self) -> Decimal:
        return self._balance

    @property
    def age(self) -> int:
        return self._age

    @property
    def owned_games(self) -> list[Game]:
        """Owned games in acquisition order (a copy)."""
        return list(self._owned.values())

    # -------------------------------------------------------------------------
    # Validated mutators (return True when the value was applied)
    # -------------------------------------------------------------------------

    def set_name(self, name: str | None) -> bool:
        if name is None or not is_valid_string(name):
            return False
        self._name = name
        return True

    def set_email(self, email: str | None) -> bool:
        if email is None or not is_valid_email(email):
            return False
        self._email = email
        return True

    def set_balance(self, balance: Decimal | int | str | None) -> bool:
        if balance is None:
            return False
        try:
            amount = to_money(balance)
        except ValueError:
            return False
        if not is_valid_price(amount):
            return False
        self._balance = amount
        return True

    def set_age(self, age: int) -> bool:
        if not is_valid_age(age):
            return False
        self._age = age
        return True

    # -------------------------------------------------------------------------
    # Balance
    # -------------------------------------------------------------------------

    def has_sufficient_balance(self, amount: Decimal) -> bool:
        return self._balance >= amount

    def deduct_balance(self, amount: Decimal | int | str) -> None:
        """
        Debit the balance.

        Raises:
            InvalidInputError: If amount is negative or not a number
            InsufficientBalanceError: If the balance cannot cover a non-zero amount
        """
        try:
            value = to_money(amount)
        except ValueError as e:
            raise InvalidInputError("Amount must be a number", detail=str(e)) from e
        if value < 0:
            raise InvalidInputError("Amount cannot be negative", detail=f"amount={value}")

        # Free games: nothing to debit, nothing to check
        if value == 0:
            return

        if not self.has_sufficient_balance(value):
            raise InsufficientBalanceError(balance=self._balance, amount=value)
        self._balance -= value

    def add_balance(self, amount: Decimal | int | str) -> None:
        """
        Credit the balance.

        Raises:
            InvalidInputError: If amount is not positive or the new balance
                would not fit a money column
        """
        try:
            value = to_money(amount)
        except ValueError as e:
            raise InvalidInputError("Amount must be a number", detail=str(e)) from e
        if value <= 0:
            raise InvalidInputError("Amount must be positive", detail=f"amount={value}")
        if self._balance + value > MAX_MONEY_AMOUNT:
            raise InvalidInputError(
                f"Balance cannot exceed {MAX_MONEY_AMOUNT}",
                detail=f"balance={self._balance}, amount={value}",
            )
        self._balance += value

    # -------------------------------------------------------------------------
    # Library
    # -------------------------------------------------------------------------

    def add_owned_game(self, game: Game) -> bool:
        """Add a game to the library. Returns False if it was already owned."""
        if game.name in self._owned:
            return False
        self._owned[game.name] = game
        return True

    def owns_game(self, game: Game) -> bool:
        return game.name in self._owned

    def total_spent(self) -> Decimal:
        """Sum of the current prices of all owned games."""
        return sum((game.price for game in self._owned.values()), Decimal("0.00"))

    def copy(self) -> "Customer":
        """
        Independent working copy.

        Balance and library changes on the copy never touch this object.
        Game objects are shared; games are not mutated by purchases.
        """
        return Customer(
            name=self._name,
            email=self._email,
            balance=self._balance,
            age=self._age,
            owned_games=self._owned.values(),
            id=self.id,
        )

    def __eq__(self, other: object) -> bool:
        if self is other:
            return True
        if not isinstance(other, Customer):
            return NotImplemented
        return self._email == other._email

    def __hash__(self) -> int:
        return hash(self._email)

    def __repr__(self) -> str:
        return (
            f"Customer(name={self._name!r}, email={self._email!r}, "
            f"balance={self._balance}, age={self._age})"
        )
