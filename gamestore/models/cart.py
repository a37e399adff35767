from dataclasses import dataclass, field
from decimal import Decimal

from gamestore.models.game import Game


@dataclass
class CartItem:
    """
    One cart line.

    unit_price is captured when the line is created, so later catalog
    price changes do not alter what the cart totals to.
    """

    game: Game
    quantity: int
    unit_price: Decimal | None = None

    def __post_init__(self) -> None:
        if self.unit_price is None:
            self.unit_price = self.game.price

    @property
    def total_price(self) -> Decimal:
        if self.unit_price is None:
            return Decimal("0.00")
        return self.unit_price * self.quantity

    def increase_quantity(self, amount: int) -> None:
        if amount > 0:
            self.quantity += amount

    def decrease_quantity(self, amount: int) -> None:
        """Lower the quantity, never below zero."""
        if amount > 0:
            self.quantity = max(0, self.quantity - amount)


@dataclass
class Cart:
    """
    A customer's shopping cart.

    Holds at most one line per game; adding a game already in the cart
    raises that line's quantity instead of adding a second line.
    """

    customer_id: int | None = None
    items: list[CartItem] = field(default_factory=list)

    def add_item(self, game: Game, quantity: int = 1) -> None:
        """Add a game. Non-positive quantities are ignored."""
        if quantity <= 0:
            return
        existing = self._find_item(game)
        if existing is not None:
            existing.increase_quantity(quantity)
        else:
            self.items.append(CartItem(game=game, quantity=quantity))

    def remove_item(self, game: Game) -> None:
        """Drop the whole line for a game."""
        self.items = [item for item in self.items if item.game != game]

    def remove_quantity(self, game: Game, quantity: int) -> None:
        """Lower a line's quantity; the line is dropped when it reaches zero."""
        if quantity <= 0:
            return
        item = self._find_item(game)
        if item is None:
            return
        item.decrease_quantity(quantity)
        if item.quantity == 0:
            self.items.remove(item)

    def clear(self) -> None:
        self.items.clear()

    def total_value(self) -> Decimal:
        """Sum of unit price x quantity over all lines."""
        return sum((item.total_price for item in self.items), Decimal("0.00"))

    def total_items(self) -> int:
        return sum(item.quantity for item in self.items)

    def is_empty(self) -> bool:
        return not self.items

    def games(self) -> list[Game]:
        """Games in line order."""
        return [item.game for item in self.items]

    def _find_item(self, game: Game) -> CartItem | None:
        for item in self.items:
            if item.game == game:
                return item
        return None
