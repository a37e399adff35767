"""Tests for the pure purchase allocation functions."""

from decimal import Decimal

import pytest

from gamestore.models.cart import Cart
from gamestore.models.customer import Customer
from gamestore.models.game import Game
from gamestore.services.purchase_allocator import (
    MSG_CART_EMPTY,
    MSG_CART_INSUFFICIENT,
    MSG_CART_OK,
    MSG_NO_CANDIDATES,
    MSG_NOTHING_AFFORDABLE,
    MSG_PURCHASE_OK,
    allocate_cart,
    allocate_maximum,
    allocate_single,
    select_candidates,
)


def buyer(balance: str, age: int = 30) -> Customer:
    return Customer(id=7, name="Rafa", email="rafa@example.com", balance=Decimal(balance), age=age)


def game(name: str, price: str, age_rating: int = 0, available: bool = True) -> Game:
    return Game(
        name=name,
        price=Decimal(price),
        category="Misc",
        age_rating=age_rating,
        available=available,
    )


class TestAllocateSingle:
    def test_free_game_keeps_balance(self, free_game: Game) -> None:
        customer = buyer("100.00")

        allocation = allocate_single(customer, free_game)

        assert allocation.success
        assert allocation.result.message == MSG_PURCHASE_OK
        assert allocation.result.total_amount == Decimal("0.00")
        assert allocation.customer is not None
        assert allocation.customer.balance == Decimal("100.00")
        assert allocation.customer.owns_game(free_game)

    def test_paid_game_debits_copy_only(self) -> None:
        customer = buyer("100.00")
        hades = game("Hades", "79.90")

        allocation = allocate_single(customer, hades)

        assert allocation.customer is not None
        assert allocation.customer.balance == Decimal("20.10")
        assert customer.balance == Decimal("100.00")
        assert not customer.owns_game(hades)
        assert allocation.result.games == (hades,)

    def test_age_rejection_changes_nothing(self) -> None:
        customer = buyer("500.00", age=15)
        rated = game("Outlast", "50.00", age_rating=16)

        allocation = allocate_single(customer, rated)

        assert not allocation.success
        assert allocation.customer is None
        assert "Game is not appropriate for customer age" in allocation.result.message
        assert customer.balance == Decimal("500.00")
        assert customer.owned_games == []

    def test_rejection_joins_all_reasons(self) -> None:
        customer = buyer("1.00", age=10)
        gta = game("GTA", "149.90", age_rating=18, available=False)

        allocation = allocate_single(customer, gta)

        assert allocation.result.message == (
            "Game is not available; Game is not appropriate for customer age; Insufficient balance"
        )
        assert allocation.result.total_amount == Decimal("0.00")
        assert allocation.result.games == ()

    def test_repurchase_fails(self) -> None:
        customer = buyer("100.00")
        hades = game("Hades", "10.00")

        first = allocate_single(customer, hades)
        assert first.customer is not None
        second = allocate_single(first.customer, hades)

        assert not second.success
        assert second.result.message == "Customer already owns this game"


class TestAllocateCart:
    def test_empty_cart(self) -> None:
        allocation = allocate_cart(buyer("100.00"), Cart())
        assert allocation.result.message == MSG_CART_EMPTY

    def test_successful_checkout(self) -> None:
        cart = Cart()
        cart.add_item(game("Hades", "79.90"))
        cart.add_item(game("Celeste", "36.90"))

        allocation = allocate_cart(buyer("200.00"), cart)

        assert allocation.result.message == MSG_CART_OK
        assert allocation.result.total_amount == Decimal("116.80")
        assert allocation.customer is not None
        assert allocation.customer.balance == Decimal("83.20")
        assert [g.name for g in allocation.result.games] == ["Hades", "Celeste"]

    def test_quantity_charged_but_owned_once(self) -> None:
        cart = Cart()
        cart.add_item(game("Hades", "10.00"), 3)

        allocation = allocate_cart(buyer("50.00"), cart)

        assert allocation.result.total_amount == Decimal("30.00")
        assert allocation.customer is not None
        assert len(allocation.customer.owned_games) == 1

    def test_insufficient_balance_for_total(self) -> None:
        cart = Cart()
        cart.add_item(game("Hades", "79.90"))
        cart.add_item(game("Celeste", "36.90"))

        allocation = allocate_cart(buyer("100.00"), cart)

        assert allocation.result.message == MSG_CART_INSUFFICIENT

    def test_line_violations_prefixed_with_name(self) -> None:
        customer = buyer("10.00", age=12)
        owned = game("Among Us", "0.00")
        customer.add_owned_game(owned)
        cart = Cart()
        cart.add_item(owned)
        cart.add_item(game("GTA", "149.90", age_rating=18))

        allocation = allocate_cart(customer, cart)

        assert allocation.result.message == (
            "Insufficient balance for cart; "
            "Among Us: Customer already owns this game; "
            "GTA: Game is not appropriate for customer age"
        )
        assert customer.balance == Decimal("10.00")

    def test_all_free_cart_with_zero_balance(self) -> None:
        cart = Cart()
        cart.add_item(game("Fortnite", "0.00"))
        cart.add_item(game("Valorant", "0.00"))

        allocation = allocate_cart(buyer("0.00"), cart)

        assert allocation.success
        assert allocation.result.games_count == 2


class TestSelectCandidates:
    def test_filters_and_sorts(self) -> None:
        customer = buyer("0.00", age=14)
        owned = game("Owned", "1.00")
        customer.add_owned_game(owned)
        pool = [
            game("C", "30.00"),
            game("Adult", "5.00", age_rating=18),
            game("A", "10.00"),
            game("Gone", "2.00", available=False),
            owned,
            game("B", "10.00"),
        ]

        assert [g.name for g in select_candidates(customer, pool)] == ["A", "B", "C"]

    def test_balance_not_filtered(self) -> None:
        assert len(select_candidates(buyer("0.00"), [game("Pricey", "999.00")])) == 1


class TestAllocateMaximum:
    def test_scenario_free_plus_unaffordable(self, free_game: Game, paid_game: Game) -> None:
        """Balance 50 buys only the free game."""
        allocation = allocate_maximum(buyer("50.00"), [free_game, paid_game])

        assert allocation.success
        assert allocation.result.games == (free_game,)
        assert allocation.result.total_amount == Decimal("0.00")
        assert allocation.customer is not None
        assert allocation.customer.balance == Decimal("50.00")
        assert allocation.result.message == "Purchased 1 games successfully"

    def test_scenario_buys_both(self, free_game: Game, paid_game: Game) -> None:
        """Balance 500 buys both games, leaving 300.10."""
        allocation = allocate_maximum(buyer("500.00"), [paid_game, free_game])

        assert allocation.result.games == (free_game, paid_game)
        assert allocation.result.total_amount == Decimal("199.90")
        assert allocation.customer is not None
        assert allocation.customer.balance == Decimal("300.10")

    def test_skips_and_continues(self) -> None:
        """Greedy keeps walking after a game it cannot afford."""
        pool = [game("A", "10.00"), game("B", "30.00"), game("C", "30.00")]
        allocation = allocate_maximum(buyer("45.00"), pool)

        assert [g.name for g in allocation.result.games] == ["A", "B"]
        assert allocation.result.total_amount == Decimal("40.00")

    def test_ties_keep_pool_order(self) -> None:
        pool = [game("Second", "20.00"), game("First", "20.00")]
        allocation = allocate_maximum(buyer("20.00"), pool)

        assert [g.name for g in allocation.result.games] == ["Second"]

    def test_duplicates_bought_once(self) -> None:
        hades = game("Hades", "10.00")
        allocation = allocate_maximum(buyer("100.00"), [hades, hades, hades])

        assert allocation.result.games == (hades,)
        assert allocation.result.total_amount == Decimal("10.00")

    def test_empty_pool(self) -> None:
        allocation = allocate_maximum(buyer("100.00"), [])
        assert allocation.result.message == MSG_NO_CANDIDATES

    def test_nothing_affordable(self, paid_game: Game) -> None:
        customer = buyer("50.00")
        allocation = allocate_maximum(customer, [paid_game])

        assert not allocation.success
        assert allocation.result.message == MSG_NOTHING_AFFORDABLE
        assert customer.balance == Decimal("50.00")

    def test_nothing_eligible(self) -> None:
        allocation = allocate_maximum(buyer("50.00", age=10), [game("GTA", "5.00", age_rating=18)])
        assert allocation.result.message == MSG_NOTHING_AFFORDABLE

    @pytest.mark.parametrize("balance", ["0.00", "9.99", "10.00", "35.50", "1000.00"])
    def test_never_overspends(self, balance: str) -> None:
        pool = [game(f"G{i}", price) for i, price in enumerate(["10.00", "0.00", "25.50", "3.33", "70.00"])]
        customer = buyer(balance)

        allocation = allocate_maximum(customer, pool)

        assert allocation.result.total_amount <= customer.balance
        if allocation.customer is not None:
            assert allocation.customer.balance == customer.balance - allocation.result.total_amount
            assert allocation.customer.balance >= 0

    @pytest.mark.parametrize(
        ("prices", "balance"),
        [
            (["5.00", "5.00", "7.00", "40.00"], "17.00"),
            (["7.00", "5.00", "40.00", "5.00", "12.00"], "17.00"),
            (["0.00", "3.00", "3.00", "9.00", "9.00"], "15.00"),
        ],
    )
    def test_dropping_games_above_the_priciest_pick_keeps_picks(
        self, prices: list[str], balance: str
    ) -> None:
        """Candidates that were never bought do not influence the cheaper picks."""
        pool = [game(f"G{i}", price) for i, price in enumerate(prices)]
        full = allocate_maximum(buyer(balance), pool)
        ceiling = max(g.price for g in full.result.games)

        trimmed = allocate_maximum(buyer(balance), [g for g in pool if g.price <= ceiling])

        assert trimmed.result.games == full.result.games
        assert trimmed.result.total_amount == full.result.total_amount
