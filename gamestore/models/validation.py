"""
Stateless input validators.

Shared by entity constructors, entity mutators and the catalog/account
services. Every function is pure and returns a bool; callers decide whether
a rejection raises or is reported.
"""

from decimal import Decimal, InvalidOperation

from gamestore.config import (
    MAX_AGE_RATING,
    MAX_CUSTOMER_AGE,
    MAX_MONEY_AMOUNT,
    MIN_AGE_RATING,
    MIN_CUSTOMER_AGE,
    MONEY_QUANTUM,
)


def is_valid_string(value: str | None) -> bool:
    """True if value is a non-blank string."""
    return value is not None and bool(value.strip())


def is_valid_email(email: str | None) -> bool:
    """
    Minimal email shape check.

    Requires a non-empty local part, an "@" before the last ".",
    and at least one character after the last ".".
    """
    if email is None or not is_valid_string(email):
        return False
    at = email.find("@")
    dot = email.rfind(".")
    return at > 0 and at < dot and dot < len(email) - 1


def is_valid_age(age: int) -> bool:
    return MIN_CUSTOMER_AGE <= age <= MAX_CUSTOMER_AGE


def is_valid_age_rating(age_rating: int) -> bool:
    return MIN_AGE_RATING <= age_rating <= MAX_AGE_RATING


def is_valid_price(price: Decimal | None) -> bool:
    """True if price is finite, non-negative and fits a money column."""
    return price is not None and price.is_finite() and 0 <= price <= MAX_MONEY_AMOUNT


def has_minimum_length(value: str | None, min_length: int) -> bool:
    return value is not None and len(value.strip()) >= min_length and is_valid_string(value)


def has_maximum_length(value: str | None, max_length: int) -> bool:
    return value is not None and len(value) <= max_length


def is_in_range(value: int, minimum: int, maximum: int) -> bool:
    return minimum <= value <= maximum


def is_valid_id(entity_id: int | None) -> bool:
    return entity_id is not None and entity_id > 0


def to_money(value: Decimal | int | str) -> Decimal:
    """
    Coerce a value to a cent-precision Decimal.

    Raises:
        ValueError: If the value is not a number or cannot be held at cent precision
    """
    try:
        amount = Decimal(value)
    except (InvalidOperation, TypeError) as e:
        raise ValueError(f"Not a monetary amount: {value!r}") from e
    if not amount.is_finite():
        raise ValueError(f"Not a monetary amount: {value!r}")
    try:
        return amount.quantize(MONEY_QUANTUM)
    except InvalidOperation as e:
        # More digits than the decimal context precision
        raise ValueError(f"Monetary amount out of range: {value!r}") from e
