"""
Account Service: registration, profile changes, top-ups and lookups.
"""

import logging
from decimal import Decimal

from sqlalchemy.ext.asyncio import AsyncSession

from gamestore.config import MAX_CUSTOMER_AGE, MIN_CUSTOMER_AGE
from gamestore.db import operations as ops
from gamestore.models.customer import Customer
from gamestore.models.db import CustomerDB
from gamestore.models.failure import ConflictError, CustomerNotFoundError, InvalidInputError
from gamestore.models.validation import is_valid_age, is_valid_string, to_money

logger = logging.getLogger(__name__)


async def _require_customer(session: AsyncSession, customer_id: int) -> CustomerDB:
    db_customer = await ops.get_customer(session, customer_id)
    if db_customer is None:
        raise CustomerNotFoundError(customer_id)
    return db_customer


async def create_customer(
    session: AsyncSession,
    name: str,
    email: str,
    initial_balance: Decimal,
    age: int,
) -> Customer:
    """
    Register a customer.

    Raises:
        InvalidInputError: Empty name, malformed email, negative balance, bad age
        ConflictError: Email already registered
    """
    customer = Customer(name=name, email=email, balance=initial_balance, age=age)
    if await ops.customer_exists_by_email(session, email):
        raise ConflictError(f"Customer with email '{email}' already exists")

    await ops.create_customer(session, customer)
    logger.info("CUSTOMER_CREATE id=%s balance=%s", customer.id, customer.balance)
    return customer


async def find_customer_by_id(session: AsyncSession, customer_id: int) -> Customer:
    """
    Raises:
        CustomerNotFoundError: Unknown id
    """
    return ops.customer_to_model(await _require_customer(session, customer_id))


async def find_customer_by_email(session: AsyncSession, email: str) -> Customer | None:
    db_customer = await ops.get_customer_by_email(session, email)
    return ops.customer_to_model(db_customer) if db_customer else None


async def list_customers(session: AsyncSession) -> list[Customer]:
    return [ops.customer_to_model(c) for c in await ops.list_customers(session)]


async def search_customers_by_name(session: AsyncSession, name: str | None) -> list[Customer]:
    """Case-insensitive substring match; a blank query lists everyone."""
    if name is None or not is_valid_string(name):
        return await list_customers(session)
    db_customers = await ops.list_customers(session, name_contains=name.strip())
    return [ops.customer_to_model(c) for c in db_customers]


async def add_balance(session: AsyncSession, customer_id: int, amount: Decimal) -> Customer:
    """
    Top up a customer's balance.

    Raises:
        InvalidInputError: amount is not positive
        CustomerNotFoundError: Unknown id
    """
    if amount <= 0:
        raise InvalidInputError("Amount must be positive", detail=f"amount={amount}")

    db_customer = await _require_customer(session, customer_id)
    customer = ops.customer_to_model(db_customer)
    customer.add_balance(amount)
    await ops.save_customer(session, db_customer, customer)
    logger.info("CUSTOMER_TOPUP id=%s amount=%s balance=%s", customer_id, amount, customer.balance)
    return customer


async def update_customer(
    session: AsyncSession,
    customer_id: int,
    *,
    name: str | None = None,
    email: str | None = None,
    age: int | None = None,
) -> Customer:
    """
    Change selected profile fields. None or blank means "leave as is".

    Raises:
        CustomerNotFoundError: Unknown id
        ConflictError: New email is registered to another customer
        InvalidInputError: Malformed email or age out of range
    """
    db_customer = await _require_customer(session, customer_id)
    customer = ops.customer_to_model(db_customer)

    if name is not None:
        customer.set_name(name)

    if email is not None and is_valid_string(email) and email != customer.email:
        if await ops.customer_exists_by_email(session, email):
            raise ConflictError(f"Customer with email '{email}' already exists")
        if not customer.set_email(email):
            raise InvalidInputError("Invalid email format", detail=f"email={email!r}")

    if age is not None:
        if not is_valid_age(age):
            raise InvalidInputError(
                f"Age must be between {MIN_CUSTOMER_AGE} and {MAX_CUSTOMER_AGE}",
                detail=f"age={age}",
            )
        customer.set_age(age)

    await ops.save_customer(session, db_customer, customer)
    logger.info("CUSTOMER_UPDATE id=%s", customer_id)
    return customer


async def delete_customer(session: AsyncSession, customer_id: int) -> None:
    """
    Raises:
        CustomerNotFoundError: Unknown id (nothing is changed)
    """
    if not await ops.delete_customer(session, customer_id):
        raise CustomerNotFoundError(customer_id)
    logger.info("CUSTOMER_DELETE id=%s", customer_id)


def _check_age_range(min_age: int, max_age: int) -> None:
    if min_age < 0 or max_age < 0 or min_age > max_age:
        raise InvalidInputError("Invalid age range", detail=f"min={min_age}, max={max_age}")


def _check_min_balance(min_balance: Decimal) -> None:
    if min_balance < 0:
        raise InvalidInputError("Min balance cannot be negative", detail=f"min={min_balance}")


async def find_customers_by_age_range(
    session: AsyncSession, min_age: int, max_age: int
) -> list[Customer]:
    """
    Raises:
        InvalidInputError: Negative bound or min_age > max_age
    """
    _check_age_range(min_age, max_age)
    db_customers = await ops.list_customers(session, min_age=min_age, max_age=max_age)
    return [ops.customer_to_model(c) for c in db_customers]


async def find_customers_with_min_balance(
    session: AsyncSession, min_balance: Decimal
) -> list[Customer]:
    """
    Raises:
        InvalidInputError: Negative minimum
    """
    _check_min_balance(min_balance)
    db_customers = await ops.list_customers(session, min_balance=min_balance)
    return [ops.customer_to_model(c) for c in db_customers]


async def search_customers(
    session: AsyncSession,
    *,
    name: str | None = None,
    min_age: int | None = None,
    max_age: int | None = None,
    min_balance: Decimal | None = None,
) -> list[Customer]:
    """
    Customer listing with every filter combined (AND).

    A missing age bound defaults to the edge of the allowed age range.

    Raises:
        InvalidInputError: Invalid age range or negative minimum balance
    """
    low_age: int | None = None
    high_age: int | None = None
    if min_age is not None or max_age is not None:
        low_age = MIN_CUSTOMER_AGE if min_age is None else min_age
        high_age = MAX_CUSTOMER_AGE if max_age is None else max_age
        _check_age_range(low_age, high_age)
    if min_balance is not None:
        _check_min_balance(min_balance)

    db_customers = await ops.list_customers(
        session,
        name_contains=name.strip() if name and is_valid_string(name) else None,
        min_age=low_age,
        max_age=high_age,
        min_balance=min_balance,
    )
    return [ops.customer_to_model(c) for c in db_customers]


async def count_customers(session: AsyncSession) -> int:
    return await ops.count_customers(session)


async def total_balance(session: AsyncSession) -> Decimal:
    """Sum of every customer's balance."""
    customers = await ops.list_customers(session)
    return to_money(sum((c.balance for c in customers), Decimal("0")))


async def can_customer_afford_game(
    session: AsyncSession, customer_id: int, game_price: Decimal, game_age_rating: int
) -> bool:
    """
    Balance and age check only (availability and ownership not considered).

    Raises:
        CustomerNotFoundError: Unknown id
    """
    customer = await find_customer_by_id(session, customer_id)
    return customer.has_sufficient_balance(game_price) and customer.age >= game_age_rating
