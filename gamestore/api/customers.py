"""
Account API endpoints.

Provides registration, profile management, top-ups and library access.
"""

from decimal import Decimal
from typing import Annotated

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel, Field
from sqlalchemy.ext.asyncio import AsyncSession

from gamestore.api.games import DeleteResponse, GameListResponse, game_list_response
from gamestore.db.database import get_session
from gamestore.models.customer import Customer
from gamestore.services import customer_service
from gamestore.services.currency import format_brl

router = APIRouter(prefix="/customers", tags=["customers"])


class CustomerResponse(BaseModel):
    """Response model for a customer."""

    id: int | None
    name: str
    email: str
    balance: Decimal
    formatted_balance: str
    age: int
    owned_games: int = Field(default=0, description="Number of games in the library")
    total_spent: Decimal = Field(
        default=Decimal("0.00"),
        description="Sum of the current prices of owned games",
    )


class CustomerListResponse(BaseModel):
    customers: list[CustomerResponse]
    count: int


class CustomerCreateRequest(BaseModel):
    """Request model for registering a customer."""

    name: str = Field(..., examples=["Ana Souza"])
    email: str = Field(..., examples=["ana@example.com"])
    balance: Decimal = Field(default=Decimal("0.00"), examples=["100.00"])
    age: int = Field(..., examples=[25])


class CustomerUpdateRequest(BaseModel):
    """Request model for a partial profile update. Omitted fields are unchanged."""

    name: str | None = None
    email: str | None = None
    age: int | None = None


class BalanceRequest(BaseModel):
    amount: Decimal = Field(..., description="Amount to add; must be positive", examples=["50.00"])


class CustomerStatsResponse(BaseModel):
    total_customers: int
    total_balance: Decimal
    formatted_total_balance: str


def customer_response(customer: Customer) -> CustomerResponse:
    return CustomerResponse(
        id=customer.id,
        name=customer.name,
        email=customer.email,
        balance=customer.balance,
        formatted_balance=format_brl(customer.balance),
        age=customer.age,
        owned_games=len(customer.owned_games),
        total_spent=customer.total_spent(),
    )


@router.post("", response_model=CustomerResponse, status_code=status.HTTP_201_CREATED)
async def create_customer(
    request: CustomerCreateRequest,
    session: Annotated[AsyncSession, Depends(get_session)],
) -> CustomerResponse:
    """
    Register a customer.

    Returns 400 for invalid data and 409 if the email is registered.
    """
    customer = await customer_service.create_customer(
        session,
        name=request.name,
        email=request.email,
        initial_balance=request.balance,
        age=request.age,
    )
    return customer_response(customer)


@router.get("", response_model=CustomerListResponse)
async def list_customers(
    session: Annotated[AsyncSession, Depends(get_session)],
    name: str | None = None,
    min_age: int | None = None,
    max_age: int | None = None,
    min_balance: Decimal | None = None,
) -> CustomerListResponse:
    """Search customers. Filters combine; `name` is a case-insensitive substring."""
    customers = await customer_service.search_customers(
        session,
        name=name,
        min_age=min_age,
        max_age=max_age,
        min_balance=min_balance,
    )
    return CustomerListResponse(
        customers=[customer_response(c) for c in customers],
        count=len(customers),
    )


@router.get("/stats", response_model=CustomerStatsResponse)
async def customer_stats(
    session: Annotated[AsyncSession, Depends(get_session)],
) -> CustomerStatsResponse:
    """Customer count and the sum of all balances."""
    total = await customer_service.total_balance(session)
    return CustomerStatsResponse(
        total_customers=await customer_service.count_customers(session),
        total_balance=total,
        formatted_total_balance=format_brl(total),
    )


@router.get("/{customer_id}", response_model=CustomerResponse)
async def get_customer(
    customer_id: int,
    session: Annotated[AsyncSession, Depends(get_session)],
) -> CustomerResponse:
    """Get a customer by id. Returns 404 if it does not exist."""
    return customer_response(await customer_service.find_customer_by_id(session, customer_id))


@router.patch("/{customer_id}", response_model=CustomerResponse)
async def update_customer(
    customer_id: int,
    request: CustomerUpdateRequest,
    session: Annotated[AsyncSession, Depends(get_session)],
) -> CustomerResponse:
    """Change selected profile fields."""
    customer = await customer_service.update_customer(
        session,
        customer_id,
        name=request.name,
        email=request.email,
        age=request.age,
    )
    return customer_response(customer)


@router.delete("/{customer_id}", response_model=DeleteResponse)
async def delete_customer(
    customer_id: int,
    session: Annotated[AsyncSession, Depends(get_session)],
) -> DeleteResponse:
    """Delete a customer with their library and cart."""
    await customer_service.delete_customer(session, customer_id)
    return DeleteResponse(id=customer_id, deleted=True, message="Customer deleted.")


@router.post("/{customer_id}/balance", response_model=CustomerResponse)
async def add_balance(
    customer_id: int,
    request: BalanceRequest,
    session: Annotated[AsyncSession, Depends(get_session)],
) -> CustomerResponse:
    """Top up a customer's balance. The amount must be positive."""
    customer = await customer_service.add_balance(session, customer_id, request.amount)
    return customer_response(customer)


@router.get("/{customer_id}/games", response_model=GameListResponse)
async def list_owned_games(
    customer_id: int,
    session: Annotated[AsyncSession, Depends(get_session)],
) -> GameListResponse:
    """The customer's library in acquisition order."""
    customer = await customer_service.find_customer_by_id(session, customer_id)
    return game_list_response(customer.owned_games)
