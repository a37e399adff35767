"""
Cart API endpoints.

One persisted cart per customer. Checkout lives under /purchases.
"""

from decimal import Decimal
from typing import Annotated

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field
from sqlalchemy.ext.asyncio import AsyncSession

from gamestore.api.games import GameResponse, game_response
from gamestore.db.database import get_session
from gamestore.models.cart import Cart
from gamestore.services import cart_service
from gamestore.services.currency import format_brl

router = APIRouter(prefix="/cart", tags=["cart"])


class CartItemResponse(BaseModel):
    game: GameResponse
    quantity: int
    unit_price: Decimal
    total_price: Decimal


class CartResponse(BaseModel):
    """Response model for a cart."""

    customer_id: int
    items: list[CartItemResponse] = Field(default_factory=list)
    total_items: int = 0
    total_value: Decimal = Decimal("0.00")
    formatted_total: str = ""


class CartAddRequest(BaseModel):
    game_id: int
    quantity: int = Field(default=1, description="Copies to add; must be positive")


class CartClearResponse(BaseModel):
    customer_id: int
    removed_lines: int


def cart_response(customer_id: int, cart: Cart) -> CartResponse:
    total = cart.total_value()
    return CartResponse(
        customer_id=customer_id,
        items=[
            CartItemResponse(
                game=game_response(item.game),
                quantity=item.quantity,
                unit_price=item.unit_price or Decimal("0.00"),
                total_price=item.total_price,
            )
            for item in cart.items
        ],
        total_items=cart.total_items(),
        total_value=total,
        formatted_total=format_brl(total),
    )


@router.get("/{customer_id}", response_model=CartResponse)
async def get_cart(
    customer_id: int,
    session: Annotated[AsyncSession, Depends(get_session)],
) -> CartResponse:
    """Get a customer's cart."""
    return cart_response(customer_id, await cart_service.get_cart(session, customer_id))


@router.post("/{customer_id}/items", response_model=CartResponse)
async def add_to_cart(
    customer_id: int,
    request: CartAddRequest,
    session: Annotated[AsyncSession, Depends(get_session)],
) -> CartResponse:
    """
    Add a game to the cart.

    Adding a game already in the cart raises its quantity.
    Unavailable or age-inappropriate games are refused (422).
    """
    cart = await cart_service.add_to_cart(session, customer_id, request.game_id, request.quantity)
    return cart_response(customer_id, cart)


@router.delete("/{customer_id}/items/{game_id}", response_model=CartResponse)
async def remove_from_cart(
    customer_id: int,
    game_id: int,
    session: Annotated[AsyncSession, Depends(get_session)],
) -> CartResponse:
    """Remove a game's line from the cart."""
    cart = await cart_service.remove_from_cart(session, customer_id, game_id)
    return cart_response(customer_id, cart)


@router.delete("/{customer_id}", response_model=CartClearResponse)
async def clear_cart(
    customer_id: int,
    session: Annotated[AsyncSession, Depends(get_session)],
) -> CartClearResponse:
    """Empty the cart."""
    removed = await cart_service.clear_cart(session, customer_id)
    return CartClearResponse(customer_id=customer_id, removed_lines=removed)
