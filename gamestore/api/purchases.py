"""
Purchase API endpoints.

Business rule rejections (unavailable, age, already owned, balance) are
NOT errors here: they return 200 with success=false and a message.
Only unknown ids produce an error status (404).
"""

from decimal import Decimal
from typing import Annotated

from fastapi import APIRouter, Body, Depends
from pydantic import BaseModel, Field
from sqlalchemy.ext.asyncio import AsyncSession

from gamestore.api.games import GameResponse, game_response
from gamestore.db.database import get_session
from gamestore.models.purchase import PurchaseResult
from gamestore.services import purchase_service
from gamestore.services.currency import format_brl

router = APIRouter(prefix="/purchases", tags=["purchases"])


class PurchaseResponse(BaseModel):
    """Response model for any purchase attempt."""

    success: bool
    message: str
    total_amount: Decimal
    formatted_total: str
    games: list[GameResponse] = Field(default_factory=list)
    games_count: int = 0


class MaximumPurchaseRequest(BaseModel):
    game_ids: list[int] | None = Field(
        default=None,
        description="Candidate games; omit to consider every available game",
    )


def purchase_response(result: PurchaseResult) -> PurchaseResponse:
    return PurchaseResponse(
        success=result.success,
        message=result.message,
        total_amount=result.total_amount,
        formatted_total=format_brl(result.total_amount),
        games=[game_response(g) for g in result.games],
        games_count=result.games_count,
    )


@router.post("/{customer_id}/games/{game_id}", response_model=PurchaseResponse)
async def purchase_game(
    customer_id: int,
    game_id: int,
    session: Annotated[AsyncSession, Depends(get_session)],
) -> PurchaseResponse:
    """
    Buy a single game.

    On rejection, the message lists every reason, separated by "; ".
    """
    result = await purchase_service.purchase_game(session, customer_id, game_id)
    return purchase_response(result)


@router.post("/{customer_id}/cart", response_model=PurchaseResponse)
async def purchase_cart(
    customer_id: int,
    session: Annotated[AsyncSession, Depends(get_session)],
) -> PurchaseResponse:
    """Check out the customer's cart. The cart is emptied on success."""
    result = await purchase_service.purchase_cart(session, customer_id)
    return purchase_response(result)


@router.post("/{customer_id}/maximum", response_model=PurchaseResponse)
async def purchase_maximum(
    customer_id: int,
    session: Annotated[AsyncSession, Depends(get_session)],
    request: Annotated[MaximumPurchaseRequest | None, Body()] = None,
) -> PurchaseResponse:
    """
    Buy as many games as the balance allows, cheapest first.

    Skips games the customer owns, cannot buy for age reasons,
    or that are unavailable.
    """
    game_ids = request.game_ids if request is not None else None
    result = await purchase_service.purchase_maximum_games(session, customer_id, game_ids)
    return purchase_response(result)
