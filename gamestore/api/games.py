"""
Catalog API endpoints.

Provides browsing and CRUD operations for games.
"""

from decimal import Decimal
from typing import Annotated

from fastapi import APIRouter, Depends, Query, status
from pydantic import BaseModel, Field
from sqlalchemy.ext.asyncio import AsyncSession

from gamestore.db.database import get_session
from gamestore.models.game import Game
from gamestore.services import game_service
from gamestore.services.currency import format_brl
from gamestore.services.game_service import PriceOrder

router = APIRouter(prefix="/games", tags=["games"])


class GameResponse(BaseModel):
    """Response model for a single game."""

    id: int | None
    name: str
    price: Decimal
    formatted_price: str
    category: str
    age_rating: int
    description: str = ""
    available: bool = True
    free: bool = False


class GameListResponse(BaseModel):
    """Response model for a list of games."""

    games: list[GameResponse]
    count: int


class GameCreateRequest(BaseModel):
    """Request model for adding a game to the catalog."""

    name: str = Field(..., examples=["Hades"])
    price: Decimal = Field(..., description="Price in BRL; 0 for free games", examples=["79.90"])
    category: str = Field(..., examples=["Roguelike"])
    age_rating: int = Field(..., description="Minimum customer age (0-18)", examples=[14])
    description: str = ""
    available: bool = True


class GameUpdateRequest(BaseModel):
    """Request model for a partial game update. Omitted fields are unchanged."""

    name: str | None = None
    price: Decimal | None = None
    category: str | None = None
    age_rating: int | None = None
    description: str | None = None
    available: bool | None = None


class DeleteResponse(BaseModel):
    """Response model for delete operations."""

    id: int
    deleted: bool
    message: str = ""


def game_response(game: Game) -> GameResponse:
    return GameResponse(
        id=game.id,
        name=game.name,
        price=game.price,
        formatted_price=format_brl(game.price),
        category=game.category,
        age_rating=game.age_rating,
        description=game.description,
        available=game.available,
        free=game.is_free(),
    )


def game_list_response(games: list[Game]) -> GameListResponse:
    return GameListResponse(games=[game_response(g) for g in games], count=len(games))


@router.get("", response_model=GameListResponse)
async def list_games(
    session: Annotated[AsyncSession, Depends(get_session)],
    category: str | None = None,
    min_price: Decimal | None = None,
    max_price: Decimal | None = None,
    max_age_rating: Annotated[int | None, Query(description="Only games this age may buy")] = None,
    include_unavailable: bool = False,
    free_only: bool = False,
    sort: PriceOrder | None = None,
) -> GameListResponse:
    """
    Browse the catalog.

    Filters combine. Unavailable games are hidden unless requested.
    Without `sort`, games are listed in catalog order.
    """
    games = await game_service.browse_games(
        session,
        category=category,
        min_price=min_price,
        max_price=max_price,
        max_age_rating=max_age_rating,
        include_unavailable=include_unavailable,
        free_only=free_only,
        sort=sort,
    )
    return game_list_response(games)


@router.get("/free", response_model=GameListResponse)
async def list_free_games(
    session: Annotated[AsyncSession, Depends(get_session)],
) -> GameListResponse:
    """List every free game, available or not."""
    return game_list_response(await game_service.list_free_games(session))


@router.post("", response_model=GameResponse, status_code=status.HTTP_201_CREATED)
async def create_game(
    request: GameCreateRequest,
    session: Annotated[AsyncSession, Depends(get_session)],
) -> GameResponse:
    """
    Add a game to the catalog.

    Returns 400 for invalid data and 409 if the name is taken.
    """
    game = await game_service.create_game(
        session,
        name=request.name,
        price=request.price,
        category=request.category,
        age_rating=request.age_rating,
        description=request.description,
        available=request.available,
    )
    return game_response(game)


@router.get("/{game_id}", response_model=GameResponse)
async def get_game(
    game_id: int,
    session: Annotated[AsyncSession, Depends(get_session)],
) -> GameResponse:
    """Get a game by id. Returns 404 if it does not exist."""
    return game_response(await game_service.find_game_by_id(session, game_id))


@router.patch("/{game_id}", response_model=GameResponse)
async def update_game(
    game_id: int,
    request: GameUpdateRequest,
    session: Annotated[AsyncSession, Depends(get_session)],
) -> GameResponse:
    """Change selected fields of a game."""
    game = await game_service.update_game(
        session,
        game_id,
        name=request.name,
        price=request.price,
        category=request.category,
        age_rating=request.age_rating,
        description=request.description,
        available=request.available,
    )
    return game_response(game)


@router.delete("/{game_id}", response_model=DeleteResponse)
async def delete_game(
    game_id: int,
    session: Annotated[AsyncSession, Depends(get_session)],
) -> DeleteResponse:
    """
    Remove a game from the catalog.

    The game also leaves every cart and library. To stop selling a game
    while keeping it in libraries, set `available` to false instead.
    """
    await game_service.delete_game(session, game_id)
    return DeleteResponse(id=game_id, deleted=True, message="Game deleted.")
