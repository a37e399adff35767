from gamestore.models.cart import Cart, CartItem
from gamestore.models.customer import Customer
from gamestore.models.failure import (
    ApiResponse,
    ConflictError,
    CustomerNotFoundError,
    FailureDetail,
    FailureKind,
    GameNotFoundError,
    InsufficientBalanceError,
    InvalidInputError,
    KnownError,
    NotFoundError,
    OutcomeType,
    RefusalError,
    create_unknown_failure,
)
from gamestore.models.game import Game
from gamestore.models.purchase import Allocation, PurchaseResult

__all__ = [
    "Allocation",
    "ApiResponse",
    "Cart",
    "CartItem",
    "ConflictError",
    "Customer",
    "CustomerNotFoundError",
    "FailureDetail",
    "FailureKind",
    "Game",
    "GameNotFoundError",
    "InsufficientBalanceError",
    "InvalidInputError",
    "KnownError",
    "NotFoundError",
    "OutcomeType",
    "PurchaseResult",
    "RefusalError",
    "create_unknown_failure",
]
