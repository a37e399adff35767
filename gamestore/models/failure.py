"""
Failure Envelope: Error Taxonomy and Response Classification.

Three kinds of failure exist in the store:

- NotFound: unknown customer or game id. Raised immediately, before any
  purchase result is built.
- Invalid input / conflict: malformed data at a construction or creation
  boundary (empty name, negative price, duplicate email). Raised.
- Business rule violations: unavailable game, age mismatch, already owned,
  insufficient balance. NEVER raised by the purchase flow; they are returned
  as a failed PurchaseResult.

Raised failures reach HTTP clients through the `ApiResponse` envelope.
No raw 500 errors may reach the client.
"""

from enum import Enum
from typing import Any

from pydantic import BaseModel, Field


class FailureKind(str, Enum):
    """Classification of failure types."""

    # Input validation failures
    INVALID_INPUT = "invalid_input"

    # Resource failures
    NOT_FOUND = "not_found"
    CONFLICT = "conflict"

    # Business rules
    INSUFFICIENT_BALANCE = "insufficient_balance"
    PURCHASE_REFUSED = "purchase_refused"

    # Unknown
    UNKNOWN = "unknown"


class OutcomeType(str, Enum):
    """High-level outcome classification."""

    REFUSAL = "refusal"
    KNOWN_FAILURE = "known_failure"
    UNKNOWN_FAILURE = "unknown_failure"


UNKNOWN_FAILURE_MESSAGE = "The store failed and does not know why. Please retry the operation."


class FailureDetail(BaseModel):
    """Detailed information about a failure."""

    kind: FailureKind = Field(
        ...,
        description="Classification of the failure",
    )
    message: str = Field(
        ...,
        description="User-appropriate explanation of what went wrong",
    )
    detail: str | None = Field(
        default=None,
        description="Additional technical detail (optional)",
    )
    suggestion: str | None = Field(
        default=None,
        description="Suggested action for the user",
    )


class ApiResponse(BaseModel):
    """
    Response envelope for failures surfaced by the API.

    Every raised failure is classified into an outcome type so clients can
    render it without guessing from status codes.
    """

    outcome: OutcomeType = Field(
        ...,
        description="High-level classification of the result",
    )
    failure: FailureDetail | None = Field(
        default=None,
        description="Failure details (present on non-success)",
    )

    @classmethod
    def refusal(
        cls,
        kind: FailureKind,
        message: str,
        detail: str | None = None,
        suggestion: str | None = None,
    ) -> "ApiResponse":
        """
        Create a refusal response.

        Use when the store chose not to proceed due to a constraint.
        Example: adding an age-restricted game to a minor's cart.
        """
        return cls(
            outcome=OutcomeType.REFUSAL,
            failure=FailureDetail(
                kind=kind,
                message=message,
                detail=detail,
                suggestion=suggestion,
            ),
        )

    @classmethod
    def known_failure(
        cls,
        kind: FailureKind,
        message: str,
        detail: str | None = None,
        suggestion: str | None = None,
    ) -> "ApiResponse":
        """
        Create a known failure response.

        Use when the store knows exactly why the operation failed.
        Example: unknown game id, duplicate email.
        """
        return cls(
            outcome=OutcomeType.KNOWN_FAILURE,
            failure=FailureDetail(
                kind=kind,
                message=message,
                detail=detail,
                suggestion=suggestion,
            ),
        )

    @classmethod
    def unknown_failure(cls, detail: str | None = None) -> "ApiResponse":
        """Create an unknown failure response with the fixed message."""
        return cls(
            outcome=OutcomeType.UNKNOWN_FAILURE,
            failure=FailureDetail(
                kind=FailureKind.UNKNOWN,
                message=UNKNOWN_FAILURE_MESSAGE,
                detail=detail,
                suggestion="If this persists, please report the issue.",
            ),
        )


# Standard exception types that map to known failures


class KnownError(Exception):
    """
    Base class for exceptions that represent known, explainable failures.

    Subclass this for errors where the store knows exactly what went wrong.
    """

    def __init__(
        self,
        kind: FailureKind,
        message: str,
        detail: str | None = None,
        suggestion: str | None = None,
        status_code: int = 400,
    ):
        self.kind = kind
        self.message = message
        self.detail = detail
        self.suggestion = suggestion
        self.status_code = status_code
        super().__init__(message)

    def to_response(self) -> ApiResponse:
        """Convert to an ApiResponse."""
        return ApiResponse.known_failure(
            kind=self.kind,
            message=self.message,
            detail=self.detail,
            suggestion=self.suggestion,
        )


class RefusalError(Exception):
    """
    Exception for constraint-based refusals.

    Use when the store refuses to proceed outside the purchase flow.
    Example: putting an unavailable game in a cart.
    """

    status_code = 422

    def __init__(
        self,
        kind: FailureKind,
        message: str,
        detail: str | None = None,
        suggestion: str | None = None,
    ):
        self.kind = kind
        self.message = message
        self.detail = detail
        self.suggestion = suggestion
        super().__init__(message)

    def to_response(self) -> ApiResponse:
        """Convert to an ApiResponse."""
        return ApiResponse.refusal(
            kind=self.kind,
            message=self.message,
            detail=self.detail,
            suggestion=self.suggestion,
        )


class NotFoundError(KnownError):
    """Raised when a lookup by storage id finds nothing."""

    def __init__(self, resource: str, resource_id: int):
        self.resource = resource
        self.resource_id = resource_id
        super().__init__(
            kind=FailureKind.NOT_FOUND,
            message=f"{resource} not found with ID: {resource_id}",
            status_code=404,
        )


class GameNotFoundError(NotFoundError):
    def __init__(self, game_id: int):
        super().__init__("Game", game_id)


class CustomerNotFoundError(NotFoundError):
    def __init__(self, customer_id: int):
        super().__init__("Customer", customer_id)


class InvalidInputError(KnownError):
    """Raised when an entity is constructed or created from malformed data."""

    def __init__(self, message: str, detail: str | None = None):
        super().__init__(
            kind=FailureKind.INVALID_INPUT,
            message=message,
            detail=detail,
            status_code=400,
        )


class ConflictError(KnownError):
    """Raised when a business key (game name, customer email) is already taken."""

    def __init__(self, message: str):
        super().__init__(
            kind=FailureKind.CONFLICT,
            message=message,
            suggestion="Choose a different value and try again.",
            status_code=409,
        )


class InsufficientBalanceError(KnownError):
    """
    Raised by Customer.deduct_balance when the balance cannot cover an amount.

    The purchase flow checks affordability first, so this only escapes
    when the balance is debited directly.
    """

    def __init__(self, balance: Any, amount: Any):
        self.balance = balance
        self.amount = amount
        super().__init__(
            kind=FailureKind.INSUFFICIENT_BALANCE,
            message="Insufficient balance",
            detail=f"balance={balance}, amount={amount}",
            suggestion="Add balance to the account and try again.",
        )


def create_unknown_failure(exception: Exception) -> ApiResponse:
    """
    Create an unknown failure response from an exception.

    The message is fixed and cannot be customized. Only the exception type
    is exposed as detail.
    """
    return ApiResponse.unknown_failure(detail=type(exception).__name__)
