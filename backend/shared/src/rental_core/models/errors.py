"""Standard error codes for the rental booking backend.

Services raise BookingError; the API layer turns it into an ErrorResponse
body with an HTTP status picked from the error code.

The pricing and availability engines never raise: an empty or inverted stay
simply prices at zero. These codes belong to the boundary around them.
"""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict


class ErrorCode(str, Enum):
    """Standard error codes."""

    INVALID_DATE_RANGE = "ERR_001"
    INVALID_PRICING_RULE = "ERR_003"
    PRICING_RULE_NOT_FOUND = "ERR_004"
    BLOCKED_RANGE_NOT_FOUND = "ERR_005"


# Human-readable error messages
ERROR_MESSAGES: dict[ErrorCode, str] = {
    ErrorCode.INVALID_DATE_RANGE: "The end date must be after the start date",
    ErrorCode.INVALID_PRICING_RULE: "The pricing rule is not valid for its price type",
    ErrorCode.PRICING_RULE_NOT_FOUND: "Pricing rule not found",
    ErrorCode.BLOCKED_RANGE_NOT_FOUND: "Blocked date range not found",
}

# Recovery suggestions for API clients
ERROR_RECOVERY: dict[ErrorCode, str] = {
    ErrorCode.INVALID_DATE_RANGE: "Choose a check-out date after the check-in date",
    ErrorCode.INVALID_PRICING_RULE: (
        "Packages need min_nights; holiday and high season rules need start_date <= end_date"
    ),
    ErrorCode.PRICING_RULE_NOT_FOUND: "Refresh the pricing rule list",
    ErrorCode.BLOCKED_RANGE_NOT_FOUND: "Refresh the blocked dates list",
}


class ErrorResponse(BaseModel):
    """Standard error response body."""

    model_config = ConfigDict(strict=True)

    success: bool = False
    error_code: ErrorCode
    message: str
    recovery: str
    details: Optional[dict[str, str]] = None

    @classmethod
    def from_code(
        cls,
        code: ErrorCode,
        details: Optional[dict[str, str]] = None,
    ) -> "ErrorResponse":
        """Create an ErrorResponse from an error code.

        Args:
            code: The error code
            details: Optional additional context about the error

        Returns:
            An ErrorResponse with the message and recovery hint for the code.
        """
        return cls(
            error_code=code,
            message=ERROR_MESSAGES[code],
            recovery=ERROR_RECOVERY[code],
            details=details,
        )


class BookingError(Exception):
    """Exception raised by pricing and calendar services."""

    def __init__(
        self,
        code: ErrorCode,
        details: Optional[dict[str, str]] = None,
    ):
        self.code = code
        self.message = ERROR_MESSAGES[code]
        self.recovery = ERROR_RECOVERY[code]
        self.details = details
        super().__init__(self.message)

    def to_error_response(self) -> ErrorResponse:
        """Convert this exception to an ErrorResponse."""
        return ErrorResponse.from_code(self.code, self.details)
