"""
Domain faults and their HTTP translation.

Stock workflows raise StockValidationError subclasses with messages that name
the offending item and quantities; these are safe to show to the caller.
Everything else is logged internally and answered with a generic message.
"""
from fastapi import HTTPException, status
import logging

logger = logging.getLogger(__name__)


class StockValidationError(Exception):
    """A stock workflow was rejected. The enclosing transaction is rolled back."""


class ItemNotFoundError(StockValidationError):
    def __init__(self, item_id: int):
        self.item_id = item_id
        super().__init__(f"Medical item with ID {item_id} not found")


class InsufficientStockError(StockValidationError):
    def __init__(self, item_name: str, available: int, required: int):
        self.item_name = item_name
        self.available = available
        self.required = required
        super().__init__(
            f"Insufficient stock for item {item_name}. "
            f"Available: {available}, Required: {required}"
        )


class BusinessError:
    """Factory for HTTP exceptions with safe (non-leaky) messages."""

    @staticmethod
    def not_found(resource: str = "Resource", reason: str = "") -> HTTPException:
        """
        404 for lookups and mutations whose target does not exist.

        Example:
            if item is None:
                raise BusinessError.not_found("Medical item")
        """
        if reason:
            logger.warning(f"Not found: {resource} - {reason}")

        return HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"{resource} not found",
        )

    @staticmethod
    def unauthorized(reason: str = "") -> HTTPException:
        """
        Generic 401 for all authentication failures.

        Same response for wrong password and unknown user.
        """
        logger.warning(f"Unauthorized access attempt: {reason}")
        return HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Authentication failed",
            headers={"WWW-Authenticate": "Bearer"},
        )

    @staticmethod
    def bad_request(detail: str) -> HTTPException:
        """
        400 for input validation / business rule errors.

        OK to include specific details here since the caller caused the issue.
        Examples: "Insufficient stock for item Kasa Steril. Available: 2, Required: 5"
        """
        logger.info(f"Bad request: {detail}")
        return HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=detail,
        )

    @staticmethod
    def server_error(original_error: Exception = None) -> HTTPException:
        """
        Generic 500 - logs actual error internally, hides it from the caller.
        """
        if original_error:
            logger.error(
                f"Internal server error: {type(original_error).__name__}: {str(original_error)}",
                exc_info=True
            )
        else:
            logger.error("Internal server error occurred", exc_info=True)

        return HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="An internal error occurred. Please try again later.",
        )

