"""
Application Custom Exceptions

Purpose:
    - Standardize error handling across SnoChat
    - Prevent leaking internal errors
    - Give every failure category a machine-readable error_code
"""

# Messages
from . import messages





class AppException(Exception):
    """
    Base application exception.
    """

    def __init__(
        self,
        error_code: str,
        message: str,
        status_code: int = 400,
        details: str = None
    ):
        """
        Args:
            error_code (str): Unique business error identifier
            message (str): User-friendly error message
            status_code (int): HTTP status code (default: 400)
            details (str): Optional internal/debug details, logged but never sent to the caller
        """

        self.error_code = error_code
        self.message = message
        self.status_code = status_code
        self.details = details

        super().__init__(message)



    def to_dict(self) -> dict:
        """
        Convert exception to standardized API response format.
        """

        response = {
            "status": "error",
            "error_code": self.error_code,
            "message": self.message
        }

        return response





# --------------------------------------------
# Request / Business Exceptions
# --------------------------------------------

class ValidationException(AppException):
    """
    Raised when validation fails.
    """

    def __init__(self, message: str, details: str = None):
        super().__init__(
            error_code = "VALIDATION_ERROR",
            message = message,
            status_code = 400,
            details = details
        )





class NotFoundException(AppException):
    """
    Raised when resource is not found (or soft-deleted).
    """

    def __init__(self, message: str = messages.ERROR["NOT_FOUND"]):
        super().__init__(
            error_code = "NOT_FOUND",
            message = message,
            status_code = 404
        )





class AuthorizationException(AppException):
    """
    Raised when a user touches a resource owned by someone else.
    """

    def __init__(self, message: str = messages.ERROR["ACCESS_DENIED"]):
        super().__init__(
            error_code = "ACCESS_DENIED",
            message = message,
            status_code = 403
        )





class InsufficientCreditException(AppException):
    """
    Raised when the user's balance cannot cover the requested service.
    """

    def __init__(self, remaining_credits: int = 0, message: str = messages.ERROR["INSUFFICIENT_CREDIT"]):
        self.remaining_credits = remaining_credits

        super().__init__(
            error_code = "INSUFFICIENT_CREDIT",
            message = message,
            status_code = 403
        )


    def to_dict(self) -> dict:
        response = super().to_dict()
        response["remaining_credits"] = self.remaining_credits
        return response





class MessageLimitException(AppException):
    """
    Raised when a session already holds the maximum number of messages.
    """

    def __init__(self, limit: int):
        self.limit = limit

        super().__init__(
            error_code = "MESSAGE_LIMIT_REACHED",
            message = messages.ERROR["MESSAGE_LIMIT_REACHED"].format(limit = limit),
            status_code = 409
        )





# --------------------------------------------
# AI Provider Exceptions
# --------------------------------------------

class AiConfigException(AppException):
    """
    Missing or rejected AI credentials. Never retried.
    """

    def __init__(self, details: str = None):
        super().__init__(
            error_code = "AI_CONFIG_ERROR",
            message = messages.ERROR["AI_CONFIG_ERROR"],
            status_code = 500,
            details = details
        )





class AiRateLimitException(AppException):

    def __init__(self, details: str = None):
        super().__init__(
            error_code = "AI_RATE_LIMITED",
            message = messages.ERROR["AI_RATE_LIMITED"],
            status_code = 429,
            details = details
        )





class AiQuotaException(AppException):

    def __init__(self, details: str = None):
        super().__init__(
            error_code = "AI_QUOTA_EXHAUSTED",
            message = messages.ERROR["AI_QUOTA_EXHAUSTED"],
            status_code = 503,
            details = details
        )





class AiOverloadedException(AppException):
    """
    Provider still overloaded after every retry attempt.
    """

    def __init__(self, attempts: int, details: str = None):
        self.attempts = attempts

        super().__init__(
            error_code = "AI_OVERLOADED",
            message = messages.ERROR["AI_OVERLOADED"],
            status_code = 503,
            details = details
        )





class AiServiceException(AppException):

    def __init__(self, message: str = messages.ERROR["AI_FAILED"], details: str = None):
        super().__init__(
            error_code = "AI_FAILED",
            message = message,
            status_code = 502,
            details = details
        )





# --------------------------------------------
# System Exceptions
# --------------------------------------------

class StorageException(AppException):
    """
    Raised when a correctness-relevant database or object-storage write fails.
    """

    def __init__(self, details: str = None):
        super().__init__(
            error_code = "STORAGE_ERROR",
            message = messages.ERROR["STORAGE_ERROR"],
            status_code = 500,
            details = details
        )





class InternalServerException(AppException):
    """
    Raised for unexpected system errors.
    """

    def __init__(self, details: str = None):
        super().__init__(
            error_code = "INTERNAL_SERVER_ERROR",
            message = messages.ERROR["INTERNAL_SERVER_ERROR"],
            status_code = 500,
            details  = details
        )
