"""Application-wide exception classes."""

from __future__ import annotations

from typing import Optional


class ApplicationError(Exception):
    """Base exception for all application errors.

    ``status_code`` is the HTTP status the web layer answers with when the
    error escapes a request handler.
    """

    status_code = 500

    def __init__(self, message: str = "", status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.message = message or self.__class__.__doc__ or self.__class__.__name__
        if status_code is not None:
            self.status_code = status_code


class ConfigurationError(ApplicationError):
    """Raised when configuration is invalid."""
    pass


class StorageError(ApplicationError):
    """Raised when a JSON document cannot be read or written."""
    pass


class ValidationError(ApplicationError):
    """Raised when request data validation fails."""
    status_code = 400


class NotFoundError(ApplicationError):
    """Raised when a referenced entity does not exist."""
    status_code = 404


class UserNotFoundError(NotFoundError):
    """Raised when no user has the given id."""

    def __init__(self, user_id: str) -> None:
        super().__init__("User not found")
        self.user_id = user_id


class PrizeNotFoundError(NotFoundError):
    """Raised when no prize has the given id."""

    def __init__(self, prize_id: str) -> None:
        super().__init__("Prize not found")
        self.prize_id = prize_id


class StampLimitError(ApplicationError):
    """Raised when a card already holds the maximum number of stamps."""
    status_code = 400

    def __init__(self, user_id: str) -> None:
        super().__init__("User already has the maximum number of stamps")
        self.user_id = user_id


class DeliveryError(ApplicationError):
    """Raised when a push message cannot be delivered to one recipient."""

    def __init__(self, user_id: str, reason: str) -> None:
        super().__init__(f"Push delivery to {user_id} failed: {reason}")
        self.user_id = user_id
        self.reason = reason

