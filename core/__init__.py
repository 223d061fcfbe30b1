"""Core application components."""

from core.logger import setup_logger, get_logger
from core.constants import (
    StampCard,
    ChangeCategory,
    RealtimeMessageType,
    RealtimeDefaults,
    PushDefaults,
    StorageDefaults,
)
from core.exceptions import (
    ApplicationError,
    ConfigurationError,
    StorageError,
    ValidationError,
    NotFoundError,
    UserNotFoundError,
    PrizeNotFoundError,
    StampLimitError,
    DeliveryError,
)

__all__ = [
    # Logging
    'setup_logger',
    'get_logger',
    # Constants
    'StampCard',
    'ChangeCategory',
    'RealtimeMessageType',
    'RealtimeDefaults',
    'PushDefaults',
    'StorageDefaults',
    # Exceptions
    'ApplicationError',
    'ConfigurationError',
    'StorageError',
    'ValidationError',
    'NotFoundError',
    'UserNotFoundError',
    'PrizeNotFoundError',
    'StampLimitError',
    'DeliveryError',
]
