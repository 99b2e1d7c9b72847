"""
Domain-level exceptions for the hexagonal architecture.

These exceptions represent business rule violations and domain logic errors.
They should be mapped to appropriate HTTP responses in the API layer.
"""


class DomainException(Exception):
    """Base exception for all domain-level errors."""
    pass


class ValidationError(DomainException):
    """Raised when domain validation rules are violated."""
    pass


class ConfigurationError(DomainException):
    """Raised when configuration is invalid or missing."""
    pass


class ProcessingError(DomainException):
    """Base exception for processing errors."""
    pass


class SearchError(ProcessingError):
    """Raised when carrier store operations fail."""
    pass


class SuggestionError(ProcessingError):
    """Raised when an AI suggestion strategy cannot produce usable output."""

    def __init__(self, strategy: str, reason: str):
        self.strategy = strategy
        self.reason = reason
        super().__init__(f"{strategy}: {reason}")


class NotificationError(ProcessingError):
    """Raised when an outbound notification cannot be delivered."""
    pass


class RateLimitExceededError(DomainException):
    """Raised when rate limits are exceeded."""
    
    def __init__(
        self,
        limit_type: str,
        limit_value: int,
        time_window: str,
        retry_after: int = None,
        identifier: str = None
    ):
        self.limit_type = limit_type
        self.limit_value = limit_value
        self.time_window = time_window
        self.retry_after = retry_after
        self.identifier = identifier
        
        message = f"Rate limit exceeded: {limit_value} requests per {time_window}"
        if identifier:
            message += f" for {identifier}"
        if retry_after:
            message += f". Retry after {retry_after} seconds"
            
        super().__init__(message)


__all__ = [
    "DomainException",
    "ValidationError",
    "ConfigurationError",
    "ProcessingError",
    "SearchError",
    "SuggestionError",
    "NotificationError",
    "RateLimitExceededError",
]
