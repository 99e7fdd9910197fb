"""Custom exceptions for upstream page store operations."""


class UpstreamError(Exception):
    """Base exception for all upstream-related errors."""

    def __init__(self, message: str, original_error: Exception | None = None):
        super().__init__(message)
        self.original_error = original_error


class UpstreamTimeoutError(UpstreamError):
    """Raised when a batched upstream fetch exceeds its time budget."""

    pass


class UpstreamFailureError(UpstreamError):
    """Raised when an upstream fetch fails for a reason other than a timeout."""

    pass


class EntityNotFoundError(UpstreamError):
    """Raised when a requested entity does not resolve to an upstream page."""

    def __init__(self, entity_id: str, entity_type: str | None = None):
        self.entity_id = entity_id
        self.entity_type = entity_type
        message = f"Entity with ID '{entity_id}' not found"
        if entity_type:
            message = f"{entity_type} with ID '{entity_id}' not found"
        super().__init__(message)


class ConfigurationError(UpstreamError):
    """Raised when upstream configuration is invalid."""

    pass
