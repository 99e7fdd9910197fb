"""Upstream exceptions module."""

from .upstream_exceptions import (
    ConfigurationError,
    EntityNotFoundError,
    UpstreamError,
    UpstreamFailureError,
    UpstreamTimeoutError,
)

__all__ = [
    "UpstreamError",
    "UpstreamTimeoutError",
    "UpstreamFailureError",
    "EntityNotFoundError",
    "ConfigurationError",
]
