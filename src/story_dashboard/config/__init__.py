"""Service-level configuration."""

from .graph_config import GraphConfig

__all__ = ["GraphConfig"]
