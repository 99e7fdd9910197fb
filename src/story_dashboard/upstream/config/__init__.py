"""Upstream configuration module."""

from .notion_config import NotionConfig

__all__ = ["NotionConfig"]
