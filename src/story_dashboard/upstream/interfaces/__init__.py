"""Upstream interfaces for the dashboard project."""

from .page_store_interface import Page, PageStore

__all__ = ["Page", "PageStore"]
