"""Normalization and relationship-graph layer for the production dashboard."""

__version__ = "0.1.0"
