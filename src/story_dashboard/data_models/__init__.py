"""Typed domain records for the dashboard."""
