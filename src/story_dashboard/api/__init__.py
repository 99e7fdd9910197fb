"""HTTP API for the story dashboard."""
