"""Text assembly module."""
