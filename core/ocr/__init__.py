"""Text recognition module."""
