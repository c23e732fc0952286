"""Image loading module."""
