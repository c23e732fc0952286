"""Region filtering module."""
