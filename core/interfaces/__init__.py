"""Core component interfaces."""
