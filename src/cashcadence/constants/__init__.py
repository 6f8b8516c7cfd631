"""Shared enumerations and lookup constants."""
