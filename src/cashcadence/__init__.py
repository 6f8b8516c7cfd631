"""CashCadence personal finance core package."""

from __future__ import annotations

from .config import BaseConfig, TestConfig

__all__ = ["BaseConfig", "TestConfig"]
