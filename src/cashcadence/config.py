"""Application configuration objects and helpers."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

from dotenv import load_dotenv

load_dotenv()


def _env_bool(name: str, default: bool = False) -> bool:
    """Interpret environment variable values as booleans."""

    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _env_int(name: str, default: int) -> int:
    """Interpret environment variable values as integers, falling back on garbage."""

    value = os.getenv(name)
    if value is None or not value.strip():
        return default
    try:
        return int(value)
    except ValueError:
        return default


class BaseConfig:
    """Base configuration shared across environments."""

    APP_NAME = "CashCadence"
    DB_FILENAME = "cashcadence.db"
    DEFAULT_UPCOMING_DAYS = 7

    def __init__(self) -> None:
        self.DATA_DIR = self._resolve_data_dir()
        self.DEV_MODE = _env_bool("CASHCADENCE_DEV_MODE", default=True)
        self.DATABASE_URL = os.getenv("CASHCADENCE_DATABASE_URL", self._build_sqlite_url())
        self.UPCOMING_DAYS = _env_int("CASHCADENCE_UPCOMING_DAYS", self.DEFAULT_UPCOMING_DAYS)
        if self.UPCOMING_DAYS < 0:
            raise ValueError("CASHCADENCE_UPCOMING_DAYS must not be negative.")

    def _resolve_data_dir(self) -> Path:
        """Return the directory where the SQLite file and logs live."""

        data_root = os.getenv("CASHCADENCE_DATA_DIR", "instance")
        base_path = Path(data_root).expanduser()
        try:
            path = base_path.resolve()
            path.mkdir(parents=True, exist_ok=True)
            return path
        except PermissionError:
            # Protected locations fall back to user-local storage.
            fallback_path = Path.home() / f".{self.APP_NAME.lower()}"
            fallback_path.mkdir(parents=True, exist_ok=True)
            return fallback_path.resolve()

    def _build_sqlite_url(self) -> str:
        """Construct the default SQLite URL inside the data directory."""

        db_path = self.DATA_DIR / self.DB_FILENAME
        return f"sqlite:///{db_path}"

    def sqlalchemy_engine_options(self) -> dict[str, Any]:
        """Expose engine kwargs for SQLModel to consume."""

        connect_args: dict[str, Any] = {}
        if self.DATABASE_URL.startswith("sqlite"):
            connect_args["check_same_thread"] = False
        return {"connect_args": connect_args}


class TestConfig(BaseConfig):
    """Configuration for tests: in-memory database, no dev console noise."""

    __test__ = False
    DEBUG = False
    TESTING = True

    def __init__(self) -> None:
        super().__init__()
        self.DATABASE_URL = "sqlite://"
        self.DEV_MODE = False

    def sqlalchemy_engine_options(self) -> dict[str, Any]:
        from sqlalchemy.pool import StaticPool

        options = super().sqlalchemy_engine_options()
        # A single shared connection keeps the in-memory schema alive across sessions.
        options["poolclass"] = StaticPool
        return options
