"""Pytest configuration and shared fixtures for CashCadence tests.

Provides an isolated in-memory database, repository fixtures and record
factories so services can be exercised without touching a real data directory.
"""

from __future__ import annotations

from datetime import date
from itertools import count

import pytest
from sqlalchemy.pool import StaticPool
from sqlmodel import create_engine

from cashcadence.config import TestConfig
from cashcadence.context import AppContext
from cashcadence.infra.database import create_session_factory, init_database
from cashcadence.infra.repositories import (
    SQLModelRecurringRepository,
    SQLModelSavingsGoalRepository,
    SQLModelTransactionRepository,
)
from cashcadence.models import Expense, Income, RecurringTransaction

# =============================================================================
# Database Fixtures
# =============================================================================


@pytest.fixture(autouse=True)
def isolated_data_dir(tmp_path, monkeypatch):
    """Keep every config instance pointed at a per-test data directory."""

    monkeypatch.setenv("CASHCADENCE_DATA_DIR", str(tmp_path))
    monkeypatch.delenv("CASHCADENCE_DATABASE_URL", raising=False)
    monkeypatch.delenv("CASHCADENCE_UPCOMING_DAYS", raising=False)
    monkeypatch.delenv("CASHCADENCE_DEV_MODE", raising=False)
    return tmp_path


@pytest.fixture(scope="function")
def db_engine():
    """Create an isolated in-memory SQLite database for each test."""

    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
        echo=False,
    )
    init_database(engine)
    yield engine
    engine.dispose()


@pytest.fixture(scope="function")
def session_factory(db_engine):
    """Session factory matching the one repositories receive at runtime."""

    return create_session_factory(db_engine)


@pytest.fixture
def transaction_repo(session_factory) -> SQLModelTransactionRepository:
    return SQLModelTransactionRepository(session_factory)


@pytest.fixture
def recurring_repo(session_factory) -> SQLModelRecurringRepository:
    return SQLModelRecurringRepository(session_factory)


@pytest.fixture
def savings_repo(session_factory) -> SQLModelSavingsGoalRepository:
    return SQLModelSavingsGoalRepository(session_factory)


@pytest.fixture
def app_context(session_factory, transaction_repo, recurring_repo, savings_repo) -> AppContext:
    """Application context wired to the in-memory database."""

    return AppContext(
        config=TestConfig(),
        session_factory=session_factory,
        transaction_repo=transaction_repo,
        recurring_repo=recurring_repo,
        savings_repo=savings_repo,
    )


# =============================================================================
# Test Data Factories
# =============================================================================


@pytest.fixture
def income_factory():
    """Factory for unsaved Income records."""

    ids = count(1)

    def _create_income(
        amount: float,
        occurred_on: date,
        source: str = "mainJob",
        description: str | None = None,
    ) -> Income:
        return Income(
            id=f"inc-{next(ids)}",
            source=source,
            amount=amount,
            occurred_on=occurred_on,
            description=description,
        )

    return _create_income


@pytest.fixture
def expense_factory():
    """Factory for unsaved Expense records."""

    ids = count(1)

    def _create_expense(
        amount: float,
        occurred_on: date,
        name: str = "Groceries",
        category: str = "food",
        description: str | None = None,
    ) -> Expense:
        return Expense(
            id=f"exp-{next(ids)}",
            name=name,
            category=category,
            amount=amount,
            occurred_on=occurred_on,
            description=description,
        )

    return _create_expense


@pytest.fixture
def template_factory():
    """Factory for recurring templates with sensible expense defaults.

    Income templates get ``source`` populated; expense templates get
    ``name``/``category``.
    """

    ids = count(1)

    def _create_template(
        kind: str = "expense",
        amount: float = 100.0,
        frequency: str = "monthly",
        start_date: date = date(2024, 1, 1),
        end_date: date | None = None,
        is_paused: bool = False,
        template_id: str | None = None,
        **fields,
    ) -> RecurringTransaction:
        if kind == "income":
            fields.setdefault("source", "mainJob")
        else:
            fields.setdefault("name", "Rent")
            fields.setdefault("category", "housing")
        return RecurringTransaction(
            id=template_id or f"tpl-{next(ids)}",
            kind=kind,
            amount=amount,
            frequency=frequency,
            start_date=start_date,
            end_date=end_date,
            is_paused=is_paused,
            **fields,
        )

    return _create_template

