"""Application context for dependency injection."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Optional

from sqlmodel import Session

from .config import BaseConfig
from .domain.repositories import (
    RecurringRepository,
    SavingsGoalRepository,
    TransactionRepository,
)
from .infra.database import bootstrap_database
from .infra.repositories import (
    SQLModelRecurringRepository,
    SQLModelSavingsGoalRepository,
    SQLModelTransactionRepository,
)


@dataclass
class AppContext:
    """Configuration plus the repositories the command surface works with."""

    config: BaseConfig
    session_factory: Callable[[], Session]

    transaction_repo: TransactionRepository
    recurring_repo: RecurringRepository
    savings_repo: SavingsGoalRepository


def create_app_context(config: Optional[BaseConfig] = None) -> AppContext:
    """Create the database schema and wire repositories around one session factory."""

    if config is None:
        config = BaseConfig()

    _engine, session_factory = bootstrap_database(config)

    return AppContext(
        config=config,
        session_factory=session_factory,
        transaction_repo=SQLModelTransactionRepository(session_factory),
        recurring_repo=SQLModelRecurringRepository(session_factory),
        savings_repo=SQLModelSavingsGoalRepository(session_factory),
    )
