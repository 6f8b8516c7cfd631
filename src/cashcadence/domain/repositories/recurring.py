"""Recurring template repository protocol."""

from __future__ import annotations

from typing import Optional, Protocol

from ...models.recurring import RecurringTransaction


class RecurringRepository(Protocol):
    """Repository for recurring templates, the only mutable recurring unit."""

    def list_all(self, *, include_paused: bool = True) -> list[RecurringTransaction]:
        ...

    def get_by_id(self, template_id: str) -> Optional[RecurringTransaction]:
        ...

    def create(self, template: RecurringTransaction) -> RecurringTransaction:
        """Validate and store a new template."""
        ...

    def update(self, template: RecurringTransaction) -> RecurringTransaction:
        """Validate and replace an existing template."""
        ...

    def set_paused(self, template_id: str, paused: bool) -> RecurringTransaction:
        ...

    def delete(self, template_id: str) -> None:
        ...
