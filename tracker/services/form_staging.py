from __future__ import annotations

import logging
from dataclasses import replace
from typing import Any

from core.errors import InvalidFieldError
from domain.models import DRAFT_FIELDS, Draft, Ticket

LOGGER = logging.getLogger(__name__)


class FormStaging:
    """Holds the single draft behind the ticket editor.

    Values are staged as-is; checking them is the store's job at save time.
    Callers get copies, so the staged draft only changes through this class.
    """

    def __init__(self, default_status: str, default_priority: str | None = None) -> None:
        self.default_status = default_status
        self.default_priority = default_priority
        self._draft = self._blank()

    @property
    def draft(self) -> Draft:
        return replace(self._draft)

    @property
    def editing_id(self) -> str | None:
        return self._draft.editing_id

    @property
    def is_editing(self) -> bool:
        return self._draft.editing_id is not None

    def open_for_create(self) -> Draft:
        self._draft = self._blank()
        return self.draft

    def open_for_edit(self, ticket: Ticket) -> Draft:
        self._draft = Draft(
            title=ticket.title,
            description=ticket.description,
            status=ticket.status,
            priority=ticket.priority,
            editing_id=ticket.id,
        )
        LOGGER.debug("Editing ticket %s", ticket.id)
        return self.draft

    def update(self, field_name: str, value: Any) -> Draft:
        if field_name not in DRAFT_FIELDS:
            raise InvalidFieldError(
                f"Unknown draft field {field_name!r}. Use: {', '.join(DRAFT_FIELDS)}",
                field=field_name,
                value=value,
            )
        setattr(self._draft, field_name, value)
        return self.draft

    def discard(self) -> None:
        self._draft = self._blank()

    def _blank(self) -> Draft:
        return Draft(status=self.default_status, priority=self.default_priority)
