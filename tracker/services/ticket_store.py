from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from dataclasses import replace

from core.errors import (
    InvalidFieldError,
    InvalidRatingError,
    InvalidStateError,
    MissingFieldsError,
    TicketNotFoundError,
    TrackerError,
)
from domain.models import Draft, StatusSet, Ticket, TicketChange
from utils.constants import (
    CHANGE_CREATED,
    CHANGE_DELETED,
    CHANGE_RATED,
    CHANGE_UPDATED,
    RATING_MAX,
    RATING_MIN,
)
from utils.ids import ClockIdGenerator, IdFactory

LOGGER = logging.getLogger(__name__)

TicketListener = Callable[[TicketChange], None]

_MAX_ID_ATTEMPTS = 100


class TicketStore:
    """Authoritative in-memory ticket collection.

    Every mutation goes through ``save``, ``delete`` or ``rate``. Each one
    validates before touching state, so a raised ``TrackerError`` always
    means nothing changed. Subscribers are told about every committed change.
    """

    def __init__(
        self,
        statuses: StatusSet,
        *,
        priorities: Sequence[str] | None = None,
        enforce_rating_state: bool = True,
        id_factory: IdFactory | None = None,
    ) -> None:
        self.statuses = statuses
        self.priorities: tuple[str, ...] = tuple(priorities or ())
        self.enforce_rating_state = enforce_rating_state
        self._id_factory = id_factory or ClockIdGenerator()
        # dicts keep insertion order, and in-place updates keep a ticket's position.
        self._tickets: dict[str, Ticket] = {}
        self._listeners: list[TicketListener] = []

    def __len__(self) -> int:
        return len(self._tickets)

    def list_tickets(self) -> list[Ticket]:
        return [replace(ticket) for ticket in self._tickets.values()]

    def get(self, ticket_id: str) -> Ticket:
        return replace(self._require(ticket_id, operation="get"))

    def subscribe(self, listener: TicketListener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def save(self, draft: Draft, editing_id: str | None = None) -> Ticket:
        title, description = self._validated_text(draft)
        self._validate_choices(draft)

        if editing_id is None:
            ticket = Ticket(
                id=self._next_id(),
                title=title,
                description=description,
                status=draft.status,
                priority=draft.priority,
                rating=None,
            )
            self._tickets[ticket.id] = ticket
            LOGGER.info(
                "Ticket created. id=%s status=%s",
                ticket.id,
                ticket.status,
                extra={"ticket_id": ticket.id, "action": CHANGE_CREATED, "status": ticket.status},
            )
            return self._commit(CHANGE_CREATED, ticket)

        ticket = self._require(editing_id, operation="save")
        ticket.title = title
        ticket.description = description
        ticket.status = draft.status
        ticket.priority = draft.priority
        if not self.statuses.is_terminal(ticket.status):
            ticket.rating = None
        LOGGER.info(
            "Ticket updated. id=%s status=%s rating=%s",
            ticket.id,
            ticket.status,
            ticket.rating,
            extra={"ticket_id": ticket.id, "action": CHANGE_UPDATED, "status": ticket.status},
        )
        return self._commit(CHANGE_UPDATED, ticket)

    def delete(self, ticket_id: str) -> None:
        ticket = self._require(ticket_id, operation="delete")
        del self._tickets[ticket_id]
        LOGGER.info(
            "Ticket deleted. id=%s", ticket_id, extra={"ticket_id": ticket_id, "action": CHANGE_DELETED}
        )
        self._commit(CHANGE_DELETED, ticket)

    def rate(self, ticket_id: str, rating: int) -> Ticket:
        # bool is an int subclass; True must not pass as a one-star rating.
        is_whole = isinstance(rating, int) and not isinstance(rating, bool)
        if not is_whole or not RATING_MIN <= rating <= RATING_MAX:
            raise self._rejected(
                "rate",
                InvalidRatingError(
                    f"Rating must be a whole number between {RATING_MIN} and {RATING_MAX}.",
                    rating=rating,
                ),
            )
        ticket = self._require(ticket_id, operation="rate")
        if self.enforce_rating_state and not self.statuses.is_terminal(ticket.status):
            raise self._rejected(
                "rate",
                InvalidStateError(
                    f"Only {self.statuses.terminal} tickets can be rated.",
                    ticket_id=ticket_id,
                    status=ticket.status,
                ),
            )
        ticket.rating = rating
        LOGGER.info(
            "Ticket rated. id=%s rating=%s",
            ticket_id,
            rating,
            extra={"ticket_id": ticket_id, "action": CHANGE_RATED},
        )
        return self._commit(CHANGE_RATED, ticket)

    def _validated_text(self, draft: Draft) -> tuple[str, str]:
        values: dict[str, str] = {}
        for name in ("title", "description"):
            value = getattr(draft, name)
            if value is None:
                value = ""
            if not isinstance(value, str):
                raise self._rejected(
                    "save",
                    InvalidFieldError(f"The {name} must be text.", field=name, value=value),
                )
            values[name] = value.strip()
        missing = tuple(name for name, value in values.items() if not value)
        if missing:
            raise self._rejected("save", MissingFieldsError(fields=missing))
        return values["title"], values["description"]

    def _validate_choices(self, draft: Draft) -> None:
        if draft.status not in self.statuses:
            raise self._rejected(
                "save",
                InvalidFieldError(
                    f"Unknown status {draft.status!r}. Use: {', '.join(self.statuses.values)}",
                    field="status",
                    value=draft.status,
                ),
            )
        if not self.priorities:
            if draft.priority is not None:
                raise self._rejected(
                    "save",
                    InvalidFieldError(
                        "Priorities are not enabled for this tracker.",
                        field="priority",
                        value=draft.priority,
                    ),
                )
            return
        if draft.priority not in self.priorities:
            raise self._rejected(
                "save",
                InvalidFieldError(
                    f"Invalid priority value. Use: {', '.join(self.priorities)}",
                    field="priority",
                    value=draft.priority,
                ),
            )

    def _require(self, ticket_id: str, *, operation: str) -> Ticket:
        ticket = self._tickets.get(ticket_id)
        if ticket is None:
            raise self._rejected(
                operation,
                TicketNotFoundError(f"Ticket {ticket_id} could not be found.", ticket_id=ticket_id),
            )
        return ticket

    def _next_id(self) -> str:
        for _ in range(_MAX_ID_ATTEMPTS):
            candidate = self._id_factory()
            if candidate not in self._tickets:
                return candidate
        raise RuntimeError(f"Id factory produced {_MAX_ID_ATTEMPTS} colliding ids in a row")

    def _commit(self, action: str, ticket: Ticket) -> Ticket:
        snapshot = replace(ticket)
        change = TicketChange(action=action, ticket=snapshot)
        for listener in list(self._listeners):
            try:
                listener(change)
            except Exception:
                LOGGER.exception("Ticket listener failed. action=%s id=%s", action, ticket.id)
        return replace(snapshot)

    @staticmethod
    def _rejected(operation: str, error: TrackerError) -> TrackerError:
        LOGGER.warning(
            "Ticket %s rejected. kind=%s reason=%s",
            operation,
            error.kind.value if error.kind else None,
            error.user_message,
        )
        return error
