from __future__ import annotations

from dataclasses import dataclass

from utils.constants import STATUS_PRESETS

DRAFT_FIELDS = ("title", "description", "status", "priority")

@dataclass(frozen=True, slots=True)
class StatusSet:
    """Closed, ordered set of ticket statuses.

    ``default`` is what a fresh draft starts with; ``terminal`` is the one
    status at which a ticket may carry a rating.
    """

    values: tuple[str, ...]
    default: str
    terminal: str

    def __post_init__(self) -> None:
        if not self.values:
            raise ValueError("A status set needs at least one status")
        if len(set(self.values)) != len(self.values):
            raise ValueError(f"Duplicate statuses in {self.values!r}")
        if self.default not in self.values:
            raise ValueError(f"Default status {self.default!r} is not one of {self.values!r}")
        if self.terminal not in self.values:
            raise ValueError(f"Terminal status {self.terminal!r} is not one of {self.values!r}")

    def __contains__(self, status: object) -> bool:
        return status in self.values

    def is_terminal(self, status: str) -> bool:
        return status == self.terminal

    @classmethod
    def preset(cls, name: str) -> StatusSet:
        try:
            values = STATUS_PRESETS[name]
        except KeyError:
            raise ValueError(
                f"Unknown status preset {name!r}. Use: {', '.join(STATUS_PRESETS)}"
            ) from None
        return cls(values=values, default=values[0], terminal=values[-1])

@dataclass(slots=True)
class Ticket:
    id: str
    title: str
    description: str
    status: str
    priority: str | None = None
    rating: int | None = None

@dataclass(slots=True)
class Draft:
    title: str = ""
    description: str = ""
    status: str = ""
    priority: str | None = None
    editing_id: str | None = None

@dataclass(frozen=True, slots=True)
class TicketChange:
    action: str
    ticket: Ticket
