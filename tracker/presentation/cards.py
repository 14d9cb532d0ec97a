from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass

from domain.models import StatusSet, Ticket
from utils.constants import RATING_MAX, STATUS_PALETTE, TERMINAL_STATUS_COLOR


@dataclass(frozen=True, slots=True)
class TicketCard:
    id: str
    title: str
    description: str
    status: str
    badge_color: str
    priority: str | None
    rating: int | None
    # One flag per star, filled up to the rating; empty when the ticket cannot be rated.
    stars: tuple[bool, ...] = ()

    @property
    def show_rating(self) -> bool:
        return bool(self.stars)

    @property
    def star_text(self) -> str:
        return render_stars(self.stars)


def status_colors(statuses: StatusSet, overrides: Mapping[str, str] | None = None) -> dict[str, str]:
    colors: dict[str, str] = {}
    index = 0
    for status in statuses.values:
        if statuses.is_terminal(status):
            colors[status] = TERMINAL_STATUS_COLOR
            continue
        colors[status] = STATUS_PALETTE[index % len(STATUS_PALETTE)]
        index += 1
    if overrides:
        colors.update({status: color for status, color in overrides.items() if status in statuses})
    return colors


def star_row(rating: int | None) -> tuple[bool, ...]:
    filled = rating or 0
    return tuple(star <= filled for star in range(1, RATING_MAX + 1))


def render_stars(stars: tuple[bool, ...]) -> str:
    return "".join("★" if filled else "☆" for filled in stars)


def make_card(ticket: Ticket, statuses: StatusSet, colors: Mapping[str, str]) -> TicketCard:
    return TicketCard(
        id=ticket.id,
        title=ticket.title,
        description=ticket.description,
        status=ticket.status,
        badge_color=colors.get(ticket.status, TERMINAL_STATUS_COLOR),
        priority=ticket.priority,
        rating=ticket.rating,
        stars=star_row(ticket.rating) if statuses.is_terminal(ticket.status) else (),
    )
