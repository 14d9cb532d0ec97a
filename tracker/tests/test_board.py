from __future__ import annotations

from itertools import count
from pathlib import Path

import pytest

from core.errors import ErrorKind
from domain.models import Draft, StatusSet
from presentation.board import Notice, TicketBoard
from presentation.cards import star_row, status_colors
from services.form_staging import FormStaging
from services.ticket_store import TicketStore
from utils.i18n import I18N


def _board(confirm=None, **store_kwargs) -> TicketBoard:
    counter = count(1)
    statuses = StatusSet.preset("support")
    store = TicketStore(statuses, id_factory=lambda: str(next(counter)), **store_kwargs)
    staging = FormStaging(default_status=statuses.default)
    return TicketBoard(store, staging, i18n=I18N(None, "en-US"), confirm=confirm)


def _create(board: TicketBoard, title: str, status: str = "Created") -> str:
    board.open_editor()
    board.edit_field("title", title)
    board.edit_field("description", f"{title} details")
    board.edit_field("status", status)
    assert board.submit() is None
    return board.render().cards[-1].id


def test_empty_board_shows_placeholder() -> None:
    view = _board().render()

    assert view.cards == []
    assert view.empty_message == "No tickets yet"
    assert view.editor is None


def test_create_flow_updates_view_and_closes_editor() -> None:
    board = _board()

    editor = board.open_editor()
    assert editor.title == "New Ticket"
    assert editor.draft.status == "Created"

    board.edit_field("title", "Login Issue")
    board.edit_field("description", "Cannot log in")
    assert board.submit() is None

    view = board.render()
    assert view.editor is None
    assert view.empty_message is None
    assert [card.title for card in view.cards] == ["Login Issue"]
    assert view.cards[0].badge_color == "#3B82F6"
    assert view.cards[0].show_rating is False


def test_submit_with_missing_fields_keeps_editor_open() -> None:
    board = _board()
    board.open_editor()
    board.edit_field("title", "Only a title")

    notice = board.submit()

    assert notice is not None
    assert notice.title == "Missing Info"
    assert notice.message == "Please fill all fields"
    assert notice.kind is ErrorKind.MISSING_FIELDS
    view = board.render()
    assert view.editor is not None
    assert view.editor.draft.title == "Only a title"
    assert view.cards == []


def test_edit_flow_uses_edit_title_and_updates_card() -> None:
    board = _board()
    ticket_id = _create(board, "Printer")

    editor = board.open_editor(ticket_id)
    assert editor.title == "Edit Ticket"
    assert editor.draft.title == "Printer"

    board.edit_field("status", "Completed")
    assert board.submit() is None

    card = board.render().cards[0]
    assert card.status == "Completed"
    assert card.badge_color == "#10B981"
    assert card.stars == (False,) * 5


def test_rating_renders_stars_on_completed_tickets() -> None:
    board = _board()
    ticket_id = _create(board, "VPN", status="Completed")

    assert board.rate(ticket_id, 4) is None

    card = board.render().cards[0]
    assert card.rating == 4
    assert card.star_text == "★★★★☆"


def test_rating_open_ticket_returns_error_notice() -> None:
    board = _board()
    ticket_id = _create(board, "VPN", status="Under Assistance")

    notice = board.rate(ticket_id, 4)

    assert notice is not None
    assert notice.title == "Error"
    assert notice.kind is ErrorKind.INVALID_STATE
    assert board.render().cards[0].badge_color == "#F59E0B"


def test_delete_requires_confirmation() -> None:
    prompts: list[tuple[str, str]] = []
    answers = iter([False, True])

    def confirm(title: str, message: str) -> bool:
        prompts.append((title, message))
        return next(answers)

    board = _board(confirm=confirm)
    ticket_id = _create(board, "Keyboard")

    assert board.request_delete(ticket_id) is False
    assert len(board.render().cards) == 1

    assert board.request_delete(ticket_id) is True
    assert board.render().cards == []
    assert prompts == [("Delete", "Are you sure?")] * 2


def test_deleting_ticket_under_edit_closes_editor() -> None:
    board = _board()
    ticket_id = _create(board, "Monitor")
    board.open_editor(ticket_id)

    board.request_delete(ticket_id)

    assert board.render().editor is None
    assert board.staging.is_editing is False


def test_opening_missing_ticket_returns_error_notice() -> None:
    board = _board()

    notice = board.open_editor("404")

    assert isinstance(notice, Notice)
    assert notice.kind is ErrorKind.NOT_FOUND
    assert notice.message == "Ticket 404 could not be found."
    assert board.render().editor is None
    assert board.staging.is_editing is False


def test_deleting_missing_ticket_returns_error_notice() -> None:
    prompts: list[str] = []

    def confirm(title: str, message: str) -> bool:
        prompts.append(title)
        return True

    board = _board(confirm=confirm)
    _create(board, "Keyboard")

    notice = board.request_delete("404")

    assert isinstance(notice, Notice)
    assert notice.title == "Error"
    assert notice.kind is ErrorKind.NOT_FOUND
    assert prompts == ["Delete"]
    assert len(board.render().cards) == 1


@pytest.mark.parametrize(("field_name", "value"), [("title", 42), ("description", 3.5)])
def test_submit_with_non_text_field_returns_error_notice(field_name: str, value: object) -> None:
    board = _board()
    board.open_editor()
    board.edit_field("title", "Login Issue")
    board.edit_field("description", "Cannot log in")
    board.edit_field(field_name, value)

    notice = board.submit()

    assert notice is not None
    assert notice.kind is ErrorKind.INVALID_FIELD
    assert board.render().editor is not None
    assert board.render().cards == []


def test_close_stops_listening_to_store() -> None:
    board = _board()
    board.close()

    board.store.save(Draft(title="a", description="b", status="Created"))

    assert board.render().cards == []


def test_locale_file_overrides_defaults(tmp_path: Path) -> None:
    (tmp_path / "de-DE.json").write_text('{"board.empty": "Noch keine Tickets"}', encoding="utf-8")
    i18n = I18N(tmp_path, "de-DE")

    assert i18n.t("board.empty") == "Noch keine Tickets"
    assert i18n.t("editor.new") == "New Ticket"
    assert i18n.t("unknown.key") == "unknown.key"


def test_status_colors_follow_palette_and_overrides() -> None:
    statuses = StatusSet.preset("helpdesk")

    assert status_colors(statuses) == {
        "Open": "#3B82F6",
        "In Progress": "#F59E0B",
        "Resolved": "#10B981",
    }
    assert status_colors(statuses, {"Open": "#000000", "Bogus": "#FFFFFF"})["Open"] == "#000000"
    assert star_row(None) == (False,) * 5


def test_locale_lookup_falls_back_through_default_locale(tmp_path: Path) -> None:
    (tmp_path / "en-GB.json").write_text('{"editor.new": "New ticket, please"}', encoding="utf-8")
    (tmp_path / "cy-GB.json").write_text('["not", "a", "catalog"]', encoding="utf-8")
    i18n = I18N(tmp_path, "en-GB")

    assert i18n.t("editor.new", locale="fr-FR") == "New ticket, please"
    assert i18n.t("editor.new", locale="cy-GB") == "New ticket, please"
    assert i18n.t("board.empty", locale="fr-FR") == "No tickets yet"
