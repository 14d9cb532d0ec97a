from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from typing import Any

from core.errors import ErrorKind, MissingFieldsError, TrackerError
from domain.models import Draft, TicketChange
from presentation.cards import TicketCard, make_card, status_colors
from services.form_staging import FormStaging
from services.ticket_store import TicketStore
from utils.constants import CHANGE_DELETED
from utils.i18n import I18N

LOGGER = logging.getLogger(__name__)

ConfirmCallback = Callable[[str, str], bool]


@dataclass(frozen=True, slots=True)
class Notice:
    title: str
    message: str
    kind: ErrorKind | None = None


@dataclass(frozen=True, slots=True)
class EditorView:
    title: str
    draft: Draft


@dataclass(frozen=True, slots=True)
class BoardView:
    header: str
    cards: list[TicketCard] = field(default_factory=list)
    empty_message: str | None = None
    editor: EditorView | None = None


class TicketBoard:
    """Toolkit-neutral view-model over the store and the editor draft.

    A UI binds to ``render()`` and forwards user actions to the methods
    below. The board subscribes to the store, so ``render()`` always
    reflects the latest committed tickets. Deletion asks ``confirm`` first;
    with no callback deletes go through unprompted.
    """

    def __init__(
        self,
        store: TicketStore,
        staging: FormStaging,
        *,
        i18n: I18N,
        confirm: ConfirmCallback | None = None,
        colors: Mapping[str, str] | None = None,
    ) -> None:
        self.store = store
        self.staging = staging
        self.i18n = i18n
        self.confirm = confirm
        self.colors = status_colors(store.statuses, colors)
        self.editor_open = False
        self._view = self._build_view()
        self._unsubscribe = store.subscribe(self._on_change)

    def close(self) -> None:
        self._unsubscribe()

    def render(self) -> BoardView:
        return self._view

    def open_editor(self, ticket_id: str | None = None) -> EditorView | Notice:
        if ticket_id is None:
            self.staging.open_for_create()
        else:
            try:
                ticket = self.store.get(ticket_id)
            except TrackerError as exc:
                return self._error_notice(exc)
            self.staging.open_for_edit(ticket)
        self.editor_open = True
        self._refresh()
        return self._editor_view()

    def close_editor(self) -> None:
        self.staging.discard()
        self.editor_open = False
        self._refresh()

    def edit_field(self, field_name: str, value: Any) -> Draft:
        draft = self.staging.update(field_name, value)
        self._refresh()
        return draft

    def submit(self) -> Notice | None:
        draft = self.staging.draft
        try:
            self.store.save(draft, draft.editing_id)
        except MissingFieldsError as exc:
            return Notice(
                title=self.i18n.t("notice.missing_title"),
                message=self.i18n.t("notice.missing_body"),
                kind=exc.kind,
            )
        except TrackerError as exc:
            return self._error_notice(exc)
        self.close_editor()
        return None

    def request_delete(self, ticket_id: str) -> bool | Notice:
        if self.confirm is not None:
            confirmed = self.confirm(self.i18n.t("delete.title"), self.i18n.t("delete.body"))
            if not confirmed:
                LOGGER.debug("Delete of ticket %s cancelled", ticket_id)
                return False
        try:
            self.store.delete(ticket_id)
        except TrackerError as exc:
            return self._error_notice(exc)
        return True

    def rate(self, ticket_id: str, stars: int) -> Notice | None:
        try:
            self.store.rate(ticket_id, stars)
        except TrackerError as exc:
            return self._error_notice(exc)
        return None

    def _error_notice(self, exc: TrackerError) -> Notice:
        return Notice(title=self.i18n.t("notice.error_title"), message=exc.user_message, kind=exc.kind)

    def _on_change(self, change: TicketChange) -> None:
        if change.action == CHANGE_DELETED and self.staging.editing_id == change.ticket.id:
            LOGGER.info("Ticket %s deleted while open in the editor; closing editor", change.ticket.id)
            self.staging.discard()
            self.editor_open = False
        self._refresh()

    def _refresh(self) -> None:
        self._view = self._build_view()

    def _build_view(self) -> BoardView:
        cards = [make_card(ticket, self.store.statuses, self.colors) for ticket in self.store.list_tickets()]
        return BoardView(
            header=self.i18n.t("board.header"),
            cards=cards,
            empty_message=None if cards else self.i18n.t("board.empty"),
            editor=self._editor_view() if self.editor_open else None,
        )

    def _editor_view(self) -> EditorView:
        title_key = "editor.edit" if self.staging.is_editing else "editor.new"
        return EditorView(title=self.i18n.t(title_key), draft=self.staging.draft)
