from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from core.config import AppConfig, ConfigError, load_config, resolve_priorities, resolve_status_set
from core.logging import configure_logging
from presentation.board import ConfirmCallback, TicketBoard
from services.form_staging import FormStaging
from services.ticket_store import TicketStore
from utils.i18n import I18N
from utils.ids import IdFactory, build_id_factory

LOGGER = logging.getLogger(__name__)

ROOT_DIR = Path(__file__).resolve().parent.parent


@dataclass(slots=True)
class TrackerApp:
    config: AppConfig
    store: TicketStore
    staging: FormStaging
    board: TicketBoard


def build_tracker(
    config: AppConfig | None = None,
    *,
    confirm: ConfirmCallback | None = None,
    id_factory: IdFactory | None = None,
) -> TrackerApp:
    config = config or AppConfig()
    statuses = resolve_status_set(config.tracker)
    priorities = resolve_priorities(config.tracker)
    if id_factory is None:
        try:
            id_factory = build_id_factory(config.tracker.id_strategy)
        except ValueError as exc:
            raise ConfigError(str(exc)) from exc

    store = TicketStore(
        statuses,
        priorities=priorities,
        enforce_rating_state=config.tracker.enforce_rating_state,
        id_factory=id_factory,
    )
    staging = FormStaging(
        default_status=statuses.default,
        default_priority=config.tracker.default_priority if priorities else None,
    )
    locales_dir = (
        Path(config.ui.locales_directory)
        if config.ui.locales_directory
        else ROOT_DIR / "config" / "locales"
    )
    board = TicketBoard(
        store,
        staging,
        i18n=I18N(locales_dir, config.ui.locale),
        confirm=confirm,
        colors=config.ui.status_colors,
    )
    LOGGER.info(
        "Tracker ready. statuses=%s terminal=%s priorities=%s enforce_rating_state=%s",
        ", ".join(statuses.values),
        statuses.terminal,
        ", ".join(priorities) or "off",
        config.tracker.enforce_rating_state,
    )
    return TrackerApp(config=config, store=store, staging=staging, board=board)


def build_tracker_from_file(
    config_path: Path | None = None,
    *,
    confirm: ConfirmCallback | None = None,
) -> TrackerApp:
    config = load_config(config_path or ROOT_DIR / "config" / "config.yaml")
    configure_logging(config.logging)
    return build_tracker(config, confirm=confirm)
