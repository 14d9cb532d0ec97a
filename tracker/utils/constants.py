from __future__ import annotations

STATUS_PRESETS: dict[str, tuple[str, ...]] = {
    "support": ("Created", "Under Assistance", "Completed"),
    "helpdesk": ("Open", "In Progress", "Resolved"),
}
DEFAULT_STATUS_PRESET = "support"

PRIORITY_LEVELS = ("Low", "Medium", "High")
DEFAULT_PRIORITY = "Medium"

RATING_MIN = 1
RATING_MAX = 5

ID_STRATEGIES = ("clock", "uuid")

CHANGE_CREATED = "created"
CHANGE_UPDATED = "updated"
CHANGE_DELETED = "deleted"
CHANGE_RATED = "rated"

# Badge colours: non-terminal statuses cycle through the palette in order.
STATUS_PALETTE = ("#3B82F6", "#F59E0B")
TERMINAL_STATUS_COLOR = "#10B981"
