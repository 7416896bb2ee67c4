# Public API re-exports
from .handlers import (
    force_event_back,
    force_event_category,
    force_event_clear_search,
    force_event_close,
    force_event_command,
    force_event_fire,
    force_event_open,
    force_event_page,
    force_event_pick,
    force_event_search_prompt,
    force_event_toggle_announce,
    send_panel,
)

__all__ = [
    "force_event_command",
    "force_event_open",
    "force_event_back",
    "force_event_category",
    "force_event_page",
    "force_event_toggle_announce",
    "force_event_search_prompt",
    "force_event_clear_search",
    "force_event_pick",
    "force_event_fire",
    "force_event_close",
    "send_panel",
]
