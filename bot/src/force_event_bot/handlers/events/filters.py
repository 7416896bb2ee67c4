from typing import Any, Dict, List, Optional, Sequence

from telegram.ext import ContextTypes

STATE_KEY = "force_event_state"
CACHE_KEY = "force_event_cache"


def _default_panel_state() -> Dict[str, Any]:
    return {
        "category": None,  # None until panel data is loaded; then first category name
        "search_query": "",  # empty means no search
        "announce": True,
        "page": 1,  # screen of event rows, 1-based
        "awaiting_query": False,  # next text message is a search query
    }


def _get_panel_state(context: ContextTypes.DEFAULT_TYPE) -> Dict[str, Any]:
    user_data = context.user_data
    if STATE_KEY not in user_data:
        user_data[STATE_KEY] = _default_panel_state()
    # Backfill newly introduced keys if missing
    for key, value in _default_panel_state().items():
        user_data[STATE_KEY].setdefault(key, value)
    return user_data[STATE_KEY]


def _set_panel_state(context: ContextTypes.DEFAULT_TYPE, **changes: Any) -> Dict[str, Any]:
    state = dict(_get_panel_state(context))
    state.update(changes)
    context.user_data[STATE_KEY] = state
    return state


def _get_cached_data(context: ContextTypes.DEFAULT_TYPE) -> Optional[Dict[str, List[Dict[str, Any]]]]:
    data = context.user_data.get(CACHE_KEY)
    return data if isinstance(data, dict) else None


def _ensure_category(state: Dict[str, Any], categories: Sequence[Dict[str, Any]]) -> Dict[str, Any]:
    """Fall back to the first category when the selected one is gone."""
    names = [c.get("name") for c in categories]
    if state.get("category") in names:
        return state
    return {**state, "category": names[0] if names else None}


def filter_events(
    events: Sequence[Dict[str, Any]],
    category: Optional[str],
    search_query: str = "",
) -> List[Dict[str, Any]]:
    """Pick the events to show.

    Without a search query only events of `category` are kept. With a query,
    category is ignored and events whose name contains the query
    (case-insensitive) are kept; events without a text name are not rejected.
    """
    query = search_query.lower() if isinstance(search_query, str) else ""
    result: List[Dict[str, Any]] = []
    for event in events:
        if not query:
            if event.get("category") != category:
                continue
        else:
            name = event.get("name")
            if isinstance(name, str) and query not in name.lower():
                continue
        result.append(event)
    return result
