import html
from typing import Any, Dict, List, Tuple

from telegram import InlineKeyboardButton, InlineKeyboardMarkup
from telegram.error import BadRequest

from force_event_bot.utils.nav import build_nav_row
from force_event_bot.utils.pagination import (
    CATEGORY_PAGE_ITEMS,
    EVENT_PAGE_ITEMS,
    EVENT_PAGE_MAXCHARS,
    EVENT_ROWS_PER_SCREEN,
    chunk,
    page_count,
    paginate,
    paginate_by_chars,
)

from .filters import filter_events

CUSTOMIZATION_NOTE = " Includes admin customization."


def _event_label(event: Dict[str, Any]) -> str:
    name = event.get("name")
    label = name if isinstance(name, str) and name else "<no name>"
    if event.get("has_customization"):
        label += " ⚙️"
    return label


def event_tooltip(event: Dict[str, Any]) -> str:
    description = event.get("description")
    text = description if isinstance(description, str) else ""
    if event.get("has_customization"):
        text += CUSTOMIZATION_NOTE
    return text


def _panel_title(state: Dict[str, Any]) -> str:
    if state.get("search_query"):
        return "Searching..."
    category = state.get("category")
    return f"{category} Events" if category else "Events"


def _category_rows(categories: List[Dict[str, Any]], selected: Any) -> List[List[InlineKeyboardButton]]:
    rows: List[List[InlineKeyboardButton]] = []
    indexed = list(enumerate(categories))
    for tab_row in chunk(indexed, CATEGORY_PAGE_ITEMS):
        row = []
        for i, cat in tab_row:
            name = str(cat.get("name") or "-")
            prefix = "✅ " if cat.get("name") == selected else ""
            row.append(InlineKeyboardButton(prefix + name, callback_data=f"fevt:cat:{i}"))
        rows.append(row)
    return rows


def _options_row(state: Dict[str, Any]) -> List[InlineKeyboardButton]:
    if state.get("search_query"):
        search_button = InlineKeyboardButton("❌ Clear search", callback_data="fevt:clear")
    else:
        search_button = InlineKeyboardButton("🔍 Search...", callback_data="fevt:search")
    announce_mark = "☑️" if state.get("announce") else "⬜"
    return [
        search_button,
        InlineKeyboardButton(f"{announce_mark} Announce", callback_data="fevt:announce"),
    ]


def build_panel(data: Dict[str, List[Dict[str, Any]]], state: Dict[str, Any]) -> Tuple[str, List[List[InlineKeyboardButton]]]:
    """Lay out the force event panel for the given data and selection state.

    Returns the message text and keyboard rows. Event rows come from the
    constrained paginator; only one screen of them is included, with arrow
    buttons to move between screens.
    """
    categories = data.get("categories") or []
    events = data.get("events") or []
    positions = {id(e): i for i, e in enumerate(events)}

    rows: List[List[InlineKeyboardButton]] = _category_rows(categories, state.get("category"))

    shown = filter_events(events, state.get("category"), state.get("search_query") or "")
    event_rows = paginate_by_chars(shown, EVENT_PAGE_ITEMS, EVENT_PAGE_MAXCHARS)
    total_screens = page_count(len(event_rows), EVENT_ROWS_PER_SCREEN)
    page = min(max(1, int(state.get("page") or 1)), total_screens)

    for event_row in paginate(event_rows, page, EVENT_ROWS_PER_SCREEN):
        rows.append([
            InlineKeyboardButton(_event_label(e), callback_data=f"fevt:pick:{positions[id(e)]}")
            for e in event_row
        ])

    nav: List[InlineKeyboardButton] = []
    if page > 1:
        nav.append(InlineKeyboardButton("⬅️", callback_data=f"fevt:page:{page-1}"))
    if page < total_screens:
        nav.append(InlineKeyboardButton("➡️", callback_data=f"fevt:page:{page+1}"))
    if nav:
        rows.append(nav)

    rows.append(_options_row(state))
    rows.append(build_nav_row("fevt:open", back_label="🔄 Refresh"))

    title = _panel_title(state)
    query = state.get("search_query")
    if query:
        title += f"\nQuery: {query}"
    if not shown:
        title += "\nNo events found."
    elif total_screens > 1:
        title += f" (p. {page}/{total_screens})"
    return title, rows


def build_confirmation(event: Dict[str, Any], index: int, announce: bool) -> Tuple[str, List[List[InlineKeyboardButton]]]:
    name = html.escape(_event_label(event))
    tooltip = html.escape(event_tooltip(event))
    announce_text = "yes" if announce else "no"
    text = (
        f"<b>Event</b>: {name}\n"
        f"<b>Description</b>: {tooltip or '-'}\n"
        f"<b>Announce</b>: {announce_text}"
    )
    rows = [
        [InlineKeyboardButton("🔥 Fire", callback_data=f"fevt:fire:{index}")],
        build_nav_row("fevt:back"),
    ]
    return text, rows


async def edit_panel_message(query, text: str, rows: List[List[InlineKeyboardButton]], parse_mode: str | None = None) -> None:
    try:
        await query.edit_message_text(text, reply_markup=InlineKeyboardMarkup(rows), parse_mode=parse_mode)
    except BadRequest as e:
        # Re-rendering an unchanged panel is harmless
        if "Message is not modified" not in str(e):
            raise
