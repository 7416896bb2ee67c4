import logging
from typing import Any, Dict, List, Optional, Tuple

from telegram import InlineKeyboardButton, InlineKeyboardMarkup, Update
from telegram.ext import ContextTypes

from force_event_bot.repositories.api_client import fetch_panel_data, force_event
from force_event_bot.utils.nav import build_nav_row

from .access import ensure_admin
from .filters import (
    CACHE_KEY,
    STATE_KEY,
    _ensure_category,
    _get_cached_data,
    _get_panel_state,
    _set_panel_state,
)
from .render import build_confirmation, build_panel, edit_panel_message

logger = logging.getLogger(__name__)

LOAD_ERROR_TEXT = "Failed to load events."
FIRE_ERROR_TEXT = "Failed to fire event."
STALE_EVENT_TEXT = "This event is no longer available."
SEARCH_PROMPT_TEXT = "Send the text to search event names for:"
# Telegram rejects callback answers longer than this
ANSWER_TEXT_LIMIT = 200


def _fired_notice(name: str) -> str:
    text = f"Fired: {name}"
    if len(text) > ANSWER_TEXT_LIMIT:
        text = text[:ANSWER_TEXT_LIMIT - 1] + "…"
    return text


def _chat_id(update: Update) -> Optional[int]:
    return update.effective_chat.id if update.effective_chat else None


def _retry_rows() -> List[List[InlineKeyboardButton]]:
    return [build_nav_row("fevt:open", back_label="🔄 Retry")]


async def _prepare_panel(
    context: ContextTypes.DEFAULT_TYPE,
    refresh: bool = False,
) -> Optional[Tuple[str, List[List[InlineKeyboardButton]]]]:
    """Return panel text and rows, loading data when the cache is empty or a refresh is asked.

    Returns None when the backend could not be reached.
    """
    data = None if refresh else _get_cached_data(context)
    if data is None:
        try:
            data = await fetch_panel_data()
        except Exception:
            logger.exception("Failed to load force event panel data")
            return None
        context.user_data[CACHE_KEY] = data
        logger.info(
            "Force event panel data loaded",
            extra={"categories": len(data["categories"]), "events": len(data["events"])},
        )
    state = _ensure_category(_get_panel_state(context), data["categories"])
    context.user_data[STATE_KEY] = state
    return build_panel(data, state)


async def _render_panel(query, context: ContextTypes.DEFAULT_TYPE, refresh: bool = False) -> None:
    prepared = await _prepare_panel(context, refresh=refresh)
    if prepared is None:
        await edit_panel_message(query, LOAD_ERROR_TEXT, _retry_rows())
        return
    text, rows = prepared
    await edit_panel_message(query, text, rows)


async def send_panel(update: Update, context: ContextTypes.DEFAULT_TYPE, refresh: bool = False) -> None:
    """Send the panel as a new message in reply to `update.message`."""
    prepared = await _prepare_panel(context, refresh=refresh)
    if prepared is None:
        await update.message.reply_text(LOAD_ERROR_TEXT, reply_markup=InlineKeyboardMarkup(_retry_rows()))
        return
    text, rows = prepared
    await update.message.reply_text(text, reply_markup=InlineKeyboardMarkup(rows))


def _callback_arg(data: Optional[str]) -> Optional[int]:
    try:
        return int((data or "").split(":")[-1])
    except ValueError:
        return None


def _cached_event(context: ContextTypes.DEFAULT_TYPE, index: Optional[int]) -> Optional[Dict[str, Any]]:
    data = _get_cached_data(context)
    if data is None or index is None:
        return None
    events = data.get("events") or []
    if not 0 <= index < len(events):
        return None
    event = events[index]
    if not isinstance(event.get("type"), str) or not event.get("type"):
        return None
    return event


async def force_event_command(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    if not await ensure_admin(update):
        return
    logger.info("Force event panel requested", extra={"correlation_id": _chat_id(update)})
    _set_panel_state(context, awaiting_query=False, page=1)
    await send_panel(update, context, refresh=True)


async def force_event_open(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    if not await ensure_admin(update):
        return
    query = update.callback_query
    await query.answer()
    _set_panel_state(context, awaiting_query=False)
    await _render_panel(query, context, refresh=True)


async def force_event_back(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    if not await ensure_admin(update):
        return
    query = update.callback_query
    await query.answer()
    _set_panel_state(context, awaiting_query=False)
    await _render_panel(query, context)


async def force_event_category(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    if not await ensure_admin(update):
        return
    query = update.callback_query
    await query.answer()
    index = _callback_arg(query.data)
    data = _get_cached_data(context)
    categories = (data or {}).get("categories") or []
    if index is not None and 0 <= index < len(categories):
        category = categories[index].get("name")
        logger.info(
            "Force event category selected",
            extra={"correlation_id": _chat_id(update), "category": category},
        )
        _set_panel_state(context, category=category, search_query="", page=1)
    await _render_panel(query, context)


async def force_event_page(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    if not await ensure_admin(update):
        return
    query = update.callback_query
    await query.answer()
    page = _callback_arg(query.data) or 1
    _set_panel_state(context, page=max(1, page))
    await _render_panel(query, context)


async def force_event_toggle_announce(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    if not await ensure_admin(update):
        return
    query = update.callback_query
    await query.answer()
    state = _get_panel_state(context)
    _set_panel_state(context, announce=not bool(state.get("announce")))
    await _render_panel(query, context)


async def force_event_search_prompt(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    if not await ensure_admin(update):
        return
    query = update.callback_query
    await query.answer()
    _set_panel_state(context, awaiting_query=True)
    logger.info("Force event search prompt shown", extra={"correlation_id": _chat_id(update)})
    await edit_panel_message(query, SEARCH_PROMPT_TEXT, [build_nav_row("fevt:back")])


async def force_event_clear_search(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    if not await ensure_admin(update):
        return
    query = update.callback_query
    await query.answer()
    _set_panel_state(context, search_query="", awaiting_query=False, page=1)
    await _render_panel(query, context)


async def force_event_pick(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    if not await ensure_admin(update):
        return
    query = update.callback_query
    index = _callback_arg(query.data)
    event = _cached_event(context, index)
    if event is None:
        await query.answer(STALE_EVENT_TEXT, show_alert=True)
        await _render_panel(query, context, refresh=True)
        return
    await query.answer()
    state = _get_panel_state(context)
    text, rows = build_confirmation(event, index, bool(state.get("announce")))
    await edit_panel_message(query, text, rows, parse_mode="HTML")


async def force_event_fire(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    if not await ensure_admin(update):
        return
    query = update.callback_query
    index = _callback_arg(query.data)
    event = _cached_event(context, index)
    if event is None:
        await query.answer(STALE_EVENT_TEXT, show_alert=True)
        await _render_panel(query, context, refresh=True)
        return
    announce = bool(_get_panel_state(context).get("announce"))
    user_id = update.effective_user.id if update.effective_user else None
    try:
        await force_event(event["type"], announce)
    except Exception:
        logger.exception(
            "Force event dispatch failed",
            extra={"correlation_id": _chat_id(update), "event_type": event["type"]},
        )
        await query.answer(FIRE_ERROR_TEXT, show_alert=True)
        return
    logger.info(
        "Force event dispatched",
        extra={
            "correlation_id": _chat_id(update),
            "user_id": user_id,
            "event_type": event["type"],
            "announce": announce,
        },
    )
    name = event.get("name") if isinstance(event.get("name"), str) else event["type"]
    await query.answer(_fired_notice(name))
    await _render_panel(query, context)


async def force_event_close(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    if not await ensure_admin(update):
        return
    query = update.callback_query
    await query.answer()
    _set_panel_state(context, awaiting_query=False)
    context.user_data.pop(CACHE_KEY, None)
    await query.edit_message_text("Force event panel closed.")
