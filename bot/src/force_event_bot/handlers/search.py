import logging

from telegram import Update
from telegram.ext import ContextTypes

from force_event_bot.handlers.events import send_panel
from force_event_bot.handlers.events.access import ensure_admin
from force_event_bot.handlers.events.filters import _get_panel_state, _set_panel_state

logger = logging.getLogger(__name__)

IDLE_HINT_TEXT = "Use /events to open the force event panel."
EMPTY_QUERY_TEXT = "Search query is empty, send some text or press Back."


async def handle_search_text(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Take a plain text message as the event search query when the panel asked for one."""
    if not await ensure_admin(update):
        return
    chat_id = update.effective_chat.id if update.effective_chat else None
    state = _get_panel_state(context)
    if not state.get("awaiting_query"):
        logger.info("Text outside of search flow", extra={"correlation_id": chat_id})
        await update.message.reply_text(IDLE_HINT_TEXT)
        return

    query_text = (update.message.text or "").strip()
    if not query_text:
        logger.warning("Empty search query", extra={"correlation_id": chat_id})
        await update.message.reply_text(EMPTY_QUERY_TEXT)
        return

    logger.info("Force event search", extra={"correlation_id": chat_id, "q": query_text})
    _set_panel_state(context, search_query=query_text, awaiting_query=False, page=1)
    await send_panel(update, context)
