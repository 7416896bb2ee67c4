import logging

from telegram import Update

from force_event_bot import config

logger = logging.getLogger(__name__)

NOT_ALLOWED_TEXT = "You are not allowed to force events."


def is_admin(user_id: int | None) -> bool:
    return user_id is not None and user_id in config.admin_telegram_ids()


async def ensure_admin(update: Update) -> bool:
    """Reject non-admins with a reply or an alert and return False."""
    user = update.effective_user
    user_id = user.id if user else None
    if is_admin(user_id):
        return True
    chat_id = update.effective_chat.id if update.effective_chat else None
    logger.warning("Force event access denied", extra={"correlation_id": chat_id, "user_id": user_id})
    if update.callback_query is not None:
        await update.callback_query.answer(NOT_ALLOWED_TEXT, show_alert=True)
    elif update.message is not None:
        await update.message.reply_text(NOT_ALLOWED_TEXT)
    return False
