import logging
import os

from telegram.ext import (
    Application,
    ApplicationBuilder,
    CallbackQueryHandler,
    CommandHandler,
    MessageHandler,
    filters,
)

from force_event_bot.handlers.events import (
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
)
from force_event_bot.handlers.search import handle_search_text
from force_event_bot.logging_config import configure_logging


async def _on_error(update, context) -> None:
    """Global error handler: log full traceback without raising."""
    log = logging.getLogger("force_event_bot.errors")
    err = getattr(context, "error", None)
    exc_info = (type(err), err, err.__traceback__) if err else True
    log.error("Unhandled error in update handler", exc_info=exc_info)


def build_application(token: str) -> Application:
    application = ApplicationBuilder().token(token).build()

    # Register global error handler
    application.add_error_handler(_on_error)

    application.add_handler(CommandHandler(["events", "start"], force_event_command))
    application.add_handler(MessageHandler(filters.TEXT & ~filters.COMMAND, handle_search_text))

    application.add_handler(CallbackQueryHandler(force_event_open, pattern=r"^fevt:open$"))
    application.add_handler(CallbackQueryHandler(force_event_back, pattern=r"^fevt:back$"))
    application.add_handler(CallbackQueryHandler(force_event_category, pattern=r"^fevt:cat:\d+$"))
    application.add_handler(CallbackQueryHandler(force_event_page, pattern=r"^fevt:page:\d+$"))
    application.add_handler(CallbackQueryHandler(force_event_toggle_announce, pattern=r"^fevt:announce$"))
    application.add_handler(CallbackQueryHandler(force_event_search_prompt, pattern=r"^fevt:search$"))
    application.add_handler(CallbackQueryHandler(force_event_clear_search, pattern=r"^fevt:clear$"))
    application.add_handler(CallbackQueryHandler(force_event_pick, pattern=r"^fevt:pick:\d+$"))
    application.add_handler(CallbackQueryHandler(force_event_fire, pattern=r"^fevt:fire:\d+$"))
    application.add_handler(CallbackQueryHandler(force_event_close, pattern=r"^fevt:close$"))
    return application


def main() -> None:
    token = os.getenv("TELEGRAM_BOT_TOKEN")
    if not token:
        raise RuntimeError("TELEGRAM_BOT_TOKEN is not set")

    configure_logging(service_name=os.getenv("LOG_SERVICE_NAME", "force-event-bot"))

    build_application(token).run_polling()


if __name__ == "__main__":
    main()
