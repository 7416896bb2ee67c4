from telegram import InlineKeyboardButton


def build_nav_row(back_callback: str, back_label: str = "⬅️ Back", close_callback: str = "fevt:close") -> list[InlineKeyboardButton]:
    """Build a standardized navigation row [Back, Close]."""
    return [
        InlineKeyboardButton(back_label, callback_data=back_callback),
        InlineKeyboardButton("✖️ Close", callback_data=close_callback),
    ]
