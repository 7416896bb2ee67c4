"""Test factories for building minimal Telegram-like update objects.

These are lightweight stubs that mimic only the attributes our handlers read.
"""

from __future__ import annotations

import types
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Optional


@dataclass
class DummyUser:
    id: int
    is_bot: bool = False
    first_name: str = "Test"
    last_name: str = ""
    username: Optional[str] = None
    full_name: Optional[str] = None
    language_code: Optional[str] = None


@dataclass
class DummyChat:
    id: int
    type: str = "private"


class DummyMessage:
    def __init__(self, chat: DummyChat, text: str = "") -> None:
        self.chat = chat
        self.chat_id = chat.id
        self.text = text
        self.date = datetime.now()
        # Capture last reply for assertions
        self.last_text: Optional[str] = None
        self.last_kwargs: dict[str, Any] = {}
        # Minimal message id emulation
        self.message_id: int = 1

    async def reply_text(self, text: str, **kwargs: Any) -> "DummyMessage":
        self.last_text = text
        self.last_kwargs = kwargs
        # Return self to mimic telegram.Message with message_id
        self.message_id += 1
        return self


class DummyCallbackQuery:
    def __init__(self, data: str, from_user: DummyUser, message: DummyMessage) -> None:
        self.data = data
        self.from_user = from_user
        self.message = message
        # Every answer() call, in order: (text, show_alert)
        self.answers: list[tuple[Optional[str], bool]] = []
        self.edited_text: Optional[str] = None
        self.edited_kwargs: dict[str, Any] = {}

    async def answer(self, text: Optional[str] = None, show_alert: bool = False, **kwargs: Any) -> bool:
        self.answers.append((text, show_alert))
        return True

    async def edit_message_text(self, text: str, **kwargs: Any) -> DummyMessage:
        self.edited_text = text
        self.edited_kwargs = kwargs
        return self.message


class DummyUpdate:
    def __init__(
        self,
        user: Optional[DummyUser],
        chat: DummyChat,
        message: Optional[DummyMessage],
        callback_query: Optional[DummyCallbackQuery] = None,
    ) -> None:
        self._effective_user = user
        self._effective_chat = chat
        self.message = message
        self.callback_query = callback_query

    @property
    def effective_user(self) -> Optional[DummyUser]:
        return self._effective_user

    @property
    def effective_chat(self) -> DummyChat:
        return self._effective_chat


class DummyContext(types.SimpleNamespace):
    def __init__(self, user_data: Optional[dict[str, Any]] = None, **kwargs: Any) -> None:
        super().__init__(user_data=user_data if user_data is not None else {}, **kwargs)


def _make_user(user_id: int) -> DummyUser:
    return DummyUser(
        id=user_id,
        is_bot=False,
        first_name="Test",
        username="tester",
        full_name="Test User",
        language_code="en",
    )


def make_message_update(chat_id: int = 100, user_id: int = 200, text: str = "") -> DummyUpdate:
    chat = DummyChat(id=chat_id)
    message = DummyMessage(chat=chat, text=text)
    return DummyUpdate(user=_make_user(user_id), chat=chat, message=message)


def make_callback_update(data: str, chat_id: int = 100, user_id: int = 200) -> DummyUpdate:
    user = _make_user(user_id)
    chat = DummyChat(id=chat_id)
    message = DummyMessage(chat=chat)
    query = DummyCallbackQuery(data=data, from_user=user, message=message)
    return DummyUpdate(user=user, chat=chat, message=None, callback_query=query)


def keyboard_texts(markup: Any) -> list[list[str]]:
    """Button labels of an InlineKeyboardMarkup, row by row."""
    return [[button.text for button in row] for row in markup.inline_keyboard]


def keyboard_callbacks(markup: Any) -> list[list[str]]:
    return [[button.callback_data for button in row] for row in markup.inline_keyboard]
