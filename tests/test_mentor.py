from __future__ import annotations

import asyncio
from types import SimpleNamespace
from typing import Any, Dict, List

from hackademy.config import EditorSettings
from hackademy.mentor import ChatMessage, MentorChat, MentorService
from hackademy.mentor.service import (
    MENTOR_EMPTY,
    NO_KEY_MESSAGE,
    REVIEW_NO_KEY,
    REVIEW_OFFLINE,
)


class StubModels:
    def __init__(self, text: str | None = "ok", error: Exception | None = None) -> None:
        self.text = text
        self.error = error
        self.calls: List[Dict[str, Any]] = []

    async def generate_content(self, **kwargs: Any) -> SimpleNamespace:
        self.calls.append(kwargs)
        if self.error is not None:
            raise self.error
        return SimpleNamespace(text=self.text)


def make_client(models: StubModels) -> SimpleNamespace:
    return SimpleNamespace(aio=SimpleNamespace(models=models))


def test_missing_key_returns_placeholders() -> None:
    service = MentorService(EditorSettings(api_key=""))

    assert service.configured is False
    assert asyncio.run(service.reply([], "", "INTRO")) == NO_KEY_MESSAGE
    assert asyncio.run(service.review_code("", "mission")) == REVIEW_NO_KEY


def test_review_uses_configured_model() -> None:
    models = StubModels(text="Looks good.")
    service = MentorService(
        EditorSettings(mentor_model="test-model"), client=make_client(models)
    )

    reply = asyncio.run(service.review_code("<h1>x</h1>", "Add a heading"))

    assert reply == "Looks good."
    assert models.calls[0]["model"] == "test-model"
    assert "Add a heading" in models.calls[0]["contents"]


def test_transport_error_becomes_placeholder() -> None:
    models = StubModels(error=RuntimeError("quota"))
    service = MentorService(client=make_client(models))

    assert asyncio.run(service.review_code("code", "mission")) == REVIEW_OFFLINE


def test_chat_appends_history_and_ignores_blank_input() -> None:
    models = StubModels(text=None)
    chat = MentorChat(MentorService(client=make_client(models)))

    assert asyncio.run(chat.send("   ", "", "INTRO")) is None
    reply = asyncio.run(chat.send("what is a tag?", "<div>", "INTRO"))

    assert reply == MENTOR_EMPTY
    assert chat.loading is False
    assert chat.messages[0].role == "model"
    assert chat.messages[1:] == [
        ChatMessage("user", "what is a tag?"),
        ChatMessage("model", MENTOR_EMPTY),
    ]
    assert len(models.calls) == 1
