"""AI mentor and code review over the Gemini API.

Calls never raise into the caller: a missing key, a transport error or an
empty response all come back as a short placeholder string.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Literal, Optional, Sequence

from hackademy.config import EditorSettings
from hackademy.runtime import telemetry

Role = Literal["user", "model", "system"]

NO_KEY_MESSAGE = "Error: no API key found. Set HACKADEMY_API_KEY or GEMINI_API_KEY."
MENTOR_OFFLINE = "The link to your AI mentor dropped. Check the API key settings."
MENTOR_EMPTY = "Connection unstable, please try again..."
REVIEW_NO_KEY = "API key not configured."
REVIEW_OFFLINE = "Code analysis module offline."
REVIEW_EMPTY = "Code analysis complete."

SYSTEM_INSTRUCTION = (
    "You are a friendly programming mentor helping beginners learn web development."
)

MENTOR_PROMPT = """You are the AI mentor (codename: Oracle) in the game "H5 Hacker Academy".
The player is learning HTML5, Tailwind CSS and React basics.

Current stage: {stage}
Player's current code:
```tsx
{code}
```

Your duties:
1. Answer questions about the code very briefly.
2. If the player is stuck, give a gentle hint but not the full answer unless they ask for it.
3. Stay encouraging with a touch of cyberpunk humour.
4. Explain concepts with simple metaphors.
"""

REVIEW_PROMPT = """Mission: {mission}
Code: {code}

In under 50 words, say whether this code completes the mission and point out one strength.
"""


@dataclass(frozen=True, slots=True)
class ChatMessage:
    role: Role
    content: str


class MentorService:
    """Thin async wrapper over ``google.genai``.

    ``client`` may be injected (tests pass a stub exposing
    ``aio.models.generate_content``); otherwise one is created lazily from the
    configured API key.
    """

    def __init__(
        self,
        settings: Optional[EditorSettings] = None,
        *,
        client: Any = None,
        temperature: float = 0.7,
    ) -> None:
        self.settings = settings or EditorSettings()
        self.model = self.settings.mentor_model
        self.temperature = temperature
        self._client = client
        self.logger = telemetry.get_logger("hackademy.mentor")

    @property
    def configured(self) -> bool:
        return self._client is not None or bool(self.settings.api_key)

    def _get_client(self) -> Any:
        if self._client is None:
            from google import genai

            self._client = genai.Client(api_key=self.settings.api_key)
        return self._client

    async def reply(
        self, history: Sequence[ChatMessage], code: str, stage: str
    ) -> str:
        if not self.configured:
            return NO_KEY_MESSAGE

        from google.genai import types

        contents = [
            types.Content(
                role="user",
                parts=[types.Part(text=MENTOR_PROMPT.format(stage=stage, code=code))],
            )
        ]
        for message in history:
            contents.append(
                types.Content(
                    role="model" if message.role == "model" else "user",
                    parts=[types.Part(text=message.content)],
                )
            )
        config = types.GenerateContentConfig(
            system_instruction=SYSTEM_INSTRUCTION,
            temperature=self.temperature,
        )
        return await self._generate(
            contents, config=config, offline=MENTOR_OFFLINE, empty=MENTOR_EMPTY
        )

    async def review_code(self, code: str, mission: str) -> str:
        if not self.configured:
            return REVIEW_NO_KEY
        prompt = REVIEW_PROMPT.format(mission=mission, code=code)
        return await self._generate(
            prompt, config=None, offline=REVIEW_OFFLINE, empty=REVIEW_EMPTY
        )

    async def _generate(
        self, contents: Any, *, config: Any, offline: str, empty: str
    ) -> str:
        with telemetry.span(
            "mentor::generate",
            logger_name="hackademy.mentor",
            component="mentor",
            metadata={"model": self.model},
        ) as handle:
            try:
                response = await self._get_client().aio.models.generate_content(
                    model=self.model,
                    contents=contents,
                    config=config,
                )
            except Exception as exc:
                handle.fail(f"{type(exc).__name__}: {exc}")
                return offline
        text = getattr(response, "text", None)
        return text or empty


class MentorChat:
    """Conversation with the mentor, seeded with a greeting."""

    GREETING = (
        "Hello, trainee! I'm Oracle, your AI mentor. "
        "Ask me anytime you get stuck on the code!"
    )

    def __init__(self, service: MentorService) -> None:
        self.service = service
        self.messages: list[ChatMessage] = [ChatMessage("model", self.GREETING)]
        self.loading = False

    async def send(self, text: str, code: str, stage: str) -> Optional[str]:
        if not text.strip():
            return None
        self.messages.append(ChatMessage("user", text))
        self.loading = True
        try:
            reply = await self.service.reply(list(self.messages), code, stage)
        finally:
            self.loading = False
        self.messages.append(ChatMessage("model", reply))
        return reply


__all__ = ["ChatMessage", "MentorChat", "MentorService"]
