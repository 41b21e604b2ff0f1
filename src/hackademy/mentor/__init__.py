"""AI mentor chat and code review, isolated from the edit loop."""

from .service import ChatMessage, MentorChat, MentorService

__all__ = ["ChatMessage", "MentorChat", "MentorService"]
