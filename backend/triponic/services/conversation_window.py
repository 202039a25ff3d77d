"""Bounds how much prior dialogue is sent to the language model."""

from collections.abc import Sequence

from triponic.schemas.conversation import Message

DEFAULT_WINDOW = 10


class ConversationWindow:
    """Keeps only the most recent ``limit`` messages, in original order."""

    def __init__(self, limit: int = DEFAULT_WINDOW):
        if limit < 0:
            raise ValueError("limit must be non-negative")
        self.limit = limit

    def window(self, messages: Sequence[Message] | None) -> list[Message]:
        if not messages or self.limit == 0:
            return []
        return list(messages[-self.limit:])


def render_transcript(messages: Sequence[Message]) -> str:
    return "\n".join(f"{m.role.value.upper()}: {m.content}" for m in messages)
