"""Chat responder: multi-turn travel assistant replies over a bounded history."""

import logging

from triponic.config import settings
from triponic.schemas.conversation import Conversation
from triponic.schemas.preference import TravelPreference
from triponic.services.conversation_window import ConversationWindow
from triponic.services.errors import LLMError
from triponic.services.llm_client import LLMClient
from triponic.services.prompt_builder import chat_system_prompt

logger = logging.getLogger(__name__)

FALLBACK_REPLY = (
    "I'm having trouble processing your request right now. "
    "Could you try asking something else?"
)


class ChatResponder:
    """Replies to the latest turn of a conversation.

    Failures never reach the caller; a fixed apology is returned instead.
    """

    def __init__(self, llm: LLMClient, window: ConversationWindow | None = None):
        self.llm = llm
        self.window = window or ConversationWindow(settings.chat_history_limit)

    def build_messages(self, preference: TravelPreference, conversation: Conversation) -> list[dict]:
        messages = [{"role": "system", "content": chat_system_prompt(preference)}]
        messages.extend(m.as_chat() for m in self.window.window(conversation.messages))
        return messages

    async def respond(self, preference: TravelPreference, conversation: Conversation) -> str:
        try:
            reply = await self.llm.complete(
                self.build_messages(preference, conversation),
                model=settings.chat_model,
                temperature=settings.chat_temperature,
                max_tokens=settings.chat_max_tokens,
            )
        except LLMError as e:
            logger.error(f"Chat response failed for conversation {conversation.id}: {e}")
            return FALLBACK_REPLY

        if not reply or not reply.strip():
            logger.warning(f"Empty chat response for conversation {conversation.id}")
            return FALLBACK_REPLY
        return reply.strip()
