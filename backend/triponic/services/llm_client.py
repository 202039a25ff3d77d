"""LLM client: single chat-completion call against OpenAI or Anthropic."""

import logging

from openai import AsyncOpenAI
import anthropic

from triponic.config import settings
from triponic.services.errors import LLMError

logger = logging.getLogger(__name__)


class LLMClient:
    """Async chat-completion client for the configured provider.

    Exactly one request is made per ``complete`` call. Retrying is left to
    the caller.
    """

    def __init__(self, provider: str | None = None):
        self.provider = provider or settings.llm_provider
        self._openai = None
        self._anthropic = None

        if self.provider == "openai" and settings.openai_api_key:
            self._openai = AsyncOpenAI(
                api_key=settings.openai_api_key,
                base_url=settings.openai_base_url,
            )
        elif self.provider == "anthropic" and settings.anthropic_api_key:
            self._anthropic = anthropic.AsyncAnthropic(api_key=settings.anthropic_api_key)

    async def complete(
        self,
        messages: list[dict],
        *,
        model: str,
        temperature: float = 0.7,
        max_tokens: int | None = None,
        json_mode: bool = False,
    ) -> str:
        """Get a completion for an ordered list of role-tagged messages.

        Args:
            messages: ``{"role", "content"}`` dicts; system messages included.
            model: Model identifier (OpenAI naming; Anthropic uses its own default).
            temperature: Sampling temperature
            max_tokens: Max output tokens, provider default when None
            json_mode: If True, request a strict JSON object

        Returns:
            Raw text response, or "" when the provider returned no content.

        Raises:
            LLMError if the provider is not configured or the call fails.
        """
        if self._openai:
            return await self._complete_openai(messages, model, temperature, max_tokens, json_mode)
        if self._anthropic:
            return await self._complete_anthropic(messages, temperature, max_tokens, json_mode)
        raise LLMError(f"LLM provider '{self.provider}' is not configured")

    async def _complete_openai(
        self,
        messages: list[dict],
        model: str,
        temperature: float,
        max_tokens: int | None,
        json_mode: bool,
    ) -> str:
        kwargs: dict = {
            "model": model,
            "temperature": temperature,
            "messages": messages,
        }
        if max_tokens is not None:
            kwargs["max_tokens"] = max_tokens
        if json_mode:
            kwargs["response_format"] = {"type": "json_object"}
        try:
            response = await self._openai.chat.completions.create(**kwargs)
        except Exception as e:
            logger.warning(f"OpenAI request failed: {e}")
            raise LLMError(f"OpenAI: {e}") from e

        if not response.choices:
            return ""
        return (response.choices[0].message.content or "").strip()

    async def _complete_anthropic(
        self,
        messages: list[dict],
        temperature: float,
        max_tokens: int | None,
        json_mode: bool,
    ) -> str:
        # Anthropic takes the system prompt separately
        system = "\n\n".join(m["content"] for m in messages if m["role"] == "system")
        chat_messages = [m for m in messages if m["role"] != "system"]
        if not chat_messages:
            chat_messages = [{"role": "user", "content": system}]
            system = ""
        if json_mode:
            system += "\n\nRespond ONLY with a valid JSON object, no markdown, no preamble."

        try:
            response = await self._anthropic.messages.create(
                model=settings.anthropic_model,
                max_tokens=max_tokens or 4096,
                temperature=temperature,
                system=system.strip(),
                messages=chat_messages,
            )
        except Exception as e:
            logger.warning(f"Anthropic request failed: {e}")
            raise LLMError(f"Anthropic: {e}") from e

        if not response.content:
            return ""
        return response.content[0].text.strip()

    async def close(self):
        if self._openai:
            await self._openai.close()
        if self._anthropic:
            await self._anthropic.close()


def strip_code_fences(raw: str) -> str:
    """Remove markdown code fences some models wrap around JSON."""
    if raw.startswith("```"):
        lines = raw.split("\n")
        lines = [l for l in lines if not l.strip().startswith("```")]
        raw = "\n".join(lines).strip()
    return raw
