from __future__ import annotations

import asyncio
import logging
from typing import Any

import openai
from openai import AsyncOpenAI

from news_curator.config import Config
from news_curator.curation.errors import AgentError, CurationTimeoutError
from news_curator.models import LLMApiUsed

logger = logging.getLogger(__name__)

WEB_SEARCH_TOOL = {"type": "web_search_preview"}


class AgentClient:
    """News agent backed by an OpenAI-compatible endpoint.

    Prefers the Responses API with the hosted web search tool and falls back
    to plain Chat Completions when the endpoint does not support it. Every
    call is bounded by ``config.agent_timeout``.
    """

    def __init__(self, config: Config) -> None:
        api_key = config.api_key_value()
        if not api_key:
            raise AgentError("missing_api_key")
        self.config = config
        self.client = AsyncOpenAI(
            base_url=config.base_url,
            api_key=api_key,
            timeout=config.agent_timeout,
            max_retries=0,
        )
        self.api_used: LLMApiUsed | None = None

    @staticmethod
    def _responses_text(response: Any) -> str:
        output_text = getattr(response, "output_text", None)
        if output_text:
            return output_text

        output = getattr(response, "output", None) or []
        parts: list[str] = []
        for item in output:
            content = getattr(item, "content", None) or []
            for part in content:
                text = getattr(part, "text", None)
                if text:
                    parts.append(text)
        return "\n".join(parts).strip()

    @staticmethod
    def _chat_text(response: Any) -> str:
        choices = getattr(response, "choices", None) or []
        if not choices:
            return ""
        message = getattr(choices[0], "message", None)
        if message is None:
            return ""
        content = getattr(message, "content", "")
        if content is None:
            return ""
        if isinstance(content, str):
            return content
        if isinstance(content, list):
            chunks: list[str] = []
            for chunk in content:
                text = getattr(chunk, "text", None)
                if text:
                    chunks.append(text)
            return "\n".join(chunks).strip()
        return str(content)

    @staticmethod
    def _should_fallback(exc: Exception) -> bool:
        status_code = getattr(exc, "status_code", None)
        if status_code in (404, 405):
            return True

        message = str(exc).lower()
        return "not supported" in message or "unsupported" in message

    async def _call_responses(self, instructions: str, prompt: str) -> str:
        kwargs: dict[str, Any] = {
            "model": self.config.model,
            "instructions": instructions,
            "input": prompt,
            "temperature": self.config.temperature,
            "max_output_tokens": self.config.max_output_tokens,
        }
        if self.config.web_search:
            kwargs["tools"] = [WEB_SEARCH_TOOL]
        response = await self.client.responses.create(**kwargs)
        self.api_used = LLMApiUsed.RESPONSES
        return self._responses_text(response)

    async def _call_chat(self, instructions: str, prompt: str) -> str:
        response = await self.client.chat.completions.create(
            model=self.config.model,
            messages=[
                {"role": "system", "content": instructions},
                {"role": "user", "content": prompt},
            ],
            temperature=self.config.temperature,
            max_tokens=self.config.max_output_tokens,
        )
        self.api_used = LLMApiUsed.CHAT_COMPLETIONS
        return self._chat_text(response)

    async def _call_with_fallback(self, instructions: str, prompt: str) -> str:
        if self.api_used == LLMApiUsed.CHAT_COMPLETIONS:
            return await self._call_chat(instructions, prompt)
        if self.api_used == LLMApiUsed.RESPONSES:
            return await self._call_responses(instructions, prompt)

        try:
            return await self._call_responses(instructions, prompt)
        except Exception as exc:  # noqa: BLE001
            if not self._should_fallback(exc):
                raise
            logger.info("responses api unavailable, falling back to chat completions: %s", exc)
            return await self._call_chat(instructions, prompt)

    async def run(self, instructions: str, prompt: str) -> str:
        """Return the agent's raw final output text."""
        timeout = self.config.agent_timeout
        try:
            raw_text = await asyncio.wait_for(
                self._call_with_fallback(instructions, prompt),
                timeout=timeout,
            )
        except (asyncio.TimeoutError, openai.APITimeoutError) as exc:
            raise CurationTimeoutError(timeout) from exc
        except openai.OpenAIError as exc:
            raise AgentError(f"agent_request_error:{exc}") from exc

        if not raw_text or not raw_text.strip():
            raise AgentError("agent_empty_output")
        return raw_text
