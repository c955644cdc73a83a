"""Provider gateway: the single place that talks to the completion API.

``ProviderGateway.generate_reply`` never raises for provider-side problems.
A missing key, an empty completion or any failed call all resolve to the
fallback reply plus metadata describing what happened, so a slow or broken
upstream can only degrade a chat reply, never fail the request.
"""
from __future__ import annotations

import asyncio
import time
from typing import Any, Dict, Literal, Optional, Sequence

import structlog
from openai import AsyncOpenAI
from pydantic import BaseModel, ConfigDict, Field

from core.settings import DEFAULT_MODEL, Settings
from llm.errors import ProviderErrorCode, classify_provider_error
from llm.history import ChatTurn
from llm.prompt_assembler import build_messages

logger = structlog.get_logger("llm.gateway")

FALLBACK_REPLY = "Sorry, I'm having trouble right now. Please try again in a moment."
PROVIDER = "openai"
TEMPERATURE = 0.3


class ReplyMeta(BaseModel):
    """Secret-free description of how a reply was produced."""

    model_config = ConfigDict(populate_by_name=True)

    provider: Literal["openai"] = PROVIDER
    model: str
    used_fallback: bool = Field(alias="usedFallback")
    error_code: Optional[str] = Field(default=None, alias="errorCode")

    def to_metadata(self) -> Dict[str, Any]:
        """JSON shape persisted on outbound messages; errorCode only when set."""
        return self.model_dump(by_alias=True, exclude_none=True)


class GeneratedReply(BaseModel):
    reply: str
    meta: ReplyMeta


class ProviderGateway:
    """Wraps the OpenAI chat-completions call with limits and fallbacks."""

    def __init__(
        self,
        *,
        api_key: Optional[str],
        model: str = DEFAULT_MODEL,
        timeout_ms: int = 15_000,
        max_output_tokens: int = 250,
        history_limit: int = 20,
        client: Optional[Any] = None,
    ) -> None:
        self.api_key = (api_key or "").strip() or None
        self.model = (model or "").strip() or DEFAULT_MODEL
        self.timeout_ms = timeout_ms
        self.max_output_tokens = max_output_tokens
        self.history_limit = history_limit
        self._client = client

    @classmethod
    def from_settings(cls, settings: Settings) -> "ProviderGateway":
        return cls(
            api_key=settings.OPENAI.api_key(),
            model=settings.OPENAI.OPENAI_MODEL,
            timeout_ms=settings.LLM.LLM_TIMEOUT_MS,
            max_output_tokens=settings.LLM.LLM_MAX_OUTPUT_TOKENS,
            history_limit=settings.LLM.LLM_HISTORY_LIMIT,
        )

    @property
    def timeout_seconds(self) -> float:
        return self.timeout_ms / 1000

    def _get_client(self) -> Any:
        """Build the SDK client on first use; retries are left to the caller."""
        if self._client is None:
            self._client = AsyncOpenAI(
                api_key=self.api_key,
                timeout=self.timeout_seconds,
                max_retries=0,
            )
        return self._client

    def _fallback(self, code: ProviderErrorCode) -> GeneratedReply:
        return GeneratedReply(
            reply=FALLBACK_REPLY,
            meta=ReplyMeta(model=self.model, used_fallback=True, error_code=code.value),
        )

    async def generate_reply(self, history: Sequence[ChatTurn]) -> GeneratedReply:
        if not self.api_key:
            logger.info("llm.reply.fallback", error_code=ProviderErrorCode.MISSING_API_KEY.value)
            return self._fallback(ProviderErrorCode.MISSING_API_KEY)

        messages = build_messages(history=history, history_limit=self.history_limit)
        started = time.perf_counter()
        try:
            completion = await asyncio.wait_for(
                self._get_client().chat.completions.create(
                    model=self.model,
                    messages=messages,
                    temperature=TEMPERATURE,
                    max_tokens=self.max_output_tokens,
                ),
                timeout=self.timeout_seconds,
            )
        except Exception as e:
            code = classify_provider_error(e)
            logger.warning(
                "llm.reply.fallback",
                error_code=code.value,
                error_type=type(e).__name__,
                model=self.model,
                latency_ms=int((time.perf_counter() - started) * 1000),
            )
            return self._fallback(code)

        reply = _completion_text(completion)
        if not reply:
            logger.warning("llm.reply.fallback", error_code=ProviderErrorCode.EMPTY_RESPONSE.value, model=self.model)
            return self._fallback(ProviderErrorCode.EMPTY_RESPONSE)

        logger.info(
            "llm.reply.generated",
            model=self.model,
            history_turns=len(messages) - 2,
            latency_ms=int((time.perf_counter() - started) * 1000),
        )
        return GeneratedReply(
            reply=reply,
            meta=ReplyMeta(model=self.model, used_fallback=False),
        )


def _completion_text(completion: Any) -> str:
    choices = getattr(completion, "choices", None) or []
    if not choices:
        return ""
    message = getattr(choices[0], "message", None)
    content = getattr(message, "content", None)
    return content.strip() if isinstance(content, str) else ""
