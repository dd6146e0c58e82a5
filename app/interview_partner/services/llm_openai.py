"""
Purpose: Thin client wrapper around OpenAI.
One place for auth, timeouts, model options, response/usage normalization.

Collaborator calls are not retried: every request carries an explicit
timeout and the SDK's own retry loop is disabled, so a hung or failing call
surfaces quickly as an exception the controller can recover from.

Testing: Mock SDK calls; assert it maps usage and errors correctly.
"""

from __future__ import annotations
import logging

from openai import OpenAI, OpenAIError

from ..models import LLMSettings

logger = logging.getLogger(__name__)


class OpenAILLMClient:
    def __init__(self, api_key: str, *, timeout: float = 30.0):
        self.api_key = api_key
        if not self.api_key:
            raise RuntimeError("Missing OPENAI_API_KEY")
        self.timeout = timeout
        try:
            self.client = OpenAI(api_key=self.api_key, timeout=timeout, max_retries=0)
        except OpenAIError as e:
            raise RuntimeError(f"Failed to initialize OpenAI client: {e}") from e

    def chat(
        self,
        messages: list[dict[str, str]],
        settings: LLMSettings,
    ):
        extra = {}
        if settings.response_format:
            extra["response_format"] = settings.response_format

        cc = self.client.chat.completions.create(
            model=settings.model,
            messages=messages,
            temperature=settings.temperature,
            top_p=settings.top_p,
            max_tokens=settings.max_tokens,
            frequency_penalty=settings.frequency_penalty,
            presence_penalty=settings.presence_penalty,
            **extra,
        )
        text = cc.choices[0].message.content or ""
        usage = getattr(cc, "usage", None)
        tokens_in = getattr(usage, "prompt_tokens", 0) if usage else 0
        tokens_out = getattr(usage, "completion_tokens", 0) if usage else 0
        logger.debug(
            "chat %s: %d tokens in, %d tokens out", cc.model, tokens_in, tokens_out
        )
        return text, {
            "model": cc.model,
            "tokens_in": tokens_in,
            "tokens_out": tokens_out,
            "raw": cc,
        }
