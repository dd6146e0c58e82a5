"""
Purpose: text-to-speech integration. Reads interviewer turns aloud.

Speaking is best-effort: Speaker.speak() always returns (empty bytes on any
failure) so the conversation can move on to listening even when the audio
channel is broken.
"""

from __future__ import annotations
import logging
from typing import Any

logger = logging.getLogger(__name__)


def tts_bytes(
    text: str,
    client: Any,
    *,
    voice: str = "alloy",
    model: str = "gpt-4o-mini-tts",
    max_chars: int = 1200,
) -> bytes:
    """
    Return raw MP3 bytes for `text`. `client` is an OpenAI SDK client or an
    object exposing one as `.client`.
    """
    safe = (text or "").strip()
    if not safe:
        return b""
    if len(safe) > max_chars:
        safe = safe[: max_chars - 1].rstrip() + "…"

    sdk = getattr(client, "client", client)
    with sdk.audio.speech.with_streaming_response.create(
        model=model, voice=voice, input=safe, response_format="mp3"
    ) as resp:
        return resp.read()


class Speaker:
    def __init__(
        self,
        client: Any,
        *,
        voice: str = "alloy",
        model: str = "gpt-4o-mini-tts",
        enabled: bool = True,
    ):
        self.client = client
        self.voice = voice
        self.model = model
        self.enabled = enabled

    def speak(self, text: str) -> bytes:
        """Synthesize `text`; returns b"" when disabled or on failure."""
        if not self.enabled or not (text or "").strip():
            return b""
        try:
            return tts_bytes(text, self.client, voice=self.voice, model=self.model)
        except Exception:
            logger.exception("Speech synthesis failed; continuing without audio")
            return b""
