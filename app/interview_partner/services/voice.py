"""
Purpose: speech-to-text integration. Captures spoken answers.

ListenSession is the answer buffer behind the microphone button: recognition
results stream into it (interim results overwrite each other, final results
accumulate) and stop(commit=True) hands the finished text to the controller.
"""

from __future__ import annotations
import base64
import io
import logging
import uuid
from dataclasses import dataclass
from typing import Any, Iterable, Optional

logger = logging.getLogger(__name__)

# engine signals that end a listen session normally
SOFT_STOP_CODES = frozenset({"no-speech", "aborted"})


@dataclass(frozen=True)
class SpeechCapabilities:
    recognition: bool
    synthesis: bool

    @property
    def degraded(self) -> bool:
        return not (self.recognition and self.synthesis)


def detect_capabilities(
    client: Any,
    *,
    available_models: Optional[Iterable[str]] = None,
    stt_model: str = "whisper-1",
    tts_model: str = "gpt-4o-mini-tts",
    voice_enabled: bool = True,
) -> SpeechCapabilities:
    """
    Check once whether the client can transcribe and synthesize audio.
    `available_models` are the model ids the account can use (from
    models.list()); when given, the configured STT/TTS models must be among them.
    """
    sdk = getattr(client, "client", client)
    audio = getattr(sdk, "audio", None) if voice_enabled else None
    recognition = audio is not None and hasattr(audio, "transcriptions")
    synthesis = audio is not None and hasattr(audio, "speech")

    if available_models is not None:
        ids = set(available_models)
        recognition = recognition and stt_model in ids
        synthesis = synthesis and tts_model in ids

    caps = SpeechCapabilities(recognition=recognition, synthesis=synthesis)
    if voice_enabled and caps.degraded:
        logger.warning(
            "Voice degraded: recognition=%s (%s), synthesis=%s (%s)",
            recognition, stt_model, synthesis, tts_model,
        )
    return caps


class ListenSession:
    def __init__(self) -> None:
        self.active = False
        self._final: list[str] = []
        self._interim = ""
        self.last_error: Optional[str] = None

    @property
    def buffer(self) -> str:
        """Answer text collected so far; stop(commit=True) hands it over."""
        return "".join(self._final) + self._interim

    def start(self) -> bool:
        """Open a session. Starting while one is active is a no-op."""
        if self.active:
            return False
        self.active = True
        self._final = []
        self._interim = ""
        self.last_error = None
        return True

    def feed(self, text: str, *, final: bool = False) -> None:
        if not self.active:
            return
        if final:
            self._final.append(text or "")
            self._interim = ""
        else:
            self._interim = text or ""

    def stop(self, *, commit: bool = True) -> Optional[str]:
        """Close the session; return the answer text when committing."""
        if not self.active:
            return None
        self.active = False
        text = self.buffer.strip()
        self._final = []
        self._interim = ""
        if commit and text:
            return text
        return None

    def fail(self, code: str) -> tuple[Optional[str], Optional[str]]:
        """
        Handle an engine error. Returns (answer, notice): soft stops commit the
        buffer, anything else discards it and yields a notice for the user.
        """
        if code in SOFT_STOP_CODES:
            return self.stop(commit=True), None
        logger.warning("Speech recognition error: %s", code)
        self.last_error = code
        self.stop(commit=False)
        return None, f"Speech recognition error: {code}"


def transcribe_wav_bytes(
    wav_bytes: bytes, client: Any, *, model: str = "whisper-1"
) -> str:
    """
    Transcribe WAV audio bytes to text using the OpenAI client."""
    sdk = getattr(client, "client", client)
    with io.BytesIO(wav_bytes) as buf:
        buf.name = "input.wav"
        resp = sdk.audio.transcriptions.create(model=model, file=buf)
    return (resp.text or "").strip()


def autoplay_html(mp3_bytes: bytes) -> str:
    """Return an HTML snippet that auto-plays MP3 bytes, pausing any earlier clip."""
    if not mp3_bytes:
        return ""
    b64 = base64.b64encode(mp3_bytes).decode("ascii")
    el_id = f"tts_{uuid.uuid4().hex}"
    return f"""
    <audio id="{el_id}" class="interviewer-voice" autoplay playsinline preload="auto" style="display:none">
      <source src="data:audio/mpeg;base64,{b64}" type="audio/mpeg">
    </audio>
    <script>
      (function() {{
        document.querySelectorAll("audio.interviewer-voice").forEach(function(el) {{
          if (el.id !== "{el_id}") {{ el.pause(); }}
        }});
        const a = document.getElementById("{el_id}");
        if (a) {{
          a.play().catch(() => {{
            // Autoplay blocked; the transcript still shows the question.
          }});
        }}
      }})();
    </script>
    """
