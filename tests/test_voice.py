import base64
from types import SimpleNamespace

import pytest

from interview_partner.services.speech import Speaker, tts_bytes
from interview_partner.services.voice import (
    ListenSession,
    autoplay_html,
    detect_capabilities,
    transcribe_wav_bytes,
)


class FakeStream:
    def __init__(self, data):
        self.data = data

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        return False

    def read(self):
        return self.data


class FakeSpeechAPI:
    def __init__(self, data=b"mp3", error=None):
        self.calls = []
        self.data = data
        self.error = error
        self.with_streaming_response = self

    def create(self, **kwargs):
        self.calls.append(kwargs)
        if self.error:
            raise self.error
        return FakeStream(self.data)


def make_sdk(speech=None, text="  hello there  "):
    transcriptions = SimpleNamespace(
        create=lambda model, file: SimpleNamespace(text=text)
    )
    audio = SimpleNamespace(speech=speech or FakeSpeechAPI(), transcriptions=transcriptions)
    return SimpleNamespace(audio=audio)


def test_interim_results_overwrite_and_finals_accumulate():
    session = ListenSession()
    session.start()

    session.feed("I")
    session.feed("I have")
    assert session.buffer == "I have"

    session.feed("I have led ", final=True)
    session.feed("two teams")
    assert session.buffer == "I have led two teams"


def test_start_while_active_is_a_no_op():
    session = ListenSession()
    assert session.start()
    session.feed("kept ", final=True)

    assert not session.start()
    assert session.buffer == "kept "


def test_stop_without_commit_discards():
    session = ListenSession()
    session.start()
    session.feed("never mind", final=True)

    assert session.stop(commit=False) is None
    assert not session.active
    assert session.buffer == ""


def test_feed_is_ignored_when_inactive():
    session = ListenSession()
    session.feed("stray", final=True)

    assert session.buffer == ""
    assert session.stop() is None


@pytest.mark.parametrize("code", ["no-speech", "aborted"])
def test_soft_stop_codes_commit(code):
    session = ListenSession()
    session.start()
    session.feed("partial answer", final=True)

    assert session.fail(code) == ("partial answer", None)


def test_hard_error_yields_notice():
    session = ListenSession()
    session.start()
    session.feed("lost")

    answer, notice = session.fail("not-allowed")

    assert answer is None
    assert notice == "Speech recognition error: not-allowed"
    assert session.last_error == "not-allowed"
    assert not session.active


def test_capabilities_follow_client_and_toggle():
    full = detect_capabilities(make_sdk())
    assert full.recognition and full.synthesis and not full.degraded

    off = detect_capabilities(make_sdk(), voice_enabled=False)
    assert off.degraded

    none = detect_capabilities(SimpleNamespace())
    assert not none.recognition and not none.synthesis


def test_capabilities_unwrap_llm_client():
    wrapper = SimpleNamespace(client=make_sdk())

    assert not detect_capabilities(wrapper).degraded


def test_transcribe_strips_text():
    assert transcribe_wav_bytes(b"RIFF", make_sdk()) == "hello there"


def test_tts_truncates_long_text():
    speech = FakeSpeechAPI()

    audio = tts_bytes("x" * 50, make_sdk(speech), max_chars=10)

    assert audio == b"mp3"
    sent = speech.calls[0]
    assert len(sent["input"]) == 10
    assert sent["response_format"] == "mp3"


def test_tts_skips_blank_text():
    speech = FakeSpeechAPI()

    assert tts_bytes("   ", make_sdk(speech)) == b""
    assert speech.calls == []


def test_speaker_returns_empty_bytes_on_failure(caplog):
    speech = FakeSpeechAPI(error=RuntimeError("tts down"))
    speaker = Speaker(make_sdk(speech), voice="verse")

    assert speaker.speak("Hello") == b""
    assert "Speech synthesis failed" in caplog.text


def test_disabled_speaker_is_silent():
    speech = FakeSpeechAPI()
    speaker = Speaker(make_sdk(speech), enabled=False)

    assert speaker.speak("Hello") == b""
    assert speech.calls == []


def test_autoplay_html_embeds_clip_and_pauses_others():
    html = autoplay_html(b"abc")

    assert base64.b64encode(b"abc").decode() in html
    assert 'class="interviewer-voice"' in html
    assert "pause()" in html
    assert autoplay_html(b"") == ""


def test_capabilities_require_listed_models():
    ids = ["gpt-4o-mini", "whisper-1"]

    caps = detect_capabilities(
        make_sdk(), available_models=ids, stt_model="whisper-1", tts_model="gpt-4o-mini-tts"
    )

    assert caps.recognition
    assert not caps.synthesis
    assert caps.degraded


def test_capabilities_with_all_models_listed():
    ids = ["whisper-1", "gpt-4o-mini-tts"]

    caps = detect_capabilities(make_sdk(), available_models=ids)

    assert not caps.degraded
