from types import SimpleNamespace

import pytest

from interview_partner.models import LLMSettings
from interview_partner.services.llm_openai import OpenAILLMClient


class FakeCompletions:
    def __init__(self):
        self.kwargs = None

    def create(self, **kwargs):
        self.kwargs = kwargs
        return SimpleNamespace(
            model="gpt-4o-mini-2024",
            choices=[SimpleNamespace(message=SimpleNamespace(content='{"a": 1}'))],
            usage=SimpleNamespace(prompt_tokens=42, completion_tokens=7),
        )


def make_client():
    client = OpenAILLMClient("sk-test", timeout=5)
    completions = FakeCompletions()
    client.client = SimpleNamespace(chat=SimpleNamespace(completions=completions))
    return client, completions


def test_missing_key_is_an_error():
    with pytest.raises(RuntimeError):
        OpenAILLMClient("")


def test_sdk_gets_timeout_and_no_retries():
    client = OpenAILLMClient("sk-test", timeout=5)

    assert client.client.timeout == 5
    assert client.client.max_retries == 0


def test_chat_maps_text_and_usage():
    client, completions = make_client()
    settings = LLMSettings(model="gpt-4o-mini", response_format={"type": "json_object"})

    messages = [
        {"role": "system", "content": "be brief"},
        {"role": "user", "content": "hi"},
    ]

    text, meta = client.chat(messages, settings)

    assert text == '{"a": 1}'
    assert meta["tokens_in"] == 42
    assert meta["tokens_out"] == 7
    assert meta["model"] == "gpt-4o-mini-2024"
    assert completions.kwargs["messages"] == messages
    assert completions.kwargs["response_format"] == {"type": "json_object"}


def test_response_format_omitted_when_unset():
    client, completions = make_client()

    client.chat([{"role": "user", "content": "hi"}], LLMSettings(model="gpt-4o"))

    assert "response_format" not in completions.kwargs
