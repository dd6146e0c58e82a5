import pytest

from interview_partner.config import load_settings

ENV_VARS = [
    "OPENAI_API_KEY",
    "OPENAI_MODEL",
    "OPENAI_TIMEOUT",
    "LLM_TEMPERATURE",
    "VOICE_ENABLED",
    "LOG_LEVEL",
    "LOG_FILE",
]


@pytest.fixture
def clean_env(monkeypatch):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


def test_defaults(clean_env):
    s = load_settings()

    assert s.openai_api_key is None
    assert s.model == "gpt-4o-mini"
    assert s.request_timeout == 30.0
    assert s.voice_enabled is True
    assert s.log_level == "INFO"
    assert s.log_file is None


def test_overrides(clean_env):
    clean_env.setenv("OPENAI_API_KEY", "sk-test")
    clean_env.setenv("OPENAI_TIMEOUT", "12.5")
    clean_env.setenv("VOICE_ENABLED", "off")
    clean_env.setenv("LOG_LEVEL", "debug")

    s = load_settings()

    assert s.openai_api_key == "sk-test"
    assert s.request_timeout == 12.5
    assert s.voice_enabled is False
    assert s.log_level == "DEBUG"


@pytest.mark.parametrize("value", ["0", "-3", "soon"])
def test_invalid_timeout_is_rejected(clean_env, value):
    clean_env.setenv("OPENAI_TIMEOUT", value)

    with pytest.raises(ValueError, match="OPENAI_TIMEOUT"):
        load_settings()
