import pytest

from fakes import FakeLLM, FakeSpeaker


@pytest.fixture
def fake_llm():
    return FakeLLM()


@pytest.fixture
def speaker():
    return FakeSpeaker()
