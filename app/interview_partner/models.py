"""
Canonical data shapes, shared truth for typing between layers.

Typical contents:
- Speaker / ConversationState enums.
- InterviewEntry (speaker, text, is_question) and the owned SessionState.
- LLMSettings (model, temperature, top_p, max_tokens).

Collaborator request/response payloads that need validation live in schemas.py.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Optional
from enum import Enum


MAX_QUESTIONS = 5


class Speaker(str, Enum):
    INTERVIEWER = "interviewer"
    CANDIDATE = "candidate"


class ConversationState(str, Enum):
    QUESTIONING = "questioning"
    CLOSING = "closing"
    TERMINATED = "terminated"


@dataclass(frozen=True)
class InterviewEntry:
    speaker: Speaker
    text: str
    is_question: Optional[bool] = None

    @property
    def counts_as_question(self) -> bool:
        return self.speaker == Speaker.INTERVIEWER and bool(self.is_question)


@dataclass
class SessionState:
    role: str = ""
    transcript: list[InterviewEntry] = field(default_factory=list)
    phase: ConversationState = ConversationState.QUESTIONING

    # turn-taking flags
    speaking: bool = False
    pending: bool = False
    started: bool = False
    handed_off: bool = False

    answered_count: int = 0
    audio_queue: list[bytes] = field(default_factory=list)


@dataclass(frozen=True)
class TurnResult:
    """What one candidate answer produced."""

    reply: Optional[InterviewEntry] = None
    terminated: bool = False
    notice: Optional[str] = None


@dataclass
class LLMSettings:
    model: str
    temperature: float = 0.7
    top_p: float = 1.0
    max_tokens: int = 512
    frequency_penalty: float = 0.0
    presence_penalty: float = 0.0
    response_format: Optional[dict] = None


@dataclass(frozen=True)
class Price:
    input_per_1M: float
    output_per_1M: float
