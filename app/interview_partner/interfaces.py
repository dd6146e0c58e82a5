"""
Abstractions for pluggable services. Inversion of control: core depends
on interfaces, not concrete services. Enables fakes/mocks and future swaps.

Common protocols:
- LLMClient.chat(messages, settings) -> (reply, meta); system prompts travel
  as the first message
- PromptFactory builds system/instruction text for each collaborator.
- SpeechOutput.speak(text) -> bytes (never raises)

Testing: Use simple fake implementations to test the controllers without
network calls.
"""

from __future__ import annotations
from typing import Protocol
from .models import ConversationState, LLMSettings
from .schemas import QuestionAnswer


class LLMClient(Protocol):
    def chat(
        self,
        messages: list[dict[str, str]],
        settings: LLMSettings,
    ) -> tuple[str, dict]: ...


class PromptFactory(Protocol):
    def greeting(self, *, role: str) -> str: ...

    def closing_prompt(self) -> str: ...

    def fallback_question(self) -> str: ...

    def fallback_reprompt(self) -> str: ...

    def build_follow_up_system(self, *, role: str, state: ConversationState) -> str: ...

    def follow_up_instruction(
        self,
        *,
        previous_question: str,
        user_answer: str,
        role: str,
        state: ConversationState,
    ) -> str: ...

    def build_assessment_system(self) -> str: ...

    def assessment_instruction(
        self, *, role: str, questions_and_answers: list[QuestionAnswer]
    ) -> str: ...

    def build_feedback_system(self) -> str: ...

    def feedback_instruction(
        self, *, transcript: str, role: str, assessment: str
    ) -> str: ...


class SpeechOutput(Protocol):
    def speak(self, text: str) -> bytes: ...
