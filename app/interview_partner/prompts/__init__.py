"""Facade over the prompt modules; the controllers only see DefaultPromptFactory."""

from __future__ import annotations
from interview_partner.models import ConversationState
from interview_partner.schemas import QuestionAnswer
from . import interview as _interview
from . import assessment as _assessment
from . import feedback as _feedback


class DefaultPromptFactory:
    # INTERVIEW
    def greeting(self, *, role: str) -> str:
        return _interview.greeting(role=role)

    def closing_prompt(self) -> str:
        return _interview.CLOSING_PROMPT

    def fallback_question(self) -> str:
        return _interview.FALLBACK_QUESTION

    def fallback_reprompt(self) -> str:
        return _interview.FALLBACK_REPROMPT

    def build_follow_up_system(self, *, role: str, state: ConversationState) -> str:
        return _interview.build_follow_up_system(role=role, state=state)

    def follow_up_instruction(
        self,
        *,
        previous_question: str,
        user_answer: str,
        role: str,
        state: ConversationState,
    ) -> str:
        return _interview.follow_up_instruction(
            previous_question=previous_question,
            user_answer=user_answer,
            role=role,
            state=state,
        )

    # ASSESSMENT
    def build_assessment_system(self) -> str:
        return _assessment.build_assessment_system()

    def assessment_instruction(
        self, *, role: str, questions_and_answers: list[QuestionAnswer]
    ) -> str:
        return _assessment.assessment_instruction(
            role=role, questions_and_answers=questions_and_answers
        )

    # FEEDBACK / COACHING
    def build_feedback_system(self) -> str:
        return _feedback.build_feedback_system()

    def feedback_instruction(
        self, *, transcript: str, role: str, assessment: str
    ) -> str:
        return _feedback.feedback_instruction(
            transcript=transcript, role=role, assessment=assessment
        )
