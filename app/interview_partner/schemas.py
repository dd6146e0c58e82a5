"""
Typed request/response payloads for the three AI collaborators.

Inputs are validated before the call, outputs after it: the model must answer
with a JSON object matching one of the *Output shapes below, otherwise the call
counts as failed.
"""

from __future__ import annotations
from typing import List

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .models import ConversationState

MAX_SUMMARY_WORDS = 2


class FollowUpInput(BaseModel):
    previous_question: str = Field(min_length=1)
    user_answer: str
    job_role: str
    interview_state: ConversationState = ConversationState.QUESTIONING


class FollowUpOutput(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    follow_up_question: str = Field(min_length=1)


class QuestionAnswer(BaseModel):
    question: str
    answer: str


class AssessmentInput(BaseModel):
    role: str
    questions_and_answers: List[QuestionAnswer]


class AssessmentScores(BaseModel):
    model_config = ConfigDict(frozen=True)

    communication: float = Field(ge=0, le=10)
    technical: float = Field(ge=0, le=10)
    overall: float = Field(ge=0, le=10)


class PerformanceAssessment(BaseModel):
    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    summary: str = Field(min_length=1)
    communication_skills: str
    technical_knowledge: str
    overall_performance: str
    areas_for_improvement: List[str] = Field(default_factory=list)
    scores: AssessmentScores

    @field_validator("summary")
    @classmethod
    def _short_label(cls, v: str) -> str:
        # a rating label such as "Good" or "Needs Improvement", not a sentence
        if len(v.split()) > MAX_SUMMARY_WORDS:
            raise ValueError("summary must be a short rating label")
        return v

    @property
    def is_positive(self) -> bool:
        return self.summary.strip().lower() in {"excellent", "good"}


class FeedbackInput(BaseModel):
    interview_transcript: str
    selected_role: str
    performance_assessment: str


class FeedbackOutput(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    personalized_feedback: str = Field(min_length=1)
