"""
Controller for the post-interview feedback: performance assessment first,
then coaching written from that assessment.
"""

from __future__ import annotations
import logging
from dataclasses import dataclass
from typing import Iterable, Optional

from .interfaces import LLMClient, PromptFactory
from .models import InterviewEntry, LLMSettings, Speaker
from .prompts import DefaultPromptFactory
from .prompts.common import render_transcript
from .schemas import (
    AssessmentInput,
    FeedbackInput,
    PerformanceAssessment,
    QuestionAnswer,
)
from .services.assessment import assess_performance
from .services.coaching import provide_feedback
from .services.pricing import Usage
from .services.security import DefaultSecurity

logger = logging.getLogger(__name__)


class FeedbackError(RuntimeError):
    pass


@dataclass(frozen=True)
class FeedbackReport:
    assessment: PerformanceAssessment
    feedback: str


def pair_questions_and_answers(
    transcript: Iterable[InterviewEntry],
) -> list[QuestionAnswer]:
    """Pair every candidate answer with the closest interviewer turn before it."""
    pairs: list[QuestionAnswer] = []
    last_question: Optional[str] = None
    for entry in transcript:
        if entry.speaker == Speaker.INTERVIEWER:
            last_question = entry.text
        else:
            pairs.append(QuestionAnswer(question=last_question or "N/A", answer=entry.text))
    return pairs


class FeedbackController:
    def __init__(
        self,
        llm: LLMClient,
        *,
        settings: Optional[LLMSettings] = None,
    ):
        self.llm: LLMClient = llm
        self.prompts: PromptFactory = DefaultPromptFactory()
        self.security = DefaultSecurity()
        self.settings = settings or LLMSettings(model="gpt-4o-mini", temperature=0.3)
        self.usage = Usage()

    def reset(self) -> None:
        self.usage = Usage()

    def run(self, role: str, transcript: Iterable[InterviewEntry]) -> FeedbackReport:
        """Assess the interview and write the coaching note."""
        entries = tuple(transcript)
        pairs = [
            QuestionAnswer(question=p.question, answer=self.security.redact_pii(p.answer)[0])
            for p in pair_questions_and_answers(entries)
        ]
        try:
            assessment, meta = assess_performance(
                llm=self.llm,
                prompts=self.prompts,
                settings=self.settings,
                request=AssessmentInput(role=role, questions_and_answers=pairs),
            )
            self.usage.add(meta, self.settings.model)

            transcript_text = self.security.redact_pii(render_transcript(entries))[0]
            feedback, meta = provide_feedback(
                llm=self.llm,
                prompts=self.prompts,
                settings=self.settings,
                request=FeedbackInput(
                    interview_transcript=transcript_text,
                    selected_role=role,
                    performance_assessment=assessment.model_dump_json(),
                ),
            )
            self.usage.add(meta, self.settings.model)
        except Exception as e:
            logger.exception("Feedback generation failed for role %r", role)
            raise FeedbackError(
                "Failed to generate your interview feedback. Please try again later."
            ) from e

        logger.info(
            "Feedback ready: %s (overall %.1f)", assessment.summary, assessment.scores.overall
        )
        return FeedbackReport(assessment=assessment, feedback=feedback)
