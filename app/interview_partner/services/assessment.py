"""
Purpose: Score a finished interview against the static rubric.
Powers the dashboard and rubric cards on the feedback screen.

Validation is strict: a response with scores outside 0..10, missing
sections, or no JSON at all raises ValueError instead of being patched up.
"""

from __future__ import annotations

from ..interfaces import LLMClient, PromptFactory
from ..models import LLMSettings
from ..schemas import AssessmentInput, PerformanceAssessment
from ..utils.llm_json import parse_model
from .follow_up import JSON_MODE


def assess_performance(
    *,
    llm: LLMClient,
    prompts: PromptFactory,
    settings: LLMSettings,
    request: AssessmentInput,
) -> tuple[PerformanceAssessment, dict]:
    """Return (PerformanceAssessment, meta) for the whole interview."""
    system = prompts.build_assessment_system()
    user_msg = prompts.assessment_instruction(
        role=request.role, questions_and_answers=request.questions_and_answers
    )

    score_settings = LLMSettings(
        model=settings.model,
        temperature=min(settings.temperature, 0.3),
        top_p=settings.top_p,
        max_tokens=max(700, settings.max_tokens or 700),
        response_format=JSON_MODE,
    )
    text, meta = llm.chat(
        [
            {"role": "system", "content": system},
            {"role": "user", "content": user_msg},
        ],
        score_settings,
    )
    return parse_model(text, PerformanceAssessment), meta
