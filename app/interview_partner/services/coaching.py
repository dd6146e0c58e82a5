"""
Purpose: Turn the transcript and assessment into a short coaching note
(opening line, 2-3 titled points with a best-practice tip, closing line).
"""

from __future__ import annotations

from ..interfaces import LLMClient, PromptFactory
from ..models import LLMSettings
from ..schemas import FeedbackInput, FeedbackOutput
from ..utils.llm_json import parse_model
from .follow_up import JSON_MODE


def provide_feedback(
    *,
    llm: LLMClient,
    prompts: PromptFactory,
    settings: LLMSettings,
    request: FeedbackInput,
) -> tuple[str, dict]:
    """Return (markdown_feedback, meta)."""
    system = prompts.build_feedback_system()
    user_msg = prompts.feedback_instruction(
        transcript=request.interview_transcript,
        role=request.selected_role,
        assessment=request.performance_assessment,
    )
    coach_settings = LLMSettings(
        model=settings.model,
        temperature=min(settings.temperature, 0.5),
        top_p=settings.top_p,
        max_tokens=max(600, settings.max_tokens or 600),
        response_format=JSON_MODE,
    )
    text, meta = llm.chat(
        [
            {"role": "system", "content": system},
            {"role": "user", "content": user_msg},
        ],
        coach_settings,
    )
    return parse_model(text, FeedbackOutput).personalized_feedback.strip(), meta
