"""
Purpose: Generate the interviewer's next message given the last exchange.
Decoupled from the controller so question logic can change without touching
turn-taking.

No retries: any failure (transport, timeout, invalid JSON) propagates to the
caller, which owns the recovery policy.
"""

from __future__ import annotations

from ..interfaces import LLMClient, PromptFactory
from ..models import LLMSettings
from ..schemas import FollowUpInput, FollowUpOutput
from ..utils.llm_json import parse_model

JSON_MODE = {"type": "json_object"}


def generate_follow_up(
    *,
    llm: LLMClient,
    prompts: PromptFactory,
    settings: LLMSettings,
    request: FollowUpInput,
) -> tuple[str, dict]:
    """Return (next_question_text, meta)."""
    system = prompts.build_follow_up_system(
        role=request.job_role, state=request.interview_state
    )
    user_msg = prompts.follow_up_instruction(
        previous_question=request.previous_question,
        user_answer=request.user_answer,
        role=request.job_role,
        state=request.interview_state,
    )
    call_settings = LLMSettings(
        model=settings.model,
        temperature=settings.temperature,
        top_p=settings.top_p,
        max_tokens=min(settings.max_tokens, 200),
        response_format=JSON_MODE,
    )
    text, meta = llm.chat(
        [
            {"role": "system", "content": system},
            {"role": "user", "content": user_msg},
        ],
        call_settings,
    )
    out = parse_model(text, FollowUpOutput)
    return out.follow_up_question.strip(), meta
