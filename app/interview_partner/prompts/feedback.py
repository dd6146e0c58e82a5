"""Coaching prompts: personalized feedback written from the assessment."""

from __future__ import annotations
from textwrap import dedent

from .common import clip_text, json_only_rule


def build_feedback_system() -> str:
    return (
        "You are an expert career coach providing personalized feedback on mock "
        "job interviews. Based on the interview transcript, selected role, and AI "
        "performance assessment, provide actionable feedback to the user.\n"
        f"{json_only_rule()}"
    )


def feedback_instruction(*, transcript: str, role: str, assessment: str) -> str:
    return dedent(
        """\
        Interview Transcript:
        {transcript}

        Selected Role: {role}
        Performance Assessment: {assessment}

        Structure the feedback exactly as follows, keeping it concise and using
        markdown for formatting.

        Start with a brief, encouraging opening sentence.

        Then, provide 2-3 key feedback points. For each point, use this format:
        ### **[Feedback Area Title]**
        A 1-2 sentence summary of the feedback.
        *   **Best Practice:** A short, actionable tip.

        End with a short, motivational closing sentence.

        Output ONLY this JSON object:
        {{"personalized_feedback": "<the markdown feedback>"}}
        """
    ).format(
        transcript=clip_text(transcript, 8000),
        role=role,
        assessment=assessment,
    )
