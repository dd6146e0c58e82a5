"""Shared prompt helpers used across prompt modules."""

from __future__ import annotations
from textwrap import dedent
from typing import Iterable

from ..models import InterviewEntry, Speaker
from ..schemas import QuestionAnswer


def clip_text(s: str, max_chars: int) -> str:
    """Clip text to max_chars, adding ellipsis if clipped."""
    if len(s) <= max_chars:
        return s
    return s[: max_chars - 1].rstrip() + "…"


def json_only_rule() -> str:
    return "Return EXACTLY one JSON object and nothing else (no code fences, no commentary)."


def checklist_block() -> str:
    return dedent(
        """\
        Checklist to satisfy for each question:
        - Exactly one specific question.
        - At most 40 words.
        - Anchored in the role or the candidate's previous answer.
        - Avoid compound/multi-part asks; one axis per turn.
        """
    )


def render_transcript(
    entries: Iterable[InterviewEntry],
    *,
    interviewer_label: str = "Interviewer",
    candidate_label: str = "You",
) -> str:
    """One `Label: text` line per turn, in conversation order."""
    lines = []
    for e in entries:
        label = interviewer_label if e.speaker == Speaker.INTERVIEWER else candidate_label
        lines.append(f"{label}: {e.text}")
    return "\n".join(lines)


def render_qa_pairs(pairs: Iterable[QuestionAnswer], *, max_chars: int = 6000) -> str:
    blocks = [f"Question: {p.question}\nAnswer: {p.answer}" for p in pairs]
    return clip_text("\n\n".join(blocks), max_chars)
