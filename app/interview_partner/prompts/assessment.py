"""Assessment prompts: static rubric and the structured scoring request."""

from __future__ import annotations
from textwrap import dedent

from ..schemas import QuestionAnswer
from .common import json_only_rule, render_qa_pairs

RUBRIC_CRITERIA = {
    "Communication Skills": "Clarity, conciseness, engagement, and active listening.",
    "Technical Knowledge": (
        "Depth of knowledge, accuracy, and practical application of concepts."
    ),
    "Overall Performance": (
        "Confidence, problem-solving ability, and suitability for the role."
    ),
    "Areas for Improvement": (
        "Specific, actionable steps for enhancing performance as a list of bullet points."
    ),
}


def performance_rubric() -> str:
    lines = ["Rubric Criteria:"]
    lines += [f"{name}: {criteria}" for name, criteria in RUBRIC_CRITERIA.items()]
    return "\n".join(lines)


def build_assessment_system() -> str:
    return (
        "You are an AI-powered interview performance assessor. Your role is to "
        "evaluate a candidate's performance in a mock interview and provide "
        "constructive feedback.\n\n"
        f"{performance_rubric()}\n\n"
        "Rules:\n"
        "- Be objective and concise.\n"
        "- Never invent facts absent from the candidate's answers.\n"
        f"- {json_only_rule()}"
    )


def assessment_instruction(
    *, role: str, questions_and_answers: list[QuestionAnswer]
) -> str:
    qa_block = render_qa_pairs(questions_and_answers) or "(no answers were given)"
    return dedent(
        """\
        Job role the candidate interviewed for: {role}

        Questions and answers from the interview:
        {qa_block}

        First, based on the overall score, give a one-word summary of the
        performance (e.g., Excellent, Good, Average, Needs Improvement).
        For communication, technical knowledge, and overall performance give
        2-3 brief bullet points each. Give areas for improvement as a list.
        Scores are numbers from 0 to 10.

        Output ONLY this JSON object:
        {{
          "summary": "<one word>",
          "communication_skills": "- bullet\\n- bullet",
          "technical_knowledge": "- bullet\\n- bullet",
          "overall_performance": "- bullet\\n- bullet",
          "areas_for_improvement": ["...", "..."],
          "scores": {{"communication": <0-10>, "technical": <0-10>, "overall": <0-10>}}
        }}
        """
    ).format(role=role, qa_block=qa_block)
