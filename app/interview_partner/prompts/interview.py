"""Interview prompts: scripted interviewer lines and follow-up generation."""

from __future__ import annotations
from textwrap import dedent

from ..models import ConversationState
from .common import checklist_block, json_only_rule

CLOSING_PROMPT = (
    "That was my last question. Thank you for your responses. Do you have any "
    "questions for me about the interview process? You can say \"exit\" at any "
    "time to finish."
)

FALLBACK_QUESTION = (
    "I'm sorry, I seem to have encountered an issue. Let's move to the next "
    "question. What is your greatest strength?"
)

FALLBACK_REPROMPT = (
    "I'm sorry, I couldn't process that. Could you repeat, or say 'exit' to finish?"
)


def greeting(*, role: str) -> str:
    return (
        "Hello! Thanks for coming in today. Let's start the interview for the "
        f"{role} position. Tell me a bit about yourself and why you're "
        "interested in this role."
    )


def build_follow_up_system(*, role: str, state: ConversationState) -> str:
    if state == ConversationState.CLOSING:
        phase_rules = dedent(
            """\
            The formal questions are finished; the candidate may now ask you
            questions about the role or the interview process.
            - Answer the candidate's question briefly and helpfully (under 60 words).
            - Then ask whether they have any other questions.
            - If the candidate says they have no more questions or wants to wrap
              up, thank them and end your reply with the word "Goodbye".
            - Never say "goodbye" otherwise.
            """
        )
    else:
        phase_rules = (
            dedent(
                """\
                - Ask a follow-up that digs into the candidate's previous answer,
                  or move to a new relevant question when the answer is complete.
                - No preamble, no feedback on the answer, no bullet lists.
                - Never say "goodbye"; the interview is still running.
                """
            )
            + checklist_block()
        )

    return (
        f"You are a professional interviewer running a mock interview for a "
        f"{role} position.\n"
        "Stay in character and keep a friendly, neutral tone.\n\n"
        f"Rules:\n{phase_rules}\n"
        f"{json_only_rule()}"
    )


def follow_up_instruction(
    *,
    previous_question: str,
    user_answer: str,
    role: str,
    state: ConversationState,
) -> str:
    return dedent(
        """\
        Job role: {role}
        Interview phase: {phase}

        Your previous message:
        {previous_question}

        Candidate's reply:
        {user_answer}

        Output ONLY this JSON object:
        {{"follow_up_question": "<your next message to the candidate>"}}
        """
    ).format(
        role=role,
        phase=state.value,
        previous_question=previous_question,
        user_answer=user_answer or "(no answer)",
    )
