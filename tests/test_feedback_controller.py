import json

import pytest

from fakes import FakeLLM, assessment_json, feedback_json
from interview_partner.controller_feedback import (
    FeedbackController,
    FeedbackError,
    FeedbackReport,
    pair_questions_and_answers,
)
from interview_partner.models import InterviewEntry, Speaker

TRANSCRIPT = (
    InterviewEntry(Speaker.INTERVIEWER, "Tell me about yourself.", True),
    InterviewEntry(Speaker.CANDIDATE, "I build payment systems."),
    InterviewEntry(Speaker.INTERVIEWER, "What was the hardest bug?", True),
    InterviewEntry(Speaker.CANDIDATE, "A race in the ledger."),
    InterviewEntry(Speaker.CANDIDATE, "Email me at a.b@example.com"),
)


def test_pairs_answers_with_preceding_question():
    pairs = pair_questions_and_answers(TRANSCRIPT)

    assert [(p.question, p.answer) for p in pairs] == [
        ("Tell me about yourself.", "I build payment systems."),
        ("What was the hardest bug?", "A race in the ledger."),
        ("What was the hardest bug?", "Email me at a.b@example.com"),
    ]


def test_answer_without_question_gets_placeholder():
    pairs = pair_questions_and_answers([InterviewEntry(Speaker.CANDIDATE, "Hi")])

    assert pairs[0].question == "N/A"


def test_run_assesses_then_coaches():
    llm = FakeLLM([assessment_json(), feedback_json("Well done.")])
    controller = FeedbackController(llm)

    report = controller.run("Backend Engineer", TRANSCRIPT)

    assert isinstance(report, FeedbackReport)
    assert report.feedback == "Well done."
    assert report.assessment.scores.communication == 8
    assert len(llm.calls) == 2

    coaching_prompt = llm.calls[1]["messages"][1]["content"]
    assert "Interviewer: Tell me about yourself." in coaching_prompt
    assert "You: I build payment systems." in coaching_prompt
    serialized = json.dumps(report.assessment.summary)
    assert serialized in coaching_prompt
    assert controller.usage.tokens_in == 20


def test_run_redacts_pii_before_prompting():
    llm = FakeLLM([assessment_json(), feedback_json()])

    FeedbackController(llm).run("Backend Engineer", TRANSCRIPT)

    for call in llm.calls:
        assert "a.b@example.com" not in call["messages"][1]["content"]


def test_assessment_failure_raises_feedback_error():
    llm = FakeLLM([assessment_json(scores={"communication": 11, "technical": 1, "overall": 1})])

    with pytest.raises(FeedbackError):
        FeedbackController(llm).run("Backend Engineer", TRANSCRIPT)
    assert len(llm.calls) == 1


def test_coaching_failure_raises_feedback_error():
    llm = FakeLLM([assessment_json(), TimeoutError("slow")])

    with pytest.raises(FeedbackError) as exc:
        FeedbackController(llm).run("Backend Engineer", TRANSCRIPT)
    assert isinstance(exc.value.__cause__, TimeoutError)
