import pytest

from interview_partner.services.pricing import (
    Usage,
    estimate_cost,
    estimate_tokens_from_text,
)


def test_known_model_cost():
    assert estimate_cost("gpt-4o-mini", 1_000_000, 1_000_000) == pytest.approx(0.75)


def test_unknown_model_is_free():
    assert estimate_cost("mystery", 500, 500) == 0.0


def test_token_heuristic():
    assert estimate_tokens_from_text("") == 0
    assert estimate_tokens_from_text("abcd") == 1
    assert estimate_tokens_from_text("abcde") == 2


def test_usage_add_and_merge():
    a = Usage()
    a.add({"tokens_in": 100, "tokens_out": 10, "model": "gpt-4o"})
    a.add({"tokens_in": None})
    b = Usage(tokens_in=1, tokens_out=2, model_used="gpt-4o-mini")

    total = a.merge(b)

    assert (a.tokens_in, a.tokens_out, a.model_used) == (100, 10, "gpt-4o")
    assert (total.tokens_in, total.tokens_out) == (101, 12)
    assert total.model_used == "gpt-4o-mini"
    assert total.cost() == pytest.approx(estimate_cost("gpt-4o-mini", 101, 12))
