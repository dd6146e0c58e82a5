import pytest

from interview_partner.services.security import (
    MAX_ANSWER_CHARS,
    MAX_ROLE_CHARS,
    DefaultSecurity,
)

security = DefaultSecurity()


def test_role_is_cleaned():
    assert security.validate_role("  Data\x00 Engineer \n") == "Data Engineer"


@pytest.mark.parametrize("role", ["", "   ", "\x01\x02", "x" * (MAX_ROLE_CHARS + 1)])
def test_bad_roles_are_rejected(role):
    with pytest.raises(ValueError):
        security.validate_role(role)


def test_oversized_answer_is_rejected():
    security.validate_answer("x" * MAX_ANSWER_CHARS)
    with pytest.raises(ValueError):
        security.validate_answer("x" * (MAX_ANSWER_CHARS + 1))


def test_redacts_each_kind():
    text = (
        "mail a@b.io, ssn 123-45-6789, card 4111 1111 1111 1111, "
        "call +1 (555) 123-4567"
    )

    redacted, found = security.redact_pii(text)

    assert found == ["EMAIL", "SSN", "CARD", "PHONE"]
    assert "a@b.io" not in redacted
    assert "123-45-6789" not in redacted
    assert "4111" not in redacted
    assert "555" not in redacted


def test_clean_text_passes_through():
    assert security.redact_pii("I led a team of 5.") == ("I led a team of 5.", [])


@pytest.mark.parametrize(
    "text",
    [
        "I led the team from 2015 - 2020 and grew it to 12 people.",
        "We cut p99 latency from 1200 ms to 300 ms.",
        "Our ledger handled 15000000 transactions a day.",
        "Worked there 2018-2021, then 2021-2024.",
    ],
)
def test_ordinary_numbers_are_not_redacted(text):
    assert security.redact_pii(text) == (text, [])


@pytest.mark.parametrize(
    "phone", ["555-123-4567", "(555) 123-4567", "555.123.4567", "+1 555 123 4567"]
)
def test_phone_numbers_are_redacted(phone):
    redacted, found = security.redact_pii(f"call me on {phone} tomorrow")

    assert redacted == "call me on [PHONE] tomorrow"
    assert found == ["PHONE"]
