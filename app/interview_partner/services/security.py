"""
Purpose: Guardrails for inputs.
Early, predictable failures: reject blank or oversized roles and answers,
strip control characters, and redact PII before text reaches the LLM.
"""

import re

EMAIL = re.compile(r"[A-Z0-9._%+-]+@[A-Z0-9.-]+\.[A-Z]{2,}", re.I)
# optional country code, then 3-3-4 digit groups with at most one separator each
PHONE = re.compile(
    r"(?<![\w+])(?:\+\d{1,3}[\s.-]?)?(?:\(\d{3}\)|\d{3})[\s.-]?\d{3}[\s.-]?\d{4}(?!\w)"
)
CCARD = re.compile(r"\b(?:\d[ -]*?){13,19}\b")
SSN = re.compile(r"\b\d{3}-\d{2}-\d{4}\b")

_CONTROL = re.compile(r"[\x00-\x08\x0b\x0c\x0e-\x1f\x7f]")

MAX_ROLE_CHARS = 200
MAX_ANSWER_CHARS = 8000


class DefaultSecurity:
    def validate_role(self, role: str) -> str:
        role = self.sanitize_for_prompt(role)
        if not role:
            raise ValueError("Please enter the role you want to practice for.")
        if len(role) > MAX_ROLE_CHARS:
            raise ValueError(
                f"The role is too long. Keep it under {MAX_ROLE_CHARS} characters."
            )
        return role

    def validate_answer(self, text: str) -> None:
        if len(text) > MAX_ANSWER_CHARS:
            raise ValueError("Your answer is too long. Please keep it shorter.")

    def sanitize_for_prompt(self, text: str) -> str:
        return _CONTROL.sub("", text or "").strip()

    def redact_pii(self, text: str):
        found = []

        def _redact(rx, label):
            nonlocal text, found
            if rx.search(text):
                found.append(label)
                text = rx.sub(f"[{label}]", text)

        _redact(EMAIL, "EMAIL")
        _redact(SSN, "SSN")
        _redact(CCARD, "CARD")
        _redact(PHONE, "PHONE")
        return text, found
