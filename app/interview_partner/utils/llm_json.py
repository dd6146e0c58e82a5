"""Utilities for extracting and validating JSON objects from LLM responses."""

from __future__ import annotations
import json
import re
from typing import Any, TypeVar

from pydantic import BaseModel, ValidationError

_JSON_OBJECT = re.compile(r"\{.*\}", re.DOTALL)

ModelT = TypeVar("ModelT", bound=BaseModel)


def _strip_code_fences(text: str) -> str:
    """Remove surrounding ```...``` fences (with or without 'json') if present."""
    t = text.strip()
    if t.startswith("```") and t.endswith("```"):
        t = re.sub(r"^```[A-Za-z0-9_-]*\s*", "", t, flags=re.DOTALL)
        t = re.sub(r"\s*```$", "", t, flags=re.DOTALL)
    return t.strip()


def extract_object(text: str) -> dict[str, Any]:
    """
    Parse the first JSON object in an LLM response.
    Tolerates code fences and leading/trailing prose; raises ValueError when
    no object can be recovered.
    """
    if not text or not text.strip():
        raise ValueError("LLM returned an empty response.")
    t = _strip_code_fences(text)

    try:
        data = json.loads(t)
    except json.JSONDecodeError:
        m = _JSON_OBJECT.search(t)
        if not m:
            raise ValueError("LLM response contains no JSON object.") from None
        try:
            data = json.loads(m.group(0))
        except json.JSONDecodeError as e:
            raise ValueError(f"LLM response is not valid JSON: {e}") from e

    if not isinstance(data, dict):
        raise ValueError("Expected a JSON object.")
    return data


def parse_model(text: str, model: type[ModelT]) -> ModelT:
    """Strict: the response must hold an object matching `model`, else raise."""
    data = extract_object(text)
    try:
        return model.model_validate(data)
    except ValidationError as e:
        raise ValueError(
            f"LLM output does not match {model.__name__}: "
            f"{e.error_count()} validation error(s)"
        ) from e
