"""
Purpose: Token math & cost estimation.
Central usage logic so UI/controllers do not duplicate calculations.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Optional

from ..models import Price


PRICE_TABLE = {
    "gpt-4o-mini": Price(0.15, 0.60),
    "gpt-4o": Price(2.50, 10.00),
    "gpt-4.1-mini": Price(0.40, 1.60),
    "gpt-5-mini": Price(0.25, 2.00),
}


def estimate_cost(model: str, tokens_in: int, tokens_out: int) -> float:
    p = PRICE_TABLE.get(model, Price(0.0, 0.0))
    return (tokens_in / 1000000) * p.input_per_1M + (
        tokens_out / 1000000
    ) * p.output_per_1M


def estimate_tokens_from_text(text: str) -> int:
    """Fast heuristic: ~4 chars per token."""
    t = (text or "").strip()
    if not t:
        return 0

    return (len(t) + 3) // 4


@dataclass
class Usage:
    tokens_in: int = 0
    tokens_out: int = 0
    model_used: Optional[str] = None

    def add(self, meta: dict, model: Optional[str] = None) -> None:
        """Fold one call's meta into the running totals."""
        self.tokens_in += int(meta.get("tokens_in", 0) or 0)
        self.tokens_out += int(meta.get("tokens_out", 0) or 0)
        self.model_used = model or meta.get("model") or self.model_used

    def merge(self, other: "Usage") -> "Usage":
        return Usage(
            tokens_in=self.tokens_in + other.tokens_in,
            tokens_out=self.tokens_out + other.tokens_out,
            model_used=other.model_used or self.model_used,
        )

    def cost(self, model: Optional[str] = None) -> float:
        return estimate_cost(model or self.model_used or "", self.tokens_in, self.tokens_out)
