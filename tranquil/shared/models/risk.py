"""Risk analysis domain models.

A RiskAnalysisSnapshot is produced upstream for every chat message (by the
anxiety analysis pipeline) and consumed by the escalation gate. Every field
is optional: an analysis that could not score a message still yields a
snapshot, and absent fields simply never meet their threshold.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Any, Mapping, Optional


class Sentiment(Enum):
    """Overall sentiment assigned to a message by the analysis pipeline."""
    POSITIVE = "positive"
    NEUTRAL = "neutral"
    NEGATIVE = "negative"
    CRISIS = "crisis"       # Analysis itself flagged crisis content


def _coerce_level(value: Any) -> Optional[float]:
    # bool is an int subclass; True is not an anxiety level
    if isinstance(value, bool) or value is None:
        return None
    try:
        return float(value)
    except OverflowError:
        # Integers beyond float range keep their sign as an infinite level
        return float("inf") if value > 0 else float("-inf")
    except (TypeError, ValueError):
        return None


def _coerce_sentiment(value: Any) -> Optional[Sentiment]:
    if isinstance(value, Sentiment):
        return value
    if not isinstance(value, str):
        return None
    try:
        return Sentiment(value.strip().lower())
    except ValueError:
        return None


@dataclass(frozen=True)
class RiskAnalysisSnapshot:
    """Per-message risk analysis.

    Immutable once created. anxiety_level uses the 0-10 scale of the
    anxiety tracker.
    """
    anxiety_level: Optional[float] = None
    sentiment: Optional[Sentiment] = None
    escalation_detected: Optional[bool] = None

    @classmethod
    def from_dict(cls, data: Optional[Mapping[str, Any]]) -> "RiskAnalysisSnapshot":
        """Build a snapshot from an API payload.

        Accepts both camelCase (client) and snake_case (database row) keys.
        Values that cannot be interpreted are treated as absent.

        Args:
            data: Raw analysis mapping, or None

        Returns:
            RiskAnalysisSnapshot with unrecognised fields left as None
        """
        if not data:
            return cls()

        level = data.get("anxietyLevel", data.get("anxiety_level"))
        escalation = data.get("escalationDetected", data.get("escalation_detected"))

        return cls(
            anxiety_level=_coerce_level(level),
            sentiment=_coerce_sentiment(data.get("sentiment")),
            escalation_detected=escalation if isinstance(escalation, bool) else None,
        )

    def to_dict(self) -> dict:
        """Convert to dictionary for API responses."""
        return {
            "anxiety_level": self.anxiety_level,
            "sentiment": self.sentiment.value if self.sentiment else None,
            "escalation_detected": self.escalation_detected,
        }
