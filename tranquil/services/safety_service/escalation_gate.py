"""Escalation gate - decides when a chat turn goes to the crisis pathway.

Called on every inbound user message by the chat pipeline, which shows
the crisis resources when the verdict is to escalate.

Rules, in order, first decisive rule wins:
1. Hard gate: explicit crisis language escalates immediately. Nothing
   else (dismissive filtering, rate limiting) can suppress it.
2. A terse dismissive reply ("ok", "leave me alone") never escalates, so
   a stale high-risk analysis cannot fire on it.
3. Objective signals escalate only when the latest analysis is high AND
   enough recent analyses were high too. A single noisy reading does not.

The gate holds no per-conversation state; the caller owns the window of
recent analyses (see risk_window.RecentRiskWindow).
"""
import logging
from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from numbers import Real
from typing import Any, Optional, Tuple, Union

from tranquil.shared.models import RiskAnalysisSnapshot, Sentiment
from tranquil.shared.utils import hash_text_for_audit
from .config import (
    CRISIS_PHRASES,
    DISMISSIVE_PATTERN,
    PHRASE_LIST_VERSION,
    EscalationThresholds,
)

logger = logging.getLogger(__name__)

AnalysisInput = Union[RiskAnalysisSnapshot, Mapping, None]


class EscalationReason(Enum):
    """Which rule produced the verdict."""
    CRISIS_LANGUAGE = "crisis_language"
    DISMISSIVE_REPLY = "dismissive_reply"
    SUSTAINED_HIGH_RISK = "sustained_high_risk"
    SINGLE_HIGH_READING = "single_high_reading"
    BELOW_THRESHOLD = "below_threshold"


@dataclass(frozen=True)
class EscalationDecision:
    """Verdict of the escalation gate for one chat turn."""
    escalate: bool
    reason: EscalationReason
    matched_phrases: Tuple[str, ...] = ()

    def to_dict(self) -> dict:
        """Convert to dictionary for API responses."""
        return {
            "escalate": self.escalate,
            "reason": self.reason.value,
            "matched_phrases": list(self.matched_phrases),
        }


def normalize_utterance(text: Any) -> str:
    """Lowercase and trim an utterance. None becomes ''."""
    if text is None:
        return ""
    return str(text).lower().strip()


def as_snapshot(analysis: AnalysisInput) -> Optional[RiskAnalysisSnapshot]:
    """Accept a snapshot or a raw analysis mapping."""
    if isinstance(analysis, RiskAnalysisSnapshot):
        return analysis
    if isinstance(analysis, Mapping):
        return RiskAnalysisSnapshot.from_dict(analysis)
    return None


def is_high_risk(
    analysis: AnalysisInput,
    thresholds: Optional[EscalationThresholds] = None,
) -> bool:
    """Check whether one analysis counts as a high reading.

    Absent fields never meet their condition.

    Args:
        analysis: Snapshot, raw analysis mapping, or None
        thresholds: Escalation thresholds (defaults if omitted)

    Returns:
        True if anxiety is at or above the cutoff, sentiment is crisis,
        or the analysis flagged escalation itself
    """
    snapshot = as_snapshot(analysis)
    if snapshot is None:
        return False
    thresholds = thresholds or EscalationThresholds()

    level = snapshot.anxiety_level
    level_high = (
        isinstance(level, Real)
        and not isinstance(level, bool)
        and level >= thresholds.high_anxiety_level
    )
    return (
        level_high
        or snapshot.sentiment is Sentiment.CRISIS
        or snapshot.escalation_detected is True
    )


def _coerce_count(value: Any) -> Real:
    # Unusable counts mean no accumulated history
    if isinstance(value, bool):
        return 0
    if isinstance(value, Real):
        return value
    try:
        return float(value)
    except (TypeError, ValueError, OverflowError):
        return 0


class EscalationGate:
    """Stateless escalation gate. Safe to call concurrently on every turn."""

    def __init__(self, thresholds: Optional[EscalationThresholds] = None):
        """Initialize the gate.

        Args:
            thresholds: Escalation thresholds (defaults if omitted)
        """
        self.thresholds = thresholds or EscalationThresholds()

        logger.info(
            "ESCALATION_GATE_INITIALIZED",
            extra={
                "phrase_list_version": PHRASE_LIST_VERSION,
                "crisis_phrase_count": len(CRISIS_PHRASES),
                "high_anxiety_level": self.thresholds.high_anxiety_level,
                "min_recent_high": self.thresholds.min_recent_high,
            }
        )

    def evaluate(
        self,
        utterance_text: Any,
        analysis: AnalysisInput = None,
        recent_high_count: Any = 0,
    ) -> EscalationDecision:
        """Evaluate one chat turn.

        Never raises: malformed inputs fall through to the least specific
        rule.

        Args:
            utterance_text: Latest user message
            analysis: Latest risk analysis (snapshot or raw mapping), if any
            recent_high_count: How many recent analyses were high readings

        Returns:
            EscalationDecision with verdict and deciding rule

        Logs:
            - ESCALATION_CRISIS_LANGUAGE: Hard gate fired (critical level)
            - ESCALATION_EVALUATED: Any other verdict
        """
        text = normalize_utterance(utterance_text)

        matched = tuple(phrase for phrase in CRISIS_PHRASES if phrase in text)
        if matched:
            logger.critical(
                "ESCALATION_CRISIS_LANGUAGE",
                extra={
                    "text_hash": hash_text_for_audit(text),
                    "text_length": len(text),
                    "matched_count": len(matched),
                    "action": "CRISIS_PATHWAY",
                }
            )
            return EscalationDecision(
                escalate=True,
                reason=EscalationReason.CRISIS_LANGUAGE,
                matched_phrases=matched,
            )

        if DISMISSIVE_PATTERN.fullmatch(text):
            return self._decided(text, False, EscalationReason.DISMISSIVE_REPLY)

        high = is_high_risk(analysis, self.thresholds)
        accumulated = _coerce_count(recent_high_count) >= self.thresholds.min_recent_high

        if high and accumulated:
            return self._decided(text, True, EscalationReason.SUSTAINED_HIGH_RISK)
        if high:
            return self._decided(text, False, EscalationReason.SINGLE_HIGH_READING)
        return self._decided(text, False, EscalationReason.BELOW_THRESHOLD)

    def should_escalate(
        self,
        utterance_text: Any,
        analysis: AnalysisInput = None,
        recent_high_count: Any = 0,
    ) -> bool:
        """Return only the verdict of evaluate()."""
        return self.evaluate(utterance_text, analysis, recent_high_count).escalate

    def _decided(
        self,
        text: str,
        escalate: bool,
        reason: EscalationReason,
    ) -> EscalationDecision:
        log = logger.warning if escalate else logger.info
        log(
            "ESCALATION_EVALUATED",
            extra={
                "text_hash": hash_text_for_audit(text),
                "escalate": escalate,
                "reason": reason.value,
            }
        )
        return EscalationDecision(escalate=escalate, reason=reason)


# Module-level singleton with default thresholds
_gate: Optional[EscalationGate] = None


def get_gate() -> EscalationGate:
    """Get the default EscalationGate instance."""
    global _gate
    if _gate is None:
        _gate = EscalationGate()
    return _gate


def should_escalate(
    utterance_text: Any,
    analysis: AnalysisInput = None,
    recent_high_count: Any = 0,
) -> bool:
    """Decide whether a chat turn must be escalated to the crisis pathway.

    Args:
        utterance_text: Latest user message
        analysis: Latest risk analysis, if any
        recent_high_count: Caller-maintained count of recent high readings

    Returns:
        True if the conversation must be escalated
    """
    return get_gate().should_escalate(utterance_text, analysis, recent_high_count)
