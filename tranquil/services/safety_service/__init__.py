"""Safety Service: crisis escalation gate for chat turns.

Every inbound user message is checked here. Explicit crisis language
escalates immediately; objective risk signals escalate only when they
recur across recent analyses.

Components:
- escalation_gate.py: EscalationGate and should_escalate()
- risk_window.py: RecentRiskWindow, the caller-side count of recent high readings
- config.py: Thresholds and phrase lists
- handler.py: Flask HTTP endpoints (/health, /ready, /escalation/check)

Usage:
    from tranquil.services.safety_service import should_escalate
    if should_escalate(text, analysis, window.high_count):
        show_crisis_resources()
"""

from .config import (
    CRISIS_PHRASES,
    DISMISSIVE_PATTERN,
    EscalationThresholds,
)
from .escalation_gate import (
    EscalationDecision,
    EscalationGate,
    EscalationReason,
    is_high_risk,
    should_escalate,
)
from .risk_window import RecentRiskWindow

__all__ = [
    "CRISIS_PHRASES",
    "DISMISSIVE_PATTERN",
    "EscalationThresholds",
    "EscalationDecision",
    "EscalationGate",
    "EscalationReason",
    "is_high_risk",
    "should_escalate",
    "RecentRiskWindow",
]
