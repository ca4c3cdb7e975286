"""Safety Service configuration: escalation thresholds and phrase lists.

The numeric thresholds have no documented clinical derivation; they are
kept exactly as shipped and only overridable through the environment.
"""
import os
import re
from dataclasses import dataclass
from typing import Pattern, Tuple


@dataclass(frozen=True)
class EscalationThresholds:
    """Thresholds for objective-signal escalation.

    A reading is "high" when anxiety_level >= high_anxiety_level, the
    sentiment is crisis, or the analysis itself detected escalation.
    Escalation on objective signals needs min_recent_high high readings
    within the caller's window of the last window_size analyses.
    """
    high_anxiety_level: float = 9.0     # 0-10 anxiety scale
    min_recent_high: int = 2
    window_size: int = 5

    @classmethod
    def from_env(cls) -> "EscalationThresholds":
        """Create thresholds from environment variables.

        Environment variables:
            ESCALATION_HIGH_ANXIETY_LEVEL: High reading cutoff (default 9)
            ESCALATION_MIN_RECENT_HIGH: Required recent high readings (default 2)
            ESCALATION_WINDOW_SIZE: Analyses kept by the risk window (default 5)
        """
        return cls(
            high_anxiety_level=float(os.getenv("ESCALATION_HIGH_ANXIETY_LEVEL", "9")),
            min_recent_high=int(os.getenv("ESCALATION_MIN_RECENT_HIGH", "2")),
            window_size=int(os.getenv("ESCALATION_WINDOW_SIZE", "5")),
        )


# Explicit risk language. Plain substring match on lowercased, trimmed text;
# any hit escalates immediately regardless of every other signal.
CRISIS_PHRASES: Tuple[str, ...] = (
    "suicide",
    "kill myself",
    "end my life",
    "want to die",
    "self harm",
    "overdose",
    "hurt myself",
    "jump off",
    "no reason to live",
)

# Terse non-committal replies. Must match the whole normalized utterance.
DISMISSIVE_PATTERN: Pattern[str] = re.compile(
    r"^(ok(ay)?|k|no|nothing|fine|whatever|i don['’]t want to talk|leave me alone|i'?m good)$"
)

# Version tracking for audit trail
PHRASE_LIST_VERSION = "2025.09.01"
