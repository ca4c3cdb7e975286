"""Rolling window of recent risk analyses, kept by the chat pipeline.

Maintains recent_high_count for the escalation gate: how many of the last
N analyses of a conversation were high readings. One window per
conversation; not thread-safe.
"""
from collections import deque
from typing import Deque, Optional

from .config import EscalationThresholds
from .escalation_gate import AnalysisInput, as_snapshot, is_high_risk


class RecentRiskWindow:
    """Bounded window over the most recent analyses."""

    def __init__(self, thresholds: Optional[EscalationThresholds] = None):
        self.thresholds = thresholds or EscalationThresholds()
        self._high_flags: Deque[bool] = deque(maxlen=max(1, self.thresholds.window_size))

    def record(self, analysis: AnalysisInput) -> bool:
        """Add the latest analysis, evicting the oldest when full.

        Returns:
            Whether the recorded analysis was a high reading
        """
        high = is_high_risk(as_snapshot(analysis), self.thresholds)
        self._high_flags.append(high)
        return high

    @property
    def high_count(self) -> int:
        return sum(self._high_flags)

    def __len__(self) -> int:
        return len(self._high_flags)

    def clear(self) -> None:
        self._high_flags.clear()
