"""Tests for the escalation gate - safety-critical, every rule covered.

Explicit crisis language must always escalate; dismissive replies must
never escalate; objective signals must recur before they escalate.
"""
import pytest

from tranquil.shared.models import RiskAnalysisSnapshot, Sentiment
from tranquil.services.safety_service.config import (
    CRISIS_PHRASES,
    EscalationThresholds,
)
from tranquil.services.safety_service.escalation_gate import (
    EscalationGate,
    EscalationReason,
    is_high_risk,
    should_escalate,
)

DISMISSIVE_REPLIES = [
    "ok",
    "okay",
    "k",
    "no",
    "nothing",
    "fine",
    "whatever",
    "i don't want to talk",
    "i don’t want to talk",
    "leave me alone",
    "i'm good",
    "im good",
]

MAX_RISK = RiskAnalysisSnapshot(
    anxiety_level=10,
    sentiment=Sentiment.CRISIS,
    escalation_detected=True,
)


@pytest.fixture
def gate():
    return EscalationGate()


class TestCrisisLanguage:
    """Hard gate: explicit crisis language escalates unconditionally."""

    @pytest.mark.parametrize("phrase", CRISIS_PHRASES)
    def test_every_phrase_escalates_without_analysis(self, phrase):
        assert should_escalate(f"sometimes i think about {phrase}", None, 0) is True

    def test_case_insensitive(self):
        assert should_escalate("I Want To KILL MYSELF", None, 0) is True

    def test_surrounding_whitespace_ignored(self):
        assert should_escalate("   want to die   ") is True

    def test_calm_analysis_does_not_suppress(self):
        calm = RiskAnalysisSnapshot(anxiety_level=1, sentiment=Sentiment.POSITIVE)
        assert should_escalate("i might overdose tonight", calm, 0) is True

    def test_plain_substring_match(self):
        # No word-boundary requirement
        assert should_escalate("i keep reading about overdoses") is True

    def test_decision_lists_matched_phrases(self, gate):
        decision = gate.evaluate("I want to die, I want to end my life")

        assert decision.escalate is True
        assert decision.reason == EscalationReason.CRISIS_LANGUAGE
        assert set(decision.matched_phrases) == {"want to die", "end my life"}

    def test_crisis_language_logged_critical_without_text(self, gate, caplog):
        gate.evaluate("i want to kill myself")

        records = [r for r in caplog.records if r.message == "ESCALATION_CRISIS_LANGUAGE"]
        assert records
        assert records[0].levelname == "CRITICAL"
        assert "kill myself" not in str(records[0].__dict__)


class TestDismissiveReplies:
    """Terse replies never escalate, whatever the analysis says."""

    @pytest.mark.parametrize("reply", DISMISSIVE_REPLIES)
    def test_dismissive_reply_never_escalates(self, reply):
        assert should_escalate(reply, MAX_RISK, 99) is False

    def test_dismissive_reply_with_case_and_whitespace(self):
        assert should_escalate("  Leave Me Alone ", MAX_RISK, 99) is False

    def test_partial_match_is_not_dismissive(self):
        # "fine" only counts as the whole reply
        assert should_escalate("i'm not fine at all", MAX_RISK, 2) is True

    def test_reason_is_reported(self, gate):
        decision = gate.evaluate("ok", MAX_RISK, 99)
        assert decision.reason == EscalationReason.DISMISSIVE_REPLY


class TestObjectiveSignals:
    """High reading AND accumulated history are both required."""

    TEXT = "today was really hard"

    def test_high_level_with_history_escalates(self):
        assert should_escalate(self.TEXT, RiskAnalysisSnapshot(anxiety_level=9), 2) is True

    def test_single_high_reading_does_not_escalate(self, gate):
        decision = gate.evaluate(self.TEXT, RiskAnalysisSnapshot(anxiety_level=9), 1)

        assert decision.escalate is False
        assert decision.reason == EscalationReason.SINGLE_HIGH_READING

    def test_history_without_high_reading_does_not_escalate(self, gate):
        decision = gate.evaluate(self.TEXT, RiskAnalysisSnapshot(anxiety_level=5), 5)

        assert decision.escalate is False
        assert decision.reason == EscalationReason.BELOW_THRESHOLD

    def test_crisis_sentiment_counts_as_high(self):
        analysis = RiskAnalysisSnapshot(sentiment=Sentiment.CRISIS)
        assert should_escalate(self.TEXT, analysis, 2) is True

    def test_escalation_flag_counts_as_high(self):
        analysis = RiskAnalysisSnapshot(escalation_detected=True)
        assert should_escalate(self.TEXT, analysis, 3) is True

    def test_just_below_cutoff(self):
        assert should_escalate(self.TEXT, RiskAnalysisSnapshot(anxiety_level=8.9), 5) is False

    def test_no_analysis_never_escalates(self):
        assert should_escalate(self.TEXT, None, 99) is False

    def test_raw_mapping_analysis(self):
        analysis = {"anxietyLevel": 10, "sentiment": "negative"}
        assert should_escalate(self.TEXT, analysis, 2) is True

    def test_sustained_reason(self, gate):
        decision = gate.evaluate(self.TEXT, RiskAnalysisSnapshot(anxiety_level=9), 2)
        assert decision.reason == EscalationReason.SUSTAINED_HIGH_RISK


class TestMalformedInput:
    """The gate is total - malformed input never raises."""

    def test_none_text(self):
        assert should_escalate(None, MAX_RISK, 2) is True

    def test_empty_text_without_signals(self):
        assert should_escalate("", None, 0) is False

    def test_non_numeric_count_counts_as_zero(self):
        assert should_escalate("rough day", MAX_RISK, "lots") is False

    def test_none_count(self):
        assert should_escalate("rough day", MAX_RISK, None) is False

    def test_non_numeric_level_is_absent(self):
        analysis = RiskAnalysisSnapshot(anxiety_level="very high")
        assert should_escalate("rough day", analysis, 5) is False

    def test_huge_integer_count(self):
        assert should_escalate("rough day", None, 10**400) is False
        assert should_escalate("rough day", MAX_RISK, 10**400) is True

    def test_huge_integer_level_counts_as_high(self):
        assert should_escalate("rough day", {"anxietyLevel": 10**400}, 2) is True
        assert should_escalate("rough day", {"anxietyLevel": -10**400}, 2) is False

    def test_deterministic(self, gate):
        results = {gate.should_escalate("rough day", MAX_RISK, 2) for _ in range(10)}
        assert results == {True}


class TestThresholds:
    """Custom thresholds flow through the gate."""

    def test_custom_thresholds(self):
        gate = EscalationGate(EscalationThresholds(high_anxiety_level=7, min_recent_high=3))
        analysis = RiskAnalysisSnapshot(anxiety_level=7)

        assert gate.should_escalate("rough day", analysis, 3) is True
        assert gate.should_escalate("rough day", analysis, 2) is False

    def test_from_env(self, monkeypatch):
        monkeypatch.setenv("ESCALATION_MIN_RECENT_HIGH", "4")
        thresholds = EscalationThresholds.from_env()

        assert thresholds.min_recent_high == 4
        assert thresholds.high_anxiety_level == 9.0
        assert thresholds.window_size == 5


class TestIsHighRisk:
    """The shared high-reading predicate."""

    def test_absent_fields(self):
        assert is_high_risk(RiskAnalysisSnapshot()) is False

    def test_none(self):
        assert is_high_risk(None) is False

    def test_boolean_level_is_not_a_level(self):
        assert is_high_risk(RiskAnalysisSnapshot(anxiety_level=True)) is False

    def test_escalation_flag_must_be_true(self):
        assert is_high_risk({"escalationDetected": "yes"}) is False
