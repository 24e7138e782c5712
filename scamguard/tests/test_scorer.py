"""Tests for the rule-based risk scorer."""

from concurrent.futures import ThreadPoolExecutor

import pytest

from scamguard.services.rules import Category, build_rule_table
from scamguard.services.risk_service import (
    AnalysisResult,
    Finding,
    HIGH_RISK,
    LOW_RISK,
    MEDIUM_RISK,
    NO_TEXT_RECOMMENDATION,
    RiskScorer,
    SCORE_CEILING,
    analyze_text,
    normalize_score,
    tier_for_score,
)


class TestEmptyInput:
    """Empty, blank and non-text input returns the canonical zero result."""

    @pytest.mark.parametrize("value", ["", "   ", "\n\t  \r\n", None, 123, 4.5, b"act now", ["act now"]])
    def test_zero_result(self, value):
        result = analyze_text(value)
        assert result.score == 0
        assert result.status == "Low Risk"
        assert result.status_color == "green"
        assert result.reasons == []
        assert result.recommendation == NO_TEXT_RECOMMENDATION

    def test_guard_skips_pattern_evaluation(self):
        """No pattern may run when there is nothing to analyze."""

        class ExplodingPattern:
            label = "never"

            def matches(self, text):
                raise AssertionError("pattern evaluated on empty input")

        scorer = RiskScorer(rules=(Category(name="Boom", weight=5, patterns=(ExplodingPattern(),)),))
        assert scorer.analyze("   ").score == 0
        assert scorer.analyze(None).reasons == []


class TestScenarios:
    """End-to-end scoring of representative texts."""

    def test_high_risk_pitch(self, sample_scam_text):
        result = analyze_text(sample_scam_text)
        labels = [r.label for r in result.reasons]

        assert '"Act now" pressure tactic' in labels
        assert '"Limited time" urgency' in labels
        assert "Guaranteed returns claim" in labels
        assert "100% safety/profit claim" in labels
        assert result.score >= 60
        assert result.status == "High Risk"
        assert result.status_color == "red"
        assert result.recommendation == HIGH_RISK.recommendation

    def test_legitimate_pitch_matches_nothing(self, sample_safe_text):
        result = analyze_text(sample_safe_text)
        assert result.reasons == []
        assert result.score == 0
        assert result.status == "Low Risk"
        assert result.recommendation == LOW_RISK.recommendation

    def test_payment_red_flags_only(self):
        result = analyze_text("Please pay by wire transfer or with a gift card.")
        assert result.reasons == [
            Finding(category="Payment Red Flags", label="Wire transfer request"),
            Finding(category="Payment Red Flags", label="Gift card payment request"),
        ]
        # 2 matches x weight 9 = 18 -> round(18 / 60 * 100)
        assert result.score == round(18 / SCORE_CEILING * 100) == 30
        assert result.status == "Medium Risk"
        assert result.status_color == "yellow"
        assert result.recommendation == MEDIUM_RISK.recommendation

    def test_findings_follow_declaration_order(self):
        """Category order first, then pattern order, regardless of text order."""
        result = analyze_text("Gift card accepted. Wire transfer too. Act now!")
        assert [r.label for r in result.reasons] == [
            '"Act now" pressure tactic',
            "Wire transfer request",
            "Gift card payment request",
        ]

    def test_weight_added_per_pattern_not_per_category(self):
        text = "Act now, limited time, hurry, last chance!"
        result = analyze_text(text)
        assert len(result.reasons) == 4
        assert all(r.category == "Urgency & Pressure" for r in result.reasons)
        assert result.score == normalize_score(4 * 8)

    def test_score_saturates_at_100(self):
        text = (
            "Act now! Limited time. Hurry! Guaranteed returns, 100% safe, "
            "no risk, risk-free, double your money."
        )
        result = analyze_text(text)
        assert result.score == 100
        assert result.status == "High Risk"


class TestProperties:
    """Invariants that hold for any input."""

    PHRASES = [
        "act now",
        "wire transfer",
        "verify your account",
        "dear customer",
        "financial freedom",
        "technical support",
        "guaranteed income",
    ]

    def test_monotonic_when_appending_matches(self):
        text = "Hello, I have an investment opportunity."
        previous = analyze_text(text).score
        for phrase in self.PHRASES:
            text = f"{text} {phrase}"
            current = analyze_text(text).score
            assert current >= previous
            previous = current

    def test_deterministic(self, sample_scam_text):
        first = analyze_text(sample_scam_text)
        second = analyze_text(sample_scam_text)
        assert first == second
        assert first.to_dict() == second.to_dict()

    def test_shared_scorer_across_threads(self, sample_scam_text, sample_safe_text):
        texts = [sample_scam_text, sample_safe_text, "   ", "wire transfer gift card", None] * 40
        expected = [analyze_text(text) for text in texts]
        with ThreadPoolExecutor(max_workers=8) as pool:
            results = list(pool.map(analyze_text, texts))
        assert results == expected

    @pytest.mark.parametrize(
        "ragged, clean",
        [
            ("act\n\nnow", "act now"),
            ("limited \t\t time offer", "limited time offer"),
            ("  wire\r\ntransfer  ", "wire transfer"),
            ("double   your\nmoney", "double your money"),
        ],
    )
    def test_whitespace_insensitive(self, ragged, clean):
        assert analyze_text(ragged).reasons == analyze_text(clean).reasons
        assert analyze_text(ragged).reasons

    def test_case_insensitive(self):
        assert analyze_text("ACT NOW").reasons == analyze_text("act now").reasons

    @pytest.mark.parametrize(
        "text",
        [
            "x" * 200_000 + " act now",
            "这是一个测试 ☎ привет мир",
            "\x00\x07\x1b[31m gift\x0bcard \ufeff",
            "$$$ 999999999999999 %%% \\ (( [[ ",
        ],
    )
    def test_never_raises_and_stays_in_range(self, text):
        result = analyze_text(text)
        assert isinstance(result, AnalysisResult)
        assert 0 <= result.score <= 100

    def test_control_characters_still_match(self):
        result = analyze_text("\x00 gift\x0bcard \x07")
        assert [r.label for r in result.reasons] == ["Gift card payment request"]

    def test_tier_matches_score(self):
        for text in [""] + self.PHRASES + ["wire transfer gift card", "act now wire transfer gift card no risk"]:
            result = analyze_text(text)
            assert (result.score >= 60) == (result.status == "High Risk")
            assert (30 <= result.score < 60) == (result.status == "Medium Risk")
            assert (result.score < 30) == (result.status == "Low Risk")


class TestScoreNormalization:
    """Raw weight -> 0-100 scaling."""

    @pytest.mark.parametrize(
        "raw, expected",
        [(0, 0), (1, 2), (3, 5), (18, 30), (36, 60), (60, 100), (120, 100)],
    )
    def test_default_ceiling(self, raw, expected):
        assert normalize_score(raw) == expected

    def test_halves_round_up(self):
        assert normalize_score(1, ceiling=8) == 13  # 12.5
        assert normalize_score(3, ceiling=8) == 38  # 37.5

    @pytest.mark.parametrize(
        "score, status",
        [(0, "Low Risk"), (29, "Low Risk"), (30, "Medium Risk"), (59, "Medium Risk"), (60, "High Risk"), (100, "High Risk")],
    )
    def test_tier_boundaries(self, score, status):
        assert tier_for_score(score).status == status


class TestInjectedRules:
    """RiskScorer accepts its own rule table and ceiling."""

    def test_custom_table(self):
        rules = build_rule_table([("Test", 5, [(r"foo\s*bar", "Foobar"), (r"baz", "Baz")])])
        scorer = RiskScorer(rules=rules, ceiling=10)
        result = scorer.analyze("FOO  BAR and baz")
        assert result.reasons == [Finding("Test", "Foobar"), Finding("Test", "Baz")]
        assert result.score == 100

    @pytest.mark.parametrize("ceiling", [0, -60])
    def test_rejects_non_positive_ceiling(self, ceiling):
        with pytest.raises(ValueError):
            RiskScorer(ceiling=ceiling)
