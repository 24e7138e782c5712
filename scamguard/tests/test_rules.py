"""Tests for the scam pattern rule table."""

import dataclasses

import pytest

from scamguard.services.rules import SCAM_RULES, build_rule_table, describe_rules
from scamguard.services.risk_service import Finding, analyze_text


class TestRuleTable:
    """Structure of the default rule table."""

    def test_category_order_and_weights(self):
        assert [(c.name, c.weight) for c in SCAM_RULES] == [
            ("Urgency & Pressure", 8),
            ("Guaranteed Returns", 10),
            ("Too Good To Be True", 9),
            ("Phishing & Identity Theft", 10),
            ("Payment Red Flags", 9),
            ("Impersonation & Authority", 7),
            ("Poor Grammar & Formatting", 4),
        ]

    def test_pattern_counts(self):
        assert [len(c.patterns) for c in SCAM_RULES] == [10, 10, 9, 8, 10, 9, 6]

    def test_every_pattern_has_label(self):
        for category in SCAM_RULES:
            for pattern in category.patterns:
                assert pattern.label

    def test_table_is_immutable(self):
        assert isinstance(SCAM_RULES, tuple)
        assert isinstance(SCAM_RULES[0].patterns, tuple)
        with pytest.raises(dataclasses.FrozenInstanceError):
            SCAM_RULES[0].weight = 100
        with pytest.raises(dataclasses.FrozenInstanceError):
            SCAM_RULES[0].patterns[0].label = "changed"

    def test_describe_rules(self):
        summary = describe_rules()
        assert len(summary) == 7
        assert summary[1] == {"category": "Guaranteed Returns", "weight": 10, "patterns": 10}


class TestBuildRuleTable:
    """Validation when compiling rule definitions."""

    @pytest.mark.parametrize("weight", [0, -3, "8", 2.5, True])
    def test_rejects_bad_weight(self, weight):
        with pytest.raises(ValueError):
            build_rule_table([("Bad", weight, [(r"x", "X")])])

    def test_rejects_empty_label(self):
        with pytest.raises(ValueError):
            build_rule_table([("Bad", 3, [(r"x", "")])])

    def test_rejects_invalid_regex(self):
        with pytest.raises(ValueError, match="Invalid pattern"):
            build_rule_table([("Bad", 3, [(r"(unclosed", "Broken")])])

    def test_patterns_are_case_insensitive(self):
        (category,) = build_rule_table([("Test", 1, [(r"wire\s*transfer", "Wire")])])
        assert category.patterns[0].matches("WIRE Transfer")
        assert not category.patterns[0].matches("wired funds")


class TestPatternExamples:
    """One representative phrase per red flag family."""

    @pytest.mark.parametrize(
        "text, category, label",
        [
            ("Hurry, only 3 spots left!", "Urgency & Pressure", "Artificial scarcity"),
            ("This offer expires tonight.", "Urgency & Pressure", "Artificial deadline"),
            ("Reply within 24 hours.", "Urgency & Pressure", "Time-limited pressure"),
            ("Don't miss out on this.", "Urgency & Pressure", "Fear of missing out (FOMO)"),
            ("We guarantee 100x returns in 30 days", "Guaranteed Returns", "Unrealistic multiplier return"),
            ("We guarantee 100x returns in 30 days", "Guaranteed Returns", "Guaranteed returns claim"),
            ("Guaranteed monthly income for everyone", "Guaranteed Returns", "Guaranteed returns claim"),
            ("You will never lose a cent", "Guaranteed Returns", '"Never lose" promise'),
            ("Make $500 a day from home", "Too Good To Be True", "Unrealistic daily/weekly income claim"),
            ("Learn our secret formula", "Too Good To Be True", '"Secret method" claim'),
            ("Please verify your account", "Phishing & Identity Theft", "Account verification request"),
            ("Your account has been suspended", "Phishing & Identity Theft", "Account suspension threat"),
            ("Click here to claim", "Phishing & Identity Theft", "Suspicious link click request"),
            ("Bitcoin only, no cards", "Payment Red Flags", "Bitcoin payment demand"),
            ("Send it via Zelle", "Payment Red Flags", "P2P payment request (harder to reverse)"),
            ("A small processing fee applies", "Payment Red Flags", "Suspicious processing fee"),
            ("This is Microsoft Support calling", "Impersonation & Authority", "Microsoft support scam"),
            ("Your computer is infected", "Impersonation & Authority", "Fake device infection alert"),
            ("Dear Customer, please reply", "Poor Grammar & Formatting", "Generic greeting (mass-sent indicator)"),
            ("Kindly send the documents", "Poor Grammar & Formatting", '"Kindly" — common in scam scripts'),
            ("You are the beneficiary", "Poor Grammar & Formatting", '"Beneficiary" — common advance-fee scam term'),
            ("We owe you 5 million dollars", "Poor Grammar & Formatting", "Large currency amount mentioned"),
        ],
    )
    def test_phrase_is_flagged(self, text, category, label):
        assert Finding(category=category, label=label) in analyze_text(text).reasons

    @pytest.mark.parametrize(
        "text",
        [
            "Our quarterly report shows steady growth.",
            "The team meets every Tuesday to review the product roadmap.",
            "Revenue grew 12% year over year with healthy margins.",
        ],
    )
    def test_ordinary_text_is_clean(self, text):
        assert analyze_text(text).reasons == []
