"""
Rule-based scam risk scoring.

Every pattern in the rule table is tested against the normalized text.
Each match adds its category's weight to a raw score, which is scaled
against SCORE_CEILING into a 0-100 risk score.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field, asdict
from typing import Any, Dict, List, Optional

from scamguard.services.rules import SCAM_RULES, RuleTable
from scamguard.utils.preprocessing import normalize_text

# Calibration: raw weight that maps to a score of 100. Roughly six or
# seven top-weighted matches saturate the scale.
SCORE_CEILING = 60

HIGH_RISK_THRESHOLD = 60
MEDIUM_RISK_THRESHOLD = 30


@dataclass(frozen=True)
class RiskTier:
    status: str
    label: str
    color: str
    min_score: int
    recommendation: str


HIGH_RISK = RiskTier(
    status="High Risk",
    label="Likely a Scam",
    color="red",
    min_score=HIGH_RISK_THRESHOLD,
    recommendation=(
        "This content contains multiple strong scam indicators. Do NOT share personal "
        "information, click any links, or send money. Report this to the appropriate authorities."
    ),
)

MEDIUM_RISK = RiskTier(
    status="Medium Risk",
    label="Suspicious Content",
    color="yellow",
    min_score=MEDIUM_RISK_THRESHOLD,
    recommendation=(
        "This content shows some suspicious characteristics. Proceed with extreme caution. "
        "Verify the sender through official channels before taking any action."
    ),
)

LOW_RISK = RiskTier(
    status="Low Risk",
    label="Appears Legitimate",
    color="green",
    min_score=0,
    recommendation=(
        "This content appears relatively safe, but always stay vigilant. If something feels "
        "off, trust your instincts and verify independently."
    ),
)

# Highest band first
RISK_TIERS = (HIGH_RISK, MEDIUM_RISK, LOW_RISK)

NO_TEXT_RECOMMENDATION = "No text was provided for analysis."


@dataclass(frozen=True)
class Finding:
    """One matched pattern."""
    category: str
    label: str


@dataclass
class AnalysisResult:
    score: int
    status: str
    status_label: str
    status_color: str
    reasons: List[Finding] = field(default_factory=list)
    recommendation: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def tier_for_score(score: int) -> RiskTier:
    for tier in RISK_TIERS:
        if score >= tier.min_score:
            return tier
    return LOW_RISK


def normalize_score(raw_score: int, ceiling: int = SCORE_CEILING) -> int:
    """Scale a raw weight sum to 0-100, rounding halves up."""
    scaled = math.floor(raw_score / ceiling * 100 + 0.5)
    return max(0, min(100, scaled))


def empty_result() -> AnalysisResult:
    return AnalysisResult(
        score=0,
        status=LOW_RISK.status,
        status_label=LOW_RISK.label,
        status_color=LOW_RISK.color,
        reasons=[],
        recommendation=NO_TEXT_RECOMMENDATION,
    )


class RiskScorer:
    """
    Scores text against an injected rule table.

    Holds no per-call state, so a single instance can be shared across
    threads and requests.
    """

    def __init__(self, rules: RuleTable = SCAM_RULES, ceiling: int = SCORE_CEILING):
        if ceiling <= 0:
            raise ValueError(f"ceiling must be positive, got {ceiling!r}")
        self.rules = rules
        self.ceiling = ceiling

    def analyze(self, text: Optional[str]) -> AnalysisResult:
        if not isinstance(text, str) or not text.strip():
            return empty_result()

        normalized = normalize_text(text)
        reasons: List[Finding] = []
        raw_score = 0

        for category in self.rules:
            for pattern in category.patterns:
                if pattern.matches(normalized):
                    raw_score += category.weight
                    reasons.append(Finding(category=category.name, label=pattern.label))

        score = normalize_score(raw_score, self.ceiling)
        tier = tier_for_score(score)

        return AnalysisResult(
            score=score,
            status=tier.status,
            status_label=tier.label,
            status_color=tier.color,
            reasons=reasons,
            recommendation=tier.recommendation,
        )


default_scorer = RiskScorer()


def analyze_text(text: Optional[str]) -> AnalysisResult:
    """Score text with the default scam rule table."""
    return default_scorer.analyze(text)
