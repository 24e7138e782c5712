"""
Scam pattern rule table.

Each category has a name, an integer weight and an ordered list of
(regex, label) entries. The table is compiled once at import and is
read-only afterwards; ordering here fixes the ordering of findings.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Iterable, Sequence, Tuple


@dataclass(frozen=True)
class Pattern:
    """A single case-insensitive lexical test and the red flag it reports."""
    regex: "re.Pattern[str]"
    label: str

    def matches(self, text: str) -> bool:
        return self.regex.search(text) is not None


@dataclass(frozen=True)
class Category:
    name: str
    weight: int
    patterns: Tuple[Pattern, ...]


RuleTable = Tuple[Category, ...]

RuleDefinition = Tuple[str, int, Sequence[Tuple[str, str]]]


def build_rule_table(definitions: Iterable[RuleDefinition]) -> RuleTable:
    """
    Compile plain rule definitions into an immutable rule table.

    Raises:
        ValueError: on a non-positive weight, an empty label or a bad regex.
    """
    categories = []
    for name, weight, entries in definitions:
        if isinstance(weight, bool) or not isinstance(weight, int) or weight <= 0:
            raise ValueError(f"Category '{name}' needs a positive integer weight, got {weight!r}")

        patterns = []
        for expression, label in entries:
            if not label:
                raise ValueError(f"Pattern {expression!r} in '{name}' has no label")
            try:
                compiled = re.compile(expression, re.IGNORECASE)
            except re.error as e:
                raise ValueError(f"Invalid pattern {expression!r} in '{name}': {e}") from e
            patterns.append(Pattern(regex=compiled, label=label))

        categories.append(Category(name=name, weight=weight, patterns=tuple(patterns)))

    return tuple(categories)


# ==========================================================================
# DEFAULT SCAM RULES
# ==========================================================================

SCAM_RULE_DEFINITIONS: Tuple[RuleDefinition, ...] = (
    (
        "Urgency & Pressure",
        8,
        [
            (r"act\s*now", '"Act now" pressure tactic'),
            (r"limited\s*time", '"Limited time" urgency'),
            (r"hurry", '"Hurry" pressure language'),
            (r"don'?t\s*miss\s*out", "Fear of missing out (FOMO)"),
            (r"expires?\s*(soon|today|tonight|tomorrow)", "Artificial deadline"),
            (r"last\s*chance", '"Last chance" pressure'),
            (r"only\s*\d+\s*(left|remaining|spots?|seats?)", "Artificial scarcity"),
            (r"respond\s*(immediately|urgently|asap)", "Urgent response demand"),
            (r"within\s*\d+\s*(hours?|minutes?)", "Time-limited pressure"),
            (r"before\s*it'?s?\s*too\s*late", '"Before it\'s too late" fear tactic'),
        ],
    ),
    (
        "Guaranteed Returns",
        10,
        [
            # up to two words may sit between the claim and the noun ("guaranteed 100% profit")
            (r"guarantee[ds]?\s*(?:\S+\s+){0,2}?(return|profit|income|earning)", "Guaranteed returns claim"),
            (r"100%\s*(safe|secure|guaranteed|profit)", "100% safety/profit claim"),
            (r"no\s*risk", '"No risk" claim'),
            (r"risk[- ]?free", '"Risk-free" claim'),
            (r"double\s*your\s*(money|investment)", '"Double your money" promise'),
            (r"(\d{2,})[x×]\s*return", "Unrealistic multiplier return"),
            (r"get\s*rich\s*(quick|fast)", '"Get rich quick" language'),
            (r"passive\s*income\s*(guaranteed|every)", "Guaranteed passive income"),
            (r"zero\s*(risk|loss)", '"Zero risk/loss" claim'),
            (r"never\s*lose", '"Never lose" promise'),
        ],
    ),
    (
        "Too Good To Be True",
        9,
        [
            (r"make\s*\$?\d[\d,]*\s*(a\s*day|daily|per\s*day|weekly)", "Unrealistic daily/weekly income claim"),
            (r"earn\s*\$?\d[\d,]*\s*(a\s*day|daily|per\s*day|weekly)", "Unrealistic earning claim"),
            (r"secret\s*(method|system|formula|strategy|technique)", '"Secret method" claim'),
            (r"exclusive\s*(opportunity|offer|access|deal)", '"Exclusive opportunity" bait'),
            (r"millionaire", "Millionaire promise"),
            (r"life[- ]?changing\s*(opportunity|money|wealth)", '"Life-changing" wealth promise'),
            (r"financial\s*freedom", '"Financial freedom" lure'),
            (r"quit\s*your\s*job", '"Quit your job" promise'),
            (r"free\s*money", '"Free money" claim'),
        ],
    ),
    (
        "Phishing & Identity Theft",
        10,
        [
            (r"verify\s*your\s*(account|identity|information)", "Account verification request"),
            (r"update\s*your\s*(payment|billing|bank|card)", "Payment info update request"),
            (r"confirm\s*your\s*(ssn|social\s*security|password|pin)", "Sensitive data request"),
            (r"click\s*(here|this\s*link|below)\s*(to|for|immediately)", "Suspicious link click request"),
            (
                r"your\s*account\s*(has\s*been|will\s*be)\s*(suspended|locked|closed|disabled)",
                "Account suspension threat",
            ),
            (r"unauthorized\s*(access|activity|transaction)", "Fake unauthorized activity alert"),
            (r"login\s*(attempt|detected)", "Fake login alert"),
            (r"unusual\s*(activity|sign[- ]?in)", "Fake unusual activity alert"),
        ],
    ),
    (
        "Payment Red Flags",
        9,
        [
            (r"wire\s*transfer", "Wire transfer request"),
            (r"gift\s*card", "Gift card payment request"),
            (r"cryptocurrency\s*(only|payment|deposit)", "Crypto-only payment demand"),
            (r"bitcoin\s*(only|payment|send|deposit)", "Bitcoin payment demand"),
            (r"western\s*union", "Western Union payment"),
            (r"moneygram", "MoneyGram payment"),
            (r"pay\s*(upfront|in\s*advance|before)", "Upfront payment demand"),
            (r"processing\s*fee", "Suspicious processing fee"),
            (r"send\s*\$?\d[\d,]*\s*(to|now|today)", "Direct money send request"),
            (r"cash\s*app|venmo|zelle", "P2P payment request (harder to reverse)"),
        ],
    ),
    (
        "Impersonation & Authority",
        7,
        [
            (r"irs|internal\s*revenue", "IRS impersonation"),
            (r"fbi|federal\s*bureau", "FBI impersonation"),
            (r"social\s*security\s*(administration|office)", "SSA impersonation"),
            (r"microsoft\s*(support|security|team)", "Microsoft support scam"),
            (r"apple\s*(support|security|id)", "Apple support scam"),
            (r"amazon\s*(support|security|prime)", "Amazon impersonation"),
            (r"your\s*(computer|device)\s*(has|is)\s*(infected|compromised|hacked)", "Fake device infection alert"),
            (r"technical\s*support", "Tech support scam indicator"),
            (r"prince|royalty|inheritance", "Classic inheritance/royalty scam"),
        ],
    ),
    (
        "Poor Grammar & Formatting",
        4,
        [
            (r"dear\s*(sir|madam|friend|customer|user|member|valued)", "Generic greeting (mass-sent indicator)"),
            (r"congratulations?\s*!?\s*(you|your)", '"Congratulations" unsolicited message'),
            (r"you\s*(have\s*been|are)\s*(selected|chosen|picked)\s*(as\s*a)?", '"You have been selected" scam opener'),
            (r"kindly\s*(send|provide|share|click|transfer|reply)", '"Kindly" — common in scam scripts'),
            (r"million\s*(dollars?|usd|pounds?|euros?)", "Large currency amount mentioned"),
            (r"beneficiary", '"Beneficiary" — common advance-fee scam term'),
        ],
    ),
)

SCAM_RULES: RuleTable = build_rule_table(SCAM_RULE_DEFINITIONS)


def describe_rules(rules: RuleTable = SCAM_RULES) -> list:
    """Category summary for status/diagnostic output."""
    return [
        {"category": c.name, "weight": c.weight, "patterns": len(c.patterns)}
        for c in rules
    ]
