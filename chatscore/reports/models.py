"""Data models for report generation."""

from dataclasses import dataclass


@dataclass(frozen=True)
class Thresholds:
    """Score band cut-offs used when displaying scores."""

    good: float = 80.0
    fair: float = 60.0


@dataclass
class ScoreLine:
    """One labelled score on a scorecard."""

    label: str
    score: float
    band: str  # "good", "fair", "poor"


@dataclass
class Scorecard:
    """Display-ready view of an analysis result."""

    title: str
    overall: float
    scores: list[ScoreLine]
    sentiment: str
    fallbacks: int
    resolution: str
    escalation: str
