"""Utilities for formatting analysis results for display."""

from ..constants import AnalysisKey, ScoreBand
from ..models import AnalysisResult
from .models import Scorecard, ScoreLine, Thresholds

SCORE_LABELS: dict[str, str] = {
    AnalysisKey.CLARITY_SCORE: "Clarity",
    AnalysisKey.RELEVANCE_SCORE: "Relevance",
    AnalysisKey.ACCURACY_SCORE: "Accuracy",
    AnalysisKey.COMPLETENESS_SCORE: "Completeness",
    AnalysisKey.EMPATHY_SCORE: "Empathy",
    AnalysisKey.RESPONSE_TIME_AVG: "Response Time",
}

FALLBACK_CAPTION = 'times AI said "I don\'t know"'


def score_band(score: float, thresholds: Thresholds = Thresholds()) -> ScoreBand:
    """Classify a score into a display band.

    Args:
        score: Score in [0, 100]
        thresholds: Band cut-offs

    Returns:
        GOOD at or above ``thresholds.good``, FAIR at or above
        ``thresholds.fair``, otherwise POOR
    """
    if score >= thresholds.good:
        return ScoreBand.GOOD
    if score >= thresholds.fair:
        return ScoreBand.FAIR
    return ScoreBand.POOR


def format_score(score: float) -> str:
    return f"{score:.1f}/100"


def format_sentiment(sentiment: str) -> str:
    return sentiment[:1].upper() + sentiment[1:]


def resolution_text(resolved: bool) -> str:
    return "Yes, resolved" if resolved else "Not resolved"


def escalation_text(escalation_needed: bool) -> str:
    return "Yes, needs escalation" if escalation_needed else "No escalation needed"


def build_scorecard(
    analysis: AnalysisResult,
    title: str = "Conversation",
    thresholds: Thresholds = Thresholds(),
) -> Scorecard:
    """Turn an analysis result into a display-ready scorecard.

    Args:
        analysis: The analysis result
        title: Heading for the scorecard
        thresholds: Band cut-offs

    Returns:
        Scorecard with labelled, banded scores and status texts
    """
    data = analysis.to_dict()
    scores = [
        ScoreLine(
            label=label,
            score=data[key],
            band=str(score_band(data[key], thresholds)),
        )
        for key, label in SCORE_LABELS.items()
    ]

    return Scorecard(
        title=title,
        overall=analysis.overall_satisfaction_score,
        scores=scores,
        sentiment=format_sentiment(str(analysis.sentiment)),
        fallbacks=analysis.fallback_frequency,
        resolution=resolution_text(analysis.resolution_rate),
        escalation=escalation_text(analysis.escalation_needed),
    )


def render_markdown(scorecard: Scorecard) -> str:
    """Render a scorecard as markdown text."""
    lines = [
        f"# {scorecard.title}",
        "",
        f"**Overall Satisfaction Score:** {format_score(scorecard.overall)}",
        "",
        "| Metric | Score | Band |",
        "|---|---|---|",
    ]
    for line in scorecard.scores:
        lines.append(f"| {line.label} | {format_score(line.score)} | {line.band} |")

    lines.extend(
        [
            "",
            f"- **Sentiment:** {scorecard.sentiment}",
            f"- **Fallbacks:** {scorecard.fallbacks} {FALLBACK_CAPTION}",
            f"- **Resolution:** {scorecard.resolution}",
            f"- **Escalation Needed:** {scorecard.escalation}",
        ]
    )
    return "\n".join(lines) + "\n"
