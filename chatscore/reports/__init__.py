"""Report generation package - renders analysis scorecards.

- models.py: Data classes (Thresholds, ScoreLine, Scorecard)
- formatters.py: Score bands, status texts and markdown rendering
- generator.py: Console, markdown and PDF output
"""

from .formatters import build_scorecard, render_markdown, score_band
from .generator import ReportGenerator
from .models import Scorecard, ScoreLine, Thresholds

__all__ = [
    "ReportGenerator",
    "ScoreLine",
    "Scorecard",
    "Thresholds",
    "build_scorecard",
    "render_markdown",
    "score_band",
]
