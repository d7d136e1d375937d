"""Render scorecards to the console, markdown and PDF."""

from datetime import datetime
from pathlib import Path

from loguru import logger
from reportlab.lib import colors
from reportlab.lib.pagesizes import letter
from reportlab.lib.styles import ParagraphStyle, getSampleStyleSheet
from reportlab.lib.units import inch
from reportlab.platypus import (
    Flowable,
    Paragraph,
    SimpleDocTemplate,
    Spacer,
    Table,
    TableStyle,
)
from rich.console import Console
from rich.table import Table as RichTable

from ..constants import LogMessage, ScoreBand
from ..models import AnalysisResult
from .formatters import (
    FALLBACK_CAPTION,
    build_scorecard,
    format_score,
    render_markdown,
)
from .models import Scorecard, Thresholds

BAND_STYLES: dict[str, str] = {
    ScoreBand.GOOD: "green",
    ScoreBand.FAIR: "yellow",
    ScoreBand.POOR: "red",
}

BAND_COLORS = {
    ScoreBand.GOOD: colors.HexColor("#22c55e"),
    ScoreBand.FAIR: colors.HexColor("#eab308"),
    ScoreBand.POOR: colors.HexColor("#ef4444"),
}


class ReportGenerator:
    """Generate scorecard reports for a single analysis."""

    def __init__(
        self,
        analysis: AnalysisResult,
        title: str = "Conversation",
        thresholds: Thresholds = Thresholds(),
    ):
        self.analysis = analysis
        self.scorecard: Scorecard = build_scorecard(
            analysis, title=title, thresholds=thresholds
        )

    def print_scorecard(self, console: Console | None = None) -> None:
        """Print the scorecard as a rich table."""
        console = console or Console()
        card = self.scorecard

        table = RichTable(title=f"{card.title}: {format_score(card.overall)}")
        table.add_column("Metric", style="bold")
        table.add_column("Score", justify="right")

        for line in card.scores:
            style = BAND_STYLES.get(line.band, "")
            table.add_row(line.label, f"[{style}]{format_score(line.score)}[/{style}]")

        table.add_row("Sentiment", card.sentiment)
        table.add_row("Fallbacks", f"{card.fallbacks} {FALLBACK_CAPTION}")
        table.add_row("Resolution", card.resolution)
        table.add_row("Escalation Needed", card.escalation)

        console.print(table)

    def generate_markdown_report(self, output_path: Path) -> None:
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(render_markdown(self.scorecard))
        logger.success(LogMessage.SAVED_REPORT.format(output_path))

    def generate_pdf_report(self, output_path: Path) -> None:
        """Generate a PDF version of the scorecard.

        Args:
            output_path: Path where PDF should be saved
        """
        logger.info("Generating PDF report...")

        output_path.parent.mkdir(parents=True, exist_ok=True)
        card = self.scorecard

        doc = SimpleDocTemplate(
            str(output_path),
            pagesize=letter,
            rightMargin=0.75 * inch,
            leftMargin=0.75 * inch,
            topMargin=0.75 * inch,
            bottomMargin=0.75 * inch,
        )

        styles = getSampleStyleSheet()
        title_style = ParagraphStyle(
            "CustomTitle",
            parent=styles["Heading1"],
            fontSize=24,
            textColor=colors.HexColor("#2563eb"),
            spaceAfter=30,
        )
        heading_style = ParagraphStyle(
            "CustomHeading", parent=styles["Heading2"], fontSize=16, spaceAfter=12
        )

        story: list[Flowable] = []

        story.append(Paragraph(card.title, title_style))
        story.append(
            Paragraph(
                f"Generated: {datetime.now().strftime('%Y-%m-%d %H:%M')}",
                styles["Normal"],
            )
        )
        story.append(Spacer(1, 0.3 * inch))

        story.append(Paragraph("Overall Satisfaction Score", heading_style))
        story.append(Paragraph(format_score(card.overall), styles["Heading1"]))
        story.append(Spacer(1, 0.3 * inch))

        story.append(Paragraph("Scores", heading_style))
        score_data = [["Metric", "Score", "Band"]]
        score_data.extend(
            [line.label, format_score(line.score), line.band] for line in card.scores
        )
        score_table = Table(
            score_data, colWidths=[2.5 * inch, 1.5 * inch, 1.5 * inch]
        )
        table_style = [
            ("BACKGROUND", (0, 0), (-1, 0), colors.grey),
            ("TEXTCOLOR", (0, 0), (-1, 0), colors.whitesmoke),
            ("ALIGN", (0, 0), (-1, -1), "LEFT"),
            ("FONTNAME", (0, 0), (-1, 0), "Helvetica-Bold"),
            ("FONTSIZE", (0, 0), (-1, 0), 12),
            ("BOTTOMPADDING", (0, 0), (-1, 0), 12),
            ("GRID", (0, 0), (-1, -1), 1, colors.black),
        ]
        for row, line in enumerate(card.scores, start=1):
            band_color = BAND_COLORS.get(line.band)
            if band_color is not None:
                table_style.append(("TEXTCOLOR", (2, row), (2, row), band_color))
        score_table.setStyle(TableStyle(table_style))
        story.append(score_table)
        story.append(Spacer(1, 0.3 * inch))

        story.append(Paragraph("Outcome", heading_style))
        outcome_data = [
            ["Sentiment", card.sentiment],
            ["Fallbacks", f"{card.fallbacks} {FALLBACK_CAPTION}"],
            ["Resolution", card.resolution],
            ["Escalation Needed", card.escalation],
        ]
        outcome_table = Table(outcome_data, colWidths=[2.5 * inch, 3.0 * inch])
        outcome_table.setStyle(
            TableStyle(
                [
                    ("ALIGN", (0, 0), (-1, -1), "LEFT"),
                    ("FONTNAME", (0, 0), (0, -1), "Helvetica-Bold"),
                    ("GRID", (0, 0), (-1, -1), 1, colors.black),
                ]
            )
        )
        story.append(outcome_table)

        doc.build(story)
        logger.success(LogMessage.SAVED_REPORT.format(output_path))
