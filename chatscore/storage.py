"""Local storage for transcripts and analysis results."""

import json
from pathlib import Path
from typing import Any

import polars as pl
from loguru import logger

from .constants import (
    DEFAULT_ANALYSIS_OUTPUT,
    JSON_INDENT,
    AnalysisKey,
    LogMessage,
)
from .models import AnalysisResult, Message, parse_messages


class AnalysisStorage:
    """Handles reading transcripts and saving analysis results to disk."""

    def load_transcript(self, *, filepath: Path | str) -> list[Message]:
        """Load a transcript JSON file.

        The file must hold a JSON array of ``{sender, content}`` (or
        ``{sender, message}``) objects.

        Args:
            filepath: Path to the transcript file.

        Returns:
            list[Message]: Messages in file order.

        Raises:
            InvalidTranscriptError: If the file content is not a list of messages.
        """
        filepath = Path(filepath)

        with filepath.open("r") as f:
            data = json.load(f)

        messages = parse_messages(data=data)
        logger.info(LogMessage.LOADED_TRANSCRIPT.format(len(messages), filepath))
        return messages

    def save_analysis(
        self,
        *,
        analysis: AnalysisResult,
        filepath: Path | str = DEFAULT_ANALYSIS_OUTPUT,
        conversation_id: str | None = None,
    ) -> None:
        """Save an analysis result to a JSON file.

        Args:
            analysis: Scorecard to save.
            filepath: Path where the JSON file should be saved.
            conversation_id: Optional conversation ID to include in the record.
        """
        filepath = Path(filepath)
        filepath.parent.mkdir(parents=True, exist_ok=True)

        data = (
            analysis.to_record(conversation_id=conversation_id)
            if conversation_id is not None
            else analysis.to_dict()
        )

        with filepath.open("w") as f:
            json.dump(data, f, indent=JSON_INDENT, default=str)

        logger.success(LogMessage.SAVED_ANALYSIS.format(filepath))

    def load_analysis(self, *, filepath: Path | str) -> AnalysisResult:
        filepath = Path(filepath)

        with filepath.open("r") as f:
            data = json.load(f)

        return AnalysisResult.from_dict(data=data)

    def save_analyses_csv(
        self,
        *,
        records: list[dict[str, Any]],
        filepath: Path | str,
    ) -> None:
        """Save analysis records to a CSV file using Polars.

        Rows are sorted by overall satisfaction score, lowest first, so the
        conversations needing attention come first.

        Args:
            records: Flat analysis records (see ``AnalysisResult.to_record``).
            filepath: Path where the CSV file should be saved.
        """
        filepath = Path(filepath)

        if not records:
            logger.warning("No analyses found to save to CSV")
            return

        df = pl.DataFrame([{str(k): v for k, v in row.items()} for row in records])
        df = df.sort(str(AnalysisKey.OVERALL_SATISFACTION_SCORE), descending=False)

        filepath.parent.mkdir(parents=True, exist_ok=True)
        df.write_csv(filepath)

        logger.success(LogMessage.SAVED_CSV.format(len(df), filepath))
