"""Aggregate individual conversation analysis JSONs into a flat CSV."""

import json
from pathlib import Path
from typing import Any

import pandas as pd
from loguru import logger

from .constants import AnalysisKey, LogMessage, Sentiment, SummaryStatisticKey

SCORE_COLUMNS: list[str] = [
    AnalysisKey.CLARITY_SCORE,
    AnalysisKey.RELEVANCE_SCORE,
    AnalysisKey.ACCURACY_SCORE,
    AnalysisKey.COMPLETENESS_SCORE,
    AnalysisKey.EMPATHY_SCORE,
    AnalysisKey.RESPONSE_TIME_AVG,
    AnalysisKey.OVERALL_SATISFACTION_SCORE,
]


def flatten_analysis(conversation_id: str, data: dict) -> dict[str, Any]:
    """Flatten an analysis JSON into a single row.

    Args:
        conversation_id: The conversation ID (from the record, else the filename)
        data: The parsed JSON data

    Returns:
        Row dictionary with one column per analysis field
    """
    row: dict[str, Any] = {
        AnalysisKey.CONVERSATION_ID: data.get(AnalysisKey.CONVERSATION_ID)
        or conversation_id
    }
    for key in AnalysisKey:
        if key == AnalysisKey.CONVERSATION_ID:
            continue
        row[key] = data.get(key)
    return {str(k): v for k, v in row.items()}


def aggregate_analyses(analyses_dir: Path, output_path: Path) -> pd.DataFrame:
    """Aggregate all analysis JSONs in a directory into a single CSV.

    Args:
        analyses_dir: Directory containing individual analysis JSON files
        output_path: Path where the aggregated CSV should be saved

    Returns:
        DataFrame with aggregated data
    """
    if not analyses_dir.exists():
        logger.error(f"Directory {analyses_dir} does not exist")
        return pd.DataFrame()

    json_files = sorted(analyses_dir.glob("*.json"))
    logger.info(f"Found {len(json_files)} analysis files")

    if not json_files:
        logger.warning("No JSON files found to process")
        return pd.DataFrame()

    rows = []
    for json_file in json_files:
        try:
            with json_file.open("r") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logger.warning(f"Skipping unreadable analysis {json_file}: {e}")
            continue

        if not isinstance(data, dict):
            logger.warning(f"Skipping {json_file}: not an analysis record")
            continue

        rows.append(flatten_analysis(json_file.stem, data))

    df = pd.DataFrame(rows)
    if df.empty:
        return df

    df = df.sort_values(
        by=str(AnalysisKey.OVERALL_SATISFACTION_SCORE), ascending=True
    ).reset_index(drop=True)

    output_path.parent.mkdir(parents=True, exist_ok=True)
    df.to_csv(output_path, index=False)
    logger.success(LogMessage.SAVED_CSV.format(len(df), output_path))

    return df


def summarize(df: pd.DataFrame) -> dict[str, Any]:
    """Compute summary statistics over aggregated analyses.

    Args:
        df: DataFrame returned by :func:`aggregate_analyses`

    Returns:
        Dictionary with averages per score, sentiment counts, resolution and
        escalation percentages, and the total fallback count
    """
    total = len(df)
    summary: dict[str, Any] = {str(SummaryStatisticKey.TOTAL_ANALYZED): total}
    if total == 0:
        return summary

    for column in SCORE_COLUMNS:
        summary[f"{SummaryStatisticKey.AVERAGE_PREFIX}{column}"] = round(
            float(pd.to_numeric(df[str(column)], errors="coerce").mean()), 2
        )

    sentiment_counts = df[str(AnalysisKey.SENTIMENT)].value_counts()
    summary[str(SummaryStatisticKey.SENTIMENT_COUNTS)] = {
        str(label): int(sentiment_counts.get(str(label), 0)) for label in Sentiment
    }

    resolved = df[str(AnalysisKey.RESOLUTION_RATE)].fillna(False).astype(bool)
    escalated = df[str(AnalysisKey.ESCALATION_NEEDED)].fillna(False).astype(bool)
    summary[str(SummaryStatisticKey.RESOLUTION_PCT)] = round(
        float(resolved.mean()) * 100, 2
    )
    summary[str(SummaryStatisticKey.ESCALATION_PCT)] = round(
        float(escalated.mean()) * 100, 2
    )
    summary[str(SummaryStatisticKey.TOTAL_FALLBACKS)] = int(
        pd.to_numeric(df[str(AnalysisKey.FALLBACK_FREQUENCY)], errors="coerce")
        .fillna(0)
        .sum()
    )

    return summary
