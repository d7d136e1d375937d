"""CLI interface for chat transcript scoring."""

import asyncio
import json
from collections.abc import Callable, Coroutine
from pathlib import Path
from typing import Any

import typer
import uvicorn
from loguru import logger

from .aggregator import aggregate_analyses, summarize
from .analyzers.scorer import ConversationScorer
from .config import Settings, get_settings
from .constants import (
    DEFAULT_AGGREGATE_OUTPUT,
    DEFAULT_ANALYSIS_OUTPUT,
    DEFAULT_SERVER_HOST,
    DEFAULT_SERVER_PORT,
    EXIT_CODE_ERROR,
    JSON_INDENT,
    CliHelp,
    LogMessage,
)
from .exceptions import ChatScoreError
from .reports import ReportGenerator
from .service import AnalysisService
from .storage import AnalysisStorage
from .store import SupabaseStore

app = typer.Typer(help=CliHelp.APP)


def _run_guarded(action: Callable[[], Any]) -> Any:
    """Run a command body, logging failures and exiting with an error code."""
    try:
        return action()
    except ChatScoreError as e:
        logger.error(LogMessage.ERROR_OCCURRED.format(e))
    except Exception as e:
        logger.exception(LogMessage.ERROR_OCCURRED.format(e))
    raise typer.Exit(code=EXIT_CODE_ERROR)


def _build_settings(supabase_url: str | None, supabase_key: str | None) -> Settings:
    overrides = {
        "SUPABASE_URL": supabase_url,
        "SUPABASE_SERVICE_ROLE_KEY": supabase_key,
    }
    return get_settings().model_copy(
        update={k: v for k, v in overrides.items() if v is not None}
    )


def _with_service(
    settings: Settings,
    work: Callable[[AnalysisService], Coroutine[Any, Any, Any]],
) -> Any:
    async def _run() -> Any:
        async with SupabaseStore.from_settings(settings) as store:
            return await work(AnalysisService(store=store))

    return asyncio.run(_run())


def _write_reports(
    generator: ReportGenerator, markdown: Path | None, pdf: Path | None
) -> None:
    if markdown is not None:
        generator.generate_markdown_report(output_path=markdown)
    if pdf is not None:
        generator.generate_pdf_report(output_path=pdf)


SupabaseUrlOption = typer.Option(
    None, "--supabase-url", envvar="SUPABASE_URL", help=CliHelp.SUPABASE_URL
)
SupabaseKeyOption = typer.Option(
    None,
    "--supabase-key",
    envvar="SUPABASE_SERVICE_ROLE_KEY",
    help=CliHelp.SUPABASE_KEY,
)


@app.command()
def score(
    transcript: Path = typer.Argument(..., help=CliHelp.TRANSCRIPT),
    output: Path = typer.Option(
        DEFAULT_ANALYSIS_OUTPUT, "--output", "-o", help=CliHelp.ANALYSIS_OUTPUT
    ),
    csv_output: Path = typer.Option(None, "--csv", help=CliHelp.CSV_OUTPUT),
    markdown: Path = typer.Option(None, "--markdown", help=CliHelp.MARKDOWN_OUTPUT),
    pdf: Path = typer.Option(None, "--pdf", help=CliHelp.PDF_OUTPUT),
) -> None:
    """Score a local transcript file and save the scorecard.

    The transcript is a JSON array of messages, each with a ``sender`` of
    ``user`` or ``ai`` and the text under ``content`` (or ``message``).
    """

    def _score() -> None:
        storage = AnalysisStorage()
        messages = storage.load_transcript(filepath=transcript)
        result = ConversationScorer().score(messages=messages)

        storage.save_analysis(
            analysis=result, filepath=output, conversation_id=transcript.stem
        )
        if csv_output is not None:
            storage.save_analyses_csv(
                records=[result.to_record(conversation_id=transcript.stem)],
                filepath=csv_output,
            )

        generator = ReportGenerator(result, title=transcript.stem)
        generator.print_scorecard()
        _write_reports(generator, markdown, pdf)

    _run_guarded(_score)


@app.command()
def upload(
    transcript: Path = typer.Argument(..., help=CliHelp.TRANSCRIPT),
    title: str = typer.Option(..., "--title", "-t", help=CliHelp.TITLE),
    user_id: str = typer.Option(..., "--user-id", "-u", help=CliHelp.USER_ID),
    supabase_url: str = SupabaseUrlOption,
    supabase_key: str = SupabaseKeyOption,
) -> None:
    """Upload a transcript file as a new stored conversation."""

    def _upload() -> None:
        messages = AnalysisStorage().load_transcript(filepath=transcript)
        conversation_id = _with_service(
            _build_settings(supabase_url, supabase_key),
            lambda service: service.upload_conversation(
                title=title, user_id=user_id, messages=messages
            ),
        )
        typer.echo(conversation_id)

    _run_guarded(_upload)


@app.command()
def analyze(
    conversation_id: str = typer.Argument(..., help=CliHelp.CONVERSATION_ID),
    output: Path = typer.Option(
        None, "--output", "-o", help=CliHelp.ANALYSIS_OUTPUT
    ),
    supabase_url: str = SupabaseUrlOption,
    supabase_key: str = SupabaseKeyOption,
) -> None:
    """Analyze a stored conversation and save the result to the backend."""

    def _analyze() -> None:
        result = _with_service(
            _build_settings(supabase_url, supabase_key),
            lambda service: service.analyze_conversation(
                conversation_id=conversation_id
            ),
        )
        if output is not None:
            AnalysisStorage().save_analysis(
                analysis=result, filepath=output, conversation_id=conversation_id
            )
        ReportGenerator(result, title=conversation_id).print_scorecard()

    _run_guarded(_analyze)


@app.command("analyze-pending")
def analyze_pending(
    user_id: str = typer.Option(..., "--user-id", "-u", help=CliHelp.USER_ID),
    csv_output: Path = typer.Option(None, "--csv", help=CliHelp.CSV_OUTPUT),
    supabase_url: str = SupabaseUrlOption,
    supabase_key: str = SupabaseKeyOption,
) -> None:
    """Analyze every conversation of a user that has not been analyzed yet."""

    def _analyze_pending() -> None:
        results = _with_service(
            _build_settings(supabase_url, supabase_key),
            lambda service: service.analyze_pending(user_id=user_id),
        )
        logger.success(f"Analyzed {len(results)} conversations")
        if csv_output is not None:
            AnalysisStorage().save_analyses_csv(
                records=[
                    result.to_record(conversation_id=conversation_id)
                    for conversation_id, result in results.items()
                ],
                filepath=csv_output,
            )

    _run_guarded(_analyze_pending)


@app.command()
def aggregate(
    analyses_dir: Path = typer.Argument(..., help=CliHelp.ANALYSES_DIR),
    output: Path = typer.Option(
        DEFAULT_AGGREGATE_OUTPUT, "--output", "-o", help=CliHelp.AGGREGATE_OUTPUT
    ),
) -> None:
    """Aggregate saved analysis JSON files into a CSV and print a summary."""

    def _aggregate() -> None:
        df = aggregate_analyses(analyses_dir=analyses_dir, output_path=output)
        typer.echo(json.dumps(summarize(df), indent=JSON_INDENT))

    _run_guarded(_aggregate)


@app.command()
def report(
    analysis_file: Path = typer.Argument(..., help=CliHelp.ANALYSIS_OUTPUT),
    title: str = typer.Option("Conversation", "--title", "-t", help=CliHelp.TITLE),
    markdown: Path = typer.Option(None, "--markdown", help=CliHelp.MARKDOWN_OUTPUT),
    pdf: Path = typer.Option(None, "--pdf", help=CliHelp.PDF_OUTPUT),
) -> None:
    """Render a saved analysis JSON as a scorecard."""

    def _report() -> None:
        result = AnalysisStorage().load_analysis(filepath=analysis_file)
        generator = ReportGenerator(result, title=title)
        generator.print_scorecard()
        _write_reports(generator, markdown, pdf)

    _run_guarded(_report)


@app.command()
def serve(
    host: str = typer.Option(DEFAULT_SERVER_HOST, "--host", help=CliHelp.HOST),
    port: int = typer.Option(DEFAULT_SERVER_PORT, "--port", "-p", help=CliHelp.PORT),
) -> None:
    """Run the analysis API server."""
    uvicorn.run("chatscore.api:app", host=host, port=port)
