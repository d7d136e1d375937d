import json

import pytest
from typer.testing import CliRunner

from chatscore.analyzers import score
from chatscore.cli import app

runner = CliRunner()


@pytest.fixture
def transcript(tmp_path):
    path = tmp_path / "order.json"
    path.write_text(
        json.dumps(
            [
                {"sender": "user", "content": "Hi, I need help with my order."},
                {"sender": "ai", "content": "Sure, can you please share your order ID?"},
            ]
        )
    )
    return path


def test_score_writes_analysis(transcript, tmp_path):
    output = tmp_path / "analysis.json"
    markdown = tmp_path / "card.md"

    result = runner.invoke(
        app,
        [
            "score",
            str(transcript),
            "--output",
            str(output),
            "--markdown",
            str(markdown),
        ],
    )

    assert result.exit_code == 0, result.output
    saved = json.loads(output.read_text())
    assert saved["conversation_id"] == "order"
    assert saved["clarity_score"] == 85.0
    assert saved["accuracy_score"] == 80.0
    assert saved["completeness_score"] == 75.0
    assert saved["fallback_frequency"] == 0
    assert "Overall Satisfaction Score" in markdown.read_text()


@pytest.mark.parametrize("content", ["[]", '{"sender": "user"}'])
def test_score_rejects_bad_transcripts(tmp_path, content):
    path = tmp_path / "bad.json"
    path.write_text(content)
    output = tmp_path / "analysis.json"

    result = runner.invoke(app, ["score", str(path), "--output", str(output)])

    assert result.exit_code == 1
    assert not output.exists()


def test_report_renders_saved_analysis(transcript, tmp_path):
    analysis_file = tmp_path / "analysis.json"
    runner.invoke(app, ["score", str(transcript), "--output", str(analysis_file)])
    markdown = tmp_path / "report.md"

    result = runner.invoke(
        app,
        [
            "report",
            str(analysis_file),
            "--title",
            "Order issue",
            "--markdown",
            str(markdown),
        ],
    )

    assert result.exit_code == 0, result.output
    assert markdown.read_text().startswith("# Order issue\n")


def test_aggregate_prints_summary(tmp_path, order_conversation):
    analyses_dir = tmp_path / "analyses"
    analyses_dir.mkdir()
    (analyses_dir / "c1.json").write_text(
        json.dumps(score(order_conversation).to_dict())
    )
    output = tmp_path / "all.csv"

    result = runner.invoke(app, ["aggregate", str(analyses_dir), "--output", str(output)])

    assert result.exit_code == 0, result.output
    assert output.exists()
    assert json.loads(result.stdout)["total_analyzed"] == 1


def test_analyze_without_backend_config_fails(monkeypatch):
    monkeypatch.delenv("SUPABASE_URL", raising=False)
    monkeypatch.delenv("SUPABASE_SERVICE_ROLE_KEY", raising=False)

    result = runner.invoke(
        app, ["analyze", "c1", "--supabase-url", "", "--supabase-key", ""]
    )

    assert result.exit_code == 1
