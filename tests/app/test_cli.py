"""Tests for the afrisight command line."""

import json

from typer.testing import CliRunner

from app.cli import app

runner = CliRunner()


def test_stats_prints_dataset_summary():
    result = runner.invoke(app, ["stats"])

    assert result.exit_code == 0
    # dataset loading may log to stdout ahead of the JSON document
    payload = json.loads(result.stdout[result.stdout.index("{\n"):])
    assert payload["totalDataPoints"] == 53
    assert payload["data"]["spotifyYouTubeTracks"] == 10
    assert payload["business"]["topProductType"] == "Art & Sculpture"
    assert payload["movies"]["runtimeDistribution"] == {"short": 3, "medium": 6, "long": 6}


def test_stats_missing_data_dir(tmp_path):
    result = runner.invoke(app, ["stats", "--data-dir", str(tmp_path / "missing")])

    assert result.exit_code == 1
    assert "Failed to load datasets" in result.stdout


def test_scrape_rejects_unknown_source():
    result = runner.invoke(app, ["scrape", "--source", "eventbrite"])

    assert result.exit_code == 1
    assert "Unknown source: eventbrite" in result.stdout


def test_serve_requires_settings(monkeypatch, tmp_path):
    """Missing secrets stop the server before uvicorn starts."""
    monkeypatch.chdir(tmp_path)
    for key in ("GOOGLEAI_API_KEY", "JWT_SECRET", "AFRISIGHT_CONFIG"):
        monkeypatch.delenv(key, raising=False)

    result = runner.invoke(app, ["serve"])

    assert result.exit_code == 1
    assert "GOOGLEAI_API_KEY" in result.stdout
