from __future__ import annotations

from pathlib import Path

import pytest
from typer.testing import CliRunner

from cli.app import app
from settings import get_settings


@pytest.fixture()
def runner(monkeypatch) -> CliRunner:
    monkeypatch.setattr("cli.app.configure_logging", lambda level=None: None)
    return CliRunner()


def test_render_to_stdout(runner: CliRunner, sample_path: Path) -> None:
    result = runner.invoke(app, ["render", str(sample_path)])

    assert result.exit_code == 0
    assert result.stdout.startswith("<svg")
    assert 'd="M0,225L445,0L890,450"' in result.stdout


def test_render_to_file(runner: CliRunner, sample_path: Path, tmp_path: Path) -> None:
    output = tmp_path / "out" / "chart.svg"

    result = runner.invoke(app, ["render", str(sample_path), "--output", str(output)])

    assert result.exit_code == 0
    assert output.exists()
    assert 'class="line"' in output.read_text(encoding="utf-8")
    assert "<svg" not in result.stdout


def test_render_with_custom_size(runner: CliRunner, sample_path: Path) -> None:
    result = runner.invoke(app, ["render", str(sample_path), "--width", "600", "--height", "300"])

    assert result.exit_code == 0
    assert 'width="600"' in result.stdout
    assert 'height="300"' in result.stdout


def test_render_uses_configured_default_source(
    runner: CliRunner, sample_path: Path, monkeypatch
) -> None:
    monkeypatch.setenv("CHART_DATA_SOURCE", str(sample_path))
    get_settings.cache_clear()
    try:
        result = runner.invoke(app, ["render"])
    finally:
        get_settings.cache_clear()

    assert result.exit_code == 0
    assert 'class="line"' in result.stdout


def test_summary_command(runner: CliRunner, sample_path: Path) -> None:
    result = runner.invoke(app, ["summary", str(sample_path)])

    assert result.exit_code == 0
    assert "row_count: 3" in result.stdout
    assert "x_domain: 01-Jan-15 .. 03-Jan-15" in result.stdout
    assert "y_domain: 90.0 .. 110.0" in result.stdout
    assert "plot_area: 890x450" in result.stdout


def test_missing_file_fails(runner: CliRunner, tmp_path: Path) -> None:
    result = runner.invoke(app, ["render", str(tmp_path / "missing.tsv")])

    assert result.exit_code == 1
    assert "does not exist" in result.output


def test_malformed_row_fails(runner: CliRunner, tmp_path: Path) -> None:
    path = tmp_path / "bad.tsv"
    path.write_text("date\tclose\n01-Jan-15\tabc\n", encoding="utf-8")

    result = runner.invoke(app, ["summary", str(path)])

    assert result.exit_code == 1
    assert "row 2" in result.output


def test_header_only_file_fails(runner: CliRunner, tmp_path: Path) -> None:
    path = tmp_path / "empty.tsv"
    path.write_text("date\tclose\n", encoding="utf-8")

    result = runner.invoke(app, ["render", str(path)])

    assert result.exit_code == 1
    assert "empty" in result.output


def test_summary_with_custom_size(runner: CliRunner, sample_path: Path) -> None:
    result = runner.invoke(app, ["summary", str(sample_path), "--width", "640", "--height", "480"])

    assert result.exit_code == 0
    assert "size: 640x480" in result.stdout
    assert "plot_area: 570x430" in result.stdout


def test_size_too_small_for_margins_is_rejected(runner: CliRunner, sample_path: Path) -> None:
    result = runner.invoke(app, ["render", str(sample_path), "--width", "60"])

    assert result.exit_code != 0
    assert "<svg" not in result.stdout
