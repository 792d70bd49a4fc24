# Tests for the metanames command-line interface.
# These exercise argument handling and dispatch through typer's test runner.

from __future__ import annotations

import logging

from typer.testing import CliRunner

from metanames import __version__
from metanames.cli import app
from metanames.logs import LOGGER_NAME, setup_logging

runner = CliRunner()


def test_version_flag_prints_version() -> None:
    result = runner.invoke(app, ["--version"])
    assert result.exit_code == 0
    assert __version__ in result.stdout


def test_parse_prints_fields() -> None:
    result = runner.invoke(app, ["parse", "~1~02~492 Title{a=Someone}.suffix"])
    assert result.exit_code == 0
    assert "492" in result.stdout
    assert "Title" in result.stdout
    assert "Someone" in result.stdout
    assert ".suffix" in result.stdout


def test_parse_reports_failures_with_exit_code() -> None:
    result = runner.invoke(app, ["parse", "Good.txt", "Bad{a}.txt"])
    assert result.exit_code == 1
    assert "FAILED" in result.stdout
    assert "malformed-attribute-token" in result.stdout


def test_parse_date_kind_with_dict_schema() -> None:
    result = runner.invoke(
        app, ["parse", "--kind", "date", "--schema", "dict", "2020-05-15 Trip{x=1}.jpg"]
    )
    assert result.exit_code == 0
    assert "2020-05-15" in result.stdout
    assert "Trip" in result.stdout


def test_normalize_prints_canonical_names_and_summary() -> None:
    result = runner.invoke(app, ["normalize", "~1 Song{t=pop;a=X}.mp3", "~01 Song.mp3"])
    assert result.exit_code == 0
    assert "~1 Song{t=pop;a=X}.mp3 -> ~01 Song{a=X;t=pop}.mp3" in result.stdout
    assert "Unchanged: ~01 Song.mp3" in result.stdout
    assert "Changed:   1" in result.stdout
    assert "Unchanged: 1" in result.stdout


def test_normalize_honours_digit_options() -> None:
    result = runner.invoke(app, ["normalize", "--top-digits", "3", "~1 Song.mp3"])
    assert result.exit_code == 0
    assert "~001 Song.mp3" in result.stdout


def test_invalid_width_is_a_usage_error() -> None:
    result = runner.invoke(app, ["parse", "--top-digits", "12", "~1 Song"])
    assert result.exit_code == 2


def test_setup_logging_levels() -> None:
    logger = setup_logging(verbose=True)
    assert logger.name == LOGGER_NAME
    assert logger.level == logging.DEBUG
    assert len(logger.handlers) == 1

    logger = setup_logging(verbose=False)
    assert logger.level == logging.WARNING
    assert len(logger.handlers) == 1
