"""End-to-end tests for the command line."""

import gzip
import logging
from pathlib import Path

import pytest

from weblogviz.cli import (
    EXIT_ALL_SOURCES_FAILED,
    EXIT_CONFIGURATION_ERROR,
    EXIT_OK,
    build_parser,
    load_settings,
    main,
)
from weblogviz.config.settings import get_settings
from weblogviz.exceptions import ConfigurationError

SAMPLE_FLAGS = ["--include-media", "--include-crawlers", "--ignore-query-params"]


@pytest.fixture(autouse=True)
def restore_root_logger():
    """main() reconfigures the root logger, put pytest's handlers back."""
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


@pytest.fixture
def access_log(tmp_path: Path, sample_text: str) -> Path:
    path = tmp_path / "access.log"
    path.write_text(sample_text, encoding="utf-8")
    return path


def test_report_for_single_file(access_log: Path, capsys) -> None:
    assert main([str(access_log), *SAMPLE_FLAGS]) == EXIT_OK

    out = capsys.readouterr().out
    assert "URL paths with the most hits (overall) - Top 2" in out
    assert "2:\t\t/index.xml\n1:\t\t/\n" in out
    assert "2018-10-29:\t2" in out
    assert "2018-10-28:\t1" in out
    assert "Skipped sources" not in out


def test_defaults_exclude_crawlers(access_log: Path, capsys) -> None:
    assert main([str(access_log)]) == EXIT_OK
    out = capsys.readouterr().out
    assert "URL paths with the most hits (overall) - Top 1" in out
    assert "1:\t\t/\n" in out
    assert "/index.xml" not in out


def test_top_and_days_limits(access_log: Path, capsys) -> None:
    assert main([str(access_log), *SAMPLE_FLAGS, "-n", "1", "-d", "1"]) == EXIT_OK
    out = capsys.readouterr().out
    assert "Top 1" in out
    assert "2018-10-29:\t2" in out
    assert "2018-10-28" not in out


def test_directory_with_gzip_and_failure(tmp_path: Path, sample_text: str, capsys) -> None:
    logs = tmp_path / "logs"
    logs.mkdir()
    (logs / "access.log").write_text(sample_text, encoding="utf-8")
    with gzip.open(logs / "access.log.1.gz", "wt", encoding="utf-8") as f:
        f.write(sample_text)
    missing = tmp_path / "missing.log"

    assert main([str(logs), str(missing), *SAMPLE_FLAGS]) == EXIT_OK

    captured = capsys.readouterr()
    out = captured.out
    assert "4:\t\t/index.xml" in out
    assert "Skipped sources (1):" in out
    assert str(missing) in out
    assert "Report built from 2 of 3 sources" in captured.err


def test_all_sources_failed(tmp_path: Path, capsys) -> None:
    code = main([str(tmp_path / "a.log"), str(tmp_path / "b.log")])

    assert code == EXIT_ALL_SOURCES_FAILED
    captured = capsys.readouterr()
    assert captured.out == ""
    assert "a.log" in captured.err


def test_negative_top_is_configuration_error(access_log: Path, capsys) -> None:
    assert main([str(access_log), "--top=-1"]) == EXIT_CONFIGURATION_ERROR
    assert "Configuration error" in capsys.readouterr().err


def test_non_numeric_days_rejected_by_parser(access_log: Path) -> None:
    with pytest.raises(SystemExit) as exc_info:
        main([str(access_log), "--days", "many"])
    assert exc_info.value.code == 2


def test_load_settings_keeps_environment(monkeypatch) -> None:
    """Flags not given on the command line come from the environment."""
    monkeypatch.setenv("FILTER_INCLUDE_ERRORS", "true")
    monkeypatch.setenv("REPORT_DAYS", "3")
    args = build_parser().parse_args(["access.log", "--include-media", "-n", "5"])

    settings = load_settings(args)

    assert settings.filters.include_errors is True
    assert settings.filters.include_media is True
    assert settings.filters.include_crawlers is False
    assert settings.report.top_n == 5
    assert settings.report.days == 3


def test_load_settings_rejects_zero_workers() -> None:
    args = build_parser().parse_args(["access.log", "--workers", "0"])
    with pytest.raises(ConfigurationError):
        load_settings(args)


def test_load_settings_starts_from_cached_settings(monkeypatch) -> None:
    """The command line layers its flags over the cached application settings."""
    monkeypatch.setenv("REPORT_TOP_N", "3")
    cached = get_settings()
    monkeypatch.setenv("REPORT_TOP_N", "8")

    settings = load_settings(build_parser().parse_args(["access.log", "-d", "2"]))

    assert settings.report.top_n == cached.report.top_n == 3
    assert settings.report.days == 2
    assert settings.name == "weblogviz"


def test_single_source_report_has_no_partial_warning(access_log: Path, capsys) -> None:
    assert main([str(access_log)]) == EXIT_OK
    assert "Report built from" not in capsys.readouterr().err
