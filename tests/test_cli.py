# tests/test_cli.py

import logging
from datetime import datetime, timezone

import pytest

from starscalendars import cli
from starscalendars.logging_config import setup_logging


@pytest.fixture(autouse=True)
def _quiet_logger():
    yield
    logger = logging.getLogger("starscalendars")
    logger.handlers.clear()
    logger.setLevel(logging.NOTSET)


def test_parse_instant():
    utc = timezone.utc
    assert cli._parse_instant("2024-03-10") == datetime(2024, 3, 10, tzinfo=utc)
    assert cli._parse_instant("2024-03-10T12:00:00Z") == datetime(2024, 3, 10, 12, tzinfo=utc)
    assert cli._parse_instant("2024-03-10T16:00:00+04:00") == datetime(2024, 3, 10, 12, tzinfo=utc)
    assert cli._parse_instant("2024-03-10T12:00:00").tzinfo == utc
    assert cli._parse_instant(None).tzinfo == utc


def test_calendar_command(capsys):
    assert cli.main(["calendar", "2012-08-11"]) == 0
    assert capsys.readouterr().out.strip() == "00.00.00"


def test_calendar_shortcut(capsys):
    assert cli.main(["2012-08-11", "--verbose"]) == 0
    out = capsys.readouterr().out
    assert "year=0 decad=0 day_in_decad=0 day_index=0" in out
    assert out.strip().endswith("00.00.00")


def test_calendar_instant(capsys):
    assert cli.main(["calendar", "2012-08-12T01:00:00Z"]) == 0
    assert capsys.readouterr().out.strip() == "01.00.00"


def test_zenith_command(capsys):
    assert cli.main(["--provider", "analytic", "zenith", "--at", "2000-01-01T12:00:00Z"]) == 0
    out = capsys.readouterr().out
    assert "Latitude  = -23.0" in out
    assert "GST       = 280.460618" in out


def test_phase_command(capsys):
    assert cli.main(["--provider", "analytic", "phase", "--at", "2024-04-08T18:21:00Z"]) == 0
    assert capsys.readouterr().out.startswith("New Moon")


def test_state_command(capsys):
    rc = cli.main(["--provider", "analytic", "state", "--at", "2024-03-10T12:00:00Z", "--positions"])
    assert rc == 0
    out = capsys.readouterr().out
    assert "Calendar      :" in out
    assert "Zenith        :" in out
    assert "  earth" in out
    assert "  pluto" in out


def test_run_command(capsys):
    rc = cli.main(["--provider", "analytic", "run", "--start", "2024-03-10", "--frames", "3", "--step-hours", "12"])
    assert rc == 0
    lines = capsys.readouterr().out.strip().splitlines()
    assert len(lines) == 3
    assert lines[0].startswith("2024-03-10T00:00:00+00:00")


def test_solstice_command(capsys):
    assert cli.main(["solstice", "--after", "2024-01-01"]) == 0
    assert capsys.readouterr().out.startswith("2024-12-21T")


def test_diag_calendar_table(capsys):
    assert cli.main(["diag", "calendar-table", "2012-08-11", "--span", "2"]) == 0
    out = capsys.readouterr().out
    assert ">    0" in out
    assert "00.00.00" in out
    assert "02.00.00" in out


def test_subcommand_is_required():
    with pytest.raises(SystemExit):
        cli.main([])


def test_setup_logging_handlers(tmp_path):
    log_file = tmp_path / "run.log"
    setup_logging("debug", log_file=str(log_file))
    logger = logging.getLogger("starscalendars")
    assert logger.level == logging.DEBUG
    assert len(logger.handlers) == 2

    # calling again replaces the handlers
    setup_logging(logging.INFO)
    assert len(logger.handlers) == 1
    assert "Logging initialized." in log_file.read_text(encoding="utf-8")


def test_setup_logging_rejects_unknown_level():
    with pytest.raises(ValueError):
        setup_logging("chatty")
