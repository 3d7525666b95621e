"""Integration tests for the logger facade and its two sinks."""

from __future__ import annotations

import csv
import io
import json
import logging
import re
import shutil
import threading
from pathlib import Path

import pytest
from rich.console import Console

from tiny_logger import ConfigurationError, LoggerConfig, TinyLogger, WriteFailure
from tiny_logger.core.encoder import encode
from tiny_logger.utils.types import Level, LogFormat

from .clocks import (
    FIXED_RECORD_TIME,
    FIXED_STAMP,
    BrokenConsole,
    capture_console,
    console_text,
    fixed_clock,
    ticking_clock,
)


def _read_csv(path: Path) -> list:
    with path.open("r", encoding="utf-8", newline="") as handle:
        return list(csv.reader(handle))


def test_both_sinks_disabled_is_a_configuration_error(tmp_path: Path) -> None:
    with pytest.raises(ConfigurationError):
        TinyLogger(disableFileOutput=True, disableConsoleOutput=True, directory=tmp_path)
    assert list(tmp_path.iterdir()) == []


def test_invalid_label_fails_before_any_file_exists(tmp_path: Path) -> None:
    with pytest.raises(ConfigurationError):
        TinyLogger(label="my-app", directory=tmp_path, disableConsoleOutput=True)
    assert list(tmp_path.iterdir()) == []


def test_invalid_label_is_rejected_even_without_file_output(tmp_path: Path) -> None:
    with pytest.raises(ConfigurationError):
        TinyLogger(label="bad label", disableFileOutput=True, console=capture_console())


def test_missing_directory_is_a_configuration_error(tmp_path: Path) -> None:
    with pytest.raises(ConfigurationError):
        TinyLogger(directory=tmp_path / "nope", disableConsoleOutput=True)


def test_delimited_scenario_rotates_into_numbered_files(tmp_path: Path) -> None:
    max_bytes = 100
    record_size = len(encode(LogFormat.DELIMITED, Level.INFO, "svc", "msg-0", FIXED_RECORD_TIME))
    per_file = max_bytes // record_size

    logger = TinyLogger(
        label="svc",
        maxBytes=max_bytes,
        format="delimited",
        directory=tmp_path,
        disableConsoleOutput=True,
        clock=fixed_clock,
    )
    with logger:
        for idx in range(5):
            logger.info("svc", f"msg-{idx}")

    names = [path.name for path in logger.files]
    assert names[0] == f"svc.log.{FIXED_STAMP}.csv"
    assert names[1] == f"svc.log.{FIXED_STAMP}_1.csv"
    for path in logger.files:
        assert path.stat().st_size <= max_bytes

    rows = [row for path in logger.files for row in _read_csv(path)]
    assert [row[3] for row in rows] == [f"msg-{idx}" for idx in range(5)]
    assert len(_read_csv(logger.files[0])) == per_file
    assert rows[0] == ["INFO", FIXED_RECORD_TIME, "svc", "msg-0"]


def test_line_object_error_record(tmp_path: Path) -> None:
    with TinyLogger(
        format="line-object",
        directory=tmp_path,
        disableConsoleOutput=True,
        clock=fixed_clock,
    ) as logger:
        path = logger.error("Auth", "token expired")

    assert path.name == f"log.{FIXED_STAMP}.txt"
    lines = path.read_text("utf-8").splitlines()
    assert len(lines) == 1
    assert json.loads(lines[0]) == {
        "time": FIXED_RECORD_TIME,
        "level": "ERROR",
        "subject": "Auth",
        "message": "token expired",
    }


def test_every_level_round_trips_through_the_file(tmp_path: Path) -> None:
    config = LoggerConfig(format=LogFormat.DELIMITED, directory=tmp_path, disable_console_output=True)
    with TinyLogger(config, clock=ticking_clock()) as logger:
        logger.debug("Cache", "miss, retrying")
        logger.info("Http", 'GET "/index"')
        logger.warn("Disk", "80% full\nsoon")
        logger.error("Auth", "denied")

    rows = _read_csv(logger.current_file)
    assert [(row[0], row[2], row[3]) for row in rows] == [
        ("DEBUG", "Cache", "miss, retrying"),
        ("INFO", "Http", 'GET "/index"'),
        ("WARN", "Disk", "80% full\nsoon"),
        ("ERROR", "Auth", "denied"),
    ]
    assert rows[0][1] == "2026-01-02T03:04:06Z"


def test_raw_console_line(tmp_path: Path) -> None:
    console = capture_console()
    logger = TinyLogger(disableFileOutput=True, console=console, clock=fixed_clock)

    assert logger.warn("Disk", "[almost] full") is None
    assert console_text(console) == f"[ WARN, {FIXED_RECORD_TIME}, Disk, [almost] full ]\n"
    assert list(tmp_path.iterdir()) == []


def test_pretty_console_output() -> None:
    console = capture_console()
    logger = TinyLogger(
        disableFileOutput=True,
        consoleStyle="pretty",
        console=console,
        clock=fixed_clock,
    )
    logger.info("Auth", "token refreshed")

    lines = console_text(console).splitlines()
    assert lines[0].split() == ["INFO", FIXED_RECORD_TIME]
    assert lines[1].strip() == "subject: Auth"
    assert lines[2].strip() == "message: token refreshed"


def test_console_failure_does_not_block_the_file(
    tmp_path: Path, caplog: pytest.LogCaptureFixture
) -> None:
    logger = TinyLogger(directory=tmp_path, console=capture_console(), clock=fixed_clock)
    logger._console.console = BrokenConsole()

    with caplog.at_level(logging.ERROR, logger="tiny_logger.logger"):
        path = logger.info("Job", "still persisted")
    logger.close()

    assert _read_csv(path) == [["INFO", FIXED_RECORD_TIME, "Job", "still persisted"]]
    assert "Console output failed" in caplog.text


def test_closed_console_stream_does_not_block_the_file(
    tmp_path: Path, caplog: pytest.LogCaptureFixture
) -> None:
    buffer = io.StringIO()
    logger = TinyLogger(directory=tmp_path, console=Console(file=buffer), clock=fixed_clock)
    buffer.close()

    with caplog.at_level(logging.ERROR, logger="tiny_logger.logger"):
        path = logger.info("Job", "persist me")
    logger.close()

    assert _read_csv(path) == [["INFO", FIXED_RECORD_TIME, "Job", "persist me"]]
    assert "Console output failed" in caplog.text


def test_concurrent_calls_keep_console_lines_and_rows_whole(tmp_path: Path) -> None:
    console = capture_console()
    logger = TinyLogger(directory=tmp_path, maxBytes=2000, console=console, clock=fixed_clock)

    def _worker(worker: int) -> None:
        for idx in range(25):
            logger.info(f"worker{worker}", f"message {idx}, part of worker {worker}")

    threads = [threading.Thread(target=_worker, args=(n,)) for n in range(8)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()
    logger.close()

    expected = {(f"worker{w}", f"message {i}, part of worker {w}") for w in range(8) for i in range(25)}

    pattern = re.compile(r"^\[ INFO, (\S+), (worker\d), (message \d+, part of worker \d) \]$")
    lines = console_text(console).splitlines()
    matches = [pattern.match(line) for line in lines]
    assert all(matches) and len(lines) == 200
    assert {(m.group(2), m.group(3)) for m in matches} == expected

    rows = [row for path in logger.files for row in _read_csv(path)]
    assert all(len(row) == 4 and row[0] == "INFO" for row in rows)
    assert {(row[2], row[3]) for row in rows} == expected
    assert len(rows) == 200
    for path in logger.files:
        assert path.stat().st_size <= 2000


def test_file_failure_still_prints_the_console_line(tmp_path: Path) -> None:
    log_dir = tmp_path / "logs"
    log_dir.mkdir()
    console = capture_console()
    record_size = len(encode(LogFormat.DELIMITED, Level.INFO, "Job", "step-0", FIXED_RECORD_TIME))
    logger = TinyLogger(
        label="job",
        directory=log_dir,
        maxBytes=record_size,
        console=console,
        clock=fixed_clock,
    )
    logger.info("Job", "step-0")
    shutil.rmtree(log_dir)

    with pytest.raises(WriteFailure) as excinfo:
        logger.info("Job", "step-1")

    assert b"step-1" in excinfo.value.record
    assert "step-1" in console_text(console)

    log_dir.mkdir()
    path = logger.info("Job", "step-2")
    logger.close()
    assert path.name == f"job.log.{FIXED_STAMP}_1.csv"
    assert _read_csv(path)[0][3] == "step-2"


def test_close_is_idempotent(tmp_path: Path) -> None:
    logger = TinyLogger(directory=tmp_path, disableConsoleOutput=True)
    logger.close()
    logger.close()
    with pytest.raises(WriteFailure):
        logger.info("late", "after close")


def test_log_accepts_level_names(tmp_path: Path) -> None:
    with TinyLogger(directory=tmp_path, disableConsoleOutput=True, format="json", clock=fixed_clock) as logger:
        path = logger.log("warn", "Cfg", "fallback")
    assert json.loads(path.read_text("utf-8"))["level"] == "WARN"

    with pytest.raises(ValueError, match="expected one of DEBUG, INFO, WARN, ERROR"):
        logger.log("fatal", "Cfg", "nope")


def test_keyword_options_override_config(tmp_path: Path) -> None:
    base = LoggerConfig(label="base", directory=tmp_path, disable_console_output=True)
    with TinyLogger(base, label="override", clock=fixed_clock) as logger:
        assert logger.config.label == "override"
        assert logger.current_file.name == f"override.log.{FIXED_STAMP}.csv"


def test_directory_defaults_to_working_directory(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.chdir(tmp_path)
    with TinyLogger(disableConsoleOutput=True, clock=fixed_clock) as logger:
        logger.info("cwd", "here")
    assert (tmp_path / f"log.{FIXED_STAMP}.csv").exists()
