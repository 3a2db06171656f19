#!/usr/bin/env python3
"""
# LinkFix
# Copyright (c) 2026 Dale Chapman
# Licensed under the MIT License. See LICENSE in the project root.

run_log.py - Error log and session transcript for one run

Each run writes two append-only files into the log directory, both stamped
with the run start time:

    <prefix>-errors-YYYYmmdd-HHMMSS.log      one line per error
    <prefix>-transcript-YYYYmmdd-HHMMSS.log  every message the run printed

Error lines look like:

    [2026-10-19T14:03:11+00:00] Failed to create link 'My Report'
        ClientRequestException: 409 Conflict

Use as a context manager so the files are closed on every exit path:

    with RunLogger(Path("logs")) as log:
        log.info("Starting")
"""

from __future__ import annotations

import logging
import sys
import traceback
from datetime import datetime
from pathlib import Path
from typing import Optional, TextIO

from linkfix.icons import icons


# Message-only; the transcript handler adds its own clock prefix
LOG_FORMAT = "%(message)s"
TRANSCRIPT_FORMAT = "[%(asctime)s] %(message)s"
TRANSCRIPT_DATEFMT = "%H:%M:%S"
STAMP_FORMAT = "%Y%m%d-%H%M%S"

LEVEL_ICONS = {
    logging.DEBUG: icons.DEBUG,
    logging.INFO: icons.SUCCESS,
    logging.WARNING: icons.WARNING,
    logging.ERROR: icons.ERROR,
    logging.CRITICAL: icons.FATAL,
}


class IconLogFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        icon = LEVEL_ICONS.get(record.levelno, icons.SUCCESS)
        base = super().format(record)
        return f"{icon} {base}"


class RunLogger:
    """Process-wide logger for a single recreate/export/purge run."""

    def __init__(
        self,
        log_dir: Path,
        prefix: str = "recreate",
        started: Optional[datetime] = None,
        stream: Optional[TextIO] = None,
    ):
        self.started = started or datetime.now()
        self.prefix = prefix
        self.log_dir = Path(log_dir)
        self.log_dir.mkdir(parents=True, exist_ok=True)

        stamp = self.started.strftime(STAMP_FORMAT)
        self.error_log_path = self.log_dir / f"{prefix}-errors-{stamp}.log"
        self.transcript_path = self.log_dir / f"{prefix}-transcript-{stamp}.log"

        self.error_count = 0
        self.closed = False

        # Append mode: a second run in the same second adds to, never replaces
        self._error_file = self.error_log_path.open("a", encoding="utf-8")

        self._logger = logging.getLogger(f"linkfix.run.{prefix}")
        self._logger.setLevel(logging.DEBUG)
        self._logger.propagate = False

        transcript = logging.FileHandler(self.transcript_path, mode="a", encoding="utf-8")
        transcript.setFormatter(logging.Formatter(TRANSCRIPT_FORMAT, TRANSCRIPT_DATEFMT))
        console = logging.StreamHandler(stream or sys.stdout)
        console.setFormatter(IconLogFormatter(LOG_FORMAT))
        self._handlers = [transcript, console]
        for handler in self._handlers:
            self._logger.addHandler(handler)

        self.info(f"[{prefix}] Run started {self.started.isoformat(timespec='seconds')}")

    # ------------------------------------------------------------------
    # Messages
    # ------------------------------------------------------------------

    def info(self, message: str) -> None:
        self._logger.info(message)

    def warn(self, message: str) -> None:
        self._logger.warning(message)

    def log_error(self, message: str, detail: Optional[str] = None) -> None:
        """Append a timestamped entry to the error log and echo it."""
        ts = datetime.now().astimezone().isoformat(timespec="seconds")
        self._error_file.write(f"[{ts}] {message}\n")
        if detail:
            for line in str(detail).strip().splitlines():
                self._error_file.write(f"    {line}\n")
        self._error_file.flush()
        self.error_count += 1

        self._logger.error(message if not detail else f"{message}\n    {detail}")

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def close(self) -> None:
        if self.closed:
            return
        self.info(f"[{self.prefix}] Run finished with {self.error_count} error(s)")
        for handler in self._handlers:
            handler.flush()
            handler.close()
            self._logger.removeHandler(handler)
        self._error_file.close()
        self.closed = True

    def __enter__(self) -> "RunLogger":
        return self

    def __exit__(self, exc_type, exc, tb) -> bool:
        try:
            if exc is not None:
                detail = "".join(traceback.format_exception_only(exc_type, exc)).strip()
                self.log_error(f"[{self.prefix}] Run aborted", detail)
        finally:
            self.close()
        return False
