#!/usr/bin/env python3
"""
# LinkFix
# Copyright (c) 2026 Dale Chapman
# Licensed under the MIT License. See LICENSE in the project root.

import_records.py (LinkFix)

Reads the link CSV produced by `linkfix export` (or written by hand) into
LinkRecord objects.

- Header row must contain Title and URL (exact case); Description is optional.
- Values are trimmed. A row with an empty Title or URL is rejected with an
  error-log entry and the import carries on.
- A missing file, a file with no data rows, or a header without Title/URL
  stops the run.
"""

from __future__ import annotations

import csv
from pathlib import Path
from typing import List, Optional, Tuple, Union

from linkfix.errors import missing_input_error
from linkfix.models import LinkRecord
from linkfix.run_log import RunLogger

TITLE_COLUMN = "Title"
URL_COLUMN = "URL"
DESCRIPTION_COLUMN = "Description"
REQUIRED_COLUMNS = (TITLE_COLUMN, URL_COLUMN)


class ImportResult(list):
    """List of accepted records that also remembers the rejected rows."""

    def __init__(self, records=(), rejected: Optional[List[Tuple[int, str]]] = None):
        super().__init__(records)
        self.rejected: List[Tuple[int, str]] = rejected or []


def _clean(value: Optional[str]) -> str:
    return (value or "").strip()


def import_records(
    source: Union[str, Path],
    logger: Optional[RunLogger] = None,
) -> ImportResult:
    """
    Parse the input CSV into validated records.

    Args:
        source: Path to the CSV file
        logger: Optional run logger; rejected rows are logged as errors

    Returns:
        ImportResult (a list of LinkRecord) with .rejected row details

    Raises:
        RecordImportError: if the file is missing, has no rows, lacks
            a required column, or cannot be decoded as UTF-8 CSV
    """
    path = Path(source)
    if not path.is_file():
        raise missing_input_error(path, "input file not found")

    result = ImportResult()
    seen_rows = 0

    try:
        # utf-8-sig tolerates the BOM Excel writes
        with path.open(encoding="utf-8-sig", newline="") as f:
            reader = csv.DictReader(f)
            headers = reader.fieldnames or []
            if not headers:
                raise missing_input_error(path, "input file is empty")
            missing = [c for c in REQUIRED_COLUMNS if c not in headers]
            if missing:
                raise missing_input_error(path, f"missing column(s): {', '.join(missing)}")

            for row in reader:
                seen_rows += 1
                # Line the record ends on; blank lines and multi-line quoted
                # fields keep this in step with the file
                row_number = reader.line_num
                title = _clean(row.get(TITLE_COLUMN))
                url = _clean(row.get(URL_COLUMN))
                description = _clean(row.get(DESCRIPTION_COLUMN))

                empty = [name for name, value in ((TITLE_COLUMN, title), (URL_COLUMN, url)) if not value]
                if empty:
                    reason = f"empty {' and '.join(empty)}"
                    result.rejected.append((row_number, reason))
                    message = f"[import] Rejected row {row_number}: {reason}"
                    detail = f"Title={title!r} URL={url!r}"
                    if logger:
                        logger.log_error(message, detail)
                    else:
                        print(f"{message} ({detail})")
                    continue

                result.append(LinkRecord(
                    title=title,
                    target_url=url,
                    display_text=description,
                    row_number=row_number,
                ))
    except UnicodeDecodeError as e:
        raise missing_input_error(path, "input file is not UTF-8 encoded", cause=e)
    except csv.Error as e:
        raise missing_input_error(path, f"malformed CSV: {e}", cause=e)

    if seen_rows == 0:
        raise missing_input_error(path, "input file has no data rows")

    if logger:
        logger.info(
            f"[import] {len(result)} record(s) accepted, "
            f"{len(result.rejected)} rejected from {path.name}"
        )
    return result
