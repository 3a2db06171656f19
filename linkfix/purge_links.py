#!/usr/bin/env python3
"""
# LinkFix
# Copyright (c) 2026 Dale Chapman
# Licensed under the MIT License. See LICENSE in the project root.

purge_links.py

Delete the broken link items listed in an export CSV (Path column) so they
can be recreated from the template.

Defaults:
- Dry run unless apply=True (`linkfix purge --apply`).
- Deleted items go to the recycle bin.
- Anything inside the hidden template folder is never touched.
- One failed delete is logged and the rest continue.
"""

from __future__ import annotations

import csv
from dataclasses import dataclass, field
from pathlib import Path
from typing import List

from linkfix.errors import missing_input_error
from linkfix.icons import icons
from linkfix.resource_client import ResourceClient, join_path
from linkfix.run_log import RunLogger

PATH_COLUMN = "Path"


@dataclass
class PurgeResult:
    planned: List[str] = field(default_factory=list)
    deleted: List[str] = field(default_factory=list)
    failed: List[str] = field(default_factory=list)
    skipped: List[str] = field(default_factory=list)


def load_paths(source: Path) -> List[str]:
    """
    Read item paths from an export CSV.

    Raises:
        RecordImportError: if the file is missing or has no Path column
    """
    if not source.is_file():
        raise missing_input_error(source, "export file not found")
    try:
        with source.open(encoding="utf-8-sig", newline="") as f:
            reader = csv.DictReader(f)
            if PATH_COLUMN not in (reader.fieldnames or []):
                raise missing_input_error(source, f"missing column: {PATH_COLUMN}")
            return [row[PATH_COLUMN].strip() for row in reader if (row.get(PATH_COLUMN) or "").strip()]
    except (UnicodeDecodeError, csv.Error) as e:
        raise missing_input_error(source, "export file is not a readable UTF-8 CSV", cause=e)


def purge_links(
    client: ResourceClient,
    library: str,
    source: Path,
    hidden_folder: str,
    logger: RunLogger,
    apply: bool = False,
) -> PurgeResult:
    """Delete (or, without apply, list) every item path in source."""
    result = PurgeResult()
    protected = join_path(library, hidden_folder) + "/"
    library_prefix = library.rstrip("/") + "/"

    for path in load_paths(source):
        if path.startswith(protected) or not path.startswith(library_prefix):
            logger.warn(f"[purge] {icons.SKIP} Skipping {path}")
            result.skipped.append(path)
            continue

        result.planned.append(path)
        if not apply:
            logger.info(f"[purge] Would delete {path}")
            continue

        try:
            client.delete_resource(path, recycle=True)
        except Exception as e:
            logger.log_error(f"[purge] Failed to delete {path}", f"{type(e).__name__}: {e}")
            result.failed.append(path)
            continue
        logger.info(f"[purge] {icons.DELETE} Deleted {path}")
        result.deleted.append(path)

    if apply:
        logger.info(f"[purge] Deleted {len(result.deleted)}, failed {len(result.failed)}, "
                    f"skipped {len(result.skipped)}")
    else:
        logger.info(f"[purge] Dry run: {len(result.planned)} item(s) would be deleted. "
                    f"Re-run with --apply to delete.")
    return result
