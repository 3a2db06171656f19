#!/usr/bin/env python3
"""
# LinkFix
# Copyright (c) 2026 Dale Chapman
# Licensed under the MIT License. See LICENSE in the project root.

export_links.py (LinkFix)

Inventory every "Link to a Document" item in a library into a CSV, before
the broken items are purged and recreated.

The Title, URL and Description columns double as recreate input, so the
export can be fed straight back to `linkfix recreate --csv`.
"""

from __future__ import annotations

import csv
from pathlib import Path
from typing import Any, Dict, List, Optional

from linkfix.icons import icons
from linkfix.resource_client import ResourceClient
from linkfix.run_log import RunLogger

# (CSV header, key in ResourceClient.list_link_items() rows)
EXPORT_COLUMNS = [
    ("ID", "id"),
    ("Title", "title"),
    ("Name", "name"),
    ("URL", "url"),
    ("Description", "url_description"),
    ("ContentType", "content_type"),
    ("Created", "created"),
    ("Created By", "created_by"),
    ("Modified", "modified"),
    ("Modified By", "modified_by"),
    ("Path", "path"),
]


def build_rows(items: List[Dict[str, Any]], exclude_folder: Optional[str] = None) -> List[List[str]]:
    """Turn client rows into CSV rows, skipping anything under exclude_folder."""
    rows: List[List[str]] = []
    for item in items:
        path = str(item.get("path") or "")
        if exclude_folder and path.startswith(exclude_folder.rstrip("/") + "/"):
            continue
        rows.append(["" if item.get(key) is None else str(item.get(key)) for _, key in EXPORT_COLUMNS])
    return rows


def write_csv(rows: List[List[str]], output: Path) -> None:
    output.parent.mkdir(parents=True, exist_ok=True)
    with output.open("w", encoding="utf-8", newline="") as f:
        writer = csv.writer(f)
        writer.writerow([header for header, _ in EXPORT_COLUMNS])
        writer.writerows(rows)


def export_links(
    client: ResourceClient,
    library: str,
    output: Path,
    logger: RunLogger,
    hidden_folder: Optional[str] = None,
) -> int:
    """
    Write the link inventory of library to output.

    The template (inside hidden_folder) is left out of the export.

    Returns:
        Number of link items written
    """
    logger.info(f"[export] Reading link items from {library}")
    items = client.list_link_items(library)

    exclude = f"{library.rstrip('/')}/{hidden_folder}" if hidden_folder else None
    rows = build_rows(items, exclude)
    write_csv(rows, output)

    logger.info(f"[export] {icons.EXPORT} Wrote {len(rows)} link(s) to {output}")
    return len(rows)
