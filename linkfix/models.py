#!/usr/bin/env python3
"""
# LinkFix
# Copyright (c) 2026 Dale Chapman
# Licensed under the MIT License. See LICENSE in the project root.

models.py - Data types shared by the recreate pipeline

LinkRecord        one validated input row
TemplateHandle    the single template item used for every duplication
MaterializedLink  the outcome of processing one LinkRecord
LinkFields        typed metadata write for a newly duplicated item
RunSummary        totals reported at the end of a run
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Dict, List, Optional


# SharePoint internal names for the "Link to a Document" content type
TITLE_FIELD = "Title"
LEAF_NAME_FIELD = "FileLeafRef"
LINK_TARGET_FIELD = "URL"
TRACE_URL_FIELD = "_ShortcutUrl"

REQUIRED_FIELDS = (TITLE_FIELD, LEAF_NAME_FIELD, LINK_TARGET_FIELD, TRACE_URL_FIELD)


class LinkStatus(str, Enum):
    CREATED = "Created"
    FAILED = "Failed"


@dataclass(frozen=True)
class LinkRecord:
    """One row of input: a link title and where it points."""
    title: str
    target_url: str
    display_text: str = ""
    row_number: Optional[int] = None

    def __post_init__(self):
        if not self.display_text.strip():
            # frozen dataclass, so bypass __setattr__
            object.__setattr__(self, "display_text", self.title)


@dataclass(frozen=True)
class TemplateHandle:
    """
    Location of the template item for this run.

    Built once by locate_and_relocate_template() and passed explicitly to
    materialize(). Treat as read-only after it is returned.
    """
    current_location_path: str
    resolved: bool = False
    relocated: bool = False


def link_target_value(url: str, display_text: str) -> str:
    """Encode a link target the way SharePoint stores URL fields."""
    return f"{url}, {display_text}"


@dataclass(frozen=True)
class LinkFields:
    """Metadata written to a freshly duplicated link item."""
    title: str
    leaf_name: str
    link_target: str
    trace_url: str

    @classmethod
    def for_record(cls, record: LinkRecord, generated_name: str) -> "LinkFields":
        return cls(
            title=record.title,
            leaf_name=generated_name,
            link_target=link_target_value(record.target_url, record.display_text),
            trace_url=record.target_url,
        )

    def validate(self) -> None:
        missing = [name for name, value in (
            ("title", self.title),
            ("leaf_name", self.leaf_name),
            ("link_target", self.link_target),
            ("trace_url", self.trace_url),
        ) if not value or not value.strip()]
        if missing:
            raise ValueError(f"Empty link field(s): {', '.join(missing)}")

    def to_field_map(self) -> Dict[str, str]:
        return {
            TITLE_FIELD: self.title,
            LEAF_NAME_FIELD: self.leaf_name,
            LINK_TARGET_FIELD: self.link_target,
            TRACE_URL_FIELD: self.trace_url,
        }


@dataclass(frozen=True)
class MaterializedLink:
    """Terminal outcome of one record; never retried within a run."""
    record: LinkRecord
    generated_name: str
    target_path: str
    status: LinkStatus
    failure_detail: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.status is LinkStatus.CREATED


@dataclass
class RunSummary:
    """Totals for one recreate run."""
    error_log_path: Path
    transcript_path: Path
    results: List[MaterializedLink] = field(default_factory=list)
    rejected: int = 0

    @property
    def attempted(self) -> int:
        return len(self.results)

    @property
    def created(self) -> int:
        return sum(1 for r in self.results if r.ok)

    @property
    def failed(self) -> int:
        return self.attempted - self.created
