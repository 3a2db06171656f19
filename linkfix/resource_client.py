#!/usr/bin/env python3
"""
resource_client.py - The operations LinkFix needs from a document library

The recreate pipeline never talks to SharePoint directly. It calls a
ResourceClient, which sharepoint_client.SharePointClient implements on top
of Office365-REST-Python-Client and the test suite implements in memory.

Paths are server-relative URLs using forward slashes, e.g.
"/sites/Team/Shared Documents/Report.aspx".
"""

from __future__ import annotations

import posixpath
from typing import Any, Dict, List, Mapping, Protocol, Set


def join_path(container: str, name: str) -> str:
    """Join a library path and a leaf name with exactly one slash."""
    return posixpath.join(container.rstrip("/"), name)


def leaf_name(path: str) -> str:
    return posixpath.basename(path.rstrip("/"))


def parent_path(path: str) -> str:
    return posixpath.dirname(path.rstrip("/"))


class RecordHandle:
    """
    The list item behind a file.

    Adapters subclass or wrap this; the pipeline only passes it back to
    set_record_fields().
    """

    def __init__(self, path: str, item: Any = None):
        self.path = path
        self.item = item

    def __repr__(self) -> str:
        return f"RecordHandle({self.path!r})"


class ResourceClient(Protocol):
    """Capabilities consumed by the recreate pipeline."""

    def connect(self) -> None:
        ...

    def resource_exists(self, path: str) -> bool:
        ...

    def folder_contains(self, folder: str, name: str) -> bool:
        ...

    def duplicate_resource(self, source: str, target: str, overwrite: bool = False) -> None:
        """Server-side copy. Raises if source is absent or target exists and overwrite is False."""
        ...

    def delete_resource(self, path: str, recycle: bool = True) -> None:
        ...

    def create_folder(self, parent: str, name: str) -> None:
        """Create parent/name; no-op if it already exists."""
        ...

    def get_resource_as_record(self, path: str) -> RecordHandle:
        ...

    def set_record_fields(self, handle: RecordHandle, fields: Mapping[str, str]) -> None:
        ...

    def set_hidden(self, path: str) -> None:
        ...

    def get_field_names(self, container: str) -> Set[str]:
        ...

    def list_link_items(self, container: str) -> List[Dict[str, Any]]:
        ...
