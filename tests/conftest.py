# tests/conftest.py
"""
Pytest configuration and shared fixtures for LinkFix tests
"""
import csv
from pathlib import Path
from typing import Dict, Generator, List, Optional, Set

import pytest

from linkfix.errors import ResourceClientError
from linkfix.models import REQUIRED_FIELDS
from linkfix.resource_client import RecordHandle, join_path, leaf_name, parent_path
from linkfix.run_log import RunLogger


LIBRARY = "/sites/Team/Shared Documents"


class FakeResourceClient:
    """In-memory document library implementing the ResourceClient calls"""

    def __init__(self, files: Optional[Dict[str, dict]] = None, folders: Optional[Set[str]] = None):
        self.files: Dict[str, dict] = dict(files or {})
        self.folders: Set[str] = set(folders or {LIBRARY})
        self.hidden: Set[str] = set()
        self.field_names: Set[str] = set(REQUIRED_FIELDS) | {"ID", "Created", "Modified"}
        self.fail_copy_targets: Set[str] = set()
        self.fail_field_writes: Set[str] = set()
        self.fail_deletes: Set[str] = set()
        # Leaf names that another writer creates just before our copy lands
        self.race_targets: Set[str] = set()
        self.hide_fails = False
        self.calls: List[tuple] = []
        self.connected = False

    def connect(self):
        self.connected = True

    def resource_exists(self, path):
        return path in self.files or path in self.folders

    def folder_contains(self, folder, name):
        return folder in self.folders and join_path(folder, name) in self.files

    def duplicate_resource(self, source, target, overwrite=False):
        self.calls.append(("duplicate", source, target))
        if leaf_name(target) in self.race_targets:
            self.files[target] = {"Title": "created elsewhere"}
        if source not in self.files:
            raise ResourceClientError(message=f"Source not found: {source}")
        if target in self.files and not overwrite:
            raise ResourceClientError(message=f"Target already exists: {target}")
        if leaf_name(target) in self.fail_copy_targets:
            raise ResourceClientError(message="503 Service Unavailable")
        copied = dict(self.files[source])
        copied["FileLeafRef"] = leaf_name(target)
        self.files[target] = copied

    def delete_resource(self, path, recycle=True):
        self.calls.append(("delete", path, recycle))
        if path in self.fail_deletes:
            raise ResourceClientError(message="423 Locked")
        if path not in self.files:
            raise ResourceClientError(message=f"Not found: {path}")
        del self.files[path]

    def create_folder(self, parent, name):
        self.calls.append(("create_folder", parent, name))
        self.folders.add(join_path(parent, name))

    def get_resource_as_record(self, path):
        if path not in self.files:
            raise ResourceClientError(message=f"Not found: {path}")
        return RecordHandle(path, self.files[path])

    def set_record_fields(self, handle, fields):
        self.calls.append(("set_fields", handle.path, dict(fields)))
        if leaf_name(handle.path) in self.fail_field_writes:
            raise ResourceClientError(message="Field write rejected")
        handle.item.update(fields)

    def set_hidden(self, path):
        if self.hide_fails:
            raise ResourceClientError(message="Hidden attribute not supported")
        self.hidden.add(path)

    def get_field_names(self, container):
        return set(self.field_names)

    def list_link_items(self, container):
        rows = []
        for i, (path, fields) in enumerate(sorted(self.files.items()), start=1):
            url, _, description = fields.get("URL", "").partition(", ")
            rows.append({
                "id": i,
                "title": fields.get("Title", ""),
                "name": leaf_name(path),
                "url": url,
                "url_description": description,
                "content_type": "Link to a Document",
                "created": "2026-01-05T10:00:00Z",
                "created_by": "Automation",
                "modified": "2026-01-05T10:00:00Z",
                "modified_by": "Automation",
                "path": path,
            })
        return rows

    def names_in(self, folder: str) -> List[str]:
        return sorted(leaf_name(p) for p in self.files if parent_path(p) == folder)


def template_fields() -> dict:
    return {"Title": "Template", "FileLeafRef": "test.aspx", "URL": "https://template, Template"}


@pytest.fixture
def library() -> str:
    return LIBRARY


@pytest.fixture
def fake_client() -> FakeResourceClient:
    """Library with the UI-created template in its root"""
    return FakeResourceClient(files={join_path(LIBRARY, "test.aspx"): template_fields()})


@pytest.fixture
def migrated_client() -> FakeResourceClient:
    """Library whose template was already moved to _template by an earlier run"""
    hidden = join_path(LIBRARY, "_template")
    return FakeResourceClient(
        files={join_path(hidden, "test.aspx"): template_fields()},
        folders={LIBRARY, hidden},
    )


@pytest.fixture
def run_logger(tmp_path: Path) -> Generator[RunLogger, None, None]:
    """Run logger writing into a temporary log directory"""
    logger = RunLogger(tmp_path / "logs")
    yield logger
    logger.close()


@pytest.fixture
def write_csv(tmp_path: Path):
    """Write rows (first row is the header) to a CSV file and return its path"""
    def _write(rows, name="links.csv"):
        path = tmp_path / name
        with path.open("w", encoding="utf-8", newline="") as f:
            csv.writer(f).writerows(rows)
        return path
    return _write
