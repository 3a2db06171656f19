# tests/test_template.py
"""
Tests for template.py - locating and relocating the template item
"""
from dataclasses import FrozenInstanceError

import pytest

from linkfix.errors import TemplateNotFoundError
from linkfix.resource_client import join_path
from linkfix.template import locate_and_relocate_template

from conftest import FakeResourceClient, LIBRARY

HIDDEN = join_path(LIBRARY, "_template")
HIDDEN_TEMPLATE = join_path(HIDDEN, "test.aspx")
ROOT_TEMPLATE = join_path(LIBRARY, "test.aspx")


class TestLocateTemplate:
    """Tests for locate_and_relocate_template()"""

    def test_moves_root_template_to_hidden_folder(self, fake_client, run_logger):
        """Template in the library root should be copied to the hidden folder and removed"""
        handle = locate_and_relocate_template(fake_client, LIBRARY, "test.aspx", "_template", run_logger)

        assert handle.resolved is True
        assert handle.relocated is True
        assert handle.current_location_path == HIDDEN_TEMPLATE
        assert HIDDEN_TEMPLATE in fake_client.files
        assert ROOT_TEMPLATE not in fake_client.files
        assert ("delete", ROOT_TEMPLATE, True) in fake_client.calls

    def test_uses_already_migrated_template(self, migrated_client, run_logger):
        """Template already in the hidden folder should be used without copying"""
        handle = locate_and_relocate_template(migrated_client, LIBRARY, "test.aspx", "_template", run_logger)

        assert handle.resolved is True
        assert handle.relocated is False
        assert handle.current_location_path == HIDDEN_TEMPLATE
        assert not [c for c in migrated_client.calls if c[0] in ("duplicate", "delete")]

    def test_second_run_is_idempotent(self, fake_client, run_logger):
        """Two runs in a row should both resolve to the hidden location"""
        first = locate_and_relocate_template(fake_client, LIBRARY, "test.aspx", "_template", run_logger)
        second = locate_and_relocate_template(fake_client, LIBRARY, "test.aspx", "_template", run_logger)

        assert first.current_location_path == second.current_location_path == HIDDEN_TEMPLATE
        assert second.relocated is False
        # Exactly one template in the hidden folder
        assert fake_client.names_in(HIDDEN) == ["test.aspx"]

    def test_creates_hidden_folder(self, fake_client, run_logger):
        """Hidden folder should be created if missing"""
        locate_and_relocate_template(fake_client, LIBRARY, "test.aspx", "_template", run_logger)
        assert HIDDEN in fake_client.folders

    def test_missing_template_is_fatal(self, run_logger):
        """No template anywhere should raise TemplateNotFoundError"""
        client = FakeResourceClient()
        with pytest.raises(TemplateNotFoundError) as excinfo:
            locate_and_relocate_template(client, LIBRARY, "test.aspx", "_template", run_logger)

        assert "test.aspx" in str(excinfo.value)
        assert not [c for c in client.calls if c[0] == "duplicate"]

    def test_marks_relocated_template_hidden(self, fake_client, run_logger):
        """Relocated template should be marked hidden when supported"""
        locate_and_relocate_template(fake_client, LIBRARY, "test.aspx", "_template", run_logger)
        assert HIDDEN_TEMPLATE in fake_client.hidden

    def test_hide_failure_is_not_fatal(self, fake_client, run_logger):
        """Refusal to hide should be logged, not raised"""
        fake_client.hide_fails = True

        handle = locate_and_relocate_template(fake_client, LIBRARY, "test.aspx", "_template", run_logger)

        assert handle.resolved is True
        assert run_logger.error_count == 1
        run_logger.close()
        assert "Could not hide template" in run_logger.error_log_path.read_text(encoding="utf-8")

    def test_works_without_logger(self, fake_client, capsys):
        """Logger is optional; progress goes to stdout"""
        handle = locate_and_relocate_template(fake_client, LIBRARY, "test.aspx", "_template")
        assert handle.resolved is True
        assert "[template]" in capsys.readouterr().out

    def test_handle_is_read_only(self, migrated_client, run_logger):
        """The returned handle should not be changeable by later steps"""
        handle = locate_and_relocate_template(migrated_client, LIBRARY, "test.aspx", "_template", run_logger)
        with pytest.raises(FrozenInstanceError):
            handle.current_location_path = ROOT_TEMPLATE
