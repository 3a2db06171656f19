# tests/test_import_records.py
"""
Tests for import_records.py - CSV parsing and row validation
"""
import pytest

from linkfix.errors import RecordImportError
from linkfix.import_records import import_records


HEADER = ["Title", "URL", "Description"]


class TestImportRecords:
    """Tests for import_records()"""

    def test_rejects_row_with_empty_url(self, write_csv, run_logger):
        """5 rows with row 3 missing its URL should give 4 records and 1 rejection"""
        path = write_csv([
            HEADER,
            ["One", "https://example.com/1", ""],
            ["Two", "https://example.com/2", "Second"],
            ["Three", "   ", ""],
            ["Four", "https://example.com/4", ""],
            ["Five", "https://example.com/5", ""],
        ])

        records = import_records(path, run_logger)

        assert [r.title for r in records] == ["One", "Two", "Four", "Five"]
        assert len(records.rejected) == 1
        assert records.rejected[0][0] == 4  # header is row 1
        assert run_logger.error_count == 1

        run_logger.close()
        log_text = run_logger.error_log_path.read_text(encoding="utf-8")
        assert "Rejected row 4" in log_text

    def test_rejects_empty_title(self, write_csv, run_logger):
        """A row without a title should be rejected"""
        path = write_csv([HEADER, ["", "https://example.com", ""], ["Ok", "https://ok", ""]])
        records = import_records(path, run_logger)
        assert len(records) == 1
        assert "Title" in records.rejected[0][1]

    def test_trims_and_defaults_display_text(self, write_csv):
        """Values should be trimmed and blank Description should fall back to Title"""
        path = write_csv([HEADER, ["  My Report ", " https://example.com/doc ", "  "]])

        record = import_records(path)[0]

        assert record.title == "My Report"
        assert record.target_url == "https://example.com/doc"
        assert record.display_text == "My Report"
        assert record.row_number == 2

    def test_description_column_optional(self, write_csv):
        """Title and URL alone should be enough"""
        path = write_csv([["Title", "URL"], ["Doc", "https://example.com"]])
        record = import_records(path)[0]
        assert record.display_text == "Doc"

    def test_keeps_description(self, write_csv):
        """Description should become the display text"""
        path = write_csv([HEADER, ["Doc", "https://example.com", "Read me"]])
        assert import_records(path)[0].display_text == "Read me"

    def test_accepts_excel_bom(self, tmp_path):
        """UTF-8 BOM from Excel should not break the Title header"""
        path = tmp_path / "bom.csv"
        path.write_bytes("\ufeffTitle,URL\r\nDoc,https://example.com\r\n".encode("utf-8"))
        assert import_records(path)[0].title == "Doc"

    def test_missing_file_is_fatal(self, tmp_path):
        """Missing input should raise RecordImportError"""
        with pytest.raises(RecordImportError):
            import_records(tmp_path / "nope.csv")

    def test_header_only_is_fatal(self, write_csv):
        """A file with no data rows should raise RecordImportError"""
        path = write_csv([HEADER])
        with pytest.raises(RecordImportError):
            import_records(path)

    def test_empty_file_is_fatal(self, tmp_path):
        """An empty file should raise RecordImportError"""
        path = tmp_path / "empty.csv"
        path.write_text("", encoding="utf-8")
        with pytest.raises(RecordImportError):
            import_records(path)

    def test_header_match_is_case_sensitive(self, write_csv):
        """Lower-case headers should not count as Title/URL"""
        path = write_csv([["title", "url"], ["Doc", "https://example.com"]])
        with pytest.raises(RecordImportError) as excinfo:
            import_records(path)
        assert "Title" in str(excinfo.value)

    def test_row_numbers_follow_file_lines(self, tmp_path, run_logger):
        """Blank lines and multi-line quoted titles should not shift row numbers"""
        path = tmp_path / "links.csv"
        path.write_text('Title,URL\n"Multi\nline",https://a\n\nBad,\n', encoding="utf-8")

        records = import_records(path, run_logger)

        assert records[0].title == "Multi\nline"
        assert records[0].row_number == 3
        assert records.rejected == [(5, "empty URL")]

    def test_non_utf8_file_is_fatal(self, tmp_path):
        """A Windows-1252 export should raise RecordImportError, not UnicodeDecodeError"""
        path = tmp_path / "latin.csv"
        path.write_bytes("Title,URL\r\nCafé,https://example.com\r\n".encode("cp1252"))

        with pytest.raises(RecordImportError) as excinfo:
            import_records(path)
        assert isinstance(excinfo.value.cause, UnicodeDecodeError)
        assert "UTF-8" in str(excinfo.value)
