"""Tests for input list parsing."""

import pytest
from docprobe.core.items import load_work_items, parse_work_items
from docprobe.errors import ConfigurationError, InputFileError
from docprobe.models.events import EventType
from docprobe.models.items import WorkItem


class TestParseWorkItems:
    """Tests for parse_work_items."""

    def test_parses_pairs(self):
        """Test basic 'id name' lines."""
        parsed = parse_work_items(["en English", "fr French"])
        assert parsed.items == [
            WorkItem("en", "English", line_number=1),
            WorkItem("fr", "French", line_number=2),
        ]
        assert parsed.skipped == []

    def test_display_name_keeps_spaces(self):
        """Test the display name is the rest of the line."""
        parsed = parse_work_items(["zh-cn   Chinese (Simplified)\n"])
        assert parsed.items[0].id == "zh-cn"
        assert parsed.items[0].display_name == "Chinese (Simplified)"

    def test_tab_separated(self):
        """Test tabs work as separators."""
        parsed = parse_work_items(["de\tGerman"])
        assert parsed.items[0] == WorkItem("de", "German", line_number=1)

    def test_malformed_line_skipped(self):
        """Test a line without a display name is skipped, not fatal."""
        events = []
        parsed = parse_work_items(["en English", "xx", "fr French"], emit=events.append)

        assert [item.id for item in parsed.items] == ["en", "fr"]
        assert parsed.skipped == [2]
        assert len(events) == 1
        assert events[0].type == EventType.ITEM_SKIPPED
        assert events[0].line_number == 2
        assert events[0].item_id == "xx"

    def test_blank_and_comment_lines_ignored(self):
        """Test blank lines and comments are neither items nor errors."""
        parsed = parse_work_items(["", "   ", "# code name", "en English"])
        assert [item.id for item in parsed.items] == ["en"]
        assert parsed.items[0].line_number == 4
        assert parsed.skipped == []

    def test_duplicates_kept(self):
        """Test duplicate ids are not deduplicated."""
        parsed = parse_work_items(["en English", "en English"])
        assert len(parsed.items) == 2


class TestLoadWorkItems:
    """Tests for load_work_items."""

    def test_loads_file(self, tmp_path):
        """Test reading a languages file."""
        path = tmp_path / "languages.txt"
        path.write_text("en English\nja Japanese\nbad\n", encoding="utf-8")

        parsed = load_work_items(path)

        assert [item.id for item in parsed.items] == ["en", "ja"]
        assert parsed.skipped == [3]

    def test_missing_file(self, tmp_path):
        """Test a missing input file is a configuration error."""
        with pytest.raises(InputFileError) as exc_info:
            load_work_items(tmp_path / "missing.txt")

        assert isinstance(exc_info.value, ConfigurationError)
        assert "not found" in str(exc_info.value)

    def test_directory_is_unreadable(self, tmp_path):
        """Test a directory path is reported as unreadable."""
        with pytest.raises(InputFileError):
            load_work_items(tmp_path)

    def test_invalid_utf8_keeps_other_lines(self, tmp_path):
        """Test a non-UTF-8 byte does not reject the whole list."""
        path = tmp_path / "languages.txt"
        path.write_bytes(b"en English\nfr Fran\xe7ais\nde German\n")

        parsed = load_work_items(path)

        assert [item.id for item in parsed.items] == ["en", "fr", "de"]
        assert parsed.items[1].display_name == "Fran\ufffdais"
        assert parsed.skipped == []
