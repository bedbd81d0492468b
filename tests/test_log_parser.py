"""Tests for the log parser (text and XML)."""

from datetime import datetime, timezone

import pytest

from svnstate.svn.log_parser import LogParser, parse_changed_path_line, parse_text_date
from svnstate.svn.models import EPOCH, CopySource, PathAction


@pytest.fixture
def parser() -> LogParser:
    return LogParser()


class TestTextLog:
    def test_single_block(self, parser):
        output = (
            "------------------------------------------------------------------------\n"
            "r100 | alice | 2024-01-10 12:00:00 +0000 (Wed, 10 Jan 2024) | 1 line\n"
            "\n"
            "hello\n"
            "------------------------------------------------------------------------\n"
        )
        (entry,) = parser.parse_text(output)
        assert entry.revision == 100
        assert entry.author == "alice"
        assert entry.message == "hello"
        assert entry.timestamp == datetime(2024, 1, 10, 12, 0, tzinfo=timezone.utc)
        assert entry.display_revision == "r100"

    def test_emission_order_kept(self, parser, log_text):
        assert [e.revision for e in parser.parse_text(log_text)] == [101, 100]

    def test_changed_paths_and_copy_source(self, parser, log_text):
        entry = parser.parse_text(log_text)[0]
        assert entry.has_changed_paths
        branch, app = entry.changed_paths
        assert branch.path == "/branches/b1"
        assert branch.action == PathAction.ADDED
        assert branch.copy_source == CopySource("/trunk", 100)
        assert app.path == "/trunk/app.py"
        assert app.action == PathAction.MODIFIED
        assert app.copy_source is None
        assert app.file_name == "app.py"

    def test_multiline_message_trimmed(self, parser, log_text):
        assert parser.parse_text(log_text)[0].message == "Branch off\nsecond line"

    def test_offset_converted_to_utc(self, parser, log_text):
        entry = parser.parse_text(log_text)[0]
        assert entry.timestamp == datetime(2024, 1, 11, 9, 30, tzinfo=timezone.utc)

    def test_bad_date_is_epoch(self, parser):
        output = "----\nr5 | bob | yesterday | 1 line\n\nfix\n----\n"
        (entry,) = parser.parse_text(output)
        assert entry.timestamp == EPOCH

    def test_malformed_header_skipped(self, parser):
        output = "----\nrandom words here\n----\nr7 | carol | 2024-01-10 12:00:00 +0000 | 1 line\n\nok\n----\n"
        entries = parser.parse_text(output)
        assert [e.revision for e in entries] == [7]

    def test_unterminated_block_still_returned(self, parser):
        output = "----\nr8 | dave | 2024-01-10 12:00:00 +0000 | 1 line\n\nlast"
        (entry,) = parser.parse_text(output)
        assert entry.message == "last"

    @pytest.mark.parametrize("output", ["", "  \n ", None, "------------\n"])
    def test_empty_input(self, parser, output):
        assert parser.parse_text(output) == []

    def test_idempotent(self, parser, log_text):
        assert parser.parse_text(log_text) == parser.parse_text(log_text)


class TestHelpers:
    def test_text_date_without_offset_is_utc(self):
        assert parse_text_date("2024-01-10 12:00:00") == datetime(2024, 1, 10, 12, tzinfo=timezone.utc)

    def test_text_date_garbage(self):
        assert parse_text_date("2024-13-45 99:00:00 +0000") is None
        assert parse_text_date("nope") is None

    def test_changed_path_uses_last_revision_marker(self):
        cp = parse_changed_path_line("A /tags/v:r1 (from /trunk/odd:rname:r42)")
        assert cp.path == "/tags/v:r1"
        assert cp.copy_source == CopySource("/trunk/odd:rname", 42)

    def test_unknown_action_is_modified(self):
        assert parse_changed_path_line("X /trunk/a").action == PathAction.MODIFIED

    def test_replaced_action(self):
        assert parse_changed_path_line("R /trunk/a").action == PathAction.REPLACED


class TestXmlLog:
    def test_skips_entry_without_revision(self, parser, log_xml):
        assert [e.revision for e in parser.parse_structured(log_xml)] == [101, 100]

    def test_fields(self, parser, log_xml):
        entry = parser.parse_structured(log_xml)[0]
        assert entry.author == "bob"
        assert entry.message == "Branch off"
        assert entry.timestamp == datetime(2024, 1, 11, 9, 30, tzinfo=timezone.utc)

    def test_paths(self, parser, log_xml):
        entry = parser.parse_structured(log_xml)[0]
        assert [cp.path for cp in entry.changed_paths] == ["/branches/b1", "/trunk/app.py"]
        assert entry.changed_paths[0].copy_source == CopySource("/trunk", 100)
        assert entry.changed_paths[1].copy_source is None

    def test_bad_date_is_epoch(self, parser, log_xml):
        assert parser.parse_structured(log_xml)[1].timestamp == EPOCH

    def test_copy_source_needs_both_attributes(self, parser):
        xml = (
            '<log><logentry revision="3"><paths>'
            '<path action="A" copyfrom-path="/trunk">/branches/x</path>'
            "</paths></logentry></log>"
        )
        (entry,) = parser.parse_structured(xml)
        assert entry.changed_paths[0].copy_source is None
        assert entry.author == ""
        assert entry.message == ""

    @pytest.mark.parametrize("document", [None, "", "<log/>", "<log><logentry"])
    def test_empty_documents(self, parser, document):
        assert parser.parse_structured(document) == []
