"""Tests for the info parser (text and XML)."""

from datetime import datetime, timezone

import pytest

from svnstate.svn.info_parser import InfoParser, parse_info_date
from svnstate.svn.models import Depth, ItemInfo


@pytest.fixture
def parser() -> InfoParser:
    return InfoParser()


class TestTextInfo:
    def test_basic_fields(self, parser, info_text):
        info = parser.parse_text(info_text)
        assert info.path == "src/app.py"
        assert info.working_copy_root == "/home/alice/wc"
        assert info.url == "https://svn.example.com/repo/trunk/src/app.py"
        assert info.relative_url == "^/trunk/src/app.py"
        assert info.repository_root_url == "https://svn.example.com/repo"
        assert info.repository_uuid == "1b2c3d4e-0000-1111-2222-333344445555"
        assert info.revision == 1234
        assert info.node_kind == "file"
        assert info.is_file and not info.is_directory
        assert info.schedule == "normal"
        assert info.depth == Depth.INFINITY

    def test_last_changed(self, parser, info_text):
        info = parser.parse_text(info_text)
        assert info.last_changed_author == "alice"
        assert info.last_changed_revision == 1200
        assert info.last_changed_date == datetime(2024, 1, 10, 11, 34, 56, tzinfo=timezone.utc)

    def test_lock(self, parser, info_text):
        info = parser.parse_text(info_text)
        assert info.is_locked
        assert info.lock.owner == "bob"
        assert info.lock.token == "opaquelocktoken:abc"
        assert info.lock.comment == "first line\nsecond line"
        assert info.lock.created == datetime(2024, 1, 11, 9, 0, tzinfo=timezone.utc)

    def test_lock_comment_with_blank_line(self, parser):
        info = parser.parse_text(
            "Lock Owner: bob\n"
            "Lock Comment (3 lines):\n"
            "first\n"
            "\n"
            "third\n"
            "Schedule: normal\n"
        )
        assert info.lock.comment == "first\n\nthird"
        assert info.schedule == "normal"

    def test_bad_field_keeps_default(self, parser):
        info = parser.parse_text("Path: a.txt\nRevision: abc\nLast Changed Date: whenever\nDepth: sideways\n")
        assert info.path == "a.txt"
        assert info.revision == 0
        assert info.last_changed_date is None
        assert info.depth == Depth.UNKNOWN

    def test_conflict_files(self, parser):
        info = parser.parse_text(
            "Path: a.c\n"
            "Conflict Previous Base File: a.c.r10\n"
            "Conflict Previous Working File: a.c.mine\n"
            "Conflict Current Base File: a.c.r12\n"
            "Tree conflict: local edit, incoming delete upon update\n"
        )
        assert info.has_conflict
        assert info.conflict.old_file == "a.c.r10"
        assert info.conflict.working_file == "a.c.mine"
        assert info.conflict.new_file == "a.c.r12"
        assert info.tree_conflict == "local edit, incoming delete upon update"

    def test_copied_from(self, parser):
        info = parser.parse_text("Copied From URL: https://svn.example.com/repo/trunk/a\nCopied From Rev: 99\n")
        assert info.copy_from_url == "https://svn.example.com/repo/trunk/a"
        assert info.copy_from_revision == 99

    @pytest.mark.parametrize("output", ["", "  \n", None, "no colon here"])
    def test_empty_input_is_default(self, parser, output):
        assert parser.parse_text(output) == ItemInfo()

    def test_no_lock_or_conflict(self, parser):
        info = parser.parse_text("Path: a.txt\n")
        assert not info.is_locked
        assert not info.has_conflict


class TestXmlInfo:
    def test_first_entry(self, parser, info_xml):
        info = parser.parse_structured(info_xml)
        assert info.path == "."
        assert info.revision == 1234
        assert info.is_directory
        assert info.url == "https://svn.example.com/repo/trunk"
        assert info.relative_url == "^/trunk"
        assert info.repository_root_url == "https://svn.example.com/repo"
        assert info.working_copy_root == "/home/alice/wc"
        assert info.schedule == "normal"
        assert info.depth == Depth.INFINITY
        assert info.last_changed_revision == 1200
        assert info.last_changed_author == "alice"
        assert info.last_changed_date == datetime(2024, 1, 10, 11, 34, 56, 123456, tzinfo=timezone.utc)

    def test_lock(self, parser, info_xml):
        lock = parser.parse_structured(info_xml).lock
        assert lock.owner == "bob"
        assert lock.comment == "needs review"
        assert lock.created == datetime(2024, 1, 11, 9, 0, tzinfo=timezone.utc)

    def test_all_entries(self, parser, info_xml):
        infos = parser.parse_structured_all(info_xml)
        assert [i.path for i in infos] == [".", "src/app.py"]
        assert infos[1].last_changed_author == "carol"
        assert infos[1].lock is None

    def test_conflict_element(self, parser):
        xml = (
            '<info><entry path="a.c" kind="file" revision="12"><wc-info>'
            "<conflict><prev-base-file>a.c.r10</prev-base-file>"
            "<prev-wc-file>a.c.mine</prev-wc-file>"
            "<cur-base-file>a.c.r12</cur-base-file></conflict>"
            "</wc-info></entry></info>"
        )
        info = parser.parse_structured(xml)
        assert info.conflict.old_file == "a.c.r10"
        assert info.conflict.working_file == "a.c.mine"
        assert info.conflict.new_file == "a.c.r12"

    def test_bad_revision_keeps_default(self, parser):
        info = parser.parse_structured('<info><entry path="x" revision="head"/></info>')
        assert info.path == "x"
        assert info.revision == 0

    @pytest.mark.parametrize("document", [None, "", "<info/>", "<info><entry"])
    def test_empty_documents(self, parser, document):
        assert parser.parse_structured(document) == ItemInfo()


class TestInfoDate:
    def test_iso_accepted(self):
        assert parse_info_date("2024-01-10T12:00:00Z") == datetime(2024, 1, 10, 12, tzinfo=timezone.utc)

    def test_garbage(self):
        assert parse_info_date("soon") is None
        assert parse_info_date("") is None
