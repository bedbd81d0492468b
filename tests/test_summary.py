"""Tests for change summaries."""

from svnstate.svn.status_parser import StatusParser
from svnstate.workingcopy.summary import ChangeSummary, summarise


class TestSummary:
    def test_counts(self, status_text):
        summary = summarise(StatusParser().parse_text(status_text))
        assert summary.total == 7
        assert summary.modified == 1
        assert summary.added == 1
        assert summary.deleted == 1
        assert summary.conflicted == 1
        assert summary.unversioned == 1
        assert summary.missing == 1
        assert summary.has_uncommitted_changes is True

    def test_clean(self):
        assert summarise([]) == ChangeSummary()

    def test_only_unversioned_is_not_dirty(self):
        summary = summarise(StatusParser().parse_text("?       scratch.txt"))
        assert summary.unversioned == 1
        assert summary.has_uncommitted_changes is False
