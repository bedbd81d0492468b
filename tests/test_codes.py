"""Tests for the status, action and depth tables and the shared models."""

import pytest

from svnstate.svn.codes import (
    depth_from_word,
    parse_status,
    path_action_from_char,
    path_action_to_char,
    status_from_char,
    status_from_word,
    status_to_char,
    status_to_word,
)
from svnstate.svn.models import ChangedPath, Depth, FileStatus, PathAction, RepositoryEntry, StatusCode


class TestStatusTables:
    @pytest.mark.parametrize("code", list(StatusCode))
    def test_char_round_trip(self, code):
        assert status_from_char(status_to_char(code)) == code

    @pytest.mark.parametrize("code", list(StatusCode))
    def test_word_round_trip(self, code):
        assert status_from_word(status_to_word(code)) == code
        assert status_from_word(status_to_word(code).upper()) == code

    def test_chars_unambiguous(self):
        chars = [status_to_char(code) for code in StatusCode]
        assert len(chars) == len(set(chars))

    def test_normal_alias(self):
        assert StatusCode.NORMAL is StatusCode.NONE
        assert status_from_word("normal") == StatusCode.NONE

    def test_unknown_values_default_to_none(self):
        assert status_from_char("Q") == StatusCode.NONE
        assert status_from_word("sideways") == StatusCode.NONE
        assert status_from_word(None) == StatusCode.NONE

    def test_parse_status(self):
        assert parse_status("M") == StatusCode.MODIFIED
        assert parse_status("Conflicted") == StatusCode.CONFLICTED
        assert parse_status("?") == StatusCode.UNVERSIONED
        assert parse_status("bogus") is None


class TestActionTables:
    @pytest.mark.parametrize("action", list(PathAction))
    def test_round_trip(self, action):
        assert path_action_from_char(path_action_to_char(action)) == action

    def test_default_is_modified(self):
        assert path_action_from_char("Z") == PathAction.MODIFIED
        assert path_action_from_char("") == PathAction.MODIFIED


class TestDepth:
    def test_words(self):
        assert depth_from_word("Immediates") == Depth.IMMEDIATES
        assert depth_from_word("weird") == Depth.UNKNOWN
        assert depth_from_word(None) == Depth.UNKNOWN


class TestModels:
    def test_names(self):
        assert FileStatus(path="a/b/c.txt").name == "c.txt"
        assert FileStatus(path="C:\\wc\\dir\\").name == "dir"
        assert ChangedPath(path="/trunk/x.py").file_name == "x.py"

    def test_has_local_modifications(self):
        assert FileStatus(path="a", working_copy_status=StatusCode.ADDED).has_local_modifications
        assert not FileStatus(path="a").has_local_modifications

    def test_repository_entry_display_name(self):
        assert RepositoryEntry(name="trunk/").display_name == "trunk"
