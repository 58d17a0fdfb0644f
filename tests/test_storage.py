"""Tests for JSON state files."""
from __future__ import annotations

import pytest

from quizgen.errors import FileError, MissingStateError
from quizgen.storage import read_json, write_json


class TestReadWriteJson:
    def test_roundtrip(self, tmp_path):
        path = tmp_path / "nested" / "state.json"
        write_json(path, [{"a": 1}, None, "ü"])
        assert read_json(path) == [{"a": 1}, None, "ü"]

    def test_not_found(self, tmp_path):
        with pytest.raises(MissingStateError):
            read_json(tmp_path / "missing.json")

    def test_empty_file_is_unexpected_end(self, tmp_path):
        path = tmp_path / "empty.json"
        path.write_text("")
        with pytest.raises(MissingStateError):
            read_json(path)

    def test_truncated_is_unexpected_end(self, tmp_path):
        path = tmp_path / "cut.json"
        path.write_text('[\n  ["A", "B"],\n  ["C", ')
        with pytest.raises(MissingStateError):
            read_json(path)

    def test_garbage_is_fatal(self, tmp_path):
        path = tmp_path / "bad.json"
        path.write_text("{not json at all}")
        with pytest.raises(FileError) as exc_info:
            read_json(path)
        assert not isinstance(exc_info.value, MissingStateError)

    def test_directory_is_fatal(self, tmp_path):
        with pytest.raises(FileError) as exc_info:
            read_json(tmp_path)
        assert not isinstance(exc_info.value, MissingStateError)

    @pytest.mark.parametrize("content", [
        '[["A", nu',
        '[["A", "B"], ["C", tr',
        '[["A", "B"], ["C", fa',
        '{"a": 1.',
        '{"a": -',
        '[1, 2e',
    ])
    def test_cut_inside_literal_or_number(self, tmp_path, content):
        path = tmp_path / "cut.json"
        path.write_text(content)
        with pytest.raises(MissingStateError):
            read_json(path)

    @pytest.mark.parametrize("content", ['[["A", nope]]', '[["A", nu]', "[e", '{"a": 1.5.}'])
    def test_bad_token_is_fatal(self, tmp_path, content):
        path = tmp_path / "bad.json"
        path.write_text(content)
        with pytest.raises(FileError) as exc_info:
            read_json(path)
        assert not isinstance(exc_info.value, MissingStateError)
