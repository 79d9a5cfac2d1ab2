"""Tests for the registry line codec."""

from __future__ import annotations

from datetime import datetime

import pytest

from filekeeper.errors import ErrorKind, FileKeeperError
from filekeeper.registry.codec import (
    decode,
    encode,
    escape_content,
    unescape_content,
)
from filekeeper.registry.record import Record

T0 = datetime(2026, 3, 1, 9, 15, 42, 123456)


def _record(content: str = "hello", **overrides) -> Record:
    fields = dict(
        id="3f2b8c1e-0000-4000-8000-000000000001",
        file_name="notes.txt",
        content=content,
        storage_path="/home/me/docs",
        category="Work",
        created_at=T0,
        updated_at=T0,
    )
    fields.update(overrides)
    return Record(**fields)


class TestEscape:
    def test_escape_order(self):
        assert escape_content("a\\b\nc\rd|e") == "a\\\\b\\nc\\rd\\pe"

    def test_escaped_text_has_no_delimiter_or_newline(self):
        escaped = escape_content("x|y\nz\r")
        assert "|" not in escaped
        assert "\n" not in escaped
        assert "\r" not in escaped

    def test_unescape_reverses(self):
        assert unescape_content("a\\\\b\\nc\\rd\\pe") == "a\\b\nc\rd|e"

    def test_unknown_sequence_kept(self):
        assert unescape_content("tab\\there") == "tab\\there"

    def test_trailing_backslash_kept(self):
        assert unescape_content("end\\") == "end\\"


class TestEncode:
    def test_field_layout(self):
        line = encode(_record(content="a|b"))
        assert line == (
            "3f2b8c1e-0000-4000-8000-000000000001|notes.txt|/home/me/docs|Work|"
            "2026-03-01T09:15:42|2026-03-01T09:15:42|a\\pb"
        )

    def test_single_line(self):
        assert "\n" not in encode(_record(content="one\ntwo\r\nthree"))


class TestDecode:
    @pytest.mark.parametrize(
        "content",
        [
            "",
            "plain text",
            "line one\nline two\n",
            "windows\r\nline",
            "pipes | inside || here|",
            "back\\slash \\\\ double",
            "literal \\n and \\p and \\r typed by hand",
            "trailing spaces   ",
            "mixed \\|\n\r\\n|\\",
        ],
    )
    def test_round_trip_content(self, content: str):
        original = _record(content=content)
        decoded = decode(encode(original))
        assert decoded.content == content
        assert decoded.id == original.id
        assert decoded.file_name == original.file_name
        assert decoded.storage_path == original.storage_path
        assert decoded.category == original.category

    def test_timestamps_second_precision(self):
        decoded = decode(encode(_record()))
        assert decoded.created_at == T0.replace(microsecond=0)
        assert decoded.updated_at == T0.replace(microsecond=0)

    def test_content_keeps_unsplit_delimiters(self):
        line = "id|a.txt|/p|Gen|2026-01-01T00:00:00|2026-01-01T00:00:00|x|y|z"
        assert decode(line).content == "x|y|z"

    def test_too_few_fields(self):
        with pytest.raises(FileKeeperError) as exc:
            decode("id|a.txt|/p|Gen|2026-01-01T00:00:00")
        assert exc.value.kind is ErrorKind.CORRUPTION
        assert "expected 7 fields" in exc.value.message

    def test_bad_timestamp(self):
        with pytest.raises(FileKeeperError) as exc:
            decode("id|a.txt|/p|Gen|yesterday|2026-01-01T00:00:00|body")
        assert exc.value.kind is ErrorKind.CORRUPTION

    def test_blank_category_normalized(self):
        line = "id|a.txt|/p| |2026-01-01T00:00:00|2026-01-01T00:00:00|body"
        assert decode(line).category == "General"
