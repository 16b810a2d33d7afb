"""Tests for git/refs.py."""

from __future__ import annotations

import pytest

from gitpin.git.refs import (
    RefType,
    ShowRefEntry,
    VersionResolution,
    is_hash_like,
    parse_show_ref,
    split_lines,
)

SHA = "3f786850e387550fdab836ed7e6dc881de23001b"


class TestIsHashLike:
    @pytest.mark.parametrize("value", ["a", "DEADBEEF", "0123456789abcdef", SHA, SHA.upper()])
    def test_accepts_hex(self, value: str) -> None:
        assert is_hash_like(value) is True

    @pytest.mark.parametrize("value", ["", "g", "v1.0", SHA + "0", " abc", "abc\n"])
    def test_rejects_everything_else(self, value: str) -> None:
        assert is_hash_like(value) is False


class TestSplitLines:
    def test_mixed_line_endings(self) -> None:
        assert split_lines("a\r\nb\nc\r\n\n") == ["a", "b", "c"]

    def test_empty(self) -> None:
        assert split_lines("") == []


class TestParseShowRef:
    def test_local_and_remote(self) -> None:
        output = (
            f"{SHA} refs/heads/main\n"
            "89e6c98d92887913cadf06b2adb97f26cde4849b refs/remotes/origin/main\n"
            "1111111111111111111111111111111111111111 refs/tags/v1.0.0\n"
        )
        assert parse_show_ref(output) == [
            ShowRefEntry(hash=SHA, ref="main"),
            ShowRefEntry(
                hash="89e6c98d92887913cadf06b2adb97f26cde4849b", ref="main", remote="origin"
            ),
            ShowRefEntry(hash="1111111111111111111111111111111111111111", ref="v1.0.0"),
        ]

    def test_remote_names_with_digits_and_dots(self) -> None:
        entries = parse_show_ref(f"{SHA} refs/remotes/mirror2.example/release\r\n")
        assert entries[0].remote == "mirror2.example"
        assert entries[0].is_remote is True

    def test_short_name_is_last_segment(self) -> None:
        entries = parse_show_ref(f"{SHA} refs/heads/feature/login\n")
        assert entries[0].ref == "login"
        assert entries[0].is_remote is False

    def test_skips_malformed_lines(self) -> None:
        assert parse_show_ref(f"{SHA}\n\n") == []


class TestVersionResolution:
    def test_unpacks_positionally(self) -> None:
        version, ref_type = VersionResolution("v1.0.0", RefType.TAG)
        assert version == "v1.0.0"
        assert ref_type is RefType.TAG

    def test_ref_type_is_string(self) -> None:
        assert str(RefType.BRANCH) == "branch"
        assert RefType("hash") is RefType.HASH
