"""Tests for gitpin.core.semver."""

from __future__ import annotations

import pytest

from gitpin.core.semver import SEMVER, SemVer, parse_version, sort_descending


class TestParseVersion:
    def test_plain(self) -> None:
        assert parse_version("1.2.3") == SemVer(1, 2, 3)

    def test_leading_v_and_equals(self) -> None:
        assert parse_version("v1.2.3") == SemVer(1, 2, 3)
        assert parse_version("=1.2.3") == SemVer(1, 2, 3)

    def test_surrounding_whitespace(self) -> None:
        assert parse_version("  v0.1.0\r") == SemVer(0, 1, 0)

    def test_prerelease_and_build(self) -> None:
        v = parse_version("2.0.0-rc.1+build.7")
        assert v is not None
        assert v.prerelease == ("rc", "1")
        assert v.build == ("build", "7")
        assert str(v) == "2.0.0-rc.1+build.7"

    @pytest.mark.parametrize(
        "text",
        ["", "1", "1.2", "1.2.3.4", "01.2.3", "1.02.3", "release-1.2.3", "1.2.3-", "1.2.3-01", "vv1.2.3"],
    )
    def test_invalid(self, text: str) -> None:
        assert parse_version(text) is None

    @pytest.mark.parametrize("text", ["1\u0663.0.0", "1.0.\u0661", "1.0.0-rc.\u0662"])
    def test_non_ascii_digits_rejected(self, text: str) -> None:
        assert parse_version(text) is None


class TestPrecedence:
    @pytest.mark.parametrize(
        ("lower", "higher"),
        [
            ("1.0.0", "2.0.0"),
            ("1.9.0", "1.10.0"),
            ("1.0.9", "1.0.10"),
            ("1.0.0-alpha", "1.0.0"),
            ("1.0.0-alpha", "1.0.0-alpha.1"),
            ("1.0.0-alpha.1", "1.0.0-alpha.beta"),
            ("1.0.0-beta.2", "1.0.0-beta.11"),
            ("1.0.0-beta.11", "1.0.0-rc.1"),
        ],
    )
    def test_ordering(self, lower: str, higher: str) -> None:
        low = parse_version(lower)
        high = parse_version(higher)
        assert low is not None and high is not None
        assert low < high
        assert high > low

    def test_build_metadata_ignored(self) -> None:
        assert parse_version("1.0.0+a") == parse_version("1.0.0+b")
        assert hash(parse_version("1.0.0+a")) == hash(parse_version("v1.0.0"))


class TestSortDescending:
    def test_filters_and_sorts(self) -> None:
        tags = ["v1.0.0", "latest", "v1.10.0", "v1.2.0", "v2.0.0-rc.1", "nightly-2024"]
        assert sort_descending(tags) == ["v2.0.0-rc.1", "v1.10.0", "v1.2.0", "v1.0.0"]

    def test_empty(self) -> None:
        assert sort_descending([]) == []
        assert sort_descending(["foo", "bar"]) == []

    def test_scheme_delegates(self) -> None:
        assert SEMVER.sort_descending(["1.0.0", "3.0.0"]) == ["3.0.0", "1.0.0"]
