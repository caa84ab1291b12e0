"""Tests for dotted numeric versions and single-sided boundaries."""

import pytest

from security_advisories.models import (
    Boundary,
    InvalidBoundaryError,
    InvalidVersionError,
    Version,
)


class TestVersion:
    def test_parse_keeps_components(self):
        v = Version.from_string("1.2.3")
        assert v.components == (1, 2, 3)
        assert str(v) == "1.2.3"

    def test_missing_trailing_components_compare_as_zero(self):
        assert Version.from_string("1.0") == Version.from_string("1.0.0")
        assert hash(Version.from_string("1")) == hash(Version.from_string("1.0.0"))

    def test_numeric_ordering(self):
        assert Version.from_string("1.10").is_greater_than(Version.from_string("1.9"))
        assert Version.from_string("2").is_greater_than(Version.from_string("1.99.99"))
        assert not Version.from_string("1.0").is_greater_than(Version.from_string("1.0.0"))

    def test_greater_or_equal(self):
        assert Version.from_string("1.0").is_greater_or_equal_than(Version.from_string("1"))
        assert Version.from_string("1.0.1").is_greater_or_equal_than(Version.from_string("1"))
        assert not Version.from_string("0.9").is_greater_or_equal_than(Version.from_string("1"))

    def test_sorting(self):
        versions = [Version.from_string(v) for v in ["1.10", "1.2", "0.9.9", "1.2.0.1"]]
        assert [str(v) for v in sorted(versions)] == ["0.9.9", "1.2", "1.2.0.1", "1.10"]

    @pytest.mark.parametrize("raw", ["", "1.a", "v1.0", "1..0", "1.0.", ".1", "1.0-rc1", " 1.0"])
    def test_invalid_versions_raise(self, raw):
        with pytest.raises(InvalidVersionError):
            Version.from_string(raw)

    @pytest.mark.parametrize("raw", ["١.٢", "１.0", "1.२", "٣"])
    def test_non_ascii_digits_are_rejected(self, raw):
        with pytest.raises(InvalidVersionError):
            Version.from_string(raw)

    def test_invalid_version_is_a_value_error(self):
        with pytest.raises(ValueError, match="Invalid version string"):
            Version.from_string("abc")

    def test_empty_components_rejected(self):
        with pytest.raises(InvalidVersionError):
            Version(components=())


class TestBoundary:
    @pytest.mark.parametrize(
        ("raw", "comparator", "included", "lower"),
        [
            (">=1.2.3", ">=", True, True),
            (">1.2.3", ">", False, True),
            ("<=1.2.3", "<=", True, False),
            ("<1.2.3", "<", False, False),
        ],
    )
    def test_parse_comparators(self, raw, comparator, included, lower):
        boundary = Boundary.from_string(raw)

        assert boundary.comparator == comparator
        assert boundary.limit_included() is included
        assert boundary.is_lower() is lower
        assert boundary.get_version() == Version.from_string("1.2.3")
        assert boundary.get_boundary_string() == raw

    def test_whitespace_is_not_rendered(self):
        boundary = Boundary.from_string(" < 4.5 ")

        assert boundary.get_boundary_string() == "<4.5"
        assert str(boundary) == "<4.5"

    def test_boundary_string_round_trips(self):
        boundary = Boundary.from_string(">= 0.1")

        assert Boundary.from_string(boundary.get_boundary_string()) == boundary

    @pytest.mark.parametrize("raw", ["=>1.0", "==1.0", "1.0", ">=1.a", "", ">=", "!=1.0"])
    def test_invalid_boundaries_raise(self, raw):
        with pytest.raises(ValueError):
            Boundary.from_string(raw)

    @pytest.mark.parametrize("raw", [">=١.٢", "<１.0", "<=1.२"])
    def test_non_ascii_digits_are_rejected(self, raw):
        with pytest.raises(InvalidBoundaryError):
            Boundary.from_string(raw)

    def test_malformed_comparator_raises_boundary_error(self):
        with pytest.raises(InvalidBoundaryError):
            Boundary(version=Version.from_string("1.0"), comparator="!=")
