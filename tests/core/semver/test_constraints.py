"""Tests for Constraint parsing and checking.

Covers comparison operators, wildcards and partial versions, tilde and
caret ranges, hyphen ranges, AND/OR composition, and the pre-release rule.
"""

from __future__ import annotations

import pytest

from chartdeps.core.semver import Constraint, Version
from chartdeps.exceptions import VersionError


def _ok(constraint: str, version: str) -> bool:
    return Constraint.parse(constraint).satisfies(version)


class TestComparisons:
    """Plain comparison atoms."""

    @pytest.mark.parametrize("constraint", ["1.2.3", "=1.2.3", "==1.2.3"])
    def test_exact(self, constraint: str) -> None:
        assert _ok(constraint, "1.2.3") is True
        assert _ok(constraint, "1.2.4") is False

    def test_not_equal(self) -> None:
        assert _ok("!=1.2.3", "1.2.4") is True
        assert _ok("!=1.2.3", "1.2.3") is False

    def test_space_separated_range(self) -> None:
        assert _ok(">=1.0.0 <2.0.0", "1.5.0") is True
        assert _ok(">=1.0.0 <2.0.0", "2.0.0") is False
        assert _ok(">=1.0.0 <2.0.0", "0.9.0") is False

    def test_comma_separated_range(self) -> None:
        assert _ok(">=1.0.0,<2.0.0", "1.99.99") is True
        assert _ok(">=1.0.0, <2.0.0", "2.0.0") is False

    def test_operator_followed_by_space(self) -> None:
        assert _ok(">= 1.2.3", "1.2.3") is True

    def test_exclusive_bounds(self) -> None:
        assert _ok(">1.0.0", "1.0.0") is False
        assert _ok(">1.0.0", "1.0.1") is True
        assert _ok("<=2.0.0", "2.0.0") is True

    def test_partial_comparisons(self) -> None:
        assert _ok(">1.2", "1.2.9") is False
        assert _ok(">1.2", "1.3.0") is True
        assert _ok("<=1.2", "1.2.9") is True
        assert _ok("<1.2", "1.2.0") is False
        assert _ok("<1.2", "1.1.9") is True

    def test_v_prefix_in_constraint(self) -> None:
        assert _ok(">=v1.0.0", "1.0.0") is True


class TestWildcards:
    """Wildcards, x-ranges and partial versions."""

    def test_major_x_range(self) -> None:
        assert _ok("1.x", "1.9.9") is True
        assert _ok("1.x", "3.0.0") is False

    def test_minor_star_range(self) -> None:
        assert _ok("1.2.*", "1.2.7") is True
        assert _ok("1.2.*", "1.3.0") is False

    def test_bare_partial(self) -> None:
        assert _ok("2", "2.4.0") is True
        assert _ok("2", "3.0.0") is False

    def test_star_accepts_any_release(self) -> None:
        assert _ok("*", "5.0.0") is True

    def test_empty_constraint_accepts_anything(self) -> None:
        constraint = Constraint.parse("")
        assert constraint.satisfies("0.0.1-alpha") is True

    def test_not_equal_partial(self) -> None:
        assert _ok("!=1.x", "1.5.0") is False
        assert _ok("!=1.x", "2.0.0") is True


class TestTildeAndCaret:
    """Tilde and caret ranges."""

    def test_tilde_full(self) -> None:
        assert _ok("~1.2.3", "1.2.9") is True
        assert _ok("~1.2.3", "1.3.0") is False
        assert _ok("~1.2.3", "1.2.2") is False

    def test_tilde_major_only(self) -> None:
        assert _ok("~1", "1.9.0") is True
        assert _ok("~1", "2.0.0") is False

    def test_caret_major(self) -> None:
        assert _ok("^1.2.3", "1.9.0") is True
        assert _ok("^1.2.3", "2.0.0") is False
        assert _ok("^1.2.3", "1.2.2") is False

    def test_caret_zero_major(self) -> None:
        assert _ok("^0.2.3", "0.2.9") is True
        assert _ok("^0.2.3", "0.3.0") is False

    def test_caret_zero_minor(self) -> None:
        assert _ok("^0.0.3", "0.0.3") is True
        assert _ok("^0.0.3", "0.0.4") is False

    def test_caret_partial(self) -> None:
        assert _ok("^0.x", "0.9.0") is True
        assert _ok("^0.0", "0.1.0") is False


class TestHyphenAndOr:
    """Hyphen ranges and ``||`` alternatives."""

    def test_hyphen_inclusive(self) -> None:
        assert _ok("1.0.0 - 2.0.0", "2.0.0") is True
        assert _ok("1.0.0 - 2.0.0", "2.0.1") is False
        assert _ok("1.0.0 - 2.0.0", "0.9.9") is False

    def test_hyphen_partial_upper(self) -> None:
        assert _ok("1.0 - 2", "2.9.0") is True
        assert _ok("1.0 - 2", "3.0.0") is False

    def test_or_alternatives(self) -> None:
        constraint = "<1.0.0 || >=3.0.0"
        assert _ok(constraint, "0.5.0") is True
        assert _ok(constraint, "2.0.0") is False
        assert _ok(constraint, "3.1.0") is True


class TestPrereleases:
    """A pre-release only matches groups that mention a pre-release."""

    def test_plain_range_excludes_prerelease(self) -> None:
        assert _ok(">=1.0.0", "2.0.0-rc.1") is False

    def test_star_excludes_prerelease(self) -> None:
        assert _ok("*", "1.0.0-alpha") is False

    def test_prerelease_range_admits_same_core_prerelease(self) -> None:
        assert _ok(">=1.0.0-alpha", "1.0.0-beta") is True
        assert _ok(">=1.0.0-alpha", "1.0.0") is True

    def test_prerelease_range_excludes_other_core_prerelease(self) -> None:
        assert _ok(">=1.0.0-alpha", "2.0.0-beta") is False
        assert _ok(">=1.0.0-0", "2.0.0-rc.1") is False

    def test_prerelease_on_upper_bound(self) -> None:
        assert _ok("1.0.0 - 2.0.0-rc.2", "2.0.0-rc.1") is True
        assert _ok("1.0.0 - 2.0.0-rc.2", "1.5.0-rc.1") is False

    def test_prerelease_must_be_in_same_group(self) -> None:
        assert _ok(">=1.0.0 || =2.0.0-rc.1", "2.0.0-rc.1") is True
        assert _ok(">=2.0.0-rc.1 <3.0.0 || >=1.0.0", "2.5.0-rc.1") is False

    def test_check_accepts_version_objects(self) -> None:
        assert Constraint.parse("^1.0.0-beta").check(Version.parse_strict("1.0.0-beta.2")) is True


class TestInvalid:
    """Malformed constraints raise VersionError."""

    @pytest.mark.parametrize(
        "text", ["abc", ">=x.y", "1.2.3.4", "~>1.0", "1.0.0 ||", ">=1.0.0 <", ",", "!=*"],
    )
    def test_invalid_constraint(self, text: str) -> None:
        with pytest.raises(VersionError):
            Constraint.parse(text)

    def test_invalid_version_to_check(self) -> None:
        with pytest.raises(VersionError):
            Constraint.parse(">=1.0.0").satisfies("not-a-version")

    def test_raw_is_preserved(self) -> None:
        assert str(Constraint.parse(">=1.0.0 <2.0.0")) == ">=1.0.0 <2.0.0"
