"""Semantic-version range constraints.

A constraint is a disjunction (``||``) of groups; every atom of a group
must hold (conjunction, separated by whitespace or commas). Each atom is
normalised at parse time into a single version interval, so checking a
version is a handful of comparisons.

Supported atom syntax:

- Comparisons: ``=1.2.3`` (``==`` accepted), ``!=1.2.3``, ``>1.2.3``,
  ``>=1.2.3``, ``<1.2.3``, ``<=1.2.3``. A bare version means ``=``.
- Wildcards: ``*``, ``x``, ``X``, ``1.x``, ``1.2.*`` and partial versions
  (``1``, ``1.2``), which stand for every version with that prefix.
- Tilde: ``~1.2.3`` allows patch changes (``>=1.2.3 <1.3.0``); ``~1``
  allows minor changes.
- Caret: ``^1.2.3`` allows changes that keep the left-most non-zero
  component (``>=1.2.3 <2.0.0``; ``^0.2.3`` is ``>=0.2.3 <0.3.0``).
- Hyphen ranges: ``1.0.0 - 2.0.0`` (inclusive on both ends).

A version carrying a pre-release tag only satisfies a group when some atom
of that group names a pre-release on the same major.minor.patch.
``>=1.0.0-alpha`` admits ``1.0.0-beta`` but not ``2.0.0-rc.1``, and
``>=1.0.0`` admits no pre-release at all. The empty constraint accepts
every version.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from chartdeps.core.semver.version import Version
from chartdeps.exceptions import VersionError

# ---------------------------------------------------------------------------
# Tokenizing
# ---------------------------------------------------------------------------

_WILDCARDS = frozenset({"x", "X", "*"})

# Operator followed by an optional space, then a possibly partial version.
_ATOM_RE = re.compile(
    r"^(?P<op>==|!=|>=|<=|>|<|=|~|\^)?"
    r"(?P<ver>v?(?:\d+|[xX*])(?:\.(?:\d+|[xX*]))?(?:\.(?:\d+|[xX*]))?"
    r"(?:-[0-9A-Za-z\-.]+)?(?:\+[0-9A-Za-z\-.]+)?)$"
)

_PARTIAL_RE = re.compile(
    r"^v?(?P<major>\d+|[xX*])(?:\.(?P<minor>\d+|[xX*]))?(?:\.(?P<patch>\d+|[xX*]))?"
    r"(?:-(?P<pre>[0-9A-Za-z\-.]+))?(?:\+[0-9A-Za-z\-.]+)?$"
)

_HYPHEN_RE = re.compile(r"(\S+)\s+-\s+(\S+)")
_OP_SPACE_RE = re.compile(r"(==|!=|>=|<=|>|<|=|~|\^)\s+")


@dataclass(frozen=True)
class _Partial:
    """A possibly incomplete version: ``None`` components are wildcards."""

    major: int | None
    minor: int | None
    patch: int | None
    prerelease: str = ""

    @property
    def is_any(self) -> bool:
        return self.major is None

    def floor(self) -> Version:
        return Version(self.major or 0, self.minor or 0, self.patch or 0, self.prerelease)

    def next_ceiling(self) -> Version:
        """The first version above every version this partial stands for."""
        if self.minor is None:
            return Version(self.major + 1, 0, 0)
        if self.patch is None:
            return Version(self.major, self.minor + 1, 0)
        return Version(self.major, self.minor, self.patch + 1)


def _parse_partial(text: str) -> _Partial:
    m = _PARTIAL_RE.match(text)
    if not m:
        raise VersionError(f"Invalid version in constraint: {text!r}")

    parts: list[int | None] = []
    wildcard_seen = False
    for name in ("major", "minor", "patch"):
        raw = m.group(name)
        if raw is None or raw in _WILDCARDS or wildcard_seen:
            wildcard_seen = True
            parts.append(None)
        else:
            parts.append(int(raw))
    pre = m.group("pre") or ""
    if pre and wildcard_seen:
        raise VersionError(f"Pre-release on a wildcard version: {text!r}")
    return _Partial(parts[0], parts[1], parts[2], pre)


# ---------------------------------------------------------------------------
# Intervals
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class _Interval:
    """A version interval, optionally negated.

    ``None`` bounds are unbounded. A negated interval matches every version
    outside the interval. ``prerelease_cores`` holds the major.minor.patch
    of each bound that names a pre-release.
    """

    lower: Version | None = None
    lower_inclusive: bool = True
    upper: Version | None = None
    upper_inclusive: bool = False
    negated: bool = False
    prerelease_cores: tuple[tuple[int, int, int], ...] = ()

    def contains(self, version: Version) -> bool:
        inside = True
        if self.lower is not None:
            if self.lower_inclusive:
                inside = version >= self.lower
            else:
                inside = version > self.lower
        if inside and self.upper is not None:
            if self.upper_inclusive:
                inside = version <= self.upper
            else:
                inside = version < self.upper
        return not inside if self.negated else inside


_ANY = _Interval()


def _cores(partial: _Partial) -> tuple[tuple[int, int, int], ...]:
    if not partial.prerelease:
        return ()
    return ((partial.major, partial.minor, partial.patch),)


def _atom_interval(op: str, partial: _Partial) -> _Interval:
    """Translate one operator/partial-version pair into an interval."""
    if partial.is_any:
        if op == "!=":
            raise VersionError("Constraint '!=*' excludes every version")
        return _ANY

    exact = partial.patch is not None
    floor = partial.floor()
    pre = _cores(partial)

    if op in ("", "=", "=="):
        if exact:
            return _Interval(floor, True, floor, True, prerelease_cores=pre)
        return _Interval(floor, True, partial.next_ceiling(), False)
    if op == "!=":
        if exact:
            return _Interval(floor, True, floor, True, negated=True, prerelease_cores=pre)
        return _Interval(floor, True, partial.next_ceiling(), False, negated=True)
    if op == ">":
        if exact:
            return _Interval(floor, False, prerelease_cores=pre)
        return _Interval(partial.next_ceiling(), True)
    if op == ">=":
        return _Interval(floor, True, prerelease_cores=pre)
    if op == "<":
        return _Interval(upper=floor, upper_inclusive=False, prerelease_cores=pre)
    if op == "<=":
        if exact:
            return _Interval(upper=floor, upper_inclusive=True, prerelease_cores=pre)
        return _Interval(upper=partial.next_ceiling(), upper_inclusive=False)
    if op == "~":
        if partial.minor is None:
            ceiling = floor.bump_major()
        else:
            ceiling = floor.bump_minor()
        return _Interval(floor, True, ceiling, False, prerelease_cores=pre)
    if op == "^":
        if floor.major > 0 or partial.minor is None:
            ceiling = floor.bump_major()
        elif floor.minor > 0 or partial.patch is None:
            ceiling = floor.bump_minor()
        else:
            ceiling = floor.bump_patch()
        return _Interval(floor, True, ceiling, False, prerelease_cores=pre)
    raise VersionError(f"Unknown constraint operator: {op!r}")  # pragma: no cover


def _hyphen_interval(low: str, high: str) -> _Interval:
    lower = _parse_partial(low)
    upper = _parse_partial(high)
    pre = _cores(lower) + _cores(upper)
    lo = None if lower.is_any else lower.floor()
    if upper.is_any:
        return _Interval(lo, True, prerelease_cores=pre)
    if upper.patch is None:
        return _Interval(lo, True, upper.next_ceiling(), False, prerelease_cores=pre)
    return _Interval(lo, True, upper.floor(), True, prerelease_cores=pre)


# ---------------------------------------------------------------------------
# Constraint
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class _Group:
    intervals: tuple[_Interval, ...]

    def check(self, version: Version) -> bool:
        if version.is_prerelease:
            core = (version.major, version.minor, version.patch)
            if not any(core in i.prerelease_cores for i in self.intervals):
                return False
        return all(i.contains(version) for i in self.intervals)


@dataclass(frozen=True)
class Constraint:
    """A parsed semantic-version range.

    Build instances with ``Constraint.parse``; the constructor takes the
    already-normalised groups.

    Attributes:
        raw: The constraint string as authored (e.g., ">=1.0.0 <2.0.0").
    """

    raw: str
    _groups: tuple[_Group, ...] = ()

    @classmethod
    def parse(cls, text: str) -> Constraint:
        """Parse a range expression.

        Raises:
            VersionError: If any atom is not valid range syntax.
        """
        stripped = text.strip()
        if not stripped:
            return cls(raw=text)

        groups: list[_Group] = []
        for alternative in stripped.split("||"):
            groups.append(cls._parse_group(alternative, text))
        return cls(raw=text, _groups=tuple(groups))

    @staticmethod
    def _parse_group(alternative: str, text: str) -> _Group:
        intervals: list[_Interval] = []
        remainder = alternative
        for low, high in _HYPHEN_RE.findall(alternative):
            intervals.append(_hyphen_interval(low, high))
        remainder = _HYPHEN_RE.sub(" ", remainder)
        remainder = _OP_SPACE_RE.sub(r"\1", remainder)

        atoms = [a for a in re.split(r"[\s,]+", remainder) if a]
        if not atoms and not intervals:
            raise VersionError(f"Empty alternative in constraint: {text!r}")
        for atom in atoms:
            m = _ATOM_RE.match(atom)
            if not m:
                raise VersionError(f"Invalid constraint atom: {atom!r}")
            intervals.append(_atom_interval(m.group("op") or "", _parse_partial(m.group("ver"))))
        return _Group(tuple(intervals))

    def check(self, version: Version) -> bool:
        """Return True if *version* satisfies at least one alternative."""
        if not self._groups:
            return True
        return any(group.check(version) for group in self._groups)

    def satisfies(self, version: str) -> bool:
        """Check a version string (parsed leniently) against this constraint.

        Raises:
            VersionError: If *version* is not a valid semantic version.
        """
        return self.check(Version.parse(version))

    def __str__(self) -> str:
        return self.raw

    def __repr__(self) -> str:
        return f"Constraint({self.raw!r})"
