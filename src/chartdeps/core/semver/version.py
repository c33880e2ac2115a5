"""Semantic version values with strict and loose parsing.

Two parsers are provided because chart tooling meets versions in two roles:

- **Strict** (``Version.parse_strict``) follows SemVer 2.0.0 exactly:
  ``MAJOR.MINOR.PATCH[-PRERELEASE][+BUILD]`` with no leading ``v`` and no
  leading zeros. Archive file names are disambiguated with this parser so
  that a name suffix such as ``-abc`` or ``-v2`` never counts as a version.
- **Loose** (``Version.parse``) additionally accepts a leading ``v`` and
  missing minor/patch components (``v1.2`` is ``1.2.0``). Versions written
  in ``Chart.yaml`` are read with this parser.

Precedence follows SemVer 2.0.0 section 11: build metadata is ignored,
a pre-release version sorts before its associated normal version, and
pre-release identifiers compare numerically when both are numeric.

References
----------
.. [SemVer] Preston-Werner, T. (2013). "Semantic Versioning 2.0.0."
   https://semver.org/
"""

from __future__ import annotations

import functools
import re
from dataclasses import dataclass, field

from chartdeps.exceptions import VersionError

# ---------------------------------------------------------------------------
# Grammar
# ---------------------------------------------------------------------------

_STRICT_RE = re.compile(
    r"^(?P<major>0|[1-9]\d*)\.(?P<minor>0|[1-9]\d*)\.(?P<patch>0|[1-9]\d*)"
    r"(?:-(?P<pre>[0-9A-Za-z\-]+(?:\.[0-9A-Za-z\-]+)*))?"
    r"(?:\+(?P<build>[0-9A-Za-z\-]+(?:\.[0-9A-Za-z\-]+)*))?$"
)

_LOOSE_RE = re.compile(
    r"^v?(?P<major>\d+)(?:\.(?P<minor>\d+))?(?:\.(?P<patch>\d+))?"
    r"(?:-(?P<pre>[0-9A-Za-z\-]+(?:\.[0-9A-Za-z\-]+)*))?"
    r"(?:\+(?P<build>[0-9A-Za-z\-]+(?:\.[0-9A-Za-z\-]+)*))?$"
)


def _prerelease_key(prerelease: str) -> tuple[tuple[int, int, str], ...]:
    """Build a sort key for a dotted pre-release string.

    Numeric identifiers sort before alphanumeric ones; a shorter list of
    identifiers sorts before a longer one sharing the same prefix.
    """
    key: list[tuple[int, int, str]] = []
    for ident in prerelease.split("."):
        if ident.isdigit():
            key.append((0, int(ident), ""))
        else:
            key.append((1, 0, ident))
    return tuple(key)


# ---------------------------------------------------------------------------
# Version
# ---------------------------------------------------------------------------


@functools.total_ordering
@dataclass(frozen=True)
class Version:
    """An immutable semantic version.

    Equality and hashing ignore build metadata and the original spelling,
    matching SemVer precedence rules: ``1.0.0+a == 1.0.0+b``.

    Attributes:
        major: Major version number.
        minor: Minor version number.
        patch: Patch version number.
        prerelease: Dotted pre-release identifiers without the leading
            ``-`` (empty for a normal version).
        build: Build metadata without the leading ``+``.
        original: The string the version was parsed from.
    """

    major: int
    minor: int
    patch: int
    prerelease: str = ""
    build: str = field(default="", compare=False)
    original: str = field(default="", compare=False)

    @classmethod
    def parse_strict(cls, text: str) -> Version:
        """Parse *text* as a strict SemVer 2.0.0 version.

        Raises:
            VersionError: If *text* is not a strict semantic version.
        """
        m = _STRICT_RE.match(text)
        if not m:
            raise VersionError(f"Invalid semantic version: {text!r}")
        return cls._from_match(m, text)

    @classmethod
    def parse(cls, text: str) -> Version:
        """Parse *text* leniently (``v`` prefix, partial versions allowed).

        Raises:
            VersionError: If *text* does not look like a version at all.
        """
        m = _LOOSE_RE.match(text.strip())
        if not m:
            raise VersionError(f"Invalid semantic version: {text!r}")
        return cls._from_match(m, text)

    @classmethod
    def _from_match(cls, m: re.Match[str], text: str) -> Version:
        return cls(
            major=int(m.group("major")),
            minor=int(m.group("minor") or 0),
            patch=int(m.group("patch") or 0),
            prerelease=m.group("pre") or "",
            build=m.group("build") or "",
            original=text,
        )

    @property
    def is_prerelease(self) -> bool:
        return bool(self.prerelease)

    def _precedence(self) -> tuple:
        if self.prerelease:
            return (self.major, self.minor, self.patch, 0, _prerelease_key(self.prerelease))
        return (self.major, self.minor, self.patch, 1, ())

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Version):
            return NotImplemented
        return self._precedence() < other._precedence()

    def bump_major(self) -> Version:
        return Version(self.major + 1, 0, 0)

    def bump_minor(self) -> Version:
        return Version(self.major, self.minor + 1, 0)

    def bump_patch(self) -> Version:
        return Version(self.major, self.minor, self.patch + 1)

    def __str__(self) -> str:
        text = f"{self.major}.{self.minor}.{self.patch}"
        if self.prerelease:
            text += f"-{self.prerelease}"
        if self.build:
            text += f"+{self.build}"
        return text

    def __repr__(self) -> str:
        return f"Version({str(self)!r})"


def is_strict_version(text: str) -> bool:
    """Return True if *text* parses as a strict semantic version."""
    return _STRICT_RE.match(text) is not None
