"""Tests for the Archive Locator and the Version Disambiguator."""

from __future__ import annotations

from pathlib import Path

import pytest

from chartdeps.core.semver import Version
from chartdeps.core.status import (
    ArchiveResolution,
    DependencyStatus,
    Unresolved,
    archive_pattern,
    disambiguate,
    locate_archives,
    make_candidate,
)
from chartdeps.exceptions import PatternError


def _touch(chart: Path, *names: str) -> None:
    charts = chart / "charts"
    charts.mkdir(parents=True, exist_ok=True)
    for name in names:
        (charts / name).write_bytes(b"")


class TestLocateArchives:
    """Tests for ``locate_archives``."""

    def test_no_charts_directory(self, tmp_path: Path) -> None:
        assert locate_archives(tmp_path, "app") == []

    def test_sorted_by_path(self, tmp_path: Path) -> None:
        _touch(tmp_path, "app-2.0.0.tgz", "app-1.0.0.tgz", "other-1.0.0.tgz")
        found = locate_archives(tmp_path, "app")
        assert [c.path.name for c in found] == ["app-1.0.0.tgz", "app-2.0.0.tgz"]

    def test_requires_archive_extension(self, tmp_path: Path) -> None:
        _touch(tmp_path, "app-1.0.0.tar", "app-1.0.0.tgz.bak")
        assert locate_archives(tmp_path, "app") == []

    def test_directories_are_not_archives(self, tmp_path: Path) -> None:
        (tmp_path / "charts" / "app-1.0.0.tgz").mkdir(parents=True)
        assert locate_archives(tmp_path, "app") == []

    def test_glob_metacharacters_in_name_are_literal(self, tmp_path: Path) -> None:
        _touch(tmp_path, "app-1.0.0.tgz")
        assert locate_archives(tmp_path, "ap[p]") == []
        assert locate_archives(tmp_path, "a*") == []

    def test_chart_archive_path_has_no_candidates(self, tmp_path: Path) -> None:
        packaged = tmp_path / "web-1.0.0.tgz"
        packaged.write_bytes(b"")
        assert locate_archives(packaged, "app") == []

    def test_glob_metacharacters_in_chart_path_are_literal(self, tmp_path: Path) -> None:
        chart = tmp_path / "release[1]"
        _touch(chart, "app-1.2.0.tgz", "app-1.3.0.tgz")
        found = locate_archives(chart, "app")
        assert [c.path.name for c in found] == ["app-1.2.0.tgz", "app-1.3.0.tgz"]

    @pytest.mark.parametrize("name", ["a/b", "..", "bad\x00name"])
    def test_unusable_name_is_bad_pattern(self, tmp_path: Path, name: str) -> None:
        with pytest.raises(PatternError):
            archive_pattern(tmp_path, name)


class TestMakeCandidate:
    """Splitting archive names into tokens."""

    def test_versioned(self) -> None:
        c = make_candidate(Path("/c/charts/app-1.2.0.tgz"), "app")
        assert c.version_token == "1.2.0"
        assert c.parsed_version == Version(1, 2, 0)
        assert c.has_version is True

    def test_dashed_name_suffix_is_not_a_version(self) -> None:
        c = make_candidate(Path("/c/charts/first-chart-second-chart-0.1.0.tgz"), "first-chart")
        assert c.version_token == "second-chart-0.1.0"
        assert c.has_version is False

    def test_loose_versions_do_not_count(self) -> None:
        c = make_candidate(Path("/c/charts/app-v1.2.tgz"), "app")
        assert c.has_version is False


class TestDisambiguate:
    """Decision table of ``disambiguate``."""

    def _candidates(self, *tokens: str):
        return [make_candidate(Path(f"/c/charts/app-{t}.tgz"), "app") for t in tokens]

    def test_no_candidates(self) -> None:
        assert disambiguate([]) is None

    def test_single_candidate_accepted_without_version(self) -> None:
        result = disambiguate(self._candidates("abc"))
        assert isinstance(result, ArchiveResolution)
        assert result.candidate.version_token == "abc"

    def test_one_versioned_among_many(self) -> None:
        result = disambiguate(self._candidates("1.2.0", "abc"))
        assert isinstance(result, ArchiveResolution)
        assert result.candidate.version_token == "1.2.0"

    def test_several_versioned_is_ambiguous(self) -> None:
        result = disambiguate(self._candidates("1.0.0", "2.0.0"))
        assert isinstance(result, Unresolved)
        assert result.status is DependencyStatus.TOO_MANY_MATCHES
        assert "app-1.0.0.tgz" in result.detail

    def test_unversioned_still_counted_but_inconclusive(self) -> None:
        assert disambiguate(self._candidates("abc", "def")) is None
