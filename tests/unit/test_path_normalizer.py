"""Path normalization tests."""

from __future__ import annotations

import os

import pytest

from sarifbridge.engine.paths import normalize_path


def test_file_uri_under_working_directory_is_relativized() -> None:
    """The working-directory prefix is removed from file URIs."""
    assert normalize_path("file:///home/ci/repo/src/app.js", cwd="/home/ci/repo") == "src/app.js"


@pytest.mark.parametrize("uri", [None, "", "   "])
def test_absent_uri_maps_to_sentinel(uri: str | None) -> None:
    """Missing or blank locations use the sentinel path."""
    assert normalize_path(uri, cwd="/work") == "unknown"


def test_backslashes_become_forward_slashes() -> None:
    """Windows separators are converted."""
    assert normalize_path("src\\lib\\util.py", cwd="/work") == "src/lib/util.py"


def test_windows_working_directory_is_stripped() -> None:
    """A Windows-style working directory matches after slash conversion."""
    assert (
        normalize_path("file:///C:/build/repo/app/main.py", cwd="C:\\build\\repo")
        == "app/main.py"
    )


def test_first_segment_is_preserved() -> None:
    """Conventional top-level directories are never stripped."""
    assert normalize_path("src/app.js", cwd="/home/ci/repo") == "src/app.js"
    assert normalize_path("/app/server.py", cwd="/home/ci/repo") == "app/server.py"


def test_similar_prefix_is_not_stripped() -> None:
    """Only a whole-segment working-directory match is removed."""
    assert (
        normalize_path("/home/ci/repository/app.js", cwd="/home/ci/repo")
        == "home/ci/repository/app.js"
    )


def test_working_directory_defaults_to_process_cwd(monkeypatch, tmp_path) -> None:  # type: ignore[no-untyped-def]
    """Without an explicit cwd the process working directory is used."""
    monkeypatch.chdir(tmp_path)
    uri = f"file://{os.getcwd()}/lib/a.py"
    assert normalize_path(uri) == "lib/a.py"
