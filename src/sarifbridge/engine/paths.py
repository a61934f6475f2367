"""Location URI to repository-relative path."""

from __future__ import annotations

import os

from sarifbridge.constants import UNKNOWN_PATH

FILE_SCHEME = "file://"


def normalize_path(uri: str | None, *, cwd: str | None = None) -> str:
    """Canonicalize a SARIF artifact URI into a forward-slash relative path.

    The working-directory prefix is removed only on an exact match ending at a
    segment boundary; leading directories such as ``src/`` or ``app/`` are
    always kept.
    """
    if not uri:
        return UNKNOWN_PATH

    path = uri.replace("\\", "/")
    if path.startswith(FILE_SCHEME):
        path = path[len(FILE_SCHEME) :]
    path = path.lstrip("/")

    prefix = _working_directory_prefix(cwd)
    if prefix and (path == prefix or path.startswith(prefix + "/")):
        path = path[len(prefix) :].lstrip("/")

    return path.strip() or UNKNOWN_PATH


def _working_directory_prefix(cwd: str | None) -> str:
    active = os.getcwd() if cwd is None else cwd
    # Leading slashes were already removed from the path, so match without them.
    return active.replace("\\", "/").strip("/")
