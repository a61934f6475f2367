"""Runtime environment loading helpers."""

from __future__ import annotations

import os
from pathlib import Path

from dotenv import find_dotenv, load_dotenv

_DISABLE_DOTENV_VALUES = {"1", "true", "yes", "on"}
ENV_FILE_VARIABLE = "SARIFBRIDGE_ENV_FILE"


def load_runtime_env(*, filename: str = ".env") -> bool:
    """Load credentials from a .env file without overriding the process env.

    ``SARIFBRIDGE_ENV_FILE`` names an explicit file; otherwise ``filename`` is
    searched for from the working directory upwards.
    """
    disabled = os.getenv("SARIFBRIDGE_DISABLE_DOTENV", "").strip().lower()
    if disabled in _DISABLE_DOTENV_VALUES:
        return False

    explicit = os.getenv(ENV_FILE_VARIABLE, "").strip()
    if explicit:
        dotenv_path = Path(explicit).expanduser()
        if not dotenv_path.is_file():
            return False
        return bool(load_dotenv(dotenv_path=dotenv_path, override=False))

    found = find_dotenv(filename=filename, usecwd=True)
    if not found:
        return False
    return bool(load_dotenv(dotenv_path=found, override=False))
