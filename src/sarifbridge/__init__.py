"""SarifBridge package entrypoints."""

from sarifbridge.cli import app
from sarifbridge.constants import PACKAGE_VERSION
from sarifbridge.runtime_env import load_runtime_env

__all__ = ["app", "main", "__version__"]
__version__ = PACKAGE_VERSION


def main() -> None:
    """Launch the CLI."""
    load_runtime_env()
    app()
