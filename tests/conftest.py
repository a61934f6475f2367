"""Shared pytest configuration."""

from __future__ import annotations

import sys
from pathlib import Path

# Lets test modules import the shared SARIF builders.
sys.path.insert(0, str(Path(__file__).resolve().parent))
