"""Determinism utilities for CI-reproducible output.

When --ci / --deterministic mode is enabled the artifact timestamp is
fixed to a known epoch, so two compilations of the same tree produce
byte-identical JSON.  The compiled entries themselves never depend on
this flag: they are always sorted by identifier.
"""

from __future__ import annotations

import os
from datetime import datetime, timezone
from pathlib import Path

# Fixed timestamp for CI mode (ISO 8601 with timezone)
FIXED_TIMESTAMP = "2000-01-01T00:00:00+00:00"

_ENV_FLAGS = ("PATH2ENUM_DETERMINISTIC", "DETERMINISTIC")


def is_ci_mode(ci_mode: bool = False) -> bool:
    """Return True if deterministic output was requested.

    Checks the explicit flag first, then ``PATH2ENUM_DETERMINISTIC=1`` or
    ``DETERMINISTIC=1`` in the environment.
    """
    if ci_mode:
        return True
    return any(
        os.environ.get(name, "").lower() in ("1", "true", "yes")
        for name in _ENV_FLAGS
    )


def deterministic_timestamp(ci_mode: bool = False) -> str:
    """Return FIXED_TIMESTAMP in CI mode, otherwise the current UTC time."""
    if is_ci_mode(ci_mode):
        return FIXED_TIMESTAMP
    return datetime.now(timezone.utc).isoformat()


def normalize_path(path: Path, root: Path) -> str:
    """Convert a path to a root-relative, POSIX-normalized string.

    Ensures consistent logical paths across Windows/Linux/macOS.  Paths
    outside *root* come back as absolute POSIX strings.
    """
    try:
        return path.relative_to(root).as_posix()
    except ValueError:
        return path.as_posix()
