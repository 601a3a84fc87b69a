"""Centralized exit-code contract for all CLI commands.

Code  Meaning
----  -------
  0   Success — the symbol set compiled (and was written, if requested)
  1   Violation — identifier collision, schema violation, unemittable name
  2   Error — malformed configuration, missing root, runtime failure
"""

from __future__ import annotations

from enum import IntEnum


class ExitCode(IntEnum):
    SUCCESS = 0
    VIOLATION = 1
    ERROR = 2
