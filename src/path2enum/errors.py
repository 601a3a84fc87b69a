"""Exception hierarchy for path2enum.

Inaccessible directories are not represented here: the scanner absorbs
them and simply yields nothing for that subtree.
"""

from __future__ import annotations

from typing import Sequence


class Path2EnumError(Exception):
    """Base class for every error path2enum raises on purpose."""


class MalformedConfigurationError(Path2EnumError, ValueError):
    """Raised when an option is unknown or its value cannot be parsed.

    Always raised before any scanning begins.
    """

    def __init__(self, message: str, *, option: str | None = None) -> None:
        self.option = option
        if option is not None:
            message = f"{option}: {message}"
        super().__init__(message)


class IdentifierCollisionError(Path2EnumError, RuntimeError):
    """Raised when distinct logical paths synthesize to the same identifier.

    ``collisions`` holds ``(identifier, first_path, second_path)`` triples,
    sorted, with ``first_path < second_path``.
    """

    def __init__(self, collisions: Sequence[tuple[str, str, str]]) -> None:
        self.collisions = tuple(collisions)
        lines = [
            f"  {ident!r}: {first!r} and {second!r}"
            for ident, first, second in self.collisions
        ]
        super().__init__(
            f"{len(self.collisions)} identifier collision(s); rename one path "
            f"of each pair:\n" + "\n".join(lines)
        )


class EmitError(Path2EnumError, ValueError):
    """Raised when a compiled identifier cannot be rendered in the target."""

    def __init__(self, identifier: str, reason: str) -> None:
        self.identifier = identifier
        self.reason = reason
        super().__init__(f"cannot emit {identifier!r}: {reason}")
