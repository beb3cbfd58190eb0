"""Recursion context for the tree walk."""

import os
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

from tfsgit.core.exceptions import LocalFilesystemError


class WalkContext:
    """Tracks how deep the walk is and where it came from.

    Every ``descend`` pushes the current working directory, enters the
    subdirectory and bumps the depth; leaving the block restores both,
    even when the nested walk raised.
    """

    def __init__(self, max_depth: int) -> None:
        self.max_depth = max_depth
        self.depth = 0
        self._stack: list[Path] = []

    @property
    def can_descend(self) -> bool:
        return self.depth < self.max_depth

    @property
    def saved_directories(self) -> tuple[Path, ...]:
        return tuple(self._stack)

    @contextmanager
    def descend(self, dirname: str) -> Iterator[Path]:
        """Change into ``dirname`` for the duration of the block."""
        cwd = Path.cwd()
        try:
            os.chdir(dirname)
        except OSError as e:
            raise LocalFilesystemError(
                f"cannot enter directory {dirname}: {e.strerror or e}",
                details={"directory": dirname, "cwd": str(cwd)},
            ) from e
        self._stack.append(cwd)
        self.depth += 1
        try:
            yield Path.cwd()
        finally:
            os.chdir(self._stack.pop())
            self.depth -= 1
