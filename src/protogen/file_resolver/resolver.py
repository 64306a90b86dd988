"""
FileResolver: expands input patterns into concrete file paths.

Each pattern's filename portion is matched against every file under its
directory portion, recursively. Results keep pattern order, and within a
pattern the top-down walk order.
"""

from __future__ import annotations

import os
from collections.abc import Iterable, Sequence
from pathlib import Path

import pathspec

from protogen.environment import Environment
from protogen.file_resolver.types import InputPattern


def _filename_spec(filename: str) -> pathspec.PathSpec:
    """
    Compile a filename glob. A gitignore line without a slash matches by basename,
    which is what a recursive filename search needs.
    """
    line = filename
    if line.startswith(("#", "!")):
        line = "\\" + line
    return pathspec.PathSpec.from_lines("gitignore", [line])


class FileResolver:
    """
    Expands input patterns against the filesystem.

    Paths are interpreted relative to the environment's working directory and
    returned absolute. A wildcard pattern that matches nothing contributes nothing.
    A literal pattern that matches nothing contributes its own absolute path, so
    the caller's existence check can report it as missing.
    """

    def __init__(self, environment: Environment | None = None) -> None:
        self._environment: Environment = environment or Environment.from_process()

    def resolve(self, patterns: Sequence[str]) -> list[Path]:
        """Expand every pattern and concatenate the results in pattern order."""
        result: list[Path] = []
        for raw in patterns:
            result.extend(self.expand(raw))
        return result

    def expand(self, raw: str) -> list[Path]:
        """Expand a single pattern."""
        pattern = InputPattern.parse(raw, self._environment)
        root = self._environment.absolute(pattern.directory)

        found: list[Path] = []
        if pattern.filename:
            found = list(self._walk_directory(root, _filename_spec(pattern.filename)))

        if not found and pattern.is_literal:
            return [self._environment.absolute(pattern.expanded)]
        return found

    def _walk_directory(self, root: Path, spec: pathspec.PathSpec) -> Iterable[Path]:
        """
        Walk `root` top-down with `os.walk()`, yielding matching files. Each
        directory's files come before its subdirectories; names are sorted.
        """
        for dirpath, dirnames, filenames in os.walk(root):
            dirnames.sort()
            current = Path(dirpath)
            for filename in sorted(filenames):
                if spec.match_file(filename):
                    yield current / filename
