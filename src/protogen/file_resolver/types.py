"""Types for input pattern expansion."""

from __future__ import annotations

import os
from dataclasses import dataclass

from protogen.environment import Environment

# Characters that make a pattern a wildcard rather than a literal path.
GLOB_CHARS = frozenset("*?[")


@dataclass(frozen=True)
class InputPattern:
    """
    One input pattern after environment-variable expansion, split into the
    directory to search and the filename to match within it.

    `directory` is `"."` when the pattern had no directory portion.
    """

    raw: str
    expanded: str
    directory: str
    filename: str

    @classmethod
    def parse(cls, raw: str, environment: Environment) -> InputPattern:
        expanded = environment.expand_vars(raw)
        directory, filename = os.path.split(expanded)
        return cls(raw=raw, expanded=expanded, directory=directory or ".", filename=filename)

    @property
    def is_literal(self) -> bool:
        """True when the pattern names a file rather than a wildcard match."""
        return not any(c in self.expanded for c in GLOB_CHARS)
