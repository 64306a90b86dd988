"""
Process-wide ambient state (environment variables and the working directory)
behind one injectable object, so resolution can run against fixed values.
"""

from __future__ import annotations

import os
import re
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path

# `$NAME`, `${NAME}`, and Windows-style `%NAME%` references. Any other `$` or `%`
# is literal text, and `$$` is kept as written rather than read as an escape.
_VAR_REF = re.compile(
    r"\$\$"
    r"|\$\{(?P<braced>[A-Za-z_][A-Za-z0-9_]*)\}"
    r"|\$(?P<bare>[A-Za-z_][A-Za-z0-9_]*)"
    r"|%(?P<percent>[A-Za-z_][A-Za-z0-9_]*)%"
)


@dataclass(frozen=True)
class Environment:
    """
    Snapshot of environment variables and the current working directory.

    `Environment.from_process()` reads the real process state; tests construct
    one directly with fixed values.
    """

    variables: Mapping[str, str] = field(default_factory=dict)
    cwd: Path = field(default_factory=Path.cwd)

    @classmethod
    def from_process(cls) -> Environment:
        return cls(variables=dict(os.environ), cwd=Path.cwd())

    def expand_vars(self, text: str) -> str:
        """
        Expand `$NAME`, `${NAME}`, and `%NAME%` references in one pass, so an
        expanded value is never expanded again. Unknown names are left as written.
        """

        def substitute(match: re.Match[str]) -> str:
            if match.lastgroup is None:
                return match.group(0)
            name = match.group("braced") or match.group("bare") or match.group("percent")
            return self.variables.get(name, match.group(0))

        return _VAR_REF.sub(substitute, text)

    def absolute(self, path: str | Path) -> Path:
        """
        Make `path` absolute against `cwd` and collapse `.`/`..` segments.
        Symlinks are not resolved.
        """
        return Path(os.path.normpath(self.cwd / Path(path)))
