"""
Exception types raised while resolving command-line options.

The CLI catches `OptionsError` subclasses and maps them to exit codes; anything
else is a bug and propagates.
"""

from __future__ import annotations


class OptionsError(Exception):
    """Base class for all option resolution errors."""


class ParseError(OptionsError):
    """Raised when arguments are malformed, unknown, or missing."""


class MissingInputError(OptionsError):
    """Raised when no input patterns were given or none of them matched a file."""


class ConfigError(OptionsError):
    """Raised when a config file cannot be read or parsed."""


class ValidationError(OptionsError):
    """
    Raised after the full input list was checked and at least one file was missing.
    `errors` holds one `FileNotFoundError` per missing file, in input order.
    """

    def __init__(self, errors: list[FileNotFoundError]) -> None:
        self.errors: list[FileNotFoundError] = list(errors)
        lines = [f"File not found: {e.filename}" for e in self.errors]
        super().__init__("\n".join(lines))


class AdvisoryWarning(UserWarning):
    """Non-fatal notice emitted during resolution (e.g. a defaulted output path)."""
