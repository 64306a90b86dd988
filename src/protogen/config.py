"""
TOML-based config file loading for protogen.

Read only from a file named with `--config PATH`; nothing is discovered
implicitly. The file is a standalone TOML file or a `pyproject.toml` with a
`[tool.protogen]` table. Keys are the long flag names without the leading dashes
(`use-tabs = true`, `src-dir = "protos"`). Config values are merged with CLI flags
using three-way precedence: explicit CLI flags > config file > built-in defaults.
"""

from __future__ import annotations

import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, cast

from protogen.errors import ConfigError
from protogen.options import CLI_ONLY_FIELDS, FLAGS, FlagKind, Options

if sys.version_info >= (3, 11):
    import tomllib  # pyright: ignore[reportUnreachable]
else:
    import tomli as tomllib  # type: ignore[no-redef]  # pyright: ignore[reportUnreachable]


# Mapping from TOML kebab-case keys (the long flag names) to `Options` fields
_KEY_TO_FIELD: dict[str, str] = {
    flag.long.lstrip("-"): flag.dest for flag in FLAGS if flag.dest not in CLI_ONLY_FIELDS
}
_FIELD_KINDS: dict[str, FlagKind] = {flag.dest: flag.kind for flag in FLAGS}

# Value fields holding paths, resolved against the config file's directory
_PATH_FIELDS = {"source_directory", "output_path"}


@dataclass
class ProtogenConfig:
    """
    Settings read from a config file. Only keys present in the file appear in
    `values`, so the merge can tell "not configured" from "set to the default".
    """

    path: Path
    values: dict[str, bool | str] = field(default_factory=dict)


def load_config(config_path: Path) -> ProtogenConfig:
    """
    Load a `ProtogenConfig` from a TOML file. Supports both standalone
    `protogen.toml` / `.protogen.toml` and `pyproject.toml` (extracts
    `[tool.protogen]`).
    """
    try:
        data = tomllib.loads(config_path.read_text())
    except (tomllib.TOMLDecodeError, OSError) as e:
        raise ConfigError(f"Could not read config file {config_path}: {e}") from e

    if config_path.name == "pyproject.toml":
        data = data.get("tool", {}).get("protogen", {})

    values = _parse_config_data(data, config_path)
    return ProtogenConfig(path=config_path, values=values)


def _parse_config_data(data: dict[str, Any], config_path: Path) -> dict[str, bool | str]:
    """Parse a flat or sectioned TOML dict into `Options` field values."""
    # Flatten sections: [generation] and [paths] merge into top level
    flat: dict[str, Any] = {}
    for key, value in data.items():
        if isinstance(value, dict):
            for sub_key, sub_value in cast(dict[str, Any], value).items():
                flat[sub_key] = sub_value
        else:
            flat[key] = value

    values: dict[str, bool | str] = {}
    for key, value in flat.items():
        field_name = _KEY_TO_FIELD.get(key)
        if field_name is None:
            continue
        if _FIELD_KINDS[field_name] is FlagKind.TOGGLE:
            if not isinstance(value, bool):
                raise ConfigError(f"{config_path}: '{key}' must be true or false")
        elif not isinstance(value, str):
            raise ConfigError(f"{config_path}: '{key}' must be a string")
        if field_name in _PATH_FIELDS:
            value = str(config_path.parent / value)
        values[field_name] = value
    return values


def merge_cli_with_config(options: Options, config: ProtogenConfig | None) -> Options:
    """
    Merge CLI options with config file settings.

    Precedence: explicit CLI flags > config file > built-in defaults.
    """
    if config is None:
        return options

    for field_name, value in config.values.items():
        # Skip if CLI explicitly set this flag
        if field_name in options.explicit_flags:
            continue
        setattr(options, field_name, value)

    return options
