#!/usr/bin/env python3
"""
protogen: Protocol Buffers code generator for C#

Common usage:
  protogen --src-dir protos --output generated/ protos/*.proto
  protogen --output Messages.cs messages.proto
  protogen --split-output --output generated/ '$PROTO_HOME/*.proto'

Wildcards in the file name of an input match recursively below its directory.
Defaults for any flag can be kept in a TOML file passed with --config.
"""

from __future__ import annotations

import argparse
import importlib.metadata
import sys

from protogen.errors import ConfigError, MissingInputError, ValidationError
from protogen.options import build_parser
from protogen.resolver import OptionsResolver


def _build_parser() -> argparse.ArgumentParser:
    # Use the module's docstring as the description
    module_doc = __doc__ or ""
    doc_parts = module_doc.split("\n\n")
    description = doc_parts[0]
    epilog = "\n\n".join(doc_parts[1:])
    return build_parser(description=description, epilog=epilog)


def main(args: list[str] | None = None) -> int:
    """
    Main entry point for the protogen CLI.

    Args:
        args: Command-line arguments (uses sys.argv if None)

    Returns:
        Exit code (0 for success, non-zero for errors)
    """
    if args is None:
        args = sys.argv[1:]

    resolver = OptionsResolver(parser=_build_parser())
    options = resolver.parse_args(args)
    if options is None:
        return 1

    # Display version information if requested (help takes precedence)
    if options.version and not options.show_help:
        try:
            version = importlib.metadata.version("protogen")
            print(f"v{version}")
        except importlib.metadata.PackageNotFoundError:
            print("unknown (package not installed)")
        return 0

    try:
        config = resolver.validate_and_normalize(resolver.apply_config(options))
    except (MissingInputError, ConfigError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except ValidationError as e:
        for error in e.errors:
            print(f"Error: File not found: {error.filename}", file=sys.stderr)
        return 2

    if config is None:
        return 1

    resolver.print_resolved(config)
    return 0


if __name__ == "__main__":
    sys.exit(main())
