"""
Command-line flag table and argument binding.

Every flag is declared once in `FLAGS`; the `argparse` parser is generated from
that table, so help text, binding, and tests all read the same source.
"""

from __future__ import annotations

import argparse
from collections.abc import Sequence
from dataclasses import dataclass, field
from enum import Enum
from typing import NoReturn

from protogen.errors import ParseError


class FlagKind(str, Enum):
    TOGGLE = "toggle"
    VALUE = "value"


@dataclass(frozen=True)
class Flag:
    """One command-line flag and the `Options` field it sets."""

    long: str
    dest: str
    kind: FlagKind
    help: str
    short: str | None = None
    metavar: str | None = None

    @property
    def names(self) -> list[str]:
        return [self.short, self.long] if self.short else [self.long]


FLAGS: tuple[Flag, ...] = (
    Flag("--help", "show_help", FlagKind.TOGGLE, "Show this help", short="-h"),
    Flag(
        "--preserve-names",
        "preserve_names",
        FlagKind.TOGGLE,
        "Keep names as written in .proto, otherwise class and field names by default "
        "are converted to CamelCase",
    ),
    Flag(
        "--fix-nameclash",
        "fix_nameclash",
        FlagKind.TOGGLE,
        "If a property name is the same as its class name or any subclass the property "
        "will be renamed. If the name clash occurs and this flag is not set, an error "
        "will occur and the code generation is aborted",
    ),
    Flag(
        "--use-tabs",
        "use_tabs",
        FlagKind.TOGGLE,
        "If set generated code will use tabs rather than 4 spaces",
        short="-t",
    ),
    Flag(
        "--src-dir",
        "source_directory",
        FlagKind.VALUE,
        "Directory where the proto files reside, where the dependencies among protos "
        "will be searched (default: current directory)",
        metavar="DIR",
    ),
    Flag(
        "--output",
        "output_path",
        FlagKind.VALUE,
        "Output .cs file, or folder where the generated .cs files will be placed "
        "(default: 'output' in the current directory)",
        short="-o",
        metavar="PATH",
    ),
    Flag(
        "--experimental-message-stack",
        "experimental_stack_name",
        FlagKind.VALUE,
        "Name of the stack implementation to use for each message type: ThreadSafeStack, "
        "ThreadUnsafeStack, ConcurrentBagStack, or the full namespace of your own",
        metavar="NAME",
    ),
    Flag(
        "--ctor",
        "generate_default_constructors",
        FlagKind.TOGGLE,
        "Generate constructors with default values",
    ),
    Flag(
        "--nullable",
        "nullable_fields",
        FlagKind.TOGGLE,
        "Generate nullable primitives for optional fields",
    ),
    Flag("--net2", "exclude_net4", FlagKind.TOGGLE, "Exclude code that requires .NET 4"),
    Flag("--utc", "utc_datetime", FlagKind.TOGGLE, "De/serialize DateTime as DateTimeKind.Utc"),
    Flag(
        "--serializable",
        "serializable_attributes",
        FlagKind.TOGGLE,
        "Add the [Serializable] attribute to generated classes",
    ),
    Flag(
        "--skip-default",
        "skip_serialize_default",
        FlagKind.TOGGLE,
        "Skip serializing properties having the default value",
    ),
    Flag(
        "--no-protocolparser",
        "no_protocol_parser",
        FlagKind.TOGGLE,
        "Don't output ProtocolParser.cs",
    ),
    Flag(
        "--no-generate-imported",
        "no_generate_imported",
        FlagKind.TOGGLE,
        "Don't generate code from imported .proto files",
    ),
    Flag("--use-interface", "use_interface", FlagKind.TOGGLE, "Add interface to generated code"),
    Flag(
        "--split-output",
        "split_output",
        FlagKind.TOGGLE,
        "Proto messages are split into single files",
    ),
    Flag("--version", "version", FlagKind.TOGGLE, "Show version information and exit"),
    Flag(
        "--config",
        "config_path",
        FlagKind.VALUE,
        "TOML file (or pyproject.toml with [tool.protogen]) supplying defaults for "
        "these flags; command-line flags take precedence",
        metavar="PATH",
    ),
)

# Fields that only steer the CLI itself and never reach a `Configuration`.
CLI_ONLY_FIELDS = frozenset({"show_help", "version", "config_path"})


@dataclass
class Options:
    """Partially resolved options, as bound from the command line."""

    input_patterns: list[str] = field(default_factory=list)
    show_help: bool = False
    preserve_names: bool = False
    fix_nameclash: bool = False
    use_tabs: bool = False
    source_directory: str | None = None
    output_path: str | None = None
    experimental_stack_name: str | None = None
    generate_default_constructors: bool = False
    nullable_fields: bool = False
    exclude_net4: bool = False
    utc_datetime: bool = False
    serializable_attributes: bool = False
    skip_serialize_default: bool = False
    no_protocol_parser: bool = False
    no_generate_imported: bool = False
    use_interface: bool = False
    split_output: bool = False
    version: bool = False
    config_path: str | None = None
    # Fields the command line set explicitly (for config merge precedence)
    explicit_flags: set[str] = field(default_factory=set)


class _ArgumentParser(argparse.ArgumentParser):
    """`ArgumentParser` that raises `ParseError` instead of exiting the process."""

    def error(self, message: str) -> NoReturn:
        raise ParseError(message)


def build_parser(description: str = "", epilog: str = "") -> argparse.ArgumentParser:
    """Build the argument parser from `FLAGS`."""
    parser = _ArgumentParser(
        prog="protogen",
        description=description,
        epilog=epilog,
        formatter_class=argparse.RawDescriptionHelpFormatter,
        add_help=False,
        allow_abbrev=False,
    )
    parser.add_argument(
        "input_patterns",
        nargs="*",
        default=[],
        metavar="INPUT",
        help="Input .proto files; wildcards in the file name match recursively "
        "(e.g. 'protos/*.proto')",
    )
    for flag in FLAGS:
        if flag.kind is FlagKind.TOGGLE:
            parser.add_argument(*flag.names, dest=flag.dest, action="store_true", help=flag.help)
        else:
            parser.add_argument(
                *flag.names, dest=flag.dest, default=None, metavar=flag.metavar, help=flag.help
            )
    return parser


def bind(args: Sequence[str], parser: argparse.ArgumentParser | None = None) -> Options:
    """
    Map argument tokens onto an `Options`.

    Raises `ParseError` for unknown flags, missing flag values, or when no input
    pattern was given and neither help nor version was requested.
    """
    parser = parser or build_parser()
    # Input patterns may appear before, between, or after flags.
    namespace = parser.parse_intermixed_args(list(args))

    options = Options(input_patterns=list(namespace.input_patterns))
    for flag in FLAGS:
        value = getattr(namespace, flag.dest)
        setattr(options, flag.dest, value)
        if value not in (None, False):
            options.explicit_flags.add(flag.dest)

    if not options.input_patterns and not (options.show_help or options.version):
        raise ParseError("the following arguments are required: INPUT")
    return options
