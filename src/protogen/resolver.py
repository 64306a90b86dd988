"""
OptionsResolver: turns raw arguments into a validated, normalized `Configuration`.

Resolution is a single pass: bind flags, merge settings from a `--config`
file, expand input patterns, check that every input exists, fill in defaults,
and make paths absolute. Missing input files are collected across the whole
list and reported together.
"""

from __future__ import annotations

import argparse
import errno
import sys
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import TextIO

from protogen.config import load_config, merge_cli_with_config
from protogen.environment import Environment
from protogen.errors import AdvisoryWarning, MissingInputError, ParseError, ValidationError
from protogen.file_resolver import FileResolver
from protogen.options import Options, bind, build_parser

DEFAULT_OUTPUT_FOLDER = "output"

# Suffix that marks an output path as a single generated file.
OUTPUT_SUFFIX = ".cs"

# Prefix for experimental stack names given without a namespace.
DEFAULT_STACK_NAMESPACE = "global::SilentOrbit.ProtocolBuffers."


@dataclass(frozen=True)
class Configuration:
    """Fully resolved options, handed read-only to code generation."""

    input_files: tuple[Path, ...]
    source_directory: Path
    output_path: Path
    experimental_stack_name: str | None = None
    show_help: bool = False
    preserve_names: bool = False
    fix_nameclash: bool = False
    use_tabs: bool = False
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


def qualify_stack_name(name: str | None) -> str | None:
    """Prefix `name` with the default namespace unless it is already qualified."""
    if name is None or "." in name:
        return name
    return DEFAULT_STACK_NAMESPACE + name


def find_missing_files(paths: Sequence[Path]) -> list[FileNotFoundError]:
    """Return one `FileNotFoundError` per path that is not an existing file."""
    missing: list[FileNotFoundError] = []
    for path in paths:
        if not path.is_file():
            missing.append(FileNotFoundError(errno.ENOENT, "File not found", str(path)))
    return missing


class OptionsResolver:
    """
    Resolves command-line arguments against an `Environment`.

    Usage text and warnings go to `stderr`, the resolved values to `stdout`;
    both streams default to the process streams at the time of writing.
    Advisories raised during the last resolution are kept in `advisories`.
    """

    def __init__(
        self,
        environment: Environment | None = None,
        parser: argparse.ArgumentParser | None = None,
        stdout: TextIO | None = None,
        stderr: TextIO | None = None,
    ) -> None:
        self.environment: Environment = environment or Environment.from_process()
        self.parser: argparse.ArgumentParser = parser or build_parser()
        self.advisories: list[AdvisoryWarning] = []
        self._stdout: TextIO | None = stdout
        self._stderr: TextIO | None = stderr

    @property
    def stdout(self) -> TextIO:
        return self._stdout if self._stdout is not None else sys.stdout

    @property
    def stderr(self) -> TextIO:
        return self._stderr if self._stderr is not None else sys.stderr

    def print_usage(self) -> None:
        print(self.parser.format_help(), file=self.stderr)

    def print_resolved(self, config: Configuration) -> None:
        """Echo the resolved inputs, source directory, and output to `stdout`."""
        print("--input =  " + " ".join(str(p) for p in config.input_files), file=self.stdout)
        print(f"--src-dir =  {config.source_directory}", file=self.stdout)
        print(f"--output =  {config.output_path}", file=self.stdout)

    def bind(self, args: Sequence[str]) -> Options:
        """Bind argument tokens to `Options`. Raises `ParseError`."""
        return bind(args, self.parser)

    def apply_config(self, options: Options) -> Options:
        """Merge settings from the file named by `--config`, if any."""
        if options.config_path is None:
            return options
        config_path = self.environment.absolute(options.config_path)
        return merge_cli_with_config(options, load_config(config_path))

    def parse_args(self, args: Sequence[str]) -> Options | None:
        """
        Bind `args`, or print usage and return `None` when there are no
        arguments or they could not be parsed.
        """
        if not args:
            self.print_usage()
            return None
        try:
            return self.bind(args)
        except ParseError as e:
            print(f"Error: {e}", file=self.stderr)
            self.print_usage()
            return None

    def resolve(self, args: Sequence[str]) -> Configuration | None:
        """
        Run the whole resolution for `args`.

        Returns `None` after printing usage when there are no arguments, help
        was requested, or the arguments could not be parsed. Raises
        `MissingInputError`, `ValidationError`, or `ConfigError` when inputs
        are unusable.
        """
        options = self.parse_args(args)
        if options is None:
            return None
        return self.validate_and_normalize(self.apply_config(options))

    def validate_and_normalize(self, options: Options) -> Configuration | None:
        """
        Validate bound options and derive every unset value.

        Returns `None` after printing usage if help was requested.
        """
        self.advisories = []

        if options.show_help:
            self.print_usage()
            return None

        if not options.input_patterns:
            raise MissingInputError("Missing input .proto arguments.")

        input_files = FileResolver(self.environment).resolve(options.input_patterns)
        if not input_files:
            raise MissingInputError(
                "No input files matched: " + " ".join(options.input_patterns)
            )
        errors = find_missing_files(input_files)

        if options.source_directory is None:
            source_directory = self.environment.cwd
        else:
            source_directory = self.environment.absolute(options.source_directory)

        output_path = options.output_path
        if output_path is None:
            output_path = DEFAULT_OUTPUT_FOLDER
            self._advise(
                "output folder (--output) was not defined, "
                f"default will be used: {DEFAULT_OUTPUT_FOLDER}"
            )

        # A directory output in single-file mode gets the first input's name.
        if not options.split_output and not output_path.endswith(OUTPUT_SUFFIX):
            output_path = str(Path(output_path) / (input_files[0].stem + OUTPUT_SUFFIX))

        if errors:
            raise ValidationError(errors)

        return Configuration(
            input_files=tuple(input_files),
            source_directory=source_directory,
            output_path=self.environment.absolute(output_path),
            experimental_stack_name=qualify_stack_name(options.experimental_stack_name),
            show_help=options.show_help,
            preserve_names=options.preserve_names,
            fix_nameclash=options.fix_nameclash,
            use_tabs=options.use_tabs,
            generate_default_constructors=options.generate_default_constructors,
            nullable_fields=options.nullable_fields,
            exclude_net4=options.exclude_net4,
            utc_datetime=options.utc_datetime,
            serializable_attributes=options.serializable_attributes,
            skip_serialize_default=options.skip_serialize_default,
            no_protocol_parser=options.no_protocol_parser,
            no_generate_imported=options.no_generate_imported,
            use_interface=options.use_interface,
            split_output=options.split_output,
        )

    def _advise(self, message: str) -> None:
        self.advisories.append(AdvisoryWarning(message))
        print(f"Warning: {message}", file=self.stderr)
