"""Argument resolution for the protogen code generator."""

from protogen.environment import Environment
from protogen.errors import (
    AdvisoryWarning,
    ConfigError,
    MissingInputError,
    OptionsError,
    ParseError,
    ValidationError,
)
from protogen.options import FLAGS, Options
from protogen.resolver import Configuration, OptionsResolver

__all__ = [
    "FLAGS",
    "AdvisoryWarning",
    "ConfigError",
    "Configuration",
    "Environment",
    "MissingInputError",
    "Options",
    "OptionsError",
    "OptionsResolver",
    "ParseError",
    "ValidationError",
]
