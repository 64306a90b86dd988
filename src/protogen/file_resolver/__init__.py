"""
Input pattern expansion.

Usage::

    from protogen.file_resolver import FileResolver

    resolver = FileResolver()
    files = resolver.resolve(["$PROTO_HOME/*.proto", "extra/doc.proto"])
"""

from protogen.file_resolver.resolver import FileResolver
from protogen.file_resolver.types import GLOB_CHARS, InputPattern

__all__ = [
    "GLOB_CHARS",
    "FileResolver",
    "InputPattern",
]
