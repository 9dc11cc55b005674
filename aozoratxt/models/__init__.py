"""Shared typed data models for aozoratxt.

This package contains dataclasses used across pipeline modules to avoid
cross-module coupling and circular imports.
"""

from .datatypes import (
    Chunk,
    DecodedText,
    Document,
    FormattedDocument,
    MetadataResult,
    RunResult,
)

__all__ = [
    "Chunk",
    "DecodedText",
    "Document",
    "FormattedDocument",
    "MetadataResult",
    "RunResult",
]
