"""Text cleanup, formatting, and segmentation components.

This package provides the deterministic section extraction, annotation
stripping, formatting, and chunking stages of the conversion pipeline.
"""

from .annotations import AnnotationStripper, CleanerRule, decoration_pass, ruby_pass
from .chunking import ChunkSplitter, chunk_prefix
from .formatter import OutputFormatter, estimate_minutes
from .sections import (
    END_MARKERS,
    BodyExtractor,
    MetadataExtractor,
    PreambleStripper,
    filter_permitted_script,
)

__all__ = [
    "AnnotationStripper",
    "BodyExtractor",
    "ChunkSplitter",
    "CleanerRule",
    "END_MARKERS",
    "MetadataExtractor",
    "OutputFormatter",
    "PreambleStripper",
    "chunk_prefix",
    "decoration_pass",
    "estimate_minutes",
    "filter_permitted_script",
    "ruby_pass",
]
