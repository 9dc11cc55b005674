"""Input/output stage components for aozoratxt.

This package contains source reading, encoding normalization, and artifact
storage interfaces used by the pipeline.
"""

from .encoding import EncodingNormalizer
from .sources import read_sources
from .storage import ArtifactStore, scoped_workspace

__all__ = ["EncodingNormalizer", "read_sources", "ArtifactStore", "scoped_workspace"]
