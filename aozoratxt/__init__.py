"""Top-level package for aozoratxt.

This package converts Aozora Bunko ruby-text archive files into clean reading
text and optionally splits the result into reading-time sized chunks. The main
orchestration entry point is `AozoraPipeline`.
"""

from .pipeline import AozoraPipeline

__all__ = ["AozoraPipeline", "__version__"]

__version__ = "0.1.0"
