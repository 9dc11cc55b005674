"""Artifact storage abstraction.

Responsibilities:
- Provide deterministic filesystem storage for text and raw byte artifacts.
- Provide a run-scoped temporary workspace removed on every exit path.
"""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path
import tempfile


class ArtifactStore:
    """Filesystem-backed artifact store rooted at one directory."""

    def __init__(self, root: Path) -> None:
        """Initialize the store with a root output directory."""

        self.root = root

    def save_text(self, relative_path: Path, content: str) -> Path:
        """Save UTF-8 text content and return final path."""

        path = self.root / relative_path
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8", newline="\n")
        return path

    def save_bytes(self, relative_path: Path, data: bytes) -> Path:
        """Save raw bytes and return final path."""

        path = self.root / relative_path
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(data)
        return path

    def load_text(self, relative_path: Path) -> str:
        """Load text content from artifact storage."""

        path = self.root / relative_path
        return path.read_text(encoding="utf-8")

    def load_bytes(self, relative_path: Path) -> bytes:
        """Load raw bytes from artifact storage."""

        return (self.root / relative_path).read_bytes()


@contextmanager
def scoped_workspace(prefix: str = "aozoratxt-") -> Iterator[ArtifactStore]:
    """Yield a temporary `ArtifactStore` that is removed when the block exits."""

    with tempfile.TemporaryDirectory(prefix=prefix) as directory:
        yield ArtifactStore(Path(directory))
