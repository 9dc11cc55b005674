"""Core datatypes shared across aozoratxt modules.

Responsibilities:
- Represent immutable records exchanged between pipeline stages.
- Provide explicit typing for deterministic, testable stage boundaries.

Key types:
- `DecodedText`, `MetadataResult`, `Document`, `FormattedDocument`, `Chunk`,
  and `RunResult`.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path


@dataclass(frozen=True, slots=True)
class DecodedText:
    """Source text decoded into canonical Unicode.

    Attributes:
        text: Decoded text with `\\n` line endings.
        encoding: Detected source encoding label, used for diagnostics only.
    """

    text: str
    encoding: str


@dataclass(frozen=True, slots=True)
class MetadataResult:
    """Title/author extracted from the first two lines plus the remaining lines.

    Attributes:
        title: Title filtered to permitted script ranges (may be empty).
        author: Author filtered to permitted script ranges (may be empty).
        body_candidate: Lines from line 3 onward, in source order.
    """

    title: str
    author: str
    body_candidate: tuple[str, ...]


@dataclass(frozen=True, slots=True)
class Document:
    """Cleaned reading document.

    Attributes:
        title: Filtered title line.
        author: Filtered author line.
        body: Cleaned body lines without trailing newlines.
    """

    title: str
    author: str
    body: tuple[str, ...]


@dataclass(frozen=True, slots=True)
class FormattedDocument:
    """Final document text with reading-time diagnostics.

    Attributes:
        text: Assembled document; every line is followed by one newline.
        lines: Assembled document lines without newlines.
        total_chars: Codepoint count of `text`.
        estimated_minutes: `ceil(total_chars / speed)`.
    """

    text: str
    lines: tuple[str, ...]
    total_chars: int
    estimated_minutes: int


@dataclass(frozen=True, slots=True)
class Chunk:
    """One sequential output unit split on line boundaries.

    Attributes:
        index: 1-based sequence number in flush order.
        name: Output file name, `<prefix>_<NNN>.txt`.
        lines: Lines contained in this chunk.
        char_count: Accumulated budget length (`len(line) + 1` per line).
    """

    index: int
    name: str
    lines: tuple[str, ...]
    char_count: int

    @property
    def text(self) -> str:
        """Return chunk text with one newline after every line."""

        return "".join(f"{line}\n" for line in self.lines)


@dataclass(frozen=True, slots=True)
class RunResult:
    """Summary of one completed conversion run.

    Attributes:
        document: Cleaned document before formatting.
        formatted: Final formatted document.
        encoding: Detected source encoding label.
        destination: `stdout`, `file`, or `chunks`.
        chunks: Produced chunks when splitting was requested.
        written_paths: Files written by the run, in write order.
    """

    document: Document
    formatted: FormattedDocument
    encoding: str
    destination: str
    chunks: tuple[Chunk, ...] = field(default_factory=tuple)
    written_paths: tuple[Path, ...] = field(default_factory=tuple)
