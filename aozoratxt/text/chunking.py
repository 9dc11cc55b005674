"""Reading-time chunking on line boundaries.

Responsibilities:
- Split the final document into sequential chunks of roughly `speed * time`
  characters.
- Never split inside a line: a chunk closes on the first line that brings its
  count to the budget, so chunks overshoot rather than fragment a line.
"""

from __future__ import annotations

from typing import Sequence

from ..models.datatypes import Chunk

_TXT_SUFFIX = ".txt"


def line_length(line: str) -> int:
    """Return the budget length of a line, counting its trailing newline."""

    return len(line) + 1


def chunk_prefix(output: str) -> str:
    """Strip one trailing `.txt` suffix from an output destination."""

    if output.endswith(_TXT_SUFFIX):
        return output[: -len(_TXT_SUFFIX)]
    return output


def chunk_name(prefix: str, index: int) -> str:
    """Return the file name for the 1-based chunk `index`."""

    return f"{prefix}_{index:03d}{_TXT_SUFFIX}"


class ChunkSplitter:
    """Partition document lines into budget-sized chunks."""

    def split(
        self,
        lines: Sequence[str],
        *,
        speed: int,
        time: int,
        prefix: str,
    ) -> list[Chunk]:
        """Split lines into chunks whose counts reach `speed * time`.

        Every chunk except possibly the last reaches the budget. A non-empty
        remainder becomes one final, shorter chunk; no chunk is ever empty.
        """

        if speed <= 0 or time <= 0:
            raise ValueError("`speed` and `time` must be positive integers.")

        budget = speed * time
        chunks: list[Chunk] = []
        current: list[str] = []
        count = 0

        def flush() -> None:
            nonlocal count
            index = len(chunks) + 1
            chunks.append(
                Chunk(
                    index=index,
                    name=chunk_name(prefix, index),
                    lines=tuple(current),
                    char_count=count,
                )
            )
            current.clear()
            count = 0

        for line in lines:
            current.append(line)
            count += line_length(line)
            if count >= budget:
                flush()
        if current:
            flush()
        return chunks
