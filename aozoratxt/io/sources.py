"""Input source reading.

Responsibilities:
- Read one or more named files or standard input as raw bytes.
- Concatenate sources deterministically in the order given.
"""

from __future__ import annotations

from pathlib import Path
from typing import BinaryIO, Sequence

from ..errors import MissingInputError

STDIN_TOKEN = "-"


def read_sources(inputs: Sequence[str], stdin: BinaryIO) -> bytes:
    """Read and concatenate all inputs; `-` reads the given stdin stream.

    An empty `inputs` sequence reads stdin once, unless stdin is an
    interactive terminal. Standard input is consumed at most once even when
    `-` is repeated.
    """

    tokens = list(inputs)
    if not tokens:
        if stdin.isatty():
            raise MissingInputError(
                stage="read",
                detail="No input provided and standard input is a terminal.",
                hint="Pass `--input <file>` or pipe text into the command.",
            )
        tokens = [STDIN_TOKEN]

    missing = [token for token in tokens if token != STDIN_TOKEN and not Path(token).is_file()]
    if missing:
        raise MissingInputError(
            stage="read",
            detail=f"Input file not found: `{missing[0]}`.",
            hint="Check the `--input` path and rerun.",
        )

    parts: list[bytes] = []
    stdin_consumed = False
    for token in tokens:
        if token == STDIN_TOKEN:
            if not stdin_consumed:
                parts.append(stdin.read())
                stdin_consumed = True
            continue
        parts.append(Path(token).read_bytes())
    return b"".join(parts)
