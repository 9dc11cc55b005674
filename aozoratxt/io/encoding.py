"""Source encoding detection and transcoding.

Responsibilities:
- Detect the encoding of raw archive bytes (`chardet` or the `nkf` tool).
- Transcode into canonical Unicode text with `\\n` line endings.
"""

from __future__ import annotations

import subprocess

import chardet

from ..errors import EncodingError
from ..models.datatypes import DecodedText
from ..runtime_tools import require_executable

SUPPORTED_BACKENDS = ("chardet", "nkf")

# Shift_JIS files from the archive routinely contain Windows-31J extensions.
_CODEC_ALIASES = {
    "shift_jis": "cp932",
    "shift-jis": "cp932",
    "sjis": "cp932",
    "windows-31j": "cp932",
    "cp932": "cp932",
    "euc-jp": "euc_jp",
    "iso-2022-jp": "iso2022_jp",
    "utf-8": "utf-8-sig",
}


def normalize_newlines(text: str) -> str:
    """Convert CRLF and bare CR line endings to `\\n`."""

    return text.replace("\r\n", "\n").replace("\r", "\n")


def split_lines(text: str) -> list[str]:
    """Split text on `\\n` without producing a phantom line for a final newline."""

    if not text:
        return []
    lines = text.split("\n")
    if lines[-1] == "":
        lines.pop()
    return lines


class EncodingNormalizer:
    """Detect and transcode raw bytes into a `DecodedText`."""

    def __init__(self, backend: str = "chardet") -> None:
        """Initialize with a detection backend name (`chardet` or `nkf`)."""

        if backend not in SUPPORTED_BACKENDS:
            raise ValueError(
                f"Unsupported encoding backend `{backend}`; "
                f"expected one of: {', '.join(SUPPORTED_BACKENDS)}."
            )
        self.backend = backend

    def normalize(self, raw: bytes) -> DecodedText:
        """Decode raw bytes and normalize line endings."""

        if not raw:
            return DecodedText(text="", encoding="ascii")
        if self.backend == "nkf":
            text, label = self._decode_with_nkf(raw)
        else:
            text, label = self._decode_with_chardet(raw)
        return DecodedText(text=normalize_newlines(text), encoding=label)

    def _decode_with_chardet(self, raw: bytes) -> tuple[str, str]:
        detected = chardet.detect(raw)
        label = detected.get("encoding")
        if not label:
            raise EncodingError(
                stage="decode",
                detail="Could not detect the input text encoding.",
                hint="Convert the input to UTF-8 or Shift_JIS and rerun.",
            )
        codec = _CODEC_ALIASES.get(label.lower(), label)
        try:
            return raw.decode(codec), label
        except (UnicodeDecodeError, LookupError) as exc:
            raise EncodingError(
                stage="decode",
                detail=f"Failed to decode input as `{label}`: {exc}",
                hint="Try `--encoding-backend nkf` or convert the input to UTF-8.",
            ) from exc

    def _decode_with_nkf(self, raw: bytes) -> tuple[str, str]:
        nkf = require_executable("nkf", stage="decode")
        guess = self._run_nkf([nkf, "--guess"], raw).decode("ascii", errors="replace")
        label = guess.strip().split(" ")[0] or "unknown"
        converted = self._run_nkf([nkf, "-w", "-Lu"], raw)
        try:
            return converted.decode("utf-8"), label
        except UnicodeDecodeError as exc:
            raise EncodingError(
                stage="decode",
                detail=f"nkf produced invalid UTF-8 output: {exc}",
            ) from exc

    def _run_nkf(self, command: list[str], raw: bytes) -> bytes:
        try:
            result = subprocess.run(command, input=raw, capture_output=True, check=False)
        except OSError as exc:
            raise EncodingError(
                stage="decode",
                detail=f"Failed to run `{command[0]}`: {exc}",
            ) from exc
        if result.returncode != 0:
            details = result.stderr.decode("utf-8", errors="replace").strip() or "unknown error"
            raise EncodingError(stage="decode", detail=f"nkf failed: {details}")
        return result.stdout
