"""Structural section extraction for archive text files.

Responsibilities:
- Remove the explanatory preamble block framed by long dash rules.
- Split off the title/author header lines.
- Truncate the body at the bibliographic footer.
"""

from __future__ import annotations

import re
from typing import Sequence

from ..models.datatypes import MetadataResult

PREAMBLE_RULE_RE = re.compile(r"^-{50,}")

# Kanji, hiragana, katakana, iteration marks, and the prolonged-sound mark.
NON_PERMITTED_SCRIPT_RE = re.compile(r"[^\u4e00-\u9fffぁ-んァ-ヶ々〆〤ー]")

END_MARKERS = (
    "底本：",
    "底本の親本：",
    "初出：",
    "入力：",
    "校正：",
    "青空文庫作成ファイル：",
)


class PreambleStripper:
    """Delete the block between two dash rule lines, inclusive."""

    def strip(self, lines: Sequence[str]) -> list[str]:
        """Return lines with the first rule-framed block removed.

        Without a closing rule the deletion runs to the end of input.
        """

        start = self._find_rule(lines, 0)
        if start is None:
            return list(lines)
        end = self._find_rule(lines, start + 1)
        if end is None:
            return list(lines[:start])
        return [*lines[:start], *lines[end + 1 :]]

    def _find_rule(self, lines: Sequence[str], start: int) -> int | None:
        for index in range(start, len(lines)):
            if PREAMBLE_RULE_RE.match(lines[index]):
                return index
        return None


def filter_permitted_script(text: str) -> str:
    """Drop every character outside the kanji/kana ranges."""

    return NON_PERMITTED_SCRIPT_RE.sub("", text)


class MetadataExtractor:
    """Take line 1 as title and line 2 as author."""

    def extract(self, lines: Sequence[str]) -> MetadataResult:
        """Return filtered title/author and the remaining body candidate."""

        raw_title = lines[0] if len(lines) > 0 else ""
        raw_author = lines[1] if len(lines) > 1 else ""
        return MetadataResult(
            title=filter_permitted_script(raw_title),
            author=filter_permitted_script(raw_author),
            body_candidate=tuple(lines[2:]),
        )


class BodyExtractor:
    """Truncate the body candidate at the first footer end marker."""

    def __init__(self, end_markers: Sequence[str] = END_MARKERS) -> None:
        self.end_markers = tuple(end_markers)

    def find_end_marker(self, lines: Sequence[str]) -> int | None:
        """Return the index of the first line starting with an end marker."""

        for index, line in enumerate(lines):
            if line.startswith(self.end_markers):
                return index
        return None

    def extract(self, lines: Sequence[str]) -> list[str]:
        """Drop the first end-marker line and everything after it."""

        end = self.find_end_marker(lines)
        if end is None:
            return list(lines)
        return list(lines[:end])
