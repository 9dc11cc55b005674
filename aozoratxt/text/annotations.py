"""Ruby, editorial, and decorative markup removal.

Responsibilities:
- Provide one composable rule per bracket or marker convention.
- Apply rules in two ordered passes over every body line.

Corner-bracket quotes (「」) are never targeted by any rule.
"""

from __future__ import annotations

import re
from typing import Protocol, Sequence


class CleanerRule(Protocol):
    """Protocol for text cleaning rules."""

    def apply(self, text: str) -> str:
        """Apply a single cleaning transformation."""


class RemoveLiteral:
    """Remove every occurrence of a literal marker."""

    def __init__(self, marker: str) -> None:
        self.marker = marker

    def apply(self, text: str) -> str:
        return text.replace(self.marker, "")


class RemoveEnclosed:
    """Remove a delimited span together with its delimiters.

    Spans do not nest; the first closing delimiter ends the span.
    """

    def __init__(self, opening: str, closing: str) -> None:
        self.opening = opening
        self.closing = closing
        self._pattern = re.compile(
            f"{re.escape(opening)}[^{re.escape(closing)}]*{re.escape(closing)}"
        )

    def apply(self, text: str) -> str:
        return self._pattern.sub("", text)


class RemoveRubyTrigger(RemoveLiteral):
    """Remove the vertical-bar marker that opens a ruby base."""

    def __init__(self) -> None:
        super().__init__("｜")


class RemoveRubyGloss(RemoveEnclosed):
    """Remove phonetic readings written as 《…》."""

    def __init__(self) -> None:
        super().__init__("《", "》")


class RemoveEditorialNote(RemoveEnclosed):
    """Remove inline editorial instructions written as ［＃…］."""

    def __init__(self) -> None:
        super().__init__("［＃", "］")


class RemoveBraceSpan(RemoveEnclosed):
    """Remove brace-delimited spans written as ｛…｝."""

    def __init__(self) -> None:
        super().__init__("｛", "｝")


class RemoveLenticularSpan(RemoveEnclosed):
    """Remove white lenticular spans written as 〚…〛."""

    def __init__(self) -> None:
        super().__init__("〚", "〛")


class RemoveTortoiseShellSpan(RemoveEnclosed):
    """Remove tortoise-shell bracket spans written as 〔…〕."""

    def __init__(self) -> None:
        super().__init__("〔", "〕")


def ruby_pass() -> list[CleanerRule]:
    """Return the first-pass rules: ruby, editorial notes, and bracket spans."""

    return [
        RemoveRubyTrigger(),
        RemoveRubyGloss(),
        RemoveEditorialNote(),
        RemoveBraceSpan(),
        RemoveLenticularSpan(),
    ]


def decoration_pass() -> list[CleanerRule]:
    """Return the second-pass rules: tortoise-shell spans and repeat marks."""

    return [
        RemoveTortoiseShellSpan(),
        RemoveLiteral("／＼"),
        # Matched literally, quote included.
        RemoveLiteral('／"＼'),
    ]


class AnnotationStripper:
    """Apply the two annotation passes, in order, to every line."""

    def __init__(
        self,
        passes: Sequence[Sequence[CleanerRule]] | None = None,
    ) -> None:
        """Initialize with custom passes or the default two-pass sequence."""

        self.passes = [list(rules) for rules in passes] if passes else [
            ruby_pass(),
            decoration_pass(),
        ]

    def strip_line(self, line: str) -> str:
        """Apply every pass to a single line."""

        current = line
        for rules in self.passes:
            current = _apply_rules(rules, current)
        return current

    def strip(self, lines: Sequence[str]) -> list[str]:
        """Return cleaned lines with the same count and order as the input."""

        current = list(lines)
        for rules in self.passes:
            current = [_apply_rules(rules, line) for line in current]
        return current


def _apply_rules(rules: Sequence[CleanerRule], text: str) -> str:
    for rule in rules:
        text = rule.apply(text)
    return text
