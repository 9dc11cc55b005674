"""Final document assembly and reading-time estimation."""

from __future__ import annotations

from ..models.datatypes import Document, FormattedDocument


def estimate_minutes(total_chars: int, speed: int) -> int:
    """Return `ceil(total_chars / speed)` using integer arithmetic."""

    if speed <= 0:
        raise ValueError("`speed` must be a positive integer.")
    return -(-total_chars // speed)


class OutputFormatter:
    """Assemble title, author, a blank separator, and body lines."""

    def format(self, document: Document, speed: int) -> FormattedDocument:
        """Return the final document text with character and minute counts."""

        lines = (document.title, document.author, "", *document.body)
        text = "".join(f"{line}\n" for line in lines)
        total_chars = len(text)
        return FormattedDocument(
            text=text,
            lines=lines,
            total_chars=total_chars,
            estimated_minutes=estimate_minutes(total_chars, speed),
        )
