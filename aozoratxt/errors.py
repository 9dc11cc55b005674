"""Domain exceptions for pipeline and CLI diagnostics."""

from __future__ import annotations


class PipelineStageError(RuntimeError):
    """Raised when a specific pipeline stage fails."""

    def __init__(
        self,
        *,
        stage: str,
        detail: str,
        hint: str | None = None,
    ) -> None:
        """Initialize a stage-scoped pipeline error."""

        super().__init__(detail)
        self.stage = stage
        self.detail = detail
        self.hint = hint


class MissingToolError(PipelineStageError):
    """Raised when a required external executable is not available."""


class InvalidArgumentError(PipelineStageError):
    """Raised when an option value is missing, non-numeric, or not allowed."""


class MissingInputError(PipelineStageError):
    """Raised when a named input file is absent or no input was provided."""


class ArgumentCombinationError(PipelineStageError):
    """Raised when `--speed`/`--time` are given without `--output`."""


class EncodingError(PipelineStageError):
    """Raised when source encoding detection or transcoding fails."""
