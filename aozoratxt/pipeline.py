"""Pipeline orchestration for aozoratxt.

Responsibilities:
- Define the linear stage order from raw archive bytes to reading text.
- Hand intermediate artifacts through a run-scoped temporary workspace.
- Write the final document or its chunks to the configured destination.

Key types:
- `AozoraPipeline`: orchestration facade.
"""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path
from typing import BinaryIO, TypeVar

from .config import AozoraConfig
from .errors import PipelineStageError
from .io.encoding import EncodingNormalizer, split_lines
from .io.sources import read_sources
from .io.storage import ArtifactStore, scoped_workspace
from .models.datatypes import Chunk, DecodedText, Document, FormattedDocument, RunResult
from .telemetry.logger import RunLogger
from .text.annotations import AnnotationStripper
from .text.chunking import ChunkSplitter, chunk_prefix
from .text.formatter import OutputFormatter
from .text.sections import BodyExtractor, MetadataExtractor, PreambleStripper

_StageResult = TypeVar("_StageResult")

_RAW_ARTIFACT = Path("input.raw")
_DECODED_ARTIFACT = Path("decoded.txt")


def _decode_counters(decoded: DecodedText) -> dict[str, object]:
    return {"encoding": decoded.encoding, "chars": len(decoded.text)}


def _format_counters(formatted: FormattedDocument) -> dict[str, object]:
    return {"chars": formatted.total_chars, "minutes": formatted.estimated_minutes}


class AozoraPipeline:
    """Coordinate all stages for a single conversion run."""

    def __init__(self, run_logger: RunLogger | None = None) -> None:
        """Initialize with an optional structured stage logger."""

        self._run_logger = run_logger

    def run(self, config: AozoraConfig, stdin: BinaryIO) -> RunResult:
        """Run every stage and write file outputs.

        When no output is configured the caller writes `RunResult.formatted.text`
        to stdout.
        """

        self._run_stage("config", config.validate)
        with scoped_workspace() as workspace:
            raw = self._run_stage(
                "read",
                lambda: read_sources(config.inputs, stdin),
                counters=lambda data: {"bytes": len(data)},
            )
            workspace.save_bytes(_RAW_ARTIFACT, raw)
            decoded = self._run_stage(
                "decode",
                lambda: EncodingNormalizer(config.encoding_backend).normalize(
                    workspace.load_bytes(_RAW_ARTIFACT)
                ),
                counters=_decode_counters,
            )
            workspace.save_text(_DECODED_ARTIFACT, decoded.text)
            document = self.clean(split_lines(workspace.load_text(_DECODED_ARTIFACT)))

        formatted = self._run_stage(
            "format",
            lambda: OutputFormatter().format(document, config.effective_speed),
            counters=_format_counters,
        )
        chunks, written_paths, destination = self._run_stage(
            "write",
            lambda: self._write(formatted, config),
            counters=lambda written: {"destination": written[2], "files": len(written[1])},
        )
        return RunResult(
            document=document,
            formatted=formatted,
            encoding=decoded.encoding,
            destination=destination,
            chunks=tuple(chunks),
            written_paths=tuple(written_paths),
        )

    def convert(
        self, raw: bytes, *, speed: int, encoding_backend: str = "chardet"
    ) -> tuple[DecodedText, Document, FormattedDocument]:
        """Convert raw bytes in memory without touching the filesystem."""

        decoded = self._run_stage(
            "decode",
            lambda: EncodingNormalizer(encoding_backend).normalize(raw),
            counters=_decode_counters,
        )
        document = self.clean(split_lines(decoded.text))
        formatted = self._run_stage(
            "format",
            lambda: OutputFormatter().format(document, speed),
            counters=_format_counters,
        )
        return decoded, document, formatted

    def clean(self, lines: list[str]) -> Document:
        """Run preamble, metadata, body, and annotation stages over decoded lines."""

        without_preamble = self._run_stage("preamble", lambda: PreambleStripper().strip(lines))
        metadata = self._run_stage(
            "metadata", lambda: MetadataExtractor().extract(without_preamble)
        )
        body = self._run_stage(
            "body",
            lambda: BodyExtractor().extract(metadata.body_candidate),
            counters=lambda kept: {
                "dropped": len(metadata.body_candidate) - len(kept),
                "lines": len(kept),
            },
        )
        cleaned = self._run_stage(
            "annotations",
            lambda: AnnotationStripper().strip(body),
            counters=lambda stripped: {"lines": len(stripped)},
        )
        return Document(title=metadata.title, author=metadata.author, body=tuple(cleaned))

    def _write(
        self, formatted: FormattedDocument, config: AozoraConfig
    ) -> tuple[list[Chunk], list[Path], str]:
        """Write the document or its chunks and report the destination kind."""

        if config.output is None:
            return [], [], "stdout"

        store = ArtifactStore(Path())
        if not config.chunking_requested:
            path = store.save_text(Path(config.output), formatted.text)
            return [], [path], "file"

        chunks = ChunkSplitter().split(
            formatted.lines,
            speed=config.effective_speed,
            time=config.effective_time,
            prefix=chunk_prefix(config.output),
        )
        paths = [store.save_text(Path(chunk.name), chunk.text) for chunk in chunks]
        return chunks, paths, "chunks"

    def _run_stage(
        self,
        stage_name: str,
        action: Callable[[], _StageResult],
        counters: Callable[[_StageResult], dict[str, object]] | None = None,
    ) -> _StageResult:
        """Run one named stage and emit start/complete/failure telemetry events.

        `counters` maps the stage result to key/value pairs logged on completion.
        """

        if self._run_logger is not None:
            self._run_logger.log_stage_start(stage_name)
        try:
            result = action()
        except PipelineStageError as exc:
            self._on_stage_failure(stage_name, exc)
            raise
        except Exception as exc:
            self._on_stage_failure(stage_name, exc)
            raise PipelineStageError(
                stage=stage_name,
                detail=f"Stage `{stage_name}` failed: {exc}",
            ) from exc
        if self._run_logger is not None:
            context = counters(result) if counters is not None else {}
            self._run_logger.log_stage_complete(stage_name, **context)
        return result

    def _on_stage_failure(self, stage_name: str, exc: Exception) -> None:
        """Emit stage-failure event with sanitized exception metadata."""

        if self._run_logger is not None:
            self._run_logger.log_stage_failure(stage_name, type(exc).__name__)
