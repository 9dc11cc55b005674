"""Unit tests for stage orchestration, telemetry, and workspace cleanup."""

from __future__ import annotations

import io
from pathlib import Path

import pytest
from pytest import MonkeyPatch

from aozoratxt import pipeline as pipeline_module
from aozoratxt.config import AozoraConfig
from aozoratxt.errors import EncodingError, PipelineStageError
from aozoratxt.io.encoding import EncodingNormalizer
from aozoratxt.pipeline import AozoraPipeline
from tests.fixture_paths import EXPECTED_SAMPLE_DOCUMENT, sample_archive_bytes


class _RecordingLogger:
    def __init__(self) -> None:
        self.events: list[tuple[str, str]] = []
        self.context: dict[str, dict[str, object]] = {}

    def log_stage_start(self, stage: str) -> None:
        self.events.append(("start", stage))

    def log_stage_complete(self, stage: str, **context: object) -> None:
        self.events.append(("complete", stage))
        self.context[stage] = context

    def log_stage_failure(self, stage: str, error_type: str) -> None:
        self.events.append(("failure", f"{stage}:{error_type}"))


def test_convert_produces_expected_document_in_memory() -> None:
    decoded, document, formatted = AozoraPipeline().convert(
        sample_archive_bytes("utf-8"), speed=300
    )

    assert decoded.encoding.lower().startswith("utf-8")
    assert document.title == "吾輩は猫である"
    assert document.author == "夏目漱石"
    assert formatted.text == EXPECTED_SAMPLE_DOCUMENT
    assert formatted.total_chars == len(EXPECTED_SAMPLE_DOCUMENT)


def test_clean_runs_stages_in_pipeline_order() -> None:
    logger = _RecordingLogger()

    AozoraPipeline(run_logger=logger).clean(["題名", "作者", "本文《ほんぶん》。"])

    assert [stage for event, stage in logger.events if event == "start"] == [
        "preamble",
        "metadata",
        "body",
        "annotations",
    ]


def test_run_returns_stdout_destination_without_writing_files(
    tmp_path: Path, monkeypatch: MonkeyPatch
) -> None:
    monkeypatch.chdir(tmp_path)

    result = AozoraPipeline().run(AozoraConfig(), stdin=io.BytesIO(sample_archive_bytes()))

    assert result.destination == "stdout"
    assert result.formatted.text == EXPECTED_SAMPLE_DOCUMENT
    assert result.written_paths == ()
    assert list(tmp_path.iterdir()) == []


def test_run_removes_workspace_when_a_stage_fails(monkeypatch: MonkeyPatch) -> None:
    roots: list[Path] = []
    original_workspace = pipeline_module.scoped_workspace

    def _recording_workspace():
        workspace = original_workspace()

        class _Wrapper:
            def __enter__(self):
                store = workspace.__enter__()
                roots.append(store.root)
                return store

            def __exit__(self, *exc_info):
                return workspace.__exit__(*exc_info)

        return _Wrapper()

    def _failing_normalize(self: EncodingNormalizer, raw: bytes) -> None:
        raise EncodingError(stage="decode", detail="Could not detect the input text encoding.")

    monkeypatch.setattr(pipeline_module, "scoped_workspace", _recording_workspace)
    monkeypatch.setattr(EncodingNormalizer, "normalize", _failing_normalize)
    logger = _RecordingLogger()

    with pytest.raises(EncodingError):
        AozoraPipeline(run_logger=logger).run(AozoraConfig(), stdin=io.BytesIO(b"abc"))

    assert len(roots) == 1
    assert not roots[0].exists()
    assert ("failure", "decode:EncodingError") in logger.events


def test_run_wraps_unexpected_errors_with_stage_name(monkeypatch: MonkeyPatch) -> None:
    def _broken_strip(self: object, lines: object) -> None:
        raise KeyError("boom")

    monkeypatch.setattr(pipeline_module.AnnotationStripper, "strip", _broken_strip)

    with pytest.raises(PipelineStageError) as exc_info:
        AozoraPipeline().run(
            AozoraConfig(), stdin=io.BytesIO(sample_archive_bytes("utf-8"))
        )

    assert exc_info.value.stage == "annotations"
    assert "boom" in exc_info.value.detail


def test_run_validates_config_before_reading_input() -> None:
    class _UnreadableStdin(io.BytesIO):
        def read(self, *args: object) -> bytes:
            raise AssertionError("stdin must not be read")

    with pytest.raises(PipelineStageError) as exc_info:
        AozoraPipeline().run(AozoraConfig(time=10), stdin=_UnreadableStdin())

    assert exc_info.value.stage == "config"


def test_run_logs_counters_on_stage_completion(
    tmp_path: Path, monkeypatch: MonkeyPatch
) -> None:
    monkeypatch.chdir(tmp_path)
    logger = _RecordingLogger()
    raw = sample_archive_bytes("utf-8")

    result = AozoraPipeline(run_logger=logger).run(AozoraConfig(), stdin=io.BytesIO(raw))

    assert logger.context["read"] == {"bytes": len(raw)}
    assert logger.context["decode"]["encoding"] == result.encoding
    assert logger.context["body"]["dropped"] > 0
    assert logger.context["annotations"] == {"lines": len(result.document.body)}
    assert logger.context["format"] == {
        "chars": result.formatted.total_chars,
        "minutes": result.formatted.estimated_minutes,
    }
    assert logger.context["write"] == {"destination": "stdout", "files": 0}
    assert logger.context["preamble"] == {}
