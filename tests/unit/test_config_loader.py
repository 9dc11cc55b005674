"""Unit tests for YAML configuration loading and option validation."""

from __future__ import annotations

from pathlib import Path

import pytest

from aozoratxt.config import AozoraConfig, ConfigLoader
from aozoratxt.errors import ArgumentCombinationError, InvalidArgumentError


def test_config_loader_from_yaml_loads_and_normalizes_values(tmp_path: Path) -> None:
    config_path = tmp_path / "aozoratxt.yml"
    config_path.write_text(
        """
inputs:
  - " first.txt "
  - ""
  - second.txt
output: " out/book.txt "
speed: " 400 "
time: 15
encoding_backend: nkf
""".strip(),
        encoding="utf-8",
    )

    config = ConfigLoader.from_yaml(config_path)

    assert config.inputs == ("first.txt", "second.txt")
    assert config.output == "out/book.txt"
    assert config.speed == 400
    assert config.time == 15
    assert config.encoding_backend == "nkf"
    assert config.chunking_requested is True


def test_config_loader_accepts_single_input_string_and_empty_file(tmp_path: Path) -> None:
    single = tmp_path / "single.yml"
    single.write_text("inputs: book.txt\n", encoding="utf-8")
    empty = tmp_path / "empty.yml"
    empty.write_text("", encoding="utf-8")

    assert ConfigLoader.from_yaml(single).inputs == ("book.txt",)
    assert ConfigLoader.from_yaml(empty) == AozoraConfig()


def test_config_loader_rejects_unknown_keys(tmp_path: Path) -> None:
    config_path = tmp_path / "bad.yml"
    config_path.write_text("speed: 300\nvoice: alto\n", encoding="utf-8")

    with pytest.raises(ValueError, match=r"unsupported key\(s\): voice"):
        ConfigLoader.from_yaml(config_path)


@pytest.mark.parametrize("value", ["fast", "0", "-5", "true", "1.5"])
def test_config_loader_rejects_invalid_speed(tmp_path: Path, value: str) -> None:
    config_path = tmp_path / "bad.yml"
    config_path.write_text(f"speed: {value}\n", encoding="utf-8")

    with pytest.raises(ValueError, match="`speed`"):
        ConfigLoader.from_yaml(config_path)


def test_config_loader_rejects_non_mapping_root(tmp_path: Path) -> None:
    config_path = tmp_path / "list.yml"
    config_path.write_text("- a\n- b\n", encoding="utf-8")

    with pytest.raises(ValueError, match="top-level mapping"):
        ConfigLoader.from_yaml(config_path)


def test_config_defaults_apply_when_options_are_absent() -> None:
    config = AozoraConfig()

    assert config.effective_speed == 300
    assert config.effective_time == 20
    assert config.chunking_requested is False
    config.validate()


def test_with_overrides_ignores_none_values() -> None:
    base = AozoraConfig(inputs=("a.txt",), output="book.txt", speed=400)

    merged = base.with_overrides(inputs=None, output=None, speed=250, time=None)

    assert merged == AozoraConfig(inputs=("a.txt",), output="book.txt", speed=250)


@pytest.mark.parametrize(
    "config",
    [
        AozoraConfig(time=10),
        AozoraConfig(speed=300),
        AozoraConfig(speed=300, time=10),
    ],
)
def test_validate_requires_output_for_speed_or_time(config: AozoraConfig) -> None:
    with pytest.raises(ArgumentCombinationError) as exc_info:
        config.validate()

    assert exc_info.value.stage == "config"


def test_validate_rejects_unknown_backend_and_non_positive_values() -> None:
    with pytest.raises(InvalidArgumentError, match="Unsupported encoding backend"):
        AozoraConfig(encoding_backend="iconv").validate()
    with pytest.raises(InvalidArgumentError, match="`--time` must be a positive integer"):
        AozoraConfig(output="book.txt", time=0).validate()


def test_config_loader_from_env_reads_prefixed_variables() -> None:
    config = ConfigLoader.from_env(
        {
            "AOZORATXT_OUTPUT": " out/book.txt ",
            "AOZORATXT_SPEED": "450",
            "AOZORATXT_TIME": "5",
            "AOZORATXT_ENCODING_BACKEND": "nkf",
            "UNRELATED": "ignored",
        }
    )

    assert config.output == "out/book.txt"
    assert config.speed == 450
    assert config.time == 5
    assert config.encoding_backend == "nkf"
    assert config.inputs == ()


def test_config_loader_from_env_keeps_defaults_for_unset_or_blank_values() -> None:
    config = ConfigLoader.from_env({"AOZORATXT_SPEED": "  ", "AOZORATXT_OUTPUT": ""})

    assert config == AozoraConfig()
    assert ConfigLoader.env_overrides({}) == {}


def test_env_overrides_layer_over_yaml_values(tmp_path: Path) -> None:
    config_path = tmp_path / "aozoratxt.yml"
    config_path.write_text("speed: 400\nencoding_backend: nkf\n", encoding="utf-8")

    layered = ConfigLoader.from_yaml(config_path).with_overrides(
        **ConfigLoader.env_overrides({"AOZORATXT_SPEED": "500"})
    )

    assert layered.speed == 500
    assert layered.encoding_backend == "nkf"


@pytest.mark.parametrize("value", ["0", "-3", "fast"])
def test_config_loader_from_env_rejects_invalid_positive_ints(value: str) -> None:
    with pytest.raises(ValueError, match="Environment variable `AOZORATXT_TIME`"):
        ConfigLoader.from_env({"AOZORATXT_TIME": value})
