"""Configuration model and loaders for aozoratxt.

Responsibilities:
- Define runtime configuration as a typed dataclass.
- Enforce option combination rules before any input is read.
- Provide YAML and environment loaders; explicit CLI options override both.

Key types:
- `AozoraConfig`: normalized runtime settings for one conversion run.
- `ConfigLoader`: static construction helpers for `AozoraConfig`.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
import os
from pathlib import Path
from typing import Any, Mapping

import yaml

from .errors import ArgumentCombinationError, InvalidArgumentError
from .io.encoding import SUPPORTED_BACKENDS
from .parsing import normalize_optional_string, parse_optional_positive_int

DEFAULT_SPEED = 300
DEFAULT_TIME = 20
DEFAULT_ENCODING_BACKEND = "chardet"


@dataclass(slots=True)
class AozoraConfig:
    """Runtime configuration for one conversion run.

    Attributes:
        inputs: Input file paths in concatenation order; `-` means stdin.
        output: Destination file, or `None` to write the document to stdout.
        speed: Explicit reading speed in characters per minute.
        time: Explicit minutes per chunk; setting it requests chunking.
        encoding_backend: `chardet` (in-process) or `nkf` (external tool).
    """

    inputs: tuple[str, ...] = field(default_factory=tuple)
    output: str | None = None
    speed: int | None = None
    time: int | None = None
    encoding_backend: str = DEFAULT_ENCODING_BACKEND

    @property
    def effective_speed(self) -> int:
        """Return the explicit speed or the documented default."""

        return self.speed if self.speed is not None else DEFAULT_SPEED

    @property
    def effective_time(self) -> int:
        """Return the explicit chunk minutes or the documented default."""

        return self.time if self.time is not None else DEFAULT_TIME

    @property
    def chunking_requested(self) -> bool:
        """Return whether the document should be split into chunk files."""

        return self.time is not None

    def with_overrides(self, **values: object) -> AozoraConfig:
        """Return a copy where every non-`None` value replaces the current one."""

        changes = {key: value for key, value in values.items() if value is not None}
        return replace(self, **changes)

    def validate(self) -> None:
        """Validate option values and combinations before the pipeline runs."""

        for name, value in (("speed", self.speed), ("time", self.time)):
            if value is not None and value <= 0:
                raise InvalidArgumentError(
                    stage="config",
                    detail=f"`--{name}` must be a positive integer, got `{value}`.",
                )
        if self.encoding_backend not in SUPPORTED_BACKENDS:
            raise InvalidArgumentError(
                stage="config",
                detail=f"Unsupported encoding backend `{self.encoding_backend}`.",
                hint=f"Use one of: {', '.join(SUPPORTED_BACKENDS)}.",
            )
        if (self.speed is not None or self.time is not None) and self.output is None:
            raise ArgumentCombinationError(
                stage="config",
                detail="`--speed` and `--time` require `--output`.",
                hint="Pass `--output <file.txt>` to choose where the text is written.",
            )


class ConfigLoader:
    """Factory helpers for loading `AozoraConfig` from external sources."""

    _SUPPORTED_YAML_KEYS = frozenset(
        {"inputs", "output", "speed", "time", "encoding_backend"}
    )

    @staticmethod
    def from_yaml(path: Path) -> AozoraConfig:
        """Create a config from a YAML file."""

        path_text = path.read_text(encoding="utf-8")
        payload = ConfigLoader._parse_yaml_payload(path_text, path)
        return ConfigLoader._build_config_from_mapping(payload, source_label=f"YAML `{path}`")

    @staticmethod
    def from_env(env: Mapping[str, str] | None = None) -> AozoraConfig:
        """Create a config from `AOZORATXT_*` environment variables."""

        return AozoraConfig().with_overrides(**ConfigLoader.env_overrides(env))

    @staticmethod
    def env_overrides(env: Mapping[str, str] | None = None) -> dict[str, object]:
        """Return parsed values for the `AOZORATXT_*` variables that are set.

        Unset or blank variables are omitted so the result can be layered over
        a YAML config with `AozoraConfig.with_overrides`.
        """

        env_map: Mapping[str, str] = os.environ if env is None else env
        values: dict[str, object] = {
            "output": ConfigLoader._optional_env_string(env_map, "AOZORATXT_OUTPUT"),
            "speed": ConfigLoader._optional_env_positive_int(env_map, "AOZORATXT_SPEED"),
            "time": ConfigLoader._optional_env_positive_int(env_map, "AOZORATXT_TIME"),
            "encoding_backend": ConfigLoader._optional_env_string(
                env_map, "AOZORATXT_ENCODING_BACKEND"
            ),
        }
        return {key: value for key, value in values.items() if value is not None}

    @staticmethod
    def _parse_yaml_payload(raw_text: str, path: Path) -> Mapping[str, Any]:
        """Parse YAML text and enforce a mapping root payload."""

        payload = yaml.safe_load(raw_text)
        if payload is None:
            payload = {}
        if not isinstance(payload, Mapping):
            raise ValueError(f"YAML config `{path}` must contain a top-level mapping/object.")
        return payload

    @staticmethod
    def _build_config_from_mapping(payload: Mapping[str, Any], source_label: str) -> AozoraConfig:
        """Build a config from a normalized mapping payload."""

        unknown = sorted(set(payload).difference(ConfigLoader._SUPPORTED_YAML_KEYS))
        if unknown:
            key_list = ", ".join(unknown)
            raise ValueError(f"{source_label} includes unsupported key(s): {key_list}.")

        return AozoraConfig(
            inputs=ConfigLoader._optional_string_list(payload, "inputs", source_label),
            output=normalize_optional_string(payload.get("output")),
            speed=ConfigLoader._optional_positive_int(payload, "speed", source_label),
            time=ConfigLoader._optional_positive_int(payload, "time", source_label),
            encoding_backend=(
                normalize_optional_string(payload.get("encoding_backend"))
                or DEFAULT_ENCODING_BACKEND
            ),
        )

    @staticmethod
    def _optional_positive_int(
        payload: Mapping[str, Any], key: str, source_label: str
    ) -> int | None:
        """Read and validate an optional positive integer payload field."""

        try:
            return parse_optional_positive_int(payload.get(key), key)
        except ValueError as exc:
            raise ValueError(f"{source_label} field {exc}") from exc

    @staticmethod
    def _optional_string_list(
        payload: Mapping[str, Any], key: str, source_label: str
    ) -> tuple[str, ...]:
        """Read a string or list of strings, dropping blank entries."""

        raw_value = payload.get(key)
        if raw_value is None:
            return ()
        if isinstance(raw_value, str):
            raw_value = [raw_value]
        if not isinstance(raw_value, list):
            raise ValueError(f"{source_label} field `{key}` must be a string or a list.")
        values = (normalize_optional_string(item) for item in raw_value)
        return tuple(value for value in values if value is not None)

    @staticmethod
    def _optional_env_string(env: Mapping[str, str], key: str) -> str | None:
        """Read and normalize optional string environment variable values."""

        if key not in env:
            return None
        return normalize_optional_string(env.get(key))

    @staticmethod
    def _optional_env_positive_int(env: Mapping[str, str], key: str) -> int | None:
        """Read an optional positive integer from environment mapping."""

        try:
            return parse_optional_positive_int(env.get(key), key)
        except ValueError as exc:
            raise ValueError(f"Environment variable {exc}") from exc
