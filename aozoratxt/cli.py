"""Command-line interface for aozoratxt.

Responsibilities:
- Parse options into an `AozoraConfig` and run the conversion pipeline.
- Route document text to stdout and diagnostics to stderr.

Key public functions:
- `app`: Typer application instance.
- `main`: invoke the Typer application with exit code 1 on usage errors.

Configuration precedence: YAML file, then `AOZORATXT_*` environment variables,
then explicit command-line options.
"""

from __future__ import annotations

from pathlib import Path
import sys
from typing import Annotated

import typer

from .cli_rendering import echo_command_error, echo_run_summary, exit_with_command_error
from .config import AozoraConfig, ConfigLoader
from .errors import InvalidArgumentError, PipelineStageError
from .parsing import normalize_optional_string, parse_optional_positive_int
from .pipeline import AozoraPipeline
from .telemetry.logger import RunLogger

app = typer.Typer(
    name="aozoratxt",
    add_completion=False,
    no_args_is_help=False,
    context_settings={"help_option_names": ["-h", "--help"]},
    help="Convert Aozora Bunko ruby text into clean reading text.",
)


def _load_yaml_config(config_path: Path | None) -> AozoraConfig:
    """Load a YAML config file when requested and map failures to stage errors."""

    if config_path is None:
        return AozoraConfig()

    try:
        return ConfigLoader.from_yaml(config_path)
    except FileNotFoundError as exc:
        raise PipelineStageError(
            stage="config",
            detail=f"Config file not found: `{config_path}`.",
            hint="Provide an existing path via `--config <path.yaml>`.",
        ) from exc
    except ValueError as exc:
        raise InvalidArgumentError(
            stage="config",
            detail=f"Invalid config file `{config_path}`: {exc}",
            hint="Fix config schema/values and rerun.",
        ) from exc


def _load_env_overrides() -> dict[str, object]:
    """Read `AOZORATXT_*` overrides and map invalid values to argument errors."""

    try:
        return ConfigLoader.env_overrides()
    except ValueError as exc:
        raise InvalidArgumentError(
            stage="config",
            detail=str(exc),
            hint="Fix or unset the variable and rerun.",
        ) from exc


def _parse_cli_int(value: str | None, option_name: str) -> int | None:
    """Parse an optional positive integer option into a typed value."""

    try:
        return parse_optional_positive_int(value, option_name)
    except ValueError as exc:
        raise InvalidArgumentError(stage="config", detail=str(exc)) from exc


@app.command()
def convert_command(
    inputs: Annotated[
        list[str] | None,
        typer.Option(
            "--input",
            "-i",
            metavar="FILE",
            help="Input file; repeatable. `-` or no input reads standard input.",
        ),
    ] = None,
    output: Annotated[
        str | None,
        typer.Option(
            "--output",
            "-o",
            metavar="FILE",
            help="Destination file. With `--time`, writes `<FILE minus .txt>_NNN.txt` chunks.",
        ),
    ] = None,
    speed: Annotated[
        str | None,
        typer.Option(
            "--speed",
            "-s",
            metavar="NUM",
            help="Reading speed in characters per minute (default: 300). Requires `--output`.",
        ),
    ] = None,
    time: Annotated[
        str | None,
        typer.Option(
            "--time",
            "-t",
            metavar="MINUTES",
            help="Split into chunks of this many minutes (default: 20). Requires `--output`.",
        ),
    ] = None,
    config_file: Annotated[
        Path | None,
        typer.Option(
            "--config",
            "-c",
            help="Path to YAML config file with command defaults.",
        ),
    ] = None,
    encoding_backend: Annotated[
        str | None,
        typer.Option(
            "--encoding-backend",
            help="Encoding detector: `chardet` (default) or the external `nkf` tool.",
        ),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Log stage progress to stderr."),
    ] = False,
) -> None:
    """Strip ruby, editorial notes, and archive headers/footers from Aozora text."""

    try:
        base_config = _load_yaml_config(config_file).with_overrides(**_load_env_overrides())
        config = base_config.with_overrides(
            inputs=tuple(inputs) if inputs else None,
            output=normalize_optional_string(output),
            speed=_parse_cli_int(speed, "speed"),
            time=_parse_cli_int(time, "time"),
            encoding_backend=normalize_optional_string(encoding_backend),
        )
        pipeline = AozoraPipeline(run_logger=RunLogger(level="INFO" if verbose else "WARNING"))
        result = pipeline.run(config, stdin=sys.stdin.buffer)
    except Exception as exc:
        exit_with_command_error("aozoratxt", exc)

    if result.destination == "stdout":
        typer.echo(result.formatted.text, nl=False)
    echo_run_summary(result, config.effective_speed)


def main() -> None:
    """CLI entrypoint for console scripts."""

    try:
        exit_code = app(standalone_mode=False)
    except typer.TyperException as exc:
        echo_command_error(
            "aozoratxt",
            InvalidArgumentError(
                stage="cli",
                detail=exc.format_message(),
                hint="Run `aozoratxt --help` for usage.",
            ),
        )
        raise SystemExit(1) from exc
    except typer.Abort as exc:
        raise SystemExit(1) from exc
    raise SystemExit(exit_code or 0)


if __name__ == "__main__":
    main()
