"""CLI output and error rendering helpers.

This module centralizes user-facing CLI presentation for command diagnostics
and run summaries. Everything here goes to stderr; stdout carries only
document text.
"""

from __future__ import annotations

from typing import NoReturn

import typer

from .errors import PipelineStageError
from .models.datatypes import RunResult


def echo_command_error(command_name: str, exc: Exception) -> None:
    """Print concise diagnostics for a command failure on stderr."""

    if isinstance(exc, PipelineStageError):
        typer.secho(
            f"{command_name} failed at stage `{exc.stage}`: {exc.detail}",
            fg=typer.colors.RED,
            err=True,
        )
        if exc.hint:
            typer.secho(f"Hint: {exc.hint}", fg=typer.colors.YELLOW, err=True)
    else:
        typer.secho(f"{command_name} failed: {exc}", fg=typer.colors.RED, err=True)


def exit_with_command_error(command_name: str, exc: Exception) -> NoReturn:
    """Print concise diagnostics for command failures and exit with code 1."""

    echo_command_error(command_name, exc)
    raise typer.Exit(code=1) from exc


def echo_output_routing(result: RunResult) -> None:
    """Print where the document text was sent."""

    if result.destination == "stdout":
        typer.echo("Output: stdout", err=True)
        return
    if result.destination == "file":
        typer.echo(f"Output: {result.written_paths[0]}", err=True)
        return
    typer.echo(f"Output: {len(result.chunks)} chunk file(s)", err=True)
    for chunk, path in zip(result.chunks, result.written_paths):
        typer.echo(f"  {path} ({chunk.char_count} chars)", err=True)


def echo_run_summary(result: RunResult, speed: int) -> None:
    """Print encoding, routing, size, and reading-time diagnostics."""

    typer.echo(f"Detected encoding: {result.encoding}", err=True)
    echo_output_routing(result)
    typer.echo(f"Total characters: {result.formatted.total_chars}", err=True)
    typer.echo(
        f"Estimated reading time: {result.formatted.estimated_minutes} min "
        f"at {speed} chars/min",
        err=True,
    )
    typer.echo("Done.", err=True)
