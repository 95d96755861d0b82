from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from contextlib import contextmanager
from enum import Enum
from pathlib import Path
from typing import Callable, Iterator, Optional

import typer
from typing_extensions import Annotated

from .api import CrptApiClient
from .container import Container
from ..config.urls import DEFAULT_API_URL
from ..core.domain.models import Document, SubmissionOutcome
from ..core.errors import SerializationError


app = typer.Typer(add_completion=False, help="CRPT document registration client")


class LogLevel(str, Enum):
    OFF = "OFF"
    CRITICAL = "CRITICAL"
    ERROR = "ERROR"
    WARNING = "WARNING"
    INFO = "INFO"
    DEBUG = "DEBUG"


@app.callback()
def main(
    log_level: Annotated[
        Optional[LogLevel],
        typer.Option(
            "--log-level",
            help="Set log level (OFF, CRITICAL, ERROR, WARNING, INFO, DEBUG). Default: OFF",
        ),
    ] = None,
) -> None:
    """Root command callback to configure logging if requested."""
    if log_level in (None, LogLevel.OFF):
        return

    level = logging.getLevelName(log_level.value)

    package_name = __package__.split(".", 1)[0] if __package__ else "crpt_api"
    logger = logging.getLogger(package_name)

    # avoid stacking handlers when invoked repeatedly in one process
    has_stream = any(isinstance(h, logging.StreamHandler) for h in logger.handlers)
    if not has_stream:
        handler = logging.StreamHandler()  # stderr
        handler.setFormatter(logging.Formatter("%(levelname)s | %(name)s | %(message)s"))
        logger.addHandler(handler)

    logger.propagate = False
    logger.setLevel(level)


@contextmanager
def provide_container() -> Iterator[Container]:
    container = Container()
    try:
        yield container
    finally:
        container.shutdown_resources()


def _load(load: Callable[[Path], Document], path: Path) -> Document:
    try:
        return load(path)
    except OSError as e:
        typer.echo(f"Cannot read {path}: {e}", err=True)
        raise typer.Exit(code=2)
    except SerializationError as e:
        typer.echo(f"Invalid document {path}: {e}", err=True)
        raise typer.Exit(code=2)


def _format_outcome(index: int, outcome: SubmissionOutcome) -> str:
    if outcome.ok:
        return f"[{index}] Success: {outcome.body}"
    if outcome.status_code is not None:
        return f"[{index}] Error: {outcome.status_code}"
    return f"[{index}] {outcome.status.value}: {outcome.error}"


@app.command(help="Submit a document JSON file, optionally several times concurrently through one rate-limited client.")
def submit(
    path: Path = typer.Argument(..., help="Document JSON file"),
    signature: str = typer.Option(..., "--signature", "-s", help="Document signature"),
    count: int = typer.Option(1, "--count", "-n", min=1, help="Number of submissions"),
    workers: int = typer.Option(1, "--workers", "-w", min=1, help="Concurrent submitting threads"),
    limit: int = typer.Option(1, "--limit", help="Permits per window"),
    window_unit: str = typer.Option("seconds", "--window-unit", help="Window unit (seconds, minutes, ...)"),
    window_length: int = typer.Option(1, "--window-length", help="Window length in window units"),
    api_url: str = typer.Option(DEFAULT_API_URL, "--api-url", help="Registration endpoint"),
) -> None:
    try:
        client = CrptApiClient(window_unit, limit, api_url, window_length=window_length)
    except ValueError as e:
        typer.echo(f"Invalid settings: {e}", err=True)
        raise typer.Exit(code=2)

    with client:
        document = _load(client.load_document, path)
        with ThreadPoolExecutor(max_workers=workers) as pool:
            outcomes = list(pool.map(lambda _: client.submit(document, signature), range(count)))

    for i, outcome in enumerate(outcomes, start=1):
        typer.echo(_format_outcome(i, outcome))
    failed = sum(1 for o in outcomes if not o.ok)
    if failed:
        typer.echo(f"{failed}/{len(outcomes)} submissions failed", err=True)
        raise typer.Exit(code=1)


@app.command(help="Print the canonical JSON payload for a document file.")
def encode(path: Path = typer.Argument(..., help="Document JSON file")) -> None:
    with provide_container() as container:
        document = _load(container.load_uc().execute, path)
        typer.echo(container.codec().encode(document))


if __name__ == "__main__":  # pragma: no cover
    app()
