"""
Sortable IDs CLI

Command-line interface for generating and decoding identifiers.

Usage:
    sortable-ids generate                  # one UUIDv7
    sortable-ids generate --snowflake -c 5 # five Snowflake IDs
    sortable-ids generate -w 1 -s -c 10    # ten Snowflake IDs for worker 1
    sortable-ids decode 018f8f5e-4a6b-7000-9c3d-5e6f7a8b9c0d
"""

import json
from datetime import datetime
from typing import Any, NoReturn, Optional

import typer
from typing_extensions import Annotated

from sortable_ids.kernel.errors import SortableIdError
from sortable_ids.kernel.logging import (
    LogOperation,
    configure_logging,
    get_logger,
    is_production,
)
from sortable_ids.kernel.metrics import start_metrics_server
from sortable_ids.snowflake import Snowflake
from sortable_ids.uuid7 import UUIDv7

MAX_COUNT = 1000

app = typer.Typer(
    name="sortable-ids",
    help="Generate and decode Snowflake IDs and UUIDv7s",
    add_completion=False,
)

logger = get_logger(__name__)


@app.callback()
def main(
    log_level: Annotated[
        str,
        typer.Option("--log-level", help="Logging level (DEBUG, INFO, WARNING, ERROR)"),
    ] = "WARNING",
    json_logs: Annotated[
        bool,
        typer.Option("--json-logs", help="Emit JSON logs on stderr"),
    ] = False,
    metrics_port: Annotated[
        Optional[int],
        typer.Option("--metrics-port", help="Serve Prometheus metrics on this port"),
    ] = None,
) -> None:
    """Sortable IDs - coordination-free, time-ordered identifiers"""
    configure_logging(json_output=json_logs or is_production(), log_level=log_level)
    if metrics_port is not None:
        start_metrics_server(metrics_port)
        logger.info("Metrics server started", port=metrics_port)


def _fail(message: str) -> NoReturn:
    typer.echo(f"Error: {message}", err=True)
    raise typer.Exit(1)


@app.command()
def generate(
    uuid: Annotated[
        bool,
        typer.Option("--uuid", "-u", help="Generate UUIDv7s (default when no scheme is given)"),
    ] = False,
    snowflake: Annotated[
        bool,
        typer.Option("--snowflake", "-s", help="Generate Snowflake IDs"),
    ] = False,
    worker_id: Annotated[
        int,
        typer.Option(
            "--worker-id",
            "-w",
            "--id",
            envvar="SORTABLE_IDS_WORKER_ID",
            help="Worker ID (0-1023)",
        ),
    ] = 0,
    count: Annotated[
        int,
        typer.Option("--count", "-c", help=f"Number of IDs to generate (1-{MAX_COUNT})"),
    ] = 1,
) -> None:
    """Generate identifiers, one per line"""
    count = min(max(count, 1), MAX_COUNT)
    if not uuid and not snowflake:
        uuid = True

    try:
        uuid_generator = UUIDv7(worker_id) if uuid else None
        snowflake_generator = Snowflake(worker_id) if snowflake else None
        with LogOperation(logger, "generate", worker_id=worker_id, count=count):
            for _ in range(count):
                if uuid_generator is not None:
                    typer.echo(uuid_generator.generate())
                if snowflake_generator is not None:
                    typer.echo(snowflake_generator.generate())
    except SortableIdError as exc:
        _fail(str(exc))


def _isoformat(value: datetime | None) -> str | None:
    return value.isoformat() if value is not None else None


def describe(value: str) -> dict[str, Any]:
    """
    Decode a UUIDv7 or Snowflake string into a JSON-ready dictionary

    UUIDv7 grammar is tried first; anything else must be a Snowflake.

    Raises:
        InvalidIdentifierError: If value is neither
    """
    if UUIDv7.is_valid(value):
        uuid_fields = UUIDv7.parse(value)
        return {
            "version": uuid_fields.version,
            "variant": uuid_fields.variant,
            "timestamp": uuid_fields.timestamp,
            "date": _isoformat(uuid_fields.date),
            "sequence": uuid_fields.sequence,
            "rand_a": uuid_fields.rand_a,
            "rand_b": uuid_fields.rand_b,
        }
    snowflake_fields = Snowflake.parse(value)
    return {
        "timestamp": snowflake_fields.timestamp,
        "date": _isoformat(snowflake_fields.date),
        "worker_id": snowflake_fields.worker_id,
        "sequence": snowflake_fields.sequence,
    }


@app.command()
def decode(
    value: Annotated[
        Optional[str],
        typer.Argument(help="UUIDv7 or Snowflake ID to decode"),
    ] = None,
) -> None:
    """Decode an identifier and print its fields as JSON"""
    if not value:
        _fail("No value provided for decoding.")

    try:
        with LogOperation(logger, "decode"):
            decoded = describe(value)
    except SortableIdError:
        _fail(f"Invalid UUIDv7 or Snowflake ID: {value}")

    typer.echo(json.dumps(decoded))


if __name__ == "__main__":
    app()
