"""Command-line entry point for mailbox usage reports."""

from __future__ import annotations

import json
import logging
import sys

import click
from rich.console import Console

from mailbox_report import __version__
from mailbox_report.config import load_config
from mailbox_report.exchange.client import (
    ExchangeApiError,
    ExchangeAuthError,
    ExchangeConnectionError,
)
from mailbox_report.exchange.directory import MailboxLookupError
from mailbox_report.orchestration.report_builder import report_builder_from_config
from mailbox_report.rendering.console import render_report

logger = logging.getLogger(__name__)

EXIT_LOOKUP_FAILED = 1
EXIT_CONFIG_ERROR = 2


@click.command()
@click.argument("identity")
@click.option(
    "--top",
    "-n",
    type=click.IntRange(min=1),
    help="Show only the N largest folders (table and JSON).",
)
@click.option("--json", "as_json", is_flag=True, help="Print the report as JSON.")
@click.option("--verbose", "-v", is_flag=True, help="Log progress to stderr.")
@click.version_option(__version__, prog_name="mailbox-report")
def main(identity: str, top: int | None, as_json: bool, verbose: bool) -> None:
    """Report folder sizes and quota headroom for the mailbox IDENTITY."""
    logging.basicConfig(
        level=logging.INFO if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
        stream=sys.stderr,
    )
    err_console = Console(stderr=True)

    try:
        config = load_config()
    except KeyError as exc:
        err_console.print(f"[red]Missing configuration: environment variable {exc} is not set[/red]")
        sys.exit(EXIT_CONFIG_ERROR)

    try:
        report = report_builder_from_config(config).generate_report(identity)
    except MailboxLookupError as exc:
        err_console.print(f"[red]Error: {exc}[/red]")
        sys.exit(EXIT_LOOKUP_FAILED)
    except (ExchangeAuthError, ExchangeApiError, ExchangeConnectionError) as exc:
        logger.error("[main] report generation failed; identity:%s", identity, exc_info=verbose)
        err_console.print(f"[red]Error: {exc}[/red]")
        sys.exit(EXIT_LOOKUP_FAILED)

    if as_json:
        click.echo(json.dumps(report.to_dict(top=top), indent=2))
    else:
        render_report(report, top=top)


if __name__ == "__main__":
    main()
