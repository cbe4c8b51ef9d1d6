"""Command line interface for checking URIs against a claim document.

Usage:
    catu match claim.yaml "https://cdn.example.com/content/index.m3u8"
    catu show claim.yaml [--labels]

``match`` exits 0 on a match, 1 on no match and 2 on an invalid claim.
"""

from __future__ import annotations

import asyncio
import json
import logging
import sys

import click
import structlog

from catu._config import load_claim
from catu._errors import InvalidCatuError


class ClaimError(click.ClickException):
    """An invalid claim or URI, reported with exit status 2."""

    exit_code = 2


def configure_logging(verbose: bool) -> None:
    """Route structlog through stdlib logging on stderr."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(format="%(message)s", stream=sys.stderr, level=level)
    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.format_exc_info,
            structlog.dev.ConsoleRenderer(colors=False),
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )


@click.group()
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
def main(verbose: bool) -> None:
    """Evaluate Common Access Token URI claims."""
    configure_logging(verbose)


@main.command("match")
@click.argument("claim_file", type=click.Path(exists=True, dir_okay=False))
@click.argument("uri")
def match_command(claim_file: str, uri: str) -> None:
    """Check URI against the claim in CLAIM_FILE."""
    try:
        claim = load_claim(claim_file)
        matched = asyncio.run(claim.match(uri))
    except InvalidCatuError as e:
        raise ClaimError(str(e)) from e

    if matched:
        click.echo("match")
    else:
        click.echo("no match")
        sys.exit(1)


@main.command("show")
@click.argument("claim_file", type=click.Path(exists=True, dir_okay=False))
@click.option(
    "--labels", is_flag=True, help="Print the labeled payload instead of names"
)
def show_command(claim_file: str, labels: bool) -> None:
    """Print the claim in CLAIM_FILE as JSON."""
    try:
        claim = load_claim(claim_file)
        data = claim.payload if labels else claim.to_dict()
    except InvalidCatuError as e:
        raise ClaimError(str(e)) from e
    click.echo(json.dumps(data, indent=2))
