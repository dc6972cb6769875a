"""
Utility functions for CLI output.
"""

import json
from typing import Any

import click

from tf_schema_diff.schema.differ import to_jsonable


def echo_success(message: str) -> None:
    """Print success message in green."""
    click.secho(f"✓ {message}", fg="green")


def echo_info(message: str) -> None:
    """Print info message in blue."""
    click.secho(f"ℹ {message}", fg="blue")


def echo_json(label: str, data: dict[str, Any]) -> None:
    """Print a labelled, indented JSON dump on stderr."""
    click.secho(label, fg="cyan", err=True)
    click.echo(json.dumps(to_jsonable(data), indent=2), err=True)
