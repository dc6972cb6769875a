"""
Decorators for CLI commands.

This module provides the error-handling decorator that turns tool errors
into user-facing messages and exit codes.
"""

import functools
from collections.abc import Callable

import click

from tf_schema_diff.exceptions import (
    AuthenticationError,
    ConfigurationError,
    OracleError,
    ResourceNotFoundError,
    SchemaLoadError,
)
from tf_schema_diff.utils.logging import get_logger

logger = get_logger(__name__)


def handle_errors(f: Callable) -> Callable:
    """
    Decorator to handle common errors in CLI commands.

    Exit codes:
        0: Success
        1: General error (including an unknown inspected resource)
        2: Configuration error
        3: Schema load error
        4: Oracle error
    """

    @functools.wraps(f)
    def wrapper(*args, **kwargs):
        try:
            return f(*args, **kwargs)

        except click.exceptions.Exit:
            raise

        except ConfigurationError as e:
            logger.error("configuration_error", error=str(e))
            click.echo(f"Configuration Error: {e}", err=True)
            raise click.exceptions.Exit(2) from e

        except SchemaLoadError as e:
            logger.error("schema_load_error", error=str(e), path=e.path)
            click.echo(f"Schema Error: {e}", err=True)
            click.echo(
                "\nExpected the output of 'terraform providers schema -json'.",
                err=True,
            )
            raise click.exceptions.Exit(3) from e

        except ResourceNotFoundError as e:
            logger.error("resource_not_found", resource=e.resource)
            click.echo(f"Error: {e}", err=True)
            raise click.exceptions.Exit(1) from e

        except AuthenticationError as e:
            logger.error("authentication_error", error=str(e))
            click.echo(f"Authentication Error: {e}", err=True)
            click.echo("\nPlease verify CLAUDE_API_KEY.", err=True)
            raise click.exceptions.Exit(4) from e

        except OracleError as e:
            logger.error("oracle_error", error=str(e))
            click.echo(f"Oracle Error: {e}", err=True)
            click.echo(
                "\nNo report was written. Use --keep-going to record oracle failures per resource.",
                err=True,
            )
            raise click.exceptions.Exit(4) from e

        except Exception as e:
            logger.error("unexpected_error", error=str(e), exc_info=True)
            click.echo(f"Unexpected Error: {e}", err=True)
            raise click.exceptions.Exit(1) from e

    return wrapper
