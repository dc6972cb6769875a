"""
Main CLI entry point for tf-schema-diff.

Compares two provider schema documents and writes a report classifying each
resource of the newer document as new, unchanged or updated, with rename
suggestions from the semantic oracle for review.
"""

import asyncio
import sys
from pathlib import Path

import click
from dotenv import load_dotenv

from tf_schema_diff import __version__
from tf_schema_diff.cli.context import DiffContext
from tf_schema_diff.cli.decorators import handle_errors
from tf_schema_diff.cli.utils import echo_info, echo_json, echo_success
from tf_schema_diff.exceptions import ConfigurationError
from tf_schema_diff.reporting.report_display import display_report_summary
from tf_schema_diff.schema.classifier import inspect_resource
from tf_schema_diff.schema.loader import load_resources
from tf_schema_diff.schema.persistence import save_report
from tf_schema_diff.utils.logging import configure_logging, get_logger

logger = get_logger(__name__)

SCHEMA_FILE = click.Path(exists=True, dir_okay=False, path_type=Path)


@click.command(name="tf-schema-diff")
@click.version_option(version=__version__, prog_name="tf-schema-diff")
@click.argument("before", type=SCHEMA_FILE)
@click.argument("after", type=SCHEMA_FILE)
@click.argument("resource", required=False)
@click.option(
    "--config",
    "-c",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Path to a YAML configuration file",
    envvar="TF_SCHEMA_DIFF_CONFIG",
)
@click.option(
    "--output",
    "-o",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Report path (default: output.json)",
)
@click.option("--model", help="Oracle model identifier")
@click.option(
    "--keep-going",
    is_flag=True,
    help="Record oracle failures as ai_error entries instead of aborting",
)
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    help="Console logging level (default: INFO)",
    envvar="TF_SCHEMA_DIFF_LOG_LEVEL",
)
@click.option(
    "--log-file",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Also write JSON logs to this file",
    envvar="TF_SCHEMA_DIFF_LOG_FILE",
)
@click.option("--summary/--no-summary", default=True, help="Print a summary table at the end")
@handle_errors
def cli(
    before: Path,
    after: Path,
    resource: str | None,
    config: Path | None,
    output: Path | None,
    model: str | None,
    keep_going: bool,
    log_level: str | None,
    log_file: Path | None,
    summary: bool,
) -> None:
    """Classify resources between BEFORE and AFTER provider schemas.

    BEFORE and AFTER are the output of 'terraform providers schema -json'.
    Each resource in AFTER is reported as new, same or updated; updated
    resources that both gained and lost attributes are checked for renames.

    Passing RESOURCE prints the attributes that would be sent to the oracle
    for that resource and exits without writing a report.

    Examples:

        # Full run, report written to output.json
        tf-schema-diff before.json after.json

        # Inspect one resource
        tf-schema-diff before.json after.json aws_instance
    """
    diff_ctx = DiffContext(
        config_path=config,
        output=output,
        model=model,
        keep_going=keep_going,
    )

    try:
        settings = diff_ctx.config
    except ConfigurationError:
        configure_logging(level=log_level or "INFO")
        raise

    configure_logging(
        level=log_level or settings.logging.level,
        log_format=settings.logging.format,
        log_file=str(log_file) if log_file else settings.logging.file,
        file_level=settings.logging.file_level,
    )

    before_resources = load_resources(before)
    after_resources = load_resources(after)

    if resource:
        filtered_before, filtered_after = inspect_resource(
            before_resources, after_resources, resource
        )
        echo_json(f"{resource} (before, deleted attributes):", filtered_before)
        echo_json(f"{resource} (after, created attributes):", filtered_after)
        return

    report = asyncio.run(diff_ctx.classify(before_resources, after_resources))

    path = save_report(report, settings.output.path, indent=settings.output.indent)
    echo_success(f"wrote output to {path}")

    if report.oracle_errors:
        echo_info(f"{len(report.oracle_errors)} resource(s) need manual review (ai_error)")

    if summary:
        display_report_summary(report)


def main(argv: list[str] | None = None) -> int:
    """Main entry point for CLI."""
    load_dotenv()

    try:
        result = cli.main(args=argv, prog_name="tf-schema-diff", standalone_mode=False)
    except click.ClickException as e:
        e.show()
        return e.exit_code
    except click.exceptions.Abort:
        click.echo("Aborted!", err=True)
        return 1

    return result if isinstance(result, int) else 0


if __name__ == "__main__":
    sys.exit(main())
