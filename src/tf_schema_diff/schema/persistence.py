"""Report persistence for saving and loading classification reports."""

import json
from pathlib import Path
from typing import Any

from tf_schema_diff.schema.models import Report
from tf_schema_diff.utils.logging import get_logger

logger = get_logger(__name__)


def save_report(report: Report, output_path: Path | str, indent: int = 2) -> Path:
    """Write the report as pretty-printed JSON.

    Args:
        report: Classification report
        output_path: Destination file; parent directories are created
        indent: JSON indentation

    Returns:
        Path of the written file
    """
    path = Path(output_path)
    path.parent.mkdir(parents=True, exist_ok=True)

    with open(path, "w", encoding="utf-8") as f:
        json.dump(report.to_dict(), f, indent=indent)
        f.write("\n")

    logger.info("report_saved", file=str(path), **report.get_summary())

    return path


def load_report(report_file: Path | str) -> Report:
    """Load a report previously written by :func:`save_report`.

    Raises:
        FileNotFoundError: If the report file doesn't exist
        json.JSONDecodeError: If file is not valid JSON
    """
    path = Path(report_file)

    if not path.exists():
        raise FileNotFoundError(f"Report file not found: {path}")

    with open(path, encoding="utf-8") as f:
        data: dict[str, Any] = json.load(f)

    return Report.from_dict(data)
