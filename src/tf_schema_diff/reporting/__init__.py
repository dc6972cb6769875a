"""Console reporting for classification runs."""

from tf_schema_diff.reporting.report_display import display_report_summary

__all__ = ["display_report_summary"]
