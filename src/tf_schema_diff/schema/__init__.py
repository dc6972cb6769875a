"""Schema loading, structural comparison and classification.

The classifier lives in :mod:`tf_schema_diff.schema.classifier`; it is not
re-exported here because it depends on the oracle package.
"""

from tf_schema_diff.schema.differ import MISSING, diff, filter_keys
from tf_schema_diff.schema.models import Classification, DiffResult, Report

__all__ = [
    "MISSING",
    "Classification",
    "DiffResult",
    "Report",
    "diff",
    "filter_keys",
]
