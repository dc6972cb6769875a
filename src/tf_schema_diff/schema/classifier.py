"""Classification of resources between two provider schema snapshots."""

import json
from collections.abc import Mapping
from typing import Any

from tf_schema_diff.exceptions import OracleError, ResourceNotFoundError
from tf_schema_diff.oracle.gateway import RenameInferenceGateway
from tf_schema_diff.schema.differ import diff, filter_keys
from tf_schema_diff.schema.loader import get_attributes
from tf_schema_diff.schema.models import AI_ERROR_KEY, Classification, Report
from tf_schema_diff.utils.logging import get_logger

logger = get_logger(__name__)


class SchemaClassifier:
    """Classify every resource of the after schema as new, same or updated.

    Resources are processed one at a time in the order of the after schema.
    Only resources whose attributes were both added and removed are sent to
    the rename-inference gateway; resources that exist only in the before
    schema are not reported.
    """

    def __init__(self, gateway: RenameInferenceGateway, record_oracle_errors: bool = False):
        """Initialize the classifier.

        Args:
            gateway: Rename-inference gateway wrapping the oracle
            record_oracle_errors: Record an oracle failure (after retries) as an
                ``ai_error`` entry instead of aborting the run
        """
        self.gateway = gateway
        self.record_oracle_errors = record_oracle_errors

    async def classify(
        self,
        before_resources: Mapping[str, dict[str, Any]],
        after_resources: Mapping[str, dict[str, Any]],
    ) -> Report:
        """Build the report for a before/after pair of resource mappings.

        Raises:
            OracleError: If an oracle call fails and errors are not recorded
        """
        report = Report()

        for name, after in after_resources.items():
            logger.info("processing_resource", resource=name)

            classification = await self.classify_resource(
                report, name, before_resources.get(name), after
            )

            logger.debug("resource_classified", resource=name, classification=classification.value)

        logger.info("classification_complete", **report.get_summary())

        return report

    async def classify_resource(
        self,
        report: Report,
        name: str,
        before: dict[str, Any] | None,
        after: dict[str, Any],
    ) -> Classification:
        """Classify a single resource and add it to ``report``."""
        if before is None:
            report.new.append(name)
            return Classification.NEW

        before_attrs = get_attributes(before)
        after_attrs = get_attributes(after)
        diff_result = diff(before_attrs, after_attrs)

        if diff_result.is_empty:
            report.same.append(name)
            return Classification.SAME

        if not diff_result.has_rename_candidates:
            # One side only gained or only lost attributes: nothing can be a rename
            report.updated[name] = diff_result.to_entry()
        else:
            report.updated[name] = await self._infer(name, before_attrs, after_attrs, diff_result)

        logger.info(
            "resource_updated",
            resource=name,
            entry=json.dumps(report.updated[name], indent=2),
        )

        return Classification.UPDATED

    async def _infer(self, name, before_attrs, after_attrs, diff_result) -> dict[str, Any]:
        try:
            return await self.gateway.infer_renames(
                before_attrs, after_attrs, diff_result, resource=name
            )
        except OracleError as e:
            if not self.record_oracle_errors:
                raise
            logger.error("oracle_call_failed", resource=name, error=str(e))
            return {AI_ERROR_KEY: str(e)}


def inspect_resource(
    before_resources: Mapping[str, dict[str, Any]],
    after_resources: Mapping[str, dict[str, Any]],
    name: str,
) -> tuple[dict[str, Any], dict[str, Any]]:
    """Return the attributes the oracle would see for one resource.

    The before map is filtered to the deleted names and the after map to the
    created names. A resource missing from the before schema is compared
    against an empty attribute map.

    Raises:
        ResourceNotFoundError: If ``name`` is not in the after schema
    """
    if name not in after_resources:
        raise ResourceNotFoundError(name)

    before = before_resources.get(name)
    before_attrs = get_attributes(before) if before is not None else {}
    after_attrs = get_attributes(after_resources[name])
    diff_result = diff(before_attrs, after_attrs)

    return (
        filter_keys(before_attrs, diff_result.deleted),
        filter_keys(after_attrs, diff_result.created),
    )
