"""Rename inference through the semantic oracle.

Structural comparison cannot tell a renamed attribute from a deleted one plus
a created one. The gateway shows the oracle only the attributes involved
(deleted names from the old schema, created names from the new one) and folds
its answer into an ``updated`` report entry.
"""

import json
from typing import Any

from tf_schema_diff.oracle.base import SemanticOracle
from tf_schema_diff.oracle.prompt import create_rename_prompt
from tf_schema_diff.schema.differ import filter_keys
from tf_schema_diff.schema.models import AI_ERROR_KEY, AttributeMap, DiffResult
from tf_schema_diff.utils.logging import get_logger

logger = get_logger(__name__)


def parse_oracle_response(text: str) -> dict[str, Any]:
    """Turn an oracle answer into an updated entry.

    A JSON object is returned as-is. Anything else is wrapped as
    ``{"ai_error": text}``.
    """
    try:
        parsed = json.loads(text)
    except (TypeError, ValueError) as e:
        logger.warning("oracle_response_not_json", error=str(e), response_chars=len(text or ""))
        return {AI_ERROR_KEY: text}

    if not isinstance(parsed, dict):
        logger.warning("oracle_response_not_object", response_type=type(parsed).__name__)
        return {AI_ERROR_KEY: text}

    return parsed


class RenameInferenceGateway:
    """Ask the oracle which deleted/created attribute pairs are renames."""

    def __init__(self, oracle: SemanticOracle):
        self.oracle = oracle

    def build_prompt(
        self, before: AttributeMap, after: AttributeMap, diff_result: DiffResult
    ) -> str:
        return create_rename_prompt(
            filter_keys(before, diff_result.deleted),
            filter_keys(after, diff_result.created),
        )

    async def infer_renames(
        self,
        before: AttributeMap,
        after: AttributeMap,
        diff_result: DiffResult,
        resource: str | None = None,
    ) -> dict[str, Any]:
        """Consult the oracle about one resource.

        Args:
            before: Full attribute map of the old resource schema
            after: Full attribute map of the new resource schema
            diff_result: Structural diff of the two maps; both sides non-empty
            resource: Resource name, for logging

        Returns:
            The parsed oracle answer, or ``{"ai_error": <raw text>}``

        Raises:
            ValueError: If the diff has no rename candidates
            OracleError: If the oracle cannot be reached after retries
        """
        if not diff_result.has_rename_candidates:
            raise ValueError("rename inference needs both created and deleted attributes")

        prompt = self.build_prompt(before, after, diff_result)

        logger.debug(
            "rename_inference_requested",
            resource=resource,
            created=list(diff_result.created),
            deleted=list(diff_result.deleted),
            prompt_chars=len(prompt),
        )

        text = await self.oracle.complete(prompt)
        entry = parse_oracle_response(text)

        if AI_ERROR_KEY not in entry:
            self._check_echo(entry, diff_result, resource)

        return entry

    @staticmethod
    def _check_echo(entry: dict[str, Any], diff_result: DiffResult, resource: str | None) -> None:
        """Warn when the oracle's created/deleted lists disagree with the diff.

        The entry is kept unchanged; the mismatch is only reported.
        """
        for key, expected in (("created", diff_result.created), ("deleted", diff_result.deleted)):
            echoed = entry.get(key)
            if not isinstance(echoed, list):
                continue
            if {str(name) for name in echoed} != set(expected):
                logger.warning(
                    "oracle_echo_mismatch",
                    resource=resource,
                    field=key,
                    expected=sorted(expected),
                    received=echoed,
                )
