"""Structural comparison of attribute mappings."""

from collections.abc import Iterable, Mapping
from typing import Any

from tf_schema_diff.schema.models import DiffResult


class _Missing:
    """Marker for a requested key the source mapping does not have."""

    _instance = None

    def __new__(cls) -> "_Missing":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "MISSING"

    def __bool__(self) -> bool:
        return False


MISSING: Any = _Missing()


def diff(before: Mapping[str, Any], after: Mapping[str, Any]) -> DiffResult:
    """Compute attribute names created and deleted between two mappings.

    Names keep the iteration order of the mapping they come from, but callers
    should treat them as sets.

    Args:
        before: Attribute map of the old schema
        after: Attribute map of the new schema

    Returns:
        DiffResult with names only in ``after`` (created) and only in ``before`` (deleted)
    """
    before_keys = set(before)
    after_keys = set(after)

    return DiffResult(
        created=tuple(k for k in after if k not in before_keys),
        deleted=tuple(k for k in before if k not in after_keys),
    )


def filter_keys(mapping: Mapping[str, Any], keys: Iterable[str]) -> dict[str, Any]:
    """Project ``mapping`` onto ``keys``.

    Every requested key is present in the result. Keys the mapping lacks map
    to ``MISSING``; values are shared with the source, not copied.
    """
    return {key: mapping.get(key, MISSING) for key in keys}


def to_jsonable(value: Any) -> Any:
    """Replace ``MISSING`` markers with None so a filtered map can be dumped."""
    if value is MISSING:
        return None
    if isinstance(value, dict):
        return {k: to_jsonable(v) for k, v in value.items()}
    return value
