"""Data models for schema classification results."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

AttributeMap = dict[str, Any]

AI_ERROR_KEY = "ai_error"


class Classification(Enum):
    """How a resource of the after schema was classified."""

    NEW = "new"
    SAME = "same"
    UPDATED = "updated"


@dataclass(frozen=True)
class DiffResult:
    """Attribute names added and removed between two versions of a resource."""

    created: tuple[str, ...] = ()
    deleted: tuple[str, ...] = ()

    @property
    def is_empty(self) -> bool:
        """True when both versions have the same attribute names."""
        return not self.created and not self.deleted

    @property
    def has_rename_candidates(self) -> bool:
        """A rename needs a removed name and an added name."""
        return bool(self.created) and bool(self.deleted)

    def to_entry(self) -> dict[str, Any]:
        """Updated entry for a change that cannot contain renames."""
        return {
            "created": list(self.created),
            "deleted": list(self.deleted),
            "renamed": [],
        }


@dataclass
class Report:
    """Classification of every resource in the after schema.

    ``updated`` values are either ``{created, deleted, renamed}`` records or
    ``{ai_error: <raw text>}`` when the oracle answer could not be used.
    """

    new: list[str] = field(default_factory=list)
    same: list[str] = field(default_factory=list)
    updated: dict[str, dict[str, Any]] = field(default_factory=dict)

    def classification_of(self, resource: str) -> Classification | None:
        """Return where ``resource`` was placed, or None if it is not reported."""
        if resource in self.updated:
            return Classification.UPDATED
        if resource in self.new:
            return Classification.NEW
        if resource in self.same:
            return Classification.SAME
        return None

    @property
    def oracle_errors(self) -> list[str]:
        """Resources whose updated entry carries an oracle error."""
        return [name for name, entry in self.updated.items() if AI_ERROR_KEY in entry]

    def to_dict(self) -> dict[str, Any]:
        """Convert to JSON-serializable dictionary."""
        return {
            "new": list(self.new),
            "same": list(self.same),
            "updated": dict(self.updated),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Report":
        return cls(
            new=list(data.get("new", [])),
            same=list(data.get("same", [])),
            updated=dict(data.get("updated", {})),
        )

    def get_summary(self) -> dict[str, Any]:
        """Get summary counts of the classification."""
        return {
            "new_count": len(self.new),
            "same_count": len(self.same),
            "updated_count": len(self.updated),
            "oracle_error_count": len(self.oracle_errors),
        }
