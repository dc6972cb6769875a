"""Interface of the semantic oracle consulted for rename inference."""

from typing import Protocol, runtime_checkable


@runtime_checkable
class SemanticOracle(Protocol):
    """Text-in, text-out reasoning service.

    Implementations own their transport and retry policy. They raise
    :class:`~tf_schema_diff.exceptions.OracleError` when a prompt cannot be
    answered at all; any text they do return is untrusted.
    """

    async def complete(self, prompt: str) -> str:
        """Return the oracle's free-text answer to ``prompt``."""
        ...
