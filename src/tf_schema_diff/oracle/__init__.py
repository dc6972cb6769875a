"""Semantic oracle integration for rename inference."""

from tf_schema_diff.oracle.anthropic_client import AnthropicOracle
from tf_schema_diff.oracle.base import SemanticOracle
from tf_schema_diff.oracle.gateway import RenameInferenceGateway, parse_oracle_response

__all__ = [
    "AnthropicOracle",
    "RenameInferenceGateway",
    "SemanticOracle",
    "parse_oracle_response",
]
