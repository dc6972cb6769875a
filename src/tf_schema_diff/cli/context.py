"""
CLI context for tf-schema-diff.

This module provides the context object passed to the command, holding the
configuration (with command-line overrides applied) and building the oracle
and classifier for a run.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from tf_schema_diff.config import DiffConfig, load_config
from tf_schema_diff.oracle.anthropic_client import AnthropicOracle
from tf_schema_diff.oracle.gateway import RenameInferenceGateway
from tf_schema_diff.schema.classifier import SchemaClassifier
from tf_schema_diff.schema.models import Report
from tf_schema_diff.utils.logging import get_logger

logger = get_logger(__name__)


@dataclass
class DiffContext:
    """
    Context object for the CLI command.

    Attributes:
        config_path: Path to an optional YAML configuration file
        output: Report path overriding ``output.path``
        model: Model identifier overriding ``oracle.model``
        keep_going: Record oracle failures instead of aborting
    """

    config_path: Path | None = None
    output: Path | None = None
    model: str | None = None
    keep_going: bool = False

    _config: DiffConfig | None = field(default=None, init=False, repr=False)

    @property
    def config(self) -> DiffConfig:
        """Get or load the configuration with command-line overrides applied."""
        if self._config is None:
            config = load_config(self.config_path)

            if self.output is not None:
                config.output.path = str(self.output)
            if self.model:
                config.oracle.model = self.model
            if self.keep_going:
                config.oracle.on_error = "record"

            self._config = config

        return self._config

    async def classify(
        self,
        before_resources: dict[str, dict[str, Any]],
        after_resources: dict[str, dict[str, Any]],
    ) -> Report:
        """Run the classification with a freshly constructed oracle client."""
        config = self.config

        async with AnthropicOracle(config.oracle) as oracle:
            classifier = SchemaClassifier(
                RenameInferenceGateway(oracle),
                record_oracle_errors=config.oracle.on_error == "record",
            )
            return await classifier.classify(before_resources, after_resources)
