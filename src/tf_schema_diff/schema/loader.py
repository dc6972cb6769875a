"""Loading provider schema documents produced by ``terraform providers schema -json``."""

import json
from pathlib import Path
from typing import Any

from tf_schema_diff.exceptions import SchemaLoadError
from tf_schema_diff.schema.models import AttributeMap
from tf_schema_diff.utils.logging import get_logger

logger = get_logger(__name__)


def load_resources(path: Path | str) -> dict[str, dict[str, Any]]:
    """Load the resource schemas of the first provider in a schema document.

    Only the first entry of ``provider_schemas`` is considered. Every resource
    must carry a ``block``; Terraform omits ``block.attributes`` when a
    resource has none, so an absent attribute map reads as empty.

    Args:
        path: Path to the JSON schema document

    Returns:
        Dict of {resource_name: resource_schema}

    Raises:
        SchemaLoadError: If the file is unreadable or its nesting is malformed
    """
    schema_path = Path(path)

    try:
        with open(schema_path, encoding="utf-8") as f:
            document = json.load(f)
    except OSError as e:
        raise SchemaLoadError(f"cannot read schema document: {e}", str(schema_path)) from e
    except json.JSONDecodeError as e:
        raise SchemaLoadError(f"invalid JSON: {e}", str(schema_path)) from e

    resources = extract_resources(document, str(schema_path))

    logger.info(
        "schema_document_loaded",
        file=str(schema_path),
        resources=len(resources),
    )

    return resources


def extract_resources(document: Any, source: str | None = None) -> dict[str, dict[str, Any]]:
    """Pull ``resource_schemas`` out of an already parsed document."""
    if not isinstance(document, dict):
        raise SchemaLoadError("document root must be an object", source)

    providers = document.get("provider_schemas")
    if not isinstance(providers, dict) or not providers:
        raise SchemaLoadError("missing or empty 'provider_schemas'", source)

    provider_name, provider = next(iter(providers.items()))
    if len(providers) > 1:
        logger.warning(
            "extra_providers_ignored",
            used=provider_name,
            ignored=list(providers)[1:],
        )

    if not isinstance(provider, dict) or not isinstance(provider.get("resource_schemas"), dict):
        raise SchemaLoadError(f"provider '{provider_name}' has no 'resource_schemas'", source)

    resources = provider["resource_schemas"]
    for name, resource in resources.items():
        _validate_resource(name, resource, source)

    return resources


def get_attributes(resource: dict[str, Any]) -> AttributeMap:
    """Return the attribute map of a resource schema entry."""
    return resource["block"].get("attributes", {})


def _validate_resource(name: str, resource: Any, source: str | None) -> None:
    if not isinstance(resource, dict) or not isinstance(resource.get("block"), dict):
        raise SchemaLoadError(f"resource '{name}' has no 'block'", source)
    if not isinstance(resource["block"].get("attributes", {}), dict):
        raise SchemaLoadError(f"resource '{name}' has a malformed 'block.attributes'", source)
