"""Prompt construction for rename inference."""

import json
from textwrap import dedent
from typing import Any

from tf_schema_diff.schema.differ import to_jsonable

RENAME_PROMPT_TEMPLATE = dedent(
    """\
    Here are two Terraform schemas, and I'm trying to understand which properties are created, deleted, and renamed.

    Use the description or schema structure to determine which properties are actually the same, but have been renamed in the new schema.

    Please output JSON that conforms to the following example:
    {{
      "created": ["property1", "property2"],
      "deleted": ["property3", "property4"],
      "renamed": [{{"property5": "property6"}}, {{"property7": "property8"}}]
    }}

    Old schema:
    ```
    {before}
    ```

    New schema:
    ```
    {after}
    ```

    Make sure you ONLY respond with the JSON, with no additional text."""
)


def _dump(attributes: dict[str, Any]) -> str:
    return json.dumps(to_jsonable(attributes), indent=2)


def create_rename_prompt(before: dict[str, Any], after: dict[str, Any]) -> str:
    """Build the rename-inference prompt.

    Args:
        before: Old attributes, already filtered to the deleted names
        after: New attributes, already filtered to the created names

    Returns:
        Prompt text for a single user message
    """
    return RENAME_PROMPT_TEMPLATE.format(before=_dump(before), after=_dump(after))
