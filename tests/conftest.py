"""Shared fixtures: schema documents and a deterministic oracle."""

from __future__ import annotations

import json
import os
from collections.abc import Callable, Iterable
from pathlib import Path
from typing import Any

import pytest

PROVIDER = "registry.terraform.io/hashicorp/example"


class StubOracle:
    """In-memory SemanticOracle returning canned answers in order.

    An answer that is an exception instance is raised instead of returned.
    The last answer repeats once the list is exhausted.
    """

    def __init__(self, *answers: str | Exception) -> None:
        self.answers = list(answers) or ['{"created": [], "deleted": [], "renamed": []}']
        self.prompts: list[str] = []

    async def complete(self, prompt: str) -> str:
        self.prompts.append(prompt)
        index = min(len(self.prompts), len(self.answers)) - 1
        answer = self.answers[index]
        if isinstance(answer, Exception):
            raise answer
        return answer


def attribute(name: str) -> dict[str, Any]:
    return {"type": "string", "description": f"The {name.replace('_', ' ')}.", "optional": True}


def build_document(resources: dict[str, Iterable[str]]) -> dict[str, Any]:
    return {
        "format_version": "1.0",
        "provider_schemas": {
            PROVIDER: {
                "provider": {"version": 0, "block": {}},
                "resource_schemas": {
                    name: {
                        "version": 0,
                        "block": {"attributes": {attr: attribute(attr) for attr in attrs}},
                    }
                    for name, attrs in resources.items()
                },
            }
        },
    }


@pytest.fixture
def make_oracle() -> Callable[..., StubOracle]:
    return StubOracle


@pytest.fixture
def make_resources() -> Callable[[dict[str, Iterable[str]]], dict[str, Any]]:
    """Build a ``resource_schemas`` mapping from {resource: [attribute names]}."""

    def _make(resources: dict[str, Iterable[str]]) -> dict[str, Any]:
        return build_document(resources)["provider_schemas"][PROVIDER]["resource_schemas"]

    return _make


@pytest.fixture
def write_document(tmp_path: Path) -> Callable[[str, dict[str, Iterable[str]]], Path]:
    """Write a schema document to ``tmp_path`` and return its path."""

    def _write(filename: str, resources: dict[str, Iterable[str]]) -> Path:
        path = tmp_path / filename
        path.write_text(json.dumps(build_document(resources)), encoding="utf-8")
        return path

    return _write


@pytest.fixture(autouse=True)
def _isolate_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ("CLAUDE_API_KEY", "ANTHROPIC_API_KEY"):
        monkeypatch.delenv(name, raising=False)
    for name in list(os.environ):
        if name.upper().startswith("TF_SCHEMA_DIFF_"):
            monkeypatch.delenv(name, raising=False)
