"""Classification driver tests."""

from __future__ import annotations

import asyncio
import json

import pytest
from tf_schema_diff.exceptions import ResourceNotFoundError, ServerError
from tf_schema_diff.oracle.gateway import RenameInferenceGateway
from tf_schema_diff.schema.classifier import SchemaClassifier, inspect_resource
from tf_schema_diff.schema.differ import MISSING
from tf_schema_diff.schema.models import Classification

RENAME_ANSWER = '{"created":["z"],"deleted":["y"],"renamed":[{"y":"z"}]}'


def _classify(oracle, before, after, record_oracle_errors=False):
    classifier = SchemaClassifier(
        RenameInferenceGateway(oracle), record_oracle_errors=record_oracle_errors
    )
    return asyncio.run(classifier.classify(before, after))


def test_new_and_unchanged_resources(make_oracle, make_resources) -> None:
    oracle = make_oracle()
    report = _classify(
        oracle,
        make_resources({"a": ["x", "y"]}),
        make_resources({"a": ["x", "y"], "b": ["z"]}),
    )

    assert report.new == ["b"]
    assert report.same == ["a"]
    assert report.updated == {}
    assert oracle.prompts == []


def test_removed_attribute_is_updated_without_oracle(make_oracle, make_resources) -> None:
    oracle = make_oracle()
    report = _classify(
        oracle,
        make_resources({"a": ["x", "y", "z"]}),
        make_resources({"a": ["x", "y"]}),
    )

    assert report.updated == {"a": {"created": [], "deleted": ["z"], "renamed": []}}
    assert oracle.prompts == []


def test_added_attribute_is_updated_without_oracle(make_oracle, make_resources) -> None:
    oracle = make_oracle()
    report = _classify(
        oracle,
        make_resources({"a": ["x"]}),
        make_resources({"a": ["x", "w"]}),
    )

    assert report.updated == {"a": {"created": ["w"], "deleted": [], "renamed": []}}
    assert oracle.prompts == []


def test_two_sided_change_uses_oracle_answer_verbatim(make_oracle, make_resources) -> None:
    oracle = make_oracle(RENAME_ANSWER)
    report = _classify(
        oracle,
        make_resources({"a": ["x", "y"]}),
        make_resources({"a": ["x", "z"]}),
    )

    assert report.updated["a"] == json.loads(RENAME_ANSWER)
    assert len(oracle.prompts) == 1


def test_oracle_sees_only_deleted_and_created_attributes(make_oracle, make_resources) -> None:
    oracle = make_oracle(RENAME_ANSWER)
    _classify(
        oracle,
        make_resources({"a": ["x", "y"]}),
        make_resources({"a": ["x", "z"]}),
    )

    prompt = oracle.prompts[0]
    old_part, new_part = prompt.split("New schema:")
    assert '"y"' in old_part and '"z"' not in old_part.split("Old schema:")[1]
    assert '"z"' in new_part and '"y"' not in new_part
    assert '"x"' not in prompt


def test_unparseable_answer_is_recorded_and_run_continues(make_oracle, make_resources) -> None:
    oracle = make_oracle("I'm not sure", RENAME_ANSWER)
    report = _classify(
        oracle,
        make_resources({"a": ["x", "y"], "b": ["x", "y"], "c": ["q"]}),
        make_resources({"a": ["x", "z"], "b": ["x", "z"], "c": ["q"], "d": []}),
    )

    assert report.updated["a"] == {"ai_error": "I'm not sure"}
    assert report.updated["b"] == json.loads(RENAME_ANSWER)
    assert report.same == ["c"]
    assert report.new == ["d"]


def test_removed_resource_is_not_reported(make_oracle, make_resources) -> None:
    report = _classify(
        make_oracle(),
        make_resources({"a": ["x"], "gone": ["x"]}),
        make_resources({"a": ["x"]}),
    )

    assert report.classification_of("gone") is None
    assert "gone" not in report.to_dict()["updated"]
    assert report.same == ["a"]


def test_each_resource_lands_in_exactly_one_bucket(make_oracle, make_resources) -> None:
    after = make_resources({"n": ["x"], "s": ["x"], "u": ["x", "y"], "r": ["x", "z"]})
    report = _classify(
        make_oracle(RENAME_ANSWER),
        make_resources({"s": ["x"], "u": ["x"], "r": ["x", "y"]}),
        after,
    )

    buckets = report.new + report.same + list(report.updated)
    assert sorted(buckets) == sorted(after)
    assert report.classification_of("n") is Classification.NEW
    assert report.classification_of("s") is Classification.SAME
    assert report.classification_of("u") is Classification.UPDATED
    assert report.classification_of("r") is Classification.UPDATED


def test_classification_is_repeatable_with_deterministic_oracle(
    make_oracle, make_resources
) -> None:
    before = make_resources({"a": ["x", "y"], "b": ["x"], "c": ["x", "y", "z"]})
    after = make_resources({"a": ["x", "z"], "b": ["x"], "c": ["x"], "d": ["x"]})

    first = _classify(make_oracle(RENAME_ANSWER), before, after)
    second = _classify(make_oracle(RENAME_ANSWER), before, after)

    assert first.to_dict() == second.to_dict()


def test_oracle_failure_aborts_by_default(make_oracle, make_resources) -> None:
    oracle = make_oracle(ServerError("overloaded", status_code=529))

    with pytest.raises(ServerError):
        _classify(
            oracle,
            make_resources({"a": ["x", "y"]}),
            make_resources({"a": ["x", "z"]}),
        )


def test_oracle_failure_can_be_recorded(make_oracle, make_resources) -> None:
    oracle = make_oracle(ServerError("overloaded", status_code=529), RENAME_ANSWER)
    report = _classify(
        oracle,
        make_resources({"a": ["x", "y"], "b": ["x", "y"]}),
        make_resources({"a": ["x", "z"], "b": ["x", "z"]}),
        record_oracle_errors=True,
    )

    assert "overloaded" in report.updated["a"]["ai_error"]
    assert report.updated["b"] == json.loads(RENAME_ANSWER)
    assert report.oracle_errors == ["a"]


def test_inspect_resource_returns_filtered_maps(make_resources) -> None:
    before = make_resources({"a": ["x", "y"]})
    after = make_resources({"a": ["x", "z"]})

    filtered_before, filtered_after = inspect_resource(before, after, "a")

    assert list(filtered_before) == ["y"]
    assert list(filtered_after) == ["z"]
    assert filtered_before["y"] is before["a"]["block"]["attributes"]["y"]
    assert MISSING not in filtered_after.values()


def test_inspect_new_resource_compares_against_empty_map(make_resources) -> None:
    filtered_before, filtered_after = inspect_resource(
        make_resources({}), make_resources({"b": ["z", "w"]}), "b"
    )

    assert filtered_before == {}
    assert list(filtered_after) == ["z", "w"]


def test_inspect_unknown_resource_raises(make_resources) -> None:
    with pytest.raises(ResourceNotFoundError):
        inspect_resource(make_resources({"a": ["x"]}), make_resources({"a": ["x"]}), "nope")
