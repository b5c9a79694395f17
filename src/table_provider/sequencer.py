"""Ordering of ``UpdateTable`` calls.

DynamoDB accepts one structural change per ``UpdateTable`` call and rejects a
new one while the previous is still being applied: throughput, then each
index creation, each index throughput change, each index deletion. The plan
is a flat list; the provider submits one step and waits for the table to be
ACTIVE again before moving on.
"""

from __future__ import annotations

from collections.abc import Collection
from dataclasses import dataclass
from typing import Any, Literal

from .diff import diff_indexes
from .model import (
    TableSpec,
    attribute_definitions,
    key_schema,
    projection_request,
    provisioned_throughput,
)

THROUGHPUT_FIELDS = frozenset({"read_capacity", "write_capacity"})
INDEX_FIELD = "global_secondary_indexes"
REPLACEMENT_FIELDS = frozenset({"table_name", "hash_key", "range_key"})

StepKind = Literal["throughput", "create_index", "update_index", "delete_index"]


@dataclass(frozen=True)
class UpdateStep:
    kind: StepKind
    description: str
    request: dict[str, Any]


def plan_update(
    table_name: str,
    old: TableSpec,
    new: TableSpec,
    changed: Collection[str],
) -> list[UpdateStep]:
    steps: list[UpdateStep] = []

    if THROUGHPUT_FIELDS & set(changed):
        steps.append(
            UpdateStep(
                kind="throughput",
                description=f"update provisioned capacity to {new.read_capacity}/{new.write_capacity}",
                request={
                    "TableName": table_name,
                    "ProvisionedThroughput": provisioned_throughput(new.read_capacity, new.write_capacity),
                },
            )
        )

    if INDEX_FIELD not in changed:
        return steps

    d = diff_indexes(old, new)

    # Index creation must redeclare every attribute the new key schema uses.
    for gsi in d.adds:
        steps.append(
            UpdateStep(
                kind="create_index",
                description=f"add global secondary index {gsi.index_name}",
                request={
                    "TableName": table_name,
                    "AttributeDefinitions": attribute_definitions(new.attributes),
                    "GlobalSecondaryIndexUpdates": [
                        {
                            "Create": {
                                "IndexName": gsi.index_name,
                                "KeySchema": key_schema(gsi.hash_key, gsi.range_key),
                                "ProvisionedThroughput": provisioned_throughput(
                                    gsi.read_capacity, gsi.write_capacity
                                ),
                                "Projection": projection_request(gsi.projection),
                            }
                        }
                    ],
                },
            )
        )

    for gsi in d.updates:
        steps.append(
            UpdateStep(
                kind="update_index",
                description=f"update capacity of global secondary index {gsi.index_name}",
                request={
                    "TableName": table_name,
                    "GlobalSecondaryIndexUpdates": [
                        {
                            "Update": {
                                "IndexName": gsi.index_name,
                                "ProvisionedThroughput": provisioned_throughput(
                                    gsi.read_capacity, gsi.write_capacity
                                ),
                            }
                        }
                    ],
                },
            )
        )

    for gsi in d.deletes:
        steps.append(
            UpdateStep(
                kind="delete_index",
                description=f"delete global secondary index {gsi.index_name}",
                request={
                    "TableName": table_name,
                    "GlobalSecondaryIndexUpdates": [{"Delete": {"IndexName": gsi.index_name}}],
                },
            )
        )

    return steps


def replacement_fields(old: TableSpec, new: TableSpec, changed: Collection[str]) -> list[str]:
    """Changed fields that ``UpdateTable`` cannot apply in place."""
    out: list[str] = []
    for name in sorted(REPLACEMENT_FIELDS & set(changed)):
        if name == "table_name" and new.table_name is None:
            # dropping an explicit name keeps the existing remote name
            continue
        if getattr(old, name) != getattr(new, name):
            out.append(name)
    return out
