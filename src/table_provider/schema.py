from __future__ import annotations

from typing import Any

from .model import (
    TableSpec,
    attribute_definitions,
    key_schema,
    projection_request,
    provisioned_throughput,
)


def build_create_table_request(spec: TableSpec, *, table_name: str) -> dict[str, Any]:
    if not table_name:
        raise ValueError("table_name is required")

    req: dict[str, Any] = {
        "TableName": table_name,
        "AttributeDefinitions": attribute_definitions(spec.attributes),
        "KeySchema": key_schema(spec.hash_key, spec.range_key),
        "ProvisionedThroughput": provisioned_throughput(spec.read_capacity, spec.write_capacity),
    }

    gsis: list[dict[str, Any]] = []
    for gsi in spec.indexes:
        gsis.append(
            {
                "IndexName": gsi.index_name,
                "KeySchema": key_schema(gsi.hash_key, gsi.range_key),
                "ProvisionedThroughput": provisioned_throughput(gsi.read_capacity, gsi.write_capacity),
                "Projection": projection_request(gsi.projection),
            }
        )
    if gsis:
        req["GlobalSecondaryIndexes"] = gsis

    return req
