from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Any

from botocore.exceptions import ClientError

from .arn import parse_resource_name
from .aws_errors import RESOURCE_NOT_FOUND, error_code, map_client_error
from .errors import InvariantError
from .model import (
    HASH_KEY_TYPE,
    RANGE_KEY_TYPE,
    Attribute,
    GlobalSecondaryIndex,
    Projection,
    TableSpec,
)

ACTIVE = "ACTIVE"


@dataclass(frozen=True)
class TableStatus:
    status: str
    index_statuses: Mapping[str, str]

    @property
    def active(self) -> bool:
        return self.status == ACTIVE and all(s == ACTIVE for s in self.index_statuses.values())


def get(client: Any, identifier: str) -> TableSpec | None:
    """Read the table behind ``identifier``; ``None`` means it does not exist."""
    table_name = parse_resource_name(identifier)
    table = describe(client, table_name)
    if table is None:
        return None
    return from_description(table)


def describe(client: Any, table_name: str) -> Mapping[str, Any] | None:
    try:
        resp = client.describe_table(TableName=table_name)
    except ClientError as err:
        if error_code(err) == RESOURCE_NOT_FOUND:
            return None
        raise map_client_error(err) from err

    table = resp.get("Table")
    if not isinstance(table, Mapping):
        raise InvariantError(f"describe_table({table_name}) returned no table description")
    return table


def describe_status(client: Any, table_name: str) -> TableStatus | None:
    table = describe(client, table_name)
    if table is None:
        return None
    index_statuses = {
        str(gsi.get("IndexName", "")): str(gsi["IndexStatus"])
        for gsi in table.get("GlobalSecondaryIndexes") or ()
        if gsi.get("IndexStatus")
    }
    return TableStatus(status=str(table.get("TableStatus", "")), index_statuses=index_statuses)


def from_description(table: Mapping[str, Any]) -> TableSpec:
    attributes = tuple(
        Attribute(name=str(attr["AttributeName"]), type=str(attr["AttributeType"]))
        for attr in table.get("AttributeDefinitions") or ()
    )
    hash_key, range_key = split_key_schema(table.get("KeySchema") or ())
    read_capacity, write_capacity = _throughput(table)

    indexes: list[GlobalSecondaryIndex] = []
    for gsi in table.get("GlobalSecondaryIndexes") or ():
        gsi_hash, gsi_range = split_key_schema(gsi.get("KeySchema") or ())
        gsi_read, gsi_write = _throughput(gsi)
        proj = gsi.get("Projection") or {}
        indexes.append(
            GlobalSecondaryIndex(
                index_name=str(gsi["IndexName"]),
                hash_key=gsi_hash,
                range_key=gsi_range,
                read_capacity=gsi_read,
                write_capacity=gsi_write,
                projection=Projection(
                    type=str(proj.get("ProjectionType", "ALL")),
                    non_key_attributes=tuple(proj.get("NonKeyAttributes") or ()),
                ),
            )
        )

    return TableSpec(
        table_name=str(table["TableName"]),
        hash_key=hash_key,
        range_key=range_key,
        attributes=attributes,
        read_capacity=read_capacity,
        write_capacity=write_capacity,
        global_secondary_indexes=tuple(indexes) if indexes else None,
    )


def split_key_schema(schema: Sequence[Mapping[str, Any]]) -> tuple[str, str | None]:
    hash_key: str | None = None
    range_key: str | None = None
    for elem in schema:
        key_type = elem.get("KeyType")
        name = str(elem.get("AttributeName", ""))
        if key_type == HASH_KEY_TYPE:
            if hash_key is not None:
                raise InvariantError(f"key schema has more than one {HASH_KEY_TYPE} key")
            hash_key = name
        elif key_type == RANGE_KEY_TYPE:
            if range_key is not None:
                raise InvariantError(f"key schema has more than one {RANGE_KEY_TYPE} key")
            range_key = name
        else:
            raise InvariantError(f"unexpected key schema attribute type: {key_type}")

    if hash_key is None:
        raise InvariantError("expected to discover a hash partition key")
    return hash_key, range_key


def _throughput(desc: Mapping[str, Any]) -> tuple[int, int]:
    tp = desc.get("ProvisionedThroughput") or {}
    return int(tp.get("ReadCapacityUnits", 0)), int(tp.get("WriteCapacityUnits", 0))
