from __future__ import annotations

from dataclasses import dataclass, field

HASH_KEY_TYPE = "HASH"
RANGE_KEY_TYPE = "RANGE"

ATTRIBUTE_TYPES = ("S", "N", "B")
PROJECTION_TYPES = ("ALL", "KEYS_ONLY", "INCLUDE")


@dataclass(frozen=True)
class FieldError:
    path: str
    message: str

    def __str__(self) -> str:
        return f"{self.path}: {self.message}"


@dataclass(frozen=True)
class Attribute:
    name: str
    type: str

    @staticmethod
    def string(name: str) -> Attribute:
        return Attribute(name=name, type="S")

    @staticmethod
    def number(name: str) -> Attribute:
        return Attribute(name=name, type="N")

    @staticmethod
    def binary(name: str) -> Attribute:
        return Attribute(name=name, type="B")


@dataclass(frozen=True)
class Projection:
    type: str
    non_key_attributes: tuple[str, ...] = ()

    @staticmethod
    def all() -> Projection:
        return Projection(type="ALL")

    @staticmethod
    def keys_only() -> Projection:
        return Projection(type="KEYS_ONLY")

    @staticmethod
    def include(*non_key_attributes: str) -> Projection:
        return Projection(type="INCLUDE", non_key_attributes=tuple(non_key_attributes))


@dataclass(frozen=True)
class GlobalSecondaryIndex:
    index_name: str
    hash_key: str
    read_capacity: int
    write_capacity: int
    range_key: str | None = None
    projection: Projection = field(default_factory=Projection.all)


@dataclass(frozen=True)
class TableSpec:
    """Desired state of a provisioned-throughput DynamoDB table.

    ``name`` is the logical resource name and only seeds generated table
    names; ``table_name`` pins the remote name explicitly. ``None`` for
    ``global_secondary_indexes`` and an empty tuple are equivalent.
    """

    hash_key: str
    attributes: tuple[Attribute, ...]
    read_capacity: int
    write_capacity: int
    name: str | None = None
    table_name: str | None = None
    range_key: str | None = None
    global_secondary_indexes: tuple[GlobalSecondaryIndex, ...] | None = None

    @property
    def indexes(self) -> tuple[GlobalSecondaryIndex, ...]:
        return self.global_secondary_indexes or ()


def key_schema(hash_key: str, range_key: str | None) -> list[dict[str, str]]:
    schema = [{"AttributeName": hash_key, "KeyType": HASH_KEY_TYPE}]
    if range_key is not None:
        schema.append({"AttributeName": range_key, "KeyType": RANGE_KEY_TYPE})
    return schema


def provisioned_throughput(read_capacity: int, write_capacity: int) -> dict[str, int]:
    return {"ReadCapacityUnits": int(read_capacity), "WriteCapacityUnits": int(write_capacity)}


def attribute_definitions(attributes: tuple[Attribute, ...]) -> list[dict[str, str]]:
    return [{"AttributeName": attr.name, "AttributeType": attr.type} for attr in attributes]


def projection_request(projection: Projection) -> dict[str, object]:
    proj: dict[str, object] = {"ProjectionType": projection.type}
    if projection.non_key_attributes:
        proj["NonKeyAttributes"] = list(projection.non_key_attributes)
    return proj
