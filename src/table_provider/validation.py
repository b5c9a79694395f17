from __future__ import annotations

import re

from .errors import ValidationError
from .model import ATTRIBUTE_TYPES, PROJECTION_TYPES, FieldError, TableSpec

MinTableNameLength = 3
MaxTableNameLength = 255
MinAttributeNameLength = 1
MaxAttributeNameLength = 255
MinReadCapacity = 1
MinWriteCapacity = 1
MaxGlobalSecondaryIndexes = 5
# Generated names are name + "-" + at least one hex digit.
MaxNamePrefixLength = MaxTableNameLength - 2

_NAME_PATTERN = re.compile(r"^[a-zA-Z0-9_.-]+$")


def check(spec: TableSpec) -> list[FieldError]:
    """Collect every structural problem with ``spec``; never raises."""
    failures: list[FieldError] = []

    if spec.table_name is not None:
        failures.extend(_check_name("table_name", spec.table_name))
    elif spec.name:
        failures.extend(_check_name_prefix(spec.name))

    if not spec.hash_key:
        failures.append(FieldError("hash_key", "must not be empty"))

    failures.extend(_check_capacity("", spec.read_capacity, spec.write_capacity))

    for i, attr in enumerate(spec.attributes):
        path = f"attributes[{i}]"
        if len(attr.name) < MinAttributeNameLength:
            failures.append(
                FieldError(f"{path}.name", f"less than minimum length of {MinAttributeNameLength}")
            )
        if len(attr.name) > MaxAttributeNameLength:
            failures.append(
                FieldError(f"{path}.name", f"exceeded maximum length of {MaxAttributeNameLength}")
            )
        if attr.type not in ATTRIBUTE_TYPES:
            failures.append(
                FieldError(f"{path}.type", "not one of valid values S (string), N (number) or B (binary)")
            )

    indexes = spec.global_secondary_indexes
    if indexes is not None:
        if len(indexes) > MaxGlobalSecondaryIndexes:
            failures.append(
                FieldError(
                    "global_secondary_indexes",
                    f"more than {MaxGlobalSecondaryIndexes} global secondary indexes requested",
                )
            )

        seen: set[str] = set()
        for i, gsi in enumerate(indexes):
            path = f"global_secondary_indexes[{i}]"
            failures.extend(_check_name(f"{path}.index_name", gsi.index_name))
            if gsi.index_name in seen:
                failures.append(FieldError(f"{path}.index_name", f"duplicate index name {gsi.index_name!r}"))
            seen.add(gsi.index_name)
            failures.extend(_check_capacity(f"{path}.", gsi.read_capacity, gsi.write_capacity))
            if gsi.projection.type not in PROJECTION_TYPES:
                failures.append(
                    FieldError(f"{path}.projection.type", f"not one of {', '.join(PROJECTION_TYPES)}")
                )

    return failures


def validate(spec: TableSpec) -> None:
    failures = check(spec)
    if failures:
        raise ValidationError(
            "invalid table spec: " + "; ".join(str(f) for f in failures),
            failures=failures,
        )


def _check_name(path: str, name: str) -> list[FieldError]:
    failures: list[FieldError] = []
    if len(name) < MinTableNameLength:
        failures.append(FieldError(path, f"less than minimum length of {MinTableNameLength}"))
    if len(name) > MaxTableNameLength:
        failures.append(FieldError(path, f"exceeded maximum length of {MaxTableNameLength}"))
    if name and _NAME_PATTERN.match(name) is None:
        failures.append(FieldError(path, "contains characters outside [a-zA-Z0-9_.-]"))
    return failures


def _check_name_prefix(name: str) -> list[FieldError]:
    failures: list[FieldError] = []
    if len(name) > MaxNamePrefixLength:
        failures.append(
            FieldError("name", f"exceeded maximum length of {MaxNamePrefixLength} for a generated table name")
        )
    if _NAME_PATTERN.match(name) is None:
        failures.append(FieldError("name", "contains characters outside [a-zA-Z0-9_.-]"))
    return failures


def _check_capacity(prefix: str, read_capacity: int, write_capacity: int) -> list[FieldError]:
    failures: list[FieldError] = []
    if read_capacity < MinReadCapacity:
        failures.append(FieldError(f"{prefix}read_capacity", f"less than minimum of {MinReadCapacity}"))
    if write_capacity < MinWriteCapacity:
        failures.append(FieldError(f"{prefix}write_capacity", f"less than minimum of {MinWriteCapacity}"))
    return failures
