from __future__ import annotations

from .errors import InvalidIdentifierError

_ARN_PREFIX = "arn:"
_SERVICE = "dynamodb"
_RESOURCE_TYPE = "table"


def format_table_arn(*, partition: str, region: str, account_id: str, table_name: str) -> str:
    return f"arn:{partition}:{_SERVICE}:{region}:{account_id}:{_RESOURCE_TYPE}/{table_name}"


def parse_resource_name(identifier: str) -> str:
    """Return the table name encoded in a DynamoDB table ARN.

    ``arn:aws:dynamodb:us-east-1:123456789012:table/orders`` yields ``orders``.
    Sub-resource ARNs (``table/orders/stream/...``) are rejected.
    """
    if not isinstance(identifier, str) or not identifier:
        raise InvalidIdentifierError(str(identifier), "empty identifier")
    if not identifier.startswith(_ARN_PREFIX):
        raise InvalidIdentifierError(identifier, "not an ARN")

    parts = identifier.split(":", 5)
    if len(parts) != 6:
        raise InvalidIdentifierError(identifier, "expected 6 colon-separated fields")
    _, partition, service, _region, _account, resource = parts
    if not partition:
        raise InvalidIdentifierError(identifier, "missing partition")
    if service != _SERVICE:
        raise InvalidIdentifierError(identifier, f"unexpected service {service!r}")

    resource_type, sep, name = resource.partition("/")
    if resource_type != _RESOURCE_TYPE or not sep:
        raise InvalidIdentifierError(identifier, "not a table resource")
    if not name or "/" in name:
        raise InvalidIdentifierError(identifier, "missing or malformed table name")
    return name
