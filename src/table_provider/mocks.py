"""A scripted DynamoDB control-plane client for unit tests.

Only the four table calls the provider makes are implemented. Each call
must have been queued with :meth:`FakeDynamoDBClient.expect`, in order;
request dicts are matched partially and :data:`ANY` matches anything.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Any

from botocore.exceptions import ClientError

RequestCheck = Mapping[str, Any] | Callable[[Mapping[str, Any]], None]


class _Wildcard:
    def __repr__(self) -> str:  # pragma: no cover
        return "ANY"


ANY: Any = _Wildcard()


def client_error(code: str, operation: str, message: str = "") -> ClientError:
    return ClientError({"Error": {"Code": code, "Message": message or code}}, operation)


def _mismatch(expected: Any, actual: Any, path: str) -> str | None:
    if expected is ANY:
        return None

    if isinstance(expected, dict):
        if not isinstance(actual, dict):
            return f"{path}: expected dict, got {type(actual).__name__}"
        missing = [k for k in expected if k not in actual]
        if missing:
            return f"{path}: missing key {missing[0]!r}"
        for k, v in expected.items():
            found = _mismatch(v, actual[k], f"{path}.{k}")
            if found:
                return found
        return None

    if isinstance(expected, list):
        if not isinstance(actual, list):
            return f"{path}: expected list, got {type(actual).__name__}"
        if len(expected) != len(actual):
            return f"{path}: expected {len(expected)} items, got {len(actual)}"
        for i, (e, a) in enumerate(zip(expected, actual, strict=True)):
            found = _mismatch(e, a, f"{path}[{i}]")
            if found:
                return found
        return None

    return None if expected == actual else f"{path}: expected {expected!r}, got {actual!r}"


@dataclass(frozen=True)
class ScriptedCall:
    method: str
    check: RequestCheck | None = None
    response: Mapping[str, Any] | None = None
    error: Exception | None = None

    def answer(self, method: str, req: dict[str, Any]) -> dict[str, Any]:
        if method != self.method:
            raise AssertionError(f"expected {self.method}, got {method}")
        if callable(self.check):
            self.check(req)
        elif self.check is not None:
            problem = _mismatch(dict(self.check), req, method)
            if problem:
                raise AssertionError(problem)
        if self.error is not None:
            raise self.error
        return dict(self.response or {})


class FakeDynamoDBClient:
    """Stand-in for ``boto3.client("dynamodb")`` that replays a script.

    ``calls`` records every request, matched or not, as ``(method, kwargs)``.
    """

    def __init__(self) -> None:
        self._script: list[ScriptedCall] = []
        self.calls: list[tuple[str, dict[str, Any]]] = []

    def expect(
        self,
        method: str,
        check: RequestCheck | None = None,
        *,
        response: Mapping[str, Any] | None = None,
        error: Exception | None = None,
    ) -> None:
        self._script.append(ScriptedCall(method=method, check=check, response=response, error=error))

    def expect_status(self, table_name: str, status: str = "ACTIVE", **table: Any) -> None:
        """Queue a ``describe_table`` answering with ``status`` for ``table_name``."""
        self.expect(
            "describe_table",
            {"TableName": table_name},
            response={"Table": {"TableName": table_name, "TableStatus": status, **table}},
        )

    def expect_absent(self, table_name: str) -> None:
        """Queue a ``describe_table`` that fails as if the table did not exist."""
        self.expect(
            "describe_table",
            {"TableName": table_name},
            error=client_error(
                "ResourceNotFoundException",
                "DescribeTable",
                f"Requested resource not found: Table: {table_name}",
            ),
        )

    def assert_no_pending(self) -> None:
        if self._script:
            raise AssertionError(f"pending expected calls: {[c.method for c in self._script]!r}")

    def call_names(self) -> list[str]:
        return [method for method, _ in self.calls]

    def _dispatch(self, method: str, req: dict[str, Any]) -> dict[str, Any]:
        self.calls.append((method, dict(req)))
        if not self._script:
            raise AssertionError(f"unexpected call: {method}")
        return self._script.pop(0).answer(method, req)

    def create_table(self, **kwargs: Any) -> dict[str, Any]:
        return self._dispatch("create_table", kwargs)

    def describe_table(self, **kwargs: Any) -> dict[str, Any]:
        return self._dispatch("describe_table", kwargs)

    def update_table(self, **kwargs: Any) -> dict[str, Any]:
        return self._dispatch("update_table", kwargs)

    def delete_table(self, **kwargs: Any) -> dict[str, Any]:
        return self._dispatch("delete_table", kwargs)
