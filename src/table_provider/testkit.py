from __future__ import annotations

from collections.abc import Callable

from .mocks import ANY, FakeDynamoDBClient, client_error


def fixed_rand_bytes(seed: bytes) -> Callable[[int], bytes]:
    if not seed:
        raise ValueError("seed must be non-empty")

    def rand(n: int) -> bytes:
        if n < 0:
            raise ValueError("n must be >= 0")
        if n == 0:
            return b""
        repeats = (n + len(seed) - 1) // len(seed)
        return (seed * repeats)[:n]

    return rand


def no_sleep(_: float) -> None:
    return None


def active_table(table_name: str, **extra: object) -> dict[str, object]:
    return {"Table": {"TableName": table_name, "TableStatus": "ACTIVE", **extra}}


__all__ = [
    "ANY",
    "FakeDynamoDBClient",
    "active_table",
    "client_error",
    "fixed_rand_bytes",
    "no_sleep",
]
