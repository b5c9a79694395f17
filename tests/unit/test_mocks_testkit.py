from __future__ import annotations

import pytest
from botocore.exceptions import ClientError

from table_provider.mocks import ANY, FakeDynamoDBClient
from table_provider.testkit import active_table, client_error, fixed_rand_bytes, no_sleep


def test_fake_dynamodb_client_asserts_pending_calls() -> None:
    client = FakeDynamoDBClient()
    client.expect("describe_table")
    with pytest.raises(AssertionError, match="pending expected calls"):
        client.assert_no_pending()


def test_fake_dynamodb_client_rejects_unexpected_calls() -> None:
    client = FakeDynamoDBClient()
    with pytest.raises(AssertionError, match="unexpected call: describe_table"):
        client.describe_table(TableName="t")


def test_fake_dynamodb_client_rejects_wrong_method_order() -> None:
    client = FakeDynamoDBClient()
    client.expect("delete_table")
    with pytest.raises(AssertionError, match="expected delete_table, got update_table"):
        client.update_table(TableName="t")


@pytest.mark.parametrize(
    ("expected", "req", "match"),
    [
        ({"a": 1}, {"a": 2}, "expected 1"),
        ({"a": 1}, {}, "missing key"),
        ({"a": {"b": 1}}, {"a": "nope"}, "expected dict"),
        ({"a": [1]}, {"a": "nope"}, "expected list"),
        ({"a": [1, 2]}, {"a": [1]}, "expected 2 items"),
        ({"a": [1]}, {"a": [2]}, "expected 1"),
    ],
)
def test_fake_dynamodb_client_strict_matching(expected: dict, req: dict, match: str) -> None:
    client = FakeDynamoDBClient()
    client.expect("create_table", expected)
    with pytest.raises(AssertionError, match=match):
        client.create_table(**req)


def test_fake_dynamodb_client_any_and_injected_errors() -> None:
    client = FakeDynamoDBClient()
    client.expect("create_table", {"TableName": ANY}, response={"ok": True})
    client.expect("describe_table", error=client_error("ResourceNotFoundException", "DescribeTable"))

    assert client.create_table(TableName="t") == {"ok": True}
    with pytest.raises(Exception, match="ResourceNotFoundException"):
        client.describe_table(TableName="t")
    assert client.call_names() == ["create_table", "describe_table"]


def test_testkit_helpers() -> None:
    rand = fixed_rand_bytes(b"ab")
    assert rand(0) == b""
    assert rand(5) == b"ababa"
    with pytest.raises(ValueError):
        fixed_rand_bytes(b"")
    assert no_sleep(1.0) is None
    assert active_table("t", TableArn="x") == {
        "Table": {"TableName": "t", "TableStatus": "ACTIVE", "TableArn": "x"}
    }
    assert client_error("X", "Op").response["Error"] == {"Code": "X", "Message": "X"}


def test_fake_dynamodb_client_describe_helpers() -> None:
    client = FakeDynamoDBClient()
    client.expect_status("orders", "UPDATING", TableArn="arn")
    client.expect_absent("orders")

    assert client.describe_table(TableName="orders") == {
        "Table": {"TableName": "orders", "TableStatus": "UPDATING", "TableArn": "arn"}
    }
    with pytest.raises(ClientError) as exc:
        client.describe_table(TableName="orders")
    assert exc.value.response["Error"]["Code"] == "ResourceNotFoundException"
    client.assert_no_pending()


def test_fake_dynamodb_client_describe_helpers_match_table_name() -> None:
    client = FakeDynamoDBClient()
    client.expect_absent("orders")
    with pytest.raises(AssertionError, match="describe_table.TableName: expected 'orders', got 'other'"):
        client.describe_table(TableName="other")
