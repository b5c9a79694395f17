from __future__ import annotations

import pytest

from table_provider import TableProvider
from table_provider.config import ProviderSettings
from table_provider.retry import RetryProfile
from table_provider.runtime import (
    AwsCallMetric,
    create_boto3_config,
    create_dynamodb_client,
    instrument_boto3_client,
)
from table_provider.testkit import FakeDynamoDBClient


class FakeSession:
    def __init__(self) -> None:
        self.calls: list[tuple[str, dict[str, object]]] = []
        self.client_obj = FakeDynamoDBClient()

    def client(self, service_name: str, **kwargs: object) -> object:
        self.calls.append((service_name, kwargs))
        return self.client_obj


def test_create_boto3_config() -> None:
    cfg = create_boto3_config(connect_timeout=2.0, read_timeout=4.0, max_attempts=3)
    assert cfg.connect_timeout == 2.0
    assert cfg.read_timeout == 4.0
    assert cfg.retries["max_attempts"] == 3


def test_instrument_boto3_client_records_calls() -> None:
    metrics: list[AwsCallMetric] = []

    client = FakeDynamoDBClient()
    client.expect("describe_table", response={})
    client.expect("delete_table", error=RuntimeError("boom"))
    wrapped = instrument_boto3_client(client, service="dynamodb", on_call=metrics.append)

    wrapped.describe_table(TableName="t")
    with pytest.raises(RuntimeError, match="boom"):
        wrapped.delete_table(TableName="t")

    assert [(m.operation, m.ok) for m in metrics] == [("describe_table", True), ("delete_table", False)]
    assert all(m.service == "dynamodb" and m.seconds >= 0 for m in metrics)
    assert wrapped.calls is client.calls


def test_create_dynamodb_client_passes_settings_to_session() -> None:
    sess = FakeSession()
    settings = ProviderSettings(region="us-east-1", endpoint_url="http://localhost:8000", read_timeout=9.0)

    client = create_dynamodb_client(settings, session=sess)

    assert client is sess.client_obj
    service, kwargs = sess.calls[0]
    assert service == "dynamodb"
    assert kwargs["region_name"] == "us-east-1"
    assert kwargs["endpoint_url"] == "http://localhost:8000"
    assert kwargs["config"].read_timeout == 9.0


def test_create_dynamodb_client_can_instrument() -> None:
    sess = FakeSession()
    metrics: list[AwsCallMetric] = []
    sess.client_obj.expect("describe_table", response={})

    client = create_dynamodb_client(ProviderSettings(), session=sess, metrics=metrics.append)
    client.describe_table(TableName="t")

    assert len(metrics) == 1


def test_provider_from_settings_uses_configured_profiles() -> None:
    sess = FakeSession()
    short = RetryProfile(attempts=2, interval_seconds=0)
    settings = ProviderSettings(short_retry=short, long_retry=RetryProfile(attempts=1, interval_seconds=0))
    sess.client_obj.expect("delete_table", error=RuntimeError("denied"))

    provider = TableProvider.from_settings(settings, session=sess)

    with pytest.raises(RuntimeError, match="denied"):
        provider.delete("arn:aws:dynamodb:us-east-1:1:table/orders")
    sess.client_obj.assert_no_pending()
