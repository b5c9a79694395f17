from __future__ import annotations

import os
import uuid
from dataclasses import replace

import pytest

from table_provider import Attribute, GlobalSecondaryIndex, Projection, RetryProfile, TableProvider, TableSpec
from table_provider.config import ProviderSettings

pytestmark = [
    pytest.mark.integration,
    pytest.mark.skipif(not os.environ.get("DYNAMODB_ENDPOINT"), reason="DYNAMODB_ENDPOINT is not set"),
]


@pytest.fixture()
def provider(monkeypatch: pytest.MonkeyPatch) -> TableProvider:
    monkeypatch.setenv("AWS_ACCESS_KEY_ID", os.environ.get("AWS_ACCESS_KEY_ID", "dummy"))
    monkeypatch.setenv("AWS_SECRET_ACCESS_KEY", os.environ.get("AWS_SECRET_ACCESS_KEY", "dummy"))
    settings = ProviderSettings(
        region=os.environ.get("AWS_REGION", "us-east-1"),
        endpoint_url=os.environ["DYNAMODB_ENDPOINT"],
        short_retry=RetryProfile(attempts=10, interval_seconds=0.2),
        long_retry=RetryProfile(attempts=100, interval_seconds=0.2),
    )
    return TableProvider.from_settings(settings)


def test_table_lifecycle(provider: TableProvider) -> None:
    spec = TableSpec(
        name=f"table_provider_it_{uuid.uuid4().hex[:8]}",
        hash_key="id",
        attributes=(Attribute.string("id"), Attribute.string("email")),
        read_capacity=1,
        write_capacity=1,
    )

    identifier = provider.create(spec)
    try:
        current = provider.get(identifier)
        assert current is not None
        assert current.hash_key == "id"
        assert current.read_capacity == 1

        desired = replace(
            current,
            read_capacity=2,
            global_secondary_indexes=(
                GlobalSecondaryIndex(
                    index_name="by-email",
                    hash_key="email",
                    read_capacity=1,
                    write_capacity=1,
                    projection=Projection.keys_only(),
                ),
            ),
            attributes=spec.attributes,
        )
        provider.update(identifier, current, desired)

        updated = provider.get(identifier)
        assert updated is not None
        assert updated.read_capacity == 2
        assert [g.index_name for g in updated.indexes] == ["by-email"]
    finally:
        provider.delete(identifier)

    assert provider.get(identifier) is None
