from __future__ import annotations

import logging
import os
import uuid
from dataclasses import replace

from table_provider import Attribute, GlobalSecondaryIndex, Projection, RetryProfile, TableProvider, TableSpec
from table_provider.config import ProviderSettings


def _settings() -> ProviderSettings:
    os.environ.setdefault("AWS_ACCESS_KEY_ID", "dummy")
    os.environ.setdefault("AWS_SECRET_ACCESS_KEY", "dummy")
    return ProviderSettings(
        region=os.environ.get("AWS_REGION", "us-east-1"),
        endpoint_url=os.environ.get("DYNAMODB_ENDPOINT", "http://localhost:8000"),
        short_retry=RetryProfile(attempts=10, interval_seconds=0.5),
        long_retry=RetryProfile(attempts=120, interval_seconds=0.5),
    )


def main() -> None:
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")
    provider = TableProvider.from_settings(_settings())

    spec = TableSpec(
        name=f"orders_{uuid.uuid4().hex[:8]}",
        hash_key="id",
        attributes=(Attribute.string("id"), Attribute.string("email")),
        read_capacity=5,
        write_capacity=5,
    )
    print("check:", provider.check(spec))

    identifier = provider.create(spec)
    print("created:", identifier)

    try:
        bigger = replace(
            spec,
            read_capacity=10,
            write_capacity=10,
            global_secondary_indexes=(
                GlobalSecondaryIndex(
                    index_name="by-email",
                    hash_key="email",
                    read_capacity=5,
                    write_capacity=5,
                    projection=Projection.keys_only(),
                ),
            ),
        )
        provider.update(identifier, spec, bigger)
        print("after update:", provider.get(identifier))
    finally:
        provider.delete(identifier)

    print("after delete:", provider.get(identifier))


if __name__ == "__main__":
    main()
