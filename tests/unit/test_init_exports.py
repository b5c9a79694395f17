from __future__ import annotations

import pytest

import table_provider


def test_init_exposes_lazy_exports_via_getattr() -> None:
    assert callable(table_provider.TableProvider)
    assert callable(table_provider.ProviderSettings)
    assert callable(table_provider.diff_indexes)
    assert callable(table_provider.plan_update)
    assert callable(table_provider.build_create_table_request)
    assert callable(table_provider.create_dynamodb_client)


def test_init_all_names_resolve() -> None:
    for name in table_provider.__all__:
        assert getattr(table_provider, name) is not None


def test_init_unknown_attribute() -> None:
    with pytest.raises(AttributeError):
        table_provider.does_not_exist  # noqa: B018
