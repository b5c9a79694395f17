from __future__ import annotations

import json
import re
from importlib.resources import files
from typing import TYPE_CHECKING, Any

from .errors import (
    AwsError,
    ConvergenceTimeoutError,
    DeleteFailedError,
    InvalidIdentifierError,
    InvariantError,
    NotFoundError,
    OperationCancelledError,
    TableProviderError,
    UpdateFailedError,
    ValidationError,
)
from .model import Attribute, FieldError, GlobalSecondaryIndex, Projection, TableSpec
from .retry import LONG_RETRY, SHORT_RETRY, RetryProfile, retry_until, wait_until
from .validation import check

if TYPE_CHECKING:
    from .config import ProviderSettings
    from .diff import KeyedDiff, changed_fields, diff_indexes, diff_keyed
    from .provider import TableProvider
    from .runtime import AwsCallMetric, create_boto3_config, create_dynamodb_client, instrument_boto3_client
    from .schema import build_create_table_request
    from .sequencer import UpdateStep, plan_update


def _read_repo_version() -> str:
    try:
        data = json.loads(files(__package__).joinpath("version.json").read_text(encoding="utf-8"))
    except Exception:
        return "0.0.0"

    version = data.get("version")
    return version if isinstance(version, str) and version else "0.0.0"


def _normalize_repo_version(repo_version: str) -> str:
    match = re.match(r"^(\d+\.\d+\.\d+)-rc\.?([0-9]+)$", repo_version)
    if match:
        return f"{match.group(1)}rc{match.group(2)}"
    return repo_version


__repo_version__ = _read_repo_version()
__version__ = _normalize_repo_version(__repo_version__)


def __getattr__(name: str) -> Any:
    if name == "TableProvider":
        from .provider import TableProvider

        return TableProvider
    if name == "ProviderSettings":
        from .config import ProviderSettings

        return ProviderSettings
    if name in {"KeyedDiff", "changed_fields", "diff_indexes", "diff_keyed"}:
        from . import diff

        return getattr(diff, name)
    if name in {"UpdateStep", "plan_update"}:
        from . import sequencer

        return getattr(sequencer, name)
    if name == "build_create_table_request":
        from .schema import build_create_table_request

        return build_create_table_request
    if name in {
        "AwsCallMetric",
        "create_boto3_config",
        "create_dynamodb_client",
        "instrument_boto3_client",
    }:
        from . import runtime

        return getattr(runtime, name)
    raise AttributeError(name)


__all__ = [
    "Attribute",
    "AwsCallMetric",
    "AwsError",
    "build_create_table_request",
    "changed_fields",
    "check",
    "ConvergenceTimeoutError",
    "create_boto3_config",
    "create_dynamodb_client",
    "DeleteFailedError",
    "diff_indexes",
    "diff_keyed",
    "FieldError",
    "GlobalSecondaryIndex",
    "instrument_boto3_client",
    "InvalidIdentifierError",
    "InvariantError",
    "KeyedDiff",
    "LONG_RETRY",
    "NotFoundError",
    "OperationCancelledError",
    "plan_update",
    "Projection",
    "ProviderSettings",
    "retry_until",
    "RetryProfile",
    "SHORT_RETRY",
    "TableProvider",
    "TableProviderError",
    "TableSpec",
    "UpdateFailedError",
    "UpdateStep",
    "ValidationError",
    "wait_until",
    "__repo_version__",
    "__version__",
]
