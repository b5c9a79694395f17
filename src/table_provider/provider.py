from __future__ import annotations

import logging
import threading
from collections.abc import Callable, Collection
from typing import Any

from botocore.exceptions import ClientError

from . import state
from .arn import parse_resource_name
from .aws_errors import (
    LIMIT_EXCEEDED,
    RESOURCE_IN_USE,
    RESOURCE_NOT_FOUND,
    error_code,
    error_message,
    map_client_error,
)
from .config import ProviderSettings
from .diff import changed_fields
from .errors import DeleteFailedError, InvariantError, UpdateFailedError, ValidationError
from .model import FieldError, TableSpec
from .naming import MAX_TABLE_NAME_LENGTH, new_unique_name
from .retry import RetryProfile, retry_until, wait_until
from .schema import build_create_table_request
from .sequencer import UpdateStep, plan_update, replacement_fields
from .validation import check, validate

logger = logging.getLogger(__name__)


class TableProvider:
    """Create/read/update/delete for one DynamoDB table at a time.

    Every mutation ends with a wait until DynamoDB reports the table ACTIVE
    (or gone, for delete). ``update`` applies its steps one at a time and
    does not roll back: when a step fails, the earlier steps stay applied.
    Read the table back with :meth:`get` and call :meth:`update` again with
    that as ``old`` to finish the remaining steps.

    Waits block in real time unless ``sleep`` is injected. With ``cancel``
    and no ``sleep``, setting the event ends a wait early.
    """

    def __init__(
        self,
        *,
        client: Any,
        short_retry: RetryProfile | None = None,
        long_retry: RetryProfile | None = None,
        sleep: Callable[[float], None] | None = None,
        cancel: threading.Event | None = None,
        deadline: float | None = None,
        rand_bytes: Callable[[int], bytes] | None = None,
    ) -> None:
        if client is None:
            raise ValueError("client is required")

        defaults = ProviderSettings()
        self._client = client
        self._short_retry = short_retry or defaults.short_retry
        self._long_retry = long_retry or defaults.long_retry
        self._sleep = sleep
        self._cancel = cancel
        self._deadline = deadline
        self._rand_bytes = rand_bytes

    @classmethod
    def from_settings(
        cls,
        settings: ProviderSettings | None = None,
        *,
        session: Any | None = None,
        cancel: threading.Event | None = None,
    ) -> TableProvider:
        from .runtime import create_dynamodb_client

        settings = settings or ProviderSettings.from_env()
        return cls(
            client=create_dynamodb_client(settings, session=session),
            short_retry=settings.short_retry,
            long_retry=settings.long_retry,
            cancel=cancel,
        )

    def check(self, spec: TableSpec) -> list[FieldError]:
        return check(spec)

    def get(self, identifier: str) -> TableSpec | None:
        return state.get(self._client, identifier)

    def create(self, spec: TableSpec) -> str:
        validate(spec)
        table_name = self._resolve_table_name(spec)
        req = build_create_table_request(spec, table_name=table_name)

        logger.info("creating DynamoDB table %r with name %r", spec.name, table_name)
        resp = self._submit_create(req)

        description = resp.get("TableDescription") or {}
        arn = description.get("TableArn")
        if not arn:
            raise InvariantError(f"create_table({table_name}) response is missing TableDescription.TableArn")

        logger.info("DynamoDB table %s created; waiting for it to become active", table_name)
        self._wait_for_table(table_name, exist=True)
        return str(arn)

    def update(
        self,
        identifier: str,
        old: TableSpec,
        new: TableSpec,
        changed: Collection[str] | None = None,
    ) -> None:
        table_name = parse_resource_name(identifier)
        validate(new)

        if changed is None:
            changed = changed_fields(old, new)
        replaced = replacement_fields(old, new, changed)
        if replaced:
            raise ValidationError(
                f"cannot update {', '.join(replaced)} in place; the table must be replaced",
                failures=[FieldError(name, "requires replacement") for name in replaced],
            )

        steps = plan_update(table_name, old, new, changed)
        if not steps:
            logger.debug("no update steps needed for DynamoDB table %s", table_name)
            return

        for i, step in enumerate(steps, start=1):
            logger.info("DynamoDB table %s: step %d/%d: %s", table_name, i, len(steps), step.description)
            self._apply_step(table_name, step)

    def delete(self, identifier: str) -> None:
        table_name = parse_resource_name(identifier)

        logger.info("deleting DynamoDB table %s", table_name)

        def attempt() -> bool:
            try:
                self._client.delete_table(TableName=table_name)
            except ClientError as err:
                code = error_code(err)
                if code == RESOURCE_NOT_FOUND:
                    return True
                if code == RESOURCE_IN_USE:
                    logger.warning("waiting to delete DynamoDB table %s: %s", table_name, error_message(err))
                    return False
                raise map_client_error(err) from err
            return True

        if not self._retry(attempt, self._short_retry):
            raise DeleteFailedError(resource=table_name)

        logger.info("DynamoDB table %s delete request submitted; waiting for it to delete", table_name)
        self._wait_for_table(table_name, exist=False)

    def replacement_fields(self, old: TableSpec, new: TableSpec) -> list[str]:
        return replacement_fields(old, new, changed_fields(old, new))

    def _resolve_table_name(self, spec: TableSpec) -> str:
        if spec.table_name is not None:
            return spec.table_name
        if not spec.name:
            raise ValidationError(
                "either name or table_name is required",
                failures=[FieldError("name", "required when table_name is not set")],
            )
        return new_unique_name(spec.name + "-", max_length=MAX_TABLE_NAME_LENGTH, rand_bytes=self._rand_bytes)

    def _submit_create(self, req: dict[str, Any]) -> dict[str, Any]:
        # A throttled CreateTable was rejected outright, so it is the only error worth retrying.
        result: dict[str, Any] = {}
        throttled: list[ClientError] = []

        def attempt() -> bool:
            try:
                result.update(self._client.create_table(**req))
            except ClientError as err:
                if error_code(err) == LIMIT_EXCEEDED:
                    logger.warning(
                        "waiting to create DynamoDB table %s: %s", req["TableName"], error_message(err)
                    )
                    throttled.append(err)
                    return False
                raise map_client_error(err) from err
            return True

        if not self._retry(attempt, self._short_retry):
            last = throttled[-1]
            raise map_client_error(last) from last
        return result

    def _apply_step(self, table_name: str, step: UpdateStep) -> None:
        def attempt() -> bool:
            try:
                self._client.update_table(**step.request)
            except ClientError as err:
                if error_code(err) in (RESOURCE_NOT_FOUND, RESOURCE_IN_USE):
                    logger.warning("waiting to update DynamoDB table %s: %s", table_name, error_message(err))
                    return False
                raise map_client_error(err) from err
            return True

        if not self._retry(attempt, self._short_retry):
            raise UpdateFailedError(resource=table_name, step=step.description)
        self._wait_for_table(table_name, exist=True)

    def _wait_for_table(self, table_name: str, *, exist: bool) -> None:
        def probe() -> bool:
            status = state.describe_status(self._client, table_name)
            if status is None:
                return not exist
            return exist and status.active

        wait_until(
            probe,
            self._long_retry,
            resource=table_name,
            condition="active" if exist else "absent",
            sleep=self._sleep,
            cancel=self._cancel,
            deadline=self._deadline,
        )

    def _retry(self, attempt: Callable[[], bool], profile: RetryProfile) -> bool:
        return retry_until(attempt, profile, sleep=self._sleep, cancel=self._cancel, deadline=self._deadline)
