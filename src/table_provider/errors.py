from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .model import FieldError


class TableProviderError(Exception):
    pass


class ValidationError(TableProviderError):
    def __init__(self, message: str, *, failures: Sequence[FieldError] = ()) -> None:
        super().__init__(message)
        self.failures = tuple(failures)


class NotFoundError(TableProviderError):
    pass


class AwsError(TableProviderError):
    def __init__(self, *, code: str, message: str) -> None:
        super().__init__(f"{code}: {message}")
        self.code = code
        self.message = message


class ConvergenceTimeoutError(TableProviderError):
    def __init__(self, *, resource: str, condition: str, attempts: int) -> None:
        super().__init__(f"DynamoDB table '{resource}' did not become {condition} after {attempts} attempts")
        self.resource = resource
        self.condition = condition
        self.attempts = attempts


class DeleteFailedError(TableProviderError):
    def __init__(self, *, resource: str) -> None:
        super().__init__(f"DynamoDB table '{resource}' could not be deleted")
        self.resource = resource


class UpdateFailedError(TableProviderError):
    def __init__(self, *, resource: str, step: str) -> None:
        super().__init__(f"DynamoDB table '{resource}' could not be updated: {step}")
        self.resource = resource
        self.step = step


class OperationCancelledError(TableProviderError):
    pass


class InvariantError(TableProviderError):
    pass


class InvalidIdentifierError(InvariantError):
    def __init__(self, identifier: str, reason: str) -> None:
        super().__init__(f"invalid table identifier {identifier!r}: {reason}")
        self.identifier = identifier
        self.reason = reason
