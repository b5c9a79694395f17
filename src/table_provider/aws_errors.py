from __future__ import annotations

from botocore.exceptions import ClientError

from .errors import AwsError, NotFoundError, ValidationError

RESOURCE_NOT_FOUND = "ResourceNotFoundException"
RESOURCE_IN_USE = "ResourceInUseException"
LIMIT_EXCEEDED = "LimitExceededException"
VALIDATION = "ValidationException"


def error_code(err: ClientError) -> str:
    return str(err.response.get("Error", {}).get("Code", ""))


def error_message(err: ClientError) -> str:
    return str(err.response.get("Error", {}).get("Message", ""))


def is_aws_error(err: BaseException, *codes: str) -> bool:
    if not isinstance(err, ClientError):
        return False
    return error_code(err) in codes


def map_client_error(err: ClientError) -> Exception:
    code = error_code(err)
    message = error_message(err)

    if code == RESOURCE_NOT_FOUND:
        return NotFoundError(message or "resource not found")
    if code == VALIDATION:
        return ValidationError(message or "validation failed")

    return AwsError(code=code or "UnknownError", message=message or str(err))
