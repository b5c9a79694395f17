from __future__ import annotations

from table_provider.aws_errors import error_code, is_aws_error, map_client_error
from table_provider.errors import AwsError, NotFoundError, ValidationError
from table_provider.testkit import client_error


def test_map_client_error() -> None:
    not_found = client_error("ResourceNotFoundException", "DescribeTable")
    assert isinstance(map_client_error(not_found), NotFoundError)
    assert isinstance(map_client_error(client_error("ValidationException", "CreateTable")), ValidationError)

    throttled = client_error("ProvisionedThroughputExceededException", "UpdateTable", "slow down")
    mapped = map_client_error(throttled)
    assert isinstance(mapped, AwsError)
    assert mapped.code == "ProvisionedThroughputExceededException"
    assert mapped.message == "slow down"
    assert str(mapped) == "ProvisionedThroughputExceededException: slow down"


def test_is_aws_error() -> None:
    err = client_error("ResourceInUseException", "DeleteTable")
    assert error_code(err) == "ResourceInUseException"
    assert is_aws_error(err, "ResourceNotFoundException", "ResourceInUseException")
    assert not is_aws_error(err, "ResourceNotFoundException")
    assert not is_aws_error(RuntimeError("x"), "ResourceInUseException")
