from __future__ import annotations

from botocore.exceptions import ClientError


def error_code(err: ClientError) -> str:
    return str(err.response.get("Error", {}).get("Code", ""))


def is_conditional_check_failed(err: BaseException) -> bool:
    return isinstance(err, ClientError) and error_code(err) == "ConditionalCheckFailedException"


def is_not_found(err: BaseException) -> bool:
    return isinstance(err, ClientError) and error_code(err) == "ResourceNotFoundException"
