import asyncio

import httpx
import pytest

from core.errors import (
    AuditInvocationError,
    AuditTimeoutError,
    FailureKind,
    classify_failure,
    is_timeout_error,
)


class TimeoutErrorFromTool(Exception):
    pass


@pytest.mark.parametrize("error", [
    asyncio.TimeoutError(),
    TimeoutError("timed out"),
    httpx.ReadTimeout("read timed out"),
    AuditTimeoutError("Lighthouse timed out after 180.0s"),
    TimeoutErrorFromTool("Navigation timeout of 30000 ms exceeded"),
])
def test_timeout_errors_are_classified(error):
    failure = classify_failure(error)

    assert failure.kind is FailureKind.TIMEOUT
    assert failure.is_timeout
    assert failure.message == (str(error) or "TimeoutError")


@pytest.mark.parametrize("error", [
    AuditInvocationError("Lighthouse audit failed"),
    ValueError("bad json"),
    httpx.ConnectError("Connection refused"),
])
def test_other_errors_are_generic(error):
    failure = classify_failure(error)

    assert failure.kind is FailureKind.GENERIC
    assert failure.message == str(error)
    assert failure.error is error


def test_timeout_cause_is_detected():
    try:
        try:
            raise asyncio.TimeoutError()
        except asyncio.TimeoutError as e:
            raise AuditInvocationError("Lighthouse failed") from e
    except AuditInvocationError as e:
        error = e

    assert is_timeout_error(error)


def test_timeout_in_message_only_is_not_a_timeout():
    assert not is_timeout_error(AuditInvocationError("Timeout reached"))


@pytest.mark.parametrize("error,expected", [
    (asyncio.TimeoutError(), "TimeoutError"),
    (AuditInvocationError(), "AuditInvocationError"),
])
def test_message_falls_back_to_error_name(error, expected):
    assert classify_failure(error).message == expected
