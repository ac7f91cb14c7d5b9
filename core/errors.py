"""
Exception types and failure classification for the report pipeline.
"""
import re
from dataclasses import dataclass
from enum import Enum
from typing import Iterator, Type

TIMEOUT_PATTERN = re.compile(r"Timeout")


class PWAReportError(Exception):
    """Base class for report pipeline errors."""


class AuditInvocationError(PWAReportError):
    """The audit tool failed or produced no check data."""


class AuditTimeoutError(AuditInvocationError):
    """The audit tool did not finish within its time limit."""


class FetchError(PWAReportError):
    """An enrichment resource could not be fetched."""

    def __init__(self, message: str, url: str = None, status_code: int = None):
        super().__init__(message)
        self.url = url
        self.status_code = status_code


class ServiceWorkerFetchError(FetchError):
    pass


class ManifestFetchError(FetchError):
    pass


class FailureKind(Enum):
    TIMEOUT = "timeout"
    GENERIC = "generic"


@dataclass(frozen=True)
class PipelineFailure:
    """A classified top-level failure. ``message`` is what the caller sees."""
    kind: FailureKind
    message: str
    error: BaseException

    @property
    def is_timeout(self) -> bool:
        return self.kind is FailureKind.TIMEOUT


def _error_types(error: BaseException) -> Iterator[Type[BaseException]]:
    seen = set()
    current = error
    while current is not None and id(current) not in seen:
        seen.add(id(current))
        yield from type(current).__mro__
        current = current.__cause__ or current.__context__


def is_timeout_error(error: BaseException) -> bool:
    """True if the error or anything it was raised from is a timeout type."""
    return any(TIMEOUT_PATTERN.search(cls.__name__) for cls in _error_types(error))


def classify_failure(error: BaseException) -> PipelineFailure:
    kind = FailureKind.TIMEOUT if is_timeout_error(error) else FailureKind.GENERIC
    message = str(error) or type(error).__name__
    return PipelineFailure(kind=kind, message=message, error=error)
