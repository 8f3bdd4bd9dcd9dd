__all__ = [
    "BaseError",
    "ClusterClientError",
    "ConfigurationError",
    "ErrorKind",
    "NonZeroExitError",
    "RegistrationError",
    "SchedulingFailure",
    "UpsertError",
    "WaitTimeExceeded",
]

from enum import Enum


class BaseError(Exception):
    exit_code: int = 1


class ConfigurationError(BaseError):
    exit_code = 9


class RegistrationError(BaseError):
    exit_code = 3


class SchedulingFailure(BaseError):
    exit_code = 4


class NonZeroExitError(BaseError):
    exit_code = 5


class WaitTimeExceeded(BaseError):
    exit_code = 6


class UpsertError(BaseError):
    exit_code = 7


class ErrorKind(str, Enum):
    SERVICE_NOT_FOUND = "service_not_found"
    SERVICE_NOT_ACTIVE = "service_not_active"
    CLUSTER_NOT_FOUND = "cluster_not_found"
    INVALID_PARAMETER = "invalid_parameter"
    ACCESS_DENIED = "access_denied"
    OTHER = "other"


class ClusterClientError(BaseError):
    """Cluster API call failed.

    The ``kind`` tag classifies the failure independently of the
    transport library, so callers can branch on it.
    """

    exit_code = 8

    kind: ErrorKind
    code: str | None

    def __init__(
        self,
        message: str,
        kind: ErrorKind = ErrorKind.OTHER,
        code: str | None = None,
    ):
        super().__init__(message)
        self.kind = kind
        self.code = code
