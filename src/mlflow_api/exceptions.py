"""
MLflow API exceptions module.

Three failure kinds are kept apart by the stateless client:

- SetupError: the base URI is malformed, raised at construction time
- QueryError: the HTTP exchange failed or its body could not be decoded
- ApiError: the server answered with an ``{error_code, message}`` envelope

Error codes are modelled per endpoint family. Every family carries an
UNKNOWN member that absorbs codes the client does not know about, so a newer
server never breaks decoding.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Generic, TypeVar


class MlflowApiError(Exception):
    """Base class for all errors raised by mlflow_api."""

    pass


class SetupError(MlflowApiError):
    """Exception raised when the client cannot be created."""

    def __init__(self, uri: str) -> None:
        super().__init__(f"Invalid URL: '{uri}'")
        self.uri = uri

    def __eq__(self, other: object) -> bool:
        return isinstance(other, SetupError) and other.uri == self.uri

    def __hash__(self) -> int:
        return hash(self.uri)


class ErrorCode(str, Enum):
    """Base for server error code enumerations.

    Subclasses must define an ``UNKNOWN`` member.
    """

    @classmethod
    def _missing_(cls, value: object) -> Any:
        return cls.UNKNOWN  # type: ignore[attr-defined]


class CreateExperimentErrorCode(ErrorCode):
    """Error codes of the experiment creation endpoint."""

    RESOURCE_ALREADY_EXISTS = "RESOURCE_ALREADY_EXISTS"
    INVALID_PARAMETER_VALUE = "INVALID_PARAMETER_VALUE"
    INTERNAL_ERROR = "INTERNAL_ERROR"
    UNKNOWN = "UNKNOWN"


class ListExperimentsErrorCode(ErrorCode):
    """Error codes of the experiment listing endpoint."""

    INVALID_PARAMETER_VALUE = "INVALID_PARAMETER_VALUE"
    INTERNAL_ERROR = "INTERNAL_ERROR"
    UNKNOWN = "UNKNOWN"


class GetExperimentErrorCode(ErrorCode):
    """Error codes of endpoints addressing a single existing experiment."""

    RESOURCE_DOES_NOT_EXIST = "RESOURCE_DOES_NOT_EXIST"
    INVALID_PARAMETER_VALUE = "INVALID_PARAMETER_VALUE"
    INTERNAL_ERROR = "INTERNAL_ERROR"
    UNKNOWN = "UNKNOWN"


class RunErrorCode(ErrorCode):
    """Error codes of run and run data endpoints."""

    RESOURCE_DOES_NOT_EXIST = "RESOURCE_DOES_NOT_EXIST"
    INVALID_PARAMETER_VALUE = "INVALID_PARAMETER_VALUE"
    INVALID_STATE = "INVALID_STATE"
    INTERNAL_ERROR = "INTERNAL_ERROR"
    UNKNOWN = "UNKNOWN"


E = TypeVar("E", bound=ErrorCode)


class ClientError(MlflowApiError, Generic[E]):
    """Error raised by a call on the stateless client.

    Catch this to handle both API and transport failures of one call; catch
    ApiError or QueryError to tell them apart.
    """

    pass


class ApiError(ClientError[E]):
    """The server answered with an error envelope."""

    def __init__(self, error_code: E, message: str, raw_error_code: str | None = None) -> None:
        super().__init__(f"{error_code.value}: {message}")
        self.error_code = error_code
        self.message = message
        # The code exactly as sent, kept when it was folded into UNKNOWN
        self.raw_error_code = raw_error_code if raw_error_code is not None else error_code.value

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ApiError):
            return NotImplemented
        return self.error_code == other.error_code and self.message == other.message

    def __hash__(self) -> int:
        return hash((self.error_code, self.message))


class QueryError(ClientError[Any]):
    """The HTTP exchange failed or produced an unreadable response."""

    def __init__(self, message: str, cause: BaseException | None = None) -> None:
        super().__init__(message)
        self.cause = cause


class ResponseDecodeError(QueryError):
    """The body is JSON but matches neither the error envelope nor the expected payload."""

    pass


class SessionErrorKind(str, Enum):
    """What went wrong in a session client operation."""

    QUERY = "query"
    API = "api"
    NOT_FOUND = "not_found"
    NO_RUN_ID = "no_run_id"
    NO_ACTIVE_RUN = "no_active_run"
    NO_EXPERIMENT = "no_experiment"


class SessionError(MlflowApiError):
    """Exception raised by the session client.

    The session surface is simpler than the stateless one, but the failure is
    still tagged with a kind and the underlying ClientError is chained.
    """

    def __init__(self, kind: SessionErrorKind, message: str, cause: ClientError[Any] | None = None) -> None:
        super().__init__(message)
        self.kind = kind
        self.cause = cause

    @classmethod
    def from_client_error(cls, error: ClientError[Any], action: str) -> SessionError:
        """Wrap a stateless client failure, keeping its kind.

        Args:
            error: The failure raised by the stateless client
            action: Short description of the attempted operation, used in the message

        Returns:
            SessionError tagged NOT_FOUND, API or QUERY
        """
        if isinstance(error, ApiError):
            if error.raw_error_code == "RESOURCE_DOES_NOT_EXIST":
                kind = SessionErrorKind.NOT_FOUND
            else:
                kind = SessionErrorKind.API
        else:
            kind = SessionErrorKind.QUERY
        session_error = cls(kind, f"Failed to {action}: {error}", cause=error)
        session_error.__cause__ = error
        return session_error
