"""Send one request and decode the MLflow success-or-error response envelope."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, TypeVar

import requests
from pydantic import BaseModel, ValidationError

from mlflow_api.api.messages import ErrorEnvelope
from mlflow_api.exceptions import ApiError, ErrorCode, QueryError, ResponseDecodeError
from mlflow_api.logger import logger

R = TypeVar("R", bound=BaseModel)
T = TypeVar("T")
E = TypeVar("E", bound=ErrorCode)


def _is_error_envelope(body: Any) -> bool:
    """Cheap probe run before any full parse: does the body carry an error code?"""
    return isinstance(body, dict) and "error_code" in body


def send_and_return_field(
    session: requests.Session,
    request: requests.Request,
    response_model: type[R],
    error_codes: type[E],
    extract: Callable[[R], T],
    timeout: float | None = None,
) -> T:
    """Perform a single HTTP round trip and return the extracted payload.

    The body is decoded in two phases. A JSON object with an ``error_code``
    field is always treated as an error envelope, whatever the HTTP status
    and whatever else it contains. Anything else must validate as
    ``response_model``.

    Args:
        session: Session used to prepare and send the request
        request: Request with method, URL and body or query already set
        response_model: Pydantic model of the success payload
        error_codes: Error code enumeration of the endpoint family
        extract: Pure projection from the success payload to the returned value
        timeout: Request timeout in seconds, None to wait indefinitely

    Returns:
        Whatever ``extract`` returns for the decoded payload.

    Raises:
        ApiError: If the server answered with an error envelope
        QueryError: If the request could not be completed or the body is not JSON
        ResponseDecodeError: If the body matches neither shape
    """
    prepared = session.prepare_request(request)
    logger.debug(f"{prepared.method} {prepared.url}")
    # send() alone skips the proxy and CA bundle settings taken from the environment
    settings = session.merge_environment_settings(prepared.url, {}, None, None, None)

    try:
        response = session.send(prepared, timeout=timeout, **settings)
    except requests.RequestException as e:
        raise QueryError(f"{prepared.method} {prepared.url} failed: {e}", cause=e) from e

    try:
        body = response.json()
    except ValueError as e:
        raise QueryError(
            f"{prepared.method} {prepared.url} returned a non-JSON body (HTTP {response.status_code})",
            cause=e,
        ) from e

    if _is_error_envelope(body):
        try:
            envelope = ErrorEnvelope.model_validate(body)
        except ValidationError as e:
            raise ResponseDecodeError(f"Malformed error envelope from {prepared.url}: {body!r}", cause=e) from e
        error_code = error_codes(envelope.error_code)
        logger.debug(f"{prepared.method} {prepared.url} -> {envelope.error_code}: {envelope.message}")
        raise ApiError(error_code, envelope.message, raw_error_code=envelope.error_code)

    try:
        payload = response_model.model_validate(body)
    except ValidationError as e:
        raise ResponseDecodeError(
            f"Unexpected response from {prepared.url} (HTTP {response.status_code}): {body!r}",
            cause=e,
        ) from e

    return extract(payload)
