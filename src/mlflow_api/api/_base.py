"""Base class holding the validated URI and HTTP session of the API client."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, TypeVar

import requests
from pydantic import BaseModel

from mlflow_api.api._envelope import send_and_return_field
from mlflow_api.exceptions import ErrorCode, SetupError
from mlflow_api.utils.validators import validate_uri

R = TypeVar("R", bound=BaseModel)
T = TypeVar("T")
E = TypeVar("E", bound=ErrorCode)

API_PREFIX = "/api/2.0/mlflow"


class BaseAPI:
    """Shared state and request plumbing for the endpoint mixins.

    Endpoint methods live in the mixins (experiments, runs, run data); this
    class only knows how to build URLs and hand requests to the decoder.
    """

    def __init__(self, uri: str, timeout: float | None = None, session: requests.Session | None = None) -> None:
        """Initialize the client.

        Args:
            uri: Base URI of the tracking server (e.g., "http://localhost:5000")
            timeout: Request timeout in seconds. None waits indefinitely.
            session: Optional preconfigured requests session (auth headers,
                adapters, proxies). A new one is created when omitted.

        Raises:
            SetupError: If ``uri`` is not a valid absolute URI. No request is sent.
        """
        try:
            validate_uri(uri)
        except ValueError as e:
            raise SetupError(uri) from e

        self.uri = uri
        self.timeout = timeout
        self.session = session if session is not None else requests.Session()
        self._base_url = uri.rstrip("/") + API_PREFIX

    def _url(self, path: str) -> str:
        return f"{self._base_url}{path}"

    def _get(
        self,
        path: str,
        params: dict[str, str],
        response_model: type[R],
        error_codes: type[E],
        extract: Callable[[R], T],
    ) -> T:
        request = requests.Request("GET", self._url(path), params=params)
        return send_and_return_field(self.session, request, response_model, error_codes, extract, timeout=self.timeout)

    def _post(
        self,
        path: str,
        body: dict[str, Any],
        response_model: type[R],
        error_codes: type[E],
        extract: Callable[[R], T],
    ) -> T:
        request = requests.Request("POST", self._url(path), json=body)
        return send_and_return_field(self.session, request, response_model, error_codes, extract, timeout=self.timeout)

    def close(self) -> None:
        """Close the underlying HTTP session."""
        self.session.close()

    def __enter__(self) -> BaseAPI:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def __repr__(self) -> str:
        return f"{type(self).__name__}(uri={self.uri!r})"
