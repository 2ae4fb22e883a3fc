"""Configuration and environment handling for the MLflow API client.

Environment variables are only read here. The session client receives an
explicit SessionConfig and never looks at the process environment itself.
"""

from __future__ import annotations

import getpass
import os

from pydantic import BaseModel, Field

__all__ = [
    "ENV_EXPERIMENT_ID",
    "ENV_EXPERIMENT_NAME",
    "ENV_HTTP_REQUEST_TIMEOUT",
    "ENV_RUN_ID",
    "ENV_TRACKING_URI",
    "SessionConfig",
    "get_current_user",
    "get_request_timeout",
    "get_tracking_uri",
]

ENV_TRACKING_URI = "MLFLOW_TRACKING_URI"
ENV_RUN_ID = "MLFLOW_RUN_ID"
ENV_EXPERIMENT_NAME = "MLFLOW_EXPERIMENT_NAME"
ENV_EXPERIMENT_ID = "MLFLOW_EXPERIMENT_ID"
ENV_HTTP_REQUEST_TIMEOUT = "MLFLOW_HTTP_REQUEST_TIMEOUT"


def _get_env(name: str) -> str | None:
    """Read an environment variable, treating an empty value as unset."""
    value = os.environ.get(name)
    return value or None


class SessionConfig(BaseModel):
    """Explicit defaults for the session client.

    Every field is optional. The session client applies them in its
    defaulting chains (see MlflowClient.start_run and resume_run).
    """

    tracking_uri: str | None = Field(default=None, description="Base URI of the tracking server")
    run_id: str | None = Field(default=None, description="Run to resume when no run id is given")
    experiment_name: str | None = Field(default=None, description="Experiment used for new runs, created on demand")
    experiment_id: str | None = Field(default=None, description="Experiment used for new runs when no name is configured")
    user: str | None = Field(default=None, description="Value of the mlflow.user tag on new runs")

    @classmethod
    def from_env(cls) -> SessionConfig:
        """Create SessionConfig from environment variables.

        Environment variables:
        - MLFLOW_TRACKING_URI: Base URI of the tracking server
        - MLFLOW_RUN_ID: Run to resume
        - MLFLOW_EXPERIMENT_NAME: Experiment name for new runs
        - MLFLOW_EXPERIMENT_ID: Experiment id for new runs

        The user is taken from the login name of the current process.
        """
        return cls(
            tracking_uri=_get_env(ENV_TRACKING_URI),
            run_id=_get_env(ENV_RUN_ID),
            experiment_name=_get_env(ENV_EXPERIMENT_NAME),
            experiment_id=_get_env(ENV_EXPERIMENT_ID),
            user=get_current_user(),
        )


def get_tracking_uri() -> str | None:
    """Get the tracking server URI from MLFLOW_TRACKING_URI.

    Returns:
        The URI if set and non-empty, None otherwise.
    """
    return _get_env(ENV_TRACKING_URI)


def get_request_timeout() -> float | None:
    """Get the HTTP request timeout from MLFLOW_HTTP_REQUEST_TIMEOUT.

    Returns:
        Timeout in seconds, or None (no timeout) when unset.

    Raises:
        ValueError: If the variable is set but is not a positive number
    """
    raw = _get_env(ENV_HTTP_REQUEST_TIMEOUT)
    if raw is None:
        return None
    try:
        timeout = float(raw)
    except ValueError as e:
        raise ValueError(f"{ENV_HTTP_REQUEST_TIMEOUT} must be a number, got '{raw}'") from e
    if timeout <= 0:
        raise ValueError(f"{ENV_HTTP_REQUEST_TIMEOUT} must be positive, got '{raw}'")
    return timeout


def get_current_user() -> str | None:
    """Get the login name of the current process owner.

    Returns:
        The user name, or None if it cannot be determined.
    """
    try:
        return getpass.getuser()
    except (KeyError, OSError):
        return None
