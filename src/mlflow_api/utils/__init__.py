"""Utility modules for mlflow_api."""

from mlflow_api.utils.timestamp import ms_to_datetime, now_ms, to_ms
from mlflow_api.utils.validators import is_valid_uri, validate_key, validate_uri

__all__ = [
    "is_valid_uri",
    "ms_to_datetime",
    "now_ms",
    "to_ms",
    "validate_key",
    "validate_uri",
]
