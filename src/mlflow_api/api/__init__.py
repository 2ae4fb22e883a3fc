"""Stateless API client package.

One method per REST endpoint, grouped by experiments, runs and run data.
Users should use the MlflowAPI class.
"""

from mlflow_api.api._base import API_PREFIX
from mlflow_api.api._envelope import send_and_return_field
from mlflow_api.api.client import MlflowAPI

__all__ = ["API_PREFIX", "MlflowAPI", "send_and_return_field"]
