"""Stateless client for the MLflow tracking REST API."""

from __future__ import annotations

from mlflow_api.api._experiments import ExperimentsAPI
from mlflow_api.api._run_data import RunDataAPI
from mlflow_api.api._runs import RunsAPI


class MlflowAPI(ExperimentsAPI, RunsAPI, RunDataAPI):
    """Typed client with one method per REST endpoint.

    Every method performs exactly one blocking HTTP round trip and keeps no
    state between calls. Failures surface as ``ApiError`` (server error
    envelope, carrying the endpoint's error code) or ``QueryError``
    (transport or decoding failure).

    Examples:
        >>> api = MlflowAPI("http://localhost:5000")
        >>> experiment_id = api.create_experiment("my-experiment")
        >>> api.get_experiment(experiment_id).name
        'my-experiment'
    """

    def __enter__(self) -> MlflowAPI:
        return self
