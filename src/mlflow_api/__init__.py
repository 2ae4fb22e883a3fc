"""
mlflow_api - Typed client for the MLflow tracking REST API.

Two layers are provided: MlflowAPI, a stateless client with one method per
endpoint and typed errors, and MlflowClient, a session that tracks an
active experiment and run.

Examples:
    >>> from mlflow_api import MlflowAPI, MlflowClient
    >>> api = MlflowAPI("http://localhost:5000")
    >>> experiment_id = api.create_experiment("my-experiment")
    >>> client = MlflowClient(api)
    >>> client.log_metric("loss", 0.5)
    >>> client.end_run()
"""

from mlflow_api.api import MlflowAPI
from mlflow_api.config import SessionConfig
from mlflow_api.exceptions import (
    ApiError,
    ClientError,
    CreateExperimentErrorCode,
    GetExperimentErrorCode,
    ListExperimentsErrorCode,
    MlflowApiError,
    QueryError,
    ResponseDecodeError,
    RunErrorCode,
    SessionError,
    SessionErrorKind,
    SetupError,
)
from mlflow_api.models import (
    ArtifactListing,
    Experiment,
    ExperimentTag,
    FileInfo,
    LifecycleStage,
    Metric,
    Param,
    Run,
    RunData,
    RunInfo,
    RunStatus,
    RunTag,
    SearchRunsPage,
    ViewType,
)
from mlflow_api.session import MlflowClient

__version__ = "0.1.0"
__all__ = [
    "ApiError",
    "ArtifactListing",
    "ClientError",
    "CreateExperimentErrorCode",
    "Experiment",
    "ExperimentTag",
    "FileInfo",
    "GetExperimentErrorCode",
    "LifecycleStage",
    "ListExperimentsErrorCode",
    "Metric",
    "MlflowAPI",
    "MlflowApiError",
    "MlflowClient",
    "Param",
    "QueryError",
    "ResponseDecodeError",
    "Run",
    "RunData",
    "RunErrorCode",
    "RunInfo",
    "RunStatus",
    "RunTag",
    "SearchRunsPage",
    "SessionConfig",
    "SessionError",
    "SessionErrorKind",
    "SetupError",
    "ViewType",
]
