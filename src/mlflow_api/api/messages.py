"""
Request and response bodies of the MLflow REST endpoints.

Request models are dumped with ``exclude_none=True`` so optional fields the
caller left out never reach the wire.
"""

from typing import Any

from pydantic import BaseModel, Field

from mlflow_api.models import Experiment, FileInfo, Metric, Param, Run, RunInfo, RunStatus, RunTag, ViewType


class ErrorEnvelope(BaseModel):
    """Error body returned by every endpoint."""

    error_code: str
    message: str = ""


class EmptyResponse(BaseModel):
    """Response of endpoints that return ``{}`` on success."""

    pass


# ---------------------------------------------------------------------------
# Experiments
# ---------------------------------------------------------------------------


class CreateExperimentRequest(BaseModel):
    """Request model for creating an experiment."""

    name: str
    artifact_location: str | None = None


class CreateExperimentResponse(BaseModel):
    """Response model for experiment creation."""

    experiment_id: str


class ListExperimentsResponse(BaseModel):
    """Response model for the experiment listing."""

    experiments: list[Experiment] = Field(default_factory=list)


class GetExperimentResponse(BaseModel):
    """Response model for get and get-by-name."""

    experiment: Experiment


class ExperimentIdRequest(BaseModel):
    """Request model for delete and restore."""

    experiment_id: str


class UpdateExperimentRequest(BaseModel):
    """Request model for renaming an experiment."""

    experiment_id: str
    new_name: str


class SetExperimentTagRequest(BaseModel):
    """Request model for tagging an experiment."""

    experiment_id: str
    key: str
    value: str


# ---------------------------------------------------------------------------
# Runs
# ---------------------------------------------------------------------------


class CreateRunRequest(BaseModel):
    """Request model for creating a run."""

    experiment_id: str
    start_time: int | None = None
    tags: list[RunTag] | None = None


class RunResponse(BaseModel):
    """Response model for create and get."""

    run: Run


class RunIdRequest(BaseModel):
    """Request model for delete and restore."""

    run_id: str


class UpdateRunRequest(BaseModel):
    """Request model for updating the status of a run."""

    run_id: str
    status: RunStatus
    end_time: int | None = None


class UpdateRunResponse(BaseModel):
    """Response model for run updates."""

    run_info: RunInfo


class SearchRunsRequest(BaseModel):
    """Request model for run search."""

    experiment_ids: list[str]
    filter: str | None = None
    run_view_type: ViewType | None = None
    max_results: int | None = None
    order_by: list[str] | None = None
    page_token: str | None = None


class SearchRunsResponse(BaseModel):
    """Response model for run search."""

    runs: list[Run] = Field(default_factory=list)
    next_page_token: str | None = None


# ---------------------------------------------------------------------------
# Run data
# ---------------------------------------------------------------------------


class SetRunTagRequest(BaseModel):
    """Request model for tagging a run."""

    run_id: str
    key: str
    value: str


class DeleteRunTagRequest(BaseModel):
    """Request model for deleting a run tag."""

    run_id: str
    key: str


class LogMetricRequest(BaseModel):
    """Request model for logging one metric value."""

    run_id: str
    key: str
    value: float
    timestamp: int
    step: int | None = None


class LogParamRequest(BaseModel):
    """Request model for logging a param."""

    run_id: str
    key: str
    value: str


class LogBatchRequest(BaseModel):
    """Request model for logging metrics, params and tags in one call."""

    run_id: str
    metrics: list[Metric] | None = None
    params: list[Param] | None = None
    tags: list[RunTag] | None = None


class MetricHistoryResponse(BaseModel):
    """Response model for the metric history."""

    metrics: list[Metric] = Field(default_factory=list)


class ListArtifactsResponse(BaseModel):
    """Response model for the artifact listing."""

    root_uri: str
    files: list[FileInfo] = Field(default_factory=list)


def to_body(request: BaseModel) -> dict[str, Any]:
    """Serialize a request model to a JSON body without unset optional fields."""
    return request.model_dump(mode="json", exclude_none=True)


def to_query(**params: Any) -> dict[str, str]:
    """Build query parameters, dropping the ones that are None."""
    query: dict[str, str] = {}
    for key, value in params.items():
        if value is None:
            continue
        query[key] = value.value if isinstance(value, ViewType) else str(value)
    return query
