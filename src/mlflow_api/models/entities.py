"""
Tracking entities returned by the MLflow REST API.

All entities are read-only snapshots of server state. Unknown fields sent by
newer servers are ignored rather than rejected.
"""

from pydantic import BaseModel, ConfigDict, Field

from mlflow_api.models.status import LifecycleStage, RunStatus


class _Entity(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")


class ExperimentTag(_Entity):
    """Tag for an experiment."""

    key: str = Field(..., description="The tag key")
    value: str = Field(..., description="The tag value")


class RunTag(_Entity):
    """Tag for a run."""

    key: str = Field(..., description="The tag key")
    value: str = Field(..., description="The tag value")


class Param(_Entity):
    """Param associated with a run. Written once per key per run."""

    key: str = Field(..., description="Key identifying this param")
    value: str = Field(..., description="Value associated with this param")


class Metric(_Entity):
    """Metric associated with a run.

    Several metrics may share a key; the run view only holds the latest one
    per key, the full series comes from the metric history endpoint.
    """

    key: str = Field(..., description="Key identifying this metric")
    value: float = Field(..., description="Value associated with this metric")
    timestamp: int = Field(..., description="Unix timestamp in milliseconds at which the metric was recorded")
    step: int = Field(default=0, description="Step at which the metric was logged")


class Experiment(_Entity):
    """A named container grouping related runs."""

    experiment_id: str = Field(..., description="Unique identifier, assigned by the server")
    name: str = Field(..., description="Human readable name")
    artifact_location: str = Field(..., description="Location where artifacts for the experiment are stored")
    lifecycle_stage: LifecycleStage = Field(..., description="Current lifecycle stage")
    last_update_time: int | None = Field(default=None, description="Last update time in milliseconds")
    creation_time: int | None = Field(default=None, description="Creation time in milliseconds")
    tags: list[ExperimentTag] | None = Field(default=None, description="Additional metadata key-value pairs")


class RunInfo(_Entity):
    """Metadata of a single run."""

    run_id: str = Field(..., description="Unique identifier for the run")
    experiment_id: str = Field(..., description="The experiment ID")
    user_id: str | None = Field(default=None, description="Deprecated; use the mlflow.user tag")
    run_name: str | None = Field(default=None, description="Run name, sent by newer servers")
    status: RunStatus = Field(..., description="Current status of the run")
    start_time: int = Field(..., description="Unix timestamp of when the run started in milliseconds")
    end_time: int | None = Field(default=None, description="Unix timestamp of when the run ended, unset while running")
    artifact_uri: str = Field(..., description="URI of the directory where artifacts are uploaded")
    lifecycle_stage: LifecycleStage = Field(..., description="Current lifecycle stage")


class RunData(_Entity):
    """Metrics, params and tags logged against a run."""

    # The server omits empty repeated fields
    metrics: list[Metric] = Field(default_factory=list)
    params: list[Param] = Field(default_factory=list)
    tags: list[RunTag] = Field(default_factory=list)


class Run(_Entity):
    """A single run."""

    info: RunInfo
    data: RunData | None = None

    def __str__(self) -> str:
        return f"Run(run_id={self.info.run_id}, experiment_id={self.info.experiment_id}, status={self.info.status.value})"


class FileInfo(_Entity):
    """Metadata of a single artifact file or directory."""

    path: str = Field(..., description="Path relative to the run's root artifact directory")
    is_dir: bool = Field(default=False, description="Whether the path is a directory")
    file_size: int | None = Field(default=None, description="Size in bytes, unset for directories")


class SearchRunsPage(_Entity):
    """One page of run search results."""

    runs: list[Run] = Field(default_factory=list)
    next_page_token: str | None = None


class ArtifactListing(_Entity):
    """Artifacts of a run under an optional path prefix."""

    root_uri: str = Field(..., description="Root artifact URI of the run")
    files: list[FileInfo] = Field(default_factory=list)
