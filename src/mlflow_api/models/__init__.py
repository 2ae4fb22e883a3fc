"""
MLflow API data models package.

This package contains the tracking entities and enumerations shared by the
stateless API client and the session client.
"""

from mlflow_api.models.entities import (
    ArtifactListing,
    Experiment,
    ExperimentTag,
    FileInfo,
    Metric,
    Param,
    Run,
    RunData,
    RunInfo,
    RunTag,
    SearchRunsPage,
)
from mlflow_api.models.status import LifecycleStage, RunStatus, ViewType

__all__ = [
    "ArtifactListing",
    "Experiment",
    "ExperimentTag",
    "FileInfo",
    "LifecycleStage",
    "Metric",
    "Param",
    "Run",
    "RunData",
    "RunInfo",
    "RunStatus",
    "RunTag",
    "SearchRunsPage",
    "ViewType",
]
