"""Experiment endpoints."""

from __future__ import annotations

from mlflow_api.api._base import BaseAPI
from mlflow_api.api.messages import (
    CreateExperimentRequest,
    CreateExperimentResponse,
    EmptyResponse,
    ExperimentIdRequest,
    GetExperimentResponse,
    ListExperimentsResponse,
    SetExperimentTagRequest,
    UpdateExperimentRequest,
    to_body,
    to_query,
)
from mlflow_api.exceptions import CreateExperimentErrorCode, GetExperimentErrorCode, ListExperimentsErrorCode
from mlflow_api.models import Experiment, ViewType


class ExperimentsAPI(BaseAPI):
    def create_experiment(self, name: str, artifact_location: str | None = None) -> str:
        """Create an experiment.

        The server rejects a name that is already taken by another experiment.

        Args:
            name: Experiment name
            artifact_location: Where to store run artifacts. The server picks a
                default when omitted.

        Returns:
            The id of the new experiment.

        Raises:
            ApiError: RESOURCE_ALREADY_EXISTS if the name is taken
            QueryError: If the request fails
        """
        return self._post(
            "/experiments/create",
            to_body(CreateExperimentRequest(name=name, artifact_location=artifact_location)),
            CreateExperimentResponse,
            CreateExperimentErrorCode,
            lambda resp: resp.experiment_id,
        )

    def list_experiments(self, view_type: ViewType | None = None) -> list[Experiment]:
        """List experiments, active ones only unless ``view_type`` says otherwise."""
        return self._get(
            "/experiments/list",
            to_query(view_type=view_type),
            ListExperimentsResponse,
            ListExperimentsErrorCode,
            lambda resp: resp.experiments,
        )

    def get_experiment(self, experiment_id: str) -> Experiment:
        """Get an experiment by id. Deleted experiments are returned too."""
        return self._get(
            "/experiments/get",
            to_query(experiment_id=experiment_id),
            GetExperimentResponse,
            GetExperimentErrorCode,
            lambda resp: resp.experiment,
        )

    def get_experiment_by_name(self, experiment_name: str) -> Experiment:
        """Get an experiment by name.

        If an active and a deleted experiment share the name, the server
        returns the active one.
        """
        return self._get(
            "/experiments/get-by-name",
            to_query(experiment_name=experiment_name),
            GetExperimentResponse,
            GetExperimentErrorCode,
            lambda resp: resp.experiment,
        )

    def delete_experiment(self, experiment_id: str) -> None:
        """Mark an experiment, and its runs, for deletion."""
        self._post(
            "/experiments/delete",
            to_body(ExperimentIdRequest(experiment_id=experiment_id)),
            EmptyResponse,
            GetExperimentErrorCode,
            lambda _: None,
        )

    def restore_experiment(self, experiment_id: str) -> None:
        """Restore an experiment marked for deletion, and its runs."""
        self._post(
            "/experiments/restore",
            to_body(ExperimentIdRequest(experiment_id=experiment_id)),
            EmptyResponse,
            GetExperimentErrorCode,
            lambda _: None,
        )

    def update_experiment(self, experiment_id: str, new_name: str) -> None:
        """Rename an experiment."""
        self._post(
            "/experiments/update",
            to_body(UpdateExperimentRequest(experiment_id=experiment_id, new_name=new_name)),
            EmptyResponse,
            GetExperimentErrorCode,
            lambda _: None,
        )

    def set_experiment_tag(self, experiment_id: str, key: str, value: str) -> None:
        """Set a tag on an experiment, overwriting any previous value for ``key``."""
        self._post(
            "/experiments/set-experiment-tag",
            to_body(SetExperimentTagRequest(experiment_id=experiment_id, key=key, value=value)),
            EmptyResponse,
            GetExperimentErrorCode,
            lambda _: None,
        )
