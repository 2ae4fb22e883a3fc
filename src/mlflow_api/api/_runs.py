"""Run endpoints."""

from __future__ import annotations

from collections.abc import Sequence

from mlflow_api.api._base import BaseAPI
from mlflow_api.api.messages import (
    CreateRunRequest,
    EmptyResponse,
    RunIdRequest,
    RunResponse,
    SearchRunsRequest,
    SearchRunsResponse,
    UpdateRunRequest,
    UpdateRunResponse,
    to_body,
    to_query,
)
from mlflow_api.exceptions import RunErrorCode
from mlflow_api.models import Run, RunInfo, RunStatus, RunTag, SearchRunsPage, ViewType


class RunsAPI(BaseAPI):
    def create_run(self, experiment_id: str, start_time: int | None = None, tags: Sequence[RunTag] | None = None) -> Run:
        """Create a new run within an experiment.

        Args:
            experiment_id: Experiment the run belongs to
            start_time: Start time in Unix milliseconds. The server uses its
                own clock when omitted.
            tags: Initial run tags

        Returns:
            The created run, with status RUNNING.
        """
        return self._post(
            "/runs/create",
            to_body(CreateRunRequest(experiment_id=experiment_id, start_time=start_time, tags=list(tags) if tags is not None else None)),
            RunResponse,
            RunErrorCode,
            lambda resp: resp.run,
        )

    def get_run(self, run_id: str) -> Run:
        """Get metadata, metrics, params and tags of a run.

        When a metric key was logged several times, the run only holds the
        value the server considers latest. Use ``get_metric_history`` for the
        whole series.
        """
        return self._get(
            "/runs/get",
            to_query(run_id=run_id),
            RunResponse,
            RunErrorCode,
            lambda resp: resp.run,
        )

    def delete_run(self, run_id: str) -> None:
        """Mark a run for deletion."""
        self._post("/runs/delete", to_body(RunIdRequest(run_id=run_id)), EmptyResponse, RunErrorCode, lambda _: None)

    def restore_run(self, run_id: str) -> None:
        """Restore a deleted run."""
        self._post("/runs/restore", to_body(RunIdRequest(run_id=run_id)), EmptyResponse, RunErrorCode, lambda _: None)

    def update_run(self, run_id: str, status: RunStatus, end_time: int | None = None) -> RunInfo:
        """Update the status and end time of a run.

        Returns:
            The updated run metadata.
        """
        return self._post(
            "/runs/update",
            to_body(UpdateRunRequest(run_id=run_id, status=status, end_time=end_time)),
            UpdateRunResponse,
            RunErrorCode,
            lambda resp: resp.run_info,
        )

    def search_runs(
        self,
        experiment_ids: Sequence[str],
        filter: str | None = None,
        run_view_type: ViewType | None = None,
        max_results: int | None = None,
        order_by: Sequence[str] | None = None,
        page_token: str | None = None,
    ) -> SearchRunsPage:
        """Search runs of the given experiments.

        Args:
            experiment_ids: Experiments to search in
            filter: Search expression over metrics, params and tags
                (e.g. "metrics.rmse < 1 and params.model = 'tree'")
            run_view_type: Lifecycle stages to include
            max_results: Maximum number of runs in the page
            order_by: Ordering clauses (e.g. ["metrics.rmse DESC"])
            page_token: Token of the page to fetch, from a previous result

        Returns:
            SearchRunsPage with the matching runs and the token of the next
            page, if any.
        """
        return self._post(
            "/runs/search",
            to_body(
                SearchRunsRequest(
                    experiment_ids=list(experiment_ids),
                    filter=filter,
                    run_view_type=run_view_type,
                    max_results=max_results,
                    order_by=list(order_by) if order_by is not None else None,
                    page_token=page_token,
                )
            ),
            SearchRunsResponse,
            RunErrorCode,
            lambda resp: SearchRunsPage(runs=resp.runs, next_page_token=resp.next_page_token),
        )
