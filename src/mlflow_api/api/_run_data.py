"""Run data endpoints: tags, params, metrics and artifact listing."""

from __future__ import annotations

from collections.abc import Sequence

from mlflow_api.api._base import BaseAPI
from mlflow_api.api.messages import (
    DeleteRunTagRequest,
    EmptyResponse,
    ListArtifactsResponse,
    LogBatchRequest,
    LogMetricRequest,
    LogParamRequest,
    MetricHistoryResponse,
    SetRunTagRequest,
    to_body,
    to_query,
)
from mlflow_api.exceptions import RunErrorCode
from mlflow_api.models import ArtifactListing, Metric, Param, RunTag


class RunDataAPI(BaseAPI):
    def set_run_tag(self, run_id: str, key: str, value: str) -> None:
        """Set a tag on a run. Tags can be updated during and after the run."""
        self._post(
            "/runs/set-tag",
            to_body(SetRunTagRequest(run_id=run_id, key=key, value=value)),
            EmptyResponse,
            RunErrorCode,
            lambda _: None,
        )

    def delete_run_tag(self, run_id: str, key: str) -> None:
        """Delete a tag from a run."""
        self._post(
            "/runs/delete-tag",
            to_body(DeleteRunTagRequest(run_id=run_id, key=key)),
            EmptyResponse,
            RunErrorCode,
            lambda _: None,
        )

    def log_metric(self, run_id: str, key: str, value: float, timestamp: int, step: int | None = None) -> None:
        """Log one value of a metric.

        A metric can be logged any number of times; every value is kept in
        the metric history.

        Args:
            run_id: Run to log against
            key: Metric name
            value: Metric value
            timestamp: Time of the measurement in Unix milliseconds
            step: Training step. The server records 0 when omitted.
        """
        self._post(
            "/runs/log-metric",
            to_body(LogMetricRequest(run_id=run_id, key=key, value=value, timestamp=timestamp, step=step)),
            EmptyResponse,
            RunErrorCode,
            lambda _: None,
        )

    def log_param(self, run_id: str, key: str, value: str) -> None:
        """Log a param. A param can only be logged once per run."""
        self._post(
            "/runs/log-parameter",
            to_body(LogParamRequest(run_id=run_id, key=key, value=value)),
            EmptyResponse,
            RunErrorCode,
            lambda _: None,
        )

    def log_batch(
        self,
        run_id: str,
        metrics: Sequence[Metric] | None = None,
        params: Sequence[Param] | None = None,
        tags: Sequence[RunTag] | None = None,
    ) -> None:
        """Log metrics, params and tags in a single request.

        If the server fails part way, some of the data may already be
        written. Within each kind, entries are applied in the given order.
        """
        request = LogBatchRequest(
            run_id=run_id,
            metrics=list(metrics) if metrics is not None else None,
            params=list(params) if params is not None else None,
            tags=list(tags) if tags is not None else None,
        )
        self._post("/runs/log-batch", to_body(request), EmptyResponse, RunErrorCode, lambda _: None)

    def get_metric_history(self, run_id: str, metric_key: str) -> list[Metric]:
        """Get every logged value of a metric."""
        return self._get(
            "/metrics/get-history",
            to_query(run_id=run_id, metric_key=metric_key),
            MetricHistoryResponse,
            RunErrorCode,
            lambda resp: resp.metrics,
        )

    def list_artifacts(self, run_id: str, path: str | None = None) -> ArtifactListing:
        """List the artifacts of a run.

        Args:
            run_id: Run whose artifacts are listed
            path: Relative directory to list. The artifact root when omitted.

        Returns:
            ArtifactListing with the root URI of the run and the entries
            directly under ``path``.
        """
        return self._get(
            "/artifacts/list",
            to_query(run_id=run_id, path=path),
            ListArtifactsResponse,
            RunErrorCode,
            lambda resp: ArtifactListing(root_uri=resp.root_uri, files=resp.files),
        )
