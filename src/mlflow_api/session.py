"""Stateful session client tracking an active experiment and an active run."""

from __future__ import annotations

from collections.abc import Callable, Mapping, Sequence
from typing import Any, TypeVar

from mlflow_api.api import MlflowAPI
from mlflow_api.config import SessionConfig, get_request_timeout
from mlflow_api.exceptions import (
    ApiError,
    ClientError,
    CreateExperimentErrorCode,
    GetExperimentErrorCode,
    SessionError,
    SessionErrorKind,
)
from mlflow_api.logger import logger
from mlflow_api.models import ArtifactListing, Metric, Param, Run, RunInfo, RunStatus, RunTag, SearchRunsPage, ViewType
from mlflow_api.utils.timestamp import Timestamp, now_ms, to_ms
from mlflow_api.utils.validators import validate_key

T = TypeVar("T")

DEFAULT_EXPERIMENT_NAME = "Default"
DEFAULT_SEARCH_MAX_RESULTS = 100_000

USER_TAG = "mlflow.user"
RUN_NAME_TAG = "mlflow.runName"


class MlflowClient:
    """Convenience client remembering the active experiment and run.

    Logging methods start a run on demand, so logging works without an
    explicit ``start_run``. Defaults come from the SessionConfig given at
    construction, never from the process environment.

    Every failure is raised as SessionError. Its ``kind`` tells lookup misses,
    API errors and transport failures apart, and ``cause`` holds the error
    raised by the stateless client. Use ``api`` directly for per-endpoint
    error codes. Invalid arguments are the exception: blank keys, unusable
    timestamps and values that do not fit the wire records raise ValueError
    (pydantic's ValidationError included) before any request is sent.

    The active ids are plain attributes with no locking: use one client per
    thread of work.

    Examples:
        >>> client = MlflowClient.from_tracking_uri("http://localhost:5000")
        >>> client.set_experiment("my-experiment")
        >>> client.log_param("lr", 0.01)
        >>> client.log_metric("loss", 0.5)
        >>> client.end_run()
    """

    def __init__(self, api: MlflowAPI, config: SessionConfig | None = None) -> None:
        """Initialize the session.

        Args:
            api: Stateless client used for every request
            config: Defaults for experiment and run resolution
        """
        self.api = api
        self.config = config or SessionConfig()
        self.active_experiment_id: str | None = None
        self.active_run_id: str | None = None

    @classmethod
    def from_tracking_uri(cls, uri: str, config: SessionConfig | None = None, timeout: float | None = None) -> MlflowClient:
        """Create a session talking to the server at ``uri``.

        Raises:
            SetupError: If ``uri`` is not a valid absolute URI
        """
        return cls(MlflowAPI(uri, timeout=timeout), config=config)

    @classmethod
    def from_env(cls) -> MlflowClient:
        """Create a session configured from MLFLOW_* environment variables.

        Raises:
            ValueError: If MLFLOW_TRACKING_URI is not set
            SetupError: If MLFLOW_TRACKING_URI is not a valid absolute URI
        """
        config = SessionConfig.from_env()
        if config.tracking_uri is None:
            raise ValueError("MLFLOW_TRACKING_URI is not set")
        return cls.from_tracking_uri(config.tracking_uri, config=config, timeout=get_request_timeout())

    # ---- Helpers ----------------------------------------------------------

    @staticmethod
    def _call(action: str, request: Callable[[], T]) -> T:
        try:
            return request()
        except ClientError as e:
            raise SessionError.from_client_error(e, action) from e

    def _require_active_run(self) -> str:
        if self.active_run_id is None:
            raise SessionError(SessionErrorKind.NO_ACTIVE_RUN, "No active run. Call start_run() or resume_run() first.")
        return self.active_run_id

    def _create_experiment(self, name: str) -> str:
        try:
            experiment_id = self.api.create_experiment(name)
        except ApiError as e:
            if e.error_code is not CreateExperimentErrorCode.RESOURCE_ALREADY_EXISTS:
                raise SessionError.from_client_error(e, f"create experiment '{name}'") from e
            # Created by someone else since our lookup
            logger.debug(f"Experiment '{name}' appeared concurrently, looking it up again")
            return self._call(f"look up experiment '{name}'", lambda: self.api.get_experiment_by_name(name)).experiment_id
        except ClientError as e:
            raise SessionError.from_client_error(e, f"create experiment '{name}'") from e

        logger.info(f"Created experiment '{name}' with id {experiment_id}")
        return experiment_id

    def _resolve_experiment_id(self, experiment_id: str | None) -> str:
        """Pick the experiment of a new run.

        Resolution priority:
        1. Explicit ``experiment_id`` argument
        2. Experiment made active by set_experiment() or a previous run
        3. ``config.experiment_name``, created if missing
        4. ``config.experiment_id``
        5. The experiment named "Default", created if missing

        Step 2 comes before the configured defaults so that set_experiment()
        and consecutive runs stay in the same experiment. Without it a session
        configured with an experiment name would ignore set_experiment().
        """
        if experiment_id is not None:
            return experiment_id
        if self.active_experiment_id is not None:
            return self.active_experiment_id
        if self.config.experiment_name:
            return self.set_experiment(self.config.experiment_name)
        if self.config.experiment_id:
            return self.config.experiment_id
        return self.set_experiment(DEFAULT_EXPERIMENT_NAME)

    # ---- Experiments ------------------------------------------------------

    def set_experiment(self, name: str) -> str:
        """Make the experiment called ``name`` active, creating it if needed.

        Args:
            name: Experiment name

        Returns:
            The id of the now active experiment.

        Raises:
            SessionError: If the lookup or the creation fails
        """
        try:
            experiment_id = self.api.get_experiment_by_name(name).experiment_id
        except ApiError as e:
            if e.error_code is not GetExperimentErrorCode.RESOURCE_DOES_NOT_EXIST:
                raise SessionError.from_client_error(e, f"look up experiment '{name}'") from e
            experiment_id = self._create_experiment(name)
        except ClientError as e:
            raise SessionError.from_client_error(e, f"look up experiment '{name}'") from e

        self.active_experiment_id = experiment_id
        return experiment_id

    # ---- Run lifecycle ----------------------------------------------------

    def start_run(self, run_name: str | None = None, experiment_id: str | None = None, tags: Mapping[str, str] | None = None) -> Run:
        """Create a run and make it the active one.

        Args:
            run_name: Human readable name, stored in the mlflow.runName tag
            experiment_id: Experiment of the run. Resolved from the session
                state and config when omitted (see ``_resolve_experiment_id``).
            tags: Extra run tags. They take precedence over the
                mlflow.user and mlflow.runName tags set by the session.

        Returns:
            The created run.

        Raises:
            SessionError: If the experiment cannot be resolved or the run cannot be created
        """
        experiment_id = self._resolve_experiment_id(experiment_id)

        run_tags: dict[str, str] = {}
        if self.config.user:
            run_tags[USER_TAG] = self.config.user
        if run_name:
            run_tags[RUN_NAME_TAG] = run_name
        run_tags.update(tags or {})

        run = self._call(
            f"create a run in experiment {experiment_id}",
            lambda: self.api.create_run(
                experiment_id,
                start_time=now_ms(),
                tags=[RunTag(key=key, value=value) for key, value in run_tags.items()],
            ),
        )
        self.active_experiment_id = experiment_id
        self.active_run_id = run.info.run_id
        logger.info(f"Started run {run.info.run_id} in experiment {experiment_id}")
        return run

    def ensure_active_run(self) -> str:
        """Return the active run id, starting a run with the default chain if there is none."""
        if self.active_run_id is None:
            self.start_run()
        return self._require_active_run()

    def resume_run(self, run_id: str | None = None) -> Run:
        """Make an existing run the active one.

        Args:
            run_id: Run to resume. ``config.run_id`` when omitted.

        Returns:
            The resumed run as stored on the server.

        Raises:
            SessionError: NO_RUN_ID if no id is available, NOT_FOUND if the
                run does not exist, QUERY or API for other failures
        """
        run_id = run_id or self.config.run_id
        if not run_id:
            raise SessionError(SessionErrorKind.NO_RUN_ID, "No run id given and none configured")

        run = self._call(f"resume run {run_id}", lambda: self.api.get_run(run_id))
        self.active_run_id = run.info.run_id
        self.active_experiment_id = run.info.experiment_id
        logger.info(f"Resumed run {run.info.run_id}")
        return run

    def active_run(self) -> Run:
        """Fetch the active run from the server."""
        run_id = self._require_active_run()
        return self._call(f"get run {run_id}", lambda: self.api.get_run(run_id))

    def update_run_status(self, status: RunStatus) -> RunInfo:
        """Set the status of the active run.

        Terminal statuses (FINISHED, FAILED, KILLED) also stamp the end time
        with the current time and leave the session without an active run, so
        the next logging call starts a new one. Other statuses leave the end
        time unset and the run active.
        """
        run_id = self._require_active_run()
        end_time = now_ms() if status.is_terminal else None
        run_info = self._call(f"update run {run_id}", lambda: self.api.update_run(run_id, status, end_time=end_time))
        if status.is_terminal:
            self.active_run_id = None
        return run_info

    def end_run(self, status: RunStatus = RunStatus.FINISHED) -> RunInfo:
        """End the active run.

        The ended run is no longer active. Use the returned metadata or
        ``api.get_run`` to read it back.

        Args:
            status: Final status (default: FINISHED)

        Returns:
            The updated run metadata.
        """
        run_info = self.update_run_status(status)
        logger.info(f"Run {run_info.run_id} ended with status {run_info.status.value}")
        return run_info

    # ---- Logging under the active run -------------------------------------

    def log_param(self, key: str, value: Any) -> None:
        """Log a param on the active run. The value is sent as a string."""
        validate_key(key, "param key")
        run_id = self.ensure_active_run()
        self._call(f"log param '{key}'", lambda: self.api.log_param(run_id, key, str(value)))

    def log_params(self, params: Mapping[str, Any]) -> None:
        """Log several params on the active run in one request."""
        for key in params:
            validate_key(key, "param key")
        self.log_batch(params=[Param(key=key, value=str(value)) for key, value in params.items()])

    def log_metric(self, key: str, value: float, step: int | None = None, timestamp: Timestamp | None = None) -> None:
        """Log a metric value on the active run.

        Args:
            key: Metric name
            value: Metric value
            step: Training step (default: 0, applied by the server)
            timestamp: Time of the measurement, as Unix milliseconds,
                datetime or ISO 8601 string (default: now)
        """
        validate_key(key, "metric key")
        ts = to_ms(timestamp) if timestamp is not None else now_ms()
        run_id = self.ensure_active_run()
        self._call(f"log metric '{key}'", lambda: self.api.log_metric(run_id, key, value, ts, step=step))

    def log_metrics(self, metrics: Mapping[str, float], step: int | None = None, timestamp: Timestamp | None = None) -> None:
        """Log several metrics on the active run in one request, sharing step and timestamp."""
        for key in metrics:
            validate_key(key, "metric key")
        ts = to_ms(timestamp) if timestamp is not None else now_ms()
        self.log_batch(metrics=[Metric(key=key, value=value, timestamp=ts, step=step or 0) for key, value in metrics.items()])

    def set_tag(self, key: str, value: str) -> None:
        """Set a tag on the active run."""
        validate_key(key, "tag key")
        run_id = self.ensure_active_run()
        self._call(f"set tag '{key}'", lambda: self.api.set_run_tag(run_id, key, str(value)))

    def set_tags(self, tags: Mapping[str, str]) -> None:
        """Set several tags on the active run in one request."""
        for key in tags:
            validate_key(key, "tag key")
        self.log_batch(tags=[RunTag(key=key, value=str(value)) for key, value in tags.items()])

    def delete_tag(self, key: str) -> None:
        """Delete a tag from the active run."""
        run_id = self.ensure_active_run()
        self._call(f"delete tag '{key}'", lambda: self.api.delete_run_tag(run_id, key))

    def log_batch(
        self,
        metrics: Sequence[Metric] | None = None,
        params: Sequence[Param] | None = None,
        tags: Sequence[RunTag] | None = None,
    ) -> None:
        """Log metrics, params and tags on the active run in one request."""
        run_id = self.ensure_active_run()
        self._call(f"log batch to run {run_id}", lambda: self.api.log_batch(run_id, metrics=metrics, params=params, tags=tags))

    def get_metric_history(self, key: str) -> list[Metric]:
        """Get every logged value of a metric of the active run."""
        run_id = self._require_active_run()
        return self._call(f"get history of metric '{key}'", lambda: self.api.get_metric_history(run_id, key))

    def list_artifacts(self, path: str | None = None) -> ArtifactListing:
        """List the artifacts of the active run."""
        run_id = self.ensure_active_run()
        return self._call(f"list artifacts of run {run_id}", lambda: self.api.list_artifacts(run_id, path=path))

    # ---- Search -----------------------------------------------------------

    def search_runs(
        self,
        experiment_ids: Sequence[str] | None = None,
        filter: str | None = None,
        run_view_type: ViewType | None = None,
        max_results: int | None = None,
        order_by: Sequence[str] | None = None,
        page_token: str | None = None,
    ) -> SearchRunsPage:
        """Search runs, with session defaults for omitted arguments.

        Args:
            experiment_ids: Experiments to search (default: the active experiment)
            filter: Search expression over metrics, params and tags
            run_view_type: Lifecycle stages to include (default: ACTIVE_ONLY)
            max_results: Page size (default: 100000)
            order_by: Ordering clauses
            page_token: Token of the page to fetch

        Raises:
            SessionError: NO_EXPERIMENT if no ids are given and no experiment is active
        """
        if experiment_ids is None:
            if self.active_experiment_id is None:
                raise SessionError(SessionErrorKind.NO_EXPERIMENT, "No experiment ids given and no active experiment")
            experiment_ids = [self.active_experiment_id]

        ids = list(experiment_ids)
        return self._call(
            f"search runs of experiments {ids}",
            lambda: self.api.search_runs(
                ids,
                filter=filter,
                run_view_type=run_view_type if run_view_type is not None else ViewType.ACTIVE_ONLY,
                max_results=max_results if max_results is not None else DEFAULT_SEARCH_MAX_RESULTS,
                order_by=order_by,
                page_token=page_token,
            ),
        )
