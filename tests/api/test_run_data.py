"""Tests for metrics, params, tags and artifact listing."""

import pytest

from mlflow_api import ApiError, FileInfo, Metric, Param, RunErrorCode, RunTag


@pytest.fixture
def run_id(api, experiment_id):
    """Id of a fresh run in the fixture experiment."""
    return api.create_run(experiment_id).info.run_id


class TestMetrics:
    """Tests for log_metric and get_metric_history."""

    def test_history_keeps_every_value(self, api, run_id):
        """Test that a metric logged twice has two history entries but one run entry."""
        api.log_metric(run_id, "loss", 0.9, timestamp=1000, step=0)
        api.log_metric(run_id, "loss", 0.4, timestamp=2000, step=1)

        history = api.get_metric_history(run_id, "loss")
        latest = api.get_run(run_id).data.metrics

        assert [m.value for m in history] == [0.9, 0.4]
        assert latest == [Metric(key="loss", value=0.4, timestamp=2000, step=1)]

    def test_step_omitted_from_wire(self, api, store, run_id):
        """Test that an unset step is not sent and the server records 0."""
        store.requests.clear()

        api.log_metric(run_id, "acc", 0.5, timestamp=1000)

        assert store.requests[0].body == {"run_id": run_id, "key": "acc", "value": 0.5, "timestamp": 1000}
        assert api.get_metric_history(run_id, "acc")[0].step == 0

    def test_history_of_unlogged_metric(self, api, run_id):
        """Test that an unknown metric key has an empty history."""
        assert api.get_metric_history(run_id, "never") == []

    def test_missing_run(self, api):
        """Test that logging against an unknown run fails."""
        with pytest.raises(ApiError) as exc_info:
            api.log_metric("nope", "loss", 1.0, timestamp=1000)

        assert exc_info.value.error_code is RunErrorCode.RESOURCE_DOES_NOT_EXIST


class TestParams:
    """Tests for log_param."""

    def test_log_param(self, api, run_id):
        """Test that a logged param shows up on the run."""
        api.log_param(run_id, "lr", "0.01")

        assert api.get_run(run_id).data.params == [Param(key="lr", value="0.01")]

    def test_changing_param_fails(self, api, run_id):
        """Test that a param cannot be logged twice with a different value."""
        api.log_param(run_id, "lr", "0.01")

        with pytest.raises(ApiError) as exc_info:
            api.log_param(run_id, "lr", "0.1")

        assert exc_info.value.error_code is RunErrorCode.INVALID_PARAMETER_VALUE


class TestTags:
    """Tests for set_run_tag and delete_run_tag."""

    def test_set_and_overwrite(self, api, run_id):
        """Test that setting a tag twice keeps the last value."""
        api.set_run_tag(run_id, "stage", "dev")
        api.set_run_tag(run_id, "stage", "prod")

        assert api.get_run(run_id).data.tags == [RunTag(key="stage", value="prod")]

    def test_delete(self, api, run_id):
        """Test that a deleted tag disappears from the run."""
        api.set_run_tag(run_id, "stage", "dev")

        api.delete_run_tag(run_id, "stage")

        assert api.get_run(run_id).data.tags == []

    def test_delete_missing(self, api, run_id):
        """Test that deleting an unknown tag fails."""
        with pytest.raises(ApiError) as exc_info:
            api.delete_run_tag(run_id, "absent")

        assert exc_info.value.error_code is RunErrorCode.RESOURCE_DOES_NOT_EXIST


class TestLogBatch:
    """Tests for log_batch."""

    def test_logs_everything(self, api, run_id):
        """Test that metrics, params and tags from one batch are all stored."""
        api.log_batch(
            run_id,
            metrics=[Metric(key="loss", value=0.3, timestamp=1000, step=2)],
            params=[Param(key="epochs", value="10")],
            tags=[RunTag(key="stage", value="dev")],
        )

        data = api.get_run(run_id).data
        assert data.metrics == [Metric(key="loss", value=0.3, timestamp=1000, step=2)]
        assert data.params == [Param(key="epochs", value="10")]
        assert data.tags == [RunTag(key="stage", value="dev")]

    def test_only_given_kinds_are_sent(self, api, store, run_id):
        """Test that omitted kinds are left out of the body."""
        store.requests.clear()

        api.log_batch(run_id, params=[Param(key="epochs", value="10")])

        assert store.requests[0].body == {"run_id": run_id, "params": [{"key": "epochs", "value": "10"}]}


class TestListArtifacts:
    """Tests for list_artifacts."""

    def test_empty_run(self, api, run_id):
        """Test that a run without artifacts has its root URI and no files."""
        listing = api.list_artifacts(run_id)

        assert listing.root_uri.endswith(f"/{run_id}/artifacts")
        assert listing.files == []

    def test_lists_root_and_subdirectory(self, api, store, run_id):
        """Test listing the artifact root and a nested directory."""
        store.add_artifact(run_id, "model", is_dir=True)
        store.add_artifact(run_id, "metrics.json", file_size=120)
        store.add_artifact(run_id, "model/weights.bin", file_size=4096)

        root = api.list_artifacts(run_id)
        nested = api.list_artifacts(run_id, path="model")

        assert root.files == [FileInfo(path="model", is_dir=True), FileInfo(path="metrics.json", is_dir=False, file_size=120)]
        assert nested.files == [FileInfo(path="model/weights.bin", is_dir=False, file_size=4096)]

    def test_path_omitted_from_query(self, api, store, run_id):
        """Test that no path is sent when listing the root."""
        store.requests.clear()

        api.list_artifacts(run_id)

        assert store.requests[0].query == {"run_id": run_id}
