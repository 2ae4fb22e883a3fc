"""Tests for the mlflow-api command line interface."""

import json

import pytest

from mlflow_api.cli import build_parser, main


class TestParser:
    """Tests for argument parsing."""

    def test_uri_defaults_to_env(self, monkeypatch):
        """Test that --uri falls back to MLFLOW_TRACKING_URI."""
        monkeypatch.setenv("MLFLOW_TRACKING_URI", "http://env-host:5000")

        args = build_parser().parse_args(["list-experiments"])

        assert args.uri == "http://env-host:5000"

    def test_explicit_uri(self):
        """Test that -u overrides the environment."""
        args = build_parser().parse_args(["-u", "http://other:5000", "get-experiment", "3"])

        assert args.uri == "http://other:5000"
        assert args.command == "get-experiment"
        assert args.experiment_id == "3"

    def test_subcommand_required(self):
        """Test that a subcommand must be given."""
        with pytest.raises(SystemExit):
            build_parser().parse_args([])

    def test_view_type_choices(self):
        """Test that only known view types are accepted."""
        with pytest.raises(SystemExit):
            build_parser().parse_args(["list-experiments", "--view-type", "SOME"])


class TestMain:
    """Tests for main against the in-memory tracking server."""

    def test_create_and_get_experiment(self, api, capsys):
        """Test creating an experiment and reading it back as JSON."""
        main(["create-experiment", "cli-exp"], api=api)
        experiment_id = json.loads(capsys.readouterr().out)

        main(["get-experiment", experiment_id], api=api)
        experiment = json.loads(capsys.readouterr().out)

        assert experiment["name"] == "cli-exp"
        assert experiment["lifecycle_stage"] == "active"

    def test_list_experiments(self, api, capsys):
        """Test that the listing is printed as a JSON array."""
        api.create_experiment("a")
        api.create_experiment("b")

        main(["list-experiments", "--view-type", "ALL"], api=api)

        assert sorted(e["name"] for e in json.loads(capsys.readouterr().out)) == ["a", "b"]

    def test_commands_without_output(self, api, capsys):
        """Test that delete, update and tag commands print nothing."""
        experiment_id = api.create_experiment("exp")

        main(["set-experiment-tag", experiment_id, "team", "vision"], api=api)
        main(["update-experiment", experiment_id, "renamed"], api=api)
        main(["delete-experiment", experiment_id], api=api)

        assert capsys.readouterr().out == ""
        experiment = api.get_experiment(experiment_id)
        assert experiment.name == "renamed"
        assert experiment.lifecycle_stage.value == "deleted"

    def test_create_run_and_list_artifacts(self, api, store, capsys):
        """Test creating a run and listing its artifacts."""
        experiment_id = api.create_experiment("exp")

        main(["create-run", experiment_id], api=api)
        run = json.loads(capsys.readouterr().out)
        run_id = run["info"]["run_id"]
        store.add_artifact(run_id, "model.pkl", file_size=42)

        main(["list-artifacts", run_id], api=api)
        listing = json.loads(capsys.readouterr().out)

        assert run["info"]["status"] == "RUNNING"
        assert listing["files"] == [{"path": "model.pkl", "is_dir": False, "file_size": 42}]

    def test_get_experiment_by_name(self, api, capsys):
        """Test looking up an experiment by name."""
        experiment_id = api.create_experiment("named")

        main(["get-experiment-by-name", "named"], api=api)

        assert json.loads(capsys.readouterr().out)["experiment_id"] == experiment_id

    def test_api_error_exits(self, api, capsys):
        """Test that API errors are printed to stderr with exit code 1."""
        with pytest.raises(SystemExit) as exc_info:
            main(["get-experiment", "999"], api=api)

        assert exc_info.value.code == 1
        assert "RESOURCE_DOES_NOT_EXIST" in capsys.readouterr().err

    def test_missing_uri(self, capsys):
        """Test that a URI is required when no client is given."""
        with pytest.raises(SystemExit) as exc_info:
            main(["list-experiments"])

        assert exc_info.value.code == 2
        assert "MLFLOW_TRACKING_URI" in capsys.readouterr().err

    def test_invalid_uri(self, capsys):
        """Test that an invalid URI is reported before any request."""
        with pytest.raises(SystemExit) as exc_info:
            main(["-u", "not a url", "list-experiments"])

        assert exc_info.value.code == 1
        assert "Invalid URL: 'not a url'" in capsys.readouterr().err

    def test_invalid_timeout(self, monkeypatch, capsys):
        """Test that a bad MLFLOW_HTTP_REQUEST_TIMEOUT is reported."""
        monkeypatch.setenv("MLFLOW_HTTP_REQUEST_TIMEOUT", "never")

        with pytest.raises(SystemExit) as exc_info:
            main(["-u", "http://localhost:5000", "list-experiments"])

        assert exc_info.value.code == 1
        assert "MLFLOW_HTTP_REQUEST_TIMEOUT" in capsys.readouterr().err
