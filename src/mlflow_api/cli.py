#!/usr/bin/env python3
"""
mlflow-api CLI tool

Command line interface to inspect and edit experiments and runs on an MLflow
tracking server.
"""

from __future__ import annotations

import argparse
import json
import sys
from typing import Any

from mlflow_api.api import MlflowAPI
from mlflow_api.config import get_request_timeout, get_tracking_uri
from mlflow_api.exceptions import ClientError, SetupError
from mlflow_api.models import ViewType
from mlflow_api.utils.timestamp import now_ms


def _to_json(result: Any) -> str:
    """Render a command result (model, list of models, or scalar) as indented JSON."""
    return json.dumps(result, default=lambda obj: obj.model_dump(mode="json", exclude_none=True), indent=2)


def run_command(api: MlflowAPI, args: argparse.Namespace) -> Any:
    """
    Execute a parsed subcommand against the API

    Args:
        api: Client connected to the tracking server
        args: Parsed command line arguments

    Returns:
        The value returned by the API call (None for commands without output)

    Raises:
        ClientError: If the API call fails
        ValueError: If the command is unknown
    """
    if args.command == "create-experiment":
        return api.create_experiment(args.name, artifact_location=args.artifact_location)
    if args.command == "list-experiments":
        view_type = ViewType(args.view_type) if args.view_type else None
        return api.list_experiments(view_type=view_type)
    if args.command == "get-experiment":
        return api.get_experiment(args.experiment_id)
    if args.command == "get-experiment-by-name":
        return api.get_experiment_by_name(args.experiment_name)
    if args.command == "delete-experiment":
        return api.delete_experiment(args.experiment_id)
    if args.command == "update-experiment":
        return api.update_experiment(args.experiment_id, args.new_name)
    if args.command == "set-experiment-tag":
        return api.set_experiment_tag(args.experiment_id, args.key, args.value)
    if args.command == "create-run":
        return api.create_run(args.experiment_id, start_time=now_ms())
    if args.command == "list-artifacts":
        return api.list_artifacts(args.run_id, path=args.path)
    raise ValueError(f"Unknown command: {args.command}")


def build_parser() -> argparse.ArgumentParser:
    """
    Build the argument parser

    Returns:
        Parser with one subcommand per supported API call
    """
    parser = argparse.ArgumentParser(prog="mlflow-api", description="CLI to interact with the MLflow tracking API")
    parser.add_argument(
        "-u",
        "--uri",
        default=get_tracking_uri(),
        help="URI of the MLflow server (default: MLFLOW_TRACKING_URI)",
    )
    subparsers = parser.add_subparsers(dest="command", required=True, help="Subcommands")

    create_experiment_parser = subparsers.add_parser("create-experiment", help="Create an experiment")
    create_experiment_parser.add_argument("name", help="Name of the experiment to create")
    create_experiment_parser.add_argument("--artifact-location", default=None, help="Where to store artifacts (default: server default)")

    list_experiments_parser = subparsers.add_parser("list-experiments", help="List experiments")
    list_experiments_parser.add_argument(
        "--view-type",
        choices=[view_type.value for view_type in ViewType],
        default=None,
        help="Lifecycle stages to list (default: ACTIVE_ONLY, applied by the server)",
    )

    get_experiment_parser = subparsers.add_parser("get-experiment", help="Get an experiment")
    get_experiment_parser.add_argument("experiment_id", help="Id of the experiment to get")

    get_by_name_parser = subparsers.add_parser("get-experiment-by-name", help="Get an experiment by its name")
    get_by_name_parser.add_argument("experiment_name", help="Name of the experiment to get")

    delete_experiment_parser = subparsers.add_parser("delete-experiment", help="Delete an experiment")
    delete_experiment_parser.add_argument("experiment_id", help="Id of the experiment to delete")

    update_experiment_parser = subparsers.add_parser("update-experiment", help="Rename an experiment")
    update_experiment_parser.add_argument("experiment_id", help="Id of the experiment to update")
    update_experiment_parser.add_argument("new_name", help="New name for the experiment")

    set_tag_parser = subparsers.add_parser("set-experiment-tag", help="Set a tag on an experiment")
    set_tag_parser.add_argument("experiment_id", help="Id of the experiment to tag")
    set_tag_parser.add_argument("key", help="Name of the tag")
    set_tag_parser.add_argument("value", help="Value of the tag")

    create_run_parser = subparsers.add_parser("create-run", help="Create a run for an experiment")
    create_run_parser.add_argument("experiment_id", help="Id of the experiment for the new run")

    list_artifacts_parser = subparsers.add_parser("list-artifacts", help="List artifacts of a run")
    list_artifacts_parser.add_argument("run_id", help="Id of the run to list artifacts of")
    list_artifacts_parser.add_argument("--path", default=None, help="Directory to list, relative to the artifact root")

    return parser


def main(argv: list[str] | None = None, api: MlflowAPI | None = None) -> None:
    """
    CLI main entry point

    Args:
        argv: Command line arguments (default: sys.argv[1:])
        api: Client to use instead of one built from --uri
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    if api is None:
        if not args.uri:
            parser.error("the tracking server URI is required (--uri or MLFLOW_TRACKING_URI)")
        try:
            api = MlflowAPI(args.uri, timeout=get_request_timeout())
        except (SetupError, ValueError) as e:
            print(f"Error: {e}", file=sys.stderr)
            sys.exit(1)

    try:
        result = run_command(api, args)
    except ClientError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    if result is not None:
        print(_to_json(result))


if __name__ == "__main__":
    main()
