"""
Sample script logging a few random training runs to an MLflow tracking server.

Usage:
    # Terminal 1: Start a tracking server
    mlflow server --port 5000

    # Terminal 2: Run this script
    MLFLOW_TRACKING_URI=http://localhost:5000 python examples/log_random_runs.py
"""

import argparse
import math
import random

from mlflow_api import MlflowClient, RunStatus, SessionError


def training_metrics(step: int, total_steps: int, run_index: int) -> dict[str, float]:
    """
    Fake metrics for one training step.

    Accuracy rises and loss falls over the run, with noise growing with the
    run index so the curves are easy to tell apart.
    """
    progress = step / total_steps
    noise = 0.02 * (1 + run_index)
    accuracy = 0.3 + 0.6 * math.log1p(5 * progress) / math.log(6) + random.gauss(0, noise)
    loss = 1.2 * math.exp(-3 * progress) + abs(random.gauss(0, noise))
    return {
        "accuracy": max(0.0, min(1.0, accuracy)),
        "loss": max(0.01, loss),
    }


def log_run(client: MlflowClient, run_index: int, total_steps: int) -> str:
    """
    Log one run in the active experiment.

    Returns:
        Id of the created run
    """
    run = client.start_run(run_name=f"random_run_{run_index}", tags={"generator": "log_random_runs"})
    client.log_params(
        {
            "learning_rate": 0.01 * (1 + 0.2 * run_index),
            "batch_size": 32 * (1 + run_index % 2),
            "optimizer": ["adam", "sgd", "rmsprop"][run_index % 3],
        }
    )

    for step in range(total_steps):
        client.log_metrics(training_metrics(step, total_steps, run_index), step=step)

    client.end_run(RunStatus.FINISHED)
    return run.info.run_id


def main() -> None:
    parser = argparse.ArgumentParser(description="Log random runs to an MLflow tracking server")
    parser.add_argument("--experiment", default="random-runs", help="Experiment to log into")
    parser.add_argument("--runs", type=int, default=3, help="Number of runs")
    parser.add_argument("--steps", type=int, default=50, help="Steps per run")
    args = parser.parse_args()

    client = MlflowClient.from_env()
    try:
        experiment_id = client.set_experiment(args.experiment)
        print(f"Logging {args.runs} runs into experiment {experiment_id}")
        for run_index in range(args.runs):
            run_id = log_run(client, run_index, args.steps)
            print(f"  Finished run {run_id}")
    except SessionError as e:
        print(f"Error ({e.kind.value}): {e}")
        raise SystemExit(1) from e

    page = client.search_runs(order_by=["metrics.loss ASC"], max_results=1)
    if page.runs:
        best = page.runs[0]
        print(f"Lowest final loss: {best.info.run_id}")


if __name__ == "__main__":
    main()
