"""MLflow tracking for Mandelbrot bitmap renders."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

import mlflow
import pandas as pd
from matplotlib import pyplot as plt

from .config import RenderConfig
from .report import RenderReport

DEFAULT_TRACKING_URI = "file:./mlruns"
EXPERIMENT_NAME = "mandelbmp"


def log_to_mlflow(
    config: RenderConfig,
    report: RenderReport,
    suite_name: str = "default",
    output: Optional[Path] = None,
) -> Optional[str]:
    """Log a render to MLflow with the bitmap, a preview figure and raw metrics.

    Args:
        config: Render configuration
        report: Render outputs (image, iteration counts, timing stats)
        suite_name: Name of the render suite for tagging/filtering
        output: Path of the written bitmap, attached as an artifact when given

    Returns:
        The MLflow run id, or ``None`` when logging is skipped.
    """
    # Skip logging in test mode
    if os.environ.get("SKIP_MLFLOW"):
        return None

    mlflow.set_tracking_uri(_resolve_tracking_uri())
    mlflow.set_experiment(EXPERIMENT_NAME)

    with mlflow.start_run(run_name=config.run_name) as run:
        mlflow.set_tags({
            "node_name": os.uname().nodename,
            "suite": suite_name,
        })

        mlflow.log_params(config.to_dict())

        metrics = {key: float(value) for key, value in report.timing.items()}
        metrics["inside_fraction"] = report.inside_fraction
        mlflow.log_metrics(metrics)

        histogram = report.escape_histogram()
        if histogram:
            mlflow.log_table(_records_to_table(histogram), "escape_histogram.json")

        if output is not None and Path(output).exists():
            mlflow.log_artifact(str(output), "bitmaps")

        fig, ax = plt.subplots(figsize=(8, 4.5))
        ax.imshow(report.image)
        ax.set_axis_off()
        mlflow.log_figure(fig, "figures/mandelbrot.png")
        plt.close(fig)

        print(f"[MLflow] Logged run: {config.run_name} (suite: {suite_name})", flush=True)
        print(f"[MLflow] Run ID: {run.info.run_id}", flush=True)
        return run.info.run_id


def _records_to_table(records: Sequence[Dict[str, Any]]) -> Dict[str, List[Any]]:
    """Convert row-wise records into MLflow table format."""

    frame = pd.DataFrame.from_records(records)
    return frame.to_dict(orient="list")


def _resolve_tracking_uri() -> str:
    """Resolve tracking URI."""
    return os.environ.get("MLFLOW_TRACKING_URI") or DEFAULT_TRACKING_URI
