"""Execution helpers for Mandelbrot CLI workflows."""

from __future__ import annotations

import os
import sys
import time
from pathlib import Path
from typing import List, Optional, Tuple

from .bitmap import write_bitmap
from .computation import render_image
from .config import RenderConfig
from .report import RenderReport


def run_render(
    config: RenderConfig,
    output: str | Path | None = None,
    *,
    track: bool = False,
    suite_name: Optional[str] = None,
) -> RenderReport:
    """Render ``config`` and write the bitmap to ``output`` (or ``config.filename``)."""
    output_path = Path(output) if output is not None else Path(config.filename)

    print(
        f"[Run] Rendering '{config.run_name}' "
        f"(size={config.image_size}, max_iter={config.max_iter}, bit_depth={config.bit_depth})",
        flush=True,
    )

    wall_start = time.time()
    image, iterations = render_image(config)
    render_time = time.time() - wall_start

    write_start = time.time()
    write_bitmap(image, output_path, config.bit_depth)
    write_time = time.time() - write_start

    report = RenderReport(
        image=image,
        iterations=iterations,
        max_iter=config.max_iter,
        timing={
            "render_time": render_time,
            "write_time": write_time,
            "wall_time": time.time() - wall_start,
        },
    )

    print(f"[Run] Wrote {output_path} ({report.inside_fraction:.1%} of pixels inside the set)", flush=True)
    print(f"[Timing] Render: {render_time:.4f}s, write: {write_time:.4f}s", flush=True)

    if track:
        if os.environ.get("SKIP_MLFLOW"):
            print("[Run] SKIP_MLFLOW set - skipping MLflow logging.", flush=True)
        else:
            from .logging import log_to_mlflow

            print("[Run] Logging to MLflow...", flush=True)
            log_to_mlflow(config, report, suite_name or "default", output_path)

    return report


def run_suite(
    configs: List[Tuple[str, RenderConfig]],
    output_dir: str | Path | None = None,
    *,
    track: bool = False,
    descriptor: Optional[str] = None,
) -> int:
    """Render a list of named configurations, returning a process exit code."""
    if not configs:
        print("ERROR: No render configurations found", file=sys.stderr)
        return 1

    print("=" * 70)
    print(f"Rendering {len(configs)} configurations from {descriptor or 'suite'}")
    print("=" * 70)

    failures: list[tuple[int, str]] = []

    for idx, (name, config) in enumerate(configs):
        print(f"\n[{idx + 1}/{len(configs)}] {name}")
        output = Path(output_dir) / config.filename if output_dir is not None else None
        try:
            run_render(config, output, track=track, suite_name=name)
        except OSError as e:
            print(f"    ✗ FAILED: {e}", file=sys.stderr)
            failures.append((idx, name))
            continue
        print("    ✓ Completed")

    print("\n" + "=" * 70)
    print("Summary")
    print("=" * 70)
    print(f"Total:      {len(configs)}")
    print(f"Successful: {len(configs) - len(failures)}")
    print(f"Failed:     {len(failures)}")

    if failures:
        print("\nFailed configurations:")
        for idx, name in failures:
            print(f"  [{idx}] {name}")
        return 1

    return 0
