"""Render pipeline, suites and run reports."""

import numpy as np
import pytest
from mandelbmp.config import default_render_config
from mandelbmp.execution import run_render, run_suite
from mandelbmp.report import RenderReport

SMALL = default_render_config(image_size="24x12", resolution=8.0, x_center=-0.5, y_center=0.0, max_iter=80)


@pytest.fixture(autouse=True)
def _skip_mlflow(monkeypatch):
    monkeypatch.setenv("SKIP_MLFLOW", "1")


def test_run_render_writes_bitmap(tmp_path, capsys):
    output = tmp_path / "small.bmp"
    report = run_render(SMALL, output)

    assert output.exists()
    assert report.image.shape == (12, 24, 3)
    assert set(report.timing) == {"render_time", "write_time", "wall_time"}
    assert "[Run] Rendering" in capsys.readouterr().out


def test_run_render_defaults_to_config_filename(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    config = default_render_config(image_size="8x8", filename="named.bmp")
    run_render(config)
    assert (tmp_path / "named.bmp").exists()


def test_tracking_respects_skip_flag(tmp_path, capsys):
    run_render(SMALL, tmp_path / "small.bmp", track=True)
    assert "skipping MLflow" in capsys.readouterr().out


def test_repeated_renders_are_byte_identical(tmp_path):
    run_render(SMALL, tmp_path / "a.bmp")
    run_render(SMALL, tmp_path / "b.bmp")
    assert (tmp_path / "a.bmp").read_bytes() == (tmp_path / "b.bmp").read_bytes()


def test_run_suite_renders_each_config(tmp_path):
    configs = [
        ("first", default_render_config(image_size="8x8", filename="first.bmp")),
        ("second", default_render_config(image_size="8x4", filename="second.bmp")),
    ]
    assert run_suite(configs, tmp_path) == 0
    assert (tmp_path / "first.bmp").exists()
    assert (tmp_path / "second.bmp").exists()


def test_run_suite_reports_failures(tmp_path, capsys):
    blocker = tmp_path / "blocker"
    blocker.write_text("")
    configs = [("broken", default_render_config(image_size="4x4"))]

    assert run_suite(configs, blocker) == 1
    assert "broken" in capsys.readouterr().out


def test_run_suite_without_configs():
    assert run_suite([]) == 1


def test_report_statistics():
    iterations = np.array([[1, 2, 2], [5, 5, 5]], dtype=np.int32)
    report = RenderReport(image=np.zeros((2, 3, 3), dtype=np.uint8), iterations=iterations, max_iter=5)

    assert report.inside_fraction == pytest.approx(0.5)
    assert report.escape_histogram() == [
        {"iterations": 1, "pixels": 1},
        {"iterations": 2, "pixels": 2},
        {"iterations": 5, "pixels": 3},
    ]
