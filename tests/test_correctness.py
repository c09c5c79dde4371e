"""Test numerical correctness of the compiled kernel against the plain-Python baseline."""

from pathlib import Path

import numpy as np
import pytest

from ascii_mandelbrot.baseline import compute_mandelbrot
from ascii_mandelbrot.computation import compute_grid
from ascii_mandelbrot.config import load_sweep_configs
from ascii_mandelbrot.execution import compute_report

TEST_CONFIGS = load_sweep_configs(Path(__file__).parent / "test_configs.yaml")


@pytest.mark.parametrize("config", TEST_CONFIGS, ids=lambda c: c.run_name)
def test_kernel_matches_baseline(config):
    grid = compute_grid(config.max_iters, config.region, config.width, config.height)
    baseline = compute_mandelbrot(config.max_iters, config.region, config.width, config.height)

    np.testing.assert_array_equal(grid, np.asarray(baseline), err_msg=f"Mismatch: {config.run_name}")


@pytest.mark.parametrize("config", TEST_CONFIGS, ids=lambda c: c.run_name)
def test_chunked_report_matches_baseline(config):
    report = compute_report(config)
    baseline = compute_mandelbrot(config.max_iters, config.region, config.width, config.height)

    np.testing.assert_array_equal(report.grid, np.asarray(baseline))
    assert len(report.chunks) == config.total_chunks


def test_sweep_file_expands_to_all_combinations():
    # 3 caps x 2 domains x 2 shapes
    assert len(TEST_CONFIGS) == 12
    assert {c.image_size for c in TEST_CONFIGS} == {"16x8", "21x7"}
