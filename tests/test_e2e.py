"""End-to-end tests via main.py."""
import os
import subprocess
import sys

from ascii_mandelbrot.baseline import compute_mandelbrot
from ascii_mandelbrot.config import DEFAULT_RUN_CONFIG
from ascii_mandelbrot.rendering import GLYPH_TABLE, render_lines

GLYPHS = {glyph for _, _, glyph in GLYPH_TABLE}


def _run(*args):
    pythonpath = os.pathsep.join(filter(None, ["src", os.environ.get("PYTHONPATH")]))
    return subprocess.run(
        [sys.executable, "main.py", *args],
        env={**os.environ, "SKIP_MLFLOW": "1", "PYTHONPATH": pythonpath},
        capture_output=True,
        text=True,
        timeout=120,
    )


def test_default_render():
    """Default run prints the classic 80x24 view and nothing else."""
    result = _run()
    assert result.returncode == 0, f"Render failed:\n{result.stderr}"

    lines = result.stdout.splitlines()
    assert len(lines) == 24
    assert all(len(line) == 80 for line in lines)
    assert set("".join(lines)) <= GLYPHS

    config = DEFAULT_RUN_CONFIG
    baseline = compute_mandelbrot(config.max_iters, config.region, config.width, config.height)
    assert lines == render_lines(baseline)

    # row 12 is the real axis; c = -2 and c = -0.0125 never escape
    assert lines[12][0] == "%"
    assert lines[12][53] == "%"
    # c = -2 - i escapes right after the first update
    assert lines[0][0] == " "


def test_overrides():
    result = _run("--image-size=20x6", "--max-iters=50")
    assert result.returncode == 0, result.stderr
    lines = result.stdout.splitlines()
    assert len(lines) == 6
    assert all(len(line) == 20 for line in lines)


def test_invalid_override_exits_nonzero():
    result = _run("--image-size=0x6")
    assert result.returncode != 0
    assert "ERROR" in result.stderr


def test_tests_suite():
    """Run TESTS suite end-to-end - should complete without errors."""
    result = _run("--sweep", "configs/sweeps.yaml", "--suite", "TESTS")
    assert result.returncode == 0, f"Suite failed:\n{result.stdout}\n{result.stderr}"
    assert "Successful: 4" in result.stderr
    assert len(result.stdout.splitlines()) == 12 + 24 + 12 + 24


def test_list_suites():
    result = _run("--sweep", "configs/sweeps.yaml", "--list-suites")
    assert result.returncode == 0
    assert "TESTS: 4 configurations" in result.stdout
