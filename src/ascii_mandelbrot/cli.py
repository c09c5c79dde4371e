from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import List, Optional

from .config import default_run_config, load_named_sweep_configs, parse_limits
from .execution import log, run_single_render, run_sweep


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Render the Mandelbrot set as character art.")
    parser.add_argument("--sweep", type=str, help="Path to sweep YAML file")
    parser.add_argument("--suite", type=str, help="Name of suite/experiment within sweep file")
    parser.add_argument("--list-suites", action="store_true", help="List suites in sweep file")
    parser.add_argument("--task-id", type=int, help="Render a single config index of the sweep")
    parser.add_argument("--track", action="store_true", help="Log the render(s) to MLflow")
    parser.add_argument("-v", "--verbose", action="store_true", help="Print progress to stderr")

    # Single render parameters, defaulting to the classic 80x24 view
    parser.add_argument("--max-iters", type=int, help="Iteration cap (default 1000)")
    parser.add_argument("--chunk-size", type=int, help="Rows computed per chunk")
    parser.add_argument("--image-size", type=str, help="Grid size as WIDTHxHEIGHT (default 80x24)")
    parser.add_argument("--xlim", type=str, help="Real axis bounds as XMIN:XMAX (default -2.0:1.0)")
    parser.add_argument("--ylim", type=str, help="Imaginary axis bounds as YMIN:YMAX (default -1.0:1.0)")

    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)

    if args.suite and not args.sweep:
        sys.exit("ERROR: --suite requires --sweep")

    if args.sweep:
        sweep_path = Path(args.sweep)

        if args.list_suites:
            for name, configs in load_named_sweep_configs(sweep_path):
                label = name or sweep_path.stem
                print(f"{label}: {len(configs)} configurations")
            return 0

        if args.task_id is not None and args.suite is None:
            sys.exit("ERROR: --task-id requires --suite")

        suites = load_named_sweep_configs(sweep_path, args.suite)

        exit_code = 0
        for suite_name, configs in suites:
            descriptor = f"{sweep_path}::{suite_name}" if suite_name else str(sweep_path)
            rc = run_sweep(sweep_path, args.task_id, suite_name, configs, descriptor, track=args.track)
            exit_code = exit_code or rc
        return exit_code

    try:
        config = default_run_config(
            max_iters=args.max_iters,
            chunk_size=args.chunk_size,
            image_size=args.image_size,
            xlim=parse_limits(args.xlim) if args.xlim else None,
            ylim=parse_limits(args.ylim) if args.ylim else None,
        )
    except ValueError as exc:
        sys.exit(f"ERROR: {exc}")

    if args.verbose:
        log(f"[Run] Config: {' '.join(config.to_cli_args())}")

    run_single_render(config, track=args.track, verbose=args.verbose)
    return 0
