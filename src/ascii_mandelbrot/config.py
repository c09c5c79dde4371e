"""Configuration objects and YAML loading for Mandelbrot renders."""

from __future__ import annotations

import math
from dataclasses import asdict, dataclass, replace
from itertools import product
from pathlib import Path
from typing import Dict, Iterable, List, NamedTuple, Tuple

import yaml


class Region(NamedTuple):
    """Rectangle of the complex plane sampled by the grid."""

    x_min: float
    x_max: float
    y_min: float
    y_max: float

    @classmethod
    def from_limits(cls, xlim: Tuple[float, float], ylim: Tuple[float, float]) -> "Region":
        return cls(float(xlim[0]), float(xlim[1]), float(ylim[0]), float(ylim[1]))


@dataclass(frozen=True)
class RunConfig:
    """Parameters for a single render."""

    max_iters: int = 1000
    width: int = 80
    height: int = 24
    xlim: Tuple[float, float] = (-2.0, 1.0)
    ylim: Tuple[float, float] = (-1.0, 1.0)
    chunk_size: int = 8  # rows per chunk

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise ValueError(f"Image size must be positive, got {self.width}x{self.height}")
        if self.max_iters < 0:
            raise ValueError(f"max_iters must be non-negative, got {self.max_iters}")
        if self.chunk_size <= 0:
            raise ValueError(f"chunk_size must be positive, got {self.chunk_size}")
        if not all(math.isfinite(v) for v in (*self.xlim, *self.ylim)):
            raise ValueError(f"Region bounds must be finite, got xlim={self.xlim} ylim={self.ylim}")

    @property
    def region(self) -> Region:
        return Region.from_limits(self.xlim, self.ylim)

    @property
    def total_chunks(self) -> int:
        return (self.height + self.chunk_size - 1) // self.chunk_size

    @property
    def run_name(self) -> str:
        """Unique run name embedding all parameters."""
        return (
            f"it{self.max_iters}_{self.width}x{self.height}_"
            f"x{self.xlim[0]}:{self.xlim[1]}_y{self.ylim[0]}:{self.ylim[1]}"
        )

    @property
    def image_size(self) -> str:
        return f"{self.width}x{self.height}"

    def to_dict(self) -> dict:
        """Convert to dictionary for MLflow logging."""
        return asdict(self)

    def to_cli_args(self) -> List[str]:
        """Convert config to CLI arguments."""
        return [
            f"--max-iters={self.max_iters}",
            f"--chunk-size={self.chunk_size}",
            f"--image-size={self.image_size}",
            f"--xlim={self.xlim[0]}:{self.xlim[1]}",
            f"--ylim={self.ylim[0]}:{self.ylim[1]}",
        ]


DEFAULT_RUN_CONFIG = RunConfig()


def default_run_config(**overrides: object) -> RunConfig:
    """Return the canonical default config optionally overridden with kwargs."""
    data = _coerce_dimensions({k: v for k, v in overrides.items() if v is not None})
    for key in ("xlim", "ylim"):
        if key in data:
            data[key] = tuple(map(float, data[key]))
    return replace(DEFAULT_RUN_CONFIG, **data)


def load_sweep_configs(yaml_path: str | Path) -> List[RunConfig]:
    """Load a YAML sweep file and generate every parameter combination.

    Supports a top-level ``sweep`` as well as named suites nested under
    ``experiments``.
    """
    cfg = _read_yaml(yaml_path)

    global_defaults: Dict[str, object] = cfg.get("defaults", {}) or {}

    if "experiments" in cfg:
        configs: List[RunConfig] = []
        for exp in cfg.get("experiments") or []:
            sweep = exp.get("sweep")
            if not sweep:
                continue
            exp_defaults = {**global_defaults, **(exp.get("defaults", {}) or {})}
            configs.extend(_expand_sweep(exp_defaults, sweep))
        return configs

    sweep: Dict[str, object] = cfg.get("sweep", {}) or {}
    return _expand_sweep(global_defaults, sweep)


def get_config_by_index(yaml_path: str | Path, index: int) -> RunConfig:
    """Get a specific config by index from sweep."""
    configs = load_sweep_configs(yaml_path)
    if index < 0 or index >= len(configs):
        raise ValueError(f"Config index {index} out of range [0, {len(configs) - 1}]")
    return configs[index]


def load_named_sweep_configs(
    yaml_path: str | Path,
    suite: str | None = None,
) -> List[tuple[str, List[RunConfig]]]:
    cfg = _read_yaml(yaml_path)

    defaults: Dict[str, object] = cfg.get("defaults", {}) or {}
    experiments = cfg.get("experiments")
    results: List[tuple[str, List[RunConfig]]] = []

    if experiments:
        for exp in experiments:
            name = exp.get("name")
            if not name:
                continue
            if suite and name != suite:
                continue
            sweep = exp.get("sweep") or {}
            exp_defaults = {**defaults, **(exp.get("defaults", {}) or {})}
            results.append((name, _expand_sweep(exp_defaults, sweep)))
        if suite and not results:
            raise ValueError(f"Suite '{suite}' not found in {yaml_path}")
        return results

    sweep: Dict[str, object] = cfg.get("sweep", {}) or {}
    label = cfg.get("name") or Path(yaml_path).stem
    return [(label, _expand_sweep(defaults, sweep))]


def parse_image_size(value: str) -> Tuple[int, int]:
    width_str, height_str = value.lower().split("x")
    return int(width_str.strip()), int(height_str.strip())


def parse_limits(value: str) -> Tuple[float, float]:
    low, high = value.split(":")
    return float(low), float(high)


def _read_yaml(yaml_path: str | Path) -> Dict[str, object]:
    with open(yaml_path) as f:
        return yaml.safe_load(f) or {}


def _build_run_config(raw_data: Dict[str, object]) -> RunConfig:
    data = _coerce_dimensions(raw_data)
    if "xlim" in data:
        data["xlim"] = tuple(map(float, data["xlim"]))
    if "ylim" in data:
        data["ylim"] = tuple(map(float, data["ylim"]))
    if "max_iters" in data:
        data["max_iters"] = int(data["max_iters"])
    if "chunk_size" in data:
        data["chunk_size"] = int(data["chunk_size"])
    return RunConfig(**data)  # type: ignore[arg-type]


def _expand_sweep(defaults: Dict[str, object], sweep: Dict[str, object]) -> List[RunConfig]:
    """Expand sweep definition into RunConfig instances."""
    configs: List[RunConfig] = []

    domains = sweep.get("domains")
    param_grid = {k: sweep[k] for k in sweep if k not in {"domains", "image_shape"}}
    shape_options = sweep.get("image_shape")
    keys = list(param_grid.keys())

    for domain in domains or [None]:
        combos = product(*[param_grid[k] for k in keys]) if keys else [()]
        for combo in combos:
            data = {**defaults, **dict(zip(keys, combo))}
            if domain is not None:
                xlim, ylim = domain
                data["xlim"] = tuple(map(float, xlim))
                data["ylim"] = tuple(map(float, ylim))
            configs.extend(_expand_shapes(data, shape_options))

    return configs


def _coerce_dimensions(data: Dict[str, object]) -> Dict[str, object]:
    result = dict(data)
    for key in ("image_size", "image_shape"):
        entry = result.pop(key, None)
        if entry is not None:
            width, height = _normalize_shape_entry(entry)
            result.setdefault("width", width)
            result.setdefault("height", height)
    if "width" in result:
        result["width"] = int(result["width"])
    if "height" in result:
        result["height"] = int(result["height"])
    return result


def _normalize_shape_entry(entry: object) -> Tuple[int, int]:
    if isinstance(entry, dict):
        width = entry.get("width")
        height = entry.get("height")
        if width is None or height is None:
            raise ValueError("image_shape dict must include 'width' and 'height'")
        return int(width), int(height)
    if isinstance(entry, (list, tuple)) and len(entry) == 2:
        return int(entry[0]), int(entry[1])
    if isinstance(entry, str):
        return parse_image_size(entry)
    raise ValueError(f"Unsupported image shape specification: {entry!r}")


def _expand_shapes(base: Dict[str, object], shape_options: object) -> List[RunConfig]:
    if not shape_options:
        return [_build_run_config(base)]

    shapes: Iterable[Tuple[int, int]]
    if isinstance(shape_options, (list, tuple)) and not _is_single_pair(shape_options):
        shapes = [_normalize_shape_entry(opt) for opt in shape_options]
    else:
        shapes = [_normalize_shape_entry(shape_options)]

    return [_build_run_config({**base, "width": width, "height": height}) for width, height in shapes]


def _is_single_pair(entry: object) -> bool:
    return (
        isinstance(entry, (list, tuple))
        and len(entry) == 2
        and all(isinstance(v, int) for v in entry)
    )
