"""Configuration objects and YAML loading for Mandelbrot bitmap renders."""

from __future__ import annotations

from dataclasses import asdict, dataclass, fields, replace
from pathlib import Path
from typing import Dict, List, Tuple

import yaml

SUPPORTED_BIT_DEPTHS = (24, 32)


@dataclass(frozen=True)
class RenderConfig:
    """Fixed constants for a single Mandelbrot render."""

    resolution: float = 8700.0  # pixels per unit of the complex plane
    x_center: float = -0.55
    y_center: float = 0.6
    max_iter: int = 1000
    width: int = 1920
    height: int = 1080
    colour_depth: int = 255  # gradient ceiling
    colour_floor: int = 1  # gradient floor
    colour_max: float = 240.0  # hue for a point escaping immediately
    gradient_colour_max: float = 230.0  # hue span down to the in-set colour
    bit_depth: int = 32
    filename: str = "my_mandelbrot_fractal.bmp"

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise ValueError(f"Image size must be positive, got {self.image_size}")
        if self.max_iter <= 0:
            raise ValueError(f"max_iter must be positive, got {self.max_iter}")
        if self.resolution <= 0:
            raise ValueError(f"resolution must be positive, got {self.resolution}")
        if self.colour_floor >= self.colour_depth:
            raise ValueError(
                f"colour_floor ({self.colour_floor}) must be below colour_depth ({self.colour_depth})"
            )
        if self.bit_depth not in SUPPORTED_BIT_DEPTHS:
            raise ValueError(f"Unsupported bit depth {self.bit_depth}, expected one of {SUPPORTED_BIT_DEPTHS}")

    @property
    def x_offset(self) -> int:
        # Truncates toward zero, so the centre pixel lands exactly on x_center.
        return int(-(self.width - 1) / 2)

    @property
    def y_offset(self) -> int:
        return int((self.height - 1) / 2)

    @property
    def center_pixel(self) -> Tuple[int, int]:
        return -self.x_offset, self.y_offset

    @property
    def image_size(self) -> str:
        return f"{self.width}x{self.height}"

    @property
    def run_name(self) -> str:
        """Generate a run name embedding the view parameters."""
        return (
            f"mandelbrot_{self.image_size}_r{self.resolution:g}_"
            f"x{self.x_center:g}_y{self.y_center:g}_i{self.max_iter}"
        )

    def plane_coordinate(self, col: int, row: int) -> Tuple[float, float]:
        """Map a pixel to its point in the complex plane."""
        x = self.x_center + (self.x_offset + col) / self.resolution
        y = self.y_center + (self.y_offset - row) / self.resolution
        return x, y

    def to_dict(self) -> dict:
        """Convert to dictionary for MLflow logging."""
        return asdict(self)


DEFAULT_RENDER_CONFIG = RenderConfig()


def default_render_config(**overrides: object) -> RenderConfig:
    """Return the canonical default config optionally overridden with kwargs."""
    return replace(DEFAULT_RENDER_CONFIG, **_coerce_fields(overrides))


def load_render_config(yaml_path: str | Path) -> RenderConfig:
    """Load a single render config from the ``defaults`` mapping of a YAML file."""
    cfg = _read_yaml(yaml_path)
    return default_render_config(**(cfg.get("defaults", {}) or {}))


def load_named_render_configs(
    yaml_path: str | Path,
    suite: str | None = None,
) -> List[tuple[str, RenderConfig]]:
    """Load the ``renders`` list of a YAML file as ``(name, config)`` pairs.

    Each entry is layered over the file's ``defaults``. A file without a
    ``renders`` list yields a single entry named after the file.
    """
    cfg = _read_yaml(yaml_path)

    defaults: Dict[str, object] = cfg.get("defaults", {}) or {}
    renders = cfg.get("renders")
    results: List[tuple[str, RenderConfig]] = []

    if renders:
        for entry in renders:
            entry = dict(entry or {})
            name = entry.pop("name", None)
            if not name:
                continue
            if suite and name != suite:
                continue
            results.append((name, default_render_config(**{**defaults, **entry})))
        if suite and not results:
            raise ValueError(f"Suite '{suite}' not found in {yaml_path}")
        return results

    label = cfg.get("name") or Path(yaml_path).stem
    return [(label, default_render_config(**defaults))]


def parse_image_size(value: str) -> Tuple[int, int]:
    width_str, height_str = value.lower().split("x")
    return int(width_str.strip()), int(height_str.strip())


def _read_yaml(yaml_path: str | Path) -> Dict[str, object]:
    with open(yaml_path) as f:
        cfg = yaml.safe_load(f) or {}
    if not isinstance(cfg, dict):
        raise ValueError(f"{yaml_path} must contain a mapping at the top level")
    return cfg


def _coerce_fields(data: Dict[str, object]) -> Dict[str, object]:
    result = dict(data)
    image = result.pop("image_size", None)
    if image is not None:
        width, height = parse_image_size(str(image))
        result.setdefault("width", width)
        result.setdefault("height", height)
    unknown = set(result) - {f.name for f in fields(RenderConfig)}
    if unknown:
        raise ValueError(f"Unknown render settings: {', '.join(sorted(unknown))}")
    for key in ("width", "height", "max_iter", "colour_depth", "colour_floor", "bit_depth"):
        if key in result:
            result[key] = int(result[key])
    for key in ("resolution", "x_center", "y_center", "colour_max", "gradient_colour_max"):
        if key in result:
            result[key] = float(result[key])
    return result
