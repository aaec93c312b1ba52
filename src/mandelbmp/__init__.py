"""Mandelbrot set bitmap renderer with an escape-time kernel and hue gradient."""

__version__ = "1.0.0"

# Core computation and config - lightweight, no I/O dependencies
from .computation import escape_time, ground_color_mix, render_image
from .config import RenderConfig, default_render_config
from .report import RenderReport


# Conditional imports - only loaded when needed
def __getattr__(name):
    """Lazy loading of heavy modules."""
    if name == "run_render":
        from .execution import run_render

        return run_render
    elif name == "write_bitmap":
        from .bitmap import write_bitmap

        return write_bitmap
    elif name == "load_named_render_configs":
        from .config import load_named_render_configs

        return load_named_render_configs
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


__all__ = [
    "RenderConfig",
    "default_render_config",
    "escape_time",
    "ground_color_mix",
    "render_image",
    "RenderReport",
    "run_render",
    "write_bitmap",
    "load_named_render_configs",
]
