"""Baseline Mandelbrot bitmap renderer in plain Python."""

from __future__ import annotations

from typing import Tuple

import numpy as np

from .config import RenderConfig


def compute_mandelbrot(config: RenderConfig) -> Tuple[np.ndarray, np.ndarray]:
    """Render ``config`` without Numba, returning ``(image, iterations)``."""
    image = np.zeros((config.height, config.width, 3), dtype=np.uint8)
    iterations = np.zeros((config.height, config.width), dtype=np.int32)

    slope = (config.colour_depth - config.colour_floor) / 60.0
    lo = float(config.colour_floor)
    hi = float(config.colour_depth)

    for col in range(config.width):
        for row in range(config.height):
            x, y = config.plane_coordinate(col, row)
            a = b = zmagsqr = 0.0
            i = 0
            while i < config.max_iter and zmagsqr <= 4.0:
                i += 1
                a, b = a * a - b * b + x, 2.0 * a * b + y
                zmagsqr = a * a + b * b
            iterations[row, col] = i

            ratio = np.float32(i) / np.float32(config.max_iter)
            hue = config.colour_max - float(ratio) * config.gradient_colour_max

            if hue < 60:
                rgb = (hi, slope * hue + lo, lo)
            elif hue < 120:
                rgb = (-slope * hue + 2.0 * hi + lo, hi, lo)
            elif hue < 180:
                rgb = (lo, hi, slope * hue - 2.0 * hi + lo)
            elif hue < 240:
                rgb = (lo, -slope * hue + 4.0 * hi + lo, hi)
            elif hue < 300:
                rgb = (slope * hue - 4.0 * hi + lo, lo, hi)
            else:
                rgb = (hi, lo, -slope * hue + 6.0 * hi)

            image[row, col] = [int(min(max(c, 0.0), 255.0)) for c in rgb]

    return image, iterations
