from __future__ import annotations

from typing import Tuple

import numpy as np
from numba import njit

from .config import RenderConfig

__all__ = [
    "MAX_ITER",
    "allocate_image",
    "escape_time",
    "ground_color_mix",
    "gradient_hue",
    "pixel_color",
    "render_image",
]

MAX_ITER = 1000
ESCAPE_RADIUS_SQR = 4.0
SECTOR_WIDTH = 60.0
CHANNEL_LIMIT = 255.0

# One row per 60 degree hue sector, red -> yellow -> green -> cyan -> blue -> magenta.
# Columns: interpolated channel, channel pinned to max, channel pinned to min.
_SECTOR_CHANNELS = np.array(
    [
        [1, 0, 2],
        [0, 1, 2],
        [2, 1, 0],
        [1, 2, 0],
        [0, 2, 1],
        [2, 0, 1],
    ],
    dtype=np.int64,
)

# Interpolated value = sign * slope * x + max_mult * max + min_mult * min.
# The last sector carries no min term.
_SECTOR_TERMS = np.array(
    [
        [1.0, 0.0, 1.0],
        [-1.0, 2.0, 1.0],
        [1.0, -2.0, 1.0],
        [-1.0, 4.0, 1.0],
        [1.0, -4.0, 1.0],
        [-1.0, 6.0, 0.0],
    ],
    dtype=np.float64,
)


@njit
def escape_time(x: float, y: float, max_iter: int = MAX_ITER) -> int:
    """Number of iterations of z <- z**2 + c before |z| exceeds 2, capped at ``max_iter``."""
    a = 0.0
    b = 0.0
    zmagsqr = 0.0
    iteration = 0
    while iteration < max_iter and zmagsqr <= ESCAPE_RADIUS_SQR:
        iteration += 1
        a_next = a * a - b * b + x
        b_next = 2.0 * a * b + y
        zmagsqr = a_next * a_next + b_next * b_next
        a = a_next
        b = b_next
    return iteration


@njit
def _hue_sector(x: float) -> int:
    sector = 0
    while sector < 5 and x >= SECTOR_WIDTH * (sector + 1):
        sector += 1
    return sector


@njit
def ground_color_mix(x: float, min_value: float, max_value: float) -> Tuple[float, float, float]:
    """Piecewise-linear RGB gradient around a 360 degree hue wheel.

    Within each 60 degree sector one channel is pinned to ``max_value``, one to
    ``min_value`` and the third is interpolated. Hues below 0 fall into the
    first sector and hues of 360 or more into the last; neither is rejected.
    """
    sector = _hue_sector(x)
    slope = (max_value - min_value) / SECTOR_WIDTH
    interpolated = (
        _SECTOR_TERMS[sector, 0] * slope * x
        + _SECTOR_TERMS[sector, 1] * max_value
        + _SECTOR_TERMS[sector, 2] * min_value
    )

    color = np.empty(3, dtype=np.float64)
    color[_SECTOR_CHANNELS[sector, 0]] = interpolated
    color[_SECTOR_CHANNELS[sector, 1]] = max_value
    color[_SECTOR_CHANNELS[sector, 2]] = min_value
    return color[0], color[1], color[2]


@njit
def gradient_hue(iteration: int, max_iter: int, colour_max: float, gradient_colour_max: float) -> float:
    # Ratio is taken in single precision.
    ratio = np.float32(iteration) / np.float32(max_iter)
    return colour_max - np.float64(ratio) * gradient_colour_max


@njit
def _to_channel(value: float) -> np.uint8:
    return np.uint8(int(min(max(value, 0.0), CHANNEL_LIMIT)))


@njit
def _pixel(
    col: int,
    row: int,
    x_center: float,
    y_center: float,
    x_offset: int,
    y_offset: int,
    resolution: float,
    max_iter: int,
    colour_floor: float,
    colour_depth: float,
    colour_max: float,
    gradient_colour_max: float,
) -> Tuple[int, np.uint8, np.uint8, np.uint8]:
    x = x_center + (x_offset + col) / resolution
    y = y_center + (y_offset - row) / resolution
    iteration = escape_time(x, y, max_iter)
    hue = gradient_hue(iteration, max_iter, colour_max, gradient_colour_max)
    red, green, blue = ground_color_mix(hue, colour_floor, colour_depth)
    return iteration, _to_channel(red), _to_channel(green), _to_channel(blue)


@njit
def _render(
    image: np.ndarray,
    iterations: np.ndarray,
    x_center: float,
    y_center: float,
    x_offset: int,
    y_offset: int,
    resolution: float,
    max_iter: int,
    colour_floor: float,
    colour_depth: float,
    colour_max: float,
    gradient_colour_max: float,
) -> None:
    height, width = iterations.shape
    for col in range(width):
        for row in range(height):
            iteration, red, green, blue = _pixel(
                col,
                row,
                x_center,
                y_center,
                x_offset,
                y_offset,
                resolution,
                max_iter,
                colour_floor,
                colour_depth,
                colour_max,
                gradient_colour_max,
            )
            iterations[row, col] = iteration
            image[row, col, 0] = red
            image[row, col, 1] = green
            image[row, col, 2] = blue


def _kernel_args(config: RenderConfig) -> tuple:
    return (
        float(config.x_center),
        float(config.y_center),
        int(config.x_offset),
        int(config.y_offset),
        float(config.resolution),
        int(config.max_iter),
        float(config.colour_floor),
        float(config.colour_depth),
        float(config.colour_max),
        float(config.gradient_colour_max),
    )


def allocate_image(config: RenderConfig) -> np.ndarray:
    return np.zeros((config.height, config.width, 3), dtype=np.uint8)


def pixel_color(config: RenderConfig, col: int, row: int) -> Tuple[int, Tuple[int, int, int]]:
    """Escape count and stored RGB triple for a single pixel."""
    iteration, red, green, blue = _pixel(int(col), int(row), *_kernel_args(config))
    return int(iteration), (int(red), int(green), int(blue))


def render_image(config: RenderConfig) -> Tuple[np.ndarray, np.ndarray]:
    """Render the full raster, returning ``(image, iterations)``.

    ``image`` is a ``(height, width, 3)`` uint8 array indexed ``[row, col]``.
    """
    image = allocate_image(config)
    iterations = np.zeros((config.height, config.width), dtype=np.int32)
    _render(image, iterations, *_kernel_args(config))
    return image, iterations
