"""Bitmap output through Pillow."""

from __future__ import annotations

from pathlib import Path

import numpy as np
import PIL.Image

_MODES = {24: "RGB", 32: "RGBA"}


def write_bitmap(image: np.ndarray, output_path: str | Path, bit_depth: int = 32) -> Path:
    """Write an ``(height, width, 3)`` uint8 raster to ``output_path`` as BMP."""
    if image.ndim != 3 or image.shape[2] != 3 or image.dtype != np.uint8:
        raise ValueError(f"Expected a (height, width, 3) uint8 raster, got {image.shape} {image.dtype}")
    if bit_depth not in _MODES:
        raise ValueError(f"Unsupported bit depth {bit_depth}, expected one of {tuple(_MODES)}")

    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    bitmap = PIL.Image.fromarray(np.ascontiguousarray(image)).convert(_MODES[bit_depth])
    bitmap.save(str(output_path), format="BMP")
    return output_path
