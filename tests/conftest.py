"""Shared fixtures; plotting runs headless."""

from __future__ import annotations

import matplotlib

matplotlib.use("Agg")

import numpy as np
import pytest

from fstop_explorer.sensor.exposure_model import Bitmap


@pytest.fixture
def rng() -> np.random.Generator:
    return np.random.default_rng(0)


@pytest.fixture
def mid_gray() -> Bitmap:
    """4x3 opaque image at code value 64 (average brightness 64)."""
    pixels = np.zeros((3, 4, 4), dtype=np.uint8)
    pixels[..., :3] = 64
    pixels[..., 3] = 255
    return Bitmap.from_array(pixels)
