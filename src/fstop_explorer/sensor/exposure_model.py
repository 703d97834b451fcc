"""
exposure_model.py — 8-bit RGBA exposure remapping for the preview tool

WHAT THIS MODULE DOES
---------------------
Models a digital exposure push/pull on an already-decoded image:
  1) Bitmap container: RGBA uint8 pixels on a (height, width, 4) grid
  2) Exposure remap: R, G, B scaled by 2^EV, rounded and clamped to [0, 255];
     alpha untouched
  3) Auto-exposure estimate: EV = log2(255 / mean((r + g + b) / 3))

LEARNING NOTES
--------------
• One EV is one stop: +1 doubles the recorded signal, -1 halves it.
• Clipping at 0/255 is the only lossy step apart from 8-bit rounding, so
  pull/push round-trips reconstruct every pixel that stayed in range.
• The average-brightness estimate is an autoexposure-style heuristic on
  encoded values, not a colorimetric luminance.
• Every adjustment starts again from the originally decoded bitmap, so a
  sequence of slider moves never compounds rounding or clipping.
"""


from __future__ import annotations
from dataclasses import dataclass
from typing import Sequence, Tuple
import math
import numpy as np

EV_RANGE: Tuple[float, float] = (-5.0, 5.0)
EV_STEP = 0.1

# Full-scale 8-bit code value
WHITE_LEVEL = 255.0


# -----------------------------------------------------------------------------
# Bitmap container
# -----------------------------------------------------------------------------
@dataclass(frozen=True, eq=False)
class Bitmap:
    """
    Decoded RGBA image.

    width, height : pixel dimensions
    pixels : (height, width, 4) uint8 array, channel order R, G, B, A
    """
    width: int
    height: int
    pixels: np.ndarray

    def __post_init__(self) -> None:
        expected = (int(self.height), int(self.width), 4)
        if self.pixels.shape != expected:
            raise ValueError(f"Bitmap pixels must have shape {expected}, got {self.pixels.shape}.")
        if self.pixels.dtype != np.uint8:
            raise ValueError(f"Bitmap pixels must be uint8, got {self.pixels.dtype}.")

    @classmethod
    def from_array(cls, pixels: np.ndarray) -> "Bitmap":
        """Wrap an (H, W, 4) uint8 array (copied)."""
        arr = np.array(pixels, dtype=np.uint8, copy=True)
        if arr.ndim != 3 or arr.shape[2] != 4:
            raise ValueError(f"Expected an (H, W, 4) RGBA array, got shape {arr.shape}.")
        return cls(width=arr.shape[1], height=arr.shape[0], pixels=arr)

    @classmethod
    def from_flat(cls, width: int, height: int, data: Sequence[int]) -> "Bitmap":
        """Build from a flat RGBA byte sequence (row-major, 4 values per pixel)."""
        flat = np.asarray(data, dtype=np.uint8)
        if flat.size != int(width) * int(height) * 4:
            raise ValueError(
                f"Flat RGBA data has {flat.size} values; expected {int(width) * int(height) * 4} "
                f"for {width}x{height}."
            )
        return cls(width=int(width), height=int(height), pixels=flat.reshape(int(height), int(width), 4).copy())

    @property
    def flat(self) -> np.ndarray:
        """Read-only flat RGBA view."""
        view = self.pixels.reshape(-1)
        view.flags.writeable = False
        return view

    def copy(self) -> "Bitmap":
        return Bitmap(self.width, self.height, self.pixels.copy())


# -----------------------------------------------------------------------------
# EV helpers
# -----------------------------------------------------------------------------
def clamp_ev(ev: float) -> float:
    lo, hi = EV_RANGE
    return float(min(max(float(ev), lo), hi))


def exposure_gain(ev: float) -> float:
    """Linear multiplier for an EV offset: 2^EV."""
    return float(2.0 ** float(ev))


# -----------------------------------------------------------------------------
# Exposure remap
# -----------------------------------------------------------------------------
def apply_exposure(source: Bitmap, ev: float) -> Bitmap:
    """
    Scale the color channels of `source` by 2^ev.

    Steps
    -----
    1) Promote RGB to float and multiply by the gain
    2) Round to nearest (ties to even, as an 8-bit clamped canvas buffer does)
    3) Clamp to [0, 255] and store back as uint8
    4) Copy alpha unchanged

    Parameters
    ----------
    source : Bitmap
        Originally decoded image; never modified.
    ev : float
        Exposure offset in stops.

    Returns
    -------
    Bitmap with identical dimensions.

    Raises
    ------
    ValueError
        If no source bitmap is given (callers must guard against this).
    """
    if source is None:
        raise ValueError("apply_exposure requires a decoded bitmap; no image is loaded.")

    gain = exposure_gain(ev)
    out = source.pixels.copy()
    rgb = source.pixels[..., :3].astype(np.float64) * gain
    out[..., :3] = np.clip(np.rint(rgb), 0.0, WHITE_LEVEL).astype(np.uint8)
    return Bitmap(source.width, source.height, out)


# -----------------------------------------------------------------------------
# Auto-exposure estimate
# -----------------------------------------------------------------------------
def average_brightness(bitmap: Bitmap) -> float:
    """Mean of (r + g + b) / 3 over all pixels (alpha ignored); 0.0 for an empty bitmap."""
    if bitmap.pixels.size == 0:
        return 0.0
    rgb = bitmap.pixels[..., :3].astype(np.float64)
    return float(np.mean(rgb.sum(axis=-1) / 3.0))


def estimate_initial_ev(bitmap: Bitmap) -> float:
    """
    Initial EV for a freshly loaded image: log2(255 / average brightness).

    The result is clamped to EV_RANGE; an all-black image (average 0) maps to
    the top of the range instead of +inf, and so does an empty bitmap.
    """
    avg = average_brightness(bitmap)
    if bitmap.pixels.size == 0 or not avg > 0.0:
        return EV_RANGE[1]
    return clamp_ev(math.log2(WHITE_LEVEL / avg))
