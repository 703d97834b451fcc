"""
aperture_model.py — f-stop → relative brightness model with crop-factor view

WHAT THIS MODULE DOES
---------------------
Implements the two small optics computations behind the brightness chart:
  • Aperture snap rule: map a logarithmic control position to an f-number,
    snapping to the nearest common full/third stop when within 2 %.
  • Brightness model: relative light transmission of each common f-stop,
    normalized to a chosen reference aperture, optionally converted to the
    full-frame "equivalent" view of a cropped sensor.

THEORY IN ONE PARAGRAPH
-----------------------
The entrance pupil diameter is D = focal_length / N, so its area (and the
light it admits for a fixed scene and focal length) scales as 1/N². Relative
to a reference aperture N_ref the transmission is therefore

    B(N) / B(N_ref) = (N_ref / N)²

which is exactly 1.0 at N = N_ref and falls by ~2× per full stop (√2 in N).
For a sensor with crop factor k, the equivalent aperture is k·N and the total
light gathered over the (smaller) frame drops by k².

REFERENCES (short list)
-----------------------
• Smith, W. J. (2007). *Modern Optical Engineering* (4th ed.).
  (f-number, pupil area and image irradiance)
• Ray, S. F. (2002). *Applied Photographic Optics* (3rd ed.).
  (Stop series, equivalent aperture on smaller formats)

© 2025 F-stop Explorer contributors
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import List, Sequence, Tuple
import math


# =============================================================================
# Canonical values
# =============================================================================
# Ascending order matters: the snap rule breaks exact ties on the first match.
COMMON_FSTOPS: Tuple[float, ...] = (
    0.95, 1.2, 1.4, 1.8, 2.0, 2.8, 3.5, 4.0, 5.6, 8.0, 11.0, 16.0, 22.0,
)

# Relative tolerance for snapping to a common stop
SNAP_THRESHOLD = 0.02

# Control scale: position = 100 * log2(N)
SLIDER_SCALE = 100.0
SLIDER_STEP = 0.1

# Axis padding as a fraction of the normalized brightness spread
Y_PADDING_FRACTION = 0.1


@dataclass(frozen=True)
class CropFactor:
    """Sensor crop factor with the human-readable format name."""
    value: float
    label: str

    @property
    def option_text(self) -> str:
        return f"{self.label} ({format_number(self.value)}x)"


CROP_FACTORS: Tuple[CropFactor, ...] = (
    CropFactor(1.0, "Full Frame"),
    CropFactor(1.5, "Nikon DX / Sony APS-C"),
    CropFactor(1.6, "Canon APS-C"),
    CropFactor(2.0, "M4/3"),
)

DEFAULT_CROP_FACTOR = 1.5
DEFAULT_REFERENCE_FSTOP = 2.8


def get_crop_factor(value: float) -> CropFactor:
    """
    Look up a crop factor from the enumerated set.

    Raises
    ------
    ValueError
        If `value` is not one of the supported factors.
    """
    for cf in CROP_FACTORS:
        if math.isclose(cf.value, float(value), rel_tol=0.0, abs_tol=1e-9):
            return cf
    supported = ", ".join(format_number(cf.value) for cf in CROP_FACTORS)
    raise ValueError(f"Unsupported crop factor: {value!r}. Choose one of: {supported}.")


def format_number(value: float) -> str:
    """Shortest plain rendering of a stop value: 2.0 -> '2', 0.95 -> '0.95'."""
    return f"{float(value):g}"


def fstop_label(value: float) -> str:
    return f"f/{format_number(value)}"


# =============================================================================
# Aperture snap rule
# =============================================================================
def slider_to_aperture(position: float) -> float:
    """Exact f-number for a logarithmic control position: N = 2^(p/100)."""
    return float(2.0 ** (float(position) / SLIDER_SCALE))


def aperture_to_slider(fnum: float) -> float:
    """Inverse of `slider_to_aperture`: p = 100 * log2(N)."""
    if fnum <= 0.0:
        raise ValueError(f"f-number must be positive, got {fnum!r}.")
    return float(math.log2(fnum) * SLIDER_SCALE)


def slider_range() -> Tuple[float, float]:
    """Control bounds spanning the common stops (f/0.95 .. f/22)."""
    return aperture_to_slider(min(COMMON_FSTOPS)), aperture_to_slider(max(COMMON_FSTOPS))


def nearest_canonical(fnum: float, candidates: Sequence[float] = COMMON_FSTOPS) -> float:
    """
    Closest common stop to `fnum` by absolute difference.

    `min` keeps the first minimal element, so on an exact tie the smaller
    (earlier) stop wins.
    """
    return min(candidates, key=lambda c: abs(c - fnum))


def resolve_aperture(position: float) -> float:
    """
    Map a control position to the reference aperture.

    Snaps to the nearest common stop when the exact value lies within
    SNAP_THRESHOLD (relative); otherwise returns the exact f-number rounded
    to two decimals. Positions outside `slider_range()` are clamped to it,
    so the result is always positive and never raises.
    """
    lo, hi = slider_range()
    position = min(max(float(position), lo), hi)
    exact = slider_to_aperture(position)
    nearest = nearest_canonical(exact)
    if abs(exact - nearest) / nearest < SNAP_THRESHOLD:
        return nearest
    return round(exact, 2)


# =============================================================================
# Brightness model
# =============================================================================
def relative_brightness(fnum: float) -> float:
    """Un-normalized transmission of an f-number: B(N) = (1/N)²."""
    return (1.0 / fnum) ** 2


def crop_brightness_factor(crop_factor: float) -> float:
    """Fraction of full-frame light gathered by a cropped sensor: 1/k²."""
    return 1.0 / crop_factor ** 2


@dataclass(frozen=True)
class BrightnessSample:
    """
    One chart point. Values are kept at full precision; the `display_*`
    properties apply the 3-decimal rounding used for presentation.
    """
    fstop: float
    brightness: float
    effective_fstop: float
    effective_brightness: float

    @property
    def label(self) -> str:
        return fstop_label(self.fstop)

    @property
    def effective_label(self) -> str:
        return f"f/{self.effective_fstop:.1f}"

    @property
    def display_brightness(self) -> float:
        return round(self.brightness, 3)

    @property
    def display_effective_brightness(self) -> float:
        return round(self.effective_brightness, 3)


def compute_samples(
    reference: float,
    crop_enabled: bool = False,
    crop_factor: float = DEFAULT_CROP_FACTOR,
    fstops: Sequence[float] = COMMON_FSTOPS,
) -> Tuple[List[BrightnessSample], Tuple[float, float]]:
    """
    Brightness of each stop relative to `reference`, plus the y-axis range.

    Parameters
    ----------
    reference : float
        Reference f-number (normalized brightness is 1.0 there).
    crop_enabled : bool
        If True, report the full-frame equivalent aperture (N·k) and the
        crop-reduced brightness (normalized / k²).
    crop_factor : float
        Sensor crop factor k; only used when `crop_enabled`.
    fstops : sequence of float
        Sample apertures (defaults to the common stops).

    Returns
    -------
    samples : list[BrightnessSample]
        One per entry of `fstops`, same order.
    y_range : (float, float)
        [max(0, min - 10 % spread), max + 10 % spread] over the normalized
        (not crop-adjusted) brightness.

    Notes
    -----
    • Pure function: no caching, same inputs give the same result.
    """
    if reference <= 0.0:
        raise ValueError(f"Reference f-number must be positive, got {reference!r}.")
    if crop_enabled and crop_factor <= 0.0:
        raise ValueError(f"Crop factor must be positive, got {crop_factor!r}.")

    b_ref = relative_brightness(reference)

    samples: List[BrightnessSample] = []
    for f in fstops:
        normalized = relative_brightness(f) / b_ref
        if crop_enabled:
            eff_f = f * crop_factor
            eff_b = normalized / crop_factor ** 2
        else:
            eff_f, eff_b = f, normalized
        samples.append(BrightnessSample(f, normalized, eff_f, eff_b))

    values = [s.brightness for s in samples]
    hi, lo = max(values), min(values)
    pad = (hi - lo) * Y_PADDING_FRACTION
    return samples, (max(0.0, lo - pad), hi + pad)


def tooltip_text(sample: BrightnessSample, crop_enabled: bool, crop_factor: float) -> Tuple[str, str]:
    """(value, name) pair shown when hovering a chart point."""
    if crop_enabled:
        factor = crop_brightness_factor(crop_factor)
        return (
            f"{sample.effective_brightness:.3f}",
            f"Relative Brightness ({sample.label} → {sample.effective_label}, {factor:.2f}x brightness)",
        )
    return f"{sample.brightness:.3f}", "Relative Brightness"
