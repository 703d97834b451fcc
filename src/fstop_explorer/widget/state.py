"""
state.py — immutable widget state for the brightness explorer

Every user interaction (aperture control, crop toggle/select, image upload,
exposure control) maps to one `with_*` transition that returns a new
WidgetState; nothing is patched in place. Derived values (samples, axis
range, labels) are recomputed from the record on access.
"""

from __future__ import annotations
from dataclasses import dataclass, replace
from typing import List, Optional, Tuple
import logging

from fstop_explorer.optics.aperture_model import (
    COMMON_FSTOPS,
    DEFAULT_CROP_FACTOR,
    DEFAULT_REFERENCE_FSTOP,
    BrightnessSample,
    compute_samples,
    format_number,
    fstop_label,
    get_crop_factor,
    resolve_aperture,
)
from fstop_explorer.sensor.exposure_model import (
    Bitmap,
    apply_exposure,
    clamp_ev,
    estimate_initial_ev,
)

logger = logging.getLogger(__name__)

CHART_TITLE = "Relative Brightness vs. f-stop"


@dataclass(frozen=True)
class WidgetState:
    """
    Snapshot of the widget.

    reference_aperture : f-number the chart is normalized to
    crop_enabled, crop_factor : equivalent-aperture view settings
    source : originally decoded image (None until an upload succeeds)
    preview : image currently shown (source with `ev` applied)
    ev : exposure value shown next to the preview
    """
    reference_aperture: float = DEFAULT_REFERENCE_FSTOP
    crop_enabled: bool = False
    crop_factor: float = DEFAULT_CROP_FACTOR
    source: Optional[Bitmap] = None
    preview: Optional[Bitmap] = None
    ev: float = 0.0

    # --- transitions ---------------------------------------------------------
    def with_slider(self, position: float) -> "WidgetState":
        return replace(self, reference_aperture=resolve_aperture(position))

    def with_crop_enabled(self, enabled: bool) -> "WidgetState":
        return replace(self, crop_enabled=bool(enabled))

    def with_crop_factor(self, value: float) -> "WidgetState":
        return replace(self, crop_factor=get_crop_factor(value).value)

    def with_image(self, bitmap: Optional[Bitmap]) -> "WidgetState":
        """
        Load (or clear) the preview image.

        The estimated EV is displayed but not applied: the preview starts as
        the unmodified original.
        """
        if bitmap is None:
            return replace(self, source=None, preview=None, ev=0.0)
        return replace(self, source=bitmap, preview=bitmap, ev=estimate_initial_ev(bitmap))

    def with_exposure(self, ev: float) -> "WidgetState":
        """Re-expose the original image; a no-op while no image is loaded."""
        if self.source is None:
            logger.debug("Exposure change to %.2f ignored: no image loaded", ev)
            return self
        ev = clamp_ev(ev)
        return replace(self, preview=apply_exposure(self.source, ev), ev=ev)

    # --- derived -------------------------------------------------------------
    @property
    def has_image(self) -> bool:
        return self.source is not None

    def chart_data(self) -> Tuple[List[BrightnessSample], Tuple[float, float]]:
        return compute_samples(self.reference_aperture, self.crop_enabled, self.crop_factor)

    @property
    def samples(self) -> List[BrightnessSample]:
        return self.chart_data()[0]

    @property
    def y_range(self) -> Tuple[float, float]:
        return self.chart_data()[1]

    @property
    def title(self) -> str:
        return CHART_TITLE

    @property
    def subtitle(self) -> str:
        return f"Normalized to {fstop_label(self.reference_aperture)}"

    @property
    def ev_label(self) -> str:
        return f"Exposure Value: {self.ev:.1f}"

    @property
    def crop_option_text(self) -> str:
        return get_crop_factor(self.crop_factor).option_text

    @staticmethod
    def common_fstops_caption() -> str:
        return "Common f-stops: " + ", ".join(f"f/{format_number(f)}" for f in COMMON_FSTOPS)
