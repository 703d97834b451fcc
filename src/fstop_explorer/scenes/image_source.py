"""
image_source.py — input images for the exposure preview (RGBA uint8)

WHAT THIS MODULE PROVIDES
-------------------------
• load_bitmap(path_or_bytes)
    Decode any format Pillow understands into an RGBA Bitmap. RAW files are
    not decoded; an undecodable input returns None (the preview section is
    simply left out).
• encode_png(bitmap) / to_data_url(bitmap) / save_bitmap(bitmap, path)
    Re-encode a Bitmap for display.
• generate_bitmap(kind, size)
    Synthetic RGBA targets (gradient, checker, color ramp) for demos and
    tests when no photograph is at hand.
"""

from __future__ import annotations
import base64
import io
import logging
from pathlib import Path
from typing import Union

import numpy as np
from PIL import Image, UnidentifiedImageError

from fstop_explorer.sensor.exposure_model import Bitmap

logger = logging.getLogger(__name__)

ImageInput = Union[str, Path, bytes]


# -----------------------------------------------------------------------------
# Decode / encode (Pillow)
# -----------------------------------------------------------------------------
def bitmap_from_image(img: Image.Image) -> Bitmap:
    """Convert a Pillow image (any mode) to an RGBA Bitmap."""
    rgba = img.convert("RGBA")
    return Bitmap.from_array(np.asarray(rgba, dtype=np.uint8))


def load_bitmap(source: ImageInput) -> Bitmap | None:
    """
    Decode an image file (path or raw bytes) into an RGBA Bitmap.

    Returns
    -------
    Bitmap, or None if the input cannot be decoded.
    """
    stream = io.BytesIO(source) if isinstance(source, (bytes, bytearray)) else source
    try:
        with Image.open(stream) as img:
            img.load()
            bitmap = bitmap_from_image(img)
    except (UnidentifiedImageError, OSError) as exc:
        name = "<bytes>" if isinstance(source, (bytes, bytearray)) else str(source)
        logger.warning("Could not decode image %s: %s", name, exc)
        return None

    logger.info("Loaded image: %dx%d", bitmap.width, bitmap.height)
    return bitmap


def to_image(bitmap: Bitmap) -> Image.Image:
    # (H, W, 4) uint8 is inferred as RGBA
    return Image.fromarray(bitmap.pixels)


def encode_png(bitmap: Bitmap) -> bytes:
    buf = io.BytesIO()
    to_image(bitmap).save(buf, format="PNG")
    return buf.getvalue()


def to_data_url(bitmap: Bitmap) -> str:
    """Displayable `data:image/png;base64,...` URL for the preview."""
    return "data:image/png;base64," + base64.b64encode(encode_png(bitmap)).decode("ascii")


def save_bitmap(bitmap: Bitmap, path: Union[str, Path]) -> Path:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    to_image(bitmap).save(path)
    return path


# -----------------------------------------------------------------------------
# Synthetic targets
# -----------------------------------------------------------------------------
def _gray_to_rgba(gray: np.ndarray) -> np.ndarray:
    """[0, 1] float gray → opaque RGBA uint8."""
    g = np.rint(np.clip(gray, 0.0, 1.0) * 255.0).astype(np.uint8)
    alpha = np.full_like(g, 255)
    return np.stack([g, g, g, alpha], axis=-1)


def generate_bitmap(kind: str = "gradient", size: int = 256, **kwargs) -> Bitmap:
    """
    Synthetic RGBA target.

    kind : 'gradient' | 'checker' | 'color_ramp'
        gradient   — horizontal gray ramp 0..1 (tone/clipping checks)
        checker    — tiles of `low`/`high` gray (kwargs: square_px, low, high)
        color_ramp — R along x, G along y, constant B (kwarg: blue)
    """
    k = (kind or "").lower().strip()
    h = w = int(size)

    if k == "gradient":
        gray = np.tile(np.linspace(0.0, 1.0, w, dtype=np.float32), (h, 1))
        return Bitmap.from_array(_gray_to_rgba(gray))

    if k in ("checker", "checkerboard"):
        square = max(int(kwargs.get("square_px", 16)), 1)
        low = float(kwargs.get("low", 0.25))
        high = float(kwargs.get("high", 0.75))
        y, x = np.indices((h, w))
        tiles = ((x // square) + (y // square)) % 2
        return Bitmap.from_array(_gray_to_rgba(np.where(tiles == 1, high, low)))

    if k == "color_ramp":
        r = np.tile(np.linspace(0, 255, w), (h, 1))
        g = np.tile(np.linspace(0, 255, h)[:, None], (1, w))
        b = np.full((h, w), float(kwargs.get("blue", 128)))
        a = np.full((h, w), 255.0)
        return Bitmap.from_array(np.rint(np.stack([r, g, b, a], axis=-1)).astype(np.uint8))

    raise ValueError(f"Unknown bitmap kind: {kind!r}. Use 'gradient', 'checker' or 'color_ramp'.")
