"""
Brightness explorer, command-line edition:
reference aperture → brightness chart  (+ optional image → exposure preview)

Module contracts (refresher):
- fstop_explorer.optics.aperture_model.resolve_aperture(position) -> f-number (snapped or exact)
- fstop_explorer.optics.aperture_model.compute_samples(reference, crop_enabled, crop_factor)
    -> (samples, (y_min, y_max))
- fstop_explorer.sensor.exposure_model.apply_exposure(bitmap, ev) -> Bitmap
- fstop_explorer.widget.state.WidgetState: one immutable record per interaction

Usage:
  python main.py                                   # f/2.8 reference, chart only
  python main.py --fstop 4 --crop --crop_factor 1.6
  python main.py --slider 150                      # control position -> snapped f-stop
  python main.py --image photo.jpg --ev 1.5 --outdir results
  python main.py --demo gradient --ev -1           # synthetic target instead of a photo
"""

from __future__ import annotations
import argparse
import logging
from pathlib import Path
from typing import List, Sequence

import matplotlib.pyplot as plt

from fstop_explorer.optics.aperture_model import (
    CROP_FACTORS,
    DEFAULT_CROP_FACTOR,
    DEFAULT_REFERENCE_FSTOP,
    aperture_to_slider,
    tooltip_text,
)
from fstop_explorer.scenes.image_source import generate_bitmap, load_bitmap, save_bitmap
from fstop_explorer.utils.plotting import plot_brightness_chart, plot_exposure_preview
from fstop_explorer.widget.state import WidgetState


# -----------------------------------------------------------------------------
# Helpers
# -----------------------------------------------------------------------------
def build_state(args: argparse.Namespace) -> WidgetState:
    """Replay the CLI flags as widget interactions."""
    state = WidgetState()

    position = args.slider if args.slider is not None else aperture_to_slider(args.fstop)
    state = state.with_slider(position)
    state = state.with_crop_factor(args.crop_factor).with_crop_enabled(args.crop)

    bitmap = None
    if args.image:
        bitmap = load_bitmap(args.image)
        if bitmap is None:
            print(f"[WARN] Could not decode {args.image}; skipping the exposure preview.")
    elif args.demo:
        bitmap = generate_bitmap(args.demo, size=args.demo_size)

    if bitmap is not None:
        state = state.with_image(bitmap)
        if args.ev is not None:
            state = state.with_exposure(args.ev)
    elif args.ev is not None:
        print("[WARN] --ev given without an image; ignoring.")

    return state


def format_table(state: WidgetState) -> List[str]:
    """Plain-text sample table (one line per stop)."""
    lines = [state.title, state.subtitle, ""]
    for s in state.samples:
        value, name = tooltip_text(s, state.crop_enabled, state.crop_factor)
        lines.append(f"  {s.label:>7}  {value:>8}  {name}")
    y_min, y_max = state.y_range
    lines.append("")
    lines.append(f"  y-axis: [{y_min:.2f} .. {y_max:.2f}]")
    lines.append("  " + WidgetState.common_fstops_caption())
    return lines


# -----------------------------------------------------------------------------
# Run
# -----------------------------------------------------------------------------
def run_explorer(state: WidgetState, outdir: str | Path = "outputs", show: bool = False) -> Path:
    """
    Render the chart (and the preview when an image is loaded) to `outdir`.

    Returns the output directory.
    """
    outdir = Path(outdir)
    outdir.mkdir(parents=True, exist_ok=True)

    samples, y_range = state.chart_data()
    fig = plot_brightness_chart(
        samples, y_range,
        reference=state.reference_aperture,
        crop_enabled=state.crop_enabled,
        crop_factor=state.crop_factor,
    )
    fig.savefig(outdir / "brightness_chart.png", dpi=150)

    for line in format_table(state):
        print(line)

    if state.has_image:
        save_bitmap(state.preview, outdir / "exposure_preview.png")
        fig_prev = plot_exposure_preview(state.preview, state.ev)
        fig_prev.savefig(outdir / "exposure_preview_panel.png", dpi=150)
        print(f"  {state.ev_label}")

    if show:
        plt.show()
    plt.close("all")

    print(f"[OK] Saved outputs to: {outdir.resolve()}")
    return outdir


# -----------------------------------------------------------------------------
# CLI
# -----------------------------------------------------------------------------
def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    crop_choices = [cf.value for cf in CROP_FACTORS]
    crop_help = ", ".join(cf.option_text for cf in CROP_FACTORS)

    p = argparse.ArgumentParser(description="Relative brightness vs. f-stop (+ exposure preview)")
    p.add_argument("--fstop", type=float, default=DEFAULT_REFERENCE_FSTOP,
                   help="reference f-number the chart is normalized to")
    p.add_argument("--slider", type=float, default=None,
                   help="control position (100*log2 N); overrides --fstop and snaps to common stops")
    p.add_argument("--crop", action="store_true", help="show the crop-sensor equivalent view")
    p.add_argument("--crop_factor", type=float, default=DEFAULT_CROP_FACTOR, choices=crop_choices,
                   help=f"sensor crop factor: {crop_help}")
    p.add_argument("--image", type=str, default=None, help="image file for the exposure preview (PNG/JPG/etc.)")
    p.add_argument("--demo", default=None, choices=["gradient", "checker", "color_ramp"],
                   help="use a synthetic target instead of --image")
    p.add_argument("--demo_size", type=int, default=256, help="synthetic target size (pixels)")
    p.add_argument("--ev", type=float, default=None, help="exposure value in [-5, 5] applied to the preview")
    p.add_argument("--outdir", default="outputs", help="output directory")
    p.add_argument("--show", action="store_true", help="open the figures on screen")
    p.add_argument("-v", "--verbose", action="store_true", help="debug logging")
    return p.parse_args(argv)


def main(argv: Sequence[str] | None = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    state = build_state(args)
    run_explorer(state, outdir=args.outdir, show=args.show)
    return 0
