"""Tests for the aperture snap rule and the brightness model."""

from __future__ import annotations

import math

import pytest

from fstop_explorer.optics.aperture_model import (
    COMMON_FSTOPS,
    CROP_FACTORS,
    aperture_to_slider,
    compute_samples,
    crop_brightness_factor,
    fstop_label,
    get_crop_factor,
    nearest_canonical,
    relative_brightness,
    resolve_aperture,
    slider_range,
    slider_to_aperture,
    tooltip_text,
)


def _sample_at(samples, fstop):
    return next(s for s in samples if s.fstop == fstop)


# -----------------------------------------------------------------------------
# Snap rule
# -----------------------------------------------------------------------------
def test_common_fstops_are_ascending_and_positive() -> None:
    assert len(COMMON_FSTOPS) == 13
    assert COMMON_FSTOPS[0] == 0.95 and COMMON_FSTOPS[-1] == 22.0
    assert all(f > 0 for f in COMMON_FSTOPS)
    assert list(COMMON_FSTOPS) == sorted(COMMON_FSTOPS)


@pytest.mark.parametrize("fstop", COMMON_FSTOPS)
def test_resolve_aperture_round_trips_common_stops(fstop: float) -> None:
    assert resolve_aperture(aperture_to_slider(fstop)) == fstop


def test_slider_mapping_is_logarithmic() -> None:
    assert slider_to_aperture(0.0) == 1.0
    assert slider_to_aperture(100.0) == 2.0
    assert math.isclose(slider_to_aperture(aperture_to_slider(5.6)), 5.6)


def test_slider_range_spans_common_stops() -> None:
    lo, hi = slider_range()
    assert math.isclose(slider_to_aperture(lo), 0.95)
    assert math.isclose(slider_to_aperture(hi), 22.0)


def test_snaps_within_two_percent() -> None:
    # 2.03 is 1.5 % from f/2
    assert resolve_aperture(aperture_to_slider(2.03)) == 2.0


def test_stays_exact_outside_tolerance() -> None:
    # 2.5 is 10.7 % from f/2.8 (nearest) and 25 % from f/2
    assert resolve_aperture(aperture_to_slider(2.5)) == 2.5
    # 2.05 is 2.5 % from f/2: the relative threshold is strict
    assert resolve_aperture(aperture_to_slider(2.05)) == 2.05


def test_unsnapped_value_is_rounded_to_two_decimals() -> None:
    exact = slider_to_aperture(260.0)
    assert resolve_aperture(260.0) == round(exact, 2)


def test_nearest_canonical_tie_goes_to_first() -> None:
    # 3.75 is equidistant from 3.5 and 4.0
    assert nearest_canonical(3.75) == 3.5


def test_resolve_across_control_range_stays_positive() -> None:
    lo, hi = slider_range()
    steps = 200
    for i in range(steps + 1):
        assert resolve_aperture(lo + (hi - lo) * i / steps) > 0
    assert resolve_aperture(lo) == 0.95
    assert resolve_aperture(hi) == 22.0


# -----------------------------------------------------------------------------
# Brightness model
# -----------------------------------------------------------------------------
@pytest.mark.parametrize("reference", COMMON_FSTOPS)
def test_self_normalization(reference: float) -> None:
    samples, _ = compute_samples(reference, False, 1.5)
    ones = [s for s in samples if s.display_brightness == 1.0]
    assert len(ones) == 1
    assert ones[0].fstop == reference
    assert ones[0].brightness == 1.0


def test_brightness_decreases_with_fnumber() -> None:
    values = [relative_brightness(f) for f in COMMON_FSTOPS]
    assert all(a > b for a, b in zip(values, values[1:]))
    samples, _ = compute_samples(2.8)
    normalized = [s.brightness for s in samples]
    assert all(a > b for a, b in zip(normalized, normalized[1:]))


def test_reference_f28_scenario() -> None:
    samples, _ = compute_samples(2.8, False, 1.5)
    assert _sample_at(samples, 1.4).display_brightness == 4.0
    assert _sample_at(samples, 5.6).display_brightness == 0.25


def test_crop_disabled_keeps_nominal_values() -> None:
    samples, _ = compute_samples(2.8, False, 2.0)
    for s in samples:
        assert s.effective_fstop == s.fstop
        assert s.effective_brightness == s.brightness


@pytest.mark.parametrize("crop", [1.5, 1.6, 2.0])
def test_crop_adjusted_brightness(crop: float) -> None:
    samples, _ = compute_samples(2.8, True, crop)
    for s in samples:
        assert s.effective_brightness == s.brightness / crop ** 2
        assert s.effective_fstop == s.fstop * crop


def test_crop_scenario_f28_apsc() -> None:
    samples, _ = compute_samples(2.8, True, 1.5)
    s = _sample_at(samples, 2.8)
    assert s.effective_label == "f/4.2"
    assert s.display_effective_brightness == 0.444


def test_y_range_pads_normalized_spread() -> None:
    samples, (y_min, y_max) = compute_samples(2.8, True, 2.0)
    values = [s.brightness for s in samples]
    spread = max(values) - min(values)
    assert y_min == 0.0  # min - 10 % spread is negative here
    assert math.isclose(y_max, max(values) + 0.1 * spread)


def test_y_range_lower_bound_not_clamped_when_positive() -> None:
    samples, (y_min, _) = compute_samples(22.0, False, 1.5, fstops=(16.0, 22.0))
    values = [s.brightness for s in samples]
    spread = max(values) - min(values)
    assert math.isclose(y_min, min(values) - 0.1 * spread)
    assert y_min > 0


def test_compute_samples_rejects_bad_reference() -> None:
    with pytest.raises(ValueError):
        compute_samples(0.0)
    with pytest.raises(ValueError):
        compute_samples(2.8, True, -1.0)


# -----------------------------------------------------------------------------
# Labels, crop factors, tooltips
# -----------------------------------------------------------------------------
def test_labels() -> None:
    assert fstop_label(2.0) == "f/2"
    assert fstop_label(0.95) == "f/0.95"
    assert fstop_label(11.0) == "f/11"
    assert fstop_label(2.53) == "f/2.53"


def test_crop_factor_lookup() -> None:
    assert [cf.value for cf in CROP_FACTORS] == [1.0, 1.5, 1.6, 2.0]
    assert get_crop_factor(1.6).label == "Canon APS-C"
    assert get_crop_factor(1).option_text == "Full Frame (1x)"
    with pytest.raises(ValueError):
        get_crop_factor(1.3)


def test_tooltip_text() -> None:
    samples, _ = compute_samples(2.8, True, 1.5)
    value, name = tooltip_text(_sample_at(samples, 2.8), True, 1.5)
    assert value == "0.444"
    assert name == "Relative Brightness (f/2.8 → f/4.2, 0.44x brightness)"

    samples, _ = compute_samples(2.8, False, 1.5)
    assert tooltip_text(_sample_at(samples, 1.4), False, 1.5) == ("4.000", "Relative Brightness")


def test_crop_brightness_factor() -> None:
    assert crop_brightness_factor(2.0) == 0.25
    assert crop_brightness_factor(1.0) == 1.0


@pytest.mark.parametrize("position", [-1000.0, -1e9, 200000.0, 1e300])
def test_resolve_clamps_positions_outside_control_range(position: float) -> None:
    resolved = resolve_aperture(position)
    assert resolved in (0.95, 22.0)
    assert resolved == (0.95 if position < 0 else 22.0)
