import math

import numpy as np
import pytest

from synth_gradients.harmonic import (
    ContrastTarget,
    GradientConfig,
    adjust_lightness_for_contrast,
    contrast_ratio,
    generate_harmonic_gradient,
    harmonic_gradient,
    warp_around_center,
)
from synth_gradients.ranges import Range, normalize_range


def _bounds(config):
    light = normalize_range(config.lightness_range, Range(18, 58), 0, 100)
    chroma = normalize_range(config.chroma_range, Range(40, 80), 0, 100)
    return light, chroma


def test_same_seed_same_stops():
    cfg = GradientConfig(base_hue=220, seed=42, stops=7, variance=0.9)
    assert generate_harmonic_gradient(cfg) == generate_harmonic_gradient(cfg)


def test_different_seed_changes_palette():
    a = harmonic_gradient(220, seed=1, stops=6)
    b = harmonic_gradient(220, seed=2, stops=6)
    assert [s.hsl for s in a] != [s.hsl for s in b]


def test_positions_evenly_spaced_zero_to_one():
    stops = harmonic_gradient(10, seed=3, stops=6, center_stretch=0.8)
    ats = [s.at for s in stops]
    assert ats[0] == 0.0 and ats[-1] == 1.0
    assert np.allclose(np.diff(ats), 1 / 5)


def test_stop_count_floored_and_clamped():
    assert len(harmonic_gradient(0, seed=1, stops=4.9)) == 4
    assert len(harmonic_gradient(0, seed=1, stops=1)) == 2
    assert len(harmonic_gradient(0, seed=1, stops=-3)) == 2


@pytest.mark.parametrize(
    "extra",
    [
        {"stops": 2},
        {"variance": 0},
        {"variance": 1},
        {"center_stretch": 1},
        {"zoom": 0},
        {"mode": "side-bright", "lightness_range": 70},
        {"hue_scheme": "dual-complementary", "secondary_hue": 30, "stops": 9},
        {"lightness_range": {"min": 40, "max": 40}, "chroma_range": {"max": 5}},
    ],
)
def test_stops_stay_in_bounds(extra):
    cfg = GradientConfig(base_hue=-725.5, seed=11, hue_spread=400, **extra)
    light, chroma = _bounds(cfg)
    for stop in generate_harmonic_gradient(cfg):
        h, s, l = stop.hsl.h, stop.hsl.s, stop.hsl.l
        assert 0 <= h < 360
        assert light.min - 1e-9 <= l <= light.max + 1e-9
        assert chroma.min - 1e-9 <= s <= chroma.max + 1e-9
        assert stop.color.startswith("#") and len(stop.color) == 7


def test_prime_mono_palette_is_mirrored():
    stops = harmonic_gradient(200, seed=7, stops=5, hue_scheme="mono")
    assert stops[0].color == stops[4].color
    assert stops[1].color == stops[3].color


def test_dual_complementary_is_not_mirrored():
    stops = harmonic_gradient(
        200, seed=7, stops=5, hue_scheme="dual-complementary", variance=0
    )
    # base hue on the left, complement on the right
    assert stops[0].hsl.h == pytest.approx(200, abs=1e-6)
    assert stops[4].hsl.h == pytest.approx(20, abs=1e-6)
    assert stops[0].color != stops[4].color


def test_center_bright_peaks_in_the_middle():
    stops = harmonic_gradient(220, seed=5, stops=7, variance=0, mode="center-bright")
    ls = [s.hsl.l for s in stops]
    assert ls[3] == max(ls)
    assert ls[0] == min(ls)


def test_side_bright_peaks_at_edges():
    stops = harmonic_gradient(220, seed=5, stops=7, variance=0, mode="side-bright")
    ls = [s.hsl.l for s in stops]
    assert ls[0] == max(ls)
    assert ls[3] == min(ls)


def test_zoom_zero_flattens_palette():
    stops = harmonic_gradient(120, seed=9, stops=6, variance=0, zoom=0)
    assert len({s.color for s in stops}) == 1


def test_per_stop_overrides_clamped_to_band():
    stops = harmonic_gradient(
        220,
        seed=4,
        stops=4,
        per_stop_lightness=[None, 30.0, float("nan"), 999],
        per_stop_chroma=[45.0],
    )
    assert stops[0].hsl.s == 45.0
    assert stops[1].hsl.l == 30.0
    assert stops[3].hsl.l == 58.0


def test_from_mapping_accepts_camel_case():
    cfg = GradientConfig.from_mapping(
        {
            "baseHue": 575,
            "hueScheme": "dual-complementary",
            "lightnessRange": {"max": 22},
            "stopCount": 22,
            "centerStretch": 0.3,
            "contrast": {"against": "#ffffff", "minRatio": 4.5},
            "unknown": True,
        }
    )
    assert cfg.base_hue == 575
    assert cfg.stops == 22
    assert cfg.center_stretch == 0.3
    assert cfg.contrast == ContrastTarget("#ffffff", 4.5)


def test_mapping_and_dataclass_agree():
    a = generate_harmonic_gradient({"baseHue": 30, "seed": 8, "stops": 6})
    b = harmonic_gradient(30, seed=8, stops=6)
    assert a == b


def test_contrast_target_met_against_white():
    stops = harmonic_gradient(
        220,
        seed=12,
        stops=6,
        lightness_range={"min": 10, "max": 90},
        contrast=ContrastTarget(against="#ffffff", min_ratio=4.5),
    )
    for s in stops:
        assert contrast_ratio(s.hsl.h, s.hsl.s, s.hsl.l, "#ffffff") >= 4.5


def test_contrast_fallback_picks_best_ratio():
    # nothing in a light band reaches 21:1 against white; darkest is best
    target = ContrastTarget(against="#ffffff", min_ratio=21)
    l = adjust_lightness_for_contrast(220, 50, 80, Range(60, 90), target)
    assert l == 60


def test_contrast_keeps_passing_value():
    target = ContrastTarget(against="#ffffff", min_ratio=3)
    assert adjust_lightness_for_contrast(0, 0, 20, Range(10, 90), target) == 20


def test_unparseable_contrast_color_scores_zero():
    assert contrast_ratio(10, 50, 50, "not-a-color") == 0.0


def test_warp_fixes_center_and_edges():
    assert warp_around_center(0.5, 0.7) == 0.5
    assert warp_around_center(0.0, 0.7) == 0.0
    assert warp_around_center(1.0, 0.7) == 1.0
    assert warp_around_center(0.3, 0.0) == 0.3
    # exponent 4 at full stretch: 0.5 - (0.4 ** 4) / 2
    assert math.isclose(warp_around_center(0.3, 1.0), 0.5 - 0.4**4 / 2)
