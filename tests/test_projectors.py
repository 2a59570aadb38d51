import logging
import math

import pytest
from coloraide import Color

from synth_gradients.css import (
    background_layout,
    compute_background_position,
    darken_css_gradient,
    lighten_css_gradient,
    resolve_scale,
    stops_to_css_gradient,
    to_rgba_string,
)
from synth_gradients.harmonic import GradientStop
from synth_gradients.stops import (
    brighten_stops,
    compute_brightness_factor,
    compute_interactive_stops,
    mix_stops_by_index,
    normalize_color,
)
from synth_gradients.svg import (
    SvgGradientDef,
    compute_gradient_endpoints,
    compute_linear_gradient_endpoints,
    compute_radial_gradient_params,
)

RED_BLUE = [GradientStop("#ff0000", 0.0), GradientStop("#0000ff", 1.0)]


# ---- css -------------------------------------------------------------------


def test_linear_css_literal():
    assert (
        stops_to_css_gradient("linear", RED_BLUE, angle_deg=45)
        == "linear-gradient(45deg, #ff0000 0%, #0000ff 100%)"
    )


def test_empty_stops_give_empty_string():
    assert stops_to_css_gradient("linear", []) == ""


def test_linear_without_angle_goes_right():
    assert stops_to_css_gradient("linear", RED_BLUE).startswith("linear-gradient(to right, ")


def test_percent_scale_detected_and_sorted():
    stops = [GradientStop("#000000", 75.5), GradientStop("#ffffff", 12.126)]
    assert (
        stops_to_css_gradient("linear", stops, angle_deg=9.5)
        == "linear-gradient(9.5deg, #ffffff 12.13%, #000000 75.5%)"
    )


def test_position_ties_round_up():
    stops = [GradientStop("#000000", 75.5), GradientStop("#ffffff", 12.125)]
    assert stops_to_css_gradient("linear", stops, angle_deg=0) == (
        "linear-gradient(0deg, #ffffff 12.13%, #000000 75.5%)"
    )
    tiny = [GradientStop("#000000", 0.00125), GradientStop("#ffffff", 1.0)]
    assert "#000000 0.13%" in stops_to_css_gradient("linear", tiny, angle_deg=0)


def test_radial_and_conic_prefixes():
    assert (
        stops_to_css_gradient(
            "radial",
            RED_BLUE,
            anchor_x_percent=50,
            anchor_y_percent=150,
            radial_extent="farthest-side",
        )
        == "radial-gradient(circle farthest-side at 50% 150%, #ff0000 0%, #0000ff 100%)"
    )
    assert (
        stops_to_css_gradient("conic", RED_BLUE, angle_deg=90, anchor_x_percent=0, anchor_y_percent=0)
        == "conic-gradient(from 90deg at 0% 0%, #ff0000 0%, #0000ff 100%)"
    )
    assert (
        stops_to_css_gradient("radial", RED_BLUE, radial_shape=None)
        == "radial-gradient(#ff0000 0%, #0000ff 100%)"
    )


def test_translucent_stop_uses_rgba():
    stops = [GradientStop("#ff0000", 0.0, opacity=0.5), GradientStop("#0000ff", 1.0, opacity=1.0)]
    assert (
        stops_to_css_gradient("linear", stops, angle_deg=0)
        == "linear-gradient(0deg, rgba(255, 0, 0, 0.5) 0%, #0000ff 100%)"
    )


def test_lighten_css_gradient_raises_lightness():
    css = "linear-gradient(90deg, #000000 0%, #ffffff 100%)"
    assert lighten_css_gradient(css, 0.5) == (
        "linear-gradient(90deg, rgb(128, 128, 128) 0%, rgb(255, 255, 255) 100%)"
    )
    # amount clamps to 1
    assert lighten_css_gradient(css, 5) == (
        "linear-gradient(90deg, rgb(255, 255, 255) 0%, rgb(255, 255, 255) 100%)"
    )


def test_darken_css_gradient_keeps_alpha():
    css = "linear-gradient(to right, #ff0000 0%, rgba(255, 0, 0, 0.5) 100%)"
    assert darken_css_gradient(css, 0.25) == (
        "linear-gradient(to right, rgb(128, 0, 0) 0%, rgba(128, 0, 0, 0.5) 100%)"
    )
    assert darken_css_gradient(css, math.nan) == (
        "linear-gradient(to right, rgb(255, 0, 0) 0%, rgba(255, 0, 0, 0.5) 100%)"
    )


def test_adjust_css_gradient_switches_kind():
    css = "radial-gradient(circle at 50% 50%, red 0%, blue 100%)"
    assert lighten_css_gradient(css, 0, "diamond") == (
        "diamond-gradient(circle at 50% 50%, rgb(255, 0, 0) 0%, rgb(0, 0, 255) 100%)"
    )
    back = darken_css_gradient("diamond-gradient(#000000, #000000)", 0, "linear")
    assert back == "linear-gradient(rgb(0, 0, 0), rgb(0, 0, 0))"


@pytest.mark.parametrize(
    "css", ["not a gradient", "conic-gradient(red, blue)", "linear-gradient()"]
)
def test_adjust_css_gradient_passes_unparseable_through(css, caplog):
    with caplog.at_level(logging.WARNING, logger="synth_gradients.css"):
        assert lighten_css_gradient(css, 0.3) == css
        assert darken_css_gradient(css, 0.3, "radial") == css
    assert "unable to parse gradient" in caplog.text


def test_rgba_accepts_bare_hex():
    assert to_rgba_string("00ff00", 0.25) == "rgba(0, 255, 0, 0.25)"


def test_background_position_special_cases_unit_scale():
    assert compute_background_position(50, 50, 1.0) == "calc(50% - 50%)"
    assert compute_background_position(50, 50, 2.0) == "50%"
    assert compute_background_position(0, 0, 2.0) == "0%"


def test_resolve_scale_defaults_to_one():
    assert resolve_scale(None) == 1.0
    assert resolve_scale(-2) == 1.0
    assert resolve_scale(math.nan) == 1.0
    assert resolve_scale(1.5) == 1.5


def test_background_layout():
    assert background_layout().to_css() == {"background-repeat": "no-repeat"}
    css = background_layout(anchor_x_percent=0, anchor_y_percent=100, scale=2).to_css()
    assert css["background-size"] == "200% 200%"
    assert css["background-position"] == "0% 100%"


# ---- compositing -------------------------------------------------------------


def test_normalize_color():
    assert normalize_color(" ff00ff ") == "#ff00ff"
    assert normalize_color("#abc") == "#abc"


def test_mix_endpoints_and_surplus():
    a = [GradientStop("#ff0000", 0.0), GradientStop("#00ff00", 0.5), GradientStop("#123456", 1.0)]
    b = [GradientStop("#0000ff", 0.2, opacity=0.0), GradientStop("#00ff00", 0.9)]

    start = mix_stops_by_index(a, b, 0.0)
    assert [s.color for s in start[:2]] == ["#ff0000", "#00ff00"]
    assert [s.at for s in start] == [0.0, 0.5, 1.0]
    assert start[0].opacity == 1.0
    assert start[2] is a[2]

    end = mix_stops_by_index(a, b, 1.0)
    assert end[0].color == "#0000ff"
    assert end[0].opacity == 0.0

    half = mix_stops_by_index(a, b, 0.5)
    assert half[0].opacity == pytest.approx(0.5)


def test_mix_is_monotonic_in_t():
    a, b = [GradientStop("#000000", 0)], [GradientStop("#ffffff", 0)]
    lum = [
        Color(mix_stops_by_index(a, b, t)[0].color).luminance()
        for t in (0, 0.25, 0.5, 0.75, 1)
    ]
    assert all(lum[i] <= lum[i + 1] for i in range(len(lum) - 1))


def test_interactive_stops_morph_and_sort():
    base = [GradientStop("#111111", 1.0), GradientStop("#222222", 0.0)]
    assert [s.at for s in compute_interactive_stops(base, 0.5)] == [0.0, 1.0]

    frm = [GradientStop("#0000ff", 1.0), GradientStop("#ff0000", 0.0)]
    to = [GradientStop("#00ff00", 0.0), GradientStop("#00ff00", 1.0)]
    out = compute_interactive_stops(base, 0.0, interactive=True, stops_from=frm, stops_to=to)
    assert [s.color for s in out] == ["#ff0000", "#0000ff"]


def test_brightness_factor():
    assert compute_brightness_factor(0.2, 0.5, 0.5) == pytest.approx(0.45)
    assert compute_brightness_factor(0.9, 1.0, 1.0) == 1.0
    assert compute_brightness_factor(None, None, 1.0) == 0.0
    assert compute_brightness_factor(-1, 2, 3) == 1.0


def test_brighten_noop_returns_same_list():
    stops = list(RED_BLUE)
    assert brighten_stops(stops, 0) is stops
    assert brighten_stops(stops, -0.5) is stops


def test_nan_factor_is_treated_as_zero():
    stops = list(RED_BLUE)
    assert brighten_stops(stops, math.nan) is stops
    b = [GradientStop("#0000ff", 0.2, opacity=0.0), GradientStop("#00ff00", 0.9)]
    out = mix_stops_by_index(RED_BLUE, b, math.nan)
    assert [s.color for s in out] == ["#ff0000", "#0000ff"]
    assert [s.at for s in out] == [0.0, 1.0]
    assert out[0].opacity == 1.0


def test_brighten_moves_toward_white():
    out = brighten_stops(list(RED_BLUE), 1.0)
    assert [s.color for s in out] == ["#ffffff", "#ffffff"]
    partial = brighten_stops(list(RED_BLUE), 0.5)
    assert Color(partial[0].color).luminance() > Color("#ff0000").luminance()
    assert [s.at for s in partial] == [0.0, 1.0]


# ---- svg ---------------------------------------------------------------------


def test_radial_params_default_to_center():
    cx, cy, r = compute_radial_gradient_params(300, 400)
    assert (cx, cy) == (150, 200)
    assert r == 250


def test_radial_anchor_overrides_pivot_per_axis():
    p = compute_radial_gradient_params(300, 100, pivot="right-center", anchor_y_percent=150)
    assert p.cx == 300
    assert p.cy == 150
    p = compute_radial_gradient_params(300, 100, pivot="left-center", anchor_x_percent=-20)
    assert p.cx == 0
    assert p.cy == 50


def test_linear_endpoints_cover_box_through_anchor():
    x1, y1, x2, y2 = compute_linear_gradient_endpoints(300, 400, angle_deg=0, pivot="center")
    assert (x1, y1, x2, y2) == pytest.approx((-350, 200, 650, 200))
    e = compute_linear_gradient_endpoints(300, 400, angle_deg=90, anchor_x_percent=0, anchor_y_percent=0)
    assert tuple(e) == pytest.approx((0, -500, 0, 500), abs=1e-9)


def test_legacy_endpoints():
    assert tuple(compute_gradient_endpoints(0, 1, "left-center", 300, 400, False)) == pytest.approx(
        (0, 0, 300, 0)
    )
    assert tuple(compute_gradient_endpoints(0, 1, "left-center", 300, 400, True)) == pytest.approx(
        (0, 200, 500, 200)
    )
    assert tuple(compute_gradient_endpoints(0, 2, "center", 300, 400, True)) == pytest.approx(
        (-350, 200, 650, 200)
    )
    assert tuple(compute_gradient_endpoints(0, 1, "right-center", 300, 400, True)) == pytest.approx(
        (-200, 200, 300, 200)
    )


def test_render_svg_gradient_markup():
    stops = [GradientStop("ff0000", 0), GradientStop("#0000ff", 100, opacity=0.5)]
    svg = SvgGradientDef(id="g1", width=300, height=400, stops=stops, kind="radial").render()
    assert svg.startswith('<radialGradient id="g1" cx="0" cy="200" r="250" gradientUnits="userSpaceOnUse">')
    assert '<stop offset="0%" stop-color="#ff0000" stop-opacity="1"/>' in svg
    assert '<stop offset="100%" stop-color="#0000ff" stop-opacity="0.5"/>' in svg
    assert svg.endswith("</radialGradient>")
