from __future__ import annotations

import logging
import math
from dataclasses import asdict
from typing import Any, Mapping

from flask import Flask, jsonify, render_template_string, request

from .css import stops_to_css_gradient
from .dock import DockArcConfig, dock_layout
from .harmonic import GradientConfig, generate_harmonic_gradient
from .presets import BASE_SYNTH_GRADIENT_CONFIG, build_synth_background_gradient
from .stops import brighten_stops

log = logging.getLogger(__name__)

MODES = {"center-bright", "side-bright"}
SCHEMES = {"mono", "dual-complementary"}
KINDS = {"linear", "radial", "conic"}

DEFAULT_CONFIG: Mapping[str, Any] = {
    "MAX_STOPS": 512,
    "MAX_DOCK_ROWS": 64,
    "DEFAULT_SEED": None,
}

INDEX_HTML = """<!doctype html>
<html>
<head><meta charset="utf-8"><title>synth gradients</title></head>
<body style="margin:0;min-height:100vh;background:{{ background }}">
<pre style="color:#fff;padding:1rem">{{ background }}</pre>
</body>
</html>
"""


def _float_arg(name: str, default: float | None = None) -> float | None:
    raw = request.args.get(name)
    if raw is None or raw == "":
        return default
    try:
        v = float(raw)
    except ValueError:
        raise ValueError(f"{name} must be a number") from None
    if not math.isfinite(v):
        raise ValueError(f"{name} must be a finite number")
    return v


def _int_arg(name: str, default: int | None = None) -> int | None:
    raw = request.args.get(name)
    if raw is None or raw == "":
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer") from None


def _choice_arg(name: str, choices: set[str], default: str) -> str:
    v = (request.args.get(name) or default).strip().lower()
    if v not in choices:
        raise ValueError(f"unknown {name} '{v}'; expected one of {sorted(choices)}")
    return v


def _range_arg(lo_name: str, hi_name: str) -> dict[str, float] | None:
    band = {
        k: v
        for k, v in (("min", _float_arg(lo_name)), ("max", _float_arg(hi_name)))
        if v is not None
    }
    return band or None


def parse_gradient_config(max_stops: int, default_seed: int | None) -> GradientConfig:
    """Build a GradientConfig from the current request's query string."""
    return GradientConfig(
        base_hue=_float_arg("hue", 220.0),  # type: ignore[arg-type]
        hue_spread=_float_arg("spread"),
        lightness_range=_range_arg("lmin", "lmax"),
        chroma_range=_range_arg("cmin", "cmax"),
        mode=_choice_arg("mode", MODES, "center-bright"),  # type: ignore[arg-type]
        stops=max(2, min(_int_arg("stops", 5), max_stops)),  # type: ignore[type-var]
        seed=_int_arg("seed", default_seed),
        variance=_float_arg("variance"),
        hue_scheme=_choice_arg("scheme", SCHEMES, "mono"),  # type: ignore[arg-type]
        secondary_hue=_float_arg("secondary"),
        zoom=_float_arg("zoom"),
        center_stretch=_float_arg("stretch"),
    )


# ----------------------------- Flask app ----------------------------------


def create_app(config: Mapping[str, Any] | None = None) -> Flask:
    app = Flask(__name__)
    app.config.update(DEFAULT_CONFIG)
    if config:
        app.config.update(config)
    logging.basicConfig(level=logging.INFO, format="%(levelname)s: %(message)s")

    @app.route("/")
    def index():
        return render_template_string(INDEX_HTML, background=build_synth_background_gradient())

    @app.route("/gradient")
    def gradient():
        try:
            cfg = parse_gradient_config(app.config["MAX_STOPS"], app.config["DEFAULT_SEED"])
            kind = _choice_arg("kind", KINDS, "linear")
            angle = _float_arg("angle")
            brighten = _float_arg("brighten", 0.0)
        except ValueError as e:
            return jsonify({"error": str(e)}), 400

        try:
            stops = brighten_stops(generate_harmonic_gradient(cfg), brighten)  # type: ignore[arg-type]
            css = stops_to_css_gradient(kind, stops, angle_deg=angle)  # type: ignore[arg-type]
        except Exception as exc:
            log.exception("Gradient generation failed")
            return jsonify({"error": str(exc)}), 500

        return jsonify({"stops": [s.to_dict() for s in stops], "css": css})

    @app.route("/dock")
    def dock():
        try:
            count = _int_arg("count", 5)
            active = _int_arg("active")
            base_hue = _float_arg("hue", float(BASE_SYNTH_GRADIENT_CONFIG.base_hue))
            angle = _float_arg("angle", 9.0)
            if not 1 <= count <= app.config["MAX_DOCK_ROWS"]:  # type: ignore[operator]
                raise ValueError(f"count must be in 1..{app.config['MAX_DOCK_ROWS']}")
            if active is not None and not 0 <= active < count:  # type: ignore[operator]
                raise ValueError("active must index a row")
        except ValueError as e:
            return jsonify({"error": str(e)}), 400

        rows = dock_layout(
            count,  # type: ignore[arg-type]
            active,
            base_hue=base_hue,  # type: ignore[arg-type]
            angle_deg=angle,  # type: ignore[arg-type]
            arc=DockArcConfig(),
        )
        return jsonify([asdict(r) | {"arc": r.arc._asdict()} for r in rows])

    return app


__all__ = ["create_app", "parse_gradient_config"]
