# bikeflow/viz/app/single.py
from __future__ import annotations

from flask import Flask, jsonify, request

from bikeflow.errors import InvalidArgument
from bikeflow.viz.maps.render import render_map_document
from bikeflow.viz.overlays.stations import marker_style

T_MIN = -1
T_MAX = 1439


def _clamp_t(t: int) -> int:
    return max(T_MIN, min(int(t), T_MAX))


def create_app(engine, *, title: str | None = "Bike Traffic by Time of Day") -> Flask:
    """
    Routes:
      /                 map page, ?t=<minute> (clamped to [-1, 1439])
      /api/traffic      JSON for ?t=<minute> incl. per-station radius / color,
                        400 if out of range
    """
    app = Flask(__name__)

    @app.route("/")
    def _index():
        t_cur = _clamp_t(request.args.get("t", T_MIN, type=int))
        result = engine.query(t_cur)

        return render_map_document(
            result=result,
            radius_range=engine.config.radius_range(result.is_filtered),
            t_cur=t_cur,
            title=title,
        )

    @app.route("/api/traffic")
    def _traffic():
        t_raw = request.args.get("t", str(T_MIN))
        try:
            t_req = int(t_raw)
        except ValueError:
            return jsonify({"error": f"t must be an integer, got {t_raw!r}"}), 400

        try:
            result = engine.query(t_req)
        except InvalidArgument as e:
            return jsonify({"error": str(e)}), 400

        payload = result.to_dict()
        radius_range = engine.config.radius_range(result.is_filtered)
        for s, row in zip(result.stations, payload["stations"]):
            row["radius"], row["color"] = marker_style(s, result, radius_range)

        return jsonify(payload)

    return app


def serve_traffic_map(
    engine,
    *,
    host: str = "127.0.0.1",
    port: int = 8080,
    debug: bool = False,
    title: str | None = "Bike Traffic by Time of Day",
):
    if engine is None:
        raise ValueError("serve_traffic_map requires a TrafficEngine")

    app = create_app(engine, title=title)
    app.run(host=host, port=int(port), debug=bool(debug))
