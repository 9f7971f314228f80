# bikeflow/viz/widgets/time_slider.py
import json

import folium

from bikeflow.util.time_fmt import format_minute_label


def build_time_slider(t_current: int, *, layer_name: str, api_url: str = "/api/traffic"):
    """
    Range input over [-1, 1439]; -1 is "any time".

    Every input event fetches {api_url}?t=<minute> and restyles the circles of
    the station FeatureGroup in place (same order as the API's stations list).
    Stale responses are ignored when the slider has moved on.
    """
    label = format_minute_label(t_current)

    return folium.Element(
        f"""
<style>
#time-filter {{
  position: absolute;
  left: 50%;
  bottom: 24px;
  transform: translateX(-50%);
  z-index: 1200;
  background: rgba(255,255,255,0.95);
  padding: 8px 16px;
  border-radius: 12px;
  font-size: 13px;
  display: flex;
  align-items: center;
  gap: 10px;
}}
#time-slider {{
  width: 360px;
}}
#selected-time {{
  min-width: 72px;
  font-weight: 600;
}}
</style>

<div id="time-filter">
  <label for="time-slider">Filter by time:</label>
  <input id="time-slider" type="range" min="-1" max="1439" value="{int(t_current)}">
  <span id="selected-time">{label}</span>
</div>

<script>
(function () {{
  const LAYER = {json.dumps(layer_name)};
  const API_URL = {json.dumps(api_url)};
  let latest = null;

  function fmt(minutes) {{
    if (minutes === -1) return "Any time";
    const d = new Date(0, 0, 0, 0, minutes);
    return d.toLocaleString("en-US", {{ timeStyle: "short" }});
  }}

  function restyle(payload) {{
    const group = window[LAYER];
    if (!group) return;
    const layers = group.getLayers();
    payload.stations.forEach((s, i) => {{
      const circle = layers[i];
      if (!circle) return;
      circle.setRadius(s.radius);
      circle.setStyle({{ fillColor: s.color }});
      circle.setTooltipContent(`${{s.total_traffic}} trips`);
      circle.setPopupContent(
        `<b>${{s.name || s.id}}</b><br>Station ID: ${{s.id}}<br>` +
        `${{s.total_traffic}} trips (${{s.departures}} dep, ${{s.arrivals}} arr)`
      );
    }});
  }}

  function update(minute) {{
    latest = minute;
    fetch(`${{API_URL}}?t=${{minute}}`)
      .then((r) => r.json())
      .then((payload) => {{
        if (minute !== latest || payload.error) return;
        restyle(payload);
      }});

    const url = new URL(window.location.href);
    url.searchParams.set("t", String(minute));
    window.history.replaceState(null, "", url.toString());
  }}

  document.addEventListener("DOMContentLoaded", () => {{
    const slider = document.getElementById("time-slider");
    const label = document.getElementById("selected-time");
    if (!slider) return;

    const wrap = document.getElementById("map-wrap");
    const box = document.getElementById("time-filter");
    if (wrap && box) wrap.appendChild(box);

    slider.addEventListener("input", () => {{
      const minute = Number(slider.value);
      label.textContent = fmt(minute);
      update(minute);
    }});
  }});
}})();
</script>
"""
    )
