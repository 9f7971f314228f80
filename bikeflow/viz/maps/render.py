# bikeflow/viz/maps/render.py
import folium

from bikeflow.viz.overlays.stations import add_traffic_markers
from bikeflow.viz.widgets.legend import build_legend_widget
from bikeflow.viz.widgets.time_slider import build_time_slider

# Boston / Cambridge, used when there are no stations to center on
DEFAULT_CENTER = (42.36027, -71.09415)


def _map_center(stations):
    if not stations:
        return DEFAULT_CENTER
    lat = sum(s.lat for s in stations) / len(stations)
    lon = sum(s.lon for s in stations) / len(stations)
    return lat, lon


def render_map_document(*, result, radius_range, t_cur: int, title: str | None = None):
    """
    Single place that assembles the full Folium map HTML document.
    """
    m = folium.Map(
        location=list(_map_center(result.stations)),
        zoom_start=12,
        tiles="cartodbpositron",
        prefer_canvas=True,
    )

    group = add_traffic_markers(m, result, radius_range)

    m.get_root().html.add_child(build_time_slider(t_cur, layer_name=group.get_name()))
    m.get_root().html.add_child(build_legend_widget())

    m.get_root().html.add_child(
        folium.Element(
            f"""
<style>
#map-wrap {{
  position: relative;
  width: 100%;
}}
#map-wrap .leaflet-container {{
  width: 100% !important;
  height: 85vh !important;
  min-height: 520px;
}}
#map-title {{
  position: absolute;
  top: 12px;
  left: 50%;
  transform: translateX(-50%);
  background: rgba(255,255,255,0.95);
  padding: 6px 16px;
  border-radius: 999px;
  font-size: 14px;
  font-weight: 600;
  z-index: 1300;
}}
</style>

<script>
document.addEventListener("DOMContentLoaded", () => {{
  const mapEl = document.querySelector(".leaflet-container");
  if (!mapEl) return;

  let wrap = document.getElementById("map-wrap");
  if (!wrap) {{
    wrap = document.createElement("div");
    wrap.id = "map-wrap";
    mapEl.parentNode.insertBefore(wrap, mapEl);
    wrap.appendChild(mapEl);
  }}

  {"const t=document.createElement('div');t.id='map-title';t.textContent=%r;wrap.appendChild(t);" % title if title else ""}
}});
</script>
"""
        )
    )

    return m.get_root().render()
