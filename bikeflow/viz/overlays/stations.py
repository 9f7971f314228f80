import folium

from bikeflow.traffic.scales import quantize_flow, sqrt_scale

# quantized departure ratio -> fill color
FLOW_COLORS = {
    0.0: "#ff8c00",   # mostly arrivals
    0.5: "#a26c8a",   # balanced
    1.0: "#4682b4",   # mostly departures
}


def marker_style(station, result, radius_range):
    """
    radius = sqrt scale of total_traffic over [0, max_total_traffic]
    color  = quantized departure ratio
    """
    flow = quantize_flow(result.scales.departure_ratio_of(station.id))
    radius = sqrt_scale(station.total_traffic, result.max_total_traffic, radius_range)
    return radius, FLOW_COLORS[flow]


def add_traffic_markers(m, result, radius_range):
    """
    Draw one circle per station into a FeatureGroup, in result.stations order,
    and return the group so the time slider can restyle the circles in place.
    """
    group = folium.FeatureGroup(name="stations")

    for s in result.stations:
        radius, color = marker_style(s, result, radius_range)

        popup = [
            f"<b>{s.name or s.id}</b>",
            f"Station ID: {s.id}",
            f"{s.total_traffic} trips ({s.departures} dep, {s.arrivals} arr)",
        ]

        folium.CircleMarker(
            location=[float(s.lat), float(s.lon)],
            radius=radius,
            color="white",
            weight=1,
            fill=True,
            fill_color=color,
            fill_opacity=0.7,
            popup="<br>".join(popup),
            tooltip=f"{s.total_traffic} trips",
        ).add_to(group)

    group.add_to(m)
    return group
