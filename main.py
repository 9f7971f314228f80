# main.py

from bikeflow.engine import TrafficEngine
from bikeflow.util.time_fmt import format_minute_label
from bikeflow.viz.app.single import serve_traffic_map


TRIPS = "bluebikes-traffic-2024-03.csv"
STATIONS = "bluebikes-stations.json"


def main():
    engine = TrafficEngine.from_files(TRIPS, STATIONS)

    # ---- quick look at the morning peak ----
    result = engine.query(8 * 60)
    busiest = sorted(result.stations, key=lambda s: s.total_traffic, reverse=True)[:10]

    print(f"\nBusiest stations around {format_minute_label(8 * 60)}:\n")
    for i, s in enumerate(busiest, 1):
        print(
            f"{i:02d}. "
            f"{s.id:>8} | "
            f"{s.total_traffic:5d} trips "
            f"({s.departures} dep, {s.arrivals} arr, "
            f"ratio {s.departure_ratio:.2f})"
        )

    # ---- UI ----
    serve_traffic_map(engine, port=8080, title="Bluebikes Traffic")


if __name__ == "__main__":
    main()
