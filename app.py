import os

from bikeflow.config import EngineConfig
from bikeflow.engine import TrafficEngine
from bikeflow.viz.app.single import serve_traffic_map

TRIPS = os.environ.get("TRIPS_CSV", "bluebikes-traffic-2024-03.csv")
STATIONS = os.environ.get("STATIONS_JSON", "bluebikes-stations.json")


def main():
  engine = TrafficEngine.from_files(TRIPS, STATIONS, config=EngineConfig.from_env())

  port = int(os.environ.get("PORT", "8080"))

  serve_traffic_map(
      engine,
      port=port,
      host="0.0.0.0",  # IMPORTANT for Render
      title=os.environ.get("MAP_TITLE", "Bike Traffic by Time of Day"),
  )


if __name__ == "__main__":
  main()
