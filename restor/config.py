import logging
import os
from pathlib import Path

from dotenv import load_dotenv

BASE_DIR = Path(__file__).resolve().parent.parent
load_dotenv(BASE_DIR / ".env")

APP_NAME = os.getenv("APP_NAME", "Restor-1 API")
API_VERSION = "1.0.0"
ENV = os.getenv("ENV", "local")
PORT = int(os.getenv("PORT", 3000))
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

# "json" serves the bundled snapshot, "sql" reads PostgreSQL
DATA_SOURCE = os.getenv("DATA_SOURCE", "json").lower()
DATA_DIR = Path(os.getenv("DATA_DIR", BASE_DIR / "data"))
RESTAURANTS_FILE = os.getenv("RESTAURANTS_FILE", "restaurants.json")
DISHES_FILE = os.getenv("DISHES_FILE", "dishes.json")


def parse_bbox(raw: str) -> tuple[float, float, float, float]:
    """Parse "lat_min,lat_max,lng_min,lng_max"."""
    parts = [float(p) for p in raw.split(",")]
    if len(parts) != 4:
        raise ValueError(f"FALLBACK_BBOX needs 4 numbers, got {raw!r}")
    lat_min, lat_max, lng_min, lng_max = parts
    if lat_min > lat_max or lng_min > lng_max:
        raise ValueError(f"FALLBACK_BBOX bounds are inverted: {raw!r}")
    return lat_min, lat_max, lng_min, lng_max


# Almaty
FALLBACK_BBOX = parse_bbox(os.getenv("FALLBACK_BBOX", "43.2,43.3,76.8,77.0"))


def configure_logging(level: str = LOG_LEVEL) -> None:
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
