"""
geo.py — Coordinates & Great-Circle Distance
=============================================
Everything the graph layer knows about the shape of the earth.

  • Point        – (lat, lon) in degrees
  • distance()   – haversine distance in metres on a spherical earth
  • point_id()   – quantised coordinate → node id, so coincident endpoints
                   coming from different ways collapse into one node

distance() is the edge weight of every raw road segment and, measured
towards a fixed sink, the A* heuristic.
"""

import math
from typing import NamedTuple

from config import COORD_PRECISION, EARTH_RADIUS_M


class Point(NamedTuple):
    lat: float
    lon: float

    @classmethod
    def from_dict(cls, data: dict) -> "Point":
        return cls(lat=float(data["lat"]), lon=float(data["lon"]))

    def to_list(self) -> list:
        return [self.lat, self.lon]


def distance(p1: Point, p2: Point) -> float:
    """Haversine distance between two points, in metres."""
    lat1 = math.radians(p1.lat)
    lat2 = math.radians(p2.lat)
    d_lat = math.radians(p2.lat - p1.lat)
    d_lon = math.radians(p2.lon - p1.lon)

    a = (math.sin(d_lat / 2) ** 2
         + math.cos(lat1) * math.cos(lat2) * math.sin(d_lon / 2) ** 2)
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
    return EARTH_RADIUS_M * c


def point_id(point: Point, precision: int = COORD_PRECISION) -> str:
    """Node id for a coordinate: both axes rounded to `precision` decimals."""
    # + 0.0 turns a rounded -0.0 into 0.0 so both sides of the equator/meridian agree
    lat = round(point.lat, precision) + 0.0
    lon = round(point.lon, precision) + 0.0
    return f"{lat:.{precision}f},{lon:.{precision}f}"
