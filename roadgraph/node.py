from typing import List

from roadgraph.edge import Edge
from roadgraph.geo import Point


# ---------------------------------------------------------------------------
# Node
# ---------------------------------------------------------------------------
class Node:
    """
    A road junction or shape point.

    Attributes:
        id     : Quantised-coordinate id (see geo.point_id).
        lat    : Latitude of the first point that produced this node.
        lon    : Longitude, same.
        edges  : Outgoing edges, in the order they were added.  Only the
                 owning Graph appends here, and only while it is being built.
    """

    __slots__ = ("id", "lat", "lon", "edges")

    def __init__(self, node_id: str, lat: float, lon: float):
        self.id:    str        = node_id
        self.lat:   float      = lat
        self.lon:   float      = lon
        self.edges: List[Edge] = []

    @property
    def point(self) -> Point:
        return Point(self.lat, self.lon)

    @property
    def degree(self) -> int:
        """Number of outgoing edges."""
        return len(self.edges)

    # ------------------------------------------------------------------
    # Serialisation
    # ------------------------------------------------------------------
    def to_dict(self) -> dict:
        return {
            "id":  self.id,
            "lat": self.lat,
            "lon": self.lon,
        }

    # ------------------------------------------------------------------
    # Dunder
    # ------------------------------------------------------------------
    def __repr__(self) -> str:
        return f"Node(id={self.id}, degree={self.degree})"

    def __eq__(self, other) -> bool:
        return isinstance(other, Node) and self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)
