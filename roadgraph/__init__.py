"""
roadgraph/
----------
Road network data layer.  Public API:

    from roadgraph import Graph, Node, Edge, Point
    from roadgraph import build_graph, distance
"""

from roadgraph.geo     import Point, distance, point_id
from roadgraph.edge    import Edge, make_edge_id
from roadgraph.node    import Node
from roadgraph.graph   import Graph, GraphError, GraphIntegrityError
from roadgraph.builder import WayRecord, build_graph, build_raw_graph, parse_ways, simplify_graph

__all__ = [
    "Point",     "distance",     "point_id",
    "Edge",      "make_edge_id",
    "Node",
    "Graph",     "GraphError",   "GraphIntegrityError",
    "WayRecord", "build_graph",  "build_raw_graph", "parse_ways", "simplify_graph",
]
