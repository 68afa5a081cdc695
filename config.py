"""
Configuration constants for the road-network algorithm animator.

Geometry, graph-building, pacing and API settings live here.  A few values
can be overridden from the environment; everything else is a plain constant.
"""

import os

# =============================================================================
# Geometry
# =============================================================================

# Spherical-earth radius used by the haversine distance (metres)
EARTH_RADIUS_M = 6_371_000.0

# Decimal places kept when turning a coordinate into a node id.
# Endpoints that agree to this precision merge into one node.
COORD_PRECISION = 5

# =============================================================================
# Graph building
# =============================================================================

# A way participates in the road graph if it carries any of these tags
ROUTABLE_TAGS = ("highway",)

# Promote one node of every pure degree-2 cycle so the cycle survives
# simplification (off: such cycles are dropped)
KEEP_ISOLATED_CYCLES = False

# =============================================================================
# Pacing
# =============================================================================

# Default pause between two snapshots of a run (milliseconds)
DEFAULT_DELAY_MS = float(os.environ.get("ROADGRAPH_DELAY_MS", "50"))

# Path replay after a shortest-path search runs this many times slower
PATH_REPLAY_DELAY_FACTOR = 2

# Playback speed presets: multiplier applied to each snapshot's delay
SPEED_PRESETS = {
    "slow":   4.0,
    "normal": 1.0,
    "fast":   0.25,
    "turbo":  0.0,    # no pause at all
}
DEFAULT_SPEED = "normal"

# =============================================================================
# HTTP API
# =============================================================================

API_HOST = os.environ.get("ROADGRAPH_HOST", "127.0.0.1")
API_PORT = int(os.environ.get("ROADGRAPH_PORT", "5000"))
API_DEBUG = os.environ.get("ROADGRAPH_DEBUG", "0") == "1"

# Live per-session workspaces kept in memory; the least recently used one is
# evicted beyond this
MAX_WORKSPACES = int(os.environ.get("ROADGRAPH_MAX_WORKSPACES", "64"))

# =============================================================================
# Logging Configuration
# =============================================================================

# Log level (DEBUG, INFO, WARNING, ERROR)
LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")
