"""
main.py — Road Graph Animator Flask API
========================================
JSON API in front of the graph builder and the algorithm engine.  A
renderer posts map ways, picks an algorithm and pulls snapshots one by one
(or drains a run for its metrics).

Routes:
  GET  /api/algorithms         – registry listing
  POST /api/graph/build        – build a graph from way elements
  GET  /api/graph              – current graph (?raw=1 for the raw graph)
  POST /api/run                – start an algorithm run
  POST /api/step/next          – advance one snapshot
  POST /api/step/prev          – rewind one snapshot
  POST /api/step/goto          – jump to snapshot N
  POST /api/run/complete       – run to the end, return metrics
  POST /api/compare            – run two algorithms, compare them
  GET  /api/state              – current run state

State management:
  Graphs and runs are kept in process memory, one Workspace per browser
  session (the Flask session only carries the workspace id).  Each
  workspace holds:
    • graph      – the built (simplified) Graph, raw graph attached
    • stepper    – the Stepper driving the current run
    • algorithm / source / sink of that run
Only a graph build creates a workspace.  At most config.MAX_WORKSPACES are
kept; the least recently used one is evicted first.
"""

import logging
import secrets
from collections import OrderedDict
from dataclasses import dataclass
from typing import Optional

from flask import Flask, jsonify, request, session

import config
from algorithms import get_algorithm_by_id, list_algorithms
from engine import Recorder, Stepper, compare
from roadgraph import Graph, build_graph

logging.basicConfig(
    level=config.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

app = Flask(__name__)
app.secret_key = secrets.token_hex(32)


# ---------------------------------------------------------------------------
# Workspace State Helpers
# ---------------------------------------------------------------------------
@dataclass
class Workspace:
    graph:     Optional[Graph]   = None
    stepper:   Optional[Stepper] = None
    algorithm: Optional[str]     = None
    source:    Optional[str]     = None
    sink:      Optional[str]     = None


_WORKSPACES: "OrderedDict[str, Workspace]" = OrderedDict()


def get_workspace(create: bool = True) -> Optional[Workspace]:
    """
    Workspace of the calling session, created on first use.  Read-only
    routes pass create=False and get None for a session without one.
    At most config.MAX_WORKSPACES are kept; the least recently used goes.
    """
    sid = session.get("sid")
    ws = _WORKSPACES.get(sid) if sid else None
    if ws is not None:
        _WORKSPACES.move_to_end(sid)
        return ws
    if not create:
        return None

    sid = secrets.token_hex(16)
    session["sid"] = sid
    ws = _WORKSPACES[sid] = Workspace()
    while len(_WORKSPACES) > config.MAX_WORKSPACES:
        evicted, _ = _WORKSPACES.popitem(last=False)
        logger.info(f"Evicted workspace {evicted}")
    return ws


def error(message: str, status: int = 400):
    return jsonify({"error": message}), status


def step_payload(ws: Workspace) -> dict:
    stepper = ws.stepper
    current = stepper.current_step
    return {
        "index":    stepper.current_idx,
        "fetched":  stepper.total_steps_fetched,
        "finished": stepper.is_finished,
        "snapshot": current.to_dict() if current else None,
        "final":    stepper.final.to_dict() if stepper.final else None,
    }


def run_options(ws: Workspace, data: dict, algorithm_id: str) -> dict:
    """
    Keyword arguments for a producer, taken from a request body.
    Raises ValueError / TypeError on values that can't be used.
    """
    options = {
        "source":   data.get("source", ws.source),
        "sink":     data.get("sink", ws.sink),
        "delay_ms": float(data.get("delay_ms", config.DEFAULT_DELAY_MS)),
    }
    for key in ("source", "sink"):
        if options[key] is not None and not isinstance(options[key], str):
            raise ValueError(f"'{key}' must be a node id")
    if options["delay_ms"] < 0:
        raise ValueError("'delay_ms' must not be negative")
    # only the demo walk takes a seed
    if algorithm_id == "random-edges" and data.get("seed") is not None:
        options["seed"] = int(data["seed"])
    return options


# ---------------------------------------------------------------------------
# API: Registry
# ---------------------------------------------------------------------------
@app.route("/api/algorithms")
def api_algorithms():
    return jsonify({"algorithms": [a.to_dict() for a in list_algorithms()]})


# ---------------------------------------------------------------------------
# API: Graph
# ---------------------------------------------------------------------------
@app.route("/api/graph/build", methods=["POST"])
def api_graph_build():
    data = request.get_json(silent=True) or {}
    elements = data.get("elements")
    if not isinstance(elements, list):
        return error("Body must contain an 'elements' list")

    graph = build_graph(
        elements,
        simplify=bool(data.get("simplify", True)),
        keep_isolated_cycles=bool(data.get("keep_isolated_cycles", config.KEEP_ISOLATED_CYCLES)),
    )
    ws = get_workspace()
    ws.graph = graph
    ws.stepper = None
    ids = graph.node_ids()
    ws.source, ws.sink = (ids[0], ids[-1]) if len(ids) >= 2 else (None, None)

    raw = graph.raw or graph
    return jsonify({
        "nodes":     graph.node_count(),
        "edges":     graph.edge_count(),
        "raw_nodes": raw.node_count(),
        "raw_edges": raw.edge_count(),
        "node_ids":  ids,
        "source":    ws.source,
        "sink":      ws.sink,
    })


@app.route("/api/graph")
def api_graph():
    ws = get_workspace(create=False)
    if ws is None or ws.graph is None:
        return error("No graph built yet", 404)
    want_raw = request.args.get("raw") in ("1", "true")
    graph = ws.graph.raw if want_raw and ws.graph.raw is not None else ws.graph
    return jsonify(graph.to_dict())


# ---------------------------------------------------------------------------
# API: Run Algorithm
# ---------------------------------------------------------------------------
@app.route("/api/run", methods=["POST"])
def api_run():
    ws = get_workspace(create=False)
    if ws is None or ws.graph is None:
        return error("Build a graph first", 404)
    data = request.get_json(silent=True) or {}
    algorithm_id = data.get("algorithm", "bfs")
    info = get_algorithm_by_id(algorithm_id)
    if info is None:
        return error(f"Unknown algorithm: {algorithm_id}", 404)
    try:
        options = run_options(ws, data, algorithm_id)
    except (TypeError, ValueError) as exc:
        return error(f"Invalid run options: {exc}")

    ws.algorithm = algorithm_id
    ws.source, ws.sink = options["source"], options["sink"]

    stepper = Stepper()
    stepper.start(info.run(ws.graph, **options))
    if data.get("speed"):
        stepper.set_speed(str(data["speed"]))
    ws.stepper = stepper
    return jsonify({"algorithm": algorithm_id, "source": ws.source, "sink": ws.sink})


@app.route("/api/run/complete", methods=["POST"])
def api_run_complete():
    ws = get_workspace(create=False)
    if ws is None or ws.graph is None:
        return error("Build a graph first", 404)
    data = request.get_json(silent=True) or {}
    algorithm_id = data.get("algorithm", ws.algorithm or "bfs")
    if get_algorithm_by_id(algorithm_id) is None:
        return error(f"Unknown algorithm: {algorithm_id}", 404)
    try:
        options = run_options(ws, data, algorithm_id)
    except (TypeError, ValueError) as exc:
        return error(f"Invalid run options: {exc}")

    rec = Recorder()
    rec.start(algorithm_id, ws.graph, **options)
    rec.run_to_completion()
    result = rec.export()
    if not data.get("include_steps"):
        result.pop("steps")
    return jsonify(result)


@app.route("/api/compare", methods=["POST"])
def api_compare():
    ws = get_workspace(create=False)
    if ws is None or ws.graph is None:
        return error("Build a graph first", 404)
    data = request.get_json(silent=True) or {}
    left_id, right_id = data.get("left"), data.get("right")
    for algorithm_id in (left_id, right_id):
        if get_algorithm_by_id(algorithm_id or "") is None:
            return error(f"Unknown algorithm: {algorithm_id}", 404)

    recorders = []
    for algorithm_id in (left_id, right_id):
        try:
            options = run_options(ws, data, algorithm_id)
        except (TypeError, ValueError) as exc:
            return error(f"Invalid run options: {exc}")
        rec = Recorder()
        rec.start(algorithm_id, ws.graph, **options)
        rec.run_to_completion()
        recorders.append(rec)
    return jsonify(compare(*recorders).to_dict())


# ---------------------------------------------------------------------------
# API: Step Navigation
# ---------------------------------------------------------------------------
def current_run() -> Optional[Workspace]:
    """Workspace of the caller if it has a run going, else None."""
    ws = get_workspace(create=False)
    if ws is None or ws.stepper is None:
        return None
    return ws


@app.route("/api/step/next", methods=["POST"])
def api_step_next():
    ws = current_run()
    if ws is None:
        return error("Start a run first")
    ws.stepper.next_step()
    return jsonify(step_payload(ws))


@app.route("/api/step/prev", methods=["POST"])
def api_step_prev():
    ws = current_run()
    if ws is None:
        return error("Start a run first")
    if not ws.stepper.prev_step():
        return error("Already at first step")
    return jsonify(step_payload(ws))


@app.route("/api/step/goto", methods=["POST"])
def api_step_goto():
    ws = current_run()
    if ws is None:
        return error("Start a run first")
    data = request.get_json(silent=True) or {}
    try:
        idx = int(data.get("index", 0))
    except (TypeError, ValueError):
        return error("Invalid step index")
    if not ws.stepper.goto_step(idx):
        return error("Invalid step index")
    return jsonify(step_payload(ws))


@app.route("/api/state")
def api_state():
    ws = get_workspace(create=False) or Workspace()
    return jsonify({
        "has_graph": ws.graph is not None,
        "algorithm": ws.algorithm,
        "source":    ws.source,
        "sink":      ws.sink,
        "run":       step_payload(ws) if ws.stepper else None,
    })


# ---------------------------------------------------------------------------
if __name__ == "__main__":
    app.run(debug=config.API_DEBUG, host=config.API_HOST, port=config.API_PORT)
