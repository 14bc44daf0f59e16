"""
main.py — Step-wise Dijkstra Visualizer Flask App
===================================================
The web server that powers the visualizer.

Routes:
  GET  /                              – main UI
  GET  /api/state                     – current frame (svg, table, pseudocode, …)
  POST /api/graph/generate            – generate a random graph
  POST /api/graph/sample              – load the five-vertex demo graph
  POST /api/graph/import              – import from adjacency-list text
  POST /api/config/source_destination – pick source / destination
  POST /api/config/speed              – change playback speed
  POST /api/step/next                 – advance one tick
  POST /api/step/prev                 – show the previous buffered frame
  POST /api/step/end                  – run to termination
  POST /api/step/reset                – restart the run on the same graph
  POST /api/step/play                 – toggle play/pause
  GET  /api/path/<destination>        – reconstructed path + cost

State management:
  Runs are kept in a process-local dict keyed by a random run id that
  lives in the Flask session cookie (in-memory for now; could move to
  Redis for production).  At most MAX_RUNS are kept; the least recently
  used run is evicted first.  Each run holds:
    • graph        – the Graph being solved
    • stepper      – Stepper driving a Solver, with its frame buffer
    • destination  – vertex whose path is highlighted
    • metrics      – RunMetrics once the run has terminated

Configuration:
  Defaults below, overridable with VISUALIZER_* environment variables
  (e.g. VISUALIZER_DEFAULT_VERTICES=50).
"""

import logging
import secrets
from collections import OrderedDict
from dataclasses import dataclass
from typing import Any, Dict, Hashable, List, Optional

from flask import Flask, jsonify, render_template_string, request, session

from engine import Recorder, RunMetrics, SPEED_PRESETS, Stepper
from graph import (
    Graph,
    GraphError,
    InvalidGraphError,
    PathNotReadyError,
    UnreachableError,
    VertexNotFoundError,
)
from solver import PSEUDOCODE, Solver, SolverSnapshot, path_cost
from ui import (
    analytics_panel,
    distance_table,
    explanation_panel,
    graph_generator,
    playback_controls,
    pseudocode_viewer,
    render_canvas,
    source_destination_picker,
)


logger = logging.getLogger(__name__)

app = Flask(__name__)
app.config.from_mapping(
    SECRET_KEY=secrets.token_hex(32),
    DEFAULT_VERTICES=12,
    DEFAULT_EDGE_PROBABILITY=0.4,
    DEFAULT_SEED=42,
    MAX_VERTICES=80,
    MAX_RUNS=256,
    MAX_WEIGHT=10,
    DEFAULT_SPEED="medium",
    LOG_LEVEL="INFO",
)
app.config.from_prefixed_env("VISUALIZER")


# ---------------------------------------------------------------------------
# Run store
# ---------------------------------------------------------------------------
@dataclass
class Run:
    graph:       Graph
    stepper:     Stepper
    destination: Optional[Hashable]   = None
    speed:       str                  = "medium"
    metrics:     Optional[RunMetrics] = None

    @property
    def source(self) -> Hashable:
        return self.stepper.solver.source


# least recently used first
_RUNS: "OrderedDict[str, Run]" = OrderedDict()


def new_run(graph: Graph, source: Optional[Hashable] = None, destination: Optional[Hashable] = None) -> Run:
    """Build a solver + stepper for `graph`.  Defaults: first / last vertex."""
    ids = graph.vertex_ids()
    if not ids:
        raise InvalidGraphError("graph has no vertices", reason="empty")
    source = ids[0] if source is None else source
    destination = ids[-1] if destination is None else destination

    stepper = Stepper()
    stepper.start(Solver(graph, source))
    run = Run(graph=graph, stepper=stepper, destination=destination,
              speed=app.config["DEFAULT_SPEED"])
    stepper.set_speed(run.speed)
    return run


def get_run() -> Run:
    """Current user's run, creating the default random graph on first use."""
    run_id = session.get("run_id")
    if run_id in _RUNS:
        _RUNS.move_to_end(run_id)
        return _RUNS[run_id]
    graph = Graph.generate_random(
        num_vertices=app.config["DEFAULT_VERTICES"],
        edge_probability=app.config["DEFAULT_EDGE_PROBABILITY"],
        max_weight=app.config["MAX_WEIGHT"],
        seed=app.config["DEFAULT_SEED"],
    )
    return save_run(new_run(graph))


def save_run(run: Run) -> Run:
    run_id = session.get("run_id") or secrets.token_hex(16)
    session["run_id"] = run_id
    _RUNS[run_id] = run
    _RUNS.move_to_end(run_id)
    while len(_RUNS) > app.config["MAX_RUNS"]:
        evicted, _ = _RUNS.popitem(last=False)
        logger.info("evicted run %s (store full)", evicted)
    return run


def resolve_vertex(graph: Graph, raw: Any) -> Hashable:
    """Map a form / URL value back onto a vertex id (ids may be ints or strings)."""
    if isinstance(raw, (int, str)) and not isinstance(raw, bool) and raw in graph:
        return graph.vertex(raw).id
    # "3" from a form field or URL; only unambiguous when one id prints that way
    matches = [vid for vid in graph.vertices if str(vid) == str(raw)]
    if len(matches) == 1:
        return matches[0]
    raise VertexNotFoundError(f"vertex {raw!r} not found", vertex_id=raw)


def final_path(run: Run) -> Optional[List[Hashable]]:
    """Path to the destination, or None while not final / unreachable."""
    if run.destination is None:
        return None
    try:
        return run.stepper.solver.reconstruct_path(run.destination)
    except (PathNotReadyError, UnreachableError):
        return None


def frame(run: Run) -> Dict[str, Any]:
    """Everything the page needs to redraw itself for the displayed snapshot."""
    stepper = run.stepper
    snap: SolverSnapshot = stepper.current_snapshot
    showing_latest = stepper.at_end

    path = final_path(run) if showing_latest else None
    if stepper.is_finished and run.metrics is None:
        run.metrics = _record(run)

    return {
        "svg":         render_canvas(run.graph, snap, path),
        "table":       distance_table(snap),
        "pseudocode":  pseudocode_viewer(PSEUDOCODE, snap.pseudocode_line),
        "explanation": explanation_panel(snap.explanation),
        "analytics":   analytics_panel(run.metrics if stepper.is_finished else None),
        "snapshot":    snap.to_dict(),
        "tick":        snap.tick,
        "state":       snap.state,
        "terminated":  snap.is_terminated,
        "is_playing":  stepper.is_playing,
        "speed":       run.speed,
        "speed_ms":    int(stepper.speed * 1000),
        "source":      run.source,
        "destination": run.destination,
        "vertex_ids":  run.graph.vertex_ids(),
        "path":        path,
    }


def _record(run: Run) -> RunMetrics:
    rec = Recorder()
    rec.start(run.graph, run.source, run.destination)
    metrics = rec.run_to_completion()
    logger.info(
        "run finished: %d vertices, %d ticks, %d relaxations, path_found=%s",
        len(run.graph), metrics.total_ticks, metrics.relaxations, metrics.path_found,
    )
    return metrics


def request_data() -> Dict[str, Any]:
    return request.get_json(silent=True) or {}


# ---------------------------------------------------------------------------
# Error mapping
# ---------------------------------------------------------------------------
_STATUS = {
    VertexNotFoundError: 404,
    UnreachableError:    409,
    PathNotReadyError:   409,
    InvalidGraphError:   400,
}


@app.errorhandler(GraphError)
def handle_graph_error(err: GraphError):
    status = _STATUS.get(type(err), 400)
    logger.warning("%s: %s", type(err).__name__, err)
    return jsonify({"error": str(err), "kind": type(err).__name__}), status


# ---------------------------------------------------------------------------
# Main UI Route
# ---------------------------------------------------------------------------
@app.route("/")
def index():
    run = get_run()
    data = frame(run)

    playback_html = playback_controls(
        is_playing=run.stepper.is_playing,
        tick=data["tick"],
        state=data["state"],
        speed=run.speed,
        is_finished=run.stepper.is_finished,
    )
    graph_gen_html = graph_generator(
        vertices=app.config["DEFAULT_VERTICES"],
        prob=app.config["DEFAULT_EDGE_PROBABILITY"],
        max_weight=app.config["MAX_WEIGHT"],
    )
    picker_html = source_destination_picker(
        vertex_ids=run.graph.vertex_ids(),
        source=run.source,
        destination=run.destination,
    )

    return render_template_string(INDEX_TEMPLATE,
        svg=data["svg"],
        playback=playback_html,
        graph_gen=graph_gen_html,
        picker=picker_html,
        table=data["table"],
        analytics=data["analytics"],
        pseudocode=data["pseudocode"],
        explanation=data["explanation"],
    )


@app.route("/api/state")
def api_state():
    return jsonify(frame(get_run()))


# ---------------------------------------------------------------------------
# API: Graph
# ---------------------------------------------------------------------------
@app.route("/api/graph/generate", methods=["POST"])
def api_graph_generate():
    data = request_data()
    try:
        num_vertices = int(data.get("vertices", app.config["DEFAULT_VERTICES"]))
        prob = float(data.get("prob", app.config["DEFAULT_EDGE_PROBABILITY"]))
        max_weight = int(data.get("max_weight", app.config["MAX_WEIGHT"]))
        seed = data.get("seed")
        seed = None if seed is None else int(seed)
    except (TypeError, ValueError):
        return jsonify({"error": "Invalid generator parameters"}), 400

    if not 1 <= num_vertices <= app.config["MAX_VERTICES"]:
        return jsonify({"error": f"vertices must be between 1 and {app.config['MAX_VERTICES']}"}), 400
    if not 0.0 <= prob <= 1.0:
        return jsonify({"error": "prob must be between 0 and 1"}), 400
    if max_weight < 1:
        return jsonify({"error": "max_weight must be >= 1"}), 400

    g = Graph.generate_random(
        num_vertices=num_vertices,
        edge_probability=prob,
        max_weight=max_weight,
        directed=bool(data.get("directed", False)),
        seed=seed,
    )
    run = save_run(new_run(g))
    return jsonify(frame(run))


@app.route("/api/graph/sample", methods=["POST"])
def api_graph_sample():
    run = save_run(new_run(Graph.sample(), source=1, destination=4))
    return jsonify(frame(run))


@app.route("/api/graph/import", methods=["POST"])
def api_graph_import():
    data = request_data()
    text = data.get("text", "")
    if not text.strip():
        return jsonify({"error": "Nothing to import"}), 400

    g = Graph.from_adjacency_list(text, directed=bool(data.get("directed", False)))
    run = save_run(new_run(g))
    logger.info("imported graph: %r", g)
    return jsonify(frame(run))


# ---------------------------------------------------------------------------
# API: Config Changes
# ---------------------------------------------------------------------------
@app.route("/api/config/source_destination", methods=["POST"])
def api_config_source_destination():
    run = get_run()
    data = request_data()

    if data.get("source") is not None:
        source = resolve_vertex(run.graph, data["source"])
        if source != run.source:
            # a new source means a new run on the same graph
            run.stepper.solver.replace_graph(run.graph, source)
            run.stepper.start(run.stepper.solver)
            run.metrics = None
    if data.get("destination") is not None:
        run.destination = resolve_vertex(run.graph, data["destination"])
        run.metrics = None

    return jsonify(frame(run))


@app.route("/api/config/speed", methods=["POST"])
def api_config_speed():
    run = get_run()
    speed = request_data().get("speed", "medium")
    if speed not in SPEED_PRESETS:
        return jsonify({"error": f"Unknown speed {speed!r}"}), 400
    run.speed = speed
    run.stepper.set_speed(speed)
    return jsonify({"speed": speed, "speed_ms": int(run.stepper.speed * 1000)})


# ---------------------------------------------------------------------------
# API: Step Navigation
# ---------------------------------------------------------------------------
@app.route("/api/step/next", methods=["POST"])
def api_step_next():
    run = get_run()
    if not request_data().get("auto"):
        run.stepper.pause()
    run.stepper.next_step()
    return jsonify(frame(run))


@app.route("/api/step/prev", methods=["POST"])
def api_step_prev():
    run = get_run()
    run.stepper.pause()
    if not run.stepper.prev_step():
        return jsonify({"error": "Already at first step"}), 400
    return jsonify(frame(run))


@app.route("/api/step/end", methods=["POST"])
def api_step_end():
    run = get_run()
    run.stepper.jump_to_end()
    return jsonify(frame(run))


@app.route("/api/step/reset", methods=["POST"])
def api_step_reset():
    run = get_run()
    run.stepper.reset()
    run.metrics = None
    return jsonify(frame(run))


@app.route("/api/step/play", methods=["POST"])
def api_step_play():
    run = get_run()
    playing = request_data().get("playing")
    if playing is None:
        run.stepper.toggle_play()
    elif playing:
        run.stepper.play()
    else:
        run.stepper.pause()
    return jsonify({"is_playing": run.stepper.is_playing, "speed_ms": int(run.stepper.speed * 1000)})


# ---------------------------------------------------------------------------
# API: Path
# ---------------------------------------------------------------------------
@app.route("/api/path/<destination>")
def api_path(destination):
    run = get_run()
    dest = resolve_vertex(run.graph, destination)
    path = run.stepper.solver.reconstruct_path(dest)
    return jsonify({
        "source":      run.source,
        "destination": dest,
        "path":        path,
        "cost":        path_cost(run.graph, run.source, path),
    })


# ---------------------------------------------------------------------------
# HTML Template
# ---------------------------------------------------------------------------
INDEX_TEMPLATE = """
<!DOCTYPE html>
<html lang="en">
<head>
  <meta charset="UTF-8">
  <meta name="viewport" content="width=device-width, initial-scale=1.0">
  <title>Step-wise Dijkstra</title>
  <link href="https://fonts.googleapis.com/css2?family=JetBrains+Mono:wght@400;700&family=DM+Sans:wght@400;700&display=swap" rel="stylesheet">
  <style>
    * { margin: 0; padding: 0; box-sizing: border-box; }

    :root {
      --bg-dark: #0d1117;
      --bg-darker: #010409;
      --bg-panel: #161b22;
      --border: #30363d;
      --text-primary: #e6edf3;
      --text-secondary: #7d8590;
      --accent: #0ea5e9;
      --accent-red: #dc2626;
      --accent-green: #10b981;
    }

    body {
      font-family: 'DM Sans', sans-serif;
      background: var(--bg-darker);
      color: var(--text-primary);
      display: flex;
      height: 100vh;
      overflow: hidden;
    }

    #sidebar {
      width: 320px;
      background: var(--bg-dark);
      border-right: 1px solid var(--border);
      overflow-y: auto;
      padding: 20px 14px;
    }

    #main { flex: 1; display: flex; flex-direction: column; }

    #canvas-container {
      flex: 1;
      display: flex;
      align-items: center;
      justify-content: center;
      border-bottom: 1px solid var(--border);
    }

    #canvas-svg { max-width: 100%; max-height: 100%; }

    #bottom-panel {
      display: grid;
      grid-template-columns: 1fr 1fr 1fr;
      gap: 16px;
      padding: 16px;
      background: var(--bg-dark);
      height: 300px;
    }

    .box {
      background: var(--bg-panel);
      border: 1px solid var(--border);
      border-radius: 10px;
      padding: 14px;
      overflow-y: auto;
    }

    .box h3, .panel h3 {
      font-size: 12px;
      text-transform: uppercase;
      letter-spacing: 0.5px;
      color: var(--accent);
      margin-bottom: 10px;
    }

    .code-block { font-family: 'JetBrains Mono', monospace; font-size: 12px; line-height: 1.5; }
    .code-line { padding: 3px 8px; border-radius: 4px; white-space: pre; }
    .code-line.highlight { background: rgba(14, 165, 233, 0.18); border-left: 3px solid var(--accent); }

    .explanation-text { color: var(--text-secondary); line-height: 1.7; font-size: 14px; }
    .explanation-text strong { color: var(--text-primary); }

    .panel {
      background: var(--bg-panel);
      border: 1px solid var(--border);
      border-radius: 10px;
      padding: 14px;
      margin-bottom: 14px;
    }

    .button-row { display: flex; gap: 6px; margin-bottom: 10px; }

    button {
      background: var(--accent);
      color: #fff;
      border: none;
      padding: 8px 12px;
      border-radius: 6px;
      cursor: pointer;
      font-weight: 700;
    }
    .btn-secondary { background: #1c2128; border: 1px solid var(--border); }

    select, input[type="number"], input[type="range"], textarea {
      width: 100%;
      padding: 6px 8px;
      margin: 4px 0;
      background: var(--bg-darker);
      border: 1px solid var(--border);
      border-radius: 6px;
      color: var(--text-primary);
    }
    textarea { font-family: 'JetBrains Mono', monospace; min-height: 110px; }

    label { display: block; margin: 8px 0 2px; font-size: 12px; color: var(--text-secondary); }

    .tabs { display: flex; gap: 4px; margin-bottom: 10px; }
    .tab-btn { flex: 1; background: transparent; }
    .tab-btn.active { background: var(--accent); }

    .step-info { font-family: 'JetBrains Mono', monospace; font-size: 12px; color: var(--text-secondary); margin: 8px 0; }
    .finished-badge { background: var(--accent-green); color: #fff; padding: 2px 8px; border-radius: 4px; font-size: 11px; }

    table { width: 100%; font-size: 12px; border-collapse: collapse; }
    td, th { padding: 4px; text-align: left; }
    .distance-table td { font-family: 'JetBrains Mono', monospace; }
    .distance-table tr.current td { color: var(--accent-red); font-weight: 700; }
    .distance-table tr.final td { color: var(--accent-green); }

    .hint, .placeholder { font-size: 11px; color: var(--text-secondary); font-style: italic; margin-top: 6px; }
    #error { color: var(--accent-red); font-size: 12px; min-height: 16px; }
  </style>
</head>
<body>
  <div id="sidebar">
    <div id="playback">{{ playback|safe }}</div>
    <div id="error"></div>
    <div id="picker">{{ picker|safe }}</div>
    <div id="graph-gen">{{ graph_gen|safe }}</div>
    <div id="analytics">{{ analytics|safe }}</div>
  </div>

  <div id="main">
    <div id="canvas-container">
      <div id="canvas-svg">{{ svg|safe }}</div>
    </div>

    <div id="bottom-panel">
      <div class="box">
        <h3>Pseudocode</h3>
        <div id="pseudocode">{{ pseudocode|safe }}</div>
      </div>
      <div class="box">
        <h3>Step Explanation</h3>
        <div id="explanation">{{ explanation|safe }}</div>
      </div>
      <div class="box">
        <h3>Distances</h3>
        <div id="table">{{ table|safe }}</div>
      </div>
    </div>
  </div>

  <script>
    let timer = null;

    document.querySelectorAll('.tab-btn').forEach(btn => {
      btn.addEventListener('click', () => {
        const tab = btn.dataset.tab;
        document.querySelectorAll('.tab-btn').forEach(b => b.classList.remove('active'));
        btn.classList.add('active');
        document.querySelectorAll('.tab-content').forEach(c => {
          c.style.display = c.dataset.tab === tab ? 'block' : 'none';
        });
      });
    });

    async function post(url, data) {
      const res = await fetch(url, {
        method: 'POST',
        headers: {'Content-Type': 'application/json'},
        body: JSON.stringify(data || {}),
      });
      return await res.json();
    }

    function fillSelect(id, ids, selected) {
      const sel = document.getElementById(id);
      sel.innerHTML = ids.map(v =>
        `<option value="${v}" ${String(v) === String(selected) ? 'selected' : ''}>${v}</option>`).join('');
    }

    function draw(data) {
      document.getElementById('error').textContent = data.error || '';
      if (!data.svg) return;
      document.getElementById('canvas-svg').innerHTML = data.svg;
      document.getElementById('table').innerHTML = data.table;
      document.getElementById('pseudocode').innerHTML = data.pseudocode;
      document.getElementById('explanation').innerHTML = data.explanation;
      document.getElementById('analytics').innerHTML = data.analytics;
      document.getElementById('current-tick').textContent = data.tick;
      document.getElementById('engine-state').textContent = data.state;
      fillSelect('source-selector', data.vertex_ids, data.source);
      fillSelect('destination-selector', data.vertex_ids, data.destination);
      if (data.terminated) stopTimer();
    }

    function stopTimer() {
      if (timer) clearInterval(timer);
      timer = null;
      document.getElementById('btn-play').textContent = '▶';
    }

    async function step(url, body) { stopTimer(); draw(await post(url, body)); }

    document.getElementById('btn-next').addEventListener('click', () => step('/api/step/next'));
    document.getElementById('btn-prev').addEventListener('click', () => step('/api/step/prev'));
    document.getElementById('btn-end').addEventListener('click', () => step('/api/step/end'));
    document.getElementById('btn-reset').addEventListener('click', () => step('/api/step/reset'));

    document.getElementById('btn-play').addEventListener('click', async () => {
      const data = await post('/api/step/play', {playing: timer === null});
      if (!data.is_playing) { stopTimer(); return; }
      document.getElementById('btn-play').textContent = '⏸';
      timer = setInterval(async () => draw(await post('/api/step/next', {auto: true})), data.speed_ms);
    });

    document.getElementById('speed-selector').addEventListener('change', async (e) => {
      await post('/api/config/speed', {speed: e.target.value});
      stopTimer();
    });

    document.getElementById('btn-gen-random').addEventListener('click', () => step('/api/graph/generate', {
      vertices: +document.getElementById('rand-nodes').value,
      prob: +document.getElementById('rand-prob').value,
      max_weight: +document.getElementById('rand-max-weight').value,
      directed: document.getElementById('rand-directed').checked,
    }));
    document.getElementById('btn-gen-sample').addEventListener('click', () => step('/api/graph/sample'));
    document.getElementById('btn-import').addEventListener('click', () => step('/api/graph/import', {
      text: document.getElementById('import-text').value,
      directed: document.getElementById('import-directed').checked,
    }));

    document.getElementById('rand-prob').addEventListener('input', (e) => {
      document.getElementById('rand-prob-val').textContent = e.target.value;
    });

    document.getElementById('source-selector').addEventListener('change', (e) =>
      step('/api/config/source_destination', {source: e.target.value}));
    document.getElementById('destination-selector').addEventListener('change', (e) =>
      step('/api/config/source_destination', {destination: e.target.value}));
  </script>
</body>
</html>
"""


# ---------------------------------------------------------------------------
# Run
# ---------------------------------------------------------------------------
if __name__ == "__main__":
    logging.basicConfig(
        level=app.config["LOG_LEVEL"],
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    logger.info("Step-wise Dijkstra visualizer on http://localhost:5000")
    app.run(debug=False, port=5000)
