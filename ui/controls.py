"""
controls.py — UI Control Panels
=================================
Every UI panel is a pure function that takes state and returns HTML.

Panels:
  • playback_controls          – next/prev/rewind/end/play + speed
  • graph_generator            – random / sample / import tabs
  • source_destination_picker  – dropdowns for source & destination
  • distance_table             – live distance / predecessor table
  • analytics_panel            – ticks, relaxations, path cost, …
  • pseudocode_viewer          – with live line highlighting
  • explanation_panel          – "why this step happened"

Design:
  - All panels are stateless render functions.
  - State is passed in as kwargs.
  - Output is raw HTML strings (no templating engine).
  - The main app stitches them together.
"""

from html import escape
from typing import Hashable, List, Optional, Sequence

from engine import SPEED_PRESETS, RunMetrics
from solver import SolverSnapshot, fmt_distance


# ---------------------------------------------------------------------------
# Playback Controls
# ---------------------------------------------------------------------------
def playback_controls(
    is_playing: bool = False,
    tick: int = 0,
    state: str = "Idle",
    speed: str = "medium",
    is_finished: bool = False,
) -> str:
    play_icon = "⏸" if is_playing else "▶"
    play_label = "Pause" if is_playing else "Play"

    options = []
    for name, seconds in SPEED_PRESETS.items():
        sel = 'selected' if name == speed else ''
        options.append(f'<option value="{name}" data-seconds="{seconds}" {sel}>{name.capitalize()} ({seconds:g}s)</option>')

    return f"""
    <div class="panel playback-controls">
      <h3>⏯ Playback</h3>
      <div class="button-row">
        <button id="btn-reset" title="Reset run">⏮</button>
        <button id="btn-prev" title="Previous step">◀</button>
        <button id="btn-play" title="{play_label}">{play_icon}</button>
        <button id="btn-next" title="Next step">▶</button>
        <button id="btn-end" title="Run to the end">⏭</button>
      </div>
      <div class="step-info">
        Tick <span id="current-tick">{tick}</span> · <span id="engine-state">{escape(state)}</span>
        {' <span class="finished-badge">TERMINATED</span>' if is_finished else ''}
      </div>
      <label>Speed:</label>
      <select id="speed-selector">
        {''.join(options)}
      </select>
    </div>
    """


# ---------------------------------------------------------------------------
# Graph Generator
# ---------------------------------------------------------------------------
def graph_generator(active_tab: str = "random", vertices: int = 12, prob: float = 0.4, max_weight: int = 10) -> str:
    tabs = ["random", "sample", "import"]
    tab_buttons = []
    for t in tabs:
        active = 'active' if t == active_tab else ''
        tab_buttons.append(f'<button class="tab-btn {active}" data-tab="{t}">{t.capitalize()}</button>')

    def shown(tab):
        return 'block' if tab == active_tab else 'none'

    return f"""
    <div class="panel graph-generator">
      <h3>🌐 Graph</h3>
      <div class="tabs">
        {''.join(tab_buttons)}
      </div>

      <div class="tab-content" data-tab="random" style="display: {shown('random')};">
        <label>Vertices: <input type="number" id="rand-nodes" value="{vertices}" min="2" max="80"></label>
        <label>Edge Prob: <input type="range" id="rand-prob" min="0" max="1" step="0.05" value="{prob}">
               <span id="rand-prob-val">{prob}</span></label>
        <label>Max weight: <input type="number" id="rand-max-weight" value="{max_weight}" min="1" max="100"></label>
        <label><input type="checkbox" id="rand-directed"> Directed</label>
        <button id="btn-gen-random" class="btn-secondary">Generate Random</button>
      </div>

      <div class="tab-content" data-tab="sample" style="display: {shown('sample')};">
        <p class="hint">Five vertices, source 1: the classic textbook example.</p>
        <button id="btn-gen-sample" class="btn-secondary">Load Sample</button>
      </div>

      <div class="tab-content" data-tab="import" style="display: {shown('import')};">
        <textarea id="import-text" rows="8" placeholder="1: 2(5) 5(2) 3(1)
2: 3(2) 4(1)
3: 4(2)
4: 5(1)"></textarea>
        <label><input type="checkbox" id="import-directed"> Directed</label>
        <button id="btn-import" class="btn-secondary">Import Graph</button>
      </div>
    </div>
    """


# ---------------------------------------------------------------------------
# Source / Destination Picker
# ---------------------------------------------------------------------------
def source_destination_picker(
    vertex_ids: Sequence[Hashable],
    source: Optional[Hashable] = None,
    destination: Optional[Hashable] = None,
) -> str:
    src_options = []
    dst_options = []
    for vid in vertex_ids:
        label = escape(str(vid))
        src_sel = 'selected' if vid == source else ''
        dst_sel = 'selected' if vid == destination else ''
        src_options.append(f'<option value="{label}" {src_sel}>{label}</option>')
        dst_options.append(f'<option value="{label}" {dst_sel}>{label}</option>')

    return f"""
    <div class="panel source-destination-picker">
      <h3>🎯 Source & Destination</h3>
      <label>Source:
        <select id="source-selector">
          {''.join(src_options)}
        </select>
      </label>
      <label>Destination:
        <select id="destination-selector">
          {''.join(dst_options)}
        </select>
      </label>
      <p class="hint">Changing the source restarts the run.</p>
    </div>
    """


# ---------------------------------------------------------------------------
# Distance Table
# ---------------------------------------------------------------------------
def distance_table(snapshot: Optional[SolverSnapshot] = None) -> str:
    if snapshot is None:
        return '<p class="placeholder">Load a graph to start.</p>'

    rows = []
    for vid, d in snapshot.distances.items():
        prev = snapshot.predecessors.get(vid)
        classes = []
        if vid == snapshot.current:
            classes.append("current")
        if vid not in snapshot.unvisited:
            classes.append("final")
        rows.append(
            f'<tr class="{" ".join(classes)}"><td>{escape(str(vid))}</td>'
            f'<td>{fmt_distance(d)}</td><td>{"—" if prev is None else escape(str(prev))}</td></tr>'
        )
    return f"""
    <table class="distance-table">
      <thead><tr><th>Vertex</th><th>Dist</th><th>Prev</th></tr></thead>
      <tbody>{''.join(rows)}</tbody>
    </table>
    """


# ---------------------------------------------------------------------------
# Analytics Panel
# ---------------------------------------------------------------------------
def analytics_panel(metrics: Optional[RunMetrics] = None) -> str:
    if not metrics:
        return """
        <div class="panel analytics-panel">
          <h3>📊 Analytics</h3>
          <p class="placeholder">Run to the end to see metrics.</p>
        </div>
        """

    if metrics.path_found:
        route = " → ".join(str(v) for v in [metrics.source] + list(metrics.path))
        path_status = f"✅ {escape(route)}"
    else:
        path_status = "❌ Unreachable"

    return f"""
    <div class="panel analytics-panel">
      <h3>📊 Analytics</h3>
      <table>
        <tr><td>Vertices Finalized:</td><td><strong>{metrics.vertices_finalized}</strong></td></tr>
        <tr><td>Edges Examined:</td><td><strong>{metrics.edges_examined}</strong></td></tr>
        <tr><td>Relaxations:</td><td><strong>{metrics.relaxations}</strong></td></tr>
        <tr><td>Skipped (final):</td><td><strong>{metrics.skipped_finalized}</strong></td></tr>
        <tr><td>Total Ticks:</td><td><strong>{metrics.total_ticks}</strong></td></tr>
        <tr><td>Path Cost:</td><td><strong>{metrics.path_cost}</strong></td></tr>
        <tr><td>Path:</td><td><strong>{path_status}</strong></td></tr>
      </table>
    </div>
    """


# ---------------------------------------------------------------------------
# Pseudocode Viewer
# ---------------------------------------------------------------------------
def pseudocode_viewer(pseudocode_lines: List[str], current_line: int = -1) -> str:
    lines_html = []
    for i, line in enumerate(pseudocode_lines):
        highlight = 'highlight' if i == current_line else ''
        lines_html.append(f'<div class="code-line {highlight}" data-line="{i}">{escape(line)}</div>')

    return f"""
    <div class="code-block">
      {''.join(lines_html)}
    </div>
    """


# ---------------------------------------------------------------------------
# Explanation Panel
# ---------------------------------------------------------------------------
def explanation_panel(explanation: str = "") -> str:
    if not explanation:
        explanation = "▶ Press <strong>Next</strong> or <strong>Play</strong> to watch Dijkstra one step at a time."
    else:
        explanation = escape(explanation)
    return f"""<div class="explanation-text">{explanation}</div>"""
