"""
canvas.py — SVG Graph Renderer
================================
Pure rendering function: Graph + SolverSnapshot → SVG string.

The renderer consumes:
  • graph      – the Graph object (vertex positions, adjacency)
  • snapshot   – the current SolverSnapshot (state, table, cursor)
  • path       – final reconstructed path to highlight (optional)
  • config     – visual config (canvas size, colors, fonts, …)

And produces an SVG string ready to inject into the DOM.

Design decisions:
  - NO mutation.  This function is stateless — the caller passes in
    everything it needs and gets back a string.
  - Vertex positions are normalised to [0, 1]; `project()` maps them
    onto the drawable area inside the margins.
  - A mirrored pair of equal-weight edges is one undirected link and is
    drawn once.  Anything else is drawn per direction with an arrow.
  - Role-based coloring is a dict lookup: role → hex color.
"""

import math
from html import escape
from typing import Dict, Hashable, List, Optional, Sequence, Tuple

from graph import Graph
from solver import SolverSnapshot, fmt_distance


# ---------------------------------------------------------------------------
# Visual Config — color palette, dimensions, fonts
# ---------------------------------------------------------------------------
class CanvasConfig:
    # canvas
    width:  int = 1000
    height: int = 620
    margin: int = 50
    table_width: int = 230      # right-hand distance table
    bg:     str = "#0d1117"

    # vertex colors (role → fill)
    vertex_colors: Dict[str, str] = {
        "unvisited": "#1f4fa8",   # blue
        "finalized": "#10b981",   # green
        "current":   "#dc2626",   # red — vertex being expanded
        "neighbour": "#22c55e",   # bright green — under the cursor
        "path":      "#a855f7",   # purple — on the final path
        "source":    "#0ea5e9",   # cyan
    }

    # edge colors
    edge_colors: Dict[str, str] = {
        "default": "#4b5563",
        "active":  "#22c55e",    # edge under the cursor
        "path":    "#a855f7",
    }

    # vertex
    vertex_radius:      int = 18
    vertex_stroke:      str = "#30363d"
    vertex_label_color: str = "#ffffff"
    vertex_label_size:  int = 13

    # edge
    edge_width:         int = 2
    edge_width_active:  int = 5
    edge_arrow_size:    int = 9
    edge_weight_color:  str = "#e6edf3"
    edge_weight_size:   int = 11
    edge_weight_bg:     str = "#161b22"

    # overlays
    overlay_bg:         str = "#161b22"
    overlay_text:       str = "#e6edf3"
    overlay_muted:      str = "#7d8590"
    overlay_font_size:  int = 13
    table_rows:         int = 28


CONFIG = CanvasConfig()


# ---------------------------------------------------------------------------
# Coordinate projection
# ---------------------------------------------------------------------------
def project(x: float, y: float, config: CanvasConfig = CONFIG) -> Tuple[float, float]:
    """Normalised [0, 1] position → pixel coordinates inside the drawable area."""
    usable_w = config.width - config.table_width - 2 * config.margin
    usable_h = config.height - 2 * config.margin - 40       # header strip
    return (
        round(config.margin + x * usable_w, 2),
        round(config.margin + 40 + y * usable_h, 2),
    )


# ---------------------------------------------------------------------------
# Main Render Function
# ---------------------------------------------------------------------------
def render_canvas(
    graph: Graph,
    snapshot: Optional[SolverSnapshot] = None,
    path: Optional[Sequence[Hashable]] = None,
    config: CanvasConfig = CONFIG,
) -> str:
    """
    Returns an SVG string.

    Args:
        graph    : The graph to render.
        snapshot : Current solver snapshot (or None for a static graph).
        path     : Destination path (excluding source) to highlight.
        config   : Visual config.
    """
    pos = {vid: project(v.x, v.y, config) for vid, v in graph.vertices.items()}
    path_links = _path_links(snapshot, path)

    svg_parts = [
        f'<svg width="{config.width}" height="{config.height}" '
        f'viewBox="0 0 {config.width} {config.height}" '
        f'xmlns="http://www.w3.org/2000/svg" style="background: {config.bg};">',
        f'<rect width="{config.width}" height="{config.height}" fill="{config.bg}"/>',
    ]

    # -- edges first so vertices sit on top --
    active = None
    if snapshot and snapshot.current is not None and snapshot.neighbour is not None:
        active = (snapshot.current, snapshot.neighbour)

    for src, tgt, weight, directed in _links(graph):
        svg_parts.append(_render_edge(pos, src, tgt, weight, directed, active, path_links, config))

    # -- vertices --
    on_path = set(path or [])
    for vid in graph.vertices:
        svg_parts.append(_render_vertex(vid, pos[vid], _role(vid, snapshot, on_path), snapshot, config))

    # -- overlays --
    if snapshot:
        svg_parts.append(_render_header(snapshot, config))
        svg_parts.append(_render_table(snapshot, config))

    svg_parts.append("</svg>")
    return "\n".join(p for p in svg_parts if p)


# ---------------------------------------------------------------------------
# Roles & links
# ---------------------------------------------------------------------------
def _role(vid: Hashable, snapshot: Optional[SolverSnapshot], on_path: set) -> str:
    if snapshot is None:
        return "unvisited"
    if vid in on_path:
        return "path"
    if vid == snapshot.current:
        return "current"
    if vid == snapshot.neighbour:
        return "neighbour"
    if vid == snapshot.source and vid not in snapshot.finalized:
        return "source"
    if vid in snapshot.finalized:
        return "finalized"
    return "unvisited"


def _links(graph: Graph) -> List[Tuple[Hashable, Hashable, int, bool]]:
    """(source, target, weight, directed) per drawn line."""
    links = []
    drawn = set()
    for src, edge in graph.edges():
        key = (src, edge.target, edge.weight)
        if key in drawn:
            continue
        mirrored = (edge.target, src, edge.weight)
        undirected = src != edge.target and any(
            e.target == src and e.weight == edge.weight for e in graph.neighbours(edge.target)
        )
        drawn.add(key)
        if undirected:
            drawn.add(mirrored)
        links.append((src, edge.target, edge.weight, not undirected))
    return links


def _path_links(snapshot: Optional[SolverSnapshot], path: Optional[Sequence[Hashable]]) -> set:
    if not snapshot or not path:
        return set()
    chain = [snapshot.source] + list(path)
    return {frozenset(pair) for pair in zip(chain, chain[1:])}


# ---------------------------------------------------------------------------
# Vertex Rendering
# ---------------------------------------------------------------------------
def _render_vertex(
    vid: Hashable,
    xy: Tuple[float, float],
    role: str,
    snapshot: Optional[SolverSnapshot],
    config: CanvasConfig,
) -> str:
    cx, cy = xy
    r = config.vertex_radius
    fill = config.vertex_colors.get(role, config.vertex_colors["unvisited"])
    label = escape(str(vid))

    glow = ""
    if role in ("current", "neighbour"):
        glow = (
            f'  <circle cx="{cx}" cy="{cy}" r="{r + 7}" fill="none" '
            f'stroke="{fill}" stroke-width="2" opacity="0.4"/>'
        )

    parts = [
        f'<g class="vertex {role}" data-id="{label}">',
        glow,
        f'  <circle cx="{cx}" cy="{cy}" r="{r}" fill="{fill}" '
        f'stroke="{config.vertex_stroke}" stroke-width="2"/>',
        f'  <text x="{cx}" y="{cy + 4}" text-anchor="middle" font-size="{config.vertex_label_size}" '
        f'font-family="\'DM Sans\', sans-serif" fill="{config.vertex_label_color}" font-weight="600">{label}</text>',
    ]
    if snapshot is not None:
        d = snapshot.distances.get(vid)
        parts.append(
            f'  <text x="{cx}" y="{cy - r - 6}" text-anchor="middle" font-size="11" '
            f'font-family="\'JetBrains Mono\', monospace" fill="{config.overlay_muted}">{fmt_distance(d)}</text>'
        )
    parts.append('</g>')
    return "\n".join(p for p in parts if p)


# ---------------------------------------------------------------------------
# Edge Rendering
# ---------------------------------------------------------------------------
def _render_edge(
    pos: Dict[Hashable, Tuple[float, float]],
    src: Hashable,
    tgt: Hashable,
    weight: int,
    directed: bool,
    active: Optional[Tuple[Hashable, Hashable]],
    path_links: set,
    config: CanvasConfig,
) -> str:
    x1, y1 = pos[src]
    x2, y2 = pos[tgt]
    dx, dy = x2 - x1, y2 - y1
    dist = math.sqrt(dx * dx + dy * dy)
    if dist < 0.001:
        return ""  # self-loop / overlapping vertices

    is_active = active is not None and (
        active == (src, tgt) or (not directed and active == (tgt, src))
    )
    stroke, width = config.edge_colors["default"], config.edge_width
    if frozenset((src, tgt)) in path_links:
        stroke, width = config.edge_colors["path"], config.edge_width_active - 1
    if is_active:
        stroke, width = config.edge_colors["active"], config.edge_width_active

    ux, uy = dx / dist, dy / dist
    r = config.vertex_radius
    x1a, y1a = x1 + ux * r, y1 + uy * r
    x2a, y2a = x2 - ux * r, y2 - uy * r

    parts = [
        f'<g class="edge{" active" if is_active else ""}" data-source="{escape(str(src))}" data-target="{escape(str(tgt))}">',
        f'  <line x1="{x1a:.2f}" y1="{y1a:.2f}" x2="{x2a:.2f}" y2="{y2a:.2f}" '
        f'stroke="{stroke}" stroke-width="{width}"/>',
    ]
    if directed:
        parts.append(_render_arrow(x2a, y2a, ux, uy, stroke, config))

    # weight label at midpoint, pushed to this direction's side
    offset = 10 if directed else 0
    mx, my = (x1 + x2) / 2 - uy * offset, (y1 + y2) / 2 + ux * offset
    parts.append(
        f'  <circle cx="{mx:.2f}" cy="{my:.2f}" r="10" fill="{config.edge_weight_bg}" opacity="0.9"/>'
    )
    parts.append(
        f'  <text x="{mx:.2f}" y="{my + 4:.2f}" text-anchor="middle" font-size="{config.edge_weight_size}" '
        f'font-family="\'DM Sans\', sans-serif" fill="{config.edge_weight_color}">{weight}</text>'
    )
    parts.append('</g>')
    return "\n".join(parts)


def _render_arrow(x: float, y: float, ux: float, uy: float, color: str, config: CanvasConfig) -> str:
    """Draw an arrowhead at (x, y) pointing in direction (ux, uy)."""
    size = config.edge_arrow_size
    px, py = -uy, ux
    p1_x = x - ux * size + px * (size * 0.5)
    p1_y = y - uy * size + py * (size * 0.5)
    p2_x = x - ux * size - px * (size * 0.5)
    p2_y = y - uy * size - py * (size * 0.5)
    return f'  <polygon points="{x:.2f},{y:.2f} {p1_x:.2f},{p1_y:.2f} {p2_x:.2f},{p2_y:.2f}" fill="{color}"/>'


# ---------------------------------------------------------------------------
# Overlays
# ---------------------------------------------------------------------------
def _render_header(snapshot: SolverSnapshot, config: CanvasConfig) -> str:
    unvisited = ", ".join(str(v) for v in snapshot.unvisited[:20])
    if len(snapshot.unvisited) > 20:
        unvisited += f", … +{len(snapshot.unvisited) - 20}"
    return "\n".join([
        '<g class="header">',
        f'  <text x="12" y="22" font-size="{config.overlay_font_size}" font-family="\'JetBrains Mono\', monospace" '
        f'fill="{config.overlay_text}">state: {snapshot.state}   tick: {snapshot.tick}</text>',
        f'  <text x="12" y="40" font-size="{config.overlay_font_size - 1}" font-family="\'JetBrains Mono\', monospace" '
        f'fill="{config.overlay_muted}">unvisited: [{escape(unvisited)}]</text>',
        '</g>',
    ])


def _render_table(snapshot: SolverSnapshot, config: CanvasConfig) -> str:
    x = config.width - config.table_width
    rows = list(snapshot.distances.items())
    parts = [
        f'<g class="distance-table" transform="translate({x},10)">',
        f'  <rect width="{config.table_width - 10}" height="{config.height - 20}" '
        f'fill="{config.overlay_bg}" rx="8" opacity="0.95"/>',
        f'  <text x="12" y="24" font-size="13" font-weight="700" fill="{config.overlay_text}" '
        f'font-family="\'DM Sans\', sans-serif">vertex   dist   prev</text>',
    ]
    for i, (vid, d) in enumerate(rows[:config.table_rows]):
        prev = snapshot.predecessors.get(vid)
        fill = config.overlay_text if vid not in snapshot.unvisited else config.overlay_muted
        parts.append(
            f'  <text x="12" y="{46 + i * 19}" font-size="{config.overlay_font_size}" '
            f'font-family="\'JetBrains Mono\', monospace" fill="{fill}" xml:space="preserve">'
            f'{escape(str(vid)):<8} {fmt_distance(d):<6} {"-" if prev is None else escape(str(prev))}</text>'
        )
    if len(rows) > config.table_rows:
        parts.append(
            f'  <text x="12" y="{46 + config.table_rows * 19}" font-size="11" '
            f'fill="{config.overlay_muted}">… +{len(rows) - config.table_rows} more</text>'
        )
    parts.append('</g>')
    return "\n".join(parts)
