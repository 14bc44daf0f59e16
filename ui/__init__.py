"""
ui/
---
Presentation layer.

    from ui import render_canvas
    from ui import playback_controls, distance_table, …
"""

from ui.canvas import render_canvas, project, CanvasConfig

from ui.controls import (
    playback_controls,
    graph_generator,
    source_destination_picker,
    distance_table,
    analytics_panel,
    pseudocode_viewer,
    explanation_panel,
)

__all__ = [
    "render_canvas",
    "project",
    "CanvasConfig",
    "playback_controls",
    "graph_generator",
    "source_destination_picker",
    "distance_table",
    "analytics_panel",
    "pseudocode_viewer",
    "explanation_panel",
]
