from engine import Recorder
from graph import Graph
from solver import PSEUDOCODE
from ui import (
    analytics_panel,
    distance_table,
    explanation_panel,
    playback_controls,
    pseudocode_viewer,
    render_canvas,
    source_destination_picker,
)
from ui.canvas import CONFIG, project


def test_render_static_graph(sample_graph):
    svg = render_canvas(sample_graph)

    assert svg.startswith("<svg")
    assert svg.endswith("</svg>")
    assert svg.count('class="vertex ') == 5
    # undirected links are drawn once, without arrowheads
    assert svg.count('class="edge') == 7
    assert "<polygon" not in svg


def test_render_directed_edges_get_arrows(sample_graph):
    sample_graph.add_edge(1, 4, 6)
    svg = render_canvas(sample_graph)
    assert svg.count("<polygon") == 1


def test_render_visiting_highlights_current_and_neighbour(sample_solver):
    for _ in range(3):
        sample_solver.advance()
    svg = render_canvas(sample_solver.graph, sample_solver.snapshot())

    assert 'class="vertex current" data-id="1"' in svg
    assert 'class="vertex neighbour" data-id="5"' in svg
    assert 'class="edge active"' in svg
    assert "state: Visiting" in svg
    assert "∞" in svg


def test_render_final_path(sample_solver):
    sample_solver.run_to_completion()
    path = sample_solver.reconstruct_path(4)
    svg = render_canvas(sample_solver.graph, sample_solver.snapshot(), path)

    assert 'class="vertex path" data-id="3"' in svg
    assert 'class="vertex path" data-id="4"' in svg
    assert svg.count(CONFIG.edge_colors["path"]) >= 4


def test_project_stays_inside_canvas():
    x0, y0 = project(0.0, 0.0)
    x1, y1 = project(1.0, 1.0)

    assert x0 == CONFIG.margin
    assert x1 <= CONFIG.width - CONFIG.table_width
    assert y1 <= CONFIG.height - CONFIG.margin


def test_labels_are_escaped():
    g = Graph()
    g.create_vertex("<b>")
    assert "&lt;b&gt;" in render_canvas(g)


def test_distance_table_marks_rows(sample_solver):
    for _ in range(7):
        sample_solver.advance()
    html = distance_table(sample_solver.snapshot())

    assert '<tr class="final"><td>1</td><td>0</td>' in html
    assert '<tr class="current"><td>3</td><td>1</td><td>1</td></tr>' in html
    assert "∞" in html


def test_distance_table_placeholder():
    assert "placeholder" in distance_table(None)


def test_pseudocode_highlight():
    html = pseudocode_viewer(PSEUDOCODE, 8)
    assert html.count("highlight") == 1
    assert 'class="code-line highlight" data-line="8"' in html


def test_playback_controls_state():
    html = playback_controls(tick=29, state="Terminated", is_finished=True)
    assert "TERMINATED" in html
    assert ">29<" in html
    assert 'value="medium" data-seconds="0.4" selected' in html


def test_picker_selects_source_and_destination():
    html = source_destination_picker([1, 2, 3], source=1, destination=3)
    assert '<option value="1" selected>' in html
    assert '<option value="3" selected>' in html


def test_analytics_panel(sample_graph):
    assert "Run to the end" in analytics_panel(None)

    rec = Recorder()
    rec.start(sample_graph, 1, 4)
    html = analytics_panel(rec.run_to_completion())
    assert "1 → 3 → 4" in html
    assert "<strong>29</strong>" in html


def test_explanation_escapes_text():
    assert "&lt;" in explanation_panel("a < b")
    assert "Next" in explanation_panel("")
