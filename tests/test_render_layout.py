from __future__ import annotations

import io

from rich.console import Console

from evolution_lab.config import SimulationConfig
from evolution_lab.render import CandidateView, GridLayout, TerminalRenderer, frame_text, summary_text
from evolution_lab.render.layout import cell_text


def test_grid_is_filled_column_major() -> None:
    layout = GridLayout(population_size=60, columns=5, column_width=11)
    grid = layout.grid()
    assert layout.rows == 12
    assert grid[0] == [0, 12, 24, 36, 48]
    assert [row[0] for row in grid] == list(range(12))
    assert sorted(idx for row in grid for idx in row) == list(range(60))


def test_grid_leaves_blank_cells_when_columns_do_not_divide() -> None:
    layout = GridLayout(population_size=7, columns=3, column_width=10)
    assert layout.grid() == [[0, 3, 6], [1, 4, None], [2, 5, None]]


def test_cells_are_padded_to_column_width() -> None:
    hidden = cell_text(CandidateView("hex", 2, focus=False, visible=False), "hey", 11)
    assert hidden.plain == " " * 11

    focused = cell_text(CandidateView("hex", -1, focus=True, visible=True), "hey", 11)
    assert focused.plain.startswith("➤ hex")
    assert focused.cell_len == 11
    assert not focused.spans


def test_revealed_cells_mark_matches_and_mismatches() -> None:
    text = cell_text(CandidateView("hex", 2, visible=True, reveal_fitness=True), "hey", 11)
    assert text.plain.startswith("  hex")
    styles = [(span.start, str(span.style)) for span in text.spans]
    assert styles == [(2, "green"), (3, "green"), (4, "red")]


def test_frame_text_layout() -> None:
    layout = GridLayout(population_size=4, columns=2, column_width=10)
    snapshot = [CandidateView(genome, -1, visible=True) for genome in ("aa", "bb", "cc", "dd")]
    text = frame_text(snapshot, "Computing fitness", layout, "ab")
    lines = text.plain.split("\n")
    assert lines[2].strip() == "Computing fitness"
    assert len(lines[2]) == layout.total_width
    assert lines[4] == "   " + "  aa" + " " * 6 + "  cc" + " " * 6
    assert lines[5] == "   " + "  bb" + " " * 6 + "  dd" + " " * 6


def test_summary_text_mentions_result_and_iterations() -> None:
    layout = GridLayout(population_size=60, columns=5, column_width=11)
    plain = summary_text("hey", 7, layout).plain
    assert "Result: hey" in plain
    assert "Iterations: 7" in plain


def test_terminal_renderer_writes_frames_and_summary() -> None:
    buffer = io.StringIO()
    console = Console(file=buffer, force_terminal=False, width=120, highlight=False)
    config = SimulationConfig(target="hey", population_size=4, survivors_kept=2, display_columns=2)
    renderer = TerminalRenderer(config, console)
    snapshot = [CandidateView(genome, 1, visible=True) for genome in ("hex", "bey", "aaa", "hhh")]

    renderer.render_frame(snapshot, "Sorting by fitness")
    renderer.render_summary("hey", 3)
    renderer.delay(0)

    output = buffer.getvalue()
    assert "Sorting by fitness" in output
    for genome in ("hex", "bey", "aaa", "hhh"):
        assert genome in output
    assert "Result: hey" in output
