"""Tests for the top-view court renderer."""

import numpy as np
import pytest

from shuttlesim.config import DEFAULT_CONFIG, GridConfig, SimulationConfig
from shuttlesim.court.models import LandingZone
from shuttlesim.court.renderer import TopViewRenderer
from shuttlesim.court.sink import RecordingSink
from shuttlesim.physics.engine import ShuttleFlightEngine
from shuttlesim.physics.models import LandingOutcome, NetState, ShotParameters, TrajectoryPoint


COURT = DEFAULT_CONFIG.court


def _blank_trail():
    return np.full((DEFAULT_CONFIG.grid.rows, DEFAULT_CONFIG.grid.cols), " ", dtype="<U1")


# ---------- Coordinate mapping ----------

def test_forward_mapping(renderer):
    assert renderer.map_forward_to_column(0.0) == 0
    assert renderer.map_forward_to_column(COURT.length) == 71
    assert renderer.map_forward_to_column(COURT.net_position) == 36


def test_lateral_mapping(renderer):
    assert renderer.map_lateral_to_row(-COURT.half_width) == 0
    assert renderer.map_lateral_to_row(0.0) == 10
    assert renderer.map_lateral_to_row(COURT.half_width) == 20


@pytest.mark.parametrize("outside, edge", [(-3.0, 0.0), (25.0, COURT.length), (1e9, COURT.length)])
def test_forward_mapping_clamps(renderer, outside, edge):
    assert renderer.map_forward_to_column(outside) == renderer.map_forward_to_column(edge)


@pytest.mark.parametrize("outside, edge", [(-9.0, -COURT.half_width), (4.0, COURT.half_width)])
def test_lateral_mapping_clamps(renderer, outside, edge):
    assert renderer.map_lateral_to_row(outside) == renderer.map_lateral_to_row(edge)


# ---------- Static court ----------

def test_court_is_deterministic(renderer):
    assert np.array_equal(renderer.draw_court(), renderer.draw_court())


def test_court_layout(renderer):
    buf = renderer.draw_court()
    assert buf.shape == (25, 74)

    # left corners; the sidelines run over the right-hand ones
    assert buf[1, 0] == buf[23, 0] == "+"
    assert buf[1, 72] == buf[23, 72] == "-"
    assert buf[10, 0] == buf[10, 72] == "|"
    assert buf[1, 30] == buf[23, 30] == "-"

    # net at grid column 36, service markers at 25 and 46
    assert all(ch == "|" for ch in buf[2:23, 37])
    assert all(ch == "+" for ch in buf[2:23, 26])
    assert all(ch == "+" for ch in buf[2:23, 47])


def test_center_line_keeps_markings(renderer):
    buf = renderer.draw_court()
    mid = 2 + 21 // 2
    assert buf[mid, 2] == "-"
    assert buf[mid, 37] == "|"
    assert buf[mid, 26] == buf[mid, 47] == "+"
    assert buf[mid + 1, 2] == " "


def test_court_labels(renderer):
    row = "".join(renderer.draw_court()[24])
    assert row[1:3] == "0m"
    assert row[36:39] == "NET"
    assert row[67:72] == "13.4m"
    assert row[72:] == "  "


def test_labels_are_clipped():
    renderer = TopViewRenderer(SimulationConfig(grid=GridConfig(cols=4, rows=3)), RecordingSink())
    buf = renderer.draw_court()
    assert buf.shape == (7, 6)
    # nothing written into the right border column or beyond
    assert "".join(buf[6, 4:]) == "  "


# ---------- Frame composition ----------

def test_frame_layers(renderer):
    trail = _blank_trail()
    trail[10, 5] = "."
    trail[10, 6] = "."
    point = TrajectoryPoint(time=0.1, y=COURT.length * 7 / 71, x=0.0, z=1.2)
    landing = LandingOutcome(y=18.0, x=0.0, z=0.0)

    buf = renderer.compose_frame(point, trail, landing)

    assert buf[12, 1] == "P"
    assert buf[12, 6] == buf[12, 7] == "."
    assert buf[12, 8] == "O"
    assert buf[23, 8] == "_"
    assert "X" not in buf


def test_shuttle_wins_over_trail(renderer):
    trail = _blank_trail()
    trail[10, 0] = "."
    point = TrajectoryPoint(time=0.0, y=0.0, x=0.0, z=1.5)
    buf = renderer.compose_frame(point, trail, LandingOutcome(y=5.0, x=0.0, z=0.0))
    assert buf[12, 1] == "O"


def test_landing_marker_is_painted_last(renderer):
    point = TrajectoryPoint(time=0.6, y=10.0, x=1.0, z=0.05)
    landing = LandingOutcome(y=10.0, x=1.0, z=0.0)
    buf = renderer.compose_frame(point, _blank_trail(), landing, show_landing=True)

    cell = renderer.map_to_cell(10.0, 1.0)
    assert buf[2 + cell.row, 1 + cell.col] == "X"
    assert "O" not in buf


def test_landing_frame_detection(renderer):
    points = [
        TrajectoryPoint(time=0.0, y=0.0, x=0.0, z=1.0),
        TrajectoryPoint(time=0.01, y=4.99, x=0.01, z=0.1),
        TrajectoryPoint(time=0.02, y=4.5, x=0.0, z=0.5),
    ]
    landing = LandingOutcome(y=5.0, x=0.0, z=0.0)
    assert not renderer.is_landing_frame(0, points, landing)
    assert renderer.is_landing_frame(1, points, landing)
    assert renderer.is_landing_frame(2, points, landing)


# ---------- Animation loop ----------

def test_render_drives_one_frame_per_point(renderer, sink, engine, drive_shot):
    trajectory, landing = engine.simulate_flight(drive_shot)
    renderer.render(trajectory, landing)

    assert len(sink.frames) == len(trajectory)
    assert sink.clears == len(trajectory)
    assert sink.waited == pytest.approx(len(trajectory) * DEFAULT_CONFIG.grid.frame_delay)

    first = sink.frames[0].split("\n")
    assert len(first) == 25
    assert all(len(line) == 73 for line in first)

    assert "X" in sink.frames[-1]
    assert first[12][1] == "O"


def test_trail_persists_between_frames(renderer, sink, engine, drive_shot):
    trajectory, landing = engine.simulate_flight(drive_shot)
    renderer.render(trajectory, landing)

    middle_row = sink.frames[-1].split("\n")[12]
    # the flat drive leaves dots all along the centre row
    assert middle_row.count(".") > 20


def test_progress_lines(renderer, sink):
    points = [
        TrajectoryPoint(time=0.0, y=0.0, x=0.0, z=1.49),
        TrajectoryPoint(time=0.01, y=0.29, x=0.0, z=1.5),
    ]
    renderer.render(points, LandingOutcome(y=0.5, x=0.0, z=0.0))
    assert sink.lines[0] == "\nSimulating shot... t=0.00s  pos y=0.00m xlat=0.00m z=1.49m"
    assert sink.lines[1] == "\nSimulating shot... t=0.01s  pos y=0.29m xlat=0.00m z=1.50m"


def test_render_without_points_only_reports(renderer, sink):
    renderer.render([], LandingOutcome(y=0.0, x=0.0, z=1.4))
    assert sink.frames == []
    assert sink.lines[0].startswith("\nRESULT:")


# ---------- Report ----------

def test_classify_landing(renderer):
    assert renderer.classify_landing(LandingOutcome(y=3.0, x=0.0, z=0.0)) is LandingZone.SHORT
    assert renderer.classify_landing(LandingOutcome(y=18.0, x=0.0, z=0.0)) is LandingZone.LONG
    assert renderer.classify_landing(LandingOutcome(y=10.0, x=0.0, z=0.0)) is LandingZone.INSIDE
    assert renderer.classify_landing(LandingOutcome(y=COURT.net_position, x=0.0, z=0.0)) is LandingZone.INSIDE


def test_wide_landing_still_counts_as_inside(renderer):
    """Known limitation: the sidelines are not checked."""
    landing = LandingOutcome(y=10.0, x=40.0, z=0.0)
    assert renderer.classify_landing(landing) is LandingZone.INSIDE


def test_summary_lines(renderer):
    landing = LandingOutcome(y=18.93, x=0.0, z=0.0, net_state=NetState.NOT_CLEARED)
    assert renderer.summarize(landing) == [
        "\nRESULT: Landing at y=18.93 m  xlat=0.00 m   Net cleared: NO",
        " -> Long (beyond baseline)",
    ]

    landing = LandingOutcome(y=10.0, x=-1.2, z=0.0, net_state=NetState.CLEARED)
    assert renderer.summarize(landing)[0].endswith("Net cleared: YES")
    assert renderer.summarize(landing)[1] == " -> Landed inside court area (approx)"


def test_summary_flags_unresolved_flight(renderer):
    lines = renderer.summarize(LandingOutcome(y=21.5, x=0.0, z=3.2, net_state=NetState.CLEARED))
    assert len(lines) == 3
    assert lines[2].startswith(" -> Inconclusive")
    assert "z=3.20" in lines[2]


def test_alternate_court_geometry():
    config = SimulationConfig(court=DEFAULT_CONFIG.court.model_copy(update={"length": 20.0}))
    renderer = TopViewRenderer(config, RecordingSink())
    assert renderer.map_forward_to_column(10.0) == 36
    row = "".join(renderer.draw_court()[24])
    assert "20.0m" in row
    _, landing = ShuttleFlightEngine(config).simulate_flight(
        ShotParameters(player_height=1.75, swing_speed=24.0)
    )
    assert renderer.classify_landing(landing) is LandingZone.INSIDE
