import numpy as np
from typing import List, Optional, Sequence

from shuttlesim.config import DEFAULT_CONFIG, SimulationConfig
from shuttlesim.physics.models import LandingOutcome, TrajectoryPoint
from .models import GRID_COL_OFFSET, GRID_ROW_OFFSET, Cell, LandingZone
from .sink import FrameSink, TerminalSink


LANDING_TOLERANCE = 0.02  # m, both axes


def _round_half_up(value: float) -> int:
    return int(np.floor(value + 0.5))


class TopViewRenderer:
    """ASCII top view of the court with the shuttle flying over it.

    Columns follow the forward axis (hitter's baseline on the left), rows follow
    the lateral axis (left sideline on top).
    """

    def __init__(self, config: SimulationConfig = DEFAULT_CONFIG, sink: Optional[FrameSink] = None):
        self.config = config
        self.court = config.court
        self.grid = config.grid
        self.sink = sink if sink is not None else TerminalSink()

    # ------------------------------------------------------------------
    # Coordinate mapping
    # ------------------------------------------------------------------

    def map_forward_to_column(self, y: float) -> int:
        y = np.clip(y, 0.0, self.court.length)
        return _round_half_up((y / self.court.length) * (self.grid.cols - 1))

    def map_lateral_to_row(self, x: float) -> int:
        half = self.court.half_width
        x = np.clip(x, -half, half)
        frac = (x + half) / self.court.width
        return _round_half_up(frac * (self.grid.rows - 1))

    def map_to_cell(self, y: float, x: float) -> Cell:
        return Cell(row=self.map_lateral_to_row(x), col=self.map_forward_to_column(y))

    # ------------------------------------------------------------------
    # Static court
    # ------------------------------------------------------------------

    def draw_court(self) -> np.ndarray:
        """Fresh panel with border, court lines and distance labels"""
        rows, cols = self.grid.rows, self.grid.cols
        height, width = self.grid.panel_height, self.grid.panel_width
        r0, c0 = GRID_ROW_OFFSET, GRID_COL_OFFSET

        buf = np.full((height, width), " ", dtype="<U1")

        buf[1, 1:width - 1] = "-"
        buf[height - 2, 1:width - 1] = "-"
        buf[1:height - 1, 0] = "|"
        buf[1:height - 1, width - 2] = "|"
        for r in (1, height - 2):
            buf[r, 0] = buf[r, width - 2] = "+"

        # Sidelines
        buf[r0 + rows, c0:c0 + cols] = "-"
        buf[r0 - 1, c0:c0 + cols] = "-"

        net_col = self.map_forward_to_column(self.court.net_position)
        buf[r0:r0 + rows, c0 + net_col] = "|"

        # Service lines are illustrative, not regulation distance
        offset = self.court.service_line_offset
        for y in (self.court.net_position - offset, self.court.net_position + offset):
            buf[r0:r0 + rows, c0 + self.map_forward_to_column(y)] = "+"

        mid = buf[r0 + rows // 2, c0:c0 + cols]
        mid[mid == " "] = "-"

        label_row = height - 1
        self._paint_label(buf, label_row, c0 + self.map_forward_to_column(0.0), "0m")
        self._paint_label(buf, label_row, c0 + net_col - 1, "NET")
        far = f"{self.court.length:.1f}m"
        far_col = c0 + self.map_forward_to_column(self.court.length) - len(far)
        self._paint_label(buf, label_row, far_col, far)
        return buf

    def _paint_label(self, buf: np.ndarray, row: int, col: int, text: str) -> None:
        limit = buf.shape[1] - 2
        for i, ch in enumerate(text):
            if 0 <= col + i < limit:
                buf[row, col + i] = ch

    # ------------------------------------------------------------------
    # Animation
    # ------------------------------------------------------------------

    def compose_frame(
        self,
        point: TrajectoryPoint,
        trail: np.ndarray,
        landing: LandingOutcome,
        show_landing: bool = False,
    ) -> np.ndarray:
        """Court, player, trail, shuttle, shadow and (optionally) landing mark"""
        r0, c0 = GRID_ROW_OFFSET, GRID_COL_OFFSET
        buf = self.draw_court()

        player = self.map_to_cell(0.0, 0.0)
        buf[r0 + player.row, c0 + player.col] = self.grid.player

        marked = trail != " "
        area = buf[r0:r0 + self.grid.rows, c0:c0 + self.grid.cols]
        area[marked] = trail[marked]

        shuttle = self.map_to_cell(point.y, point.x)
        buf[r0 + shuttle.row, c0 + shuttle.col] = self.grid.shuttle

        # Ground shadow sits on the bottom boundary, under the shuttle's column
        shadow_row = r0 + self.grid.rows
        if shadow_row < self.grid.panel_height - 1:
            buf[shadow_row, c0 + shuttle.col] = self.grid.shadow

        if show_landing:
            spot = self.map_to_cell(landing.y, landing.x)
            buf[r0 + spot.row, c0 + spot.col] = self.grid.landing
        return buf

    def frame_to_text(self, buf: np.ndarray) -> str:
        return "\n".join("".join(row[:-1]) for row in buf)

    def is_landing_frame(self, index: int, points: Sequence[TrajectoryPoint], landing: LandingOutcome) -> bool:
        if index == len(points) - 1:
            return True
        p = points[index]
        return abs(p.y - landing.y) < LANDING_TOLERANCE and abs(p.x - landing.x) < LANDING_TOLERANCE

    def render(self, points: Sequence[TrajectoryPoint], landing: LandingOutcome) -> None:
        """Play the flight frame by frame, then print the landing report"""
        trail = np.full((self.grid.rows, self.grid.cols), " ", dtype="<U1")

        for i, point in enumerate(points):
            cell = self.map_to_cell(point.y, point.x)
            trail[cell.row, cell.col] = self.grid.trail

            buf = self.compose_frame(
                point, trail, landing, show_landing=self.is_landing_frame(i, points, landing)
            )

            self.sink.clear()
            self.sink.present(self.frame_to_text(buf))
            self.sink.write(
                f"\nSimulating shot... t={point.time:.2f}s  "
                f"pos y={point.y:.2f}m xlat={point.x:.2f}m z={point.z:.2f}m"
            )
            self.sink.wait(self.grid.frame_delay)

        for line in self.summarize(landing):
            self.sink.write(line)

    # ------------------------------------------------------------------
    # Report
    # ------------------------------------------------------------------

    def classify_landing(self, landing: LandingOutcome) -> LandingZone:
        # Sidelines are not checked: a wide shot past the net still counts as inside
        if landing.y < self.court.net_position:
            return LandingZone.SHORT
        if landing.y > self.court.length:
            return LandingZone.LONG
        return LandingZone.INSIDE

    def summarize(self, landing: LandingOutcome) -> List[str]:
        lines = [
            f"\nRESULT: Landing at y={landing.y:.2f} m  xlat={landing.x:.2f} m   "
            f"Net cleared: {'YES' if landing.cleared_net else 'NO'}"
        ]
        zone = self.classify_landing(landing)
        if zone is LandingZone.SHORT:
            lines.append(" -> Fell short (before net)")
        elif zone is LandingZone.LONG:
            lines.append(" -> Long (beyond baseline)")
        else:
            lines.append(" -> Landed inside court area (approx)")

        if not landing.grounded:
            lines.append(
                f" -> Inconclusive: flight stopped in the air at z={landing.z:.2f} m "
                "(out of bounds or timed out)"
            )
        return lines
