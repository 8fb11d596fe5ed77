from enum import Enum
from typing import NamedTuple


class LandingZone(str, Enum):
    SHORT = "short"    # before the net
    LONG = "long"      # beyond the far baseline
    INSIDE = "inside"  # between net and baseline, sidelines not checked


class Cell(NamedTuple):
    row: int
    col: int


# Grid area offset inside the panel border
GRID_ROW_OFFSET = 2
GRID_COL_OFFSET = 1
