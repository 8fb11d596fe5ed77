from pydantic import BaseModel, ConfigDict, Field


class CourtGeometry(BaseModel):
    """Singles court dimensions, shared read-only by the engine and renderer"""
    model_config = ConfigDict(frozen=True)

    length: float = Field(13.40, gt=0, description="Baseline to baseline (m)")
    width: float = Field(5.18, gt=0, description="Singles width (m)")
    net_height: float = Field(1.524, gt=0, description="Net tape height (m)")
    net_margin: float = Field(0.02, ge=0, description="Clearance needed over the tape (m)")
    service_line_offset: float = Field(1.98, ge=0, description="Short service line distance from net (m)")

    @property
    def net_position(self) -> float:
        return self.length / 2.0

    @property
    def half_width(self) -> float:
        return self.width / 2.0


class PhysicsConfig(BaseModel):
    model_config = ConfigDict(frozen=True)

    gravity: float = 9.81
    dt: float = Field(0.01, gt=0, description="Integration timestep (s)")
    drag: float = Field(0.018, ge=0, description="Linear drag coefficient (1/s)")
    timeout: float = Field(8.0, gt=0, description="Safety stop (s of simulated time)")
    max_points: int = Field(20000, ge=1)
    min_launch_speed: float = 2.0
    offset_scale: float = Field(0.03, gt=0, description="Offset (m) that costs 100% speed")
    max_offset_penalty: float = 0.4
    overshoot: float = 8.0   # past the far baseline
    lateral_escape: float = 5.0   # past either sideline


class GridConfig(BaseModel):
    """Terminal layout for the top view"""
    model_config = ConfigDict(frozen=True)

    cols: int = Field(72, ge=2, description="Columns mapped onto the court length")
    rows: int = Field(21, ge=2, description="Rows mapped onto the court width")
    frame_delay: float = Field(0.035, ge=0, description="Pause between frames (s)")

    player: str = "P"
    shuttle: str = "O"
    landing: str = "X"
    trail: str = "."
    shadow: str = "_"

    @property
    def panel_width(self) -> int:
        return self.cols + 2

    @property
    def panel_height(self) -> int:
        return self.rows + 4


class SimulationConfig(BaseModel):
    model_config = ConfigDict(frozen=True)

    court: CourtGeometry = Field(default_factory=CourtGeometry)
    physics: PhysicsConfig = Field(default_factory=PhysicsConfig)
    grid: GridConfig = Field(default_factory=GridConfig)


DEFAULT_CONFIG = SimulationConfig()
