from pydantic import BaseModel, ConfigDict, Field
from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import NamedTuple


class Posture(IntEnum):
    STANDING = 0
    BENT = 1
    IN_AIR = 2


class ShotType(IntEnum):
    SMASH = 0
    CLEAR = 1
    DROP = 2
    DRIVE = 3


class ShotParameters(BaseModel):
    # Enum fields stay plain ints: unknown codes fall back to defaults in the engine
    model_config = ConfigDict(frozen=True)

    player_height: float = Field(..., description="Player height in meters")
    posture: int = Field(Posture.STANDING, description="0=standing, 1=bent, 2=in_air")
    swing_speed: float = Field(..., description="Racket head speed in m/s")
    tension_multiplier: float = Field(1.0, description="String tension multiplier")
    contact_offset: float = Field(0.0, description="Distance from sweet spot in meters")
    shot_type: int = Field(ShotType.DRIVE, description="0=smash, 1=clear, 2=drop, 3=drive")
    yaw: float = Field(0.0, description="Lateral aim in degrees, negative=left")


class ShotProfile(NamedTuple):
    launch_angle: float  # degrees
    speed_multiplier: float
    lateral_spread: float  # degrees, informational only


@dataclass
class ShuttleState:
    y: float = 0; x: float = 0; z: float = 0
    vy: float = 0; vx: float = 0; vz: float = 0


class TrajectoryPoint(BaseModel):
    model_config = ConfigDict(frozen=True)

    time: float
    y: float  # forward distance (m)
    x: float  # lateral offset, negative=left (m)
    z: float  # height (m)


class NetState(str, Enum):
    UNCHECKED = "unchecked"
    CLEARED = "cleared"
    NOT_CLEARED = "not_cleared"


class LandingOutcome(BaseModel):
    model_config = ConfigDict(frozen=True)

    y: float
    x: float
    z: float  # 0.0 only for a real ground landing
    net_state: NetState = NetState.UNCHECKED

    @property
    def cleared_net(self) -> bool:
        return self.net_state is NetState.CLEARED

    @property
    def grounded(self) -> bool:
        return self.z == 0.0
