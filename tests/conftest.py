import pytest

from shuttlesim.config import DEFAULT_CONFIG
from shuttlesim.court.renderer import TopViewRenderer
from shuttlesim.court.sink import RecordingSink
from shuttlesim.physics.engine import ShuttleFlightEngine
from shuttlesim.physics.models import Posture, ShotParameters, ShotType


@pytest.fixture
def engine():
    return ShuttleFlightEngine(DEFAULT_CONFIG)


@pytest.fixture
def sink():
    return RecordingSink()


@pytest.fixture
def renderer(sink):
    return TopViewRenderer(DEFAULT_CONFIG, sink)


@pytest.fixture
def drive_shot():
    """1.75 m player, standing, 24 m/s flat drive straight down the middle"""
    return ShotParameters(
        player_height=1.75,
        posture=Posture.STANDING,
        swing_speed=24.0,
        tension_multiplier=1.0,
        contact_offset=0.0,
        shot_type=ShotType.DRIVE,
        yaw=0.0,
    )
