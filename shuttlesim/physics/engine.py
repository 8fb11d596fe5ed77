import numpy as np
from typing import List, Optional, Tuple

from shuttlesim.config import DEFAULT_CONFIG, SimulationConfig
from .models import (
    LandingOutcome,
    NetState,
    Posture,
    ShotParameters,
    ShotProfile,
    ShotType,
    ShuttleState,
    TrajectoryPoint,
)


SHOT_PROFILES = {
    ShotType.SMASH: ShotProfile(launch_angle=-10.0, speed_multiplier=1.5, lateral_spread=2.5),
    ShotType.CLEAR: ShotProfile(launch_angle=40.0, speed_multiplier=0.95, lateral_spread=6.0),
    ShotType.DROP: ShotProfile(launch_angle=12.0, speed_multiplier=0.7, lateral_spread=10.0),
    ShotType.DRIVE: ShotProfile(launch_angle=2.0, speed_multiplier=1.2, lateral_spread=6.0),
}


def latch_net_state(state: NetState, y: float, z: float, court) -> NetState:
    """Resolve the net check the first time the shuttle reaches the net plane.

    Once the state has left UNCHECKED it is returned unchanged.
    """
    if state is not NetState.UNCHECKED or y < court.net_position:
        return state
    if z > court.net_height + court.net_margin:
        return NetState.CLEARED
    return NetState.NOT_CLEARED


class ShuttleFlightEngine:
    """Shuttle flight under gravity and linear drag, top-down court frame.

    Axes: y runs from the hitter's baseline towards the far baseline, x is the
    lateral offset from the court centre line and z is height above the floor.
    """

    BASE_CONTACT_RATIO = 0.85
    BENT_DROP = 0.30
    JUMP_GAIN = 0.42

    def __init__(self, config: SimulationConfig = DEFAULT_CONFIG):
        self.config = config
        self.court = config.court
        self.physics = config.physics
        self.dt = config.physics.dt

    def compute_contact_height(self, player_height: float, posture: int) -> float:
        """Racket contact height from player height and posture"""
        base = self.BASE_CONTACT_RATIO * player_height
        if posture == Posture.BENT:
            return base - self.BENT_DROP
        if posture == Posture.IN_AIR:
            return base + self.JUMP_GAIN
        return base

    def shot_profile(self, shot_type: int) -> ShotProfile:
        # Unknown shot codes play as a drive
        return SHOT_PROFILES.get(shot_type, SHOT_PROFILES[ShotType.DRIVE])

    def compute_launch_speed(self, shot: ShotParameters) -> float:
        """Shuttle speed off the strings, floored so every shot leaves the racket"""
        profile = self.shot_profile(shot.shot_type)
        penalty = np.clip(
            shot.contact_offset / self.physics.offset_scale,
            0.0,
            self.physics.max_offset_penalty,
        )
        v0 = (
            shot.swing_speed
            * profile.speed_multiplier
            * shot.tension_multiplier
            * (1.0 - penalty)
        )
        return float(max(v0, self.physics.min_launch_speed))

    def initial_velocity(self, shot: ShotParameters) -> Tuple[float, float, float]:
        """(forward, lateral, vertical) launch velocity in m/s"""
        v0 = self.compute_launch_speed(shot)
        elev = np.radians(self.shot_profile(shot.shot_type).launch_angle)
        yaw = np.radians(shot.yaw)

        vy0 = v0 * np.cos(elev) * np.cos(yaw)
        vx0 = v0 * np.cos(elev) * np.sin(yaw)
        vz0 = v0 * np.sin(elev)
        return float(vy0), float(vx0), float(vz0)

    def simulate_flight(
        self,
        shot: ShotParameters,
        max_points: Optional[int] = None,
    ) -> Tuple[List[TrajectoryPoint], LandingOutcome]:
        """
        Integrate the flight with semi-implicit Euler until the shuttle lands,
        leaves the playing area, runs out of time or fills max_points.

        A landing with z == 0 is a real ground contact; any other height
        means the run was cut short and the landing is the last position.
        """
        if max_points is None:
            max_points = self.physics.max_points

        vy0, vx0, vz0 = self.initial_velocity(shot)
        state = ShuttleState(
            y=0.0, x=0.0,
            z=self.compute_contact_height(shot.player_height, shot.posture),
            vy=vy0, vx=vx0, vz=vz0,
        )

        dt = self.dt
        drag = self.physics.drag
        g = self.physics.gravity
        max_y = self.court.length + self.physics.overshoot
        max_x = self.court.half_width + self.physics.lateral_escape

        trajectory: List[TrajectoryPoint] = []
        net_state = NetState.UNCHECKED
        t = 0.0

        while t < self.physics.timeout and len(trajectory) < max_points:
            trajectory.append(TrajectoryPoint(time=t, y=state.y, x=state.x, z=state.z))
            net_state = latch_net_state(net_state, state.y, state.z, self.court)

            ay = -drag * state.vy
            ax = -drag * state.vx
            az = -g - drag * state.vz

            # Velocities first, then positions from the new velocities
            state.vy += ay * dt
            state.vx += ax * dt
            state.vz += az * dt

            state.y += state.vy * dt
            state.x += state.vx * dt
            state.z += state.vz * dt

            t += dt

            if state.z <= 0.0:
                return trajectory, LandingOutcome(
                    y=state.y, x=state.x, z=0.0, net_state=net_state
                )

            if state.y > max_y or abs(state.x) > max_x:
                break

        return trajectory, LandingOutcome(
            y=state.y, x=state.x, z=state.z, net_state=net_state
        )


def simulate(
    shot: ShotParameters,
    max_points: Optional[int] = None,
    config: SimulationConfig = DEFAULT_CONFIG,
) -> Tuple[List[TrajectoryPoint], LandingOutcome]:
    return ShuttleFlightEngine(config).simulate_flight(shot, max_points)
