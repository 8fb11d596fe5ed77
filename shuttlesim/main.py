import argparse
import math
from collections import deque
from typing import Callable, Optional, Sequence

from pydantic import ValidationError

from shuttlesim.config import DEFAULT_CONFIG, GridConfig, PhysicsConfig, SimulationConfig
from shuttlesim.court.renderer import TopViewRenderer
from shuttlesim.court.sink import FrameSink
from shuttlesim.physics.engine import ShuttleFlightEngine
from shuttlesim.physics.models import ShotParameters


# (field, prompt, parser) in the order the user is asked
PROMPTS = [
    ("player_height", "Enter player height in meters (e.g., 1.75): ", float),
    ("posture", "Posture: 0=standing,1=bent,2=in_air : ", int),
    ("swing_speed", "Swing speed (m/s) (e.g., 24): ", float),
    ("tension_multiplier", "Tension multiplier (1.0 default, e.g., 1.02): ", float),
    ("contact_offset", "Contact offset from sweetspot (m) (0.0 best, e.g., 0.01): ", float),
    ("shot_type", "Shot type: 0=smash,1=clear,2=drop,3=drive : ", int),
    ("yaw", "Yaw (lateral aim in degrees, negative=left, positive=right, e.g., 0): ", float),
]


class TokenReader:
    """Hands out whitespace-separated answers, reading a new line only when empty.

    Several answers may be typed on one line; blank lines are skipped.
    """

    def __init__(self, read: Callable[[str], str] = input):
        self.read = read
        self.pending = deque()

    def next_token(self, prompt: str) -> str:
        while not self.pending:
            self.pending.extend(self.read(prompt).split())
        return self.pending.popleft()


def read_shot(read: Callable[[str], str] = input) -> ShotParameters:
    """Prompt for every shot parameter; raises ValueError/EOFError on bad input"""
    tokens = TokenReader(read)
    values = {}
    for field, prompt, parse in PROMPTS:
        value = parse(tokens.next_token(prompt))
        if not math.isfinite(value):
            raise ValueError(f"{field} must be a finite number")
        values[field] = value
    return ShotParameters(**values)


def build_config(args: argparse.Namespace) -> SimulationConfig:
    """Default configuration with command line overrides, validated by pydantic"""
    physics = {}
    grid = {}
    if args.dt is not None:
        physics["dt"] = args.dt
    if args.max_points is not None:
        physics["max_points"] = args.max_points
    if args.delay is not None:
        grid["frame_delay"] = args.delay
    return SimulationConfig(physics=PhysicsConfig(**physics), grid=GridConfig(**grid))


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Top-view badminton shuttle simulator",
        epilog="Prompted answers may be typed one per line or several on one line.",
    )
    parser.add_argument("--delay", type=float, default=None,
                        help="Seconds between animation frames (default 0.035)")
    parser.add_argument("--dt", type=float, default=None,
                        help="Integration timestep in seconds (default 0.01)")
    parser.add_argument("--max-points", type=int, default=None,
                        help="Upper bound on recorded trajectory points")
    return parser


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    return build_parser().parse_args(argv)


def run(
    config: SimulationConfig = DEFAULT_CONFIG,
    read: Callable[[str], str] = input,
    sink: Optional[FrameSink] = None,
) -> int:
    print("Top-view Badminton Simulator (ASCII)")
    try:
        shot = read_shot(read)
    except (ValueError, EOFError):
        return 0

    engine = ShuttleFlightEngine(config)
    trajectory, landing = engine.simulate_flight(shot)
    if not trajectory:
        print("Simulation produced no trajectory points.")
        return 0

    TopViewRenderer(config, sink).render(trajectory, landing)
    return 0


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        config = build_config(args)
    except ValidationError as e:
        problems = "; ".join(
            f"{'.'.join(str(part) for part in err['loc'])}: {err['msg']}" for err in e.errors()
        )
        parser.error(f"invalid option value ({problems})")
    return run(config)


if __name__ == "__main__":
    raise SystemExit(main())
