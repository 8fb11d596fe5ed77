"""Display targets for the top-view animation.

The renderer only talks to a ``FrameSink``; swapping the terminal sink for a
recording one keeps the render loop free of screen and timing side effects.
"""

import sys
import time
from typing import List, Optional, Protocol, TextIO

CLEAR_SCREEN = "\033[2J\033[H"


class FrameSink(Protocol):
    def clear(self) -> None: ...

    def present(self, frame: str) -> None: ...

    def write(self, text: str) -> None: ...

    def wait(self, seconds: float) -> None: ...


class TerminalSink:
    """Paints frames on a real terminal"""

    def __init__(self, stream: Optional[TextIO] = None):
        self.stream = stream or sys.stdout

    def clear(self) -> None:
        self.stream.write(CLEAR_SCREEN)

    def present(self, frame: str) -> None:
        print(frame, file=self.stream)

    def write(self, text: str) -> None:
        print(text, file=self.stream)
        self.stream.flush()

    def wait(self, seconds: float) -> None:
        if seconds > 0:
            time.sleep(seconds)


class RecordingSink:
    """Keeps every frame and line in memory, never sleeps"""

    def __init__(self):
        self.frames: List[str] = []
        self.lines: List[str] = []
        self.clears = 0
        self.waited = 0.0

    def clear(self) -> None:
        self.clears += 1

    def present(self, frame: str) -> None:
        self.frames.append(frame)

    def write(self, text: str) -> None:
        self.lines.append(text)

    def wait(self, seconds: float) -> None:
        self.waited += seconds
