"""Frame scheduling for HoleBreaker.

DeferredQueue holds timed state changes (penetration expiry, message
timeouts) keyed by simulation frame and drained once per step, so no
timers or threads run beside the simulation.

FrameScheduler drives a game one step per display refresh. It is
single-threaded and cooperative: every step finishes before the next one
is requested, and scheduling halts by itself once the game leaves the
states that need stepping.
"""

from dataclasses import dataclass
from typing import Callable, Dict, Optional, Protocol

from .config import FPS
from .game_state import GameState
from .logging import get_logger

log = get_logger('scheduler')

# States in which the scheduler keeps stepping the game
ACTIVE_STATES = (GameState.PLAYING, GameState.LEVEL_TRANSITION)


@dataclass
class _Deferred:
    due_frame: int
    seq: int
    action: Callable[[], None]


class DeferredQueue:
    """Deferred actions keyed by name and due frame.

    Scheduling an existing key replaces it, so re-triggering a timed
    effect extends it rather than stacking two expiries.
    """

    def __init__(self):
        self._entries: Dict[str, _Deferred] = {}
        self._seq = 0

    def __len__(self) -> int:
        return len(self._entries)

    def schedule(self, key: str, due_frame: int, action: Callable[[], None]) -> None:
        """Run ``action`` on the first drain at or after ``due_frame``."""
        self._seq += 1
        self._entries[key] = _Deferred(due_frame, self._seq, action)

    def cancel(self, key: str) -> bool:
        """Drop a pending action. Returns True if one was pending."""
        return self._entries.pop(key, None) is not None

    def is_pending(self, key: str) -> bool:
        return key in self._entries

    def due_frame(self, key: str) -> Optional[int]:
        entry = self._entries.get(key)
        return entry.due_frame if entry else None

    def drain(self, frame: int) -> int:
        """Run every action due at ``frame``, earliest first.

        Actions scheduled while draining run on a later drain.

        Returns:
            Number of actions run
        """
        due = [
            (key, entry) for key, entry in self._entries.items()
            if entry.due_frame <= frame
        ]
        due.sort(key=lambda item: (item[1].due_frame, item[1].seq))

        ran = 0
        for key, entry in due:
            # An earlier action may have rescheduled or cancelled this key
            if self._entries.get(key) is not entry:
                continue
            del self._entries[key]
            entry.action()
            ran += 1

        return ran

    def clear(self) -> None:
        self._entries.clear()


class Steppable(Protocol):
    """Anything the scheduler can drive."""

    @property
    def state(self) -> GameState: ...

    def step(self) -> object: ...


class Clock(Protocol):
    """Frame pacer, e.g. ``pygame.time.Clock``."""

    def tick(self, framerate: int = 0) -> int: ...


class FrameScheduler:
    """Advances a game exactly one step per tick while it is active.

    The simulation is frame-rate dependent: all speeds are per step.
    With a ``clock`` each tick waits for the next frame slot at ``fps``;
    without one, steps run back to back (headless runs and tests).
    """

    def __init__(self, game: Steppable, fps: int = FPS, clock: Optional[Clock] = None):
        self._game = game
        self._fps = fps
        self._clock = clock
        self._stopped = False
        self._frames = 0

    @property
    def frames(self) -> int:
        """Steps run so far."""
        return self._frames

    @property
    def is_active(self) -> bool:
        """Whether the next tick would step the game."""
        return not self._stopped and self._game.state in ACTIVE_STATES

    def tick(self) -> bool:
        """Pace one frame and step the game if it is active.

        Returns:
            True if a simulation step ran
        """
        if self._clock is not None:
            self._clock.tick(self._fps)

        if not self.is_active:
            return False

        self._game.step()
        self._frames += 1
        return True

    def run(self, max_frames: Optional[int] = None) -> int:
        """Tick until the game leaves the active states, stop() is called,
        or ``max_frames`` steps have run.

        Returns:
            Number of steps run by this call
        """
        stepped = 0
        while max_frames is None or stepped < max_frames:
            if not self.tick():
                break
            stepped += 1
        log.debug("Scheduler halted after %d steps (state=%s)", stepped, self._game.state.value)
        return stepped

    def stop(self) -> None:
        """Halt scheduling; ticks become no-ops until resume()."""
        self._stopped = True

    def resume(self) -> None:
        self._stopped = False
