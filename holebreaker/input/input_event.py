"""
Input Event - a single command from the input collaborator.

Pointer/touch sources translate raw device input into these two commands:
move the paddle to an X position, or launch attached balls.
"""
from dataclasses import dataclass
from enum import Enum

from ..models import Vector2D


class InputKind(Enum):
    """Commands the core accepts from input sources."""
    MOVE = "move"
    LAUNCH = "launch"


@dataclass(frozen=True)
class InputEvent:
    """Immutable input event from any source.

    Attributes:
        position: Pointer position in arena coordinates (only X is used)
        timestamp: Time when the event occurred (seconds, from monotonic clock)
        kind: MOVE sets the paddle target, LAUNCH releases attached balls
    """
    position: Vector2D
    timestamp: float
    kind: InputKind = InputKind.MOVE

    def __post_init__(self):
        """Validate timestamp is non-negative."""
        if self.timestamp < 0:
            raise ValueError(f'Timestamp must be non-negative, got {self.timestamp}')

    def __str__(self) -> str:
        return (f"InputEvent(pos=({self.position.x:.2f}, {self.position.y:.2f}), "
                f"t={self.timestamp:.3f}, kind={self.kind.value})")
