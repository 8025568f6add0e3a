"""
HoleBreaker Event Types

Events the core emits for presentation and audio collaborators:
- GameEventType: what happened
- GameEvent: immutable record with a minimal payload
- EventBus: fan-out to subscribed listeners

Events are advisory. The simulation never depends on anyone consuming
them; listeners run synchronously inside the step that produced the event.
"""

from enum import Enum
from typing import Callable, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from .entities.power_up import PowerUpKind


class GameEventType(Enum):
    """Kinds of events emitted by the simulation."""
    BRICK_DESTROYED = "brick_destroyed"
    POWER_UP_COLLECTED = "power_up_collected"
    PADDLE_HIT = "paddle_hit"
    BALL_LOST = "ball_lost"
    LEVEL_CLEARED = "level_cleared"
    SESSION_WON = "session_won"
    SESSION_OVER = "session_over"


class GameEvent(BaseModel):
    """
    A single simulation event.

    Only the fields relevant to the event type are set; the rest keep
    their defaults.
    """
    type: GameEventType = Field(..., description="What happened")
    frame: int = Field(..., ge=0, description="Simulation frame that produced the event")
    level: int = Field(default=1, ge=1, description="Level in play when it happened")

    x: Optional[float] = Field(default=None, description="Where it happened, if spatial")
    y: Optional[float] = Field(default=None, description="Where it happened, if spatial")
    points: int = Field(default=0, ge=0, description="Score awarded by this event")
    power_up: Optional[PowerUpKind] = Field(default=None, description="Collected power-up kind")

    model_config = ConfigDict(frozen=True)


EventListener = Callable[[GameEvent], None]


class EventBus:
    """Synchronous publish/subscribe for GameEvents."""

    def __init__(self):
        self._listeners: List[EventListener] = []

    def subscribe(self, listener: EventListener) -> None:
        if listener not in self._listeners:
            self._listeners.append(listener)

    def unsubscribe(self, listener: EventListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def publish(self, event: GameEvent) -> None:
        """Deliver an event to every listener, in subscription order."""
        for listener in list(self._listeners):
            listener(event)
