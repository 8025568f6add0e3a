"""HoleBreaker - a brick breaker where sinking the ball in the hole clears the level.

The simulation core (HoleBreakerMode) owns all entities and advances one
frame per step(). Renderers read RenderSnapshot views and listen to
GameEvents; input reaches the core only through its command methods.
"""

from .config import GameConfig, load_config
from .errors import ConfigurationError
from .events import GameEvent, GameEventType
from .game_mode import HoleBreakerMode
from .game_state import GameState
from .level_generator import LevelGenerator
from .scheduler import DeferredQueue, FrameScheduler
from .snapshot import RenderSnapshot

__version__ = "1.0.0"

__all__ = [
    'ConfigurationError',
    'DeferredQueue',
    'FrameScheduler',
    'GameConfig',
    'GameEvent',
    'GameEventType',
    'GameState',
    'HoleBreakerMode',
    'LevelGenerator',
    'RenderSnapshot',
    'load_config',
]
