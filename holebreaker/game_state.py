"""GameState enum for HoleBreaker sessions.

The session lifecycle:

    MENU --start--> PLAYING
    PLAYING --hole entered / bricks cleared--> LEVEL_TRANSITION
    LEVEL_TRANSITION --timer--> PLAYING (next level) | WON (last level)
    PLAYING --last ball lost, lives left--> PLAYING (serve again)
    PLAYING --last ball lost, no lives--> GAME_OVER
    WON | GAME_OVER --acknowledge--> MENU
"""
from enum import Enum


class GameState(Enum):
    """Session states.

    States:
        MENU: Character selection, nothing simulated
        PLAYING: Active gameplay in progress
        LEVEL_TRANSITION: Non-interactive interstitial between levels
        WON: Final level cleared (terminal)
        GAME_OVER: Lives exhausted (terminal)
    """
    MENU = "menu"
    PLAYING = "playing"
    LEVEL_TRANSITION = "level_transition"
    WON = "won"
    GAME_OVER = "gameover"

    @property
    def is_terminal(self) -> bool:
        return self in (GameState.WON, GameState.GAME_OVER)
