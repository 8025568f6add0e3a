"""Input events accepted by the HoleBreaker core."""

from .input_event import InputEvent, InputKind

__all__ = ['InputEvent', 'InputKind']
