"""HoleBreaker skins for rendering."""

from .base import HoleBreakerSkin
from .geometric import GeometricSkin

__all__ = [
    'HoleBreakerSkin',
    'GeometricSkin',
]
