"""2D vector and 2x2 matrix primitives."""

from mlswarp.geometry.matrix import Mat2
from mlswarp.geometry.vector import Point

__all__ = [
    'Mat2',
    'Point',
]
