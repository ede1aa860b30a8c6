"""
2D point / vector value type.

Small enough that pulling in a full linear algebra object per point is not
worth it; the arithmetic follows IEEE-754 and never raises.
"""

from dataclasses import dataclass
from typing import Iterator, Tuple

from mlswarp.geometry.matrix import Mat2


@dataclass(frozen=True)
class Point:
    """Point represented as a 2x1 column vector."""

    x: float
    y: float

    @classmethod
    def zero(cls) -> 'Point':
        return cls(0.0, 0.0)

    @classmethod
    def from_tuple(cls, xy) -> 'Point':
        """Build from any (x, y) pair (tuple, list, numpy row)."""
        x, y = xy
        return cls(float(x), float(y))

    def to_tuple(self) -> Tuple[float, float]:
        return (self.x, self.y)

    def __iter__(self) -> Iterator[float]:
        yield self.x
        yield self.y

    def __add__(self, other: 'Point') -> 'Point':
        return Point(self.x + other.x, self.y + other.y)

    def __sub__(self, other: 'Point') -> 'Point':
        return Point(self.x - other.x, self.y - other.y)

    def scale(self, s: float) -> 'Point':
        return Point(s * self.x, s * self.y)

    def __mul__(self, s: float) -> 'Point':
        return self.scale(s)

    def __rmul__(self, s: float) -> 'Point':
        return self.scale(s)

    def dot(self, other: 'Point') -> float:
        return self.x * other.x + self.y * other.y

    def sqr_norm(self) -> float:
        return self.x * self.x + self.y * self.y

    def outer(self, other: 'Point') -> Mat2:
        """
        Outer product self * other^T.

        Args:
            other: Right-hand vector

        Returns:
            2x2 matrix with m_ij = self_i * other_j
        """
        return Mat2(
            m11=self.x * other.x,
            m12=self.x * other.y,
            m21=self.y * other.x,
            m22=self.y * other.y,
        )

    def __matmul__(self, m: Mat2) -> 'Point':
        # Row vector times matrix: [x y] @ M
        return Point(
            self.x * m.m11 + self.y * m.m21,
            self.x * m.m12 + self.y * m.m22,
        )
