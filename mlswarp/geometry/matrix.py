"""
2x2 matrix value type.

Layout:

    | m11  m12 |
    | m21  m22 |
"""

from dataclasses import dataclass
import math

import numpy as np


@dataclass(frozen=True)
class Mat2:
    """Immutable 2x2 matrix of floats."""

    m11: float
    m12: float
    m21: float
    m22: float

    @classmethod
    def zero(cls) -> 'Mat2':
        return cls(0.0, 0.0, 0.0, 0.0)

    @classmethod
    def identity(cls) -> 'Mat2':
        return cls(1.0, 0.0, 0.0, 1.0)

    def __add__(self, other: 'Mat2') -> 'Mat2':
        return Mat2(
            self.m11 + other.m11,
            self.m12 + other.m12,
            self.m21 + other.m21,
            self.m22 + other.m22,
        )

    def scale(self, s: float) -> 'Mat2':
        return Mat2(s * self.m11, s * self.m12, s * self.m21, s * self.m22)

    def __mul__(self, s: float) -> 'Mat2':
        return self.scale(s)

    def __rmul__(self, s: float) -> 'Mat2':
        return self.scale(s)

    def __matmul__(self, other: 'Mat2') -> 'Mat2':
        return Mat2(
            m11=self.m11 * other.m11 + self.m12 * other.m21,
            m12=self.m11 * other.m12 + self.m12 * other.m22,
            m21=self.m21 * other.m11 + self.m22 * other.m21,
            m22=self.m21 * other.m12 + self.m22 * other.m22,
        )

    def det(self) -> float:
        return self.m11 * self.m22 - self.m21 * self.m12

    def inv(self) -> 'Mat2':
        """
        Inverse via the adjugate. Does not check for singularity.

        A zero determinant produces Inf/NaN coefficients instead of raising.
        """
        with np.errstate(divide='ignore', invalid='ignore'):
            inv_det = float(np.float64(1.0) / np.float64(self.det()))
        adj = Mat2(self.m22, -self.m12, -self.m21, self.m11)
        return inv_det * adj

    def is_finite(self) -> bool:
        return all(math.isfinite(c) for c in (self.m11, self.m12, self.m21, self.m22))
