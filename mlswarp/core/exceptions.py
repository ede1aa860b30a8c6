"""Errors raised by the deformation routines."""


class DeformationError(ValueError):
    """Base class for deformation failures."""


class InvalidInputError(DeformationError):
    """Control points or query point are malformed (shape, length, NaN/Inf)."""


class DegenerateGeometryError(DeformationError):
    """
    The weighted covariance of the source control points is singular.

    Happens when the control points coincide or are collinear, so the local
    linear part of the affine map cannot be recovered.
    """
