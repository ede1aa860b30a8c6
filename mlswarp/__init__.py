"""
mlswarp: Moving Least Squares point deformation

Maps query points through the locally weighted affine deformation defined by
a sparse set of control point correspondences.
"""

__version__ = "0.1.0"

from mlswarp.core.config import DeformationConfig
from mlswarp.core.exceptions import DeformationError, InvalidInputError, DegenerateGeometryError
from mlswarp.deformation.affine import AffineMLS, deform_affine
from mlswarp.geometry import Point, Mat2

__all__ = [
    "AffineMLS",
    "deform_affine",
    "DeformationConfig",
    "DeformationError",
    "InvalidInputError",
    "DegenerateGeometryError",
    "Point",
    "Mat2",
    "__version__",
]
