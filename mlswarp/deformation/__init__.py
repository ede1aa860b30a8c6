"""Moving Least Squares point deformation."""

from mlswarp.deformation.affine import AffineMLS, deform_affine, estimator_diagnostics
from mlswarp.deformation.validation import validate_controls, validate_point

__all__ = [
    'AffineMLS',
    'deform_affine',
    'estimator_diagnostics',
    'validate_controls',
    'validate_point',
]
