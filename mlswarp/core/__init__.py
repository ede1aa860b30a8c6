"""Core configuration and error types."""

from mlswarp.core.config import DeformationConfig, create_default_config
from mlswarp.core.exceptions import DeformationError, InvalidInputError, DegenerateGeometryError

__all__ = [
    'DeformationConfig',
    'create_default_config',
    'DeformationError',
    'InvalidInputError',
    'DegenerateGeometryError',
]
