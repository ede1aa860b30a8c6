"""
Configuration for mlswarp.

YAML-loadable dataclass for the deformation settings.
"""

from dataclasses import dataclass, asdict
from typing import Dict, Any
import yaml
from pathlib import Path

from mlswarp.core.exceptions import InvalidInputError


@dataclass
class DeformationConfig:
    """Affine MLS deformation configuration."""
    proximity_threshold: float = 0.0  # Snap radius around control points, 0 = exact coincidence only
    det_tolerance: float = 1e-10  # Minimum 4 * det / trace^2 of the weighted covariance
    warn_duplicates: bool = True  # Warn on duplicated source points with conflicting targets
    verbose: bool = False

    def __post_init__(self):
        # YAML 1.1 loads exponent floats without a dot (1e-8) as strings
        for name in ('proximity_threshold', 'det_tolerance'):
            value = getattr(self, name)
            if isinstance(value, str):
                try:
                    setattr(self, name, float(value))
                except ValueError as e:
                    raise InvalidInputError(f"{name} must be a number, got {value!r}") from e

    @classmethod
    def from_yaml(cls, path: str) -> 'DeformationConfig':
        """
        Load configuration from YAML file.

        Args:
            path: Path to YAML config file

        Returns:
            DeformationConfig instance
        """
        with open(path, 'r') as f:
            data = yaml.safe_load(f)

        # An empty file parses to None
        return cls(**(data or {}))

    def to_yaml(self, path: str) -> None:
        """
        Save configuration to YAML file.

        Args:
            path: Output path
        """
        Path(path).parent.mkdir(parents=True, exist_ok=True)
        with open(path, 'w') as f:
            yaml.dump(self.to_dict(), f, default_flow_style=False, sort_keys=False)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return asdict(self)


def create_default_config() -> DeformationConfig:
    """Create default configuration."""
    return DeformationConfig()
