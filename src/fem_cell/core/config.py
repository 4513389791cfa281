"""
Mesh Configuration Module.

This module provides a YAML-based configuration for the runtime capabilities
of a mesh (refinement support) and for the tessellated visualization output.

Example YAML configuration:
    features:
      refinement: true

    output:
      connectivity_format: "vtk"
      linear_subcells: true
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import yaml

from fem_cell.core.errors import CapabilityDisabledError

logger = logging.getLogger(__name__)


class ConnectivityFormat(str, Enum):
    """Node ordering conventions for sub-cell connectivity output.

    The values are part of the file contract with downstream tools and must
    not change.
    """

    TECPLOT = "tecplot"
    VTK = "vtk"
    UNV = "unv"


# =============================================================================
# Configuration Data Classes
# =============================================================================


@dataclass
class MeshFeatures:
    """Runtime capability flags of a mesh.

    Attributes
    ----------
    refinement : bool
        Whether adaptive refinement queries (embedding matrices) are available.
    """

    refinement: bool = True

    def __post_init__(self):
        if not isinstance(self.refinement, bool):
            raise ValueError(f"refinement must be a boolean: {self.refinement!r}")

    def require(self, capability: str) -> None:
        """Raise if ``capability`` is switched off.

        Raises
        ------
        CapabilityDisabledError
            If the capability is disabled.
        ValueError
            If the capability name is unknown.
        """
        if capability not in self.__dataclass_fields__:
            raise ValueError(f"Unknown mesh capability: {capability}")
        if not getattr(self, capability):
            raise CapabilityDisabledError(capability)


@dataclass
class OutputConfig:
    """Visualization output configuration."""

    connectivity_format: str = ConnectivityFormat.TECPLOT.value
    linear_subcells: bool = True

    def __post_init__(self):
        valid = [f.value for f in ConnectivityFormat]
        if isinstance(self.connectivity_format, ConnectivityFormat):
            self.connectivity_format = self.connectivity_format.value
        if self.connectivity_format not in valid:
            raise ValueError(
                f"Invalid connectivity format: {self.connectivity_format}. Valid: {valid}"
            )


@dataclass
class MeshConfig:
    """Complete mesh configuration."""

    features: MeshFeatures = field(default_factory=MeshFeatures)
    output: OutputConfig = field(default_factory=OutputConfig)

    @classmethod
    def from_yaml(cls, yaml_path: Union[str, Path]) -> "MeshConfig":
        """Load configuration from YAML file.

        Parameters
        ----------
        yaml_path : str or Path
            Path to the YAML configuration file.

        Returns
        -------
        MeshConfig
            Validated configuration object.

        Raises
        ------
        FileNotFoundError
            If the YAML file does not exist.
        ValueError
            If the configuration is invalid.
        """
        yaml_path = Path(yaml_path)
        if not yaml_path.exists():
            raise FileNotFoundError(f"Configuration file not found: {yaml_path}")

        with open(yaml_path, "r") as f:
            data = yaml.safe_load(f)

        logger.info("Loaded mesh configuration from %s", yaml_path)
        return cls.from_dict(data or {})

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "MeshConfig":
        """Create configuration from dictionary.

        Unknown keys are rejected so that typos do not silently fall back to
        defaults.
        """
        unknown = set(data) - {"features", "output"}
        if unknown:
            raise ValueError(f"Unknown configuration sections: {sorted(unknown)}")

        feat_data = data.get("features") or {}
        out_data = data.get("output") or {}
        try:
            features = MeshFeatures(**feat_data)
            output = OutputConfig(**out_data)
        except TypeError as e:
            raise ValueError(f"Invalid configuration: {e}") from e

        return cls(features=features, output=output)

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary."""
        return {
            "features": {"refinement": self.features.refinement},
            "output": {
                "connectivity_format": self.output.connectivity_format,
                "linear_subcells": self.output.linear_subcells,
            },
        }

    def save_yaml(self, yaml_path: Union[str, Path]) -> None:
        """Save configuration to YAML file.

        Parameters
        ----------
        yaml_path : str or Path
            Path to the output YAML file.
        """
        with open(yaml_path, "w") as f:
            yaml.dump(self.to_dict(), f, default_flow_style=False, sort_keys=False)

    def validate(self) -> List[str]:
        """Validate the complete configuration.

        Returns
        -------
        list of str
            List of validation warnings (empty if all OK).
        """
        warnings = []
        if not self.output.linear_subcells and self.output.connectivity_format != "vtk":
            warnings.append(
                "Quadratic cells are only exported in VTK order; "
                f"'{self.output.connectivity_format}' applies to linear sub-cells only"
            )
        return warnings

    def __str__(self) -> str:
        """Human-readable string representation."""
        lines = [
            "Mesh Configuration",
            "=" * 40,
            f"Refinement: {'enabled' if self.features.refinement else 'disabled'}",
            f"Connectivity format: {self.output.connectivity_format}",
            f"Linear sub-cells: {self.output.linear_subcells}",
        ]
        return "\n".join(lines)


def load_config(path: Optional[Union[str, Path]] = None) -> MeshConfig:
    """Load a configuration file, or return defaults when ``path`` is None."""
    if path is None:
        return MeshConfig()
    return MeshConfig.from_yaml(path)
