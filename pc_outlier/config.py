"""
Configuration module for PC-Outlier.

Contains the OutlierConfig dataclass with all filter parameters and the
ASPRS classification codes used when labelling noise points.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict

import yaml


# ASPRS "Low Point (noise)" class, the default label for outliers
LOW_POINT_CLASS: int = 7

METHOD_STATISTICAL = "statistical"
METHOD_RADIUS = "radius"
METHODS = (METHOD_STATISTICAL, METHOD_RADIUS)


@dataclass
class OutlierConfig:
    """Configuration for outlier filtering.

    Parameters
    ----------
    method : str
        Outlier criterion, "statistical" or "radius" (case-insensitive).
    min_k : int
        Radius method: a point needs more than this many points (itself
        included) within ``radius`` to be an inlier.
    radius : float
        Radius method: search radius in the units of the point coordinates.
    mean_k : int
        Statistical method: number of nearest neighbors (excluding the point
        itself) used for the mean neighbor distance.
    multiplier : float
        Statistical method: standard deviation multiplier for the threshold.
    label : int
        Classification code written to outlier points.
    threads : int
        Number of worker threads. Values below 1 are clamped to 1 at run time.
    output_dir : Path
        Default output directory.
    compress_output : bool
        Whether to compress output as LAZ.
    write_report : bool
        Whether to write a JSON report next to each output file.
    """

    method: str = METHOD_STATISTICAL

    # Radius method
    min_k: int = 2
    radius: float = 1.0

    # Statistical method
    mean_k: int = 8
    multiplier: float = 2.0

    label: int = LOW_POINT_CLASS
    threads: int = 1

    # Output settings
    output_dir: Path = field(default_factory=lambda: Path("./output"))
    compress_output: bool = True
    write_report: bool = True

    def __post_init__(self):
        """Reject parameter values that can never produce a valid run."""
        if self.radius <= 0:
            raise ValueError(f"radius must be > 0, got {self.radius}")
        if self.min_k < 0:
            raise ValueError(f"min_k must be >= 0, got {self.min_k}")
        if self.mean_k < 1:
            raise ValueError(f"mean_k must be >= 1, got {self.mean_k}")
        if self.multiplier < 0:
            raise ValueError(f"multiplier must be >= 0, got {self.multiplier}")
        if not 0 <= self.label <= 255:
            raise ValueError(f"label must be in [0, 255], got {self.label}")

    @property
    def normalized_method(self) -> str:
        """Return the method name lower-cased and stripped."""
        return self.method.strip().lower()


# Standard ASPRS LAS classification codes (LAS 1.4, R15)
ASPRS_CLASS_NAMES: Dict[int, str] = {
    0: "Created, Never Classified",
    1: "Unclassified",
    2: "Ground",
    3: "Low Vegetation",
    4: "Medium Vegetation",
    5: "High Vegetation",
    6: "Building",
    7: "Low Point (noise)",
    8: "Reserved",
    9: "Water",
    10: "Rail",
    11: "Road Surface",
    12: "Reserved",
    13: "Wire - Guard",
    14: "Wire - Conductor",
    15: "Transmission Tower",
    16: "Wire-structure Connector",
    17: "Bridge Deck",
    18: "High Noise",
}


def load_config(yaml_path: Path) -> OutlierConfig:
    """
    Load configuration from YAML file.

    Parameters
    ----------
    yaml_path : Path
        Path to YAML configuration file.

    Returns
    -------
    OutlierConfig
        Configuration object with values from file.

    Raises
    ------
    FileNotFoundError
        If the YAML file does not exist.
    ValueError
        If the YAML file contains invalid configuration.
    """
    yaml_path = Path(yaml_path)
    if not yaml_path.exists():
        raise FileNotFoundError(f"Configuration file not found: {yaml_path}")

    with open(yaml_path) as f:
        data = yaml.safe_load(f)

    if data is None:
        return OutlierConfig()

    if not isinstance(data, dict):
        raise ValueError(f"Configuration must be a mapping, got {type(data).__name__}")

    config_dict = _flatten_config(data)

    if "output_dir" in config_dict:
        config_dict["output_dir"] = Path(config_dict["output_dir"])

    try:
        return OutlierConfig(**config_dict)
    except TypeError as e:
        raise ValueError(f"Invalid configuration in {yaml_path}: {e}") from e


def save_config(config: OutlierConfig, yaml_path: Path) -> None:
    """
    Save configuration to YAML file.

    Parameters
    ----------
    config : OutlierConfig
        Configuration object to save.
    yaml_path : Path
        Path to output YAML file.
    """
    data = _unflatten_config(config)

    yaml_path = Path(yaml_path)
    yaml_path.parent.mkdir(parents=True, exist_ok=True)
    with open(yaml_path, "w") as f:
        yaml.dump(data, f, default_flow_style=False, sort_keys=False)


def _flatten_config(data: Dict[str, Any]) -> Dict[str, Any]:
    """Flatten nested YAML structure to flat config dict."""
    result = {}

    for key, value in data.items():
        if isinstance(value, dict):
            for k, v in value.items():
                result[k] = v
        else:
            result[key] = value

    # "class" is the historical option name for the noise label
    if "class" in result:
        result.setdefault("label", result["class"])
        del result["class"]

    return result


def _unflatten_config(config: OutlierConfig) -> Dict[str, Any]:
    """Convert flat config to nested structure for YAML output."""
    return {
        "outlier": {
            "method": config.method,
            "label": config.label,
            "threads": config.threads,
        },
        "radius": {
            "radius": config.radius,
            "min_k": config.min_k,
        },
        "statistical": {
            "mean_k": config.mean_k,
            "multiplier": config.multiplier,
        },
        "output": {
            "output_dir": str(config.output_dir),
            "compress_output": config.compress_output,
            "write_report": config.write_report,
        },
    }
