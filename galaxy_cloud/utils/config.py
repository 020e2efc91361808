"""Configuration management."""

import json
from typing import Dict, Any, Optional
from pathlib import Path
from dataclasses import dataclass, asdict, field

from galaxy_cloud.params import ParameterSet, InvalidParameter


@dataclass
class Config:
    """Run configuration: galaxy parameters plus everything around them."""
    # Galaxy parameters
    params: ParameterSet = field(default_factory=ParameterSet)

    # Generation
    seed: Optional[int] = None
    workers: int = 1

    # Rendering parameters
    background: str = "#11081F"
    elevation: float = 22.0
    figsize: float = 8.0
    dpi: int = 100
    fps: int = 30

    # Export parameters
    output_path: str = "galaxy"

    def __post_init__(self):
        if isinstance(self.params, dict):
            self.params = ParameterSet.from_dict(self.params)

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data['params'] = self.params.to_dict()
        return data


def config_from_dict(data: Dict[str, Any]) -> Config:
    """Build a Config, rejecting unknown top-level keys."""
    known = set(Config.__dataclass_fields__)
    unknown = set(data) - known
    if unknown:
        raise InvalidParameter(sorted(unknown)[0], "unknown configuration key")
    return Config(**data)


def load_config(config_path: str) -> Config:
    """Load configuration from file.

    Args:
        config_path: Path to config file (.json or .yaml)

    Returns:
        Config object
    """
    config_path = Path(config_path)

    with open(config_path, 'r') as f:
        if config_path.suffix in ('.yaml', '.yml'):
            try:
                import yaml
            except ImportError:
                raise ImportError("YAML support requires PyYAML. Install with: pip install pyyaml")
            data = yaml.safe_load(f) or {}
        else:
            data = json.load(f)

    return config_from_dict(data)


def save_config(config: Config, output_path: str):
    """Save configuration to file.

    Args:
        config: Config object
        output_path: Output file path (.json or .yaml)
    """
    output_path = Path(output_path)
    data = config.to_dict()

    with open(output_path, 'w') as f:
        if output_path.suffix in ('.yaml', '.yml'):
            try:
                import yaml
            except ImportError:
                raise ImportError("YAML support requires PyYAML. Install with: pip install pyyaml")
            yaml.safe_dump(data, f, default_flow_style=False)
        else:
            json.dump(data, f, indent=2)
