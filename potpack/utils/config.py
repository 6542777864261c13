"""
Configuration Management

Load, save, and validate configuration files for packing runs.
"""

import copy
import logging
import yaml
from pathlib import Path
from typing import Dict, Any

logger = logging.getLogger(__name__)

DEFAULT_CONFIG: Dict[str, Any] = {
    "packer": {
        "fill_factor": 0.95,
    },
    "generation": {
        "n_rectangles": 50,
        "size_range": [8, 128],
        "seed": 42,
    },
    "visualization": {
        "color_scheme": "Viridis",
        "show_labels": True,
    },
    "logging": {
        "level": "INFO",
        "log_file": None,
    },
}


def load_config(config_path: str) -> Dict[str, Any]:
    """
    Load configuration from YAML file.

    Sections missing from the file fall back to the built-in defaults.

    Args:
        config_path: Path to YAML configuration file

    Returns:
        Configuration dictionary

    Example:
        >>> config = load_config("config/default.yaml")
        >>> print(config["packer"]["fill_factor"])
        0.95
    """
    config_path = Path(config_path)

    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(config_path, "r") as f:
        loaded = yaml.safe_load(f) or {}

    if not isinstance(loaded, dict):
        raise ValueError(f"Config file must contain a mapping: {config_path}")

    config = merge_configs(DEFAULT_CONFIG, loaded)

    _validate_config(config)

    return config


def save_config(config: Dict[str, Any], save_path: str):
    """
    Save configuration to YAML file.

    Args:
        config: Configuration dictionary
        save_path: Path to save YAML file
    """
    save_path = Path(save_path)
    save_path.parent.mkdir(parents=True, exist_ok=True)

    with open(save_path, "w") as f:
        yaml.safe_dump(config, f, default_flow_style=False, sort_keys=False)

    logger.info(f"Configuration saved to: {save_path}")


def merge_configs(base_config: Dict[str, Any],
                  override_config: Dict[str, Any]) -> Dict[str, Any]:
    """
    Merge two configurations (override takes precedence).

    Args:
        base_config: Base configuration
        override_config: Override configuration

    Returns:
        Merged configuration
    """
    merged = copy.deepcopy(base_config)

    for key, value in override_config.items():
        if key in merged and isinstance(merged[key], dict) and isinstance(value, dict):
            merged[key] = merge_configs(merged[key], value)
        else:
            merged[key] = value

    return merged


def _validate_config(config: Dict[str, Any]):
    """
    Validate configuration structure and values.

    Args:
        config: Configuration dictionary

    Raises:
        ValueError: If configuration is invalid
    """
    required_sections = ["packer", "generation", "visualization", "logging"]

    for section in required_sections:
        if not isinstance(config.get(section), dict):
            raise ValueError(f"Missing required section: {section}")

    # Validate packer
    fill_factor = config["packer"]["fill_factor"]
    if not isinstance(fill_factor, (int, float)) or not 0 < fill_factor <= 1:
        raise ValueError("fill_factor must be in (0, 1]")

    # Validate generation
    gen_config = config["generation"]
    if gen_config["n_rectangles"] < 0:
        raise ValueError("n_rectangles must be non-negative")

    size_range = gen_config["size_range"]
    if len(size_range) != 2:
        raise ValueError("size_range must have 2 values")
    if size_range[0] < 1 or size_range[1] < size_range[0]:
        raise ValueError("size_range must satisfy 1 <= min <= max")

    # Validate logging
    level = config["logging"]["level"]
    if not isinstance(logging.getLevelName(str(level).upper()), int):
        raise ValueError(f"Unknown logging level: {level}")

    logger.debug("Configuration validated successfully")


def get_default_config() -> Dict[str, Any]:
    """
    Get default configuration.

    Returns:
        Copy of the built-in default configuration
    """
    return copy.deepcopy(DEFAULT_CONFIG)


def update_config_from_args(config: Dict[str, Any],
                            args: Dict[str, Any]) -> Dict[str, Any]:
    """
    Update configuration from command-line arguments.

    Args:
        config: Base configuration
        args: Command-line arguments

    Returns:
        Updated configuration
    """
    updated_config = copy.deepcopy(config)

    # Map common CLI args to config keys
    arg_mapping = {
        "fill_factor": ("packer", "fill_factor"),
        "random": ("generation", "n_rectangles"),
        "seed": ("generation", "seed"),
        "log_file": ("logging", "log_file"),
        "log_level": ("logging", "level"),
    }

    for arg_key, (section, config_key) in arg_mapping.items():
        if arg_key in args and args[arg_key] is not None:
            if section not in updated_config:
                updated_config[section] = {}
            updated_config[section][config_key] = args[arg_key]

    return updated_config
