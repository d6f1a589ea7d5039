"""
Configuration loading.

Configuration is a YAML document; only the ``catalog`` section is read::

    catalog:
      maxDepth: 10
      processors:
        - mypackage.readers:FileReaderProcessor
      rules:
        - allow: [Component, API, Location]
        - allow: [Group]
          locations:
            - type: file
      locations:
        - type: file
          target: /catalog/org.yaml
          rules:
            - allow: [User]
"""
import importlib
import logging
from pathlib import Path
from typing import Dict, Any, List, Optional

import yaml

from .errors import ConfigError
from .results import LocationSpec
from .schema_validator import validate_config

logger = logging.getLogger(__name__)


def load_config(config_path: Path) -> Dict[str, Any]:
    """
    Load and validate a YAML configuration file.
    
    Args:
        config_path: Path to the YAML file
        
    Returns:
        The configuration document (an empty dict for an empty file)
        
    Raises:
        ConfigError: If the file cannot be read, parsed or validated
    """
    try:
        with open(config_path, 'r') as f:
            config = yaml.safe_load(f)
    except FileNotFoundError as e:
        raise ConfigError(f"Config file not found: {config_path}") from e
    except yaml.YAMLError as e:
        raise ConfigError(f"Failed to parse config {config_path}: {e}") from e
    
    if config is None:
        config = {}
    
    is_valid, error_msg = validate_config(config)
    if not is_valid:
        raise ConfigError(f"Invalid config {config_path}: {error_msg}")
    
    logger.debug(f"Loaded config from {config_path}")
    return config


def catalog_section(config: Optional[Dict[str, Any]]) -> Dict[str, Any]:
    if not config:
        return {}
    return config.get("catalog") or {}


def read_static_locations(config: Optional[Dict[str, Any]]) -> List[LocationSpec]:
    """Locations listed under ``catalog.locations``."""
    return [
        LocationSpec(type=entry["type"], target=entry["target"])
        for entry in catalog_section(config).get("locations", [])
    ]


def read_max_depth(config: Optional[Dict[str, Any]], default: int) -> int:
    return catalog_section(config).get("maxDepth", default)


def import_processor(path: str) -> Any:
    """
    Instantiate a processor from a ``module:ClassName`` path.
    
    Raises:
        ConfigError: If the path is malformed or cannot be imported
    """
    module_name, sep, attr = path.partition(":")
    if not sep or not module_name or not attr:
        raise ConfigError(f"Processor path must look like 'module:ClassName', got '{path}'")
    try:
        module = importlib.import_module(module_name)
        factory = getattr(module, attr)
    except (ImportError, AttributeError) as e:
        raise ConfigError(f"Failed to import processor '{path}': {e}") from e
    return factory()


def read_extra_processors(config: Optional[Dict[str, Any]]) -> List[Any]:
    """Processors listed under ``catalog.processors``, instantiated in order."""
    return [import_processor(path) for path in catalog_section(config).get("processors", [])]
