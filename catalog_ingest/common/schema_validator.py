"""
Schema validation utilities for configuration and entities.
"""
import json
import logging
from pathlib import Path
from typing import Dict, Any, Tuple, Optional
import jsonschema
from jsonschema import ValidationError

logger = logging.getLogger(__name__)

# Minimal shape every entity must have before it enters the catalog
ENTITY_ENVELOPE_SCHEMA: Dict[str, Any] = {
    "type": "object",
    "required": ["apiVersion", "kind", "metadata"],
    "properties": {
        "apiVersion": {"type": "string", "minLength": 1},
        "kind": {"type": "string", "minLength": 1},
        "metadata": {"type": "object"},
    },
}

_RULE_SCHEMA: Dict[str, Any] = {
    "type": "object",
    "required": ["allow"],
    "properties": {
        "allow": {"type": "array", "items": {"type": "string"}},
        "locations": {
            "type": "array",
            "items": {
                "type": "object",
                "required": ["type"],
                "properties": {
                    "type": {"type": "string"},
                    "target": {"type": "string"},
                },
            },
        },
    },
}

CONFIG_SCHEMA: Dict[str, Any] = {
    "type": "object",
    "properties": {
        "catalog": {
            "type": "object",
            "properties": {
                "rules": {"type": "array", "items": _RULE_SCHEMA},
                "locations": {
                    "type": "array",
                    "items": {
                        "type": "object",
                        "required": ["type", "target"],
                        "properties": {
                            "type": {"type": "string"},
                            "target": {"type": "string"},
                            "rules": {"type": "array", "items": _RULE_SCHEMA},
                        },
                    },
                },
                "processors": {"type": "array", "items": {"type": "string"}},
                "maxDepth": {"type": "integer", "minimum": 1},
            },
        },
    },
}


def load_schema(schema_path: Path) -> Dict[str, Any]:
    """Load JSON schema from file."""
    try:
        with open(schema_path, 'r') as f:
            return json.load(f)
    except (json.JSONDecodeError, FileNotFoundError) as e:
        logger.error(f"Failed to load schema from {schema_path}: {e}")
        raise


def validate_against_schema(data: Any, schema: Dict[str, Any]) -> Tuple[bool, Optional[str]]:
    """
    Validate data against JSON schema.
    
    Returns:
        Tuple of (is_valid, error_message)
    """
    try:
        jsonschema.validate(instance=data, schema=schema)
        return True, None
    except ValidationError as e:
        return False, e.message


def validate_config(config: Any) -> Tuple[bool, Optional[str]]:
    """Validate a loaded configuration document."""
    return validate_against_schema(config, CONFIG_SCHEMA)
