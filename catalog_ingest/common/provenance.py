"""
Provenance tracking for ingested entities.
"""
import copy
import logging
from typing import Dict, Any

from .results import LocationSpec

logger = logging.getLogger(__name__)

LOCATION_ANNOTATION = "catalog.io/managed-by-location"


def stringify_location_ref(location: LocationSpec) -> str:
    """Format a location as ``type:target``."""
    return f"{location.type}:{location.target}"


def enhance_provenance(entity: Dict[str, Any], location: LocationSpec) -> Dict[str, Any]:
    """
    Return a copy of the entity annotated with the location it came from.
    
    An annotation already present on the entity is kept.
    """
    enhanced = copy.deepcopy(entity)
    
    metadata = enhanced.setdefault('metadata', {})
    annotations = metadata.setdefault('annotations', {})
    annotations.setdefault(LOCATION_ANNOTATION, stringify_location_ref(location))
    
    return enhanced
