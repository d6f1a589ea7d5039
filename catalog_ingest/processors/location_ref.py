"""
Processor following ``Location`` entities to the locations they point at.
"""
import logging
import os
from typing import Dict, Any, List

from ..common import results as result
from ..common.processor import Emit, LocationProcessor
from ..common.results import LocationSpec

logger = logging.getLogger(__name__)


def resolve_target(loc_type: str, target: str, parent: LocationSpec) -> str:
    """Resolve a relative file target against the referring file's directory."""
    if loc_type == "file" and parent.type == "file" and not os.path.isabs(target):
        return os.path.normpath(os.path.join(os.path.dirname(parent.target), target))
    return target


class LocationRefProcessor(LocationProcessor):
    """
    Emits a location for ``spec.target`` and each of ``spec.targets``.
    
    The type defaults to the type of the location the entity was read from.
    """
    
    async def process_entity(self, entity: Dict[str, Any], location: LocationSpec,
                             emit: Emit) -> Dict[str, Any]:
        if str(entity.get("kind", "")).lower() != "location":
            return entity
        
        spec = entity.get("spec") or {}
        loc_type = spec.get("type", location.type)
        if not isinstance(loc_type, str) or not loc_type:
            emit(result.input_error(location, f"Invalid location type {loc_type!r}"))
            return entity
        
        targets: List[Any] = []
        if "target" in spec:
            targets.append(spec["target"])
        extra_targets = spec.get("targets") or []
        if isinstance(extra_targets, list):
            targets.extend(extra_targets)
        else:
            emit(result.input_error(location, f"Location targets must be a list, got {extra_targets!r}"))
        
        for target in targets:
            if not isinstance(target, str) or not target:
                emit(result.input_error(location, f"Invalid location target {target!r}"))
                continue
            resolved = LocationSpec(type=loc_type, target=resolve_target(loc_type, target, location))
            logger.debug(f"Location {location} refers to {resolved}")
            emit(result.location(resolved, False))
        
        return entity
