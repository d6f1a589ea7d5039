"""
Processor recording where each entity was read from.
"""
from typing import Dict, Any

from ..common.processor import Emit, LocationProcessor
from ..common.provenance import enhance_provenance
from ..common.results import LocationSpec


class AnnotateLocationEntityProcessor(LocationProcessor):
    async def process_entity(self, entity: Dict[str, Any], location: LocationSpec,
                             emit: Emit) -> Dict[str, Any]:
        return enhance_provenance(entity, location)
