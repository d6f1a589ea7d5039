"""
Processor expanding the bootstrap location into the configured locations.
"""
import logging
from typing import Dict, Any, Iterable, Optional

from ..common import results as result
from ..common.config import read_static_locations
from ..common.processor import Emit, LocationProcessor
from ..common.results import LocationSpec

logger = logging.getLogger(__name__)

BOOTSTRAP_TYPE = "bootstrap"


class StaticLocationProcessor(LocationProcessor):
    """Reads ``bootstrap`` locations by emitting every static location."""
    
    def __init__(self, locations: Iterable[LocationSpec]):
        self.locations = tuple(locations)
    
    @classmethod
    def from_config(cls, config: Optional[Dict[str, Any]]) -> 'StaticLocationProcessor':
        return cls(read_static_locations(config))
    
    async def read_location(self, location: LocationSpec, optional: bool, emit: Emit) -> bool:
        if location.type != BOOTSTRAP_TYPE:
            return False
        
        logger.debug(f"Emitting {len(self.locations)} static locations")
        for static_location in self.locations:
            emit(result.location(static_location, False))
        return True
