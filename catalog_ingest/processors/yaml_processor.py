"""
Processor parsing YAML data into entities.
"""
import logging

import yaml

from ..common import results as result
from ..common.processor import Emit, LocationProcessor
from ..common.results import LocationSpec

logger = logging.getLogger(__name__)

YAML_SUFFIXES = (".yaml", ".yml")


class YamlProcessor(LocationProcessor):
    """
    Parses ``.yaml``/``.yml`` targets, one entity per document.
    
    Empty documents are skipped. A document that is not a mapping is
    reported as an input error; a syntax error fails the whole payload.
    """
    
    async def parse_data(self, data: bytes, location: LocationSpec, emit: Emit) -> bool:
        if not location.target.lower().endswith(YAML_SUFFIXES):
            return False
        
        try:
            documents = list(yaml.safe_load_all(data))
        except yaml.YAMLError as e:
            emit(result.general_error(location, f"YAML error, {e}"))
            return True
        
        for document in documents:
            if document is None:
                continue
            if isinstance(document, dict):
                emit(result.entity(location, document))
            else:
                emit(result.input_error(
                    location, f"Expected object at root, got {type(document).__name__}"
                ))
        
        logger.debug(f"Parsed {len(documents)} documents from {location.type} {location.target}")
        return True
