"""
Engine that reads a location through a chain of processors.

Reading happens in rounds. Each round dispatches every pending item to the
processor chain; whatever the processors emit becomes the next round's
pending items. Reading stops when a round emits nothing, or when the round
limit is reached.
"""
import logging
from typing import Dict, Any, List, Optional, Sequence

from . import results as result
from .config import read_max_depth
from .errors import PolicyError, ProcessorError, RecursionLimitError, UnhandledInputError
from .processor import (
    READ_LOCATION, PARSE_DATA, PROCESS_ENTITY, HANDLE_ERROR,
    call_hook, has_capability, make_emit, processor_name,
)
from .results import (
    LocationSpec, ResultItem, LocationResult, DataResult, EntityResult, ErrorResult,
    ReadLocationEntity, ReadLocationError, ReadLocationResult,
)
from .rules import CatalogRulesEnforcer

logger = logging.getLogger(__name__)

# Maximum number of rounds of generated work items
MAX_DEPTH = 10

_OPERATION_DESCRIPTIONS = {
    READ_LOCATION: "reading location",
    PARSE_DATA: "parsing",
    PROCESS_ENTITY: "processing entity at",
    HANDLE_ERROR: "handling another error at",
}


class LocationReader:
    """
    Reads a location through a series of processor tasks.
    
    The engine keeps no state between calls, so one instance may serve
    concurrent ``read`` calls.
    """
    
    def __init__(self, processors: Sequence[Any], rules_enforcer: CatalogRulesEnforcer,
                 logger: Optional[logging.Logger] = None, max_depth: int = MAX_DEPTH):
        """
        Initialize location reader.
        
        Args:
            processors: Processor chain, in registration order
            rules_enforcer: Gate deciding which entities may be kept
            logger: Logger for debug and warning messages
            max_depth: Maximum number of rounds before giving up
        """
        if max_depth < 1:
            raise ValueError(f"max_depth must be at least 1, got {max_depth}")
        self.processors = tuple(processors)
        self.rules_enforcer = rules_enforcer
        self.logger = logger if logger is not None else logging.getLogger(__name__)
        self.max_depth = max_depth
    
    @classmethod
    def standard(cls, config: Optional[Dict[str, Any]] = None, readers: Sequence[Any] = (),
                 entity_policy: Any = None,
                 logger: Optional[logging.Logger] = None) -> 'LocationReader':
        """
        Build a reader with the standard processor set and configured rules.
        
        Args:
            config: Loaded configuration, or None for defaults
            readers: Processors able to read concrete location types
            entity_policy: Policy applied to every entity; defaults to the
                envelope schema check
            logger: Logger for debug and warning messages
        """
        from ..processors import standard_processors
        
        return cls(
            processors=standard_processors(config, readers=readers, entity_policy=entity_policy),
            rules_enforcer=CatalogRulesEnforcer.from_config(config),
            logger=logger,
            max_depth=read_max_depth(config, MAX_DEPTH),
        )
    
    async def read(self, location: LocationSpec) -> ReadLocationResult:
        """
        Read a location and everything it leads to.
        
        Never raises for failures at any location; they are recorded in the
        ``errors`` of the returned result.
        """
        output = ReadLocationResult()
        items: List[ResultItem] = [result.location(location, False)]
        
        for _ in range(self.max_depth):
            new_items: List[ResultItem] = []
            
            for item in items:
                new_items.extend(await self._dispatch(item, output))
            
            if not new_items:
                return output
            
            items = new_items
        
        message = f"Max recursion depth {self.max_depth} reached for {location.type} {location.target}"
        self.logger.warning(message)
        output.errors.append(ReadLocationError(location=location, error=RecursionLimitError(message)))
        return output
    
    async def _dispatch(self, item: ResultItem, output: ReadLocationResult) -> List[ResultItem]:
        """Handle one item and return the items it produced."""
        if isinstance(item, LocationResult):
            return await self._handle_location(item)
        if isinstance(item, DataResult):
            return await self._handle_data(item)
        if isinstance(item, EntityResult):
            return await self._handle_entity(item, output)
        if isinstance(item, ErrorResult):
            return await self._handle_error(item, output)
        raise TypeError(f"Unknown result item: {type(item).__name__}")
    
    async def _handle_location(self, item: LocationResult) -> List[ResultItem]:
        loc = item.location
        self.logger.debug(f"Reading location {loc.type} {loc.target} optional={item.optional}")
        
        produced, handled = await self._first_match(READ_LOCATION, loc, item.location, item.optional)
        if not handled:
            message = f"No processor was able to read location {loc.type} {loc.target}"
            produced.append(ErrorResult(location=loc, error=UnhandledInputError(message)))
        return produced
    
    async def _handle_data(self, item: DataResult) -> List[ResultItem]:
        loc = item.location
        self.logger.debug(f"Parsing data from location {loc.type} {loc.target} ({len(item.data)} bytes)")
        
        produced, handled = await self._first_match(PARSE_DATA, loc, item.data, item.location)
        if not handled:
            message = f"No processor was able to parse location {loc.type} {loc.target}"
            produced.append(ErrorResult(location=loc, error=UnhandledInputError(message)))
        return produced
    
    async def _handle_entity(self, item: EntityResult, output: ReadLocationResult) -> List[ResultItem]:
        loc = item.location
        kind = item.entity.get("kind")
        
        if not self.rules_enforcer.is_allowed(item.entity, loc):
            message = f"Entity of kind {kind} is not allowed from location {loc.target}:{loc.type}"
            self.logger.debug(message)
            return [ErrorResult(location=loc, error=PolicyError(message))]
        
        self.logger.debug(
            f"Got entity at location {loc.type} {loc.target}, {item.entity.get('apiVersion')} {kind}"
        )
        entity, produced = await self._fold_entity(item.entity, loc)
        output.entities.append(ReadLocationEntity(entity=entity, location=loc))
        return produced
    
    async def _handle_error(self, item: ErrorResult, output: ReadLocationResult) -> List[ResultItem]:
        loc = item.location
        self.logger.debug(f"Encountered error at location {loc.type} {loc.target}, {item.error}")
        
        produced = await self._fan_out_error(item.error, loc)
        output.errors.append(ReadLocationError(location=loc, error=item.error))
        return produced
    
    async def _first_match(self, hook: str, loc: LocationSpec, *args: Any):
        """
        Try each capable processor in order until one reports it handled the item.
        
        Returns:
            Tuple of (produced items, whether any processor handled the item)
        """
        produced: List[ResultItem] = []
        emit = make_emit(produced)
        
        for processor in self.processors:
            if not has_capability(processor, hook):
                continue
            try:
                if await call_hook(processor, hook, *args, emit):
                    return produced, True
            except Exception as e:
                produced.append(self._processor_fault(processor, hook, loc, e))
        
        return produced, False
    
    async def _fold_entity(self, entity: Dict[str, Any], loc: LocationSpec):
        """
        Pass the entity through every capable processor in order.
        
        Each processor receives the previous processor's output. A failing
        processor leaves the entity as it was.
        
        Returns:
            Tuple of (final entity, produced items)
        """
        produced: List[ResultItem] = []
        emit = make_emit(produced)
        current = entity
        
        for processor in self.processors:
            if not has_capability(processor, PROCESS_ENTITY):
                continue
            try:
                processed = await call_hook(processor, PROCESS_ENTITY, current, loc, emit)
                if not isinstance(processed, dict):
                    raise TypeError(f"process_entity returned {type(processed).__name__}, expected an entity")
                current = processed
            except Exception as e:
                produced.append(self._processor_fault(processor, PROCESS_ENTITY, loc, e))
        
        return current, produced
    
    async def _fan_out_error(self, error: Exception, loc: LocationSpec) -> List[ResultItem]:
        """Invoke every capable processor for its side effects."""
        produced: List[ResultItem] = []
        emit = make_emit(produced)
        
        for processor in self.processors:
            if not has_capability(processor, HANDLE_ERROR):
                continue
            try:
                await call_hook(processor, HANDLE_ERROR, error, loc, emit)
            except Exception as e:
                produced.append(self._processor_fault(processor, HANDLE_ERROR, loc, e))
        
        return produced
    
    def _processor_fault(self, processor: Any, hook: str, loc: LocationSpec,
                         cause: Exception) -> ErrorResult:
        name = processor_name(processor)
        message = (
            f"Processor {name} threw an error while {_OPERATION_DESCRIPTIONS[hook]} "
            f"{loc.type} {loc.target}, {cause}"
        )
        self.logger.debug(message)
        error = ProcessorError(message, processor=name, operation=hook, location=loc, cause=cause)
        return ErrorResult(location=loc, error=error)
