"""
Processor capability interface.

A processor implements any subset of four hooks. The engine only calls a
hook when the processor defines it:

    read_location(location, optional, emit) -> bool
        Return True when the location was handled. Emit data, entities,
        further locations or errors.
    parse_data(data, location, emit) -> bool
        Return True when the data was handled.
    process_entity(entity, location, emit) -> dict
        Return the (possibly transformed) entity.
    handle_error(error, location, emit) -> None
        Side effects only; the return value is ignored.

Hooks may be coroutine functions or plain functions.
"""
import inspect
from typing import Any, Callable

from .results import ResultItem, RESULT_TYPES

Emit = Callable[[ResultItem], None]

READ_LOCATION = "read_location"
PARSE_DATA = "parse_data"
PROCESS_ENTITY = "process_entity"
HANDLE_ERROR = "handle_error"

HOOKS = (READ_LOCATION, PARSE_DATA, PROCESS_ENTITY, HANDLE_ERROR)


class LocationProcessor:
    """Optional base class for processors. Defines no hooks on its own."""
    
    @property
    def name(self) -> str:
        return type(self).__name__


def processor_name(processor: Any) -> str:
    """Name used for a processor in log and error messages."""
    name = getattr(processor, "name", None)
    if isinstance(name, str) and name:
        return name
    return type(processor).__name__


def has_capability(processor: Any, hook: str) -> bool:
    """Check whether a processor implements the given hook."""
    if hook not in HOOKS:
        raise ValueError(f"Unknown processor hook: {hook}")
    return callable(getattr(processor, hook, None))


async def call_hook(processor: Any, hook: str, *args: Any) -> Any:
    """Invoke a hook, awaiting the result when the hook is asynchronous."""
    result = getattr(processor, hook)(*args)
    if inspect.isawaitable(result):
        result = await result
    return result


def make_emit(items: list) -> Emit:
    """
    Build an emit callable that appends result items to ``items``.
    
    Anything that is not a result item is refused with a TypeError, which
    surfaces as a fault of the processor that emitted it.
    """
    def emit(item: ResultItem) -> None:
        if not isinstance(item, RESULT_TYPES):
            raise TypeError(f"Expected a result item, got {type(item).__name__}")
        items.append(item)
    
    return emit
