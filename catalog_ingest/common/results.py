"""
Work items passed between processors, and the final result of a read.

Every item carries the location it originated from. Items are created
through the helper functions at the bottom of this module.
"""
from dataclasses import dataclass, field
from typing import Dict, Any, List, Union

from .errors import InputError, NotFoundError, GeneralError


@dataclass(frozen=True)
class LocationSpec:
    """A reference to something that can be ingested, e.g. a file or a URL."""
    type: str
    target: str
    
    def __post_init__(self):
        for name in ("type", "target"):
            value = getattr(self, name)
            if not isinstance(value, str):
                raise TypeError(f"LocationSpec {name} must be a string, got {type(value).__name__}")
    
    def __str__(self) -> str:
        return f"{self.type}:{self.target}"


def _require_location(item: Any) -> None:
    if not isinstance(item.location, LocationSpec):
        raise TypeError(
            f"{type(item).__name__} requires a LocationSpec, got {type(item.location).__name__}"
        )


@dataclass(frozen=True)
class LocationResult:
    """Read this location."""
    location: LocationSpec
    optional: bool = False
    
    def __post_init__(self):
        _require_location(self)


@dataclass(frozen=True)
class DataResult:
    """Raw bytes read from a location, waiting to be parsed."""
    location: LocationSpec
    data: bytes
    
    def __post_init__(self):
        _require_location(self)
        if not isinstance(self.data, (bytes, bytearray)):
            raise TypeError(f"DataResult requires bytes, got {type(self.data).__name__}")


@dataclass(frozen=True)
class EntityResult:
    """A candidate entity produced from data."""
    location: LocationSpec
    entity: Dict[str, Any]
    
    def __post_init__(self):
        _require_location(self)
        if not isinstance(self.entity, dict):
            raise TypeError(f"EntityResult requires a dict entity, got {type(self.entity).__name__}")


@dataclass(frozen=True)
class ErrorResult:
    """A failure tied to a location."""
    location: LocationSpec
    error: Exception
    
    def __post_init__(self):
        _require_location(self)
        if not isinstance(self.error, BaseException):
            raise TypeError(f"ErrorResult requires an exception, got {type(self.error).__name__}")


ResultItem = Union[LocationResult, DataResult, EntityResult, ErrorResult]
RESULT_TYPES = (LocationResult, DataResult, EntityResult, ErrorResult)


@dataclass(frozen=True)
class ReadLocationEntity:
    entity: Dict[str, Any]
    location: LocationSpec


@dataclass(frozen=True)
class ReadLocationError:
    location: LocationSpec
    error: Exception


@dataclass
class ReadLocationResult:
    """Output of reading one location: accepted entities and recorded errors."""
    entities: List[ReadLocationEntity] = field(default_factory=list)
    errors: List[ReadLocationError] = field(default_factory=list)


def location(spec: LocationSpec, optional: bool = False) -> LocationResult:
    return LocationResult(location=spec, optional=optional)


def data(spec: LocationSpec, payload: bytes) -> DataResult:
    return DataResult(location=spec, data=payload)


def entity(spec: LocationSpec, new_entity: Dict[str, Any]) -> EntityResult:
    return EntityResult(location=spec, entity=new_entity)


def input_error(spec: LocationSpec, message: str) -> ErrorResult:
    return ErrorResult(location=spec, error=InputError(message))


def not_found_error(spec: LocationSpec, message: str) -> ErrorResult:
    return ErrorResult(location=spec, error=NotFoundError(message))


def general_error(spec: LocationSpec, message: str) -> ErrorResult:
    return ErrorResult(location=spec, error=GeneralError(message))
