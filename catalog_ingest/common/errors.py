"""
Error types recorded while reading locations.
"""
from typing import Optional


class CatalogIngestError(Exception):
    """Base class for all ingestion errors."""


class InputError(CatalogIngestError):
    """The input at a location was malformed or could not be used."""


class UnhandledInputError(InputError):
    """No processor in the chain was able to read or parse an input."""


class NotFoundError(CatalogIngestError):
    """A location did not exist."""


class GeneralError(CatalogIngestError):
    """Any other failure tied to a location."""


class ProcessorError(GeneralError):
    """
    A processor raised while handling one of its hooks.
    
    Args:
        message: Human readable description
        processor: Name of the failing processor
        operation: Hook that was running (e.g. ``read_location``)
        location: Location being handled
        cause: The exception raised by the processor
    """
    
    def __init__(self, message: str, processor: str, operation: str,
                 location=None, cause: Optional[BaseException] = None):
        super().__init__(message)
        self.processor = processor
        self.operation = operation
        self.location = location
        self.cause = cause
        if cause is not None:
            self.__cause__ = cause


class PolicyError(CatalogIngestError):
    """An entity kind is not allowed from the location it was read from."""


class RecursionLimitError(CatalogIngestError):
    """Reading a location kept producing work past the round limit."""


class ConfigError(CatalogIngestError):
    """The configuration file is missing or invalid."""
