"""
Catalog ingestion: reads locations into validated catalog entities.
"""
from .common.location_reader import LocationReader, MAX_DEPTH
from .common.results import (
    LocationSpec,
    ReadLocationEntity,
    ReadLocationError,
    ReadLocationResult,
)
from .common.rules import CatalogRule, CatalogRulesEnforcer

__all__ = [
    "LocationReader",
    "MAX_DEPTH",
    "LocationSpec",
    "ReadLocationEntity",
    "ReadLocationError",
    "ReadLocationResult",
    "CatalogRule",
    "CatalogRulesEnforcer",
]
