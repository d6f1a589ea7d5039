import pytest

from catalog_ingest.common.results import LocationSpec
from catalog_ingest.common.rules import CatalogRulesEnforcer


@pytest.fixture
def file_location():
    """The location most tests read."""
    return LocationSpec(type="file", target="/catalog.yaml")


@pytest.fixture
def default_rules():
    return CatalogRulesEnforcer.default()
