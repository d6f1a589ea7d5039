"""
Processors making up the standard processor set.
"""
from typing import Dict, Any, List, Optional, Sequence

from .annotate_location import AnnotateLocationEntityProcessor
from .entity_policy import EntityPolicies, EntityPolicyProcessor, SchemaEntityPolicy
from .location_ref import LocationRefProcessor
from .static_location import StaticLocationProcessor, BOOTSTRAP_TYPE
from .yaml_processor import YamlProcessor

__all__ = [
    "AnnotateLocationEntityProcessor",
    "BOOTSTRAP_TYPE",
    "EntityPolicies",
    "EntityPolicyProcessor",
    "LocationRefProcessor",
    "SchemaEntityPolicy",
    "StaticLocationProcessor",
    "YamlProcessor",
    "standard_processors",
]


def standard_processors(config: Optional[Dict[str, Any]] = None, readers: Sequence[Any] = (),
                        entity_policy: Any = None) -> List[Any]:
    """
    Build the standard processor chain.
    
    Readers for concrete location types are supplied by the caller and are
    tried after the static bootstrap locations.
    
    Args:
        config: Loaded configuration, or None
        readers: Processors implementing ``read_location`` for real sources
        entity_policy: Policy for every entity; defaults to the envelope schema
    """
    if entity_policy is None:
        entity_policy = SchemaEntityPolicy()
    
    return [
        StaticLocationProcessor.from_config(config),
        *readers,
        YamlProcessor(),
        EntityPolicyProcessor(entity_policy),
        LocationRefProcessor(),
        AnnotateLocationEntityProcessor(),
    ]
