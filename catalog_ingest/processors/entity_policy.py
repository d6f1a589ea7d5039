"""
Processor applying entity policies.

A policy is any object with an ``enforce(entity)`` method returning the
entity to keep, sync or async. Policies reject an entity by raising.
"""
import inspect
import logging
from pathlib import Path
from typing import Dict, Any, Iterable, Optional

from ..common.errors import InputError
from ..common.processor import Emit, LocationProcessor
from ..common.results import LocationSpec
from ..common.schema_validator import ENTITY_ENVELOPE_SCHEMA, load_schema, validate_against_schema

logger = logging.getLogger(__name__)


async def _enforce(policy: Any, entity: Dict[str, Any]) -> Optional[Dict[str, Any]]:
    outcome = policy.enforce(entity)
    if inspect.isawaitable(outcome):
        outcome = await outcome
    return outcome


class SchemaEntityPolicy:
    """Rejects entities that do not validate against a JSON schema."""
    
    def __init__(self, schema: Optional[Dict[str, Any]] = None):
        self.schema = schema if schema is not None else ENTITY_ENVELOPE_SCHEMA
    
    @classmethod
    def from_file(cls, schema_path: Path) -> 'SchemaEntityPolicy':
        return cls(load_schema(schema_path))
    
    def enforce(self, entity: Dict[str, Any]) -> Dict[str, Any]:
        is_valid, error_msg = validate_against_schema(entity, self.schema)
        if not is_valid:
            raise InputError(f"Entity failed schema validation: {error_msg}")
        return entity


class EntityPolicies:
    """Applies several policies in order, each seeing the previous output."""
    
    def __init__(self, policies: Iterable[Any] = ()):
        self.policies = tuple(policies)
    
    async def enforce(self, entity: Dict[str, Any]) -> Dict[str, Any]:
        current = entity
        for policy in self.policies:
            current = await _enforce(policy, current)
            if current is None:
                raise InputError(f"Policy {type(policy).__name__} returned no entity")
        return current


class EntityPolicyProcessor(LocationProcessor):
    def __init__(self, policy: Any):
        self.policy = policy
    
    async def process_entity(self, entity: Dict[str, Any], location: LocationSpec,
                             emit: Emit) -> Dict[str, Any]:
        enforced = await _enforce(self.policy, entity)
        if enforced is None:
            raise InputError("Policy unexpectedly returned no data")
        return enforced
