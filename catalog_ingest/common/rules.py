"""
Rules deciding which entity kinds may be read from which locations.
"""
import logging
from dataclasses import dataclass
from typing import Dict, Any, FrozenSet, Iterable, Optional, Tuple

from .config import catalog_section
from .results import LocationSpec

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LocationMatcher:
    """Matches locations by type, and by exact target when one is given."""
    type: str
    target: Optional[str] = None
    
    def matches(self, location: LocationSpec) -> bool:
        if self.type != location.type:
            return False
        return self.target is None or self.target == location.target


@dataclass(frozen=True)
class CatalogRule:
    """
    Allows a set of entity kinds.
    
    A rule without location matchers applies to every location.
    Kinds are stored lowercased and compared case-insensitively.
    """
    allow: FrozenSet[str]
    locations: Optional[Tuple[LocationMatcher, ...]] = None
    
    @classmethod
    def create(cls, allow: Iterable[str],
               locations: Optional[Iterable[LocationMatcher]] = None) -> 'CatalogRule':
        return cls(
            allow=frozenset(kind.lower() for kind in allow),
            locations=tuple(locations) if locations is not None else None,
        )
    
    def applies_to(self, location: LocationSpec) -> bool:
        if self.locations is None:
            return True
        return any(matcher.matches(location) for matcher in self.locations)
    
    def allows(self, kind: str) -> bool:
        return kind.lower() in self.allow


def _rule_from_config(rule: Dict[str, Any],
                      scope: Optional[LocationSpec] = None) -> CatalogRule:
    if scope is not None:
        matchers = [LocationMatcher(type=scope.type, target=scope.target)]
    elif "locations" in rule:
        matchers = [
            LocationMatcher(type=loc["type"], target=loc.get("target"))
            for loc in rule["locations"]
        ]
    else:
        matchers = None
    return CatalogRule.create(rule["allow"], matchers)


class CatalogRulesEnforcer:
    """
    Admission gate applied to every entity before it is processed.
    
    The rule set is fixed at construction; build a new enforcer to change it.
    """
    
    DEFAULT_RULES: Tuple[CatalogRule, ...] = (
        CatalogRule.create(["Component", "API", "Location"]),
    )
    
    def __init__(self, rules: Iterable[CatalogRule]):
        self._rules = tuple(rules)
    
    @property
    def rules(self) -> Tuple[CatalogRule, ...]:
        return self._rules
    
    @classmethod
    def default(cls) -> 'CatalogRulesEnforcer':
        return cls(cls.DEFAULT_RULES)
    
    @classmethod
    def from_config(cls, config: Optional[Dict[str, Any]]) -> 'CatalogRulesEnforcer':
        """
        Build an enforcer from the ``catalog`` config section.
        
        ``catalog.rules`` replaces the default rules when present. Rules
        attached to an entry of ``catalog.locations`` only apply to that
        exact location.
        """
        catalog = catalog_section(config)
        
        if "rules" in catalog:
            rules = [_rule_from_config(rule) for rule in catalog["rules"]]
        else:
            rules = list(cls.DEFAULT_RULES)
        
        for entry in catalog.get("locations", []):
            scope = LocationSpec(type=entry["type"], target=entry["target"])
            for rule in entry.get("rules", []):
                rules.append(_rule_from_config(rule, scope))
        
        logger.debug(f"Loaded {len(rules)} catalog rules")
        return cls(rules)
    
    def is_allowed(self, entity: Dict[str, Any], location: LocationSpec) -> bool:
        """Check whether an entity of this kind may come from this location."""
        kind = entity.get("kind") if isinstance(entity, dict) else None
        if not isinstance(kind, str) or not kind:
            return False
        
        for rule in self._rules:
            if rule.applies_to(location) and rule.allows(kind):
                return True
        return False
