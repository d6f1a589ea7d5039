"""
Tests for the catalog rules enforcer.
"""
import pytest

from catalog_ingest.common.results import LocationSpec
from catalog_ingest.common.rules import CatalogRule, CatalogRulesEnforcer, LocationMatcher


def entity_of(kind):
    return {"apiVersion": "catalog.io/v1", "kind": kind, "metadata": {"name": "x"}}


FILE = LocationSpec(type="file", target="/catalog.yaml")
URL = LocationSpec(type="url", target="https://example.com/catalog.yaml")


class TestDefaultRules:
    """Test the built-in rule set."""
    
    @pytest.mark.parametrize("kind", ["Component", "API", "Location", "component", "api"])
    def test_default_kinds_allowed_everywhere(self, kind, default_rules):
        """Test that default kinds are allowed from any location type."""
        assert default_rules.is_allowed(entity_of(kind), FILE)
        assert default_rules.is_allowed(entity_of(kind), URL)
    
    def test_other_kinds_rejected(self, default_rules):
        """Test that kinds outside the defaults are rejected."""
        assert not default_rules.is_allowed(entity_of("Group"), FILE)
        assert not default_rules.is_allowed(entity_of("User"), URL)
    
    def test_missing_kind_rejected(self, default_rules):
        """Test that an entity without a kind is never allowed."""
        assert not default_rules.is_allowed({"apiVersion": "catalog.io/v1"}, FILE)
        assert not default_rules.is_allowed({"apiVersion": "catalog.io/v1", "kind": 3}, FILE)


class TestScopedRules:
    """Test rules restricted to location types and targets."""
    
    def test_rule_scoped_to_location_type(self):
        """Test that a typed rule only applies to that type."""
        enforcer = CatalogRulesEnforcer([
            CatalogRule.create(["Group"], [LocationMatcher(type="file")]),
        ])
        
        assert enforcer.is_allowed(entity_of("Group"), FILE)
        assert not enforcer.is_allowed(entity_of("Group"), URL)
    
    def test_rule_scoped_to_exact_target(self):
        """Test that a rule with a target only matches that location."""
        enforcer = CatalogRulesEnforcer([
            CatalogRule.create(["User"], [LocationMatcher(type="file", target="/org.yaml")]),
        ])
        
        assert enforcer.is_allowed(entity_of("User"), LocationSpec("file", "/org.yaml"))
        assert not enforcer.is_allowed(entity_of("User"), FILE)
    
    def test_rules_are_immutable(self, default_rules):
        """Test that the rule set is a tuple of frozen rules."""
        assert isinstance(default_rules.rules, tuple)
        with pytest.raises(AttributeError):
            default_rules.rules[0].allow = frozenset()


class TestRulesFromConfig:
    """Test building rules from configuration."""
    
    def test_no_config_uses_defaults(self):
        """Test that missing config falls back to the default rules."""
        assert CatalogRulesEnforcer.from_config(None).rules == CatalogRulesEnforcer.DEFAULT_RULES
        assert CatalogRulesEnforcer.from_config({}).rules == CatalogRulesEnforcer.DEFAULT_RULES
    
    def test_configured_rules_replace_defaults(self):
        """Test that catalog.rules replaces the default rule set."""
        config = {"catalog": {"rules": [{"allow": ["Group"]}]}}
        enforcer = CatalogRulesEnforcer.from_config(config)
        
        assert enforcer.is_allowed(entity_of("Group"), FILE)
        assert not enforcer.is_allowed(entity_of("Component"), FILE)
    
    def test_configured_rule_with_locations(self):
        """Test that a configured rule can be limited to location types."""
        config = {"catalog": {"rules": [
            {"allow": ["Component"]},
            {"allow": ["Group"], "locations": [{"type": "url"}]},
        ]}}
        enforcer = CatalogRulesEnforcer.from_config(config)
        
        assert enforcer.is_allowed(entity_of("Group"), URL)
        assert not enforcer.is_allowed(entity_of("Group"), FILE)
    
    def test_location_rules_apply_to_that_location(self):
        """Test that rules on a static location only apply to it."""
        config = {"catalog": {"locations": [
            {"type": "file", "target": "/org.yaml", "rules": [{"allow": ["User", "Group"]}]},
        ]}}
        enforcer = CatalogRulesEnforcer.from_config(config)
        
        assert enforcer.is_allowed(entity_of("User"), LocationSpec("file", "/org.yaml"))
        assert not enforcer.is_allowed(entity_of("User"), FILE)
        assert enforcer.is_allowed(entity_of("Component"), FILE)
