"""Tests for attribute descriptors, the registry and attribute lookups."""

import pytest

from roadviz.domain.attributes import (
    CAPACITY,
    INFTY,
    LAT_LNG,
    LENGTH,
    NUM_LANES,
    ROAD_GEOMETRY,
    VERTEX_ID,
    Attribute,
    AttributeLookup,
    AttributeRegistry,
    AttributeScope,
    default_registry,
)
from roadviz.domain.geometry import LatLng


class TestAttributeRegistry:
    """Test suite for AttributeRegistry."""

    def test_default_registry_holds_standard_attributes(self):
        registry = default_registry()

        assert "length" in registry
        assert registry.get("num_lanes") is NUM_LANES
        assert VERTEX_ID in registry.vertex_attributes()
        assert CAPACITY in registry.edge_attributes()
        assert LAT_LNG not in registry.edge_attributes()

    def test_register_extends_registry(self):
        registry = default_registry()
        toll = Attribute("toll", AttributeScope.EDGE, float, lambda: 0.0)

        registry.register(toll)

        assert registry.get("toll") is toll
        assert toll in registry.edge_attributes()

    def test_register_duplicate_name_raises(self):
        registry = AttributeRegistry()
        registry.register(LENGTH)

        with pytest.raises(ValueError):
            registry.register(Attribute("length", AttributeScope.EDGE, int, lambda: 0))

    def test_get_unknown_attribute_raises(self):
        with pytest.raises(KeyError):
            AttributeRegistry().get("nope")


class TestAttributeLookup:
    """Test suite for AttributeLookup."""

    def test_unprovided_attribute_returns_default(self):
        lookup = AttributeLookup()

        assert lookup.value(NUM_LANES) == 1
        assert lookup.value(LENGTH) == INFTY
        assert lookup.value(VERTEX_ID) == -1
        assert lookup.value(LAT_LNG) == LatLng(0.0, 0.0)
        assert not lookup.provides(LENGTH)

    def test_provided_attribute_uses_accessor(self):
        current = {"length": 42}
        lookup = AttributeLookup()
        lookup.provide(LENGTH, lambda: current["length"])

        assert lookup.provides(LENGTH)
        assert lookup.value(LENGTH) == 42
        current["length"] = 7
        assert lookup.value(LENGTH) == 7

    def test_mutable_defaults_are_not_shared(self):
        lookup = AttributeLookup()

        first = lookup.value(ROAD_GEOMETRY)
        first.append(LatLng(1.0, 2.0))

        assert lookup.value(ROAD_GEOMETRY) == []
