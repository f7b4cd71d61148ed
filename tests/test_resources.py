"""Tests for the resource catalog."""

import pytest

from caravan.core.resources import (
    DEFAULT_RESOURCES,
    Resource,
    ResourceCatalog,
    UnknownResourceError,
)


class TestResource:
    def test_price_must_be_positive(self):
        with pytest.raises(ValueError):
            Resource(key="dust", name="Dust", price=0)


class TestResourceCatalog:
    def test_from_dict_accepts_both_forms(self):
        catalog = ResourceCatalog.from_dict({
            "wood": {"name": "Timber", "price": 5},
            "iron": 10,
        })
        assert catalog.display_name("wood") == "Timber"
        assert catalog.display_name("iron") == "Iron"
        assert catalog.base_price("iron") == 10

    def test_fractional_prices_kept(self):
        catalog = ResourceCatalog.from_dict({"amber": 2.5, "pearl": {"price": 0.5}})
        assert catalog.base_price("amber") == 2.5
        assert catalog.base_price("pearl") == 0.5

    def test_duplicate_key_rejected(self):
        with pytest.raises(ValueError):
            ResourceCatalog([
                Resource(key="wood", name="Wood", price=5),
                Resource(key="wood", name="Wood", price=6),
            ])

    def test_unknown_resource(self):
        catalog = ResourceCatalog.from_dict({"wood": 5})
        assert not catalog.exists("gold")
        assert "gold" not in catalog
        with pytest.raises(UnknownResourceError):
            catalog.get("gold")
        with pytest.raises(KeyError):
            catalog.base_price("gold")
        assert catalog.display_name("gold") == "gold"

    def test_default_catalog(self):
        catalog = ResourceCatalog.default()
        assert len(catalog) == len(DEFAULT_RESOURCES)
        assert catalog.base_price("wood") == 5
        assert catalog.base_price("iron") == 10
        assert all(r.price > 0 for r in catalog)

    def test_to_dict_round_trip(self):
        catalog = ResourceCatalog.default()
        restored = ResourceCatalog.from_dict(catalog.to_dict())
        assert restored.to_dict() == catalog.to_dict()
        assert restored.keys == catalog.keys
