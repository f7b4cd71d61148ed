"""
Resource catalog: read-only reference data for tradable goods.

Each resource has a key, a display name, and a positive base unit price.
Lookups of unknown keys raise ``UnknownResourceError``.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterator, Mapping


class UnknownResourceError(KeyError):
    """Raised when a resource key is not in the catalog."""


@dataclass(frozen=True)
class Resource:
    """A tradable good with a fixed base unit price."""
    key: str
    name: str
    price: float | int

    def __post_init__(self) -> None:
        if self.price <= 0:
            raise ValueError(
                f"Resource '{self.key}' must have a positive price, got {self.price}"
            )


# Base catalog shipped with the sandbox. Coins are the currency, not a good.
DEFAULT_RESOURCES: dict[str, dict[str, Any]] = {
    "bread": {"name": "Bread", "price": 40},
    "brass": {"name": "Brass", "price": 40},
    "bronze": {"name": "Bronze", "price": 50},
    "cattle": {"name": "Cattle", "price": 20},
    "clay": {"name": "Clay", "price": 8},
    "coal": {"name": "Coal", "price": 12},
    "copper": {"name": "Copper", "price": 16},
    "fish": {"name": "Fish", "price": 8},
    "flour": {"name": "Flour", "price": 18},
    "furs": {"name": "Furs", "price": 28},
    "gold": {"name": "Gold", "price": 230},
    "iron": {"name": "Iron", "price": 10},
    "leather": {"name": "Leather", "price": 38},
    "meat": {"name": "Meat", "price": 15},
    "milk": {"name": "Milk", "price": 14},
    "salt": {"name": "Salt", "price": 25},
    "silk": {"name": "Silk", "price": 100},
    "spices": {"name": "Spices", "price": 275},
    "stones": {"name": "Stones", "price": 6},
    "weapons": {"name": "Weapons", "price": 220},
    "wheat": {"name": "Wheat", "price": 6},
    "wine": {"name": "Wine", "price": 85},
    "wood": {"name": "Wood", "price": 5},
}


class ResourceCatalog:
    """
    Immutable lookup table of resources keyed by identifier.

    Accepts either ``{key: price}`` or ``{key: {"name": ..., "price": ...}}``
    entries when built with ``from_dict``.
    """

    def __init__(self, resources: list[Resource]) -> None:
        self._resources: dict[str, Resource] = {}
        for resource in resources:
            if resource.key in self._resources:
                raise ValueError(f"Duplicate resource key '{resource.key}'")
            self._resources[resource.key] = resource

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> ResourceCatalog:
        resources = []
        for key, entry in data.items():
            if isinstance(entry, Mapping):
                name = entry.get("name", key.capitalize())
                price = entry["price"]
            else:
                name = key.capitalize()
                price = entry
            resources.append(Resource(key=key, name=name, price=price))
        return cls(resources)

    @classmethod
    def default(cls) -> ResourceCatalog:
        return cls.from_dict(DEFAULT_RESOURCES)

    def exists(self, key: str) -> bool:
        return key in self._resources

    def get(self, key: str) -> Resource:
        try:
            return self._resources[key]
        except KeyError:
            raise UnknownResourceError(key) from None

    def base_price(self, key: str) -> float | int:
        return self.get(key).price

    def display_name(self, key: str) -> str:
        """Human-readable name, falling back to the key for unknown goods."""
        resource = self._resources.get(key)
        return resource.name if resource is not None else key

    def to_dict(self) -> dict[str, dict[str, Any]]:
        return {
            r.key: {"name": r.name, "price": r.price}
            for r in self._resources.values()
        }

    @property
    def keys(self) -> list[str]:
        return list(self._resources.keys())

    def __contains__(self, key: object) -> bool:
        return key in self._resources

    def __iter__(self) -> Iterator[Resource]:
        return iter(self._resources.values())

    def __len__(self) -> int:
        return len(self._resources)
