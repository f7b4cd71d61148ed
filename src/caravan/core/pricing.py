"""
Pricing engine — pure integer price computations.

Discounts are per-unit amounts derived from a percentage of the base price
and always rounded up, so identical inputs give identical integer prices.
"""

from __future__ import annotations

import math

from caravan.core.resources import Resource


def discount_for(resource: Resource, rate: int) -> int:
    """Per-unit discount for a percentage ``rate`` of the base price."""
    return math.ceil(resource.price * rate / 100)


def gross_price(amount: int, resource: Resource) -> int:
    """Plain price of ``amount`` units with no adjustment."""
    return round(amount * resource.price)


def price_with_markup(amount: int, resource: Resource, discount: int) -> int:
    """Total when ``discount`` is added to every unit."""
    return round(amount * (resource.price + discount))


def price_with_markdown(amount: int, resource: Resource, discount: int) -> int:
    """Total when ``discount`` is subtracted from every unit (floored at 0)."""
    return max(0, round(amount * (resource.price - discount)))


def unit_price_with_markup(resource: Resource, discount: int) -> int:
    return math.ceil(resource.price + discount)


def unit_price_with_markdown(resource: Resource, discount: int) -> int:
    return max(0, math.ceil(resource.price - discount))
