"""
Black market ledger — goods listed for deferred sale.

Listings accumulate additively per resource until the caller drains the
ledger at the start of a new cycle. The ledger is owned by the World and
passed explicitly to listing operations.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass
class BlackMarketEntry:
    """Cumulative amount and payout price for one resource."""
    resource: str
    amount: int = 0
    price: int = 0

    def to_dict(self) -> dict[str, Any]:
        return {"resource": self.resource, "amount": self.amount, "price": self.price}


class BlackMarketLedger:
    """Resource -> accumulated {amount, price} awaiting settlement."""

    def __init__(self) -> None:
        self._entries: dict[str, BlackMarketEntry] = {}

    def add(self, resource: str, amount: int, price: int) -> BlackMarketEntry:
        """Accumulate a listing into the entry for ``resource``."""
        old = self._entries.get(resource)
        if old is None:
            entry = BlackMarketEntry(resource=resource, amount=amount, price=price)
        else:
            entry = BlackMarketEntry(
                resource=resource,
                amount=old.amount + amount,
                price=old.price + price,
            )
        self._entries[resource] = entry
        return entry

    def get(self, resource: str) -> BlackMarketEntry | None:
        return self._entries.get(resource)

    def entries(self) -> list[BlackMarketEntry]:
        return list(self._entries.values())

    def total_amount(self) -> int:
        return sum(e.amount for e in self._entries.values())

    def total_price(self) -> int:
        return sum(e.price for e in self._entries.values())

    def drain(self) -> list[BlackMarketEntry]:
        """Return every entry and empty the ledger."""
        drained = self.entries()
        self._entries = {}
        return drained

    def to_dict(self) -> dict[str, dict[str, Any]]:
        return {k: e.to_dict() for k, e in self._entries.items()}

    def __contains__(self, resource: object) -> bool:
        return resource in self._entries

    def __len__(self) -> int:
        return len(self._entries)
