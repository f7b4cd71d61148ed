"""
Settlement dataclass for the Caravan Sandbox.

A settlement holds coins, a resource stock bounded by storage capacity,
the buildings that unlock capabilities, reputation accumulators, and its
current trade ledger. All mutation goes through the methods below so the
non-negative invariants hold.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from caravan.trade.ledger import TradeLedger


@dataclass
class Settlement:
    """A game-world actor that owns coins, goods, and a trade ledger."""

    # === Identity ===
    id: str
    name: str
    player: bool = False
    religion: str | None = None

    # === Economy ===
    coins: int = 0
    resources: dict[str, int] = field(default_factory=dict)
    storage_capacity: int = 1000
    buildings: set[str] = field(default_factory=set)

    # === Reputation ===
    influence: dict[str, int] = field(default_factory=dict)  # settlement_id -> amount
    prestige: int = 0
    fame: int = 0

    # === Trade ===
    trades: TradeLedger | None = None

    def __post_init__(self) -> None:
        if self.coins < 0:
            raise ValueError(f"Settlement '{self.id}' cannot start with negative coins")
        for key, amount in self.resources.items():
            if amount < 0:
                raise ValueError(
                    f"Settlement '{self.id}' cannot start with negative {key}"
                )

    # ------------------------------------------------------------------
    # Capabilities
    # ------------------------------------------------------------------
    def is_player(self) -> bool:
        return self.player

    def religion_id(self) -> str | None:
        return self.religion

    def is_building_built(self, building: str) -> bool:
        return building in self.buildings

    def can_trade(self, trade_building: str = "tradingpost") -> bool:
        """Trading requires the trade building to be built."""
        return self.is_building_built(trade_building)

    def shares_religion_with(self, other: Settlement) -> bool:
        return self.religion is not None and self.religion == other.religion

    # ------------------------------------------------------------------
    # Coins
    # ------------------------------------------------------------------
    def has_coins(self, amount: int) -> bool:
        return self.coins >= amount

    def inc_coins(self, amount: int) -> int:
        self.coins += amount
        return self.coins

    def dec_coins(self, amount: int) -> bool:
        """Deduct coins; returns False (and changes nothing) if short."""
        if not self.has_coins(amount):
            return False
        self.coins -= amount
        return True

    # ------------------------------------------------------------------
    # Storage
    # ------------------------------------------------------------------
    def resource_stock(self) -> dict[str, int]:
        return dict(self.resources)

    def storage_used(self) -> int:
        return sum(self.resources.values())

    def storage_free(self) -> int:
        return max(0, self.storage_capacity - self.storage_used())

    def has_storage_space_for(self, amount: int) -> bool:
        return self.storage_used() + amount <= self.storage_capacity

    def has_resource(self, resource: str, amount: int) -> bool:
        return self.resources.get(resource, 0) >= amount

    def add_to_storage(self, resource: str, amount: int) -> None:
        self.resources[resource] = self.resources.get(resource, 0) + amount

    def remove_resource(self, resource: str, amount: int) -> bool:
        """Remove stock; returns False (and changes nothing) if short."""
        if not self.has_resource(resource, amount):
            return False
        self.resources[resource] = self.resources.get(resource, 0) - amount
        return True

    # ------------------------------------------------------------------
    # Reputation
    # ------------------------------------------------------------------
    def raise_influence(self, settlement_id: str, amount: int) -> int:
        self.influence[settlement_id] = self.influence.get(settlement_id, 0) + amount
        return self.influence[settlement_id]

    def get_influence(self, settlement_id: str) -> int:
        return self.influence.get(settlement_id, 0)

    def raise_prestige(self, amount: int) -> int:
        self.prestige += amount
        return self.prestige

    def raise_fame(self, amount: int) -> int:
        self.fame += amount
        return self.fame

    # ------------------------------------------------------------------
    # Trade ledger
    # ------------------------------------------------------------------
    def get_trades(self) -> TradeLedger | None:
        return self.trades

    def set_trades(self, value: TradeLedger | None) -> Settlement:
        self.trades = value
        return self

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "player": self.player,
            "religion": self.religion,
            "coins": self.coins,
            "resources": dict(self.resources),
            "storage_capacity": self.storage_capacity,
            "storage_used": self.storage_used(),
            "buildings": sorted(self.buildings),
            "influence": dict(self.influence),
            "prestige": self.prestige,
            "fame": self.fame,
            "trades": self.trades.to_dict() if self.trades is not None else None,
        }


@dataclass(frozen=True)
class SettlementRef:
    """Reference to a settlement by id, by position, or by handle.

    Build with ``by_id`` / ``by_index`` / ``direct``, or ``coerce`` a loose
    value once at the API boundary.
    """
    kind: str  # "id" | "index" | "direct"
    value: Any

    @classmethod
    def by_id(cls, settlement_id: str) -> SettlementRef:
        return cls(kind="id", value=settlement_id)

    @classmethod
    def by_index(cls, index: int) -> SettlementRef:
        return cls(kind="index", value=index)

    @classmethod
    def direct(cls, settlement: Settlement) -> SettlementRef:
        return cls(kind="direct", value=settlement)

    @classmethod
    def coerce(cls, value: SettlementRef | Settlement | str | int) -> SettlementRef:
        if isinstance(value, SettlementRef):
            return value
        if isinstance(value, Settlement):
            return cls.direct(value)
        # bool is an int subclass; it is never a valid index
        if isinstance(value, int) and not isinstance(value, bool):
            return cls.by_index(value)
        if isinstance(value, str):
            return cls.by_id(value)
        raise TypeError(f"Cannot reference a settlement with {type(value).__name__}")

    def describe(self) -> str:
        if self.kind == "direct":
            return self.value.name
        return str(self.value)
