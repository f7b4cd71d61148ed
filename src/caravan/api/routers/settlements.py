"""Settlement state and trade ledger endpoints."""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, HTTPException, Request

router = APIRouter()


def _get_session(request: Request, session_id: str):
    mgr = request.app.state.session_manager
    try:
        return mgr.get_session(session_id)
    except KeyError:
        raise HTTPException(status_code=404, detail=f"Session '{session_id}' not found")


def _get_settlement(world, settlement_id: str):
    try:
        return world.get_settlement(settlement_id)
    except KeyError:
        raise HTTPException(
            status_code=404, detail=f"Settlement '{settlement_id}' not found",
        )


@router.get("/{session_id}")
def list_settlements(session_id: str, request: Request) -> dict[str, Any]:
    """Coins, storage and reputation of every settlement."""
    session = _get_session(request, session_id)
    world = session.world
    with session.lock:
        return {
            "settlements": [
                {
                    "id": s.id,
                    "name": s.name,
                    "player": s.player,
                    "coins": s.coins,
                    "storage_used": s.storage_used(),
                    "storage_capacity": s.storage_capacity,
                    "prestige": s.prestige,
                    "fame": s.fame,
                    "can_trade": s.can_trade(world.config.trade_building),
                }
                for s in world.settlements.values()
            ],
        }


@router.get("/{session_id}/{settlement_id}")
def get_settlement_detail(
    session_id: str, settlement_id: str, request: Request,
) -> dict[str, Any]:
    session = _get_session(request, session_id)
    with session.lock:
        return _get_settlement(session.world, settlement_id).to_dict()


@router.get("/{session_id}/{settlement_id}/ledger")
def get_settlement_ledger(
    session_id: str, settlement_id: str, request: Request,
) -> dict[str, Any]:
    """Current imports/exports with unit prices from the buyer's side."""
    session = _get_session(request, session_id)
    world = session.world
    with session.lock:
        trades = _get_settlement(world, settlement_id).get_trades()
        if trades is None:
            return {"trades": False, "imports": {}, "exports": {}}
        return {
            "trades": True,
            "imports": dict(trades.imports or {}),
            "exports": dict(trades.exports or {}),
            "prices": {
                key: world.catalog.base_price(key)
                for key in set(trades.imports or {}) | set(trades.exports or {})
                if world.catalog.exists(key)
            },
        }
