"""
Trade API router — buy, sell, black-market listing, and the trade log.

Trade failures are ordinary results (HTTP 200 with ``success: false``);
only unknown sessions or acting settlements are HTTP errors.
"""

from __future__ import annotations

from fastapi import APIRouter, HTTPException, Request

from caravan.api.schemas import BlackMarketRequest, TradeRequest, TradeResponse
from caravan.trade.operations import (
    TradeResult,
    buy_from_settlement,
    list_black_market,
    sell_to_settlement,
)

router = APIRouter()


def _get_session(request: Request, session_id: str):
    sm = request.app.state.session_manager
    try:
        return sm.get_session(session_id)
    except KeyError:
        raise HTTPException(status_code=404, detail=f"Session '{session_id}' not found")


def _get_actor(session, actor_id: str):
    try:
        return session.world.get_settlement(actor_id)
    except KeyError:
        raise HTTPException(status_code=404, detail=f"Settlement '{actor_id}' not found")


def _respond(session, result: TradeResult) -> dict:
    return {
        **result.to_dict(),
        "notifications": [m.to_dict() for m in session.messages.drain()],
    }


@router.post("/{session_id}/buy", response_model=TradeResponse)
def buy(session_id: str, req: TradeRequest, request: Request):
    """Buy goods from another settlement's exports."""
    session = _get_session(request, session_id)
    with session.lock:
        actor = _get_actor(session, req.actor_id)
        result = buy_from_settlement(
            session.world, actor, req.counterpart, req.resource, req.amount,
        )
        return _respond(session, result)


@router.post("/{session_id}/sell", response_model=TradeResponse)
def sell(session_id: str, req: TradeRequest, request: Request):
    """Sell goods into another settlement's imports."""
    session = _get_session(request, session_id)
    with session.lock:
        actor = _get_actor(session, req.actor_id)
        result = sell_to_settlement(
            session.world, actor, req.counterpart, req.resource, req.amount,
        )
        return _respond(session, result)


@router.post("/{session_id}/black-market", response_model=TradeResponse)
def black_market_listing(session_id: str, req: BlackMarketRequest, request: Request):
    """List goods on the black market for payout next cycle."""
    session = _get_session(request, session_id)
    with session.lock:
        actor = _get_actor(session, req.actor_id)
        result = list_black_market(session.world, actor, req.resource, req.amount)
        return _respond(session, result)


@router.get("/{session_id}/black-market")
def get_black_market(session_id: str, request: Request):
    session = _get_session(request, session_id)
    ledger = session.world.black_market
    with session.lock:
        return {
            "entries": ledger.to_dict(),
            "total_amount": ledger.total_amount(),
            "total_price": ledger.total_price(),
        }


@router.get("/{session_id}/log")
def get_trade_log(session_id: str, request: Request, limit: int = 100):
    """Most recent trades, newest last."""
    session = _get_session(request, session_id)
    log = session.world.trade_log
    with session.lock:
        return {"trades": log[-limit:] if limit > 0 else [], "total": len(log)}
