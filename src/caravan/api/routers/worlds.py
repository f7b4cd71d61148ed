"""World session management endpoints."""

from __future__ import annotations

from fastapi import APIRouter, HTTPException, Request

from caravan.api.schemas import (
    CreateWorldRequest,
    StepRequest,
    WorldResponse,
    WorldSummary,
)
from caravan.experiment.presets import list_presets

router = APIRouter()


def _world_response(session) -> dict:
    with session.lock:
        return {
            **session.summary(),
            "config": session.world.config.to_dict(),
            "metrics": session.world.get_metrics(),
        }


def _get_session(request: Request, session_id: str):
    mgr = request.app.state.session_manager
    try:
        return mgr.get_session(session_id)
    except KeyError:
        raise HTTPException(status_code=404, detail=f"Session '{session_id}' not found")


@router.get("/presets")
def get_presets():
    return {"presets": list_presets()}


@router.post("", response_model=WorldResponse)
def create_world(req: CreateWorldRequest, request: Request):
    mgr = request.app.state.session_manager
    try:
        session = mgr.create_session(
            preset=req.preset, config=req.config, name=req.name, seed=req.seed,
        )
    except KeyError as e:
        raise HTTPException(status_code=404, detail=str(e).strip("'\""))
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return _world_response(session)


@router.get("", response_model=list[WorldSummary])
def list_worlds(request: Request):
    mgr = request.app.state.session_manager
    summaries = []
    for session in mgr.list_sessions():
        with session.lock:
            summaries.append(session.summary())
    return summaries


@router.get("/{session_id}", response_model=WorldResponse)
def get_world(session_id: str, request: Request):
    return _world_response(_get_session(request, session_id))


@router.delete("/{session_id}")
def delete_world(session_id: str, request: Request):
    mgr = request.app.state.session_manager
    try:
        mgr.delete_session(session_id)
    except KeyError:
        raise HTTPException(status_code=404, detail=f"Session '{session_id}' not found")
    return {"deleted": True}


@router.post("/{session_id}/step")
def step_world(session_id: str, req: StepRequest, request: Request):
    """Close the current trade cycle(s) and regenerate every ledger."""
    session = _get_session(request, session_id)
    metrics = request.app.state.session_manager.step(session.id, req.n)
    with session.lock:
        return {"cycle": session.world.cycle, "metrics": metrics}


@router.get("/{session_id}/metrics")
def get_metrics_history(session_id: str, request: Request):
    session = _get_session(request, session_id)
    with session.lock:
        return {
            "cycle": session.world.cycle,
            "history": [m.to_dict() for m in session.engine.collector.metrics_history],
        }
