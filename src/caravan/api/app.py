"""
FastAPI application factory for the Caravan Sandbox API.
"""

import os
from pathlib import Path

from dotenv import load_dotenv
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from caravan.api.sessions import SessionManager
from caravan.api.routers import settlements, trade, worlds
from caravan.core.config import TradeConfig

# Load .env from the project root, then the CWD
_project_root = Path(__file__).resolve().parents[3]  # src/caravan/api/app.py → project root
load_dotenv(_project_root / ".env")
load_dotenv(Path.cwd() / ".env")


def _load_default_config() -> TradeConfig | None:
    """Read the TradeConfig JSON named by CARAVAN_CONFIG_PATH, if set."""
    path = os.environ.get("CARAVAN_CONFIG_PATH")
    if not path:
        return None
    return TradeConfig.from_json(Path(path).read_text(encoding="utf-8"))


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    application = FastAPI(
        title="Caravan Sandbox API",
        description="REST API for the Caravan Sandbox trade economy",
        version="0.3.0",
    )

    application.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    application.state.session_manager = SessionManager(
        default_config=_load_default_config(),
    )

    application.include_router(worlds.router, prefix="/api/worlds", tags=["worlds"])
    application.include_router(settlements.router, prefix="/api/settlements", tags=["settlements"])
    application.include_router(trade.router, prefix="/api/trade", tags=["trade"])

    @application.get("/api/health")
    def health_check():
        return {"status": "ok"}

    return application


app = create_app()
