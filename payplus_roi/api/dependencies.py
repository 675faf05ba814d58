"""Dependency injection for FastAPI endpoints"""

import logging
from typing import Any, Dict
from fastapi import HTTPException, Request
from payplus_roi.config import settings
from payplus_roi.domain.engine import ROIEngine
from payplus_roi.domain.exceptions import MalformedSnapshot


def get_request_id(request: Request) -> str:
    """Extract request ID from request state"""
    return getattr(request.state, "request_id", "unknown")


def get_engine() -> ROIEngine:
    """Provide a fresh engine per request, configured with the current rate table"""
    return ROIEngine(exchange_rates=settings.exchange_rates, currency_symbols=settings.currency_symbols)


def load_snapshot(engine: ROIEngine, snapshot: Dict[str, Any], request_id: str) -> None:
    """Import a posted snapshot into the engine, answering 422 when it is malformed"""
    try:
        engine.import_snapshot(snapshot)
    except MalformedSnapshot as e:
        logging.warning(f"Malformed snapshot: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=422, detail=str(e))
