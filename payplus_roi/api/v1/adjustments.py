"""Snapshot edits - field updates, slider redistribution and currency changes"""

import logging
from fastapi import APIRouter, Depends, HTTPException, Request

from payplus_roi.api.v1.schemas import (
    CurrencyRequest,
    FieldUpdateRequest,
    FxTierAdjustRequest,
    SnapshotResponse,
    SplitAdjustRequest,
)
from payplus_roi.api.dependencies import get_engine, get_request_id, load_snapshot
from payplus_roi.domain.engine import ROIEngine
from payplus_roi.domain.exceptions import UnknownCurrency, UnknownField, UnknownProvider
from payplus_roi.infrastructure.observability.metrics import currency_change_counter, fx_tier_adjustment_counter

router = APIRouter()


@router.post("/fields", response_model=SnapshotResponse)
def update_field(
    request_body: FieldUpdateRequest,
    request: Request,
    engine: ROIEngine = Depends(get_engine),
):
    """
    Set one field by its dotted path.

    With `provider` the path addresses that provider's fee schedule
    (legacy names such as `localRail` are accepted); otherwise customer info.
    """
    request_id = get_request_id(request)
    load_snapshot(engine, request_body.snapshot, request_id)

    try:
        if request_body.provider is not None:
            engine.set_fee(request_body.provider, request_body.path, request_body.value)
        else:
            engine.update_field(request_body.path, request_body.value)
    except (UnknownField, UnknownProvider) as e:
        logging.warning(f"Rejected field update: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=422, detail=str(e))

    return SnapshotResponse(snapshot=engine.export_snapshot())


@router.post("/fx-tiers/adjust", response_model=SnapshotResponse)
def adjust_fx_tier(
    request_body: FxTierAdjustRequest,
    request: Request,
    engine: ROIEngine = Depends(get_engine),
):
    """Move one FX tier and re-normalize the other two so the tiers sum to 100"""
    load_snapshot(engine, request_body.snapshot, get_request_id(request))

    engine.adjust_fx_tier(request_body.tier, request_body.percent)
    fx_tier_adjustment_counter.labels(tier=str(request_body.tier)).inc()

    return SnapshotResponse(snapshot=engine.export_snapshot())


@router.post("/splits", response_model=SnapshotResponse)
def adjust_split(
    request_body: SplitAdjustRequest,
    request: Request,
    engine: ROIEngine = Depends(get_engine),
):
    """Set local (type) or rail (method) percentage; the other side takes the rest"""
    load_snapshot(engine, request_body.snapshot, get_request_id(request))

    if request_body.split == "type":
        engine.set_local_percent(request_body.percent)
    else:
        engine.set_rail_percent(request_body.percent)

    return SnapshotResponse(snapshot=engine.export_snapshot())


@router.post("/currency", response_model=SnapshotResponse)
def change_currency(
    request_body: CurrencyRequest,
    request: Request,
    engine: ROIEngine = Depends(get_engine),
):
    """Convert payment value and flat fees into another currency"""
    request_id = get_request_id(request)
    load_snapshot(engine, request_body.snapshot, request_id)

    from_currency = engine.snapshot.customer_info.currency
    target = request_body.currency.upper()
    try:
        engine.set_currency(target)
    except UnknownCurrency as e:
        logging.warning(f"Rejected currency change: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=422, detail=str(e))

    if from_currency != target:
        currency_change_counter.labels(from_currency=from_currency, to_currency=target).inc()

    return SnapshotResponse(snapshot=engine.export_snapshot())
