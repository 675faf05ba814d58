"""POST /v1/calculate, /v1/validate, /v1/report - run the ROI pipeline on a snapshot"""

import time
import logging
from dataclasses import asdict
from fastapi import APIRouter, Depends, Request

from payplus_roi.api.v1.schemas import ReportResponse, ResultsResponse, SnapshotRequest, ValidationResponse
from payplus_roi.api.dependencies import get_engine, get_request_id, load_snapshot
from payplus_roi.domain.engine import ROIEngine
from payplus_roi.domain.report import build_report
from payplus_roi.infrastructure.observability.metrics import record_calculation, validation_failure_counter
from payplus_roi.infrastructure.observability.logging import log_calculation

router = APIRouter()


@router.post("/calculate", response_model=ResultsResponse)
def calculate(
    request_body: SnapshotRequest,
    request: Request,
    engine: ROIEngine = Depends(get_engine),
):
    """
    Compute costs, savings and the annual benefit for a snapshot.

    Flow:
    1. Import the posted snapshot (422 if malformed)
    2. Validate; invalid snapshots are still computed but logged and counted
    3. Run breakdown -> provider costs -> savings
    """
    start_time = time.time()
    request_id = get_request_id(request)

    load_snapshot(engine, request_body.snapshot, request_id)

    validation = engine.validate()
    if not validation.valid:
        validation_failure_counter.inc()
        logging.warning(
            "Calculating an invalid snapshot",
            extra={"request_id": request_id, "errors": validation.errors},
        )

    results = engine.compute_results()

    duration_ms = (time.time() - start_time) * 1000
    record_calculation(results.currency, results.costs.savings_percentage)
    log_calculation(
        request_id,
        results.currency,
        results.total_annual_benefit,
        results.costs.savings_percentage,
        duration_ms,
    )

    return ResultsResponse.model_validate(asdict(results))


@router.post("/validate", response_model=ValidationResponse)
def validate(
    request_body: SnapshotRequest,
    request: Request,
    engine: ROIEngine = Depends(get_engine),
):
    """Range and sum checks; the outcome is always a 200 with a list of errors"""
    load_snapshot(engine, request_body.snapshot, get_request_id(request))

    validation = engine.validate()
    if not validation.valid:
        validation_failure_counter.inc()

    return ValidationResponse(valid=validation.valid, errors=validation.errors)


@router.post("/report", response_model=ReportResponse)
def report(
    request_body: SnapshotRequest,
    request: Request,
    engine: ROIEngine = Depends(get_engine),
):
    """Savings tables with value-driver notes, ready for the report exporter"""
    load_snapshot(engine, request_body.snapshot, get_request_id(request))

    savings_report = build_report(engine.compute_results())
    return ReportResponse.model_validate(asdict(savings_report))
