"""/v1/calculations - current calculation slot and named saved calculations"""

from fastapi import APIRouter, Depends, HTTPException, Request, Response
from sqlalchemy.orm import Session

from payplus_roi.api.v1.schemas import (
    CalculationSummary,
    ClearCalculationsResponse,
    CurrentCalculationResponse,
    SaveCalculationRequest,
    SavedCalculationList,
    SavedCalculationResponse,
    SnapshotRequest,
)
from payplus_roi.api.dependencies import get_engine, get_request_id, load_snapshot
from payplus_roi.domain.engine import ROIEngine
from payplus_roi.infrastructure.database.models import SavedCalculation
from payplus_roi.infrastructure.database.session import get_db
from payplus_roi.infrastructure.database.repositories import CalculationRepository

router = APIRouter()


def _saved_response(calculation: SavedCalculation) -> SavedCalculationResponse:
    return SavedCalculationResponse(
        id=calculation.id,
        name=calculation.name,
        created_at=calculation.created_at,
        updated_at=calculation.updated_at,
        storage_version=calculation.storage_version,
        snapshot=calculation.snapshot,
    )


@router.get("/calculations/current", response_model=CurrentCalculationResponse)
def get_current_calculation(db: Session = Depends(get_db)):
    """Return the calculation being edited, or an empty slot"""
    current = CalculationRepository(db).get_current()
    if current is None:
        return CurrentCalculationResponse()

    return CurrentCalculationResponse(
        storage_version=current.storage_version,
        snapshot=current.snapshot,
        updated_at=current.updated_at,
    )


@router.put("/calculations/current", response_model=CurrentCalculationResponse)
def save_current_calculation(
    request_body: SnapshotRequest,
    request: Request,
    db: Session = Depends(get_db),
    engine: ROIEngine = Depends(get_engine),
):
    """Autosave target; the snapshot is checked before it is stored"""
    load_snapshot(engine, request_body.snapshot, get_request_id(request))

    current = CalculationRepository(db).save_current(engine.export_snapshot())
    db.commit()

    return CurrentCalculationResponse(
        storage_version=current.storage_version,
        snapshot=current.snapshot,
        updated_at=current.updated_at,
    )


@router.get("/calculations", response_model=SavedCalculationList)
def list_calculations(db: Session = Depends(get_db)):
    """Saved calculations, newest first"""
    calculations = CalculationRepository(db).list_saved()

    return SavedCalculationList(
        calculations=[
            CalculationSummary(id=c.id, name=c.name, created_at=c.created_at, updated_at=c.updated_at)
            for c in calculations
        ]
    )


@router.post("/calculations", response_model=SavedCalculationResponse, status_code=201)
def save_calculation(
    request_body: SaveCalculationRequest,
    request: Request,
    db: Session = Depends(get_db),
    engine: ROIEngine = Depends(get_engine),
):
    """
    Save a named calculation.

    Saving under an existing name replaces that calculation; only the most
    recent calculations are kept.
    """
    load_snapshot(engine, request_body.snapshot, get_request_id(request))

    calculation = CalculationRepository(db).save_named(request_body.name, engine.export_snapshot())
    db.commit()

    return _saved_response(calculation)


@router.delete("/calculations", response_model=ClearCalculationsResponse)
def clear_calculations(db: Session = Depends(get_db)):
    """Remove every saved calculation; the current slot is kept"""
    removed = CalculationRepository(db).clear_saved()
    db.commit()

    return ClearCalculationsResponse(removed=removed)


@router.get("/calculations/{calculation_id}", response_model=SavedCalculationResponse)
def get_calculation(calculation_id: str, db: Session = Depends(get_db)):
    calculation = CalculationRepository(db).get_saved(calculation_id)
    if calculation is None:
        raise HTTPException(status_code=404, detail="Calculation not found")

    return _saved_response(calculation)


@router.delete("/calculations/{calculation_id}", status_code=204)
def delete_calculation(calculation_id: str, db: Session = Depends(get_db)):
    if not CalculationRepository(db).delete_saved(calculation_id):
        raise HTTPException(status_code=404, detail="Calculation not found")

    db.commit()
    return Response(status_code=204)
