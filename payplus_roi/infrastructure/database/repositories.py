"""Data access layer for persisted calculations"""

import copy
from typing import Any, Dict, List, Optional
from sqlalchemy.orm import Session
from payplus_roi.config import settings
from payplus_roi.infrastructure.database.models import CurrentCalculation, SavedCalculation, utcnow

CURRENT_SLOT_ID = 1


class CalculationRepository:
    """Repository for the current calculation slot and the capped list of saved calculations"""

    def __init__(self, db: Session, max_saved: int | None = None, storage_version: str | None = None):
        self.db = db
        self.max_saved = max_saved or settings.max_saved_calculations
        self.storage_version = storage_version or settings.storage_version

    def save_current(self, snapshot: Dict[str, Any]) -> CurrentCalculation:
        """Overwrite the current calculation slot"""
        current = self.db.get(CurrentCalculation, CURRENT_SLOT_ID)
        if current is None:
            current = CurrentCalculation(id=CURRENT_SLOT_ID)
            self.db.add(current)

        current.storage_version = self.storage_version
        current.snapshot = copy.deepcopy(snapshot)
        current.updated_at = utcnow()
        self.db.flush()
        return current

    def get_current(self) -> Optional[CurrentCalculation]:
        return self.db.get(CurrentCalculation, CURRENT_SLOT_ID)

    def save_named(self, name: Optional[str], snapshot: Dict[str, Any]) -> SavedCalculation:
        """
        Save a calculation under a name.

        - An existing name is replaced in place (same id, created_at and position)
        - A new name goes to the front of the list
        - The list is capped; the oldest calculations beyond the cap are dropped
        - A missing name becomes "Calculation N"
        """
        if not name:
            name = f"Calculation {self.db.query(SavedCalculation).count() + 1}"

        existing = self.db.query(SavedCalculation).filter(SavedCalculation.name == name).one_or_none()
        if existing is not None:
            existing.snapshot = copy.deepcopy(snapshot)
            existing.storage_version = self.storage_version
            existing.updated_at = utcnow()
            self.db.flush()
            return existing

        calculation = SavedCalculation(
            name=name,
            storage_version=self.storage_version,
            snapshot=copy.deepcopy(snapshot),
        )
        self.db.add(calculation)
        self.db.flush()

        overflow = (
            self.db.query(SavedCalculation)
            .order_by(SavedCalculation.seq.desc())
            .offset(self.max_saved)
            .all()
        )
        for stale in overflow:
            self.db.delete(stale)
        self.db.flush()

        return calculation

    def list_saved(self) -> List[SavedCalculation]:
        """Saved calculations, newest first"""
        return self.db.query(SavedCalculation).order_by(SavedCalculation.seq.desc()).all()

    def get_saved(self, calculation_id: str) -> Optional[SavedCalculation]:
        return self.db.query(SavedCalculation).filter(SavedCalculation.id == calculation_id).one_or_none()

    def delete_saved(self, calculation_id: str) -> bool:
        calculation = self.get_saved(calculation_id)
        if calculation is None:
            return False
        self.db.delete(calculation)
        self.db.flush()
        return True

    def clear_saved(self) -> int:
        """Remove every saved calculation, returning how many were removed"""
        removed = self.db.query(SavedCalculation).delete()
        self.db.flush()
        return removed
