"""SQLAlchemy ORM models for the current calculation slot and saved calculations"""

import uuid
from datetime import datetime, timezone
from sqlalchemy import Column, String, DateTime, Integer, Text, JSON
from sqlalchemy.orm import declarative_base

Base = declarative_base()


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class CurrentCalculation(Base):
    """Single-row slot holding the calculation being edited"""

    __tablename__ = "current_calculation"

    id = Column(Integer, primary_key=True)
    storage_version = Column(Text, nullable=False)
    snapshot = Column(JSON, nullable=False)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow)


class SavedCalculation(Base):
    """Named calculation kept for later comparison"""

    __tablename__ = "saved_calculation"

    # Insertion order; newest calculation has the highest seq
    seq = Column(Integer, primary_key=True, autoincrement=True)
    id = Column(String(36), nullable=False, unique=True, default=lambda: str(uuid.uuid4()))
    name = Column(Text, nullable=False, unique=True)
    storage_version = Column(Text, nullable=False)
    snapshot = Column(JSON, nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow)
