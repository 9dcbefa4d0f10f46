"""
SQLAlchemy ORM models for calculator usage tracking.
"""

from datetime import datetime
from sqlalchemy import Column, String, DateTime, JSON, Index
from sqlalchemy.orm import declarative_base
import uuid

Base = declarative_base()


def generate_uuid():
    return str(uuid.uuid4())


class CalculationRecord(Base):
    """Anonymized input and result of one completed calculation."""

    __tablename__ = "calculation_inputs"

    id = Column(String, primary_key=True, default=generate_uuid)
    session_id = Column(String(64), nullable=False, index=True)
    calculator_type = Column(String(50), nullable=False, index=True)
    input_data = Column(JSON, nullable=False)
    calculated_results = Column(JSON, nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False, index=True)


class CalculatorEvent(Base):
    """User interaction event within a calculator session."""

    __tablename__ = "calculator_events"

    id = Column(String, primary_key=True, default=generate_uuid)
    session_id = Column(String(64), nullable=False)
    event_type = Column(String(50), nullable=False)
    event_data = Column(JSON, nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False, index=True)

    __table_args__ = (Index("idx_session_event", "session_id", "event_type"),)
