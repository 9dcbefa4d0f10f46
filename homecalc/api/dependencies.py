"""
Shared FastAPI dependencies.
"""

from fastapi import Depends, Request
from sqlalchemy.orm import Session

from homecalc.calculations import CalculatorRegistry
from homecalc.config import Settings, get_settings
from homecalc.db.database import get_db
from homecalc.services.tracking import CalculationTracker


def get_registry(request: Request) -> CalculatorRegistry:
    """The registry built by ``create_app``."""
    return request.app.state.registry


def get_tracker(
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
) -> CalculationTracker:
    return CalculationTracker(db, enabled=settings.enable_analytics)
