"""
Calculator interaction event endpoints.
"""

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field
from typing import Any, Dict

from homecalc.api.dependencies import get_tracker
from homecalc.services.tracking import CalculationTracker

router = APIRouter()


class EventInput(BaseModel):
    """Event reported by the calculator front end (form_start, cta_click, ...)."""

    session_id: str = Field(..., min_length=1, max_length=64)
    event_type: str = Field(..., min_length=1, max_length=50)
    event_data: Dict[str, Any] = {}


@router.post("/")
def track_event(event: EventInput, tracker: CalculationTracker = Depends(get_tracker)):
    """Record an interaction event."""
    tracker.track_event(event.session_id, event.event_type, event.event_data)
    return {"success": True}
