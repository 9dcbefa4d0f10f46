"""
API routes for the calculators.
"""

from fastapi import APIRouter

from homecalc.api import calculators, events

router = APIRouter()

# Include sub-routers
router.include_router(calculators.router, prefix="/calculators", tags=["calculators"])
router.include_router(events.router, prefix="/events", tags=["events"])
