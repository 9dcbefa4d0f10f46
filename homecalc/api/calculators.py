"""
Calculator API endpoints.

Form submissions are passed to the registry as-is; sanitization and
validation happen in the engine.
"""

import logging
from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, Field
from typing import Any, Dict, List, Optional

from homecalc.api.dependencies import get_registry, get_tracker
from homecalc.calculations import (
    CalculationError,
    CalculatorRegistry,
    UnknownCalculatorType,
    ValidationError,
)
from homecalc.calculations.formatting import format_results
from homecalc.services.tracking import CalculationTracker

logger = logging.getLogger(__name__)

router = APIRouter()


class CalculatorSummary(BaseModel):
    """Calculator entry for menus."""

    type: str
    name: str
    description: str


class CalculationRequest(BaseModel):
    """Decoded calculator form submission."""

    session_id: Optional[str] = Field(None, min_length=1, max_length=64)
    input_data: Dict[str, Any] = {}


class CalculationResponse(BaseModel):
    """Successful calculation."""

    success: bool = True
    results: Dict[str, Any]
    formatted_results: List[Dict[str, Any]]


@router.get("/", response_model=List[CalculatorSummary])
async def list_calculators(registry: CalculatorRegistry = Depends(get_registry)):
    """List registered calculators in menu order."""
    return [
        CalculatorSummary(
            type=calc_type,
            name=registry.get_calculator(calc_type).name,
            description=registry.get_calculator(calc_type).description,
        )
        for calc_type in registry.list_calculator_types()
    ]


@router.get("/{calculator_type}")
async def get_calculator_definition(
    calculator_type: str,
    registry: CalculatorRegistry = Depends(get_registry),
):
    """Get a calculator's field definitions."""
    try:
        return registry.get_calculator(calculator_type).get_definition()
    except UnknownCalculatorType as e:
        raise HTTPException(status_code=404, detail=e.message)


@router.post("/{calculator_type}/calculate", response_model=CalculationResponse)
def calculate(
    calculator_type: str,
    request: CalculationRequest,
    registry: CalculatorRegistry = Depends(get_registry),
    tracker: CalculationTracker = Depends(get_tracker),
):
    """Run a calculator and record the result for the session."""
    outcome = registry.process_calculation(calculator_type, request.input_data)

    if not outcome.success:
        error = outcome.error
        if isinstance(error, UnknownCalculatorType):
            raise HTTPException(status_code=404, detail=error.message)
        if isinstance(error, ValidationError):
            raise HTTPException(
                status_code=422,
                detail={"message": error.message, "errors": error.errors},
            )
        if isinstance(error, CalculationError):
            raise HTTPException(status_code=500, detail=error.message)
        raise HTTPException(status_code=400, detail=error.message)

    if request.session_id:
        tracker.track_calculation(
            request.session_id, calculator_type, outcome.clean_input, outcome.results
        )

    return CalculationResponse(
        results=outcome.results,
        formatted_results=format_results(calculator_type, outcome.results),
    )
