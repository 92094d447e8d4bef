"""
API routes for climbing conditions and dew point.
"""

from fastapi import APIRouter, HTTPException, Query

from cragcast.engine.conditions import compute_conditions_from_input
from cragcast.engine.dew_point import calculate_dew_point, calculate_dew_point_spread
from cragcast.engine.utils import round_to
from cragcast.models.conditions import ConditionsInput, ConditionsResult, DewPointOutput

router = APIRouter(prefix="/api/v1", tags=["conditions"])


@router.post("/conditions", response_model=ConditionsResult)
async def conditions(data: ConditionsInput) -> ConditionsResult:
    """
    Compute climbing conditions for a forecast and rock type.

    Returns the current verdict plus hourly friction, optimal windows,
    precipitation context and time context when the inputs allow.
    """
    try:
        return compute_conditions_from_input(data)
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Calculation error: {str(e)}")


@router.get("/dew-point", response_model=DewPointOutput)
def dew_point(
    temperature_c: float = Query(..., description="Air temperature (°C)"),
    relative_humidity: float = Query(..., gt=0, le=100, description="Relative humidity (%)"),
):
    """Dew point and dew point spread for one reading."""
    try:
        return DewPointOutput(
            temp_c=temperature_c,
            humidity=relative_humidity,
            dew_point_c=round_to(calculate_dew_point(temperature_c, relative_humidity), 2),
            dew_point_spread=calculate_dew_point_spread(temperature_c, relative_humidity),
        )
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))
