"""Oracle simulation API routes.

Endpoints:
- POST /oracle/simulate - Run one scenario against the baseline
- GET /oracle/dashboard - Headline financials and work counts
"""
import logging

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from oracle.auth.dependencies import require_admin
from oracle.database import get_db
from oracle.models import User
from oracle.simulation import schemas
from oracle.simulation.engine import SimulationCoordinator
from oracle.simulation.errors import InvalidScenario
from oracle.simulation.records import RecordStore, SQLRecordStore

logger = logging.getLogger(__name__)

router = APIRouter()


def get_record_store(db: AsyncSession = Depends(get_db)) -> RecordStore:
    """Record store bound to the request's database session."""
    return SQLRecordStore(db)


@router.post("/simulate", response_model=schemas.SimulateResponse)
async def simulate_scenario(
    request: schemas.SimulateRequest,
    store: RecordStore = Depends(get_record_store),
    current_user: User = Depends(require_admin),
):
    """
    Run a 12-month simulation of one scenario.

    Returns baseline and scenario trajectories, monthly risk scores,
    per-worker burnout forecasts and the snapshot they started from.
    Out-of-range scenarios are rejected with 400.
    """
    try:
        scenario = request.scenario.to_scenario()
        outcome = await SimulationCoordinator(store).simulate(scenario)
        return schemas.SimulateResponse.from_outcome(outcome)
    except InvalidScenario as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        logger.exception("Simulation failed")
        raise HTTPException(status_code=500, detail=f"Error running simulation: {str(e)}")


@router.get("/dashboard", response_model=schemas.DashboardResponse)
async def get_dashboard(
    store: RecordStore = Depends(get_record_store),
    current_user: User = Depends(require_admin),
):
    """Current cash, retainer revenue, burn and project/task counts by status."""
    try:
        summary = await SimulationCoordinator(store).dashboard()
        return schemas.DashboardResponse.from_summary(summary)
    except Exception as e:
        logger.exception("Dashboard failed")
        raise HTTPException(status_code=500, detail=f"Error loading dashboard: {str(e)}")
