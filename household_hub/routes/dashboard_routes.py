from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from household_hub.database import get_db
from household_hub.dependencies import get_current_context
from household_hub.models.context import CurrentContext
from household_hub.services.net_worth_service import NetWorthService
from household_hub.schemas.net_worth_schemas import DashboardResponse, SnapshotResponse

router = APIRouter()


@router.get("", response_model=DashboardResponse)
async def get_dashboard(
    context: CurrentContext = Depends(get_current_context),
    db: Session = Depends(get_db),
):
    """
    Net worth of the resources visible to the caller.

    - Portfolio valued at the latest recorded price per symbol
    - Liabilities are subtracted from the assets total
    """
    service = NetWorthService(db)
    return service.summarize(context)


@router.post("/snapshots", response_model=SnapshotResponse, status_code=status.HTTP_201_CREATED)
async def create_snapshot(
    context: CurrentContext = Depends(get_current_context),
    db: Session = Depends(get_db),
):
    """Record today's net worth; a second call on the same day overwrites it"""
    service = NetWorthService(db)
    return service.create_snapshot(context)


@router.get("/history", response_model=list[SnapshotResponse])
async def get_history(
    context: CurrentContext = Depends(get_current_context),
    db: Session = Depends(get_db),
):
    """The caller's latest 24 snapshots, oldest first"""
    service = NetWorthService(db)
    return service.get_history(context)
