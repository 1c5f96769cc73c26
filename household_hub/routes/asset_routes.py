from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from household_hub.database import get_db
from household_hub.dependencies import get_current_context
from household_hub.models.context import CurrentContext
from household_hub.services.asset_service import MiscAssetService
from household_hub.schemas.resource_schemas import (
    MiscAssetCreate,
    MiscAssetUpdate,
    MiscAssetResponse,
    OwnerResponse,
    OwnersUpdate,
)

router = APIRouter()


@router.get("/items", response_model=list[MiscAssetResponse])
async def list_assets(
    context: CurrentContext = Depends(get_current_context),
    db: Session = Depends(get_db),
):
    """List assets and liabilities visible to the caller"""
    service = MiscAssetService(db)
    return service.list_resources(context)


@router.post("/items", response_model=MiscAssetResponse, status_code=status.HTTP_201_CREATED)
async def create_asset(
    data: MiscAssetCreate,
    context: CurrentContext = Depends(get_current_context),
    db: Session = Depends(get_db),
):
    """
    Create an asset or liability.

    - Loans and mortgages are stored with a negative value
    - Loans and mortgages require monthly_payment
    - monthly_deposit is kept for child savings only
    """
    service = MiscAssetService(db)
    return service.create_resource(data, context)


@router.get("/items/{asset_id}", response_model=MiscAssetResponse)
async def get_asset(
    asset_id: str,
    context: CurrentContext = Depends(get_current_context),
    db: Session = Depends(get_db),
):
    service = MiscAssetService(db)
    return service.get_resource(asset_id, context)


@router.patch("/items/{asset_id}", response_model=MiscAssetResponse)
async def update_asset(
    asset_id: str,
    data: MiscAssetUpdate,
    context: CurrentContext = Depends(get_current_context),
    db: Session = Depends(get_db),
):
    service = MiscAssetService(db)
    return service.update_resource(asset_id, data, context)


@router.delete("/items/{asset_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_asset(
    asset_id: str,
    context: CurrentContext = Depends(get_current_context),
    db: Session = Depends(get_db),
):
    service = MiscAssetService(db)
    service.delete_resource(asset_id, context)


@router.get("/items/{asset_id}/owners", response_model=list[OwnerResponse])
async def get_asset_owners(
    asset_id: str,
    context: CurrentContext = Depends(get_current_context),
    db: Session = Depends(get_db),
):
    service = MiscAssetService(db)
    return service.get_owners(asset_id, context)


@router.put("/items/{asset_id}/owners", response_model=list[OwnerResponse])
async def replace_asset_owners(
    asset_id: str,
    data: OwnersUpdate,
    context: CurrentContext = Depends(get_current_context),
    db: Session = Depends(get_db),
):
    service = MiscAssetService(db)
    return service.replace_owners(asset_id, data.profile_ids, context)
