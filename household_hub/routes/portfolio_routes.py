from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from household_hub.database import get_db
from household_hub.dependencies import get_current_context
from household_hub.models.context import CurrentContext
from household_hub.services.portfolio_service import StockAccountService
from household_hub.schemas.resource_schemas import (
    StockAccountCreate,
    StockAccountUpdate,
    StockAccountResponse,
    HoldingCreate,
    HoldingUpdate,
    HoldingResponse,
    OwnerResponse,
    OwnersUpdate,
)

router = APIRouter()


@router.get("/accounts", response_model=list[StockAccountResponse])
async def list_accounts(
    context: CurrentContext = Depends(get_current_context),
    db: Session = Depends(get_db),
):
    """
    List stock accounts visible to the caller.

    - Accounts owned by any profile of the active household
    - Accounts without owners that the caller created
    """
    service = StockAccountService(db)
    return service.list_resources(context)


@router.post("/accounts", response_model=StockAccountResponse, status_code=status.HTTP_201_CREATED)
async def create_account(
    data: StockAccountCreate,
    context: CurrentContext = Depends(get_current_context),
    db: Session = Depends(get_db),
):
    """
    Create a stock account.

    - Owners default to the caller's profile
    - All owner_ids must be profiles of the active household
    """
    service = StockAccountService(db)
    return service.create_resource(data, context)


@router.get("/accounts/{account_id}", response_model=StockAccountResponse)
async def get_account(
    account_id: str,
    context: CurrentContext = Depends(get_current_context),
    db: Session = Depends(get_db),
):
    service = StockAccountService(db)
    return service.get_resource(account_id, context)


@router.patch("/accounts/{account_id}", response_model=StockAccountResponse)
async def update_account(
    account_id: str,
    data: StockAccountUpdate,
    context: CurrentContext = Depends(get_current_context),
    db: Session = Depends(get_db),
):
    service = StockAccountService(db)
    return service.update_resource(account_id, data, context)


@router.delete("/accounts/{account_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_account(
    account_id: str,
    context: CurrentContext = Depends(get_current_context),
    db: Session = Depends(get_db),
):
    """Delete a stock account with its holdings and owner rows"""
    service = StockAccountService(db)
    service.delete_resource(account_id, context)


@router.get("/accounts/{account_id}/owners", response_model=list[OwnerResponse])
async def get_account_owners(
    account_id: str,
    context: CurrentContext = Depends(get_current_context),
    db: Session = Depends(get_db),
):
    """
    Get the owner profiles of a stock account.

    - 403 if owners exist and none is in the caller's household
    """
    service = StockAccountService(db)
    return service.get_owners(account_id, context)


@router.put("/accounts/{account_id}/owners", response_model=list[OwnerResponse])
async def replace_account_owners(
    account_id: str,
    data: OwnersUpdate,
    context: CurrentContext = Depends(get_current_context),
    db: Session = Depends(get_db),
):
    """
    Replace all owners of a stock account.

    - 403 if current owners exist and none is in the caller's household
    - 400 if any profile is outside the household; owners stay unchanged
    """
    service = StockAccountService(db)
    return service.replace_owners(account_id, data.profile_ids, context)


@router.get("/accounts/{account_id}/holdings", response_model=list[HoldingResponse])
async def list_holdings(
    account_id: str,
    context: CurrentContext = Depends(get_current_context),
    db: Session = Depends(get_db),
):
    service = StockAccountService(db)
    return service.list_holdings(account_id, context)


@router.post(
    "/accounts/{account_id}/holdings",
    response_model=HoldingResponse,
    status_code=status.HTTP_201_CREATED,
)
async def add_holding(
    account_id: str,
    data: HoldingCreate,
    context: CurrentContext = Depends(get_current_context),
    db: Session = Depends(get_db),
):
    """
    Add a holding to a stock account.

    - Symbol is stored upper case
    - One holding per symbol per account
    """
    service = StockAccountService(db)
    return service.add_holding(account_id, data, context)


@router.get("/holdings/{holding_id}", response_model=HoldingResponse)
async def get_holding(
    holding_id: str,
    context: CurrentContext = Depends(get_current_context),
    db: Session = Depends(get_db),
):
    service = StockAccountService(db)
    return service.get_holding(holding_id, context)


@router.put("/holdings/{holding_id}", response_model=HoldingResponse)
async def update_holding(
    holding_id: str,
    data: HoldingUpdate,
    context: CurrentContext = Depends(get_current_context),
    db: Session = Depends(get_db),
):
    """
    Update a holding's quantity and/or average cost basis.

    - Access follows the holding's account
    """
    service = StockAccountService(db)
    return service.update_holding(holding_id, data, context)


@router.delete("/holdings/{holding_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_holding(
    holding_id: str,
    context: CurrentContext = Depends(get_current_context),
    db: Session = Depends(get_db),
):
    service = StockAccountService(db)
    service.delete_holding(holding_id, context)
