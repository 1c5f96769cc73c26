from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from household_hub.database import get_db
from household_hub.dependencies import get_current_context
from household_hub.models.context import CurrentContext
from household_hub.services.pension_service import PensionAccountService
from household_hub.schemas.resource_schemas import (
    PensionAccountCreate,
    PensionAccountUpdate,
    PensionAccountResponse,
    DepositCreate,
    DepositUpdate,
    DepositResponse,
    OwnerResponse,
    OwnersUpdate,
)

router = APIRouter()


@router.get("/accounts", response_model=list[PensionAccountResponse])
async def list_accounts(
    context: CurrentContext = Depends(get_current_context),
    db: Session = Depends(get_db),
):
    """List pension and hishtalmut accounts visible to the caller"""
    service = PensionAccountService(db)
    return service.list_resources(context)


@router.post("/accounts", response_model=PensionAccountResponse, status_code=status.HTTP_201_CREATED)
async def create_account(
    data: PensionAccountCreate,
    context: CurrentContext = Depends(get_current_context),
    db: Session = Depends(get_db),
):
    """
    Create a pension account.

    - Fees are percentages between 0 and 100
    - Owners default to the caller's profile
    """
    service = PensionAccountService(db)
    return service.create_resource(data, context)


@router.get("/accounts/{account_id}", response_model=PensionAccountResponse)
async def get_account(
    account_id: str,
    context: CurrentContext = Depends(get_current_context),
    db: Session = Depends(get_db),
):
    service = PensionAccountService(db)
    return service.get_resource(account_id, context)


@router.patch("/accounts/{account_id}", response_model=PensionAccountResponse)
async def update_account(
    account_id: str,
    data: PensionAccountUpdate,
    context: CurrentContext = Depends(get_current_context),
    db: Session = Depends(get_db),
):
    service = PensionAccountService(db)
    return service.update_resource(account_id, data, context)


@router.delete("/accounts/{account_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_account(
    account_id: str,
    context: CurrentContext = Depends(get_current_context),
    db: Session = Depends(get_db),
):
    """Delete a pension account with its deposits and owner rows"""
    service = PensionAccountService(db)
    service.delete_resource(account_id, context)


@router.get("/accounts/{account_id}/owners", response_model=list[OwnerResponse])
async def get_account_owners(
    account_id: str,
    context: CurrentContext = Depends(get_current_context),
    db: Session = Depends(get_db),
):
    service = PensionAccountService(db)
    return service.get_owners(account_id, context)


@router.put("/accounts/{account_id}/owners", response_model=list[OwnerResponse])
async def replace_account_owners(
    account_id: str,
    data: OwnersUpdate,
    context: CurrentContext = Depends(get_current_context),
    db: Session = Depends(get_db),
):
    service = PensionAccountService(db)
    return service.replace_owners(account_id, data.profile_ids, context)


@router.get("/accounts/{account_id}/deposits", response_model=list[DepositResponse])
async def list_deposits(
    account_id: str,
    context: CurrentContext = Depends(get_current_context),
    db: Session = Depends(get_db),
):
    """Deposits of a pension account, newest salary month first"""
    service = PensionAccountService(db)
    return service.list_deposits(account_id, context)


@router.post(
    "/accounts/{account_id}/deposits",
    response_model=DepositResponse,
    status_code=status.HTTP_201_CREATED,
)
async def add_deposit(
    account_id: str,
    data: DepositCreate,
    context: CurrentContext = Depends(get_current_context),
    db: Session = Depends(get_db),
):
    service = PensionAccountService(db)
    return service.add_deposit(account_id, data, context)


@router.get("/deposits/{deposit_id}", response_model=DepositResponse)
async def get_deposit(
    deposit_id: str,
    context: CurrentContext = Depends(get_current_context),
    db: Session = Depends(get_db),
):
    service = PensionAccountService(db)
    return service.get_deposit(deposit_id, context)


@router.put("/deposits/{deposit_id}", response_model=DepositResponse)
async def update_deposit(
    deposit_id: str,
    data: DepositUpdate,
    context: CurrentContext = Depends(get_current_context),
    db: Session = Depends(get_db),
):
    """Partial update of a deposit; access follows its pension account"""
    service = PensionAccountService(db)
    return service.update_deposit(deposit_id, data, context)


@router.delete("/deposits/{deposit_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_deposit(
    deposit_id: str,
    context: CurrentContext = Depends(get_current_context),
    db: Session = Depends(get_db),
):
    service = PensionAccountService(db)
    service.delete_deposit(deposit_id, context)
