from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from household_hub.database import get_db
from household_hub.dependencies import get_current_context
from household_hub.models.context import CurrentContext
from household_hub.services.budget_service import BudgetService
from household_hub.schemas.budget_schemas import (
    CategoryGroupCreate,
    CategoryGroupResponse,
    CategoryCreate,
    CategoryResponse,
    BudgetTransactionCreate,
    BudgetTransactionResponse,
)

router = APIRouter()


@router.get("/category-groups", response_model=list[CategoryGroupResponse])
async def list_category_groups(
    context: CurrentContext = Depends(get_current_context),
    db: Session = Depends(get_db),
):
    """Category groups of the active household with their categories"""
    service = BudgetService(db, context)
    return service.list_groups()


@router.post(
    "/category-groups",
    response_model=CategoryGroupResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_category_group(
    data: CategoryGroupCreate,
    context: CurrentContext = Depends(get_current_context),
    db: Session = Depends(get_db),
):
    service = BudgetService(db, context)
    return service.create_group(data)


@router.delete("/category-groups/{group_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_category_group(
    group_id: str,
    context: CurrentContext = Depends(get_current_context),
    db: Session = Depends(get_db),
):
    """
    Delete a category group.

    - Its categories are deleted
    - Their transactions are kept as uncategorized
    """
    service = BudgetService(db, context)
    service.delete_group(group_id)


@router.post("/categories", response_model=CategoryResponse, status_code=status.HTTP_201_CREATED)
async def create_category(
    data: CategoryCreate,
    context: CurrentContext = Depends(get_current_context),
    db: Session = Depends(get_db),
):
    service = BudgetService(db, context)
    return service.create_category(data)


@router.delete("/categories/{category_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_category(
    category_id: str,
    context: CurrentContext = Depends(get_current_context),
    db: Session = Depends(get_db),
):
    """Delete a category; its transactions become uncategorized"""
    service = BudgetService(db, context)
    service.delete_category(category_id)


@router.get("/transactions", response_model=list[BudgetTransactionResponse])
async def list_transactions(
    category_id: str | None = Query(None, description="Filter by category"),
    uncategorized: bool = Query(False, description="Only transactions without a category"),
    context: CurrentContext = Depends(get_current_context),
    db: Session = Depends(get_db),
):
    """Transactions of the active household, newest first"""
    service = BudgetService(db, context)
    return service.list_transactions(category_id=category_id, uncategorized=uncategorized)


@router.post(
    "/transactions",
    response_model=BudgetTransactionResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_transaction(
    data: BudgetTransactionCreate,
    context: CurrentContext = Depends(get_current_context),
    db: Session = Depends(get_db),
):
    service = BudgetService(db, context)
    return service.create_transaction(data)
