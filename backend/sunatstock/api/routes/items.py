"""Medical items: CRUD, restock, low-stock alerts and stock history."""
from typing import List, Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from sunatstock.api.deps import get_db, get_current_user
from sunatstock.core.audit import AuditLog
from sunatstock.core.exceptions import BusinessError
from sunatstock.models.user import User
from sunatstock.schemas.medical_item import (
    ItemCategory,
    ItemFilter,
    MedicalItemCreate,
    MedicalItemResponse,
    MedicalItemUpdate,
)
from sunatstock.schemas.stock import RestockRequest, StockTransactionResponse
from sunatstock.services import item_service, ledger_service, restock_service
from sunatstock.services.stock_status import StockStatus

router = APIRouter()


@router.post("", response_model=MedicalItemResponse, status_code=201)
def create_item(
    data: MedicalItemCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Add a new item. Starting stock is recorded in the ledger."""
    item = item_service.create_medical_item(db, data)
    AuditLog.log_action(
        "create", "medical_item", item.id, current_user,
        changes={"name": item.name, "current_stock": item.current_stock},
    )
    return item


@router.get("", response_model=List[MedicalItemResponse])
def list_items(
    category: Optional[ItemCategory] = Query(None),
    status: Optional[StockStatus] = Query(None, description="cukup | hampir_habis | kosong"),
    search: Optional[str] = Query(None, description="Case-insensitive match on item name"),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Item list with optional category, stock status and name filters."""
    filters = ItemFilter(category=category, status=status, search=search)
    return item_service.list_medical_items(db, filters)


# ==============================================================================
# LOW STOCK ALERT ENDPOINT
# ==============================================================================

@router.get("/low-stock", response_model=List[MedicalItemResponse])
def get_low_stock_items(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Items at or below their minimum threshold, for the dashboard alert banner."""
    return item_service.get_low_stock_items(db)


@router.get("/{item_id}", response_model=MedicalItemResponse)
def get_item(
    item_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    item = item_service.get_medical_item(db, item_id)
    if item is None:
        raise BusinessError.not_found("Medical item")
    return item


@router.patch("/{item_id}", response_model=MedicalItemResponse)
def update_item(
    item_id: int,
    updates: MedicalItemUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Update only the fields sent. Stock levels change through restock and procedures."""
    item = item_service.update_medical_item(db, item_id, updates)
    if item is None:
        raise BusinessError.not_found("Medical item", reason=f"update of item {item_id}")

    AuditLog.log_action("update", "medical_item", item.id, current_user, changes=updates.model_dump(exclude_unset=True))
    return item


# ==============================================================================
# STOCK MOVEMENTS
# ==============================================================================

@router.post("/{item_id}/restock", response_model=MedicalItemResponse)
def restock_item(
    item_id: int,
    data: RestockRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Record a purchase: stock goes up by quantity and a ledger row is added."""
    item = restock_service.restock_item(db, item_id, data)
    if item is None:
        raise BusinessError.not_found("Medical item", reason=f"restock of item {item_id}")

    AuditLog.log_action(
        "restock", "medical_item", item.id, current_user,
        changes={"quantity": data.quantity, "current_stock": item.current_stock},
    )
    return item


@router.get("/{item_id}/history", response_model=List[StockTransactionResponse])
def get_stock_history(
    item_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Ledger rows for one item, newest first."""
    return ledger_service.get_stock_history(db, item_id)
