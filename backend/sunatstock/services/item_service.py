"""Medical item creation, partial update and listing."""
import logging
from decimal import Decimal
from typing import List, Optional

from sqlalchemy import or_
from sqlalchemy.orm import Session
from sqlalchemy.sql import func

from sunatstock.models.medical_item import MedicalItem
from sunatstock.schemas.medical_item import ItemFilter, MedicalItemCreate, MedicalItemUpdate
from sunatstock.services.ledger_service import add_stock_transaction
from sunatstock.services.stock_status import status_expression

logger = logging.getLogger(__name__)

INITIAL_STOCK_NOTE = "Initial stock entry"


def _to_price(value: float | None) -> Decimal | None:
    return Decimal(str(value)) if value is not None else None


def create_medical_item(db: Session, data: MedicalItemCreate) -> MedicalItem:
    """Create an item. Starting stock above zero is recorded as an adjustment
    in the ledger within the same transaction."""
    item = MedicalItem(
        name=data.name,
        category=data.category,
        unit=data.unit,
        current_stock=data.current_stock,
        minimum_threshold=data.minimum_threshold,
        purchase_price=_to_price(data.purchase_price),
        image_path=data.image_path,
    )
    try:
        db.add(item)
        db.flush()  # Get ID without committing

        if data.current_stock > 0:
            add_stock_transaction(
                db,
                item.id,
                "adjustment",
                quantity=data.current_stock,
                remaining_stock=data.current_stock,
                notes=INITIAL_STOCK_NOTE,
            )

        db.commit()
    except Exception as e:
        db.rollback()
        logger.error(f"Medical item creation failed: {e}", exc_info=True)
        raise

    db.refresh(item)
    logger.info(f"Created medical item {item.id} ({item.name}) with stock {item.current_stock}")
    return item


def get_medical_item(db: Session, item_id: int) -> Optional[MedicalItem]:
    return db.get(MedicalItem, item_id)


def list_medical_items(db: Session, filters: Optional[ItemFilter] = None) -> List[MedicalItem]:
    q = db.query(MedicalItem)

    if filters is not None:
        if filters.category:
            q = q.filter(MedicalItem.category == filters.category)
        if filters.status:
            q = q.filter(status_expression() == filters.status.value)
        if filters.search:
            q = q.filter(MedicalItem.name.icontains(filters.search, autoescape=True))

    return q.order_by(MedicalItem.name, MedicalItem.id).all()


def update_medical_item(db: Session, item_id: int, data: MedicalItemUpdate) -> Optional[MedicalItem]:
    """Apply only the fields present in the request. Returns None if the item does not exist."""
    item = db.get(MedicalItem, item_id)
    if item is None:
        return None

    changes = data.model_dump(exclude_unset=True)
    if "purchase_price" in changes:
        changes["purchase_price"] = _to_price(changes["purchase_price"])

    try:
        for field, value in changes.items():
            setattr(item, field, value)
        item.updated_at = func.now()
        db.commit()
    except Exception as e:
        db.rollback()
        logger.error(f"Medical item update failed: {e}", exc_info=True)
        raise

    db.refresh(item)
    return item


def get_low_stock_items(db: Session) -> List[MedicalItem]:
    """Items at or below their threshold, plus anything out of stock."""
    return (
        db.query(MedicalItem)
        .filter(
            or_(
                MedicalItem.current_stock <= MedicalItem.minimum_threshold,
                MedicalItem.current_stock <= 0,
            )
        )
        .order_by(MedicalItem.current_stock.asc(), MedicalItem.name)
        .all()
    )
