"""Restock: add purchased units to an item and record the purchase in the ledger."""
import logging
from decimal import Decimal
from typing import Optional

from sqlalchemy.orm import Session
from sqlalchemy.sql import func

from sunatstock.models.medical_item import MedicalItem
from sunatstock.schemas.stock import RestockRequest
from sunatstock.services.ledger_service import add_stock_transaction

logger = logging.getLogger(__name__)


def restock_item(db: Session, item_id: int, data: RestockRequest) -> Optional[MedicalItem]:
    """Increase stock by data.quantity. Returns None if the item does not exist.

    A purchase_price, when given, replaces the stored one; otherwise the
    stored price is kept.
    """
    item = (
        db.query(MedicalItem)
        .filter(MedicalItem.id == item_id)
        .with_for_update()
        .first()
    )
    if item is None:
        return None

    new_stock = item.current_stock + data.quantity

    try:
        item.current_stock = new_stock
        if data.purchase_price is not None:
            item.purchase_price = Decimal(str(data.purchase_price))
        item.updated_at = func.now()

        add_stock_transaction(
            db,
            item.id,
            "purchase",
            quantity=data.quantity,
            remaining_stock=new_stock,
            notes=data.notes,
        )
        db.commit()
    except Exception as e:
        db.rollback()
        logger.error(f"Item restock failed for item {item_id}: {e}", exc_info=True)
        raise

    db.refresh(item)
    logger.info(f"Restocked item {item.id} by {data.quantity}, stock now {new_stock}")
    return item
