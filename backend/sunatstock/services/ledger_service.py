"""Stock ledger. Rows are appended by the item, restock and procedure workflows.

add_stock_transaction() only flushes; the calling workflow owns the
transaction so the ledger row and the item's stock counter commit together.
"""
from datetime import datetime
from typing import List, Optional

from sqlalchemy import func
from sqlalchemy.orm import Session

from sunatstock.models.stock_transaction import StockTransaction


def add_stock_transaction(
    db: Session,
    item_id: int,
    transaction_type: str,
    quantity: int,
    remaining_stock: int,
    notes: str | None = None,
    transaction_date: Optional[datetime] = None,
) -> StockTransaction:
    entry = StockTransaction(
        item_id=item_id,
        transaction_type=transaction_type,
        quantity=quantity,
        remaining_stock=remaining_stock,
        notes=notes,
    )
    if transaction_date is not None:
        entry.transaction_date = transaction_date
    db.add(entry)
    db.flush()
    return entry


def get_stock_history(db: Session, item_id: int) -> List[StockTransaction]:
    """All transactions of one item, newest first."""
    return (
        db.query(StockTransaction)
        .filter(StockTransaction.item_id == item_id)
        .order_by(StockTransaction.transaction_date.desc(), StockTransaction.id.desc())
        .all()
    )


def ledger_balance(db: Session, item_id: int) -> int:
    """Sum of all ledger quantities for an item. Equals its current_stock."""
    total = (
        db.query(func.sum(StockTransaction.quantity))
        .filter(StockTransaction.item_id == item_id)
        .scalar()
    )
    return int(total or 0)
