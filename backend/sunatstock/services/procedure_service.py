"""
Procedure workflow: record a circumcision and consume its items.

One procedure is one database transaction. For every entry of items_used, in
order, the item is checked, its stock decremented, a usage row written and a
"usage" ledger row appended. If any entry fails (unknown item, not enough
stock) or the database raises, everything is rolled back, the procedure row
included. Nothing is ever partially committed.
"""
import logging
from datetime import datetime
from typing import List, Optional

from sqlalchemy.orm import Session, joinedload
from sqlalchemy.sql import func

from sunatstock.core.exceptions import InsufficientStockError, ItemNotFoundError, StockValidationError
from sunatstock.models.medical_item import MedicalItem
from sunatstock.models.procedure import CircumcisionProcedure, ProcedureItemUsage
from sunatstock.schemas.procedure import ProcedureCreate
from sunatstock.services.ledger_service import add_stock_transaction

logger = logging.getLogger(__name__)

UNKNOWN_PATIENT = "Unknown"


def _usage_note(patient_name: Optional[str]) -> str:
    return f"Used in procedure for patient: {patient_name or UNKNOWN_PATIENT}"


def create_procedure(db: Session, data: ProcedureCreate) -> CircumcisionProcedure:
    """
    Create a procedure and consume its items atomically.

    Raises:
        ItemNotFoundError: an items_used entry references a missing item
        InsufficientStockError: an item has less stock than quantity_used
    """
    try:
        procedure = CircumcisionProcedure(
            patient_name=data.patient_name,
            procedure_date=data.procedure_date,
            notes=data.notes,
        )
        db.add(procedure)
        db.flush()

        for usage in data.items_used:
            item = (
                db.query(MedicalItem)
                .filter(MedicalItem.id == usage.item_id)
                .with_for_update()
                .first()
            )
            if item is None:
                raise ItemNotFoundError(usage.item_id)

            if item.current_stock < usage.quantity_used:
                raise InsufficientStockError(item.name, item.current_stock, usage.quantity_used)

            new_stock = item.current_stock - usage.quantity_used
            item.current_stock = new_stock
            item.updated_at = func.now()

            db.add(
                ProcedureItemUsage(
                    procedure_id=procedure.id,
                    item_id=item.id,
                    quantity_used=usage.quantity_used,
                )
            )
            add_stock_transaction(
                db,
                item.id,
                "usage",
                quantity=-usage.quantity_used,
                remaining_stock=new_stock,
                notes=_usage_note(data.patient_name),
                transaction_date=data.procedure_date,
            )

        db.commit()
    except StockValidationError as e:
        db.rollback()
        logger.warning(f"Procedure rejected, nothing recorded: {e}")
        raise
    except Exception as e:
        db.rollback()
        logger.error(f"Procedure creation failed: {e}", exc_info=True)
        raise

    db.refresh(procedure)
    logger.info(
        f"Recorded procedure {procedure.id} on {procedure.procedure_date} "
        f"consuming {len(data.items_used)} item entries"
    )
    return procedure


def get_procedure(db: Session, procedure_id: int) -> Optional[CircumcisionProcedure]:
    """Procedure with its usage rows and their items loaded, or None."""
    return (
        db.query(CircumcisionProcedure)
        .options(joinedload(CircumcisionProcedure.item_usages).joinedload(ProcedureItemUsage.item))
        .filter(CircumcisionProcedure.id == procedure_id)
        .first()
    )


def list_procedures(
    db: Session,
    start_date: Optional[datetime] = None,
    end_date: Optional[datetime] = None,
) -> List[CircumcisionProcedure]:
    """Procedures ordered by date. Bounds are inclusive; either may be omitted."""
    q = db.query(CircumcisionProcedure)
    if start_date is not None:
        q = q.filter(CircumcisionProcedure.procedure_date >= start_date)
    if end_date is not None:
        q = q.filter(CircumcisionProcedure.procedure_date <= end_date)
    return q.order_by(CircumcisionProcedure.procedure_date.asc(), CircumcisionProcedure.id.asc()).all()
