"""Circumcision procedures. Creating one consumes stock for every item used."""
from datetime import datetime
from typing import List, Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from sunatstock.api.deps import get_db, get_current_user
from sunatstock.core.audit import AuditLog
from sunatstock.core.exceptions import BusinessError, StockValidationError
from sunatstock.models.user import User
from sunatstock.schemas.dates import to_naive_utc
from sunatstock.schemas.procedure import (
    ProcedureCreate,
    ProcedureDetailResponse,
    ProcedureItemUsageResponse,
    ProcedureResponse,
)
from sunatstock.services import procedure_service

router = APIRouter()


@router.post("", response_model=ProcedureResponse, status_code=201)
def create_procedure(
    data: ProcedureCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """
    Record a procedure and deduct the items it used.

    All or nothing: if any item is missing or short on stock the request
    fails with 400 and no procedure, usage or ledger rows are stored.
    """
    try:
        procedure = procedure_service.create_procedure(db, data)
    except StockValidationError as e:
        AuditLog.log_rejected("create", "procedure", current_user, str(e))
        raise BusinessError.bad_request(str(e)) from e

    AuditLog.log_action(
        "create", "procedure", procedure.id, current_user,
        changes={"items_used": [u.model_dump() for u in data.items_used]},
    )
    return procedure


@router.get("", response_model=List[ProcedureResponse])
def list_procedures(
    start_date: Optional[datetime] = Query(None),
    end_date: Optional[datetime] = Query(None),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Procedures ordered by date, optionally within [start_date, end_date]."""
    start_date, end_date = to_naive_utc(start_date), to_naive_utc(end_date)
    if start_date and end_date and start_date > end_date:
        raise BusinessError.bad_request("start_date must not be after end_date")
    return procedure_service.list_procedures(db, start_date, end_date)


@router.get("/{procedure_id}", response_model=ProcedureDetailResponse)
def get_procedure(
    procedure_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    procedure = procedure_service.get_procedure(db, procedure_id)
    if procedure is None:
        raise BusinessError.not_found("Procedure")

    return ProcedureDetailResponse(
        id=procedure.id,
        patient_name=procedure.patient_name,
        procedure_date=procedure.procedure_date,
        notes=procedure.notes,
        created_at=procedure.created_at,
        items_used=[
            ProcedureItemUsageResponse(
                item_id=u.item_id,
                item_name=u.item.name,
                unit=u.item.unit,
                quantity_used=u.quantity_used,
            )
            for u in procedure.item_usages
        ],
    )
