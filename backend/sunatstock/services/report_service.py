"""Read-only aggregates for the dashboard and the usage report."""
import csv
import io
from datetime import datetime, timedelta
from typing import List, Optional

from sqlalchemy import func
from sqlalchemy.orm import Session

from sunatstock.models.medical_item import MedicalItem
from sunatstock.models.procedure import CircumcisionProcedure, ProcedureItemUsage
from sunatstock.schemas.report import DashboardStats, UsageReportRow


def _count_procedures_between(db: Session, start: datetime, end: datetime) -> int:
    """Half-open range [start, end)."""
    return db.query(func.count(CircumcisionProcedure.id)).filter(
        CircumcisionProcedure.procedure_date >= start,
        CircumcisionProcedure.procedure_date < end,
    ).scalar() or 0


def get_dashboard_stats(db: Session, now: Optional[datetime] = None) -> DashboardStats:
    now = now or datetime.now()

    total_items = db.query(func.count(MedicalItem.id)).scalar() or 0

    critical_items = db.query(func.count(MedicalItem.id)).filter(
        MedicalItem.current_stock <= MedicalItem.minimum_threshold
    ).scalar() or 0

    start_of_today = now.replace(hour=0, minute=0, second=0, microsecond=0)
    start_of_tomorrow = start_of_today + timedelta(days=1)

    first_of_month = start_of_today.replace(day=1)
    if first_of_month.month == 12:
        first_of_next_month = first_of_month.replace(year=first_of_month.year + 1, month=1)
    else:
        first_of_next_month = first_of_month.replace(month=first_of_month.month + 1)

    return DashboardStats(
        total_items=total_items,
        critical_items=critical_items,
        procedures_today=_count_procedures_between(db, start_of_today, start_of_tomorrow),
        total_procedures_this_month=_count_procedures_between(db, first_of_month, first_of_next_month),
    )


def get_usage_report(db: Session, start_date: datetime, end_date: datetime) -> List[UsageReportRow]:
    """Total quantity used per item over procedures dated within [start_date, end_date]."""
    results = (
        db.query(
            MedicalItem.id.label("item_id"),
            MedicalItem.name.label("item_name"),
            func.sum(ProcedureItemUsage.quantity_used).label("total_used"),
            MedicalItem.unit.label("unit"),
            MedicalItem.category.label("category"),
        )
        .join(MedicalItem, ProcedureItemUsage.item_id == MedicalItem.id)
        .join(CircumcisionProcedure, ProcedureItemUsage.procedure_id == CircumcisionProcedure.id)
        .filter(
            CircumcisionProcedure.procedure_date >= start_date,
            CircumcisionProcedure.procedure_date <= end_date,
        )
        .group_by(MedicalItem.id, MedicalItem.name, MedicalItem.unit, MedicalItem.category)
        .order_by(MedicalItem.name)
        .all()
    )

    return [
        UsageReportRow(
            item_id=r.item_id,
            item_name=r.item_name,
            total_used=int(r.total_used or 0),
            unit=r.unit,
            category=r.category,
        )
        for r in results
    ]


def usage_report_csv(rows: List[UsageReportRow]) -> str:
    output = io.StringIO()
    writer = csv.writer(output)
    writer.writerow(["Item ID", "Item Name", "Category", "Total Used", "Unit"])

    for r in rows:
        writer.writerow([r.item_id, r.item_name, r.category, r.total_used, r.unit])

    return output.getvalue()
