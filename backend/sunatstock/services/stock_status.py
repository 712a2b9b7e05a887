"""Stock status derived from current stock and the item's minimum threshold.

get_stock_status() is used when serialising items; status_expression() is the
same rule as SQL for filtering. Keep the two in step.
"""
from enum import Enum

from sqlalchemy import case

from sunatstock.models.medical_item import MedicalItem


class StockStatus(str, Enum):
    CUKUP = "cukup"  # sufficient
    HAMPIR_HABIS = "hampir_habis"  # nearly depleted
    KOSONG = "kosong"  # empty


def get_stock_status(current_stock: int, minimum_threshold: int) -> StockStatus:
    """Empty at zero; stock equal to the threshold counts as nearly depleted."""
    if current_stock == 0:
        return StockStatus.KOSONG
    if current_stock <= minimum_threshold:
        return StockStatus.HAMPIR_HABIS
    return StockStatus.CUKUP


def status_expression():
    return case(
        (MedicalItem.current_stock == 0, StockStatus.KOSONG.value),
        (MedicalItem.current_stock <= MedicalItem.minimum_threshold, StockStatus.HAMPIR_HABIS.value),
        else_=StockStatus.CUKUP.value,
    )
