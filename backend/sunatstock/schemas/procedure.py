from pydantic import BaseModel, Field, field_validator
from typing import List, Optional
from datetime import datetime

from sunatstock.schemas.dates import to_naive_utc


class ItemUsageInput(BaseModel):
    item_id: int
    quantity_used: int = Field(gt=0)


class ProcedureCreate(BaseModel):
    patient_name: Optional[str] = None
    procedure_date: datetime
    notes: Optional[str] = None
    items_used: List[ItemUsageInput] = Field(default_factory=list)

    @field_validator("procedure_date")
    @classmethod
    def procedure_date_naive_utc(cls, v: datetime) -> datetime:
        return to_naive_utc(v)


class ProcedureResponse(BaseModel):
    id: int
    patient_name: Optional[str] = None
    procedure_date: datetime
    notes: Optional[str] = None
    created_at: datetime

    class Config:
        from_attributes = True


class ProcedureItemUsageResponse(BaseModel):
    item_id: int
    item_name: str
    unit: str
    quantity_used: int


class ProcedureDetailResponse(ProcedureResponse):
    items_used: List[ProcedureItemUsageResponse] = []
