from pydantic import BaseModel, Field
from typing import Literal, Optional
from datetime import datetime


class RestockRequest(BaseModel):
    quantity: int = Field(gt=0)
    purchase_price: Optional[float] = Field(default=None, gt=0)
    notes: Optional[str] = None


class StockTransactionResponse(BaseModel):
    id: int
    item_id: int
    transaction_type: Literal["purchase", "usage", "adjustment"]
    quantity: int
    remaining_stock: int
    notes: Optional[str] = None
    transaction_date: datetime
    created_at: datetime

    class Config:
        from_attributes = True
