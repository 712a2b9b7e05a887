from pydantic import BaseModel, Field, computed_field, field_validator
from typing import Literal, Optional
from datetime import datetime
from decimal import Decimal

from sunatstock.services.stock_status import StockStatus, get_stock_status

ItemCategory = Literal["alat", "obat", "habis_pakai"]


class MedicalItemCreate(BaseModel):
    name: str = Field(min_length=1)
    category: ItemCategory
    unit: str = Field(min_length=1)
    current_stock: int = Field(default=0, ge=0)
    minimum_threshold: int = Field(default=0, ge=0)
    purchase_price: Optional[float] = Field(default=None, gt=0)
    image_path: Optional[str] = None


class MedicalItemUpdate(BaseModel):
    """
    Partial update. Only fields present in the request are applied
    (model_dump(exclude_unset=True)); an explicit null clears the field.
    current_stock is not editable here, only through restock or procedures.
    """
    name: Optional[str] = Field(default=None, min_length=1)
    category: Optional[ItemCategory] = None
    unit: Optional[str] = Field(default=None, min_length=1)
    minimum_threshold: Optional[int] = Field(default=None, ge=0)
    purchase_price: Optional[float] = Field(default=None, gt=0)
    image_path: Optional[str] = None

    @field_validator("name", "category", "unit", "minimum_threshold")
    @classmethod
    def not_null(cls, v):
        if v is None:
            raise ValueError("Field cannot be null")
        return v


class ItemFilter(BaseModel):
    category: Optional[ItemCategory] = None
    status: Optional[StockStatus] = None
    search: Optional[str] = None


class MedicalItemResponse(BaseModel):
    id: int
    name: str
    category: ItemCategory
    unit: str
    current_stock: int
    minimum_threshold: int
    purchase_price: Optional[float] = None
    image_path: Optional[str] = None
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True

    @field_validator("purchase_price", mode="before")
    @classmethod
    def price_as_number(cls, v):
        # Numeric columns come back as Decimal
        if isinstance(v, Decimal):
            return float(v)
        return v

    @computed_field
    @property
    def stock_status(self) -> StockStatus:
        return get_stock_status(self.current_stock, self.minimum_threshold)
