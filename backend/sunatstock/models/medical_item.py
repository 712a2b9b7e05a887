from sqlalchemy import Column, Integer, String, Numeric, DateTime, Enum, CheckConstraint
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from sunatstock.db.base import Base

ITEM_CATEGORIES = ("alat", "obat", "habis_pakai")  # tool | medicine | consumable


class MedicalItem(Base):
    """
    A tracked medical tool, medicine or consumable.

    current_stock is the live counter. It is only changed together with a
    StockTransaction row (item creation, restock, procedure usage), so the
    ledger always sums to it.
    """
    __tablename__ = "medical_items"
    __table_args__ = (
        CheckConstraint("current_stock >= 0", name="ck_medical_items_stock_non_negative"),
        CheckConstraint("minimum_threshold >= 0", name="ck_medical_items_threshold_non_negative"),
    )

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False)
    category = Column(Enum(*ITEM_CATEGORIES, name="item_category"), nullable=False)
    unit = Column(String(32), nullable=False)  # pcs, bungkus, tube, box
    current_stock = Column(Integer, nullable=False, default=0)
    minimum_threshold = Column(Integer, nullable=False, default=0)
    purchase_price = Column(Numeric(10, 2), nullable=True)
    image_path = Column(String(512), nullable=True)
    created_at = Column(DateTime, server_default=func.now(), nullable=False)
    updated_at = Column(DateTime, server_default=func.now(), nullable=False)

    transactions = relationship("StockTransaction", back_populates="item")

    def __repr__(self):
        return f"<MedicalItem id={self.id} name={self.name} stock={self.current_stock}>"
