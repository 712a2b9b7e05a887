from sqlalchemy import Column, Integer, ForeignKey, DateTime, Enum, Text
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from sunatstock.db.base import Base

TRANSACTION_TYPES = ("purchase", "usage", "adjustment")


class StockTransaction(Base):
    """Immutable ledger row: one stock change and the balance after it."""
    __tablename__ = "stock_transactions"

    id = Column(Integer, primary_key=True, index=True)
    item_id = Column(Integer, ForeignKey("medical_items.id"), nullable=False, index=True)
    transaction_type = Column(Enum(*TRANSACTION_TYPES, name="transaction_type"), nullable=False)
    quantity = Column(Integer, nullable=False)  # positive inbound, negative outbound
    remaining_stock = Column(Integer, nullable=False)
    notes = Column(Text, nullable=True)
    transaction_date = Column(DateTime, server_default=func.now(), nullable=False)
    created_at = Column(DateTime, server_default=func.now(), nullable=False)

    item = relationship("MedicalItem", back_populates="transactions")
