"""
CircumcisionProcedure and its item usage rows.

A procedure and all of its ProcedureItemUsage rows are written in one
transaction by services.procedure_service and never updated afterwards.
"""
from sqlalchemy import Column, Integer, String, ForeignKey, DateTime, Text
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from sunatstock.db.base import Base


class CircumcisionProcedure(Base):
    __tablename__ = "circumcision_procedures"

    id = Column(Integer, primary_key=True, index=True)
    patient_name = Column(String(255), nullable=True)
    procedure_date = Column(DateTime, nullable=False, index=True)
    notes = Column(Text, nullable=True)
    created_at = Column(DateTime, server_default=func.now(), nullable=False)

    item_usages = relationship(
        "ProcedureItemUsage",
        back_populates="procedure",
        cascade="all, delete-orphan",
        order_by="ProcedureItemUsage.id",
    )


class ProcedureItemUsage(Base):
    __tablename__ = "procedure_item_usage"

    id = Column(Integer, primary_key=True, index=True)
    procedure_id = Column(Integer, ForeignKey("circumcision_procedures.id"), nullable=False, index=True)
    item_id = Column(Integer, ForeignKey("medical_items.id"), nullable=False, index=True)
    quantity_used = Column(Integer, nullable=False)
    created_at = Column(DateTime, server_default=func.now(), nullable=False)

    procedure = relationship("CircumcisionProcedure", back_populates="item_usages")
    item = relationship("MedicalItem")
