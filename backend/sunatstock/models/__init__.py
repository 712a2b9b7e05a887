from sunatstock.models.user import User
from sunatstock.models.medical_item import MedicalItem
from sunatstock.models.stock_transaction import StockTransaction
from sunatstock.models.procedure import CircumcisionProcedure, ProcedureItemUsage

__all__ = ["User", "MedicalItem", "StockTransaction", "CircumcisionProcedure", "ProcedureItemUsage"]
