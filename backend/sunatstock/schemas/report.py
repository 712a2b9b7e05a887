from pydantic import BaseModel


class DashboardStats(BaseModel):
    total_items: int
    critical_items: int
    procedures_today: int
    total_procedures_this_month: int


class UsageReportRow(BaseModel):
    item_id: int
    item_name: str
    total_used: int
    unit: str
    category: str
