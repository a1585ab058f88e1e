from datetime import datetime
from pydantic import BaseModel


class DepartmentStat(BaseModel):
    name: str
    computers: int
    users: int
    percentage: float


class ActivityEntry(BaseModel):
    id: int
    action: str
    device: str
    user: str
    time: datetime
    type: str  # assignment / return


class DashboardResponse(BaseModel):
    total_users: int
    total_devices: int
    total_computers: int
    assigned_computers: int
    stored_computers: int
    department_stats: list[DepartmentStat]
    recent_activity: list[ActivityEntry]
