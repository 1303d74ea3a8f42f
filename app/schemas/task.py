# app/schemas/task.py
from pydantic import Field
from typing import Optional
from datetime import datetime, date

from app.models.task import TaskStatus, ProgressStatus
from app.schemas.common import APIModel

class TaskBase(APIModel):
    name: str = Field(..., min_length=1, max_length=200)
    description: Optional[str] = None
    planned_start_date: Optional[date] = None
    planned_end_date: Optional[date] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    status: TaskStatus = TaskStatus.PENDING
    progress: int = 0
    progress_status: ProgressStatus = ProgressStatus.ON_SCHEDULE
    is_received: bool = False
    is_paid: bool = False
    amount: float = 0.0
    remarks: Optional[str] = None
    team_id: Optional[int] = None

class TaskCreate(TaskBase):
    category_id: int
    villa_id: int

class TaskUpdate(TaskBase):
    """
    Every mutable field is replaced from the payload, including fields the
    caller left at their defaults. Category and villa cannot change.
    """
    pass

class Task(TaskBase):
    id: int
    category_id: int
    villa_id: int
    created_at: datetime
    updated_at: datetime

class TaskProgressUpdate(APIModel):
    # Stored as given; no 0-100 clamping
    progress: int

class ProjectAmounts(APIModel):
    total_amount: float = 0.0
    paid_amount: float = 0.0
