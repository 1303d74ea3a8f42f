# app/models/task.py
from sqlmodel import SQLModel, Field, Relationship, Column, Text
from typing import Optional
from datetime import datetime, date
from decimal import Decimal
from enum import Enum

class TaskStatus(str, Enum):
    PENDING = "PENDING"
    IN_PROGRESS = "IN_PROGRESS"
    COMPLETED = "COMPLETED"
    DELAYED = "DELAYED"

class ProgressStatus(str, Enum):
    ON_SCHEDULE = "ON_SCHEDULE"
    AHEAD = "AHEAD"
    BEHIND = "BEHIND"
    AT_RISK = "AT_RISK"

# Statuses counted as outstanding work for a team
ACTIVE_TASK_STATUSES = (TaskStatus.IN_PROGRESS, TaskStatus.PENDING)

class Task(SQLModel, table=True):
    __tablename__ = "tasks"

    id: Optional[int] = Field(default=None, primary_key=True)
    category_id: int = Field(foreign_key="categories.id", index=True)
    villa_id: int = Field(foreign_key="villas.id", index=True)
    team_id: Optional[int] = Field(default=None, foreign_key="teams.id", index=True)
    name: str = Field(max_length=200)
    description: Optional[str] = Field(default=None, sa_column=Column(Text))
    planned_start_date: Optional[date] = Field(default=None)
    planned_end_date: Optional[date] = Field(default=None)
    start_date: Optional[date] = Field(default=None)
    end_date: Optional[date] = Field(default=None)
    status: TaskStatus = Field(default=TaskStatus.PENDING, index=True)
    progress: int = Field(default=0)
    progress_status: ProgressStatus = Field(default=ProgressStatus.ON_SCHEDULE, index=True)
    is_received: bool = Field(default=False, index=True)
    is_paid: bool = Field(default=False, index=True)
    amount: Decimal = Field(default=Decimal("0.00"), max_digits=14, decimal_places=2)
    remarks: Optional[str] = Field(default=None, sa_column=Column(Text))
    created_at: datetime = Field(default_factory=datetime.utcnow)
    updated_at: datetime = Field(default_factory=datetime.utcnow, index=True)

    # Relationships
    category: "Category" = Relationship(back_populates="tasks")
    villa: "Villa" = Relationship()
    team: Optional["Team"] = Relationship(back_populates="tasks")

from app.models.category import Category
from app.models.project import Villa
from app.models.team import Team
