# app/models/category.py
from sqlmodel import SQLModel, Field, Relationship
from typing import Optional, List
from datetime import date
from enum import Enum

class CategoryStatus(str, Enum):
    # ON_SCHEDULE marks a fully completed category, not a partial one.
    ON_SCHEDULE = "ON_SCHEDULE"
    IN_PROGRESS = "IN_PROGRESS"
    WARNING = "WARNING"
    DELAYED = "DELAYED"

class Category(SQLModel, table=True):
    __tablename__ = "categories"

    id: Optional[int] = Field(default=None, primary_key=True)
    villa_id: int = Field(foreign_key="villas.id", index=True)
    team_id: Optional[int] = Field(default=None, foreign_key="teams.id", index=True)
    name: str = Field(max_length=200)
    start_date: Optional[date] = Field(default=None)
    end_date: Optional[date] = Field(default=None)
    progress: int = Field(default=0)
    status: CategoryStatus = Field(default=CategoryStatus.ON_SCHEDULE, index=True)
    tasks_count: int = Field(default=0)
    completed_tasks: int = Field(default=0)

    # Relationships
    villa: "Villa" = Relationship(back_populates="categories")
    team: Optional["Team"] = Relationship(back_populates="categories")
    tasks: List["Task"] = Relationship(back_populates="category")

from app.models.project import Villa
from app.models.team import Team
from app.models.task import Task
