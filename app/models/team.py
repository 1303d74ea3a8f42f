# app/models/team.py
from sqlmodel import SQLModel, Field, Relationship
from typing import Optional, List
from datetime import datetime

class Team(SQLModel, table=True):
    __tablename__ = "teams"

    id: Optional[int] = Field(default=None, primary_key=True)
    name: str = Field(max_length=200, index=True)
    specialty: Optional[str] = Field(default=None, max_length=200, index=True)
    members_count: int = Field(default=0)
    performance: int = Field(default=0)
    active_tasks: int = Field(default=0)
    last_activity: Optional[datetime] = Field(default=None)
    created_at: datetime = Field(default_factory=datetime.utcnow)

    # Relationships
    tasks: List["Task"] = Relationship(back_populates="team")
    categories: List["Category"] = Relationship(back_populates="team")

from app.models.task import Task
from app.models.category import Category
