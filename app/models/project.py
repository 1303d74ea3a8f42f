# app/models/project.py
from sqlmodel import SQLModel, Field, Relationship, Column, Text
from typing import Optional, List
from datetime import datetime, date
from decimal import Decimal
from enum import Enum

class VillaStatus(str, Enum):
    NOT_STARTED = "NOT_STARTED"
    IN_PROGRESS = "IN_PROGRESS"
    COMPLETED = "COMPLETED"
    DELAYED = "DELAYED"

class Project(SQLModel, table=True):
    __tablename__ = "projects"

    id: Optional[int] = Field(default=None, primary_key=True)
    name: str = Field(max_length=200, index=True)
    description: Optional[str] = Field(default=None, sa_column=Column(Text))
    location: Optional[str] = Field(default=None, max_length=200)
    start_date: Optional[date] = Field(default=None)
    end_date: Optional[date] = Field(default=None)
    budget: Optional[Decimal] = Field(default=None, max_digits=14, decimal_places=2)
    created_at: datetime = Field(default_factory=datetime.utcnow)
    updated_at: datetime = Field(default_factory=datetime.utcnow)

    # Relationships
    villas: List["Villa"] = Relationship(back_populates="project")

class Villa(SQLModel, table=True):
    __tablename__ = "villas"

    id: Optional[int] = Field(default=None, primary_key=True)
    project_id: int = Field(foreign_key="projects.id", index=True)
    name: str = Field(max_length=200)
    type: Optional[str] = Field(default=None, max_length=100)
    surface: float = Field(default=0.0)
    progress: int = Field(default=0)
    status: VillaStatus = Field(default=VillaStatus.NOT_STARTED, index=True)
    categories_count: int = Field(default=0)
    tasks_count: int = Field(default=0)
    last_modified: datetime = Field(default_factory=datetime.utcnow)

    # Relationships
    project: Project = Relationship(back_populates="villas")
    categories: List["Category"] = Relationship(back_populates="villa")

from app.models.category import Category
