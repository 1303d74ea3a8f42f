# app/schemas/category.py
from pydantic import Field
from typing import Optional
from datetime import date

from app.models.category import CategoryStatus
from app.schemas.common import APIModel

class CategoryBase(APIModel):
    name: str = Field(..., min_length=1, max_length=200)
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    progress: int = 0
    status: CategoryStatus = CategoryStatus.ON_SCHEDULE
    team_id: Optional[int] = None

class CategoryCreate(CategoryBase):
    villa_id: int

class CategoryUpdate(CategoryBase):
    """Full replacement of the mutable fields; the villa cannot change."""
    pass

class Category(CategoryBase):
    id: int
    villa_id: int
    tasks_count: int
    completed_tasks: int
