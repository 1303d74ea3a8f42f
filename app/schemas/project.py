# app/schemas/project.py
from pydantic import Field, field_validator
from typing import Optional
from datetime import datetime, date

from app.models.project import VillaStatus
from app.schemas.common import APIModel

# Project Schemas
class ProjectBase(APIModel):
    name: str = Field(..., min_length=1, max_length=200)
    description: Optional[str] = None
    location: Optional[str] = Field(None, max_length=200)
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    budget: Optional[float] = Field(None, ge=0)

    @field_validator('end_date')
    def validate_end_date(cls, v, info):
        if v and info.data.get('start_date') and v < info.data.get('start_date'):
            raise ValueError('End date must be after start date')
        return v

class ProjectCreate(ProjectBase):
    pass

class ProjectUpdate(ProjectBase):
    pass

class Project(ProjectBase):
    id: int
    created_at: datetime
    updated_at: datetime

# Villa Schemas
class VillaBase(APIModel):
    name: str = Field(..., min_length=1, max_length=200)
    type: Optional[str] = Field(None, max_length=100)
    surface: float = Field(0.0, ge=0)
    status: VillaStatus = VillaStatus.NOT_STARTED

class VillaCreate(VillaBase):
    project_id: int

class VillaUpdate(VillaBase):
    pass

class Villa(VillaBase):
    id: int
    project_id: int
    progress: int
    categories_count: int
    tasks_count: int
    last_modified: datetime
