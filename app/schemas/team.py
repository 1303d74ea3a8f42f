# app/schemas/team.py
from pydantic import Field
from typing import Optional, List
from datetime import datetime

from app.schemas.common import APIModel

class TeamBase(APIModel):
    name: str = Field(..., min_length=1, max_length=200)
    specialty: Optional[str] = Field(None, max_length=200)
    members_count: int = Field(0, ge=0)
    performance: int = 0

class TeamCreate(TeamBase):
    # Existing tasks handed over to the new team
    task_ids: List[int] = []

class TeamUpdate(TeamBase):
    pass

class Team(TeamBase):
    id: int
    active_tasks: int
    last_activity: Optional[datetime]
    created_at: datetime

class TeamPerformance(APIModel):
    average_performance: float = 0.0
