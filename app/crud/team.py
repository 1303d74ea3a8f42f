# app/crud/team.py
from sqlmodel import Session, select, func, or_
from typing import List, Optional

from app.crud.base import CRUDBase
from app.models.team import Team
from app.models.task import Task, ACTIVE_TASK_STATUSES

class TeamCRUD(CRUDBase[Team]):
    def search_teams(self, db: Session, search: str) -> List[Team]:
        """Case-insensitive match on name or specialty."""
        query = select(Team).where(
            or_(
                Team.name.ilike(f"%{search}%"),
                Team.specialty.ilike(f"%{search}%")
            )
        )
        return db.exec(query.order_by(Team.id)).all()

    def get_teams_by_specialty(self, db: Session, specialty: str) -> List[Team]:
        query = select(Team).where(Team.specialty.ilike(f"%{specialty}%"))
        return db.exec(query.order_by(Team.id)).all()

    def get_active_teams(self, db: Session) -> List[Team]:
        """Teams with at least one pending or in-progress task."""
        active_team_ids = (
            select(Task.team_id)
            .where(Task.team_id.is_not(None), Task.status.in_(ACTIVE_TASK_STATUSES))
            .distinct()
        )
        query = select(Team).where(Team.id.in_(active_team_ids)).order_by(Team.id)
        return db.exec(query).all()

    def get_teams_by_performance(self, db: Session) -> List[Team]:
        query = select(Team).order_by(Team.performance.desc(), Team.id)
        return db.exec(query).all()

    def get_average_performance(self, db: Session) -> Optional[float]:
        return db.exec(select(func.avg(Team.performance))).one()

# Create instances
team_crud = TeamCRUD(Team)
