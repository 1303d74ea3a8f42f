# app/services/team_service.py
import logging
from datetime import datetime
from typing import List, Optional
from sqlmodel import Session

from app.core.exceptions import NotFoundError
from app.crud.category import category_crud
from app.crud.task import task_crud
from app.crud.team import team_crud
from app.database.engine import transaction
from app.models.task import TaskStatus, ACTIVE_TASK_STATUSES
from app.models.team import Team
from app.schemas.team import TeamCreate, TeamUpdate
from app.services.stats_propagator import StatsPropagator, ServiceStatsPropagator

logger = logging.getLogger(__name__)


class TeamService:
    """Team management and team-level utilization stats."""

    def __init__(self, db: Session, propagator: Optional[StatsPropagator] = None):
        self.db = db
        self.propagator = propagator or ServiceStatsPropagator(db)

    # Queries

    def get_team(self, team_id: int) -> Team:
        team = team_crud.get(self.db, team_id)
        if not team:
            raise NotFoundError("Team", team_id)
        return team

    def get_teams(self) -> List[Team]:
        return team_crud.get_all(self.db)

    def search_teams(self, search: str) -> List[Team]:
        return team_crud.search_teams(self.db, search)

    def get_teams_by_specialty(self, specialty: str) -> List[Team]:
        return team_crud.get_teams_by_specialty(self.db, specialty)

    def get_active_teams(self) -> List[Team]:
        return team_crud.get_active_teams(self.db)

    def get_teams_by_performance(self) -> List[Team]:
        return team_crud.get_teams_by_performance(self.db)

    def get_average_performance(self) -> float:
        average = team_crud.get_average_performance(self.db)
        return float(average) if average is not None else 0.0

    # Mutations

    def create_team(self, team_data: TeamCreate) -> Team:
        """
        Create a team, optionally taking over existing tasks. Each task's
        team reference is pointed at the new team before the team is saved.
        """
        with transaction(self.db):
            team = Team(**team_data.model_dump(exclude={"task_ids"}))

            previous_team_ids = set()
            for task_id in team_data.task_ids:
                task = task_crud.get(self.db, task_id)
                if not task:
                    raise NotFoundError("Task", task_id)
                if task.team_id is not None:
                    previous_team_ids.add(task.team_id)
                task.team = team

            team = team_crud.save(self.db, team)
            logger.info(f"Created team {team.id} with {len(team_data.task_ids)} task(s)")

            for team_id in sorted(previous_team_ids | {team.id}):
                self.propagator.team_changed(team_id)
            return team

    def update_team(self, team_id: int, team_data: TeamUpdate) -> Team:
        with transaction(self.db):
            team = self.get_team(team_id)
            team.name = team_data.name
            team.specialty = team_data.specialty
            team.members_count = team_data.members_count
            team.performance = team_data.performance
            return team_crud.save(self.db, team)

    def delete_team(self, team_id: int) -> None:
        """Delete a team; its tasks and categories become unassigned."""
        with transaction(self.db):
            team = self.get_team(team_id)
            for task in task_crud.get_team_tasks(self.db, team_id):
                task.team_id = None
                task_crud.save(self.db, task)
            for category in category_crud.get_team_categories(self.db, team_id):
                category.team_id = None
                category_crud.save(self.db, category)
            team_crud.delete(self.db, team)
            logger.info(f"Deleted team {team_id}")

    def recompute_stats(self, team_id: int) -> Team:
        """
        Refresh active task count, performance and last activity.

        With no tasks, performance keeps its stored value; last activity is
        always bumped.
        """
        with transaction(self.db):
            team = self.get_team(team_id)
            tasks = task_crud.get_team_tasks(self.db, team_id)

            team.active_tasks = sum(1 for t in tasks if t.status in ACTIVE_TASK_STATUSES)
            team.last_activity = datetime.utcnow()

            completed = sum(1 for t in tasks if t.status == TaskStatus.COMPLETED)
            if tasks:
                team.performance = (completed * 100) // len(tasks)

            team = team_crud.save(self.db, team)
            logger.debug(
                f"Team {team_id} stats: active={team.active_tasks}, performance={team.performance}"
            )
            return team

    def touch_activity(self, team_id: int) -> Team:
        with transaction(self.db):
            team = self.get_team(team_id)
            team.last_activity = datetime.utcnow()
            return team_crud.save(self.db, team)
