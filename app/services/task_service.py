# app/services/task_service.py
"""
Task lifecycle: create, full-replacement update, delete, progress updates
and the receipt/payment flags.

Every change that can move a category's counters notifies the stats
propagator for the owning category, inside the same transaction as the
task write.
"""
import logging
from datetime import datetime
from decimal import Decimal
from typing import Dict, List, Optional
from sqlmodel import Session

from app.core.exceptions import NotFoundError
from app.crud.category import category_crud
from app.crud.project import villa_crud
from app.crud.task import task_crud
from app.crud.team import team_crud
from app.database.engine import transaction
from app.models.task import Task, TaskStatus, ProgressStatus
from app.schemas.task import TaskBase, TaskCreate, TaskUpdate
from app.services.stats_propagator import StatsPropagator, ServiceStatsPropagator

logger = logging.getLogger(__name__)

# Fields overwritten by a task update; category and villa never move
TASK_MUTABLE_FIELDS = (
    "name",
    "description",
    "planned_start_date",
    "planned_end_date",
    "start_date",
    "end_date",
    "status",
    "progress",
    "progress_status",
    "is_received",
    "is_paid",
    "amount",
    "remarks",
)


def derive_task_status(progress: int, current: TaskStatus) -> TaskStatus:
    """
    Status implied by a progress value. Zero progress keeps the current
    status rather than regressing it to PENDING.
    """
    if progress == 100:
        return TaskStatus.COMPLETED
    if progress > 0:
        return TaskStatus.IN_PROGRESS
    return current


class TaskService:
    def __init__(self, db: Session, propagator: Optional[StatsPropagator] = None):
        self.db = db
        self.propagator = propagator or ServiceStatsPropagator(db)

    # Queries

    def get_task(self, task_id: int) -> Task:
        task = task_crud.get(self.db, task_id)
        if not task:
            raise NotFoundError("Task", task_id)
        return task

    def get_tasks(self, category_id: Optional[int] = None) -> List[Task]:
        if category_id is not None:
            return task_crud.get_category_tasks(self.db, category_id)
        return task_crud.get_tasks(self.db)

    def get_villa_tasks(self, villa_id: int) -> List[Task]:
        return task_crud.get_villa_tasks(self.db, villa_id)

    def get_project_tasks(self, project_id: int) -> List[Task]:
        return task_crud.get_project_tasks(self.db, project_id)

    def get_team_tasks(self, team_id: int) -> List[Task]:
        return task_crud.get_team_tasks(self.db, team_id)

    def get_tasks_by_status(self, status: TaskStatus) -> List[Task]:
        return task_crud.get_tasks_by_status(self.db, status)

    def get_tasks_by_progress_status(self, progress_status: ProgressStatus) -> List[Task]:
        return task_crud.get_tasks_by_progress_status(self.db, progress_status)

    def get_unreceived_completed_tasks(self) -> List[Task]:
        return task_crud.get_unreceived_completed_tasks(self.db)

    def get_unpaid_tasks(self) -> List[Task]:
        return task_crud.get_unpaid_tasks(self.db)

    def get_project_amounts(self, project_id: int) -> Dict[str, float]:
        """Total and paid task amounts of a project, 0.0 when nothing matches."""
        total_amount = task_crud.get_total_amount_by_project(self.db, project_id)
        paid_amount = task_crud.get_paid_amount_by_project(self.db, project_id)
        return {
            "total_amount": total_amount if total_amount is not None else 0.0,
            "paid_amount": paid_amount if paid_amount is not None else 0.0,
        }

    # Mutations

    def create_task(self, task_data: TaskCreate) -> Task:
        with transaction(self.db):
            category = category_crud.get(self.db, task_data.category_id)
            if not category:
                raise NotFoundError("Category", task_data.category_id)
            villa = villa_crud.get(self.db, task_data.villa_id)
            if not villa:
                raise NotFoundError("Villa", task_data.villa_id)

            task = Task(category_id=category.id, villa_id=villa.id)
            self._apply_fields(task, task_data)
            if task_data.team_id is not None:
                task.team_id = self._resolve_team_id(task_data.team_id)

            task = task_crud.save(self.db, task)
            logger.info(f"Created task {task.id} in category {category.id}")

            self.propagator.category_changed(task.category_id)
            if task.team_id is not None:
                self.propagator.team_changed(task.team_id)
            return task

    def update_task(self, task_id: int, task_data: TaskUpdate) -> Task:
        with transaction(self.db):
            task = self.get_task(task_id)
            previous_team_id = task.team_id

            self._apply_fields(task, task_data)
            if task_data.team_id is not None:
                task.team_id = self._resolve_team_id(task_data.team_id)
            task.updated_at = datetime.utcnow()

            task = task_crud.save(self.db, task)

            self.propagator.category_changed(task.category_id)
            self._notify_teams(previous_team_id, task.team_id)
            return task

    def delete_task(self, task_id: int) -> None:
        with transaction(self.db):
            task = self.get_task(task_id)
            category_id = task.category_id
            team_id = task.team_id

            task_crud.delete(self.db, task)
            logger.info(f"Deleted task {task_id} from category {category_id}")

            self.propagator.category_changed(category_id)
            self._notify_teams(team_id)

    def update_progress(self, task_id: int, progress: int) -> Task:
        """Set progress as given (no clamping) and derive the status from it."""
        with transaction(self.db):
            task = self.get_task(task_id)

            task.progress = progress
            task.status = derive_task_status(progress, task.status)
            task.updated_at = datetime.utcnow()

            task = task_crud.save(self.db, task)

            self.propagator.category_changed(task.category_id)
            self._notify_teams(task.team_id)
            return task

    def mark_received(self, task_id: int) -> Task:
        return self._set_flag(task_id, "is_received")

    def mark_paid(self, task_id: int) -> Task:
        return self._set_flag(task_id, "is_paid")

    def _set_flag(self, task_id: int, flag: str) -> Task:
        # One-way flags; they do not feed category stats
        with transaction(self.db):
            task = self.get_task(task_id)
            setattr(task, flag, True)
            task.updated_at = datetime.utcnow()
            return task_crud.save(self.db, task)

    def _apply_fields(self, task: Task, task_data: TaskBase) -> None:
        for field in TASK_MUTABLE_FIELDS:
            setattr(task, field, getattr(task_data, field))
        task.amount = Decimal(str(task_data.amount))

    def _resolve_team_id(self, team_id: int) -> int:
        team = team_crud.get(self.db, team_id)
        if not team:
            raise NotFoundError("Team", team_id)
        return team.id

    def _notify_teams(self, *team_ids: Optional[int]) -> None:
        for team_id in sorted({t for t in team_ids if t is not None}):
            self.propagator.team_changed(team_id)
