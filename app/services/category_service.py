# app/services/category_service.py
"""
Category lifecycle and stats recomputation.

A category's ``tasks_count``, ``completed_tasks``, ``progress`` and
``status`` are caches derived from its tasks. They are refreshed by
``recompute_stats`` whenever a task of the category changes.
"""
import logging
from typing import List, Optional
from sqlmodel import Session

from app.core.exceptions import NotFoundError
from app.crud.category import category_crud
from app.crud.project import villa_crud
from app.crud.task import task_crud
from app.crud.team import team_crud
from app.database.engine import transaction
from app.models.category import Category, CategoryStatus
from app.models.task import TaskStatus
from app.schemas.category import CategoryCreate, CategoryUpdate
from app.services.stats_propagator import StatsPropagator, ServiceStatsPropagator

logger = logging.getLogger(__name__)


def derive_category_status(progress: int) -> CategoryStatus:
    """Map a completion percentage to a category status; first match wins."""
    if progress == 100:
        return CategoryStatus.ON_SCHEDULE
    if progress > 75:
        return CategoryStatus.IN_PROGRESS
    if progress > 50:
        return CategoryStatus.WARNING
    return CategoryStatus.DELAYED


class CategoryService:
    def __init__(self, db: Session, propagator: Optional[StatsPropagator] = None):
        self.db = db
        self.propagator = propagator or ServiceStatsPropagator(db)

    # Queries

    def get_category(self, category_id: int) -> Category:
        category = category_crud.get(self.db, category_id)
        if not category:
            raise NotFoundError("Category", category_id)
        return category

    def get_categories(self, villa_id: Optional[int] = None) -> List[Category]:
        if villa_id is not None:
            return category_crud.get_villa_categories(self.db, villa_id)
        return category_crud.get_all(self.db)

    def get_project_categories(self, project_id: int) -> List[Category]:
        return category_crud.get_project_categories(self.db, project_id)

    def get_team_categories(self, team_id: int) -> List[Category]:
        return category_crud.get_team_categories(self.db, team_id)

    def get_categories_by_status(self, status: CategoryStatus) -> List[Category]:
        return category_crud.get_categories_by_status(self.db, status)

    # Mutations

    def create_category(self, category_data: CategoryCreate) -> Category:
        with transaction(self.db):
            villa = villa_crud.get(self.db, category_data.villa_id)
            if not villa:
                raise NotFoundError("Villa", category_data.villa_id)

            category = Category(
                **category_data.model_dump(exclude={"villa_id", "team_id"}),
                villa_id=villa.id
            )
            if category_data.team_id is not None:
                category.team_id = self._resolve_team_id(category_data.team_id)

            category = category_crud.save(self.db, category)
            logger.info(f"Created category {category.id} in villa {villa.id}")

            self.propagator.villa_changed(villa.id)
            return category

    def update_category(self, category_id: int, category_data: CategoryUpdate) -> Category:
        with transaction(self.db):
            category = self.get_category(category_id)

            category.name = category_data.name
            category.start_date = category_data.start_date
            category.end_date = category_data.end_date
            category.progress = category_data.progress
            category.status = category_data.status

            if category_data.team_id is not None:
                category.team_id = self._resolve_team_id(category_data.team_id)

            category = category_crud.save(self.db, category)
            self.propagator.villa_changed(category.villa_id)
            return category

    def delete_category(self, category_id: int) -> None:
        """Delete a category together with its tasks."""
        with transaction(self.db):
            category = self.get_category(category_id)
            owner_villa_id = category.villa_id
            villa_ids = {owner_villa_id}

            team_ids = set()
            for task in task_crud.get_category_tasks(self.db, category_id):
                if task.team_id is not None:
                    team_ids.add(task.team_id)
                # Task counts of a villa follow the task's own villa
                villa_ids.add(task.villa_id)
                task_crud.delete(self.db, task)

            category_crud.delete(self.db, category)
            logger.info(f"Deleted category {category_id} from villa {owner_villa_id}")

            for villa_id in sorted(villa_ids):
                self.propagator.villa_changed(villa_id)
            for team_id in sorted(team_ids):
                self.propagator.team_changed(team_id)

    def recompute_stats(self, category_id: int) -> Category:
        """
        Refresh the task counters, progress and status of a category, then
        propagate to its villa.

        With no tasks, progress and status keep their stored values.
        """
        with transaction(self.db):
            category = self.get_category(category_id)

            tasks_count = task_crud.count_category_tasks(self.db, category_id)
            completed_tasks = task_crud.count_category_tasks(
                self.db, category_id, status=TaskStatus.COMPLETED
            )
            category.tasks_count = tasks_count
            category.completed_tasks = completed_tasks

            if tasks_count > 0:
                category.progress = (completed_tasks * 100) // tasks_count
                category.status = derive_category_status(category.progress)

            category = category_crud.save(self.db, category)
            logger.debug(
                f"Category {category_id} stats: {completed_tasks}/{tasks_count} "
                f"tasks, progress={category.progress}, status={category.status.value}"
            )

            self.propagator.villa_changed(category.villa_id)
            return category

    def _resolve_team_id(self, team_id: int) -> int:
        team = team_crud.get(self.db, team_id)
        if not team:
            raise NotFoundError("Team", team_id)
        return team.id
