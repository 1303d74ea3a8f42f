# app/services/villa_service.py
"""Villa lifecycle and villa-level rollups of category stats."""
import logging
from datetime import datetime
from typing import List, Optional
from sqlmodel import Session

from app.core.exceptions import NotFoundError
from app.crud.category import category_crud
from app.crud.project import project_crud, villa_crud
from app.crud.task import task_crud
from app.database.engine import transaction
from app.models.project import Villa, VillaStatus
from app.schemas.project import VillaCreate, VillaUpdate
from app.services.stats_propagator import StatsPropagator, ServiceStatsPropagator

logger = logging.getLogger(__name__)


class VillaService:
    def __init__(self, db: Session, propagator: Optional[StatsPropagator] = None):
        self.db = db
        self.propagator = propagator or ServiceStatsPropagator(db)

    def get_villa(self, villa_id: int) -> Villa:
        villa = villa_crud.get(self.db, villa_id)
        if not villa:
            raise NotFoundError("Villa", villa_id)
        return villa

    def get_villas(self, project_id: Optional[int] = None) -> List[Villa]:
        return villa_crud.get_villas(self.db, project_id=project_id)

    def create_villa(self, villa_data: VillaCreate) -> Villa:
        with transaction(self.db):
            project = project_crud.get(self.db, villa_data.project_id)
            if not project:
                raise NotFoundError("Project", villa_data.project_id)

            villa = Villa(**villa_data.model_dump(exclude={"project_id"}), project_id=project.id)
            villa = villa_crud.save(self.db, villa)
            logger.info(f"Created villa {villa.id} in project {project.id}")
            return villa

    def update_villa(self, villa_id: int, villa_data: VillaUpdate) -> Villa:
        with transaction(self.db):
            villa = self.get_villa(villa_id)
            villa.name = villa_data.name
            villa.type = villa_data.type
            villa.surface = villa_data.surface
            villa.status = villa_data.status
            villa.last_modified = datetime.utcnow()
            return villa_crud.save(self.db, villa)

    def delete_villa(self, villa_id: int) -> None:
        """
        Delete a villa with its categories and their tasks.

        A task may point at a category of another villa; such tasks go with
        this villa and their surviving categories are recomputed afterwards.
        """
        with transaction(self.db):
            villa = self.get_villa(villa_id)
            categories = category_crud.get_villa_categories(self.db, villa_id)
            category_ids = {category.id for category in categories}

            tasks = {task.id: task for task in task_crud.get_villa_tasks(self.db, villa_id)}
            for category in categories:
                for task in task_crud.get_category_tasks(self.db, category.id):
                    tasks[task.id] = task

            team_ids = set()
            other_category_ids = set()
            other_villa_ids = set()
            for task in tasks.values():
                if task.team_id is not None:
                    team_ids.add(task.team_id)
                if task.category_id not in category_ids:
                    other_category_ids.add(task.category_id)
                elif task.villa_id != villa_id:
                    other_villa_ids.add(task.villa_id)
                task_crud.delete(self.db, task)
            for category in categories:
                category_crud.delete(self.db, category)

            villa_crud.delete(self.db, villa)
            logger.info(f"Deleted villa {villa_id}")

            for category_id in sorted(other_category_ids):
                self.propagator.category_changed(category_id)
            for other_villa_id in sorted(other_villa_ids):
                self.propagator.villa_changed(other_villa_id)
            for team_id in sorted(team_ids):
                self.propagator.team_changed(team_id)

    def update_villa_stats(self, villa_id: int) -> Villa:
        """
        Roll category stats up to the villa.

        Progress is the floored mean of category progress; with no categories
        progress and status keep their stored values.
        """
        with transaction(self.db):
            villa = self.get_villa(villa_id)
            categories = category_crud.get_villa_categories(self.db, villa_id)

            villa.categories_count = len(categories)
            villa.tasks_count = task_crud.count_villa_tasks(self.db, villa_id)

            if categories:
                villa.progress = sum(c.progress for c in categories) // len(categories)
                if villa.progress == 100:
                    villa.status = VillaStatus.COMPLETED
                elif villa.progress > 0:
                    villa.status = VillaStatus.IN_PROGRESS

            villa.last_modified = datetime.utcnow()
            return villa_crud.save(self.db, villa)
