# app/services/project_service.py
import logging
from datetime import datetime
from decimal import Decimal
from typing import List, Optional
from sqlmodel import Session

from app.core.exceptions import NotFoundError
from app.crud.project import project_crud, villa_crud
from app.database.engine import transaction
from app.models.project import Project
from app.schemas.project import ProjectCreate, ProjectUpdate
from app.services.stats_propagator import StatsPropagator, ServiceStatsPropagator
from app.services.villa_service import VillaService

logger = logging.getLogger(__name__)


class ProjectService:
    def __init__(self, db: Session, propagator: Optional[StatsPropagator] = None):
        self.db = db
        self.propagator = propagator or ServiceStatsPropagator(db)

    def get_project(self, project_id: int) -> Project:
        project = project_crud.get(self.db, project_id)
        if not project:
            raise NotFoundError("Project", project_id)
        return project

    def get_projects(self) -> List[Project]:
        return project_crud.get_projects(self.db)

    def create_project(self, project_data: ProjectCreate) -> Project:
        with transaction(self.db):
            project = Project(**project_data.model_dump(exclude={"budget"}))
            project.budget = _to_decimal(project_data.budget)
            project = project_crud.save(self.db, project)
            logger.info(f"Created project {project.id}")
            return project

    def update_project(self, project_id: int, project_data: ProjectUpdate) -> Project:
        with transaction(self.db):
            project = self.get_project(project_id)
            for field, value in project_data.model_dump(exclude={"budget"}).items():
                setattr(project, field, value)
            project.budget = _to_decimal(project_data.budget)
            project.updated_at = datetime.utcnow()
            return project_crud.save(self.db, project)

    def delete_project(self, project_id: int) -> None:
        """Delete a project and everything below it."""
        with transaction(self.db):
            project = self.get_project(project_id)
            villa_service = VillaService(self.db, propagator=self.propagator)
            for villa in villa_crud.get_villas(self.db, project_id=project_id):
                villa_service.delete_villa(villa.id)
            project_crud.delete(self.db, project)
            logger.info(f"Deleted project {project_id}")


def _to_decimal(value: Optional[float]) -> Optional[Decimal]:
    return Decimal(str(value)) if value is not None else None
