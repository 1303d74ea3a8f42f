# app/crud/project.py
from sqlmodel import Session, select
from typing import List, Optional

from app.crud.base import CRUDBase
from app.models.project import Project, Villa

class ProjectCRUD(CRUDBase[Project]):
    def get_projects(self, db: Session) -> List[Project]:
        """Get all projects, newest first."""
        query = select(Project).order_by(Project.created_at.desc(), Project.id.desc())
        return db.exec(query).all()

class VillaCRUD(CRUDBase[Villa]):
    def get_villas(self, db: Session, project_id: Optional[int] = None) -> List[Villa]:
        """Get villas, optionally restricted to one project."""
        query = select(Villa)
        if project_id:
            query = query.where(Villa.project_id == project_id)
        return db.exec(query.order_by(Villa.id)).all()

# Create instances
project_crud = ProjectCRUD(Project)
villa_crud = VillaCRUD(Villa)
