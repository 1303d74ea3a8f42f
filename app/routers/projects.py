# app/routers/projects.py
import logging
from fastapi import APIRouter, Depends, HTTPException, status
from sqlmodel import Session
from typing import List

from app.core.exceptions import NotFoundError
from app.database.engine import get_db
from app.schemas.common import Message
from app.schemas.project import Project, ProjectCreate, ProjectUpdate
from app.services.project_service import ProjectService

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/projects",
    tags=["projects"],
    responses={404: {"description": "Not found"}},
)

def get_project_service(db: Session = Depends(get_db)) -> ProjectService:
    return ProjectService(db)

@router.get("/", response_model=List[Project])
def get_projects(service: ProjectService = Depends(get_project_service)):
    return [Project.model_validate(project) for project in service.get_projects()]

@router.get("/{project_id}", response_model=Project)
def get_project(project_id: int, service: ProjectService = Depends(get_project_service)):
    try:
        return Project.model_validate(service.get_project(project_id))
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))

@router.post("/", response_model=Project)
def create_project(project_data: ProjectCreate, service: ProjectService = Depends(get_project_service)):
    try:
        return Project.model_validate(service.create_project(project_data))
    except Exception as e:
        logger.error(f"Failed to create project: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to create project: {str(e)}"
        )

@router.put("/{project_id}", response_model=Project)
def update_project(
    project_id: int,
    project_data: ProjectUpdate,
    service: ProjectService = Depends(get_project_service)
):
    try:
        return Project.model_validate(service.update_project(project_id, project_data))
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except Exception as e:
        logger.error(f"Failed to update project {project_id}: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to update project: {str(e)}"
        )

@router.delete("/{project_id}", response_model=Message)
def delete_project(project_id: int, service: ProjectService = Depends(get_project_service)):
    """Delete a project with its villas, categories and tasks."""
    try:
        service.delete_project(project_id)
        return Message(message="Project deleted successfully")
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except Exception as e:
        logger.error(f"Failed to delete project {project_id}: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to delete project: {str(e)}"
        )
