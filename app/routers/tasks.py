# app/routers/tasks.py
import logging
from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlmodel import Session
from typing import List, Optional

from app.core.exceptions import NotFoundError
from app.database.engine import get_db
from app.models.task import TaskStatus, ProgressStatus
from app.schemas.common import Message
from app.schemas.task import Task, TaskCreate, TaskUpdate, TaskProgressUpdate, ProjectAmounts
from app.services.task_service import TaskService

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/tasks",
    tags=["tasks"],
    responses={404: {"description": "Not found"}},
)

def get_task_service(db: Session = Depends(get_db)) -> TaskService:
    return TaskService(db)

def _to_schema(tasks) -> List[Task]:
    return [Task.model_validate(task) for task in tasks]

# ========================================
# LISTING ENDPOINTS
# ========================================

@router.get("/", response_model=List[Task])
def get_tasks(
    category_id: Optional[int] = Query(None, alias="categoryId"),
    service: TaskService = Depends(get_task_service)
):
    """Get all tasks, most recently updated first, or the tasks of one category."""
    return _to_schema(service.get_tasks(category_id=category_id))

@router.get("/unreceived", response_model=List[Task])
def get_unreceived_completed_tasks(service: TaskService = Depends(get_task_service)):
    """Completed tasks whose work has not been received yet."""
    return _to_schema(service.get_unreceived_completed_tasks())

@router.get("/unpaid", response_model=List[Task])
def get_unpaid_tasks(service: TaskService = Depends(get_task_service)):
    return _to_schema(service.get_unpaid_tasks())

@router.get("/villa/{villa_id}", response_model=List[Task])
def get_villa_tasks(villa_id: int, service: TaskService = Depends(get_task_service)):
    return _to_schema(service.get_villa_tasks(villa_id))

@router.get("/project/{project_id}", response_model=List[Task])
def get_project_tasks(project_id: int, service: TaskService = Depends(get_task_service)):
    return _to_schema(service.get_project_tasks(project_id))

@router.get("/project/{project_id}/amounts", response_model=ProjectAmounts)
def get_project_amounts(project_id: int, service: TaskService = Depends(get_task_service)):
    """Total and paid task amounts for a project."""
    return ProjectAmounts(**service.get_project_amounts(project_id))

@router.get("/team/{team_id}", response_model=List[Task])
def get_team_tasks(team_id: int, service: TaskService = Depends(get_task_service)):
    return _to_schema(service.get_team_tasks(team_id))

@router.get("/status/{task_status}", response_model=List[Task])
def get_tasks_by_status(task_status: TaskStatus, service: TaskService = Depends(get_task_service)):
    return _to_schema(service.get_tasks_by_status(task_status))

@router.get("/progress-status/{progress_status}", response_model=List[Task])
def get_tasks_by_progress_status(
    progress_status: ProgressStatus,
    service: TaskService = Depends(get_task_service)
):
    return _to_schema(service.get_tasks_by_progress_status(progress_status))

# ========================================
# TASK ENDPOINTS
# ========================================

@router.get("/{task_id}", response_model=Task)
def get_task(task_id: int, service: TaskService = Depends(get_task_service)):
    try:
        return Task.model_validate(service.get_task(task_id))
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))

@router.post("/", response_model=Task)
def create_task(task_data: TaskCreate, service: TaskService = Depends(get_task_service)):
    """Create a task and refresh its category's stats."""
    try:
        return Task.model_validate(service.create_task(task_data))
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except Exception as e:
        logger.error(f"Failed to create task: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to create task: {str(e)}"
        )

@router.put("/{task_id}", response_model=Task)
def update_task(task_id: int, task_data: TaskUpdate, service: TaskService = Depends(get_task_service)):
    """Replace every mutable field of a task."""
    try:
        return Task.model_validate(service.update_task(task_id, task_data))
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except Exception as e:
        logger.error(f"Failed to update task {task_id}: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to update task: {str(e)}"
        )

@router.delete("/{task_id}", response_model=Message)
def delete_task(task_id: int, service: TaskService = Depends(get_task_service)):
    try:
        service.delete_task(task_id)
        return Message(message="Task deleted successfully")
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except Exception as e:
        logger.error(f"Failed to delete task {task_id}: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to delete task: {str(e)}"
        )

# ========================================
# TASK ACTIONS
# ========================================

@router.put("/{task_id}/progress", response_model=Task)
def update_task_progress(
    task_id: int,
    progress_data: TaskProgressUpdate,
    service: TaskService = Depends(get_task_service)
):
    """Set progress; 100 completes the task, anything above 0 starts it."""
    try:
        return Task.model_validate(service.update_progress(task_id, progress_data.progress))
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except Exception as e:
        logger.error(f"Failed to update progress of task {task_id}: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to update task progress: {str(e)}"
        )

@router.put("/{task_id}/receive", response_model=Task)
def mark_task_received(task_id: int, service: TaskService = Depends(get_task_service)):
    try:
        return Task.model_validate(service.mark_received(task_id))
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except Exception as e:
        logger.error(f"Failed to mark task {task_id} received: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to mark task received: {str(e)}"
        )

@router.put("/{task_id}/pay", response_model=Task)
def mark_task_paid(task_id: int, service: TaskService = Depends(get_task_service)):
    try:
        return Task.model_validate(service.mark_paid(task_id))
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except Exception as e:
        logger.error(f"Failed to mark task {task_id} paid: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to mark task paid: {str(e)}"
        )
