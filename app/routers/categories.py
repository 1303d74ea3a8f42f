# app/routers/categories.py
import logging
from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlmodel import Session
from typing import List, Optional

from app.core.exceptions import NotFoundError
from app.database.engine import get_db
from app.models.category import CategoryStatus
from app.schemas.category import Category, CategoryCreate, CategoryUpdate
from app.schemas.common import Message
from app.services.category_service import CategoryService

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/categories",
    tags=["categories"],
    responses={404: {"description": "Not found"}},
)

def get_category_service(db: Session = Depends(get_db)) -> CategoryService:
    return CategoryService(db)

def _to_schema(categories) -> List[Category]:
    return [Category.model_validate(category) for category in categories]

@router.get("/", response_model=List[Category])
def get_categories(
    villa_id: Optional[int] = Query(None, alias="villaId"),
    service: CategoryService = Depends(get_category_service)
):
    """Get all categories, or the categories of one villa."""
    return _to_schema(service.get_categories(villa_id=villa_id))

@router.get("/project/{project_id}", response_model=List[Category])
def get_project_categories(project_id: int, service: CategoryService = Depends(get_category_service)):
    return _to_schema(service.get_project_categories(project_id))

@router.get("/team/{team_id}", response_model=List[Category])
def get_team_categories(team_id: int, service: CategoryService = Depends(get_category_service)):
    return _to_schema(service.get_team_categories(team_id))

@router.get("/status/{category_status}", response_model=List[Category])
def get_categories_by_status(
    category_status: CategoryStatus,
    service: CategoryService = Depends(get_category_service)
):
    return _to_schema(service.get_categories_by_status(category_status))

@router.get("/{category_id}", response_model=Category)
def get_category(category_id: int, service: CategoryService = Depends(get_category_service)):
    try:
        return Category.model_validate(service.get_category(category_id))
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))

@router.post("/", response_model=Category)
def create_category(category_data: CategoryCreate, service: CategoryService = Depends(get_category_service)):
    try:
        return Category.model_validate(service.create_category(category_data))
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except Exception as e:
        logger.error(f"Failed to create category: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to create category: {str(e)}"
        )

@router.put("/{category_id}", response_model=Category)
def update_category(
    category_id: int,
    category_data: CategoryUpdate,
    service: CategoryService = Depends(get_category_service)
):
    try:
        return Category.model_validate(service.update_category(category_id, category_data))
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except Exception as e:
        logger.error(f"Failed to update category {category_id}: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to update category: {str(e)}"
        )

@router.delete("/{category_id}", response_model=Message)
def delete_category(category_id: int, service: CategoryService = Depends(get_category_service)):
    """Delete a category and its tasks."""
    try:
        service.delete_category(category_id)
        return Message(message="Category deleted successfully")
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except Exception as e:
        logger.error(f"Failed to delete category {category_id}: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to delete category: {str(e)}"
        )

@router.put("/{category_id}/stats", response_model=Category)
def recompute_category_stats(category_id: int, service: CategoryService = Depends(get_category_service)):
    """Recompute task counters, progress and status from the category's tasks."""
    try:
        return Category.model_validate(service.recompute_stats(category_id))
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except Exception as e:
        logger.error(f"Failed to recompute stats of category {category_id}: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to recompute category stats: {str(e)}"
        )
