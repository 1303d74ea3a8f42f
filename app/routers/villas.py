# app/routers/villas.py
import logging
from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlmodel import Session
from typing import List, Optional

from app.core.exceptions import NotFoundError
from app.database.engine import get_db
from app.schemas.common import Message
from app.schemas.project import Villa, VillaCreate, VillaUpdate
from app.services.villa_service import VillaService

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/villas",
    tags=["villas"],
    responses={404: {"description": "Not found"}},
)

def get_villa_service(db: Session = Depends(get_db)) -> VillaService:
    return VillaService(db)

@router.get("/", response_model=List[Villa])
def get_villas(
    project_id: Optional[int] = Query(None, alias="projectId"),
    service: VillaService = Depends(get_villa_service)
):
    return [Villa.model_validate(villa) for villa in service.get_villas(project_id=project_id)]

@router.get("/{villa_id}", response_model=Villa)
def get_villa(villa_id: int, service: VillaService = Depends(get_villa_service)):
    try:
        return Villa.model_validate(service.get_villa(villa_id))
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))

@router.post("/", response_model=Villa)
def create_villa(villa_data: VillaCreate, service: VillaService = Depends(get_villa_service)):
    try:
        return Villa.model_validate(service.create_villa(villa_data))
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except Exception as e:
        logger.error(f"Failed to create villa: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to create villa: {str(e)}"
        )

@router.put("/{villa_id}", response_model=Villa)
def update_villa(villa_id: int, villa_data: VillaUpdate, service: VillaService = Depends(get_villa_service)):
    try:
        return Villa.model_validate(service.update_villa(villa_id, villa_data))
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except Exception as e:
        logger.error(f"Failed to update villa {villa_id}: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to update villa: {str(e)}"
        )

@router.delete("/{villa_id}", response_model=Message)
def delete_villa(villa_id: int, service: VillaService = Depends(get_villa_service)):
    """Delete a villa with its categories and tasks."""
    try:
        service.delete_villa(villa_id)
        return Message(message="Villa deleted successfully")
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except Exception as e:
        logger.error(f"Failed to delete villa {villa_id}: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to delete villa: {str(e)}"
        )

@router.put("/{villa_id}/stats", response_model=Villa)
def update_villa_stats(villa_id: int, service: VillaService = Depends(get_villa_service)):
    try:
        return Villa.model_validate(service.update_villa_stats(villa_id))
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except Exception as e:
        logger.error(f"Failed to update stats of villa {villa_id}: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to update villa stats: {str(e)}"
        )
