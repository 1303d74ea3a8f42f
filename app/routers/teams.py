# app/routers/teams.py
import logging
from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlmodel import Session
from typing import List

from app.core.exceptions import NotFoundError
from app.database.engine import get_db
from app.schemas.common import Message
from app.schemas.team import Team, TeamCreate, TeamUpdate, TeamPerformance
from app.services.team_service import TeamService

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/teams",
    tags=["teams"],
    responses={404: {"description": "Not found"}},
)

def get_team_service(db: Session = Depends(get_db)) -> TeamService:
    return TeamService(db)

def _to_schema(teams) -> List[Team]:
    return [Team.model_validate(team) for team in teams]

# ========================================
# LISTING ENDPOINTS
# ========================================

@router.get("/", response_model=List[Team])
def get_teams(service: TeamService = Depends(get_team_service)):
    return _to_schema(service.get_teams())

@router.get("/search", response_model=List[Team])
def search_teams(q: str = Query(..., min_length=1), service: TeamService = Depends(get_team_service)):
    """Search teams by name or specialty."""
    return _to_schema(service.search_teams(q))

@router.get("/specialty/{specialty}", response_model=List[Team])
def get_teams_by_specialty(specialty: str, service: TeamService = Depends(get_team_service)):
    return _to_schema(service.get_teams_by_specialty(specialty))

@router.get("/active", response_model=List[Team])
def get_active_teams(service: TeamService = Depends(get_team_service)):
    """Teams with at least one pending or in-progress task."""
    return _to_schema(service.get_active_teams())

@router.get("/performance", response_model=List[Team])
def get_teams_by_performance(service: TeamService = Depends(get_team_service)):
    return _to_schema(service.get_teams_by_performance())

@router.get("/average-performance", response_model=TeamPerformance)
def get_average_performance(service: TeamService = Depends(get_team_service)):
    return TeamPerformance(average_performance=service.get_average_performance())

# ========================================
# TEAM ENDPOINTS
# ========================================

@router.get("/{team_id}", response_model=Team)
def get_team(team_id: int, service: TeamService = Depends(get_team_service)):
    try:
        return Team.model_validate(service.get_team(team_id))
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))

@router.post("/", response_model=Team)
def create_team(team_data: TeamCreate, service: TeamService = Depends(get_team_service)):
    """Create a team, optionally taking over existing tasks."""
    try:
        return Team.model_validate(service.create_team(team_data))
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except Exception as e:
        logger.error(f"Failed to create team: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to create team: {str(e)}"
        )

@router.put("/{team_id}", response_model=Team)
def update_team(team_id: int, team_data: TeamUpdate, service: TeamService = Depends(get_team_service)):
    try:
        return Team.model_validate(service.update_team(team_id, team_data))
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except Exception as e:
        logger.error(f"Failed to update team {team_id}: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to update team: {str(e)}"
        )

@router.delete("/{team_id}", response_model=Message)
def delete_team(team_id: int, service: TeamService = Depends(get_team_service)):
    """Delete a team; its tasks and categories are unassigned."""
    try:
        service.delete_team(team_id)
        return Message(message="Team deleted successfully")
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except Exception as e:
        logger.error(f"Failed to delete team {team_id}: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to delete team: {str(e)}"
        )

@router.put("/{team_id}/stats", response_model=Team)
def recompute_team_stats(team_id: int, service: TeamService = Depends(get_team_service)):
    """Recompute active tasks, performance and last activity."""
    try:
        return Team.model_validate(service.recompute_stats(team_id))
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except Exception as e:
        logger.error(f"Failed to recompute stats of team {team_id}: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to recompute team stats: {str(e)}"
        )

@router.put("/{team_id}/activity", response_model=Team)
def touch_team_activity(team_id: int, service: TeamService = Depends(get_team_service)):
    try:
        return Team.model_validate(service.touch_activity(team_id))
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except Exception as e:
        logger.error(f"Failed to record activity of team {team_id}: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to record team activity: {str(e)}"
        )
