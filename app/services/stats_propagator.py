# app/services/stats_propagator.py
"""
Stats propagation contract.

Denormalized counters live on three levels (Category, Villa, Team). A mutator
never recomputes its parents itself: it notifies the propagator for the next
level, and the propagator decides what to recompute.
"""
import logging
from typing import Optional, Protocol
from sqlmodel import Session

from app.core.config import settings

logger = logging.getLogger(__name__)


class StatsPropagator(Protocol):
    def category_changed(self, category_id: int) -> None:
        """A task of this category was created, updated or deleted."""
        ...

    def villa_changed(self, villa_id: int) -> None:
        """A category of this villa changed or its stats were recomputed."""
        ...

    def team_changed(self, team_id: int) -> None:
        """A task assigned to this team changed."""
        ...


class ServiceStatsPropagator:
    """
    Default propagator backed by the services, sharing their session so the
    whole cascade runs in the caller's transaction.

    Team stats follow task changes only when ``cascade_team_stats`` is on;
    otherwise they are recomputed on explicit request.
    """

    def __init__(self, db: Session, cascade_team_stats: Optional[bool] = None):
        self.db = db
        if cascade_team_stats is None:
            cascade_team_stats = settings.CASCADE_TEAM_STATS
        self.cascade_team_stats = cascade_team_stats

    def category_changed(self, category_id: int) -> None:
        from app.services.category_service import CategoryService
        CategoryService(self.db, propagator=self).recompute_stats(category_id)

    def villa_changed(self, villa_id: int) -> None:
        from app.services.villa_service import VillaService
        VillaService(self.db, propagator=self).update_villa_stats(villa_id)

    def team_changed(self, team_id: int) -> None:
        if not self.cascade_team_stats:
            return
        from app.services.team_service import TeamService
        logger.debug(f"Cascading stats recompute to team {team_id}")
        TeamService(self.db, propagator=self).recompute_stats(team_id)
