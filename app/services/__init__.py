# app/services/__init__.py
"""
Service layer: entity lifecycles and the stats recomputation cascade.
"""

from app.services.stats_propagator import StatsPropagator, ServiceStatsPropagator
from app.services.category_service import CategoryService, derive_category_status
from app.services.task_service import TaskService, derive_task_status
from app.services.team_service import TeamService
from app.services.villa_service import VillaService
from app.services.project_service import ProjectService

__all__ = [
    "StatsPropagator",
    "ServiceStatsPropagator",
    "CategoryService",
    "derive_category_status",
    "TaskService",
    "derive_task_status",
    "TeamService",
    "VillaService",
    "ProjectService",
]
