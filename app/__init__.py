# Import all models to ensure they are registered with SQLModel
from app.models import project, category, team, task

__all__ = [
    "project",
    "category",
    "team",
    "task",
]
