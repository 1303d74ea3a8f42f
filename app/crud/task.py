# app/crud/task.py
from sqlmodel import Session, select, func
from typing import List, Optional

from app.crud.base import CRUDBase
from app.models.task import Task, TaskStatus, ProgressStatus
from app.models.category import Category
from app.models.project import Villa

class TaskCRUD(CRUDBase[Task]):
    def get_tasks(self, db: Session) -> List[Task]:
        """Get all tasks, most recently updated first."""
        query = select(Task).order_by(Task.updated_at.desc(), Task.id.desc())
        return db.exec(query).all()

    def get_category_tasks(self, db: Session, category_id: int) -> List[Task]:
        query = select(Task).where(Task.category_id == category_id).order_by(Task.id)
        return db.exec(query).all()

    def get_villa_tasks(self, db: Session, villa_id: int) -> List[Task]:
        query = select(Task).where(Task.villa_id == villa_id).order_by(Task.id)
        return db.exec(query).all()

    def get_team_tasks(self, db: Session, team_id: int) -> List[Task]:
        query = select(Task).where(Task.team_id == team_id).order_by(Task.id)
        return db.exec(query).all()

    def get_project_tasks(self, db: Session, project_id: int) -> List[Task]:
        """Tasks reachable through Task -> Category -> Villa -> Project."""
        query = self._project_scope(select(Task), project_id).order_by(Task.id)
        return db.exec(query).all()

    def get_tasks_by_status(self, db: Session, status: TaskStatus) -> List[Task]:
        query = select(Task).where(Task.status == status).order_by(Task.id)
        return db.exec(query).all()

    def get_tasks_by_progress_status(self, db: Session, progress_status: ProgressStatus) -> List[Task]:
        query = select(Task).where(Task.progress_status == progress_status).order_by(Task.id)
        return db.exec(query).all()

    def get_unreceived_completed_tasks(self, db: Session) -> List[Task]:
        query = (
            select(Task)
            .where(Task.is_received == False, Task.status == TaskStatus.COMPLETED)
            .order_by(Task.id)
        )
        return db.exec(query).all()

    def get_unpaid_tasks(self, db: Session) -> List[Task]:
        query = select(Task).where(Task.is_paid == False).order_by(Task.id)
        return db.exec(query).all()

    def count_category_tasks(self, db: Session, category_id: int, status: Optional[TaskStatus] = None) -> int:
        query = select(func.count(Task.id)).where(Task.category_id == category_id)
        if status:
            query = query.where(Task.status == status)
        return db.exec(query).one()

    def count_villa_tasks(self, db: Session, villa_id: int) -> int:
        return db.exec(select(func.count(Task.id)).where(Task.villa_id == villa_id)).one()

    def get_total_amount_by_project(self, db: Session, project_id: int) -> Optional[float]:
        """Sum of task amounts in a project; None when no task matches."""
        query = self._project_scope(select(func.sum(Task.amount)), project_id)
        total = db.exec(query).one()
        return float(total) if total is not None else None

    def get_paid_amount_by_project(self, db: Session, project_id: int) -> Optional[float]:
        query = self._project_scope(select(func.sum(Task.amount)), project_id).where(Task.is_paid == True)
        total = db.exec(query).one()
        return float(total) if total is not None else None

    @staticmethod
    def _project_scope(query, project_id: int):
        return (
            query
            .select_from(Task)
            .join(Category, Task.category_id == Category.id)
            .join(Villa, Category.villa_id == Villa.id)
            .where(Villa.project_id == project_id)
        )

# Create instances
task_crud = TaskCRUD(Task)
