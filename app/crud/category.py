# app/crud/category.py
from sqlmodel import Session, select
from typing import List

from app.crud.base import CRUDBase
from app.models.category import Category, CategoryStatus
from app.models.project import Villa

class CategoryCRUD(CRUDBase[Category]):
    def get_villa_categories(self, db: Session, villa_id: int) -> List[Category]:
        query = select(Category).where(Category.villa_id == villa_id).order_by(Category.id)
        return db.exec(query).all()

    def get_project_categories(self, db: Session, project_id: int) -> List[Category]:
        """Get categories of every villa in a project."""
        query = (
            select(Category)
            .join(Villa, Category.villa_id == Villa.id)
            .where(Villa.project_id == project_id)
            .order_by(Category.id)
        )
        return db.exec(query).all()

    def get_team_categories(self, db: Session, team_id: int) -> List[Category]:
        query = select(Category).where(Category.team_id == team_id).order_by(Category.id)
        return db.exec(query).all()

    def get_categories_by_status(self, db: Session, status: CategoryStatus) -> List[Category]:
        query = select(Category).where(Category.status == status).order_by(Category.id)
        return db.exec(query).all()

# Create instances
category_crud = CategoryCRUD(Category)
