# app/crud/base.py
from sqlmodel import Session, SQLModel, select
from typing import Generic, TypeVar, Type, List, Optional

ModelType = TypeVar("ModelType", bound=SQLModel)

class CRUDBase(Generic[ModelType]):
    """
    Store operations shared by every entity.

    Writes are flushed, never committed: the caller owns the transaction
    (see ``app.database.engine.transaction``).
    """

    def __init__(self, model: Type[ModelType]):
        self.model = model

    def get(self, db: Session, obj_id: int) -> Optional[ModelType]:
        return db.get(self.model, obj_id)

    def get_all(self, db: Session) -> List[ModelType]:
        return db.exec(select(self.model).order_by(self.model.id)).all()

    def save(self, db: Session, obj: ModelType) -> ModelType:
        """Insert or update; the id is assigned on first save."""
        db.add(obj)
        db.flush()
        db.refresh(obj)
        return obj

    def delete(self, db: Session, obj: ModelType) -> None:
        db.delete(obj)
        db.flush()
