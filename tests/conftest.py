import os

# Keep the application engine off PostgreSQL; tests use their own engine below
os.environ.setdefault("DATABASE_URL", "sqlite://")

import pytest
from fastapi.testclient import TestClient
from sqlmodel import Session, SQLModel, create_engine
from sqlmodel.pool import StaticPool

from app.main import app
from app.database.engine import get_db
from app.models.project import Project, Villa
from app.models.category import Category
from app.models.team import Team

# Test database setup
@pytest.fixture(name="session")
def session_fixture():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool
    )
    SQLModel.metadata.create_all(engine)
    with Session(engine) as session:
        yield session

@pytest.fixture(name="client")
def client_fixture(session: Session):
    def get_session_override():
        return session

    app.dependency_overrides[get_db] = get_session_override
    client = TestClient(app)
    yield client
    app.dependency_overrides.clear()

@pytest.fixture(name="project")
def project_fixture(session: Session):
    project = Project(name="Residence Les Palmiers", location="Marrakech")
    session.add(project)
    session.commit()
    session.refresh(project)
    return project

@pytest.fixture(name="villa")
def villa_fixture(session: Session, project: Project):
    villa = Villa(project_id=project.id, name="Villa A1", type="F4", surface=180.0)
    session.add(villa)
    session.commit()
    session.refresh(villa)
    return villa

@pytest.fixture(name="category")
def category_fixture(session: Session, villa: Villa):
    category = Category(villa_id=villa.id, name="Gros oeuvre")
    session.add(category)
    session.commit()
    session.refresh(category)
    return category

@pytest.fixture(name="team")
def team_fixture(session: Session):
    team = Team(name="Equipe Maconnerie", specialty="Maconnerie", members_count=6)
    session.add(team)
    session.commit()
    session.refresh(team)
    return team
