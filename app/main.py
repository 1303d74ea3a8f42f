from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from contextlib import asynccontextmanager
import logging

from app.database.engine import create_db_and_tables
from app.routers import projects, villas, categories, teams, tasks
from app.models import project, category, team, task
from app.core.config import settings

# Configure logging
logging.basicConfig(level=settings.LOG_LEVEL)
logger = logging.getLogger(__name__)

@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Starting application...")

    if settings.CREATE_TABLES_ON_STARTUP:
        create_db_and_tables()
        logger.info("✓ Database tables ready")

    if settings.CASCADE_TEAM_STATS:
        logger.info("✓ Team stats follow task changes")
    else:
        logger.info("Team stats are recomputed on explicit request only")

    logger.info("Application startup complete")

    yield

    logger.info("Application shutdown complete")

app = FastAPI(
    title="Chantier Tracker Backend",
    description="Construction project tracking API: projects, villas, categories, tasks and teams",
    version="1.0.0",
    lifespan=lifespan
)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=[
        settings.FRONTEND_URL,  # Frontend URL from settings
        "http://localhost:3000",
        "http://127.0.0.1:3000",
    ],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(projects.router)
app.include_router(villas.router)
app.include_router(categories.router)
app.include_router(tasks.router)
app.include_router(teams.router)

@app.get("/")
def read_root():
    return {
        "message": "Welcome to Chantier Tracker API",
        "version": "1.0.0",
        "modules": {
            "projects": "/projects/* (construction sites)",
            "villas": "/villas/* (buildings within a project)",
            "categories": "/categories/* (work categories with derived progress)",
            "tasks": "/tasks/* (tasks, progress, receipt and payment)",
            "teams": "/teams/* (teams and performance stats)"
        },
        "docs": "/docs",
        "redoc": "/redoc"
    }

@app.get("/health")
def health_check():
    return {"status": "healthy"}
