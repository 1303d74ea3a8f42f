import pytest
from datetime import datetime
from sqlmodel import Session, select

from app.core.exceptions import NotFoundError
from app.models.category import Category
from app.models.task import Task, TaskStatus
from app.models.team import Team
from app.schemas.task import TaskCreate
from app.schemas.team import TeamCreate, TeamUpdate
from app.services.stats_propagator import ServiceStatsPropagator
from app.services.task_service import TaskService
from app.services.team_service import TeamService


def add_team_tasks(session: Session, category: Category, team: Team, statuses):
    for i, task_status in enumerate(statuses):
        session.add(Task(
            name=f"Task {i}",
            category_id=category.id,
            villa_id=category.villa_id,
            team_id=team.id,
            status=task_status
        ))
    session.commit()


class TestRecomputeStats:
    def test_counts_active_tasks_and_performance(self, session: Session, category: Category, team: Team):
        add_team_tasks(session, category, team, [
            TaskStatus.COMPLETED, TaskStatus.IN_PROGRESS, TaskStatus.PENDING, TaskStatus.DELAYED
        ])

        result = TeamService(session).recompute_stats(team.id)

        assert result.active_tasks == 2
        assert result.performance == 25
        assert result.last_activity is not None

    def test_no_tasks_keeps_performance_but_bumps_activity(self, session: Session, team: Team):
        team.performance = 42
        team.last_activity = datetime(2020, 1, 1)
        session.add(team)
        session.commit()

        result = TeamService(session).recompute_stats(team.id)

        assert result.performance == 42
        assert result.active_tasks == 0
        assert result.last_activity > datetime(2020, 1, 1)

    def test_recompute_missing_team(self, session: Session):
        with pytest.raises(NotFoundError):
            TeamService(session).recompute_stats(404)

    def test_task_changes_do_not_touch_team_by_default(self, session: Session, category: Category, team: Team):
        TaskService(session).create_task(TaskCreate(
            name="Coffrage", category_id=category.id, villa_id=category.villa_id, team_id=team.id
        ))
        session.refresh(team)
        assert team.active_tasks == 0
        assert team.last_activity is None

    def test_task_changes_cascade_when_enabled(self, session: Session, category: Category, team: Team):
        propagator = ServiceStatsPropagator(session, cascade_team_stats=True)
        service = TaskService(session, propagator=propagator)
        task = service.create_task(TaskCreate(
            name="Coffrage", category_id=category.id, villa_id=category.villa_id, team_id=team.id
        ))
        session.refresh(team)
        assert team.active_tasks == 1
        assert team.performance == 0

        service.update_progress(task.id, 100)
        session.refresh(team)
        assert team.active_tasks == 0
        assert team.performance == 100


class TestTeamLifecycle:
    def test_create_team_takes_over_tasks(self, session: Session, category: Category):
        task = Task(name="Enduit", category_id=category.id, villa_id=category.villa_id)
        session.add(task)
        session.commit()
        session.refresh(task)

        team = TeamService(session).create_team(
            TeamCreate(name="Equipe Enduit", specialty="Enduits", members_count=3, task_ids=[task.id])
        )

        session.refresh(task)
        assert task.team_id == team.id

    def test_create_team_unknown_task(self, session: Session):
        with pytest.raises(NotFoundError) as exc_info:
            TeamService(session).create_team(TeamCreate(name="Ghost team", task_ids=[404]))
        assert exc_info.value.entity == "Task"
        assert session.exec(select(Team)).all() == []

    def test_update_team(self, session: Session, team: Team):
        updated = TeamService(session).update_team(
            team.id, TeamUpdate(name="Equipe B", specialty="Carrelage", members_count=4, performance=70)
        )
        assert updated.name == "Equipe B"
        assert updated.specialty == "Carrelage"
        assert updated.members_count == 4
        assert updated.performance == 70

    def test_update_missing_team(self, session: Session):
        with pytest.raises(NotFoundError):
            TeamService(session).update_team(404, TeamUpdate(name="X"))

    def test_delete_team_unassigns_work(self, session: Session, category: Category, team: Team):
        team_id = team.id
        add_team_tasks(session, category, team, [TaskStatus.PENDING])
        category.team_id = team_id
        session.add(category)
        session.commit()

        TeamService(session).delete_team(team_id)

        assert session.get(Team, team_id) is None
        task = session.exec(select(Task)).one()
        assert task.team_id is None
        session.refresh(category)
        assert category.team_id is None

    def test_touch_activity(self, session: Session, team: Team):
        result = TeamService(session).touch_activity(team.id)
        assert result.last_activity is not None


class TestTeamQueries:
    def test_search_matches_name_or_specialty(self, session: Session, team: Team):
        session.add(Team(name="Equipe Nord", specialty="Electricite"))
        session.commit()
        service = TeamService(session)

        assert [t.name for t in service.search_teams("macon")] == ["Equipe Maconnerie"]
        assert [t.name for t in service.search_teams("ELEC")] == ["Equipe Nord"]
        assert len(service.search_teams("equipe")) == 2

    def test_specialty_lookup(self, session: Session, team: Team):
        assert [t.id for t in TeamService(session).get_teams_by_specialty("maconn")] == [team.id]

    def test_active_teams(self, session: Session, category: Category, team: Team):
        idle = Team(name="Equipe Finitions", specialty="Peinture")
        session.add(idle)
        session.commit()
        session.refresh(idle)
        add_team_tasks(session, category, team, [TaskStatus.PENDING])
        add_team_tasks(session, category, idle, [TaskStatus.COMPLETED])

        assert [t.id for t in TeamService(session).get_active_teams()] == [team.id]

    def test_performance_ordering_and_average(self, session: Session):
        service = TeamService(session)
        assert service.get_average_performance() == 0.0

        session.add(Team(name="Low", performance=40))
        session.add(Team(name="High", performance=80))
        session.commit()

        assert [t.name for t in service.get_teams_by_performance()] == ["High", "Low"]
        assert service.get_average_performance() == 60.0
