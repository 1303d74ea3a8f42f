import pytest
from fastapi.testclient import TestClient

from app.models.category import Category
from app.models.project import Project, Villa
from app.models.team import Team
from app.main import app
from app.routers.tasks import get_task_service


def create_task(client: TestClient, category: Category, **fields):
    payload = {"name": "Task", "categoryId": category.id, "villaId": category.villa_id}
    payload.update(fields)
    response = client.post("/tasks/", json=payload)
    assert response.status_code == 200, response.text
    return response.json()


class TestHealth:
    def test_health(self, client: TestClient):
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json() == {"status": "healthy"}


class TestTaskRoutes:
    def test_create_task(self, client: TestClient, category: Category):
        data = create_task(client, category, name="Fondations", amount=1200.0)

        assert data["id"] is not None
        assert data["categoryId"] == category.id
        assert data["status"] == "PENDING"
        assert data["progressStatus"] == "ON_SCHEDULE"
        assert data["isPaid"] is False
        assert data["amount"] == 1200.0

    def test_create_task_unknown_category_is_bad_request(self, client: TestClient, villa: Villa):
        response = client.post("/tasks/", json={"name": "X", "categoryId": 404, "villaId": villa.id})
        assert response.status_code == 400
        assert "Category not found" in response.json()["detail"]

    def test_create_task_invalid_payload(self, client: TestClient, category: Category):
        response = client.post("/tasks/", json={
            "name": "X", "categoryId": category.id, "villaId": category.villa_id, "status": "DONE"
        })
        assert response.status_code == 422

    def test_get_task(self, client: TestClient, category: Category):
        task = create_task(client, category)
        response = client.get(f"/tasks/{task['id']}")
        assert response.status_code == 200
        assert response.json()["name"] == "Task"

    def test_get_missing_task(self, client: TestClient):
        response = client.get("/tasks/404")
        assert response.status_code == 404
        assert response.json()["detail"] == "Task not found with id: 404"

    def test_update_task(self, client: TestClient, category: Category):
        task = create_task(client, category, remarks="initial")
        response = client.put(f"/tasks/{task['id']}", json={"name": "Renamed", "status": "IN_PROGRESS"})
        assert response.status_code == 200
        data = response.json()
        assert data["name"] == "Renamed"
        assert data["status"] == "IN_PROGRESS"
        assert data["remarks"] is None

    def test_update_missing_task(self, client: TestClient):
        response = client.put("/tasks/404", json={"name": "Ghost"})
        assert response.status_code == 404

    def test_update_task_unknown_team(self, client: TestClient, category: Category):
        task = create_task(client, category)
        response = client.put(f"/tasks/{task['id']}", json={"name": "Task", "teamId": 404})
        assert response.status_code == 404

    def test_delete_task(self, client: TestClient, category: Category):
        task = create_task(client, category)
        response = client.delete(f"/tasks/{task['id']}")
        assert response.status_code == 200
        assert client.get(f"/tasks/{task['id']}").status_code == 404
        assert client.delete(f"/tasks/{task['id']}").status_code == 404

    def test_progress_drives_category_stats(self, client: TestClient, category: Category):
        t1 = create_task(client, category, name="T1")
        response = client.put(f"/tasks/{t1['id']}/progress", json={"progress": 100})
        assert response.status_code == 200
        assert response.json()["status"] == "COMPLETED"

        stats = client.get(f"/categories/{category.id}").json()
        assert stats["tasksCount"] == 1
        assert stats["completedTasks"] == 1
        assert stats["progress"] == 100
        assert stats["status"] == "ON_SCHEDULE"

        create_task(client, category, name="T2")
        stats = client.get(f"/categories/{category.id}").json()
        assert stats["tasksCount"] == 2
        assert stats["progress"] == 50
        assert stats["status"] == "DELAYED"

    def test_progress_missing_task(self, client: TestClient):
        assert client.put("/tasks/404/progress", json={"progress": 10}).status_code == 404

    def test_receive_and_pay(self, client: TestClient, category: Category):
        task = create_task(client, category)
        client.put(f"/tasks/{task['id']}/progress", json={"progress": 100})

        unreceived = client.get("/tasks/unreceived").json()
        assert [t["id"] for t in unreceived] == [task["id"]]

        for _ in range(2):
            response = client.put(f"/tasks/{task['id']}/receive")
            assert response.status_code == 200
            assert response.json()["isReceived"] is True
        assert client.get("/tasks/unreceived").json() == []

        response = client.put(f"/tasks/{task['id']}/pay")
        assert response.json()["isPaid"] is True
        assert client.get("/tasks/unpaid").json() == []

    def test_receive_missing_task(self, client: TestClient):
        assert client.put("/tasks/404/receive").status_code == 404
        assert client.put("/tasks/404/pay").status_code == 404

    def test_filtered_lists(self, client: TestClient, project: Project, category: Category, team: Team):
        create_task(client, category, name="A", teamId=team.id, progressStatus="BEHIND")
        create_task(client, category, name="B", status="IN_PROGRESS")

        assert len(client.get("/tasks/").json()) == 2
        assert len(client.get("/tasks/", params={"categoryId": category.id}).json()) == 2
        assert len(client.get(f"/tasks/villa/{category.villa_id}").json()) == 2
        assert len(client.get(f"/tasks/project/{project.id}").json()) == 2
        assert [t["name"] for t in client.get(f"/tasks/team/{team.id}").json()] == ["A"]
        assert [t["name"] for t in client.get("/tasks/status/IN_PROGRESS").json()] == ["B"]
        assert [t["name"] for t in client.get("/tasks/progress-status/BEHIND").json()] == ["A"]

    def test_invalid_status_filter(self, client: TestClient):
        assert client.get("/tasks/status/DONE").status_code == 422

    def test_project_amounts(self, client: TestClient, project: Project, category: Category):
        paid = create_task(client, category, amount=1000.0)
        create_task(client, category, amount=250.0)
        client.put(f"/tasks/{paid['id']}/pay")

        response = client.get(f"/tasks/project/{project.id}/amounts")
        assert response.status_code == 200
        assert response.json() == {"totalAmount": 1250.0, "paidAmount": 1000.0}

    def test_project_amounts_without_tasks(self, client: TestClient):
        response = client.get("/tasks/project/404/amounts")
        assert response.json() == {"totalAmount": 0.0, "paidAmount": 0.0}


class TestCategoryRoutes:
    def test_create_category(self, client: TestClient, villa: Villa, team: Team):
        response = client.post("/categories/", json={"name": "Electricite", "villaId": villa.id, "teamId": team.id})
        assert response.status_code == 200
        data = response.json()
        assert data["teamId"] == team.id
        assert data["tasksCount"] == 0

        villa_data = client.get(f"/villas/{villa.id}").json()
        assert villa_data["categoriesCount"] == 1

    def test_create_category_unknown_villa(self, client: TestClient):
        response = client.post("/categories/", json={"name": "X", "villaId": 404})
        assert response.status_code == 400

    def test_update_and_delete_category(self, client: TestClient, category: Category):
        response = client.put(f"/categories/{category.id}", json={"name": "Toiture", "progress": 60, "status": "WARNING"})
        assert response.status_code == 200
        assert response.json()["status"] == "WARNING"

        assert client.delete(f"/categories/{category.id}").status_code == 200
        assert client.get(f"/categories/{category.id}").status_code == 404

    def test_update_missing_category(self, client: TestClient):
        assert client.put("/categories/404", json={"name": "X"}).status_code == 404
        assert client.delete("/categories/404").status_code == 404

    def test_category_lists(self, client: TestClient, project: Project, villa: Villa, category: Category, team: Team):
        client.post("/categories/", json={"name": "Plomberie", "villaId": villa.id, "teamId": team.id})

        assert len(client.get("/categories/").json()) == 2
        assert len(client.get("/categories/", params={"villaId": villa.id}).json()) == 2
        assert len(client.get(f"/categories/project/{project.id}").json()) == 2
        assert [c["name"] for c in client.get(f"/categories/team/{team.id}").json()] == ["Plomberie"]
        assert len(client.get("/categories/status/ON_SCHEDULE").json()) == 2

    def test_recompute_stats_endpoint(self, client: TestClient, category: Category):
        create_task(client, category)
        response = client.put(f"/categories/{category.id}/stats")
        assert response.status_code == 200
        assert response.json()["tasksCount"] == 1
        assert client.put("/categories/404/stats").status_code == 404


class TestTeamRoutes:
    def test_team_crud(self, client: TestClient):
        response = client.post("/teams/", json={"name": "Equipe Carrelage", "specialty": "Carrelage", "membersCount": 4})
        assert response.status_code == 200
        team = response.json()
        assert team["membersCount"] == 4
        assert team["activeTasks"] == 0

        response = client.put(f"/teams/{team['id']}", json={"name": "Equipe Carrelage", "performance": 55})
        assert response.json()["performance"] == 55

        assert client.delete(f"/teams/{team['id']}").status_code == 200
        assert client.get(f"/teams/{team['id']}").status_code == 404

    def test_create_team_with_unknown_task(self, client: TestClient):
        response = client.post("/teams/", json={"name": "Equipe", "taskIds": [404]})
        assert response.status_code == 400

    def test_team_stats_are_explicit(self, client: TestClient, category: Category, team: Team):
        create_task(client, category, teamId=team.id)
        assert client.get(f"/teams/{team.id}").json()["activeTasks"] == 0

        response = client.put(f"/teams/{team.id}/stats")
        assert response.status_code == 200
        data = response.json()
        assert data["activeTasks"] == 1
        assert data["lastActivity"] is not None

        assert [t["id"] for t in client.get("/teams/active").json()] == [team.id]

    def test_team_lookups(self, client: TestClient, team: Team):
        client.post("/teams/", json={"name": "Equipe Nord", "specialty": "Electricite", "performance": 90})

        assert [t["name"] for t in client.get("/teams/search", params={"q": "elec"}).json()] == ["Equipe Nord"]
        assert [t["id"] for t in client.get("/teams/specialty/macon").json()] == [team.id]
        assert client.get("/teams/performance").json()[0]["name"] == "Equipe Nord"
        assert client.get("/teams/average-performance").json() == {"averagePerformance": 45.0}

    def test_missing_team(self, client: TestClient):
        assert client.put("/teams/404/stats").status_code == 404
        assert client.put("/teams/404/activity").status_code == 404


class TestProjectAndVillaRoutes:
    def test_project_villa_flow(self, client: TestClient):
        project = client.post("/projects/", json={"name": "Domaine Oasis", "startDate": "2024-01-15"}).json()
        assert project["startDate"] == "2024-01-15"

        response = client.post("/villas/", json={"name": "Villa 1", "projectId": project["id"], "surface": 150})
        assert response.status_code == 200
        villa = response.json()
        assert villa["status"] == "NOT_STARTED"

        assert [v["id"] for v in client.get("/villas/", params={"projectId": project["id"]}).json()] == [villa["id"]]

        response = client.put(f"/projects/{project['id']}", json={"name": "Domaine Oasis II"})
        assert response.json()["name"] == "Domaine Oasis II"

        assert client.delete(f"/projects/{project['id']}").status_code == 200
        assert client.get(f"/villas/{villa['id']}").status_code == 404

    def test_create_villa_unknown_project(self, client: TestClient):
        response = client.post("/villas/", json={"name": "Villa", "projectId": 404})
        assert response.status_code == 400

    def test_missing_project(self, client: TestClient):
        assert client.get("/projects/404").status_code == 404
        assert client.delete("/projects/404").status_code == 404

    def test_villa_stats_endpoint(self, client: TestClient, villa: Villa, category: Category):
        create_task(client, category)
        response = client.put(f"/villas/{villa.id}/stats")
        assert response.status_code == 200
        assert response.json()["tasksCount"] == 1


class BrokenTaskService:
    def _fail(self, *args):
        raise RuntimeError("database unavailable")

    update_progress = mark_received = mark_paid = _fail


class TestUnexpectedErrors:
    @pytest.mark.parametrize("path,payload", [
        ("/tasks/1/progress", {"progress": 50}),
        ("/tasks/1/receive", None),
        ("/tasks/1/pay", None),
    ])
    def test_task_actions_report_server_error(self, client: TestClient, path, payload):
        app.dependency_overrides[get_task_service] = lambda: BrokenTaskService()

        response = client.put(path, json=payload)

        assert response.status_code == 500
        assert response.json()["detail"].endswith("database unavailable")
