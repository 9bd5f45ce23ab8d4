"""Integration tests for car and motorcycle routes."""

import pytest
from httpx import AsyncClient

from tests.helpers import bearer


pytestmark = pytest.mark.integration


class TestCars:
    async def test_seeded_cars_are_stopped(self, client: AsyncClient, user_headers):
        response = await client.get("/api/v1/cars", headers=user_headers)

        assert response.status_code == 200
        cars = response.json()
        assert [c["name"] for c in cars] == ["Car A", "Car B"]
        assert {c["status"]["status"] for c in cars} == {"Stopped"}

    async def test_statuses_route_is_not_an_id(self, client: AsyncClient, user_headers):
        response = await client.get("/api/v1/cars/statuses", headers=user_headers)

        assert response.status_code == 200
        assert [s["status"] for s in response.json()] == ["Stopped", "Running"]

    async def test_start_stop_and_status(self, client: AsyncClient, user_headers):
        car_id = (await client.get("/api/v1/cars", headers=user_headers)).json()[0]["id"]

        started = await client.post(f"/api/v1/cars/{car_id}/start", headers=user_headers)
        assert started.status_code == 200
        assert started.json()["status"]["status"] == "Running"

        status = await client.get(f"/api/v1/cars/{car_id}/status", headers=user_headers)
        assert status.json()["status"]["status"] == "Running"

        stopped = await client.post(f"/api/v1/cars/{car_id}/stop", headers=user_headers)
        assert stopped.json()["status"]["status"] == "Stopped"

    async def test_status_requires_get_car_status(self, client: AsyncClient, admin_headers):
        car_id = (await client.get("/api/v1/cars", headers=admin_headers)).json()[0]["id"]

        response = await client.get(f"/api/v1/cars/{car_id}/status", headers=admin_headers)

        assert response.status_code == 403

    async def test_admin_car_crud(self, client: AsyncClient, admin_headers):
        created = await client.post(
            "/api/v1/cars", json={"name": "Car C", "status_id": 9999}, headers=admin_headers
        )
        assert created.status_code == 201
        car = created.json()
        assert car["status"]["status"] == "Stopped"

        statuses = (await client.get("/api/v1/cars/statuses", headers=admin_headers)).json()
        running = next(s["id"] for s in statuses if s["status"] == "Running")
        updated = await client.put(
            f"/api/v1/cars/{car['id']}",
            json={"name": "Car C2", "status_id": running},
            headers=admin_headers,
        )
        assert updated.json()["name"] == "Car C2"
        assert updated.json()["status"]["status"] == "Running"

        bad = await client.put(
            f"/api/v1/cars/{car['id']}", json={"status_id": 9999}, headers=admin_headers
        )
        assert bad.status_code == 422
        assert bad.json()["errors"][0]["field"] == "status_id"

        deleted = await client.delete(f"/api/v1/cars/{car['id']}", headers=admin_headers)
        assert deleted.status_code == 204
        missing = await client.get(f"/api/v1/cars/{car['id']}", headers=admin_headers)
        assert missing.status_code == 404

    async def test_start_missing_car(self, client: AsyncClient, user_headers):
        response = await client.post("/api/v1/cars/9999/start", headers=user_headers)

        assert response.status_code == 404


class TestMotorcycles:
    async def test_drive_requires_running(self, client: AsyncClient, user_headers):
        motorcycle_id = (
            await client.get("/api/v1/motorcycles", headers=user_headers)
        ).json()[0]["id"]

        refused = await client.post(
            f"/api/v1/motorcycles/{motorcycle_id}/drive", headers=user_headers
        )
        assert refused.status_code == 422
        assert refused.json()["errors"][0]["field"] == "status"

        await client.post(f"/api/v1/motorcycles/{motorcycle_id}/start", headers=user_headers)
        driving = await client.post(
            f"/api/v1/motorcycles/{motorcycle_id}/drive", headers=user_headers
        )
        assert driving.status_code == 200
        assert driving.json()["status"]["status"] == "Driving"

        stopped = await client.post(
            f"/api/v1/motorcycles/{motorcycle_id}/stop", headers=user_headers
        )
        assert stopped.json()["status"]["status"] == "Stopped"

    async def test_drive_permission_is_separate(self, client: AsyncClient, seeded):
        """StartMotorcycle alone does not allow driving."""
        headers = bearer(1, "starter", ["StartMotorcycle"])

        response = await client.post("/api/v1/motorcycles/1/drive", headers=headers)

        assert response.status_code == 403
        assert response.json()["required_permission"] == "DriveMotorcycle"

    async def test_admin_manages_motorcycles(self, client: AsyncClient, admin_headers):
        created = await client.post(
            "/api/v1/motorcycles", json={"name": "Motorcycle C"}, headers=admin_headers
        )

        assert created.status_code == 201
        assert created.json()["status"]["status"] == "Stopped"

        statuses = (
            await client.get("/api/v1/motorcycles/statuses", headers=admin_headers)
        ).json()
        assert [s["status"] for s in statuses] == ["Stopped", "Running", "Driving"]
