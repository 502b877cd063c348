# tests/test_api.py
"""HTTP tests for the fleet data, report and dashboard routes."""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from unittest.mock import patch
from app.config import settings
from app.services.errors import StorageUnavailableError


class TestDashboard:
    def test_root_redirects_to_dashboard(self, client):
        response = client.get("/", follow_redirects=False)
        assert response.status_code in (302, 307)
        assert response.headers["location"] == "/dashboard"

    def test_dashboard_serves_html(self, client):
        response = client.get("/dashboard")
        assert response.status_code == 200
        assert "text/html" in response.headers["content-type"]
        assert "Fleet Tracking" in response.text

    def test_api_index(self, client):
        body = client.get("/api").json()
        assert body["endpoints"]["vehicles"] == "/vehicles"
        assert body["endpoints"]["reports"] == "/reports"

    def test_health(self, client):
        body = client.get("/health").json()
        assert body["status"] == "ok"
        assert body["database"] == "ok"


class TestFleetData:
    def test_collections_return_raw_arrays(self, client):
        assert len(client.get("/vehicles").json()) == 10
        assert len(client.get("/shipments").json()) == 15
        assert len(client.get("/telemetry").json()) == 20

    def test_vehicle_document_shape(self, client):
        v001 = client.get("/vehicles").json()[0]
        assert v001["id"] == "V001"
        assert v001["load_capacity"] == 25
        assert len(v001["maintenance_history"]) == 2

    def test_vehicle_capacity_filter(self, client):
        ids = [v["id"] for v in client.get("/vehicles", params={"min_capacity": 20}).json()]
        assert len(ids) == 8
        assert "V002" not in ids and "V008" not in ids

    def test_shipment_priority_filter_repeats(self, client):
        rows = client.get("/shipments?priority=high&priority=medium").json()
        assert len(rows) == 10

    def test_telemetry_fuel_range(self, client):
        rows = client.get("/telemetry", params={"fuel_min": 80, "fuel_max": 90}).json()
        assert len(rows) == 10

    def test_telemetry_fuel_out_of_range_rejected(self, client):
        assert client.get("/telemetry", params={"fuel_min": 150}).status_code == 422


class TestReports:
    def test_lists_all_reports(self, client):
        names = [r["name"] for r in client.get("/reports").json()]
        assert names == ["fuel-consumption", "shipment-weight", "maintenance", "in-transit",
                         "vehicle-performance", "high-priority-destinations"]

    def test_shipment_weight(self, client):
        rows = client.get("/reports/shipment-weight").json()
        assert rows[0] == {"status": "delivered", "total_weight": 70, "count": 5, "avg_weight": 14}

    def test_in_transit_order(self, client):
        rows = client.get("/reports/in-transit").json()
        assert [r["id"] for r in rows] == ["S008", "S014", "S011", "S002", "S005"]
        assert rows[0]["vehicle_make"] == "Scania"

    def test_vehicle_performance_excludes_single_reading(self, client):
        rows = client.get("/reports/vehicle-performance").json()
        assert "V003" not in {r["vehicle_id"] for r in rows}

    def test_maintenance_and_destinations(self, client):
        assert client.get("/reports/maintenance").json()[0]["vehicle_id"] == "V001"
        assert len(client.get("/reports/high-priority-destinations").json()) == 2
        assert len(client.get("/reports/fuel-consumption").json()) == 8

    def test_unknown_report_404(self, client):
        response = client.get("/reports/unknown")
        assert response.status_code == 404
        assert response.json()["detail"] == "Unknown report 'unknown'"

    def test_every_listed_report_runs_by_name(self, client):
        for info in client.get("/reports").json():
            assert client.get(info["path"]).status_code == 200

    def test_storage_unavailable_maps_to_503(self, client):
        with patch("app.services.repository.FleetRepository.load_all",
                   side_effect=StorageUnavailableError("telemetry", "connection refused")):
            response = client.get("/reports/fuel-consumption")
        assert response.status_code == 503
        assert "telemetry" in response.json()["detail"]

    def test_malformed_record_fails_report(self, client):
        with patch("app.services.repository.FleetRepository.load_all",
                   return_value=[{"vehicle_id": "V001", "metrics": {}}]):
            response = client.get("/reports/fuel-consumption")
        assert response.status_code == 500
        assert "fuel_level" in response.json()["detail"]


class TestApiKey:
    def test_key_required_when_configured(self, client, monkeypatch):
        monkeypatch.setattr(settings, "API_KEY", "secret")

        assert client.get("/vehicles").status_code == 401
        assert client.get("/vehicles", headers={"X-API-Key": "secret"}).status_code == 200
        assert client.get("/health").status_code == 200
        assert client.get("/dashboard").status_code == 200

    def test_dashboard_fetches_forward_the_key(self, client, monkeypatch):
        monkeypatch.setattr(settings, "API_KEY", "secret")

        script = client.get("/static/script.js")
        assert script.status_code == 200
        assert "X-API-Key" in script.text
        assert "api_key" in script.text

        # the dashboard opened as /dashboard?api_key=secret sends this header
        for endpoint in ("vehicles", "shipments", "telemetry"):
            response = client.get(f"/{endpoint}", headers={"X-API-Key": "secret"})
            assert response.status_code == 200
            assert response.json()
        assert client.get("/dashboard", params={"api_key": "secret"}).status_code == 200
