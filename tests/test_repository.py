# tests/test_repository.py
"""Repository tests against an in-memory SQLite database."""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import pytest
from datetime import datetime
from unittest.mock import MagicMock
from sqlalchemy.exc import OperationalError
from app.models.vehicle import MaintenanceRecord
from app.services.errors import StorageUnavailableError
from app.services.repository import FleetRepository


def make_vehicle(vehicle_id, capacity):
    return {"id": vehicle_id, "make": "Volvo", "model": "FH", "year": 2020, "load_capacity": capacity,
            "fuel_type": "diesel", "status": "active", "maintenance_history": []}


class TestLoadAll:
    def test_documents_have_nested_shape(self, seeded_session):
        repo = FleetRepository(seeded_session)

        vehicles = repo.load_all("vehicles")
        telemetry = repo.load_all("telemetry")
        shipments = repo.load_all("shipments")

        assert len(vehicles) == 10
        assert len(shipments) == 15
        assert len(telemetry) == 20
        v001 = vehicles[0]
        assert v001["id"] == "V001"
        assert [m["description"] for m in v001["maintenance_history"]] == ["Oil change", "Tire replacement"]
        assert set(telemetry[0]["gps"]) == {"lat", "lng"}
        assert set(telemetry[0]["metrics"]) == {"speed", "fuel_level", "engine_temp"}
        assert telemetry[0]["timestamp"] <= telemetry[-1]["timestamp"]

    def test_empty_collection(self, db_session):
        assert FleetRepository(db_session).load_all("telemetry") == []

    def test_unknown_collection(self, db_session):
        with pytest.raises(ValueError):
            FleetRepository(db_session).load_all("drivers")

    def test_connection_failure_raises_storage_unavailable(self):
        db = MagicMock()
        db.query.return_value.order_by.return_value.all.side_effect = OperationalError(
            "SELECT", {}, Exception("connection refused"))

        with pytest.raises(StorageUnavailableError) as exc:
            FleetRepository(db).load_all("vehicles")
        assert exc.value.collection == "vehicles"
        assert "connection refused" in exc.value.message


class TestFilters:
    def test_capacity_filter_is_exclusive(self, db_session):
        repo = FleetRepository(db_session)
        repo.create_vehicle(make_vehicle("V1", 25))
        repo.create_vehicle(make_vehicle("V2", 15))
        repo.create_vehicle(make_vehicle("V3", 20))

        assert [v["id"] for v in repo.find_vehicles(min_capacity=20)] == ["V1"]

    def test_make_substring(self, seeded_session):
        rows = FleetRepository(seeded_session).find_vehicles(make="Mercedes")
        assert [v["id"] for v in rows] == ["V001", "V007"]

    def test_in_transit_heavier_than_ten(self, seeded_session):
        rows = FleetRepository(seeded_session).find_shipments(status="in-transit", min_weight=10)
        assert [s["id"] for s in rows] == ["S008", "S014"]

    def test_priority_membership(self, seeded_session):
        rows = FleetRepository(seeded_session).find_shipments(priorities=["high", "medium"])
        assert len(rows) == 10
        assert {s["priority"] for s in rows} == {"high", "medium"}

    def test_fuel_range_is_inclusive(self, seeded_session):
        rows = FleetRepository(seeded_session).find_telemetry(fuel_min=80, fuel_max=90)
        assert len(rows) == 10
        assert all(80 <= t["metrics"]["fuel_level"] <= 90 for t in rows)


class TestWrites:
    def test_dangling_vehicle_reference_is_accepted(self, db_session):
        repo = FleetRepository(db_session)
        doc = repo.create_shipment({
            "id": "S900", "origin": "Sofia", "destination": "Varna", "weight": 3, "priority": "low",
            "assigned_vehicle_id": "V404", "status": "pending", "estimated_arrival": None,
        })
        assert doc["assigned_vehicle_id"] == "V404"
        assert len(repo.load_all("shipments")) == 1

    def test_status_update_counts_only_modified(self, seeded_session):
        repo = FleetRepository(seeded_session)
        assert repo.update_shipment_status("S003", "in-transit") == 1
        assert repo.update_shipment_status("S003", "in-transit") == 0
        assert repo.update_shipment_status("S999", "in-transit") == 0

    def test_bulk_status_update_by_origin(self, seeded_session):
        repo = FleetRepository(seeded_session)
        assert repo.update_shipments_status("pending", "in-transit", origin="Sofia") == 1
        assert repo.find_shipments(origin="Sofia", status="in-transit")[0]["id"] == "S006"

    def test_increment_engine_temp(self, seeded_session):
        repo = FleetRepository(seeded_session)
        ts = datetime(2023, 10, 1, 8, 0)
        assert repo.increment_engine_temp("V001", ts, 10) == 1
        reading = repo.find_telemetry(vehicle_id="V001")[0]
        assert reading["metrics"]["engine_temp"] == 100

    def test_add_and_remove_maintenance(self, seeded_session):
        repo = FleetRepository(seeded_session)
        assert repo.add_maintenance("V004", datetime(2023, 10, 1), "Initial inspection") == 1
        assert repo.add_maintenance("V404", datetime(2023, 10, 1), "Ghost") == 0
        assert repo.remove_maintenance("V001", "Oil change") == 1
        assert repo.remove_maintenance("V001", "Oil change") == 0

        vehicles = {v["id"]: v for v in repo.load_all("vehicles")}
        assert [m["description"] for m in vehicles["V001"]["maintenance_history"]] == ["Tire replacement"]
        assert [m["description"] for m in vehicles["V004"]["maintenance_history"]] == ["Initial inspection"]

    def test_delete_vehicle_removes_history(self, seeded_session):
        repo = FleetRepository(seeded_session)
        assert repo.delete_vehicle("V001") == 1
        assert repo.delete_vehicle("V001") == 0
        assert seeded_session.query(MaintenanceRecord).filter(MaintenanceRecord.vehicle_id == "V001").count() == 0
        # shipments keep their now-dangling reference
        assert any(s["assigned_vehicle_id"] == "V001" for s in repo.load_all("shipments"))

    def test_delete_single_telemetry_and_retention(self, seeded_session):
        repo = FleetRepository(seeded_session)
        assert repo.delete_telemetry("V001", datetime(2023, 10, 1, 8, 0)) == 1
        assert repo.delete_telemetry("V001", datetime(2023, 10, 1, 8, 0)) == 0
        assert repo.delete_telemetry_before(datetime(2023, 10, 5)) == 6
        assert all(t["timestamp"] >= datetime(2023, 10, 5) for t in repo.load_all("telemetry"))
        assert len(repo.load_all("telemetry")) == 13

    def test_delete_shipment(self, seeded_session):
        repo = FleetRepository(seeded_session)
        assert repo.delete_shipment("S001") == 1
        assert len(repo.load_all("shipments")) == 14
