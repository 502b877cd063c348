# tests/test_demo_scripts.py
"""The CRUD walkthrough script, run against a seeded in-memory database."""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import importlib.util
from datetime import datetime, timedelta, timezone
import pytest
from app.services.repository import FleetRepository

SCRIPT = os.path.join(os.path.dirname(__file__), "..", "scripts", "demo", "crud_operations.py")


@pytest.fixture(scope="module")
def crud_script():
    module_spec = importlib.util.spec_from_file_location("crud_operations", SCRIPT)
    module = importlib.util.module_from_spec(module_spec)
    module_spec.loader.exec_module(module)
    return module


class TestCrudWalkthrough:
    def test_update_stamps_naive_utc_maintenance_date(self, crud_script, seeded_session):
        repo = FleetRepository(seeded_session)
        crud_script.create_operations(repo)
        before = datetime.now(timezone.utc).replace(tzinfo=None)

        crud_script.update_operations(repo)

        v011 = next(v for v in repo.load_all("vehicles") if v["id"] == "V011")
        assert [m["description"] for m in v011["maintenance_history"]] == ["Initial inspection"]
        stamped = v011["maintenance_history"][0]["date"]
        assert stamped.tzinfo is None
        assert abs(stamped - before) < timedelta(minutes=1)

    def test_delete_removes_created_records(self, crud_script, seeded_session):
        repo = FleetRepository(seeded_session)
        crud_script.create_operations(repo)
        crud_script.delete_operations(repo)

        assert "V011" not in {v["id"] for v in repo.load_all("vehicles")}
        assert "S016" not in {s["id"] for s in repo.load_all("shipments")}
        assert len(repo.load_all("telemetry")) == 20
