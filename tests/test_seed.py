# tests/test_seed.py
"""Checks on the sample fleet fixtures and the seeding routine."""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from app.models.vehicle import Vehicle
from app.seed import SEED_SHIPMENTS, SEED_TELEMETRY, SEED_VEHICLES, seed_data

VEHICLE_FIELDS = {"id", "make", "model", "year", "load_capacity", "fuel_type", "status", "maintenance_history"}
SHIPMENT_FIELDS = {"id", "origin", "destination", "weight", "priority", "assigned_vehicle_id",
                   "status", "estimated_arrival"}


class TestSeedFixtures:
    def test_record_counts(self):
        assert len(SEED_VEHICLES) == 10
        assert len(SEED_SHIPMENTS) == 15
        assert len(SEED_TELEMETRY) == 20

    def test_required_fields(self):
        assert all(set(v) == VEHICLE_FIELDS for v in SEED_VEHICLES)
        assert all(set(s) == SHIPMENT_FIELDS for s in SEED_SHIPMENTS)
        for record in SEED_TELEMETRY:
            assert set(record) == {"vehicle_id", "timestamp", "gps", "metrics"}
            assert set(record["metrics"]) == {"speed", "fuel_level", "engine_temp"}

    def test_ids_are_unique(self):
        assert len({v["id"] for v in SEED_VEHICLES}) == len(SEED_VEHICLES)
        assert len({s["id"] for s in SEED_SHIPMENTS}) == len(SEED_SHIPMENTS)

    def test_realistic_ranges(self):
        assert all(0 < v["load_capacity"] <= 40 for v in SEED_VEHICLES)
        assert all(0 < s["weight"] <= 35 for s in SEED_SHIPMENTS)
        for record in SEED_TELEMETRY:
            metrics = record["metrics"]
            assert 0 <= metrics["speed"] <= 100
            assert 0 <= metrics["fuel_level"] <= 100
            assert 20 <= metrics["engine_temp"] <= 100


class TestSeedData:
    def test_seeds_empty_database(self, db_session):
        assert seed_data(db_session) is True
        assert db_session.query(Vehicle).count() == 10

    def test_skips_when_data_present(self, seeded_session):
        assert seed_data(seeded_session) is False
        assert seeded_session.query(Vehicle).count() == 10

    def test_reset_reseeds(self, seeded_session):
        assert seed_data(seeded_session, reset=True) is True
        assert seeded_session.query(Vehicle).count() == 10
