# scripts/demo/crud_operations.py
"""
Create / read / update / delete walkthrough against the fleet repository.
Adds a test vehicle (V011), shipment (S016) and telemetry reading, exercises
the filters and updates, then removes what it created.

Deleting telemetry older than --cutoff is real retention cleanup and is
skipped unless --cutoff is given.

Usage:
    python scripts/demo/crud_operations.py
    python scripts/demo/crud_operations.py --cutoff 2023-10-05
"""

import sys
import os
import argparse
from datetime import datetime, timezone
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", ".."))

from sqlalchemy.exc import SQLAlchemyError
from app.database import SessionLocal
from app.services.errors import FleetError
from app.services.repository import FleetRepository
from app.utils.logger import get_logger

logger = get_logger(__name__)

TEST_VEHICLE = {
    "id": "V011", "make": "Tesla", "model": "Semi", "year": 2023, "load_capacity": 36,
    "fuel_type": "electric", "status": "active", "maintenance_history": [],
}
TEST_SHIPMENT = {
    "id": "S016", "origin": "Sofia", "destination": "Varna", "weight": 25, "priority": "high",
    "assigned_vehicle_id": "V011", "status": "pending",
    "estimated_arrival": datetime(2023, 10, 16, 12, 0),
}
TEST_READING_TIME = datetime(2023, 10, 15, 8, 0)
TEST_TELEMETRY = {
    "vehicle_id": "V011", "timestamp": TEST_READING_TIME,
    "gps": {"lat": 42.6977, "lng": 23.3219},
    "metrics": {"speed": 0, "fuel_level": 100.0, "engine_temp": 25},
}


def create_operations(repo):
    print("\n=== CREATE OPERATIONS ===")
    print("Created new vehicle:", repo.create_vehicle(TEST_VEHICLE)["id"])
    print("Created new shipment:", repo.create_shipment(TEST_SHIPMENT)["id"])
    print("Created new telemetry:", repo.create_telemetry(TEST_TELEMETRY)["vehicle_id"])


def read_operations(repo):
    print("\n=== READ OPERATIONS ===")
    print("Vehicles with capacity > 20 tons:")
    print([f"{v['id']}: {v['make']} {v['model']} - {v['load_capacity']}t" for v in repo.find_vehicles(min_capacity=20)])

    print("\nShipments in-transit with weight > 10 tons:")
    print([f"{s['id']}: {s['origin']} -> {s['destination']} ({s['weight']}t)"
           for s in repo.find_shipments(status="in-transit", min_weight=10)])

    print("\nVehicles from Mercedes-Benz:")
    print([f"{v['id']}: {v['make']} {v['model']}" for v in repo.find_vehicles(make="Mercedes")])

    print("\nHigh or medium priority shipments:")
    print([f"{s['id']}: Priority {s['priority']} - {s['weight']}t"
           for s in repo.find_shipments(priorities=["high", "medium"])])

    print("\nTelemetry with fuel level 80-90%:")
    print([f"Vehicle {t['vehicle_id']}: {t['metrics']['fuel_level']}% fuel"
           for t in repo.find_telemetry(fuel_min=80, fuel_max=90)])


def update_operations(repo):
    print("\n=== UPDATE OPERATIONS ===")
    print("Updated shipment S016 status:", repo.update_shipment_status("S016", "in-transit"))
    print("Updated pending Sofia shipments:", repo.update_shipments_status("pending", "in-transit", origin="Sofia"))
    print("Increased engine temp for V011:", repo.increment_engine_temp("V011", TEST_READING_TIME, 10))
    today = datetime.now(timezone.utc).replace(tzinfo=None)
    print("Added maintenance record to V011:", repo.add_maintenance("V011", today, "Initial inspection"))
    print("Removed oil change record from V001:", repo.remove_maintenance("V001", "Oil change"))


def delete_operations(repo, cutoff=None):
    print("\n=== DELETE OPERATIONS ===")
    print("Deleted telemetry record:", repo.delete_telemetry("V011", TEST_READING_TIME))
    if cutoff is not None:
        print("Deleted old telemetry records:", repo.delete_telemetry_before(cutoff))
    print("Deleted test vehicle:", repo.delete_vehicle("V011"))
    print("Deleted test shipment:", repo.delete_shipment("S016"))


def main():
    parser = argparse.ArgumentParser(description="CRUD walkthrough on the fleet database")
    parser.add_argument("--cutoff", type=datetime.fromisoformat,
                        help="Also delete telemetry older than this ISO date")
    args = parser.parse_args()

    db = SessionLocal()
    try:
        repo = FleetRepository(db)
        create_operations(repo)
        read_operations(repo)
        update_operations(repo)
        delete_operations(repo, args.cutoff)
        print("\nCRUD operations completed successfully!")
    except (FleetError, SQLAlchemyError) as e:
        logger.error(f"Error running CRUD operations: {e}")
        sys.exit(1)
    finally:
        db.close()


if __name__ == "__main__":
    main()
