# app/seed.py
"""
Sample fleet: 10 vehicles, 15 shipments, 20 telemetry readings across
Bulgarian cities. Used by scripts/setup/seed_db.py and the test suite.
Timestamps are naive UTC.
"""

from datetime import datetime

from sqlalchemy.orm import Session

from app.models.shipment import Shipment
from app.models.telemetry import TelemetryRecord
from app.models.vehicle import MaintenanceRecord, Vehicle
from app.services.repository import FleetRepository
from app.utils.logger import get_logger

logger = get_logger(__name__)


def _vehicle(vehicle_id, make, model, year, capacity, fuel, status, *history):
    return {
        "id": vehicle_id, "make": make, "model": model, "year": year,
        "load_capacity": capacity, "fuel_type": fuel, "status": status,
        "maintenance_history": [{"date": datetime.fromisoformat(d), "description": desc} for d, desc in history],
    }


SEED_VEHICLES = [
    _vehicle("V001", "Mercedes-Benz", "Actros", 2020, 25, "diesel", "active",
             ("2023-01-15", "Oil change"), ("2023-06-20", "Tire replacement")),
    _vehicle("V002", "Volvo", "FH", 2019, 20, "diesel", "active", ("2023-03-10", "Brake inspection")),
    _vehicle("V003", "Scania", "R500", 2021, 30, "diesel", "maintenance", ("2023-08-05", "Engine repair")),
    _vehicle("V004", "MAN", "TGX", 2018, 28, "diesel", "active"),
    _vehicle("V005", "Iveco", "Stralis", 2022, 22, "electric", "active", ("2023-05-12", "Battery check")),
    _vehicle("V006", "DAF", "XF", 2017, 24, "diesel", "retired"),
    _vehicle("V007", "Mercedes-Benz", "Actros", 2021, 26, "diesel", "active"),
    _vehicle("V008", "Volvo", "FM", 2020, 18, "diesel", "active", ("2023-07-18", "Transmission service")),
    _vehicle("V009", "Scania", "S500", 2019, 32, "diesel", "active"),
    _vehicle("V010", "MAN", "TGS", 2022, 27, "electric", "maintenance", ("2023-09-01", "Software update")),
]


def _shipment(shipment_id, origin, destination, weight, priority, vehicle_id, status, eta):
    return {
        "id": shipment_id, "origin": origin, "destination": destination, "weight": weight,
        "priority": priority, "assigned_vehicle_id": vehicle_id, "status": status,
        "estimated_arrival": datetime.fromisoformat(eta),
    }


SEED_SHIPMENTS = [
    _shipment("S001", "Sofia", "Plovdiv", 15, "high", "V001", "delivered", "2023-10-01T10:00:00"),
    _shipment("S002", "Varna", "Burgas", 8, "medium", "V002", "in-transit", "2023-10-02T14:00:00"),
    _shipment("S003", "Plovdiv", "Sofia", 12, "low", "V003", "pending", "2023-10-03T16:00:00"),
    _shipment("S004", "Ruse", "Stara Zagora", 20, "high", "V004", "delivered", "2023-10-04T12:00:00"),
    _shipment("S005", "Burgas", "Varna", 5, "medium", "V005", "in-transit", "2023-10-05T18:00:00"),
    _shipment("S006", "Sofia", "Pleven", 18, "high", "V007", "pending", "2023-10-06T20:00:00"),
    _shipment("S007", "Veliko Tarnovo", "Gabrovo", 10, "low", "V008", "delivered", "2023-10-07T08:00:00"),
    _shipment("S008", "Blagoevgrad", "Kyustendil", 22, "medium", "V009", "in-transit", "2023-10-08T22:00:00"),
    _shipment("S009", "Pazardzhik", "Smolyan", 7, "low", "V001", "pending", "2023-10-09T11:00:00"),
    _shipment("S010", "Dobrich", "Shumen", 14, "high", "V002", "delivered", "2023-10-10T13:00:00"),
    _shipment("S011", "Sliven", "Yambol", 9, "medium", "V004", "in-transit", "2023-10-11T15:00:00"),
    _shipment("S012", "Haskovo", "Kardzhali", 16, "high", "V007", "pending", "2023-10-12T17:00:00"),
    _shipment("S013", "Montana", "Vratsa", 11, "low", "V008", "delivered", "2023-10-13T09:00:00"),
    _shipment("S014", "Pernik", "Kyustendil", 13, "medium", "V009", "in-transit", "2023-10-14T21:00:00"),
    _shipment("S015", "Lovech", "Targovishte", 6, "low", "V001", "pending", "2023-10-15T19:00:00"),
]


def _reading(vehicle_id, ts, lat, lng, speed, fuel, temp):
    return {
        "vehicle_id": vehicle_id,
        "timestamp": datetime.fromisoformat(ts),
        "gps": {"lat": lat, "lng": lng},
        "metrics": {"speed": speed, "fuel_level": fuel, "engine_temp": temp},
    }


SEED_TELEMETRY = [
    _reading("V001", "2023-10-01T08:00:00", 42.6977, 23.3219, 80, 85.5, 90),   # Sofia
    _reading("V001", "2023-10-01T09:00:00", 42.1354, 24.7453, 85, 75.2, 92),   # Plovdiv
    _reading("V002", "2023-10-02T10:00:00", 43.2141, 27.9147, 70, 90.1, 88),   # Varna
    _reading("V002", "2023-10-02T11:00:00", 42.5048, 27.4626, 75, 80.3, 91),   # Burgas
    _reading("V003", "2023-10-03T12:00:00", 42.1354, 24.7453, 0, 60.0, 85),    # Plovdiv, stopped
    _reading("V004", "2023-10-04T13:00:00", 43.8486, 25.9543, 82, 88.7, 93),   # Ruse
    _reading("V004", "2023-10-04T14:00:00", 42.4258, 25.6345, 78, 78.9, 90),   # Stara Zagora
    _reading("V005", "2023-10-05T15:00:00", 42.5048, 27.4626, 65, 95.2, 87),   # Burgas
    _reading("V005", "2023-10-05T16:00:00", 43.2141, 27.9147, 68, 92.1, 89),   # Varna
    _reading("V007", "2023-10-06T17:00:00", 42.6977, 23.3219, 83, 82.4, 91),   # Sofia
    _reading("V008", "2023-10-07T18:00:00", 43.0757, 25.6172, 72, 87.6, 88),   # Veliko Tarnovo
    _reading("V008", "2023-10-07T19:00:00", 42.8742, 25.3341, 74, 80.8, 90),   # Gabrovo
    _reading("V009", "2023-10-08T20:00:00", 42.0140, 23.0943, 79, 76.3, 92),   # Blagoevgrad
    _reading("V009", "2023-10-08T21:00:00", 42.2839, 22.6891, 81, 73.5, 93),   # Kyustendil
    _reading("V001", "2023-10-09T22:00:00", 42.1928, 24.3336, 77, 79.1, 89),   # Pazardzhik
    _reading("V002", "2023-10-10T23:00:00", 43.4167, 28.1667, 69, 84.7, 87),   # Dobrich
    _reading("V002", "2023-10-11T00:00:00", 43.2706, 26.9361, 71, 81.2, 88),   # Shumen
    _reading("V004", "2023-10-11T01:00:00", 42.6858, 26.3292, 76, 85.9, 91),   # Sliven
    _reading("V007", "2023-10-12T02:00:00", 41.9333, 25.5667, 84, 77.4, 92),   # Haskovo
    _reading("V008", "2023-10-13T03:00:00", 43.4067, 23.2250, 73, 83.6, 89),   # Montana
]


def clear_data(db: Session) -> None:
    """Remove every fleet record (children first)."""
    for model in (MaintenanceRecord, TelemetryRecord, Shipment, Vehicle):
        db.query(model).delete(synchronize_session=False)
    db.commit()
    logger.info("Cleared vehicles, shipments and telemetry")


def seed_data(db: Session, reset: bool = False) -> bool:
    """
    Insert the sample fleet. Returns False (and does nothing) when vehicles
    already exist and reset is not requested.
    """
    if reset:
        clear_data(db)
    elif db.query(Vehicle).first() is not None:
        logger.info("Vehicles already present, skipping seed")
        return False

    repo = FleetRepository(db)
    for vehicle in SEED_VEHICLES:
        repo.create_vehicle(vehicle)
    for shipment in SEED_SHIPMENTS:
        repo.create_shipment(shipment)
    for reading in SEED_TELEMETRY:
        repo.create_telemetry(reading)

    logger.info(f"Seeded {len(SEED_VEHICLES)} vehicles, {len(SEED_SHIPMENTS)} shipments, "
                f"{len(SEED_TELEMETRY)} telemetry records")
    return True
