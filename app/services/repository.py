# app/services/repository.py
"""
Data access for vehicles, shipments and telemetry.

FleetRepository wraps one SQLAlchemy session and hands records out as plain
documents (nested dicts), which is the shape the reporting engine and the
API work with. One repository per request or script run; nothing is shared
between callers.

Connection-level failures surface as StorageUnavailableError. Writes do not
validate references: shipments and telemetry may point at vehicles that do
not exist.
"""

from datetime import datetime
from typing import Callable, Iterable, Optional

from sqlalchemy.exc import InterfaceError, OperationalError
from sqlalchemy.orm import Session

from app.models.shipment import Shipment
from app.models.telemetry import TelemetryRecord
from app.models.vehicle import MaintenanceRecord, Vehicle
from app.services.errors import StorageUnavailableError
from app.utils.logger import get_logger

logger = get_logger(__name__)

COLLECTIONS = ("vehicles", "shipments", "telemetry")


# ── Row → document ───────────────────────────────────────────────────────────

def vehicle_document(vehicle: Vehicle) -> dict:
    return {
        "id": vehicle.id,
        "make": vehicle.make,
        "model": vehicle.model,
        "year": vehicle.year,
        "load_capacity": vehicle.load_capacity,
        "fuel_type": vehicle.fuel_type,
        "status": vehicle.status,
        "maintenance_history": [
            {"date": m.date, "description": m.description} for m in vehicle.maintenance_history
        ],
    }


def shipment_document(shipment: Shipment) -> dict:
    return {
        "id": shipment.id,
        "origin": shipment.origin,
        "destination": shipment.destination,
        "weight": shipment.weight,
        "priority": shipment.priority,
        "assigned_vehicle_id": shipment.assigned_vehicle_id,
        "status": shipment.status,
        "estimated_arrival": shipment.estimated_arrival,
    }


def telemetry_document(record: TelemetryRecord) -> dict:
    return {
        "vehicle_id": record.vehicle_id,
        "timestamp": record.timestamp,
        "gps": {"lat": record.lat, "lng": record.lng},
        "metrics": {
            "speed": record.speed,
            "fuel_level": record.fuel_level,
            "engine_temp": record.engine_temp,
        },
    }


_TO_DOCUMENT = {
    "vehicles": vehicle_document,
    "shipments": shipment_document,
    "telemetry": telemetry_document,
}


class FleetRepository:
    def __init__(self, db: Session):
        self.db = db

    # ── Internals ─────────────────────────────────────────────────────────

    def _base_query(self, collection: str):
        if collection == "vehicles":
            return self.db.query(Vehicle).order_by(Vehicle.id)
        if collection == "shipments":
            return self.db.query(Shipment).order_by(Shipment.id)
        if collection == "telemetry":
            return self.db.query(TelemetryRecord).order_by(TelemetryRecord.timestamp, TelemetryRecord.id)
        raise ValueError(f"Unknown collection '{collection}', expected one of {COLLECTIONS}")

    def _fetch(self, collection: str, query) -> list[dict]:
        try:
            rows = query.all()
        except (OperationalError, InterfaceError) as e:
            logger.error(f"Cannot read {collection}: {e}")
            raise StorageUnavailableError(collection, str(e.orig or e)) from e
        to_document = _TO_DOCUMENT[collection]
        return [to_document(row) for row in rows]

    def _write(self, collection: str, operation: Callable):
        """Run a write and commit; roll back and re-raise on failure."""
        try:
            result = operation()
            self.db.commit()
            return result
        except (OperationalError, InterfaceError) as e:
            self.db.rollback()
            logger.error(f"Cannot write {collection}: {e}")
            raise StorageUnavailableError(collection, str(e.orig or e)) from e
        except Exception:
            self.db.rollback()
            raise

    # ── Reads ─────────────────────────────────────────────────────────────

    def load_all(self, collection: str) -> list[dict]:
        """Every current record of a collection, as documents."""
        return self._fetch(collection, self._base_query(collection))

    def find_vehicles(self, min_capacity: Optional[float] = None, make: Optional[str] = None,
                      status: Optional[str] = None) -> list[dict]:
        """min_capacity is exclusive; make matches as a substring."""
        q = self._base_query("vehicles")
        if min_capacity is not None:
            q = q.filter(Vehicle.load_capacity > min_capacity)
        if make:
            q = q.filter(Vehicle.make.contains(make, autoescape=True))
        if status:
            q = q.filter(Vehicle.status == status)
        return self._fetch("vehicles", q)

    def find_shipments(self, status: Optional[str] = None, min_weight: Optional[float] = None,
                       priorities: Optional[Iterable[str]] = None, origin: Optional[str] = None) -> list[dict]:
        """min_weight is exclusive; priorities is a set-membership filter."""
        q = self._base_query("shipments")
        if status:
            q = q.filter(Shipment.status == status)
        if min_weight is not None:
            q = q.filter(Shipment.weight > min_weight)
        if priorities:
            q = q.filter(Shipment.priority.in_(list(priorities)))
        if origin:
            q = q.filter(Shipment.origin == origin)
        return self._fetch("shipments", q)

    def find_telemetry(self, vehicle_id: Optional[str] = None, fuel_min: Optional[float] = None,
                       fuel_max: Optional[float] = None, before: Optional[datetime] = None) -> list[dict]:
        """Fuel bounds are inclusive; before is exclusive."""
        q = self._base_query("telemetry")
        if vehicle_id:
            q = q.filter(TelemetryRecord.vehicle_id == vehicle_id)
        if fuel_min is not None:
            q = q.filter(TelemetryRecord.fuel_level >= fuel_min)
        if fuel_max is not None:
            q = q.filter(TelemetryRecord.fuel_level <= fuel_max)
        if before is not None:
            q = q.filter(TelemetryRecord.timestamp < before)
        return self._fetch("telemetry", q)

    # ── Creates ───────────────────────────────────────────────────────────

    def create_vehicle(self, data: dict) -> dict:
        def op():
            vehicle = Vehicle(
                id=data["id"], make=data["make"], model=data["model"], year=data["year"],
                load_capacity=data["load_capacity"], fuel_type=data["fuel_type"], status=data["status"],
            )
            for entry in data.get("maintenance_history", []):
                vehicle.maintenance_history.append(
                    MaintenanceRecord(date=entry["date"], description=entry["description"])
                )
            self.db.add(vehicle)
            self.db.flush()
            return vehicle_document(vehicle)

        doc = self._write("vehicles", op)
        logger.info(f"Created vehicle {doc['id']}")
        return doc

    def create_shipment(self, data: dict) -> dict:
        def op():
            shipment = Shipment(**{k: data.get(k) for k in (
                "id", "origin", "destination", "weight", "priority",
                "assigned_vehicle_id", "status", "estimated_arrival",
            )})
            self.db.add(shipment)
            self.db.flush()
            return shipment_document(shipment)

        doc = self._write("shipments", op)
        logger.info(f"Created shipment {doc['id']}")
        return doc

    def create_telemetry(self, data: dict) -> dict:
        def op():
            record = TelemetryRecord(
                vehicle_id=data["vehicle_id"], timestamp=data["timestamp"],
                lat=data["gps"]["lat"], lng=data["gps"]["lng"],
                speed=data["metrics"]["speed"], fuel_level=data["metrics"]["fuel_level"],
                engine_temp=data["metrics"]["engine_temp"],
            )
            self.db.add(record)
            self.db.flush()
            return telemetry_document(record)

        doc = self._write("telemetry", op)
        logger.info(f"Created telemetry for {doc['vehicle_id']} @ {doc['timestamp']}")
        return doc

    # ── Updates (return number of modified records) ───────────────────────

    def update_shipment_status(self, shipment_id: str, status: str) -> int:
        return self._write("shipments", lambda: (
            self.db.query(Shipment)
            .filter(Shipment.id == shipment_id, Shipment.status != status)
            .update({Shipment.status: status}, synchronize_session=False)
        ))

    def update_shipments_status(self, status: str, new_status: str, origin: Optional[str] = None) -> int:
        """Bulk move every shipment in one status (optionally from one origin) to another."""
        def op():
            q = self.db.query(Shipment).filter(Shipment.status == status, Shipment.status != new_status)
            if origin:
                q = q.filter(Shipment.origin == origin)
            return q.update({Shipment.status: new_status}, synchronize_session=False)

        return self._write("shipments", op)

    def increment_engine_temp(self, vehicle_id: str, timestamp: datetime, delta: float) -> int:
        """Adjust the first matching reading only."""
        def op():
            record = (
                self.db.query(TelemetryRecord)
                .filter(TelemetryRecord.vehicle_id == vehicle_id, TelemetryRecord.timestamp == timestamp)
                .order_by(TelemetryRecord.id)
                .first()
            )
            if record is None:
                return 0
            record.engine_temp = record.engine_temp + delta
            return 1

        return self._write("telemetry", op)

    def add_maintenance(self, vehicle_id: str, date: datetime, description: str) -> int:
        def op():
            vehicle = self.db.get(Vehicle, vehicle_id)
            if vehicle is None:
                return 0
            vehicle.maintenance_history.append(MaintenanceRecord(date=date, description=description))
            return 1

        return self._write("vehicles", op)

    def remove_maintenance(self, vehicle_id: str, description: str) -> int:
        """Drop every history entry of the vehicle whose description equals the given one."""
        return self._write("vehicles", lambda: (
            self.db.query(MaintenanceRecord)
            .filter(MaintenanceRecord.vehicle_id == vehicle_id, MaintenanceRecord.description == description)
            .delete(synchronize_session="fetch")
        ))

    # ── Deletes (return number of deleted records) ────────────────────────

    def delete_vehicle(self, vehicle_id: str) -> int:
        def op():
            vehicle = self.db.get(Vehicle, vehicle_id)
            if vehicle is None:
                return 0
            self.db.delete(vehicle)
            return 1

        return self._write("vehicles", op)

    def delete_shipment(self, shipment_id: str) -> int:
        return self._write("shipments", lambda: (
            self.db.query(Shipment).filter(Shipment.id == shipment_id).delete(synchronize_session=False)
        ))

    def delete_telemetry(self, vehicle_id: str, timestamp: datetime) -> int:
        """Delete the first reading matching (vehicle_id, timestamp)."""
        def op():
            record = (
                self.db.query(TelemetryRecord)
                .filter(TelemetryRecord.vehicle_id == vehicle_id, TelemetryRecord.timestamp == timestamp)
                .order_by(TelemetryRecord.id)
                .first()
            )
            if record is None:
                return 0
            self.db.delete(record)
            return 1

        return self._write("telemetry", op)

    def delete_telemetry_before(self, cutoff: datetime) -> int:
        """Retention cleanup: drop every reading older than cutoff."""
        deleted = self._write("telemetry", lambda: (
            self.db.query(TelemetryRecord)
            .filter(TelemetryRecord.timestamp < cutoff)
            .delete(synchronize_session=False)
        ))
        logger.info(f"Deleted {deleted} telemetry records older than {cutoff.isoformat()}")
        return deleted
