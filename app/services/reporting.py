# app/services/reporting.py
"""
Reporting engine: the six fleet reports.

Every report is a pure function over already-loaded documents (plain dicts as
returned by FleetRepository.load_all) and returns a list of plain dict rows,
sorted descending on the report's key. Grouping keeps first-seen order, so
rows with equal sort keys come out in the order their groups first appeared.

Joins are inner hash joins on vehicle id: rows whose reference does not
resolve are dropped, never reported. A record missing a field the report
reads fails the whole report with MalformedRecordError.
"""

from dataclasses import dataclass
from typing import Any, Callable, Iterable, Optional

from app.services.errors import MalformedRecordError, ReportNotFoundError
from app.utils.logger import get_logger

logger = get_logger(__name__)

_MISSING = object()


# ── Field access ─────────────────────────────────────────────────────────────

def _record_ref(record: Any, collection: str) -> str:
    if not isinstance(record, dict):
        return repr(record)
    if collection == "telemetry":
        return f"{record.get('vehicle_id', '?')}@{record.get('timestamp', '?')}"
    return str(record.get("id", "?"))


def _field(record: dict, path: str, collection: str):
    """Resolve a dotted path like 'metrics.fuel_level'."""
    value = record
    for part in path.split("."):
        value = value.get(part, _MISSING) if isinstance(value, dict) else _MISSING
        if value is _MISSING or value is None:
            raise MalformedRecordError(collection, _record_ref(record, collection), path)
    return value


def _number(record: dict, path: str, collection: str):
    value = _field(record, path, collection)
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise MalformedRecordError(collection, _record_ref(record, collection), path,
                                   f"is not a number ({value!r})")
    return value


# ── Aggregation helpers ──────────────────────────────────────────────────────

class _Accumulator:
    """Running count/sum/min/max for one measured field of one group."""

    __slots__ = ("count", "total", "minimum", "maximum")

    def __init__(self):
        self.count = 0
        self.total = 0
        self.minimum = None
        self.maximum = None

    def add(self, value):
        self.count += 1
        self.total += value
        if self.minimum is None or value < self.minimum:
            self.minimum = value
        if self.maximum is None or value > self.maximum:
            self.maximum = value

    @property
    def mean(self) -> float:
        return self.total / self.count


def _sort_desc(rows: list[dict], key: str) -> list[dict]:
    # sorted() is stable with reverse=True, ties keep group order
    return sorted(rows, key=lambda row: row[key], reverse=True)


def _index_vehicles(vehicles: Iterable[dict]) -> dict:
    """Build side of the vehicle-id hash join."""
    index = {}
    for vehicle in vehicles:
        index.setdefault(_field(vehicle, "id", "vehicles"), vehicle)
    return index


# ── Reports ──────────────────────────────────────────────────────────────────

def average_fuel_consumption(telemetry: Iterable[dict]) -> list[dict]:
    """R1: fuel level statistics per vehicle, highest average first."""
    groups: dict[Any, _Accumulator] = {}
    for record in telemetry:
        vehicle_id = _field(record, "vehicle_id", "telemetry")
        fuel = _number(record, "metrics.fuel_level", "telemetry")
        groups.setdefault(vehicle_id, _Accumulator()).add(fuel)

    rows = [
        {
            "vehicle_id": vehicle_id,
            "avg_fuel_level": acc.mean,
            "min_fuel_level": acc.minimum,
            "max_fuel_level": acc.maximum,
            "count": acc.count,
        }
        for vehicle_id, acc in groups.items()
    ]
    return _sort_desc(rows, "avg_fuel_level")


def shipment_weight_by_status(shipments: Iterable[dict]) -> list[dict]:
    """R2: total and average shipment weight per status, heaviest first."""
    groups: dict[Any, _Accumulator] = {}
    for shipment in shipments:
        status = _field(shipment, "status", "shipments")
        weight = _number(shipment, "weight", "shipments")
        groups.setdefault(status, _Accumulator()).add(weight)

    rows = [
        {"status": status, "total_weight": acc.total, "count": acc.count, "avg_weight": acc.mean}
        for status, acc in groups.items()
    ]
    return _sort_desc(rows, "total_weight")


def vehicles_with_maintenance(vehicles: Iterable[dict]) -> list[dict]:
    """
    R3: maintenance entry count and latest entry date per vehicle.
    Each entry counts as one row before regrouping on vehicle id, so vehicles
    with an empty history do not appear.
    """
    groups: dict[Any, dict] = {}
    for vehicle in vehicles:
        vehicle_id = _field(vehicle, "id", "vehicles")
        history = _field(vehicle, "maintenance_history", "vehicles")
        ref = _record_ref(vehicle, "vehicles")
        for entry in history:
            if not isinstance(entry, dict) or entry.get("date") is None:
                raise MalformedRecordError("vehicles", ref, "maintenance_history.date")
            group = groups.get(vehicle_id)
            if group is None:
                group = groups[vehicle_id] = {
                    "vehicle_id": vehicle_id,
                    "make": vehicle.get("make"),
                    "model": vehicle.get("model"),
                    "maintenance_count": 0,
                    "last_maintenance": entry["date"],
                }
            group["maintenance_count"] += 1
            try:
                later = entry["date"] > group["last_maintenance"]
            except TypeError:
                raise MalformedRecordError("vehicles", ref, "maintenance_history.date",
                                           "mixes incomparable date types") from None
            if later:
                group["last_maintenance"] = entry["date"]

    return _sort_desc(list(groups.values()), "maintenance_count")


def in_transit_shipments_with_vehicles(shipments: Iterable[dict], vehicles: Iterable[dict]) -> list[dict]:
    """R4: in-transit shipments joined to their vehicle, heaviest first."""
    index = _index_vehicles(vehicles)
    rows = []
    for shipment in shipments:
        if _field(shipment, "status", "shipments") != "in-transit":
            continue
        vehicle = index.get(shipment.get("assigned_vehicle_id"))
        if vehicle is None:
            continue
        rows.append({
            "id": _field(shipment, "id", "shipments"),
            "origin": _field(shipment, "origin", "shipments"),
            "destination": _field(shipment, "destination", "shipments"),
            "weight": _number(shipment, "weight", "shipments"),
            "priority": _field(shipment, "priority", "shipments"),
            "status": shipment["status"],
            "vehicle_make": _field(vehicle, "make", "vehicles"),
            "vehicle_model": _field(vehicle, "model", "vehicles"),
            "vehicle_capacity": _number(vehicle, "load_capacity", "vehicles"),
        })
    return _sort_desc(rows, "weight")


MIN_PERFORMANCE_DATA_POINTS = 2


def vehicle_performance(telemetry: Iterable[dict], vehicles: Iterable[dict]) -> list[dict]:
    """
    R5: average speed, fuel level and engine temperature per vehicle.
    Telemetry for unknown vehicles is dropped; vehicles with fewer than two
    readings are left out. Fastest first.
    """
    index = _index_vehicles(vehicles)
    groups: dict[tuple, dict[str, _Accumulator]] = {}
    for record in telemetry:
        vehicle_id = _field(record, "vehicle_id", "telemetry")
        vehicle = index.get(vehicle_id)
        if vehicle is None:
            continue
        key = (vehicle_id, vehicle.get("make"), vehicle.get("model"))
        accs = groups.get(key)
        if accs is None:
            accs = groups[key] = {"speed": _Accumulator(), "fuel_level": _Accumulator(),
                                  "engine_temp": _Accumulator()}
        for metric, acc in accs.items():
            acc.add(_number(record, f"metrics.{metric}", "telemetry"))

    rows = [
        {
            "vehicle_id": vehicle_id,
            "make": make,
            "model": model,
            "avg_speed": accs["speed"].mean,
            "avg_fuel_level": accs["fuel_level"].mean,
            "avg_engine_temp": accs["engine_temp"].mean,
            "count": accs["speed"].count,
        }
        for (vehicle_id, make, model), accs in groups.items()
        if accs["speed"].count >= MIN_PERFORMANCE_DATA_POINTS
    ]
    return _sort_desc(rows, "avg_speed")


def high_priority_open_shipments(shipments: Iterable[dict]) -> list[dict]:
    """R6: undelivered high-priority shipments grouped by destination, busiest first."""
    groups: dict[Any, _Accumulator] = {}
    for shipment in shipments:
        if _field(shipment, "priority", "shipments") != "high":
            continue
        if _field(shipment, "status", "shipments") == "delivered":
            continue
        destination = _field(shipment, "destination", "shipments")
        groups.setdefault(destination, _Accumulator()).add(_number(shipment, "weight", "shipments"))

    rows = [
        {"destination": destination, "count": acc.count, "total_weight": acc.total, "avg_weight": acc.mean}
        for destination, acc in groups.items()
    ]
    return _sort_desc(rows, "count")


# ── Registry ─────────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class ReportDefinition:
    name: str
    title: str
    func: Callable[..., list[dict]]
    collections: tuple       # positional inputs of func, in order
    sort_key: str


REPORTS = {
    d.name: d for d in (
        ReportDefinition("fuel-consumption", "Average Fuel Consumption per Vehicle",
                         average_fuel_consumption, ("telemetry",), "avg_fuel_level"),
        ReportDefinition("shipment-weight", "Total Shipment Weight by Status",
                         shipment_weight_by_status, ("shipments",), "total_weight"),
        ReportDefinition("maintenance", "Vehicles with Maintenance History",
                         vehicles_with_maintenance, ("vehicles",), "maintenance_count"),
        ReportDefinition("in-transit", "In-Transit Shipments with Vehicle Details",
                         in_transit_shipments_with_vehicles, ("shipments", "vehicles"), "weight"),
        ReportDefinition("vehicle-performance", "Vehicle Performance Analysis",
                         vehicle_performance, ("telemetry", "vehicles"), "avg_speed"),
        ReportDefinition("high-priority-destinations", "High Priority Shipments by Destination",
                         high_priority_open_shipments, ("shipments",), "count"),
    )
}


def get_report(name: str) -> ReportDefinition:
    definition: Optional[ReportDefinition] = REPORTS.get(name)
    if definition is None:
        raise ReportNotFoundError(name)
    return definition


def run_report(name: str, repository) -> list[dict]:
    """
    Load the collections a report reads through the given repository and run it.
    Storage errors propagate unchanged; nothing is retried.
    """
    definition = get_report(name)
    inputs = [repository.load_all(collection) for collection in definition.collections]
    rows = definition.func(*inputs)
    logger.info(f"[REPORT] {name}: {len(rows)} rows")
    return rows
