# app/routers/reports.py
"""Fleet reports R1-R6, computed by the reporting engine over live collections."""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from app.database import get_db
from app.schemas.report import (
    DestinationSummaryRow, FuelConsumptionRow, InTransitShipmentRow,
    MaintenanceSummaryRow, ReportInfo, ShipmentWeightRow, VehiclePerformanceRow,
)
from app.services.reporting import REPORTS, run_report
from app.services.repository import FleetRepository

router = APIRouter(prefix="/reports")


def _run(name: str, db: Session) -> list[dict]:
    return run_report(name, FleetRepository(db))


@router.get("", response_model=list[ReportInfo], summary="Available reports")
def list_reports():
    return [
        {"name": d.name, "title": d.title, "path": f"/reports/{d.name}",
         "collections": list(d.collections), "sort_key": d.sort_key}
        for d in REPORTS.values()
    ]


@router.get("/fuel-consumption", response_model=list[FuelConsumptionRow],
            summary="R1 - Average fuel level per vehicle")
def fuel_consumption(db: Session = Depends(get_db)):
    return _run("fuel-consumption", db)


@router.get("/shipment-weight", response_model=list[ShipmentWeightRow],
            summary="R2 - Shipment weight by status")
def shipment_weight(db: Session = Depends(get_db)):
    return _run("shipment-weight", db)


@router.get("/maintenance", response_model=list[MaintenanceSummaryRow],
            summary="R3 - Vehicles with maintenance history")
def maintenance(db: Session = Depends(get_db)):
    return _run("maintenance", db)


@router.get("/in-transit", response_model=list[InTransitShipmentRow],
            summary="R4 - In-transit shipments with vehicle details")
def in_transit(db: Session = Depends(get_db)):
    """Shipments whose vehicle does not exist are left out."""
    return _run("in-transit", db)


@router.get("/vehicle-performance", response_model=list[VehiclePerformanceRow],
            summary="R5 - Vehicle performance analysis")
def vehicle_performance(db: Session = Depends(get_db)):
    """Only vehicles with at least two telemetry readings."""
    return _run("vehicle-performance", db)


@router.get("/high-priority-destinations", response_model=list[DestinationSummaryRow],
            summary="R6 - Open high-priority shipments by destination")
def high_priority_destinations(db: Session = Depends(get_db)):
    return _run("high-priority-destinations", db)


@router.get("/{name}", summary="Run a report by name")
def report_by_name(name: str, db: Session = Depends(get_db)):
    """Any registered report; unknown names answer 404."""
    return _run(name, db)
