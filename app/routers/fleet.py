# app/routers/fleet.py
"""Raw fleet collections: vehicles, shipments and telemetry as JSON arrays."""

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from typing import Optional
from app.database import get_db
from app.schemas.vehicle import VehicleOut
from app.schemas.shipment import ShipmentOut
from app.schemas.telemetry import TelemetryOut
from app.services.repository import FleetRepository

router = APIRouter()


@router.get("/vehicles", response_model=list[VehicleOut], summary="List vehicles")
def list_vehicles(
    min_capacity: Optional[float] = Query(None, description="Only vehicles with load capacity above this (tons)"),
    make: Optional[str] = Query(None, description="Substring of the make, e.g. 'Mercedes'"),
    status: Optional[str] = None,
    db: Session = Depends(get_db),
):
    return FleetRepository(db).find_vehicles(min_capacity=min_capacity, make=make, status=status)


@router.get("/shipments", response_model=list[ShipmentOut], summary="List shipments")
def list_shipments(
    status: Optional[str] = None,
    priority: Optional[list[str]] = Query(None, description="Repeat to match several priorities"),
    min_weight: Optional[float] = Query(None, description="Only shipments heavier than this (tons)"),
    origin: Optional[str] = None,
    db: Session = Depends(get_db),
):
    return FleetRepository(db).find_shipments(status=status, min_weight=min_weight,
                                              priorities=priority, origin=origin)


@router.get("/telemetry", response_model=list[TelemetryOut], summary="List telemetry readings")
def list_telemetry(
    vehicle_id: Optional[str] = None,
    fuel_min: Optional[float] = Query(None, ge=0, le=100),
    fuel_max: Optional[float] = Query(None, ge=0, le=100),
    db: Session = Depends(get_db),
):
    """Oldest first. Fuel bounds are inclusive."""
    return FleetRepository(db).find_telemetry(vehicle_id=vehicle_id, fuel_min=fuel_min, fuel_max=fuel_max)
