# app/schemas/report.py
"""Row shapes of the six fleet reports. Averages are unrounded."""

from pydantic import BaseModel
from datetime import datetime
from typing import Optional


class FuelConsumptionRow(BaseModel):
    vehicle_id: str
    avg_fuel_level: float
    min_fuel_level: float
    max_fuel_level: float
    count: int


class ShipmentWeightRow(BaseModel):
    status: str
    total_weight: float
    count: int
    avg_weight: float


class MaintenanceSummaryRow(BaseModel):
    vehicle_id: str
    make: Optional[str]
    model: Optional[str]
    maintenance_count: int
    last_maintenance: datetime


class InTransitShipmentRow(BaseModel):
    id: str
    origin: str
    destination: str
    weight: float
    priority: str
    status: str
    vehicle_make: str
    vehicle_model: str
    vehicle_capacity: float


class VehiclePerformanceRow(BaseModel):
    vehicle_id: str
    make: Optional[str]
    model: Optional[str]
    avg_speed: float
    avg_fuel_level: float
    avg_engine_temp: float
    count: int


class DestinationSummaryRow(BaseModel):
    destination: str
    count: int
    total_weight: float
    avg_weight: float


class ReportInfo(BaseModel):
    name: str
    title: str
    path: str
    collections: list[str]
    sort_key: str
