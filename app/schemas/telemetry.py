# app/schemas/telemetry.py
from pydantic import BaseModel
from datetime import datetime


class GpsPoint(BaseModel):
    lat: float
    lng: float


class TelemetryMetrics(BaseModel):
    speed: float          # km/h
    fuel_level: float     # 0-100 %
    engine_temp: float    # °C


class TelemetryOut(BaseModel):
    vehicle_id: str
    timestamp: datetime
    gps: GpsPoint
    metrics: TelemetryMetrics
