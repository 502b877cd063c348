# app/schemas/vehicle.py
from pydantic import BaseModel
from datetime import datetime


class MaintenanceEntry(BaseModel):
    date: datetime
    description: str


class VehicleOut(BaseModel):
    id: str
    make: str
    model: str
    year: int
    load_capacity: float          # tons
    fuel_type: str                # diesel | electric | ...
    status: str                   # active | maintenance | retired
    maintenance_history: list[MaintenanceEntry] = []
