# app/schemas/shipment.py
from pydantic import BaseModel
from datetime import datetime
from typing import Optional


class ShipmentOut(BaseModel):
    id: str
    origin: str
    destination: str
    weight: float                             # tons
    priority: str                             # low | medium | high
    assigned_vehicle_id: Optional[str]        # not checked against vehicles
    status: str                               # pending | in-transit | delivered
    estimated_arrival: Optional[datetime]
