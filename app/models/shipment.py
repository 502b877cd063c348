# app/models/shipment.py
"""
Shipments table.
assigned_vehicle_id is a plain column, not a foreign key: shipments may
point at vehicles that do not exist.
"""

from sqlalchemy import Column, String, Float, DateTime
from app.database import Base


class Shipment(Base):
    __tablename__ = "shipments"

    id = Column(String(50), primary_key=True)
    origin = Column(String(100), nullable=False)
    destination = Column(String(100), nullable=False, index=True)
    weight = Column(Float, nullable=False)                 # tons
    priority = Column(String(20), nullable=False)          # low | medium | high
    assigned_vehicle_id = Column(String(50), index=True)
    status = Column(String(20), nullable=False, index=True)  # pending | in-transit | delivered
    estimated_arrival = Column(DateTime)

    def __repr__(self):
        return f"<Shipment {self.id} {self.origin}->{self.destination} status={self.status}>"
