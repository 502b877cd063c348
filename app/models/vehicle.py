# app/models/vehicle.py
"""
Fleet vehicles and their maintenance history.
Maintenance entries live in their own table and keep insertion order.
"""

from sqlalchemy import Column, Integer, String, Float, DateTime, Text, ForeignKey
from sqlalchemy.orm import relationship
from app.database import Base


class Vehicle(Base):
    __tablename__ = "vehicles"

    id = Column(String(50), primary_key=True)
    make = Column(String(100), nullable=False, index=True)
    model = Column(String(100), nullable=False)
    year = Column(Integer, nullable=False)
    load_capacity = Column(Float, nullable=False)     # tons
    fuel_type = Column(String(30), nullable=False)    # diesel | electric | ...
    status = Column(String(30), nullable=False)       # active | maintenance | retired

    maintenance_history = relationship(
        "MaintenanceRecord",
        order_by="MaintenanceRecord.id",
        cascade="all, delete-orphan",
        lazy="selectin",
    )

    def __repr__(self):
        return f"<Vehicle {self.id} {self.make} {self.model} capacity={self.load_capacity}t>"


class MaintenanceRecord(Base):
    __tablename__ = "maintenance_records"

    id = Column(Integer, primary_key=True, autoincrement=True)
    vehicle_id = Column(String(50), ForeignKey("vehicles.id", ondelete="CASCADE"), nullable=False, index=True)
    date = Column(DateTime, nullable=False)
    description = Column(Text, nullable=False)

    def __repr__(self):
        return f"<MaintenanceRecord {self.vehicle_id} {self.date:%Y-%m-%d} {self.description!r}>"
