# app/models/telemetry.py
"""
Telemetry readings, many per vehicle.
The integer id is a storage key only; (vehicle_id, timestamp) is indexed but
not unique.
"""

from sqlalchemy import Column, Integer, String, Float, DateTime, Index
from app.database import Base


class TelemetryRecord(Base):
    __tablename__ = "telemetry"
    __table_args__ = (Index("ix_telemetry_vehicle_time", "vehicle_id", "timestamp"),)

    id = Column(Integer, primary_key=True, autoincrement=True)
    vehicle_id = Column(String(50), nullable=False)
    timestamp = Column(DateTime, nullable=False, index=True)
    lat = Column(Float, nullable=False)
    lng = Column(Float, nullable=False)
    speed = Column(Float, nullable=False)         # km/h
    fuel_level = Column(Float, nullable=False)    # 0-100 %
    engine_temp = Column(Float, nullable=False)   # °C

    def __repr__(self):
        return f"<TelemetryRecord {self.vehicle_id} @ {self.timestamp}>"
