# Fleet Tracking: Database Models
# Import all models here for SQLAlchemy discovery

from app.models.vehicle import Vehicle, MaintenanceRecord   # noqa
from app.models.shipment import Shipment                     # noqa
from app.models.telemetry import TelemetryRecord             # noqa
