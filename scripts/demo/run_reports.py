# scripts/demo/run_reports.py
"""
Run the fleet reports against the configured database and print them.

Usage:
    python scripts/demo/run_reports.py                       # all reports
    python scripts/demo/run_reports.py --report in-transit   # one report
"""

import sys
import os
import argparse
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", ".."))

from app.database import SessionLocal
from app.services.errors import FleetError
from app.services.reporting import REPORTS, run_report
from app.services.repository import FleetRepository
from app.utils.logger import get_logger

logger = get_logger(__name__)


def _date(value):
    return value.strftime("%Y-%m-%d") if hasattr(value, "strftime") else value


FORMATTERS = {
    "fuel-consumption": lambda r: (
        f"Vehicle {r['vehicle_id']}: Avg fuel {r['avg_fuel_level']:.2f}%, Count: {r['count']}, "
        f"Range: {r['min_fuel_level']}% - {r['max_fuel_level']}%"
    ),
    "shipment-weight": lambda r: (
        f"{r['status']}: Total {r['total_weight']}t, Count: {r['count']}, Avg: {r['avg_weight']:.2f}t"
    ),
    "maintenance": lambda r: (
        f"{r['vehicle_id']} ({r['make']} {r['model']}): {r['maintenance_count']} maintenance records, "
        f"Last: {_date(r['last_maintenance'])}"
    ),
    "in-transit": lambda r: (
        f"{r['id']}: {r['origin']} -> {r['destination']} ({r['weight']}t) - "
        f"Vehicle: {r['vehicle_make']} {r['vehicle_model']} ({r['vehicle_capacity']}t capacity)"
    ),
    "vehicle-performance": lambda r: (
        f"{r['vehicle_id']} ({r['make']} {r['model']}): Avg speed {r['avg_speed']:.2f} km/h, "
        f"Avg fuel {r['avg_fuel_level']:.2f}%, Avg temp {r['avg_engine_temp']:.2f}°C ({r['count']} data points)"
    ),
    "high-priority-destinations": lambda r: (
        f"{r['destination']}: {r['count']} high priority shipments, Total weight: {r['total_weight']}t, "
        f"Avg weight: {r['avg_weight']:.2f}t"
    ),
}


def print_report(name, repository):
    definition = REPORTS[name]
    print(f"\n=== {definition.title} ===")
    rows = run_report(name, repository)
    if not rows:
        print("(no rows)")
    for row in rows:
        print(FORMATTERS[name](row))


def main():
    parser = argparse.ArgumentParser(description="Print fleet reports")
    parser.add_argument("--report", choices=list(REPORTS), help="Run a single report")
    args = parser.parse_args()

    names = [args.report] if args.report else list(REPORTS)
    db = SessionLocal()
    try:
        repository = FleetRepository(db)
        for name in names:
            print_report(name, repository)
        print("\nReports completed successfully!")
    except FleetError as e:
        logger.error(f"Error running reports: {e}")
        sys.exit(1)
    finally:
        db.close()


if __name__ == "__main__":
    main()
