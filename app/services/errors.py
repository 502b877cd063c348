# app/services/errors.py
"""Domain exceptions raised by the repository and the reporting engine."""


class FleetError(Exception):
    """Base class for fleet tracking errors."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class StorageUnavailableError(FleetError):
    """A collection could not be read or written."""

    def __init__(self, collection: str, reason: str):
        super().__init__(f"Storage unavailable while accessing '{collection}': {reason}")
        self.collection = collection


class MalformedRecordError(FleetError):
    """A record lacks a field a report depends on, or holds the wrong type."""

    def __init__(self, collection: str, record_ref: str, field: str, problem: str = "missing"):
        super().__init__(f"Malformed {collection} record {record_ref}: field '{field}' {problem}")
        self.collection = collection
        self.record_ref = record_ref
        self.field = field


class ReportNotFoundError(FleetError):
    def __init__(self, name: str):
        super().__init__(f"Unknown report '{name}'")
        self.name = name
