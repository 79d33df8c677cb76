from apps.services.status_service import InvalidTimeWindow, StatusLookupService
from apps.services.store import StatusNotFound, TortoiseStatusStore

__all__ = ["InvalidTimeWindow", "StatusLookupService", "StatusNotFound", "TortoiseStatusStore"]
