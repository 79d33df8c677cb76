from fastapi import Request

from apps.services.status_service import StatusLookupService


def get_status_service(request: Request) -> StatusLookupService:
    return request.app.state.status_service
