from apps.models.status import Status
from apps.models.user import User

__all__ = ["Status", "User"]
