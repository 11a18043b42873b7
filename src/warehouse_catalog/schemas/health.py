from datetime import datetime
from typing import Literal

from pydantic import BaseModel

DependencyState = Literal["healthy", "unhealthy", "error"]


class DependencyHealth(BaseModel):
    status: DependencyState
    response_time_ms: int | None = None
    error: str | None = None


class HealthStatus(BaseModel):
    status: Literal["healthy", "unhealthy"]
    timestamp: datetime
    version: str
    uptime: str
    services: dict[str, DependencyHealth]
