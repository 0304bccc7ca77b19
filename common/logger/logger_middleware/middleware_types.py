# common/logger/logger_middleware/middleware_types.py
"""
Shapes of the per-request log event.
"""

from enum import Enum
from typing import Optional, Dict
from datetime import datetime, timezone
from pydantic import BaseModel, Field, computed_field


class RequestArea(str, Enum):
    """Which part of the site a request belongs to."""

    PUBLIC = "public"  # marketing pages and booking
    ADMIN = "admin"  # dashboard, bearer token required
    OPS = "ops"  # health, metrics, docs

    @classmethod
    def for_path(cls, path: str) -> "RequestArea":
        if path.startswith("/api/v1/admin"):
            return cls.ADMIN
        if path.startswith("/api/"):
            return cls.PUBLIC
        return cls.OPS


class RequestMetadata(BaseModel):
    method: str
    path: str
    area: RequestArea
    status_code: int = Field(..., ge=100, le=599)
    duration_ms: float = Field(..., ge=0)

    model_config = {"frozen": True}


class RequestDetails(BaseModel):
    request_id: str
    client_host: Optional[str] = None
    user_agent: Optional[str] = None
    # Free-text params are replaced by their length
    query_params: Optional[Dict[str, str]] = None
    authenticated: bool = False

    model_config = {"frozen": True}


class RequestLogEntry(BaseModel):
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    metadata: RequestMetadata
    details: RequestDetails
    slow_threshold_ms: float = Field(default=1000.0, exclude=True)

    model_config = {"frozen": True}

    @computed_field
    def is_slow(self) -> bool:
        return self.metadata.duration_ms > self.slow_threshold_ms

    @computed_field
    def is_error(self) -> bool:
        return self.metadata.status_code >= 500


__all__ = ["RequestArea", "RequestMetadata", "RequestDetails", "RequestLogEntry"]
