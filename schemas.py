from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel
from typing import Any, Dict, Literal, Optional


class ErrorBody(BaseModel):
    """Error details returned to API clients."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    message: str
    status: int
    request_id: Optional[str] = None
    details: Optional[Any] = None


class ErrorResponse(BaseModel):
    """Failure envelope shared by all endpoints."""
    success: bool = False
    error: ErrorBody


# =========================
# Health Models
# =========================

class HealthResponse(BaseModel):
    """Health check result."""
    status: Literal["healthy", "degraded"]
    version: str
    environment: str
    uptime: float = Field(..., description="Seconds since the app started")
    services: Dict[str, str] = Field(default_factory=dict)
    response_time_ms: int = Field(..., serialization_alias="responseTime")
