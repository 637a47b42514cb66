"""System status schemas."""

from pydantic import BaseModel


class ConnectionTestResponse(BaseModel):
    """Result of the /test endpoint."""

    message: str
    timestamp: str
    database: str


class HealthResponse(BaseModel):
    """Health check result."""

    status: str
    database: str
    timestamp: str
