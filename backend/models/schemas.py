from pydantic import BaseModel, Field


class ClientIPResponse(BaseModel):
    ip: str = Field(..., description="Best-guess originating client IP; may be empty")


class HealthResponse(BaseModel):
    status: str
