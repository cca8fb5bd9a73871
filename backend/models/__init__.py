from .schemas import ClientIPResponse, HealthResponse

__all__ = ["ClientIPResponse", "HealthResponse"]
