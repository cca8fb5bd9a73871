from .ip import router as ip_router

__all__ = ["ip_router"]
