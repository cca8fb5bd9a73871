"""
Client IP API Routes

Echoes back the client address as resolved from proxy/CDN headers,
falling back to the connection peer.
"""

from fastapi import APIRouter, Request

from middleware import rate_limiter
from models import ClientIPResponse

router = APIRouter(prefix="/v1", tags=["ip"])


@router.get("/ip", response_model=ClientIPResponse)
async def get_ip(request: Request):
    """
    Return the caller's public IP address as seen by the server.

    Returns 429 once the caller exceeds the per-minute request limit.
    """
    client_ip = rate_limiter.check_rate_limit(request)
    return ClientIPResponse(ip=client_ip)
