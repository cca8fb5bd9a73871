"""
Client IP resolution for requests that may have passed through proxies.

Headers are checked in a fixed order and the first one that yields an
address wins. Single-value headers set by hosting platforms and CDNs are
taken as-is. Forwarded-for style lists are only accepted when their first
entry is a valid public address; a private or malformed first entry
abandons that header (later entries of the same list are never consulted).
If no header qualifies, the host part of the peer address is returned.
"""

import logging
from collections.abc import Mapping
from enum import Enum

from fastapi import Request

from .addresses import InvalidAddress, is_private_address

logger = logging.getLogger(__name__)


class HeaderStrategy(Enum):
    DIRECT = "direct"
    FORWARDED_LIST = "forwarded_list"


# Order matters: earlier entries win outright
HEADER_PRECEDENCE = (
    # Amazon EC2, Heroku and others
    ("X-Client-IP", HeaderStrategy.DIRECT),
    ("X-Original-Forwarded-For", HeaderStrategy.DIRECT),
    # "client IP, proxy 1 IP, proxy 2 IP"
    ("X-Forwarded-For", HeaderStrategy.FORWARDED_LIST),
    # Cloudflare, applied to every request to the origin
    ("CF-Connecting-IP", HeaderStrategy.DIRECT),
    # Fastly CDN and Firebase hosting
    ("Fastly-Client-IP", HeaderStrategy.DIRECT),
    # Akamai and Cloudflare
    ("True-Client-IP", HeaderStrategy.DIRECT),
    # Nginx proxy/FastCGI
    ("X-Real-IP", HeaderStrategy.DIRECT),
    ("X-Forwarded", HeaderStrategy.FORWARDED_LIST),
    ("Forwarded-For", HeaderStrategy.FORWARDED_LIST),
    ("Forwarded", HeaderStrategy.FORWARDED_LIST),
)


class NoQualifyingAddress(LookupError):
    """Raised when a forwarded header holds no usable public address."""


def retrieve_forwarded_ip(forwarded: str) -> str:
    """
    Pick the client address out of a comma-separated forwarded list.

    Only the first entry is considered. Zero-length segments (",,") are
    skipped; a whitespace-only segment counts as an invalid entry.

    Raises:
        NoQualifyingAddress: if the list is empty, or its first entry is
            private or not an IP address
    """
    for address in forwarded.split(","):
        if not address:
            continue
        address = address.strip()
        try:
            private = is_private_address(address)
        except InvalidAddress as e:
            raise NoQualifyingAddress(f"forwarded ip is invalid: {address!r}") from e
        if private:
            raise NoQualifyingAddress(f"forwarded ip is private: {address}")
        return address
    raise NoQualifyingAddress("empty or invalid forwarded header")


def split_peer_host(peer_address: str) -> str:
    """Return the host part of a peer address, or "" if it cannot be split."""
    if ":" not in peer_address:
        return peer_address
    try:
        host, _ = _split_host_port(peer_address)
    except ValueError as e:
        logger.debug(f"[CLIENT IP] Could not split peer address {peer_address!r}: {e}")
        return ""
    return host


def _split_host_port(hostport: str) -> tuple[str, str]:
    """Split "host:port" or "[host]:port" into host and port, Go net style."""
    colon = hostport.rfind(":")
    if colon < 0:
        raise ValueError("missing port in address")

    # Bracket checks skip the opening "[" and anything up to the closing "]"
    open_from, close_from = 0, 0
    if hostport.startswith("["):
        end = hostport.find("]")
        if end < 0:
            raise ValueError("missing ']' in address")
        if end + 1 == len(hostport):
            raise ValueError("missing port in address")
        if end + 1 != colon:
            if hostport[end + 1] == ":":
                raise ValueError("too many colons in address")
            raise ValueError("missing port in address")
        host = hostport[1:end]
        open_from, close_from = 1, end + 1
    else:
        host = hostport[:colon]
        if ":" in host:
            raise ValueError("too many colons in address")

    if "[" in hostport[open_from:]:
        raise ValueError("unexpected '[' in address")
    if "]" in hostport[close_from:]:
        raise ValueError("unexpected ']' in address")
    return host, hostport[colon + 1:]


def resolve_client_ip(headers: Mapping[str, str], peer_address: str) -> str:
    """
    Resolve the originating client IP from request headers.

    Args:
        headers: Read-only header view; lookups are expected to be
            case-insensitive (e.g. Starlette Headers)
        peer_address: Transport peer as "ip:port", "[ipv6]:port" or bare IP

    Returns:
        Best-guess client IP. Never raises; may be "" if nothing usable
        was found and the peer address is malformed.
    """
    for name, strategy in HEADER_PRECEDENCE:
        value = headers.get(name)
        if not value:
            continue

        if strategy is HeaderStrategy.DIRECT:
            logger.debug(f"[CLIENT IP] Using {name}: {value}")
            return value

        try:
            address = retrieve_forwarded_ip(value)
        except NoQualifyingAddress as e:
            logger.debug(f"[CLIENT IP] Skipping {name}: {e}")
            continue
        logger.debug(f"[CLIENT IP] Using {name}: {address}")
        return address

    host = split_peer_host(peer_address)
    logger.debug(f"[CLIENT IP] Falling back to peer address: {host!r}")
    return host


def _peer_address(request: Request) -> str:
    if request.client is None:
        return ""
    host, port = request.client.host, request.client.port
    if ":" in host:
        return f"[{host}]:{port}"
    return f"{host}:{port}"


def get_client_ip(request: Request) -> str:
    """
    Extract the real client IP from a request.

    Args:
        request: FastAPI Request object

    Returns:
        Client IP address string
    """
    return resolve_client_ip(request.headers, _peer_address(request))
