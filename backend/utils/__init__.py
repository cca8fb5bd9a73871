from .addresses import InvalidAddress, PRIVATE_NETWORKS, is_private_address
from .request import (
    HEADER_PRECEDENCE,
    HeaderStrategy,
    NoQualifyingAddress,
    get_client_ip,
    resolve_client_ip,
    retrieve_forwarded_ip,
    split_peer_host,
)

__all__ = [
    "InvalidAddress",
    "PRIVATE_NETWORKS",
    "is_private_address",
    "HEADER_PRECEDENCE",
    "HeaderStrategy",
    "NoQualifyingAddress",
    "get_client_ip",
    "resolve_client_ip",
    "retrieve_forwarded_ip",
    "split_peer_host",
]
