"""
Private address classification.

Decides whether an IP address belongs to a private, loopback or link-local
network. See:

- https://en.wikipedia.org/wiki/Private_network
- https://en.wikipedia.org/wiki/Link-local_address
"""

import ipaddress

PRIVATE_CIDR_BLOCKS = (
    "127.0.0.0/8",     # localhost
    "10.0.0.0/8",      # 24-bit block
    "172.16.0.0/12",   # 20-bit block
    "192.168.0.0/16",  # 16-bit block
    "169.254.0.0/16",  # link local address
    "::1/128",         # localhost IPv6
    "fc00::/7",        # unique local address IPv6
    "fe80::/10",       # link local address IPv6
)

# Built once at import; a bad block here raises and stops the process
PRIVATE_NETWORKS = tuple(ipaddress.ip_network(block) for block in PRIVATE_CIDR_BLOCKS)


class InvalidAddress(ValueError):
    """Raised when a string is not a valid IPv4 or IPv6 address."""


def is_private_address(address: str) -> bool:
    """
    Check whether an address falls inside one of the private CIDR blocks.

    Args:
        address: IPv4 dotted-quad or IPv6 colon-hex string. IPv4-mapped
            IPv6 addresses (::ffff:a.b.c.d) are checked as IPv4; zoned
            IPv6 addresses (fe80::1%eth0) are rejected.

    Returns:
        True if the address is private/reserved, False if it is public

    Raises:
        InvalidAddress: if the address cannot be parsed
    """
    try:
        ip = ipaddress.ip_address(address)
    except ValueError as e:
        raise InvalidAddress(f"address is not valid: {address!r}") from e
    if getattr(ip, "scope_id", None):
        raise InvalidAddress(f"address is not valid: {address!r}")

    if ip.version == 6 and ip.ipv4_mapped is not None:
        ip = ip.ipv4_mapped

    for network in PRIVATE_NETWORKS:
        # Membership across IP versions is simply False
        if ip in network:
            return True
    return False
