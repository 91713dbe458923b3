"""
Helper utility functions.
"""
import socket
import psutil


def get_local_ip() -> str:
    """
    Find the first non-loopback IPv4 address of this host.

    Used only for the startup banner so a developer can reach the server
    from another device on the same network.

    Returns:
        IPv4 address string, or "localhost" if none is found

    Example:
        >>> get_local_ip()
        '192.168.1.23'
    """
    for addresses in psutil.net_if_addrs().values():
        for address in addresses:
            if address.family == socket.AF_INET and not address.address.startswith("127."):
                return address.address
    return "localhost"

