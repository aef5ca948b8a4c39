from __future__ import annotations

import ipaddress
from collections.abc import Iterable
from functools import lru_cache

from starlette.requests import Request

from docs_gate.constants import FORWARDED_FOR_HEADER
from docs_gate.core.ip_allowlist import IPNetwork, parse_address


@lru_cache(maxsize=16)
def _parse_trusted_proxy_cidrs(cidrs: tuple[str, ...]) -> tuple[IPNetwork, ...]:
    networks: list[IPNetwork] = []
    for cidr in (item.strip() for item in cidrs):
        if not cidr:
            continue
        try:
            networks.append(ipaddress.ip_network(cidr, strict=False))
        except ValueError:
            continue
    return tuple(networks)


def _is_trusted_proxy(peer_ip: str, trusted_proxies: tuple[str, ...]) -> bool:
    if not trusted_proxies:
        return False
    peer = parse_address(peer_ip)
    if peer is None:
        return False
    return any(peer in net for net in _parse_trusted_proxy_cidrs(trusted_proxies))


def get_client_ip(request: Request, trusted_proxies: Iterable[str] = ()) -> str:
    """Resolve the caller address.

    X-Forwarded-For is honored only when the socket peer is a trusted proxy.
    Proxies append to the header, so it is read right to left and the first
    hop that is not itself a trusted proxy wins; the leftmost entry is used
    only when every later hop is trusted. An unparsable hop discards the
    header. The result may be unparsable (e.g. an empty string); callers
    treat that as a non-matching address.
    """
    trusted = tuple(trusted_proxies)
    peer_ip = request.client.host if request.client else ""
    forwarded = request.headers.get(FORWARDED_FOR_HEADER)

    if not forwarded or not _is_trusted_proxy(peer_ip, trusted):
        return peer_ip

    hops = [hop.strip() for hop in forwarded.split(",")]
    for index in range(len(hops) - 1, -1, -1):
        hop = hops[index]
        if parse_address(hop) is None:
            break
        if index == 0 or not _is_trusted_proxy(hop, trusted):
            return hop

    return peer_ip


class StarletteRequestContext:
    """Adapts a Starlette request to the gate's ``RequestContext``."""

    def __init__(self, request: Request, trusted_proxies: Iterable[str] = ()) -> None:
        self.request = request
        self.trusted_proxies = tuple(trusted_proxies)

    def client_address(self) -> str:
        return get_client_ip(self.request, self.trusted_proxies)

    def header(self, name: str) -> str | None:
        return self.request.headers.get(name)
