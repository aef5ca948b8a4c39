from __future__ import annotations

import ipaddress
from collections.abc import Iterable
from dataclasses import dataclass, field

from docs_gate.core.errors import ConfigurationError
from docs_gate.core.logging import get_logger

logger = get_logger(__name__)

IPAddress = ipaddress.IPv4Address | ipaddress.IPv6Address
IPNetwork = ipaddress.IPv4Network | ipaddress.IPv6Network


def _normalize(addr: IPAddress) -> IPAddress:
    # ::ffff:a.b.c.d and a.b.c.d are the same caller
    if isinstance(addr, ipaddress.IPv6Address) and addr.ipv4_mapped is not None:
        return addr.ipv4_mapped
    return addr


def parse_address(value: str) -> IPAddress | None:
    try:
        return _normalize(ipaddress.ip_address(value.strip()))
    except ValueError:
        return None


@dataclass(frozen=True)
class ParsedAllowList:
    """Allow-list entries split into single addresses and networks."""

    addresses: frozenset[IPAddress] = field(default_factory=frozenset)
    networks: tuple[IPNetwork, ...] = ()

    def contains(self, client_ip: str) -> bool:
        addr = parse_address(client_ip)
        if addr is None:
            return False
        if addr in self.addresses:
            return True
        return any(addr in net for net in self.networks)


def parse_allowlist(entries: Iterable[str], *, strict: bool = False) -> ParsedAllowList:
    """Classify raw allow-list entries.

    Entries containing ``/`` are tried as networks first (host bits are
    masked off) and fall back to a plain address parse. Entries that are
    neither are dropped with a warning, or raise ``ConfigurationError`` when
    ``strict`` is set.
    """
    addresses: set[IPAddress] = set()
    networks: list[IPNetwork] = []

    for raw in entries:
        entry = raw.strip()
        if not entry:
            continue
        if "/" in entry:
            try:
                networks.append(ipaddress.ip_network(entry, strict=False))
                continue
            except ValueError:
                pass
        addr = parse_address(entry)
        if addr is not None:
            addresses.add(addr)
            continue
        if strict:
            raise ConfigurationError(
                f"Invalid allow-list entry: {entry!r}", details={"entry": entry}
            )
        logger.warning("allowlist_entry_ignored", extra={"entry": entry})

    return ParsedAllowList(addresses=frozenset(addresses), networks=tuple(networks))
