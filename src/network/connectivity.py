# src/network/connectivity.py — v1
"""Point-in-time reachability scan with a fail-safe-offline policy.

The scan reports which link types are up. Only wifi, ethernet and mobile
links count as reachable; an empty result, a result of only ``none``, or a
scan that raises all mean offline.
"""

from __future__ import annotations

import asyncio
import logging
import socket
from enum import Enum
from pathlib import Path
from typing import AsyncIterator, Callable, Iterable

logger = logging.getLogger(__name__)

_SYS_NET = Path("/sys/class/net")


class LinkType(str, Enum):
    WIFI = "wifi"
    ETHERNET = "ethernet"
    MOBILE = "mobile"
    VPN = "vpn"
    OTHER = "other"
    NONE = "none"


REACHABLE_LINKS = frozenset({LinkType.WIFI, LinkType.ETHERNET, LinkType.MOBILE})

_NAME_PREFIXES: tuple[tuple[tuple[str, ...], LinkType], ...] = (
    (("wl", "wifi", "ath", "ra"), LinkType.WIFI),
    (("en", "eth", "em"), LinkType.ETHERNET),
    (("ww", "rmnet", "ppp", "pdp", "ccmni", "usb"), LinkType.MOBILE),
    (("tun", "tap", "wg", "utun", "ipsec"), LinkType.VPN),
)


def classify_interface(name: str, wireless: bool = False) -> LinkType:
    """Map an interface name to a link type."""
    if wireless:
        return LinkType.WIFI
    lowered = name.lower()
    for prefixes, link in _NAME_PREFIXES:
        if lowered.startswith(prefixes):
            return link
    return LinkType.OTHER


def scan_links() -> set[LinkType]:
    """Enumerate active, non-loopback interfaces and classify them.

    On Linux, /sys/class/net gives operstate and a wireless marker; elsewhere
    the interface names from socket.if_nameindex() are used as-is.
    """
    if _SYS_NET.is_dir():
        return _scan_sysfs(_SYS_NET.iterdir())
    names = [name for _, name in socket.if_nameindex()]
    return {classify_interface(n) for n in names if not _is_loopback(n)}


def _scan_sysfs(entries: Iterable[Path]) -> set[LinkType]:
    links: set[LinkType] = set()
    for entry in entries:
        if _is_loopback(entry.name):
            continue
        state_file = entry / "operstate"
        state = state_file.read_text().strip() if state_file.exists() else "unknown"
        if state not in ("up", "unknown"):
            continue
        links.add(classify_interface(entry.name, (entry / "wireless").exists()))
    return links


def _is_loopback(name: str) -> bool:
    return name == "lo" or name.startswith("lo0")


class ConnectivityOracle:
    """Answers "may a remote call succeed right now?"."""

    def __init__(self, scanner: Callable[[], Iterable[LinkType]] = scan_links) -> None:
        self._scanner = scanner

    async def is_reachable(self) -> bool:
        """Run the scan; any scan error is treated as offline."""
        try:
            links = set(await asyncio.to_thread(self._scanner))
        except Exception as e:
            logger.warning("Connectivity scan failed, assuming offline: %s", e)
            return False
        reachable = bool(links & REACHABLE_LINKS)
        logger.debug(
            "Connectivity scan: links=%s reachable=%s",
            sorted(link.value for link in links), reachable,
        )
        return reachable

    async def watch(self, interval_s: float = 5.0) -> AsyncIterator[bool]:
        """Yield reachability now and again every time it changes."""
        last: bool | None = None
        while True:
            current = await self.is_reachable()
            if current != last:
                last = current
                yield current
            await asyncio.sleep(interval_s)
