"""Capture engine selection, BPF filter construction and link-layer sizing."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Iterable, Sequence

_MAX_PORT = (1 << 16) - 1
_AFPACKET_FRAMES_PER_BLOCK = 128

_LINK_TYPE_LENGTHS = {
    1: 14,  # Ethernet
    0: 4,  # BSD loopback (null)
    108: 4,  # OpenBSD loopback
    101: 0,  # raw IP
    12: 0,  # raw IP (some platforms)
    14: 0,  # raw IP (some platforms)
    228: 0,  # IPv4
    229: 0,  # IPv6
    113: 16,  # Linux cooked capture
    10: 13,  # FDDI
    226: 24,  # Solaris ipnet
}


class EngineType(enum.IntEnum):
    """Available engines for intercepting traffic."""

    PCAP = 1
    PCAP_FILE = 2
    RAW_SOCKET = 4
    AF_PACKET = 8

    @classmethod
    def parse(cls, value: str) -> EngineType:
        """Return the engine named by ``value``; an empty name means libpcap."""
        try:
            return _ENGINE_BY_NAME[value]
        except KeyError:
            raise ValueError(f"invalid engine {value}") from None

    def __str__(self) -> str:
        return _ENGINE_NAMES[self]


_ENGINE_NAMES = {
    EngineType.PCAP: "libpcap",
    EngineType.PCAP_FILE: "pcap_file",
    EngineType.RAW_SOCKET: "raw_socket",
    EngineType.AF_PACKET: "af_packet",
}
_ENGINE_BY_NAME = {name: engine for engine, name in _ENGINE_NAMES.items()}
_ENGINE_BY_NAME[""] = EngineType.PCAP


@dataclass(frozen=True)
class Interface:
    """A capture device: its name and the IP addresses bound to it."""

    name: str = ""
    addresses: tuple[str, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        object.__setattr__(self, "addresses", tuple(self.addresses))


def listen_all(addr: str) -> bool:
    """True when ``addr`` means every local address."""
    return addr in ("", "0.0.0.0", "[::]", "::")


def is_device(addr: str, interface: Interface) -> bool:
    """True when ``addr`` names the interface or one of its addresses."""
    return addr == interface.name or addr in interface.addresses


def interface_addresses(interface: Interface) -> list[str]:
    """Return the addresses of ``interface`` as strings."""
    return list(interface.addresses)


def ports_filter(transport: str, direction: str, ports: Sequence[int]) -> str:
    """Build a BPF expression matching ``ports`` in ``direction``."""
    if not ports or ports[0] == 0:
        return f"{transport} {direction} portrange 0-{_MAX_PORT}"
    return " or ".join(f"{transport} {direction} port {port}" for port in ports)


def hosts_filter(direction: str, hosts: Iterable[str]) -> str:
    """Build a BPF expression matching ``hosts`` in ``direction``."""
    return " or ".join(f"{direction} host {host}" for host in hosts)


def build_filter(
    host: str,
    ports: Sequence[int],
    interface: Interface | None = None,
    transport: str = "tcp",
    track_response: bool = False,
) -> str:
    """Build the automatic BPF filter for ``interface``.

    Requests are matched by destination; with ``track_response`` responses
    are matched by source as well.
    """
    if interface is None:
        interface = Interface()
    if host == "localhost":
        host = "127.0.0.1"

    hosts = [host]
    if listen_all(host) or is_device(host, interface):
        hosts = interface_addresses(interface)

    def directed(direction: str) -> str:
        expression = ports_filter(transport, direction, ports)
        if hosts:
            return f"(({expression}) and ({hosts_filter(direction, hosts)}))"
        return f"({expression})"

    result = directed("dst")
    if track_response:
        result = f"{result} or {directed('src')}"
    return result


def link_type_length(link_type: int) -> int:
    """Return the link-layer header length for a pcap link type."""
    try:
        return _LINK_TYPE_LENGTHS[link_type]
    except KeyError:
        raise ValueError(f"can not identify link type {link_type}") from None


def afpacket_compute_size(
    target_size_mb: int, snaplen: int, page_size: int
) -> tuple[int, int, int]:
    """Return ``(frame_size, block_size, num_blocks)`` for an AF_PACKET ring.

    The ring stays below ``target_size_mb`` and each block is divisible by
    both the frame size and the page size.
    """
    if snaplen <= 0 or page_size <= 0:
        raise ValueError("snaplen and page size must be positive")
    if snaplen < page_size:
        frame_size = page_size // (page_size // snaplen)
    else:
        frame_size = (snaplen // page_size + 1) * page_size

    block_size = frame_size * _AFPACKET_FRAMES_PER_BLOCK
    num_blocks = (target_size_mb * 1024 * 1024) // block_size
    if num_blocks == 0:
        raise ValueError("Interface buffersize is too small")
    return frame_size, block_size, num_blocks