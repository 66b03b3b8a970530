"""Writing packet data in the classic PCAP file format (v2.4, little-endian)."""

from __future__ import annotations

import struct
import time
from dataclasses import dataclass
from typing import BinaryIO

MAGIC_NANOSECONDS = 0xA1B23C4D
MAGIC_MICROSECONDS = 0xA1B2C3D4
VERSION_MAJOR = 2
VERSION_MINOR = 4

_NANOS_PER_MICRO = 1000
_NANOS_PER_NANO = 1
_SECOND_NS = 1_000_000_000
_MASK32 = 0xFFFFFFFF

_FILE_HEADER = struct.Struct("<IHHIIII")
_PACKET_HEADER = struct.Struct("<IIII")


@dataclass(frozen=True)
class CaptureInfo:
    """Metadata of a captured packet; no timestamp means the current time."""

    capture_length: int
    length: int
    timestamp_ns: int | None = None
    interface_index: int = 0


class PcapWriter:
    """Writes a PCAP file header and packet records to a binary stream."""

    def __init__(self, stream: BinaryIO, nanos: bool = False) -> None:
        self._stream = stream
        self._ts_scaler = _NANOS_PER_NANO if nanos else _NANOS_PER_MICRO

    def write_file_header(self, snaplen: int, linktype: int) -> None:
        """Write the file header; call once before the first packet."""
        magic = MAGIC_MICROSECONDS if self._ts_scaler == _NANOS_PER_MICRO else MAGIC_NANOSECONDS
        self._stream.write(
            _FILE_HEADER.pack(
                magic,
                VERSION_MAJOR,
                VERSION_MINOR,
                0,
                0,
                snaplen & _MASK32,
                linktype & _MASK32,
            )
        )

    def write_packet(self, info: CaptureInfo, data: bytes) -> None:
        """Write one packet record."""
        if info.capture_length != len(data):
            raise ValueError(
                f"capture length {info.capture_length} does not match data length {len(data)}"
            )
        if info.capture_length > info.length:
            raise ValueError(f"invalid capture info {info}:  capture length > length")
        self._write_packet_header(info)
        self._stream.write(data)

    def _write_packet_header(self, info: CaptureInfo) -> None:
        timestamp = info.timestamp_ns if info.timestamp_ns is not None else time.time_ns()
        seconds, nanos = divmod(timestamp, _SECOND_NS)
        self._stream.write(
            _PACKET_HEADER.pack(
                seconds & _MASK32,
                (nanos // self._ts_scaler) & _MASK32,
                info.capture_length & _MASK32,
                info.length & _MASK32,
            )
        )