"""Helpers for splicing byte strings by position."""

from __future__ import annotations


def _check_range(data: bytes, start: int, end: int) -> None:
    if not 0 <= start <= end <= len(data):
        raise IndexError(f"range [{start}:{end}] out of bounds for length {len(data)}")


def cut(data: bytes, start: int, end: int) -> bytes:
    """Return ``data`` with the range ``[start, end)`` removed."""
    _check_range(data, start, end)
    return bytes(data[:start]) + bytes(data[end:])


def insert(data: bytes, index: int, chunk: bytes) -> bytes:
    """Return ``data`` with ``chunk`` inserted at ``index``."""
    _check_range(data, index, index)
    return bytes(data[:index]) + bytes(chunk) + bytes(data[index:])


def replace(data: bytes, start: int, end: int, chunk: bytes) -> bytes:
    """Return ``data`` with the range ``[start, end)`` replaced by ``chunk``."""
    _check_range(data, start, end)
    return bytes(data[:start]) + bytes(chunk) + bytes(data[end:])