"""Helpers for exporting request/response pairs to ElasticSearch."""

from __future__ import annotations

from urllib.parse import urlsplit

_SECOND_NS = 1_000_000_000


class ESURIError(ValueError):
    """Raised when an ElasticSearch URL lacks a host or an index."""

    def __init__(self) -> None:
        super().__init__(
            "Wrong ElasticSearch URL format. Expected to be: scheme://host/index_name"
        )


def parse_uri(uri: str) -> str:
    """Return the index name from ``scheme://[user[:password]@]host/index_name``."""
    try:
        parsed = urlsplit(uri)
    except ValueError as exc:
        raise ESURIError() from exc
    host = parsed.netloc.rpartition("@")[2]
    index = parsed.path.split("/")[-1]
    if not host or not index:
        raise ESURIError()
    return index


def _trunc_divmod(a: int, b: int) -> tuple[int, int]:
    quotient = abs(a) // b
    if a < 0:
        quotient = -quotient
    return quotient, a - quotient * b


def rtt_to_ms(duration_ns: int) -> int:
    """Convert a round-trip duration to the value stored in the RTT field.

    Whole seconds are added to the milliseconds of the sub-second remainder.
    """
    seconds, remainder = _trunc_divmod(duration_ns, _SECOND_NS)
    return int(seconds + remainder * 1e-6)