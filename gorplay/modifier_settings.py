"""Option values for the built-in HTTP traffic modifier."""

from __future__ import annotations

import re
from dataclasses import dataclass, field, fields

_ALNUM = re.compile(r"[0-9A-Za-z]+", re.ASCII)
_DIGITS = re.compile(r"[0-9]+", re.ASCII)


def _compile(pattern: str) -> re.Pattern[bytes]:
    try:
        return re.compile(pattern.encode())
    except re.error as exc:
        raise ValueError(f"invalid regular expression {pattern!r}: {exc}") from exc


def _parse_prefixed_int(text: str) -> int:
    """Parse an integer with an optional base prefix; malformed input gives 0."""
    sign = 1
    if text and text[0] in "+-":
        sign = -1 if text[0] == "-" else 1
        text = text[1:]
    lowered = text.lower()
    base = 10
    if lowered.startswith(("0x", "0o", "0b")):
        base = {"x": 16, "o": 8, "b": 2}[lowered[1]]
        text = text[2:]
    elif len(text) > 1 and text.startswith("0"):
        base = 8
        text = text[1:]
    if not _ALNUM.fullmatch(text):
        return 0
    try:
        return sign * int(text, base)
    except ValueError:
        return 0


def _parse_unsigned(text: str) -> int:
    return int(text) if _DIGITS.fullmatch(text) else 0


@dataclass(frozen=True)
class HeaderFilter:
    """A header name and the pattern its value must match."""

    name: bytes
    regexp: re.Pattern[bytes]


@dataclass(frozen=True)
class BasicAuthFilter:
    """A pattern matched against decoded Basic credentials."""

    regexp: re.Pattern[bytes]


@dataclass(frozen=True)
class HashFilter:
    """A header or parameter name and the share of traffic to keep."""

    name: bytes
    percent: int


@dataclass(frozen=True)
class HTTPHeader:
    """A header to set on every request."""

    name: str
    value: str


@dataclass(frozen=True)
class HTTPParam:
    """A query parameter to set on every request."""

    name: bytes
    value: bytes


@dataclass(frozen=True)
class URLRewrite:
    """A URL pattern and its replacement."""

    src: re.Pattern[bytes]
    target: bytes


@dataclass(frozen=True)
class HeaderRewrite:
    """A header, a pattern for its value and the replacement."""

    header: bytes
    src: re.Pattern[bytes]
    target: bytes


@dataclass(frozen=True)
class URLRegexp:
    """A pattern matched against request URLs."""

    regexp: re.Pattern[bytes]


def parse_header_filter(value: str) -> HeaderFilter:
    """Parse ``Name:regexp``."""
    parts = value.split(":", 1)
    if len(parts) < 2:
        raise ValueError("need both header and value, colon-delimited (ex. user_id:^169$)")
    return HeaderFilter(name=parts[0].encode(), regexp=_compile(parts[1].strip()))


def parse_basic_auth_filter(value: str) -> BasicAuthFilter:
    """Parse a pattern for decoded Basic auth credentials."""
    return BasicAuthFilter(regexp=_compile(value))


def parse_hash_filter(value: str) -> HashFilter:
    """Parse ``Name:NN%`` or the older ``Name:num/den`` form."""
    parts = value.split(":", 1)
    if len(parts) < 2:
        raise ValueError("need both header and value, colon-delimited (ex. user_id:50%)")
    name = parts[0].encode()
    val = parts[1].strip()

    if "%" in val:
        percent = _parse_prefixed_int(val[:-1])
    elif "/" in val:
        fraction = val.split("/")
        num = _parse_unsigned(fraction[0])
        den = _parse_unsigned(fraction[1])
        percent = int(num / den * 100) if den else 0
    else:
        raise ValueError("Value should be percent and contain '%'")

    return HashFilter(name=name, percent=percent & 0xFFFFFFFF)


def parse_http_header(value: str) -> HTTPHeader:
    """Parse ``Key: Value``."""
    parts = value.split(":", 1)
    if len(parts) != 2:
        raise ValueError("Expected `Key: Value`")
    return HTTPHeader(parts[0].strip(), parts[1].strip())


def parse_http_param(value: str) -> HTTPParam:
    """Parse ``Key=Value``."""
    parts = value.split("=", 1)
    if len(parts) != 2:
        raise ValueError("Expected `Key=Value`")
    return HTTPParam(parts[0].strip().encode(), parts[1].strip().encode())


def parse_url_rewrite(value: str) -> URLRewrite:
    """Parse ``src_regexp:target``."""
    parts = value.split(":", 1)
    if len(parts) < 2:
        raise ValueError("need both src and target, colon-delimited (ex. /a:/b)")
    return URLRewrite(src=_compile(parts[0]), target=parts[1].encode())


def parse_header_rewrite(value: str) -> HeaderRewrite:
    """Parse ``Header: regexp,target``."""
    message = (
        "need both header, regexp and rewrite target, colon-delimited "
        "(ex. Header: regexp,target)"
    )
    header_parts = value.split(":", 1)
    if len(header_parts) < 2:
        raise ValueError(message)
    parts = header_parts[1].strip().split(",", 1)
    if len(parts) < 2:
        raise ValueError(message)
    return HeaderRewrite(
        header=header_parts[0].encode(),
        src=_compile(parts[0]),
        target=parts[1].encode(),
    )


def parse_url_regexp(value: str) -> URLRegexp:
    """Parse a pattern for request URLs."""
    return URLRegexp(regexp=_compile(value))


@dataclass
class HTTPModifierConfig:
    """All options of the built-in traffic modifier."""

    url_negative_regexp: list[URLRegexp] = field(default_factory=list)
    url_regexp: list[URLRegexp] = field(default_factory=list)
    url_rewrite: list[URLRewrite] = field(default_factory=list)
    header_rewrite: list[HeaderRewrite] = field(default_factory=list)
    header_filters: list[HeaderFilter] = field(default_factory=list)
    header_negative_filters: list[HeaderFilter] = field(default_factory=list)
    header_basic_auth_filters: list[BasicAuthFilter] = field(default_factory=list)
    header_hash_filters: list[HashFilter] = field(default_factory=list)
    param_hash_filters: list[HashFilter] = field(default_factory=list)
    params: list[HTTPParam] = field(default_factory=list)
    headers: list[HTTPHeader] = field(default_factory=list)
    methods: list[bytes] = field(default_factory=list)

    def is_empty(self) -> bool:
        """True when no option is set, so the modifier can be skipped."""
        return not any(getattr(self, f.name) for f in fields(self))