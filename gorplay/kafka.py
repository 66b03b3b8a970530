"""Kafka settings and the JSON message format used to carry requests."""

from __future__ import annotations

import json
import ssl
from dataclasses import dataclass, field
from typing import Any

_CRLF = "\r\n"


@dataclass(frozen=True)
class KafkaTLSConfig:
    """Certificate files for connecting to a secured Kafka cluster."""

    ca_cert: str = ""
    client_cert: str = ""
    client_key: str = ""

    @property
    def enabled(self) -> bool:
        """True when TLS should be used for the connection."""
        return bool(self.client_cert or self.ca_cert)


def _text(document: dict[str, Any], key: str) -> str:
    value = document.get(key, "")
    if value is None:
        return ""
    if not isinstance(value, str):
        raise ValueError(f"field {key!r} must be a string")
    return value


@dataclass
class KafkaMessage:
    """A captured request as exchanged with Kafka in JSON form."""

    req_url: str = ""
    req_type: str = ""
    req_id: str = ""
    req_ts: str = ""
    req_method: str = ""
    req_body: str = ""
    req_headers: dict[str, str] = field(default_factory=dict)

    @classmethod
    def from_json(cls, raw: bytes | str) -> KafkaMessage:
        """Decode a message from its JSON document."""
        document = json.loads(raw)
        if not isinstance(document, dict):
            raise ValueError("Kafka message must be a JSON object")
        headers = document.get("Req_Headers") or {}
        if not isinstance(headers, dict) or not all(
            isinstance(k, str) and isinstance(v, str) for k, v in headers.items()
        ):
            raise ValueError("field 'Req_Headers' must map strings to strings")
        return cls(
            req_url=_text(document, "Req_URL"),
            req_type=_text(document, "Req_Type"),
            req_id=_text(document, "Req_ID"),
            req_ts=_text(document, "Req_Ts"),
            req_method=_text(document, "Req_Method"),
            req_body=_text(document, "Req_Body"),
            req_headers=dict(headers),
        )

    def dump(self) -> bytes:
        """Return the payload header line followed by the HTTP/1.1 request."""
        parts = [
            f"{self.req_type} {self.req_id} {self.req_ts}\n",
            f"{self.req_method} {self.req_url} HTTP/1.1{_CRLF}",
        ]
        parts.extend(f"{key}: {value}{_CRLF}" for key, value in self.req_headers.items())
        parts.append(_CRLF)
        parts.append(self.req_body)
        return "".join(parts).encode()


def new_tls_context(
    client_cert_file: str, client_key_file: str, ca_cert_file: str
) -> ssl.SSLContext:
    """Build a client TLS context from optional certificate files."""
    if client_cert_file and not client_key_file:
        raise ValueError("Missing key of client certificate in kafka")
    if not client_cert_file and client_key_file:
        raise ValueError("missing TLS client certificate in kafka")

    context = ssl.SSLContext(ssl.PROTOCOL_TLS_CLIENT)
    if client_cert_file and client_key_file:
        context.load_cert_chain(client_cert_file, client_key_file)
    if ca_cert_file:
        with open(ca_cert_file, encoding="ascii") as handle:
            context.load_verify_locations(cadata=handle.read())
    else:
        context.load_default_certs()
    return context