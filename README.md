# gorplay

Building blocks for tools that record live HTTP traffic and replay it
against other environments for shadowing, load testing and analysis.

The package uses only the Python standard library and supports Python 3.10
and later.

## Installation

```
pip install gorplay
```

To run the test suite:

```
pip install "gorplay[test]"
pytest
```

## Modules

| Module | Purpose |
| --- | --- |
| `gorplay.byteutils` | Range-based editing of byte strings: `cut`, `insert`, `replace`. Out-of-range positions raise `IndexError`. |
| `gorplay.modifier_settings` | Parsers for HTTP modifier options and the dataclasses they return (`HeaderFilter`, `BasicAuthFilter`, `HashFilter`, `HTTPHeader`, `HTTPParam`, `URLRewrite`, `HeaderRewrite`, `URLRegexp`), plus `HTTPModifierConfig`, which holds lists of them; `HTTPModifierConfig.is_empty()` tells whether any option is set. Malformed values and bad regular expressions raise `ValueError`. |
| `gorplay.limiter` | `Limiter`, which wraps a plugin object (anything with `plugin_read` and/or `plugin_write`) and drops messages above an absolute per-second rate (`"10"`) or outside a percentage (`"10%"`). A wrapped plugin with a `speed_factor` attribute is re-paced by a percentage limit instead. `parse_limit_options` turns the option string into `(limit, is_percent)`. |
| `gorplay.stats` | `GorStat`, a latest/mean/max/count statistic; `start_reporting()` logs it through `logging` every `rate_ms` in a background thread and returns an event that stops it. |
| `gorplay.kafka` | `KafkaMessage`, a JSON request record (`from_json`, `dump` to a payload header line plus an HTTP/1.1 request); `KafkaTLSConfig` and `new_tls_context`, which builds an `ssl.SSLContext` from certificate files. |
| `gorplay.elasticsearch` | `parse_uri`, which returns the index name of a `scheme://[user[:password]@]host/index_name` URI or raises `ESURIError`, and `rtt_to_ms`. |
| `gorplay.pcap_dump` | `PcapWriter` and `CaptureInfo` for writing libpcap v2.4 files (little-endian) with micro- or nanosecond timestamps. |
| `gorplay.capture` | `EngineType` (`parse`, `str`), `Interface`, BPF filter builders (`ports_filter`, `hosts_filter`, `build_filter`), `listen_all`, `is_device`, `interface_addresses`, `link_type_length` and `afpacket_compute_size` for AF_PACKET ring sizes. |

## Examples

Editing a byte string by range:

```python
from gorplay.byteutils import cut, insert, replace

cut(b"123456", 2, 4)               # b"1256"
insert(b"123456", 2, b"abcd")      # b"12abcd3456"
replace(b"123456", 2, 5, b"ab")    # b"12ab6"
```

Parsing modifier options:

```python
from gorplay.modifier_settings import parse_hash_filter, parse_url_rewrite

parse_hash_filter("User-Id:10%").percent   # 10
parse_hash_filter("User-Id:1/2").percent   # 50 (older fraction form)
parse_url_rewrite("/v1/user/([^\\/]+)/ping:/v2/user/$1/ping")
parse_hash_filter("User-Id:10")            # ValueError: no '%'
```

Limit options:

```python
from gorplay.limiter import parse_limit_options

parse_limit_options("10")    # (10, False): ten per second
parse_limit_options("25%")   # (25, True): a quarter of the traffic
```

Turning a Kafka JSON record into a payload:

```python
from gorplay.kafka import KafkaMessage

msg = KafkaMessage.from_json(
    '{"Req_URL":"/","Req_Type":"1","Req_ID":"2","Req_Ts":"3",'
    '"Req_Method":"GET","Req_Headers":{"Header":"1"}}'
)
msg.dump()   # b"1 2 3\nGET / HTTP/1.1\r\nHeader: 1\r\n\r\n"
```

Building a capture filter:

```python
from gorplay.capture import EngineType, build_filter, ports_filter

EngineType.parse("pcap_file")            # EngineType.PCAP_FILE
ports_filter("tcp", "dst", [80, 8080])   # "tcp dst port 80 or tcp dst port 8080"
build_filter("127.0.0.1", [80])          # "((tcp dst port 80) and (dst host 127.0.0.1))"
```

Writing a pcap file:

```python
from gorplay.pcap_dump import CaptureInfo, PcapWriter

with open("out.pcap", "wb") as stream:
    writer = PcapWriter(stream)
    writer.write_file_header(65536, 1)   # Ethernet
    writer.write_packet(CaptureInfo(capture_length=4, length=4), b"\x00\x01\x02\x03")
```

## What this package does not do

It is a library of parts, not a running tool. There is no command-line
program, and nothing here captures packets from a network interface, listens
for or replays traffic, runs middleware, or connects to Kafka or
ElasticSearch: `gorplay.capture` only builds filter expressions and sizes,
`gorplay.kafka` only handles the message format and TLS context, and
`gorplay.elasticsearch` only parses URIs and converts durations.