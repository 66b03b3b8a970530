"""Parts for HTTP traffic replay: byte editing, modifier options, limiting, stats, Kafka and ES helpers, pcap output and capture filters."""

__version__ = "0.1.0"

__all__ = [
    "byteutils",
    "capture",
    "elasticsearch",
    "kafka",
    "limiter",
    "modifier_settings",
    "pcap_dump",
    "stats",
]