import ssl

import pytest

from gorplay.kafka import KafkaMessage, KafkaTLSConfig, new_tls_context


def test_json_message_dumps_to_request():
    raw = (
        b'{"Req_URL":"/","Req_Type":"1","Req_ID":"2","Req_Ts":"3",'
        b'"Req_Method":"GET","Req_Headers":{"Header":"1"}}'
    )
    msg = KafkaMessage.from_json(raw)
    assert msg.dump() == b"1 2 3\nGET / HTTP/1.1\r\nHeader: 1\r\n\r\n"


def test_json_fields_are_decoded():
    msg = KafkaMessage.from_json(
        '{"Req_URL":"/a","Req_Type":"1","Req_ID":"2","Req_Ts":"3",'
        '"Req_Method":"POST","Req_Body":"data"}'
    )
    assert msg.req_url == "/a"
    assert msg.req_method == "POST"
    assert msg.req_body == "data"
    assert msg.req_headers == {}


def test_dump_appends_body():
    msg = KafkaMessage(
        req_url="/x", req_type="1", req_id="id", req_ts="5", req_method="POST", req_body="data"
    )
    assert msg.dump() == b"1 id 5\nPOST /x HTTP/1.1\r\n\r\ndata"


def test_dump_keeps_header_order():
    msg = KafkaMessage(req_method="GET", req_url="/", req_headers={"A": "1", "B": "2"})
    assert msg.dump().split(b"\r\n")[1:3] == [b"A: 1", b"B: 2"]


def test_from_json_rejects_invalid_json():
    with pytest.raises(ValueError):
        KafkaMessage.from_json(b"not json")


def test_from_json_rejects_non_object():
    with pytest.raises(ValueError):
        KafkaMessage.from_json(b"[1, 2]")


def test_from_json_rejects_bad_headers():
    with pytest.raises(ValueError):
        KafkaMessage.from_json(b'{"Req_Headers": {"A": 1}}')


def test_tls_requires_key_with_certificate():
    with pytest.raises(ValueError, match="Missing key of client certificate"):
        new_tls_context("client.crt", "", "")


def test_tls_requires_certificate_with_key():
    with pytest.raises(ValueError, match="missing TLS client certificate"):
        new_tls_context("", "client.key", "")


def test_tls_without_files_verifies_servers():
    context = new_tls_context("", "", "")
    assert context.verify_mode == ssl.CERT_REQUIRED


def test_tls_missing_ca_file_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        new_tls_context("", "", str(tmp_path / "absent.pem"))


@pytest.mark.parametrize(
    ("config", "expected"),
    [
        (KafkaTLSConfig(), False),
        (KafkaTLSConfig(ca_cert="ca.pem"), True),
        (KafkaTLSConfig(client_cert="c.pem", client_key="k.pem"), True),
        (KafkaTLSConfig(client_key="k.pem"), False),
    ],
)
def test_tls_config_enabled(config, expected):
    assert config.enabled is expected