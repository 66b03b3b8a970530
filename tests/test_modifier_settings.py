import pytest

from gorplay.modifier_settings import (
    HTTPHeader,
    HTTPModifierConfig,
    HTTPParam,
    parse_basic_auth_filter,
    parse_hash_filter,
    parse_header_filter,
    parse_header_rewrite,
    parse_http_header,
    parse_http_param,
    parse_url_regexp,
    parse_url_rewrite,
)


def test_header_filters():
    first = parse_header_filter("Header1:^$")
    assert first.name == b"Header1"
    assert first.regexp.match(b"")

    second = parse_header_filter("Header2:^:$")
    assert second.name == b"Header2"
    assert second.regexp.match(b":")

    with pytest.raises(ValueError):
        parse_header_filter("Header3-^$")


def test_header_filter_bad_regexp():
    with pytest.raises(ValueError):
        parse_header_filter("Header:(")


def test_hash_filters():
    old_syntax = parse_hash_filter("Header1:1/2")
    assert old_syntax.percent == 50

    with pytest.raises(ValueError):
        parse_hash_filter("Header2:1")

    percent = parse_hash_filter("Header2:10%")
    assert percent.percent == 10
    assert percent.name == b"Header2"


def test_hash_filter_requires_colon():
    with pytest.raises(ValueError):
        parse_hash_filter("Header1")


def test_hash_filter_malformed_percent_is_zero():
    assert parse_hash_filter("Header:abc%").percent == 0


def test_url_rewrite_map():
    rewrite = parse_url_rewrite("/v1/user/([^\\/]+)/ping:/v2/user/$1/ping")
    assert rewrite.target == b"/v2/user/$1/ping"
    assert rewrite.src.match(b"/v1/user/joe/ping")

    with pytest.raises(ValueError):
        parse_url_rewrite("/v1/user/([^\\/]+)/ping")


def test_header_rewrite():
    rewrite = parse_header_rewrite("Host: (.*).example.com,$1.beta.example.com")
    assert rewrite.header == b"Host"
    assert rewrite.target == b"$1.beta.example.com"
    assert rewrite.src.match(b"www.example.com")


def test_header_rewrite_needs_target():
    with pytest.raises(ValueError):
        parse_header_rewrite("Host: onlyregexp")
    with pytest.raises(ValueError):
        parse_header_rewrite("Host")


def test_http_header_trims():
    assert parse_http_header(" User-Agent :  Replayed ") == HTTPHeader("User-Agent", "Replayed")
    with pytest.raises(ValueError):
        parse_http_header("NoColon")


def test_http_param_trims():
    assert parse_http_param(" api = 1 ") == HTTPParam(b"api", b"1")
    with pytest.raises(ValueError):
        parse_http_param("api")


def test_url_regexp_and_basic_auth():
    assert parse_url_regexp("^/api").regexp.search(b"/api/v1")
    assert parse_basic_auth_filter("^customer[0-9]").regexp.match(b"customer1:password")
    with pytest.raises(ValueError):
        parse_url_regexp("[")


def test_config_is_empty():
    config = HTTPModifierConfig()
    assert config.is_empty()
    config.methods.append(b"GET")
    assert not config.is_empty()