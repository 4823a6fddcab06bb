from srops.ports import (
    DEF_MAP,
    HTTP_PORT,
    QUERY_PORT,
    get_port,
    parse_properties,
    resolve_config_map,
)


def test_default_port():
    assert get_port({}, HTTP_PORT) == 8030
    assert get_port({}, QUERY_PORT) == 9030


def test_configured_port_and_invalid():
    assert get_port({HTTP_PORT: "1"}, HTTP_PORT) == 1
    assert get_port({HTTP_PORT: "abc"}, HTTP_PORT) == DEF_MAP[HTTP_PORT]
    assert get_port({HTTP_PORT: str(2**40)}, HTTP_PORT) == DEF_MAP[HTTP_PORT]


def test_parse_properties():
    text = "# comment\nHTTP_PORT = 8031\nquery_port: 9031\n\n"
    assert parse_properties(text) == {"http_port": "8031", "query_port": "9031"}


def test_resolve_config_map():
    cm = {"data": {"fe.conf": "http_port=1234\n"}}
    config = resolve_config_map(cm, "fe.conf")
    assert get_port(config, HTTP_PORT) == 1234
    assert resolve_config_map(cm, "missing") == {}