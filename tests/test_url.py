import pytest

from restup import ConfigurationError, Param, Protocol, UrlError, build_url, encode


def test_port_included_when_positive():
    url = build_url(Protocol.HTTPS, "api.test", 8443, "items", [Param("a", "1"), Param("b", "2")])
    assert url == "https://api.test:8443/items?a=1&b=2"


@pytest.mark.parametrize("port", [0, -1, -80])
def test_port_omitted_when_not_positive(port):
    assert build_url(Protocol.HTTP, "example.com", port, "users") == "http://example.com/users"


def test_params_keep_caller_order():
    params = [Param("z", "1"), Param("a", "2"), Param("m", "3")]
    assert build_url("http", "h", -1, "p", params).endswith("?z=1&a=2&m=3")


def test_keys_and_values_encoded_independently():
    url = build_url("http", "h", -1, "search", [Param("full name", "a&b=c"), Param("q", "é")])
    assert url == "http://h/search?full+name=a%26b%3Dc&q=%C3%A9"


def test_path_appended_verbatim():
    assert build_url("http", "h", 80, "/v1//users/", []) == "http://h:80//v1//users/"
    assert build_url("http", "h", -1, "", []) == "http://h/"


def test_no_question_mark_without_params():
    assert "?" not in build_url("http", "h", -1, "x", [])


def test_protocol_strings_accepted():
    assert build_url("HTTPS", "h", -1, "x").startswith("https://")


def test_unknown_protocol():
    with pytest.raises(ConfigurationError):
        build_url("ftp", "h", -1, "x")
    with pytest.raises(ConfigurationError):
        Protocol.parse(None)


def test_missing_host_is_url_error():
    with pytest.raises(UrlError):
        build_url("http", "", -1, "x")


def test_encode_is_form_style():
    assert encode("a b") == "a+b"
    assert encode("a/b") == "a%2Fb"
    assert encode(5) == "5"


def test_encode_matches_java_url_encoder():
    assert encode("a*b") == "a*b"
    assert encode("~user") == "%7Euser"
    assert encode("-_.") == "-_."
