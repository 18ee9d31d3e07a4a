from core.urls import absolute_url, profile_url

ORIGIN = "https://kirka.io"


def test_empty_reference_stays_empty():
    assert absolute_url("", ORIGIN) == ""


def test_absolute_references_pass_through():
    assert absolute_url("http://cdn.example/a.png", ORIGIN) == "http://cdn.example/a.png"
    assert absolute_url("https://cdn.example/a.png", ORIGIN) == "https://cdn.example/a.png"


def test_protocol_relative_gets_https():
    assert absolute_url("//cdn.example/a.png", ORIGIN) == "https://cdn.example/a.png"


def test_root_relative_gets_origin():
    assert absolute_url("/skins/1.png", ORIGIN) == "https://kirka.io/skins/1.png"


def test_bare_relative_gets_origin_and_slash():
    assert absolute_url("skins/1.png", ORIGIN) == "https://kirka.io/skins/1.png"


def test_normalizing_twice_changes_nothing():
    for ref in ("", "/a.png", "a.png", "//cdn.example/a.png", "https://x/a.png"):
        once = absolute_url(ref, ORIGIN)
        assert absolute_url(once, ORIGIN) == once


def test_profile_url_quotes_identity():
    assert profile_url("KGJN53", ORIGIN) == "https://kirka.io/profile/KGJN53"
    assert profile_url("a b/c", ORIGIN) == "https://kirka.io/profile/a%20b%2Fc"


def test_profile_url_keeps_sub_delimiters():
    assert profile_url("it's(1)!*", ORIGIN) == "https://kirka.io/profile/it's(1)!*"
    assert profile_url("a&b=c", ORIGIN) == "https://kirka.io/profile/a%26b%3Dc"
