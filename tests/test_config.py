# -*- coding: utf-8 -*-

import pytest

from sharefs import ShareFS
from sharefs.config import Config, from_env
from sharefs.errors import ConfigError
from sharefs.highlight import DEFAULT_SOCKET


def test_from_env(testpath):
    config = from_env({
        "SFSS_LOCATION": str(testpath),
        "SFSS_URL": "https://share.example.com/",
        "SFSS_HIGHLIGHT_SOCKET": "/run/hl.sock",
    })

    assert config.location == str(testpath)
    assert config.url == "https://share.example.com/"
    assert config.highlight_socket == "/run/hl.sock"


def test_from_env_defaults(testpath):
    config = from_env({"SFSS_LOCATION": str(testpath)})

    assert config.url is None
    assert config.highlight_socket == DEFAULT_SOCKET


@pytest.mark.parametrize("environ", [{}, {"SFSS_LOCATION": ""}])
def test_from_env_requires_location(environ):
    with pytest.raises(ConfigError):
        from_env(environ)


def test_from_env_reads_os_environ(monkeypatch, testpath):
    monkeypatch.setenv("SFSS_LOCATION", str(testpath))
    assert from_env().location == str(testpath)


def test_config_store(testpath):
    store = Config(str(testpath.join("new"))).store()

    assert isinstance(store, ShareFS)
    assert testpath.join("new").isdir()


def test_config_highlighter():
    assert Config("/tmp", highlight_socket="/x.sock").highlighter().socket_path \
        == "/x.sock"


@pytest.mark.parametrize("url,expected", [
    (None, "abc"),
    ("https://s.example.com", "https://s.example.com/abc"),
    ("https://s.example.com/", "https://s.example.com/abc"),
])
def test_config_link(url, expected):
    assert Config("/tmp", url=url).link("abc") == expected
