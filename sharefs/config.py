"""Configuration read from the environment.

Environment Variables:
    SFSS_LOCATION: Storage root directory or FS URL (required).
    SFSS_URL: Public base URL that short codes are appended to.
    SFSS_HIGHLIGHT_SOCKET: Unix socket of the highlighting service
        (default: /tmp/sfss.sock).
"""

import os
from collections import namedtuple
from typing import Mapping, Optional

from .errors import ConfigError
from .highlight import DEFAULT_SOCKET, Highlighter
from .sharefs import ShareFS

LOCATION_ENV = "SFSS_LOCATION"
URL_ENV = "SFSS_URL"
HIGHLIGHT_SOCKET_ENV = "SFSS_HIGHLIGHT_SOCKET"


class Config(namedtuple("Config", ["location", "url", "highlight_socket"],
                        defaults=(None, DEFAULT_SOCKET))):
    """Explicit settings for a sharefs deployment."""

    def store(self) -> ShareFS:
        return ShareFS(self.location)

    def highlighter(self) -> Highlighter:
        return Highlighter(self.highlight_socket)

    def link(self, address: str) -> str:
        """Return the public link for `address`, or the bare address when no
        base URL is configured.
        """
        if not self.url:
            return address
        return "{0}/{1}".format(self.url.rstrip("/"), address)


def from_env(environ: Optional[Mapping[str, str]] = None) -> Config:
    """Build a :class:`Config` from `environ`, defaulting to ``os.environ``.

    Raises:
        ConfigError: If ``SFSS_LOCATION`` is unset or empty.
    """
    if environ is None:
        environ = os.environ

    location = environ.get(LOCATION_ENV)
    if not location:
        raise ConfigError("{0} must be set to the storage root".format(
            LOCATION_ENV))

    return Config(location=location,
                  url=environ.get(URL_ENV) or None,
                  highlight_socket=environ.get(HIGHLIGHT_SOCKET_ENV)
                  or DEFAULT_SOCKET)
