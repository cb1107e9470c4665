"""Client for the local syntax highlighting service.

The service listens on a Unix stream socket, reads one request of the form
``"{language}:{content}"`` until the client shuts down its write side, and
answers with highlighted HTML before closing the connection.
"""

import logging
import socket

from .errors import HighlightUnavailable

logger = logging.getLogger(__name__)

DEFAULT_SOCKET = "/tmp/sfss.sock"


class Highlighter(object):
    """Send source text to the highlighting service.

    Args:
        socket_path (str): Path of the service's Unix socket.
        timeout (float): Seconds to wait on connect and on each read.
    """

    def __init__(self, socket_path: str = DEFAULT_SOCKET,
                 timeout: float = 5.0):
        self.socket_path = socket_path
        self.timeout = timeout

    def highlight(self, language: str, content: str) -> str:
        """Return `content` rendered as highlighted HTML for `language`.

        Raises:
            HighlightUnavailable: If the service cannot be reached or drops
                the connection.
        """
        request = "{0}:{1}".format(language, content).encode("utf-8")
        chunks = []

        try:
            with socket.socket(socket.AF_UNIX, socket.SOCK_STREAM) as sock:
                sock.settimeout(self.timeout)
                sock.connect(self.socket_path)
                sock.sendall(request)
                sock.shutdown(socket.SHUT_WR)
                while True:
                    chunk = sock.recv(64 * 1024)
                    if not chunk:
                        break
                    chunks.append(chunk)
        except OSError as exc:
            raise HighlightUnavailable(
                "Highlighting service at {0} is unavailable: {1}".format(
                    self.socket_path, exc)) from exc

        return b"".join(chunks).decode("utf-8", errors="replace")
