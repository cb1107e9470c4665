"""Turn stored objects into responses for the web layer."""

import hmac
import logging
import mimetypes
from collections import namedtuple
from typing import Optional, Tuple

from .container import Binary, Code, Text
from .errors import AccessDenied, HighlightUnavailable
from .languages import language_name

logger = logging.getLogger(__name__)

TEXT_PLAIN = "text/plain; charset=utf-8"
TEXT_HTML = "text/html; charset=utf-8"
OCTET_STREAM = "application/octet-stream"

INLINE = "inline"
ATTACHMENT = "attachment"

CACHE_CONTROL = "max-age=31536000"


class Served(namedtuple("Served",
                        ["content_type", "body", "disposition", "filename"])):
    """Everything the web layer needs to answer a download request.

    Attributes:
        content_type (str): Value for the ``Content-Type`` header.
        body (bytes): Response body.
        disposition (str): ``inline`` or ``attachment``.
        filename (str): Filename to suggest to the client.
    """

    def headers(self) -> dict:
        """Return the response headers for this object."""
        return {
            "Content-Type": self.content_type,
            "Cache-Control": CACHE_CONTROL,
            "Access-Control-Allow-Origin": "*",
            "Content-Disposition": '{0}; filename="{1}"'.format(
                self.disposition, self.filename.replace('"', "")),
        }


def content_type(obj, highlighted: bool = False) -> str:
    """Return the content type to serve `obj` with."""
    kind = obj.kind

    if isinstance(kind, Text):
        return TEXT_PLAIN

    if isinstance(kind, Code):
        return TEXT_HTML if highlighted else TEXT_PLAIN

    if isinstance(kind, Binary):
        if not kind.previewable:
            return OCTET_STREAM
        guessed, _ = mimetypes.guess_type(obj.name, strict=False)
        return guessed or OCTET_STREAM

    raise TypeError("Unknown content kind: {0!r}".format(kind))


def disposition(obj) -> str:
    return ATTACHMENT if obj.flags.no_preview else INLINE


def check_access(obj, secret: Optional[str]) -> None:
    """Raise :class:`AccessDenied` unless `secret` unlocks `obj`."""
    if obj.secret is None:
        return
    given = (secret or "").encode("utf-8")
    if not hmac.compare_digest(given, obj.secret.encode("utf-8")):
        raise AccessDenied("Object {0} is protected".format(obj.address))


def highlight_source(obj) -> Optional[Tuple[str, str]]:
    """Return ``(language, text)`` for a decompressed code object, or ``None``
    when `obj` is not code or its language id is unknown.
    """
    if not isinstance(obj.kind, Code):
        return None

    language = language_name(obj.kind.language_id)
    if language is None:
        logger.warning("Unknown language id %d on %s, serving as text",
                       obj.kind.language_id, obj.address)
        return None

    return language, obj.read().decode("utf-8", errors="replace")


def serve(store, address: str, secret: Optional[str] = None,
          raw: bool = False, highlighter=None) -> Served:
    """Load the object at `address` and shape it for a response.

    Args:
        store (ShareFS): Store to read from.
        address: Object address.
        secret: Secret supplied by the client, needed for protected objects.
        raw: Serve code as plain text even when a highlighter is available.
        highlighter (Highlighter): Optional highlighting service client.

    Raises:
        ObjectNotFound: If there is no valid container at `address`.
        AccessDenied: If the object is protected and `secret` is wrong.
    """
    obj = store.open(address)
    check_access(obj, secret)
    obj.decompress()

    if not raw and highlighter is not None:
        source = highlight_source(obj)
        if source is not None:
            try:
                html = highlighter.highlight(*source)
            except HighlightUnavailable as exc:
                logger.warning("%s, serving %s as text", exc, address)
            else:
                return Served(content_type(obj, highlighted=True),
                              html.encode("utf-8"), disposition(obj), obj.name)

    return Served(content_type(obj), obj.read(), disposition(obj), obj.name)
