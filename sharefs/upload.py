"""Build stored objects from the named fields of an upload form."""

import logging
from collections import namedtuple
from typing import Iterable

from .container import Binary, Code, Text
from .languages import match_language

logger = logging.getLogger(__name__)

DEFAULT_NAME = "untitled.txt"


class Field(namedtuple("Field", ["name", "data", "filename", "is_text"],
                       defaults=(None, True))):
    """One field of an upload form.

    Attributes:
        name (str): Form field name.
        data (bytes|str): Field body.
        filename (str|None): Filename declared by the client, if any.
        is_text (bool): Whether the field was sent as text.
    """


def build_from_fields(store, fields: Iterable[Field]):
    """Create, fill and finalize an object in `store` from upload `fields`.

    Recognized fields are ``public``, ``protected`` and ``no_preview``
    (present means set), ``language`` and ``file``. The first non-empty
    ``file`` provides the payload, unless a later one is binary and its
    filename is not explicitly empty. A matched language turns a text
    upload into code.

    Returns:
        StoredObject: The finalized object. When the same content was
        uploaded before, its flags and secret are the merged ones.
    """
    obj = store.create()
    written = False
    language_id = None

    for field in fields:
        if field.name == "language":
            if field.is_text:
                language_id = match_language(_to_text(field.data))
        elif field.name == "public":
            obj.flags = obj.flags._replace(public=True)
        elif field.name == "protected":
            obj.flags = obj.flags._replace(protected=True)
            obj.set_secret()
        elif field.name == "no_preview":
            obj.flags = obj.flags._replace(no_preview=True)
        elif field.name == "file":
            if not written or (not field.is_text and field.filename != ""):
                obj.kind = Text() if field.is_text else Binary(previewable=True)
                obj.clear()
                obj.write(field.data)
                written = bool(field.data)
                obj.name = field.filename or DEFAULT_NAME
        else:
            logger.debug("Ignoring unknown upload field %r", field.name)

    if language_id is not None and obj.kind == Text():
        obj.kind = Code(language_id)

    obj.flush()
    return obj


def _to_text(data) -> str:
    if isinstance(data, bytes):
        return data.decode("utf-8", errors="replace")
    return data
