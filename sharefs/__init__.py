# -*- coding: utf-8 -*-
"""ShareFS is a content-addressable store for small shared files. Every
upload is kept in a single container file named by a short code derived from
its content, so uploading the same bytes twice yields the same code and one
file on disk.

Besides the payload, a container records a display name, the kind of
content (text, binary or highlighted source code), an optional secret that
protects it, and whether it is public or may be previewed inline.
"""

from .__meta__ import (
    __title__,
    __summary__,
    __url__,
    __version__,
    __author__,
    __email__,
    __license__,
)

from .container import Binary, Code, Flags, Header, Text
from .errors import (
    AccessDenied,
    FormatError,
    IntegrityError,
    ObjectNotFound,
    ShareFSError,
    StateError,
)
from .sharefs import ShareFS
from .stored import State, StoredObject


__all__ = (
    "ShareFS",
    "StoredObject",
    "State",
    "Flags",
    "Header",
    "Text",
    "Binary",
    "Code",
    "ShareFSError",
    "ObjectNotFound",
    "FormatError",
    "StateError",
    "IntegrityError",
    "AccessDenied",
)
