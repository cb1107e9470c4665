# -*- coding: utf-8 -*-


"""
common utils for sharefs
"""


import io
import os
import secrets
import string
import zlib
from typing import Union

import fs as pyfs
import xxhash

from .errors import FormatError

BASE62_ALPHABET = string.digits + string.ascii_lowercase + string.ascii_uppercase
SECRET_ALPHABET = string.ascii_letters + string.digits

# zlib's speed-optimized level.
COMPRESSION_LEVEL = 1


def load_fs(root: Union[pyfs.base.FS, str]) -> pyfs.base.FS:
    """Return `root` if it is already a filesystem, else open it as a path or
    FS URL, creating the directory when missing.
    """
    if isinstance(root, pyfs.base.FS):
        return root
    return pyfs.open_fs(str(root), create=True)


def to_bytes(text) -> bytes:
    if not isinstance(text, bytes):
        text = bytes(text, "utf8")
    return text


def base62(data: bytes) -> str:
    """Render `data`, read as a big-endian integer, in base 62 using digits,
    then lowercase, then uppercase letters.
    """
    value = int.from_bytes(data, "big")
    if value == 0:
        return BASE62_ALPHABET[0]

    chars = []
    while value:
        value, rem = divmod(value, 62)
        chars.append(BASE62_ALPHABET[rem])
    return "".join(reversed(chars))


def computehash(data: bytes) -> str:
    """Return the address for the uncompressed payload `data`: its 64 bit
    XXH3 digest in little-endian byte order, rendered in base 62.
    """
    digest = xxhash.xxh3_64_intdigest(data)
    return base62(digest.to_bytes(8, "little"))


def compress(data: bytes) -> bytes:
    return zlib.compress(data, COMPRESSION_LEVEL)


def decompress(data: bytes) -> bytes:
    try:
        return zlib.decompress(data)
    except zlib.error as exc:
        raise FormatError("Payload is not a valid zlib stream") from exc


def generate_secret(length: int = 8) -> str:
    """Return a random alphanumeric protection token."""
    return "".join(secrets.choice(SECRET_ALPHABET) for _ in range(length))


class Stream(object):
    """Common interface for file-like objects.

    The input `obj` can be bytes, a file-like object or a path to a file on
    the local filesystem. If `obj` is a path, then it will be opened until
    :meth:`close` is called. If `obj` is a file-like object, then it's
    original position will be restored when :meth:`close` is called instead
    of closing the object automatically.
    """

    def __init__(self, obj):
        if isinstance(obj, (bytes, bytearray)):
            self._data = bytes(obj)
            self._obj = None
            self._pos = None
            return

        if hasattr(obj, "read"):
            pos = obj.tell()
        elif os.path.isfile(obj):
            obj = io.open(obj, "rb")
            pos = None
        else:
            raise ValueError(("Object must be bytes, a valid file path or "
                              "a readable object."))

        self._data = None
        self._obj = obj
        self._pos = pos

    def __iter__(self):
        """Read underlying IO object and yield results. Return object to
        original position if we didn't open it originally.
        """
        if self._data is not None:
            yield self._data
            return

        self._obj.seek(0)

        while True:
            data = self._obj.read(64 * 1024)

            if not data:
                break

            yield to_bytes(data)

        if self._pos is not None:
            self._obj.seek(self._pos)

    def close(self):
        """Close underlying IO object if we opened it, else return it to
        original position.
        """
        if self._obj is None:
            return
        if self._pos is None:
            self._obj.close()
        else:
            self._obj.seek(self._pos)
