"""Binary container format for stored objects.

Every stored object is a single file laid out as::

    offset  size  field
    0       6     magic bytes (35 2E 35 35 FD FE)
    6       2     name length N, little-endian unsigned
    8       N     name, UTF-8
    8+N     4     type tag
    12+N    8     secret, all zero bytes when there is none
    20+N    1     flags
    21+N    ...   payload, zlib compressed

Only the magic bytes are a hard check when decoding. Everything after them
degrades to a safe default so that a partially damaged header still yields
something that can be served.
"""

import logging
import struct
from collections import namedtuple
from dataclasses import dataclass
from typing import Optional, Union

from .errors import FormatError

logger = logging.getLogger(__name__)

MAGIC = bytes([53, 46, 53, 53, 253, 254])
SECRET_SIZE = 8
NAME_MAX = 0xFFFF
LANGUAGE_ID_MAX = 0xFFFFFF

_NO_SECRET = b"\x00" * SECRET_SIZE
_NAME_LENGTH = struct.Struct("<H")

TEXT_TAG = 0
BINARY_TAG = 1
CODE_TAG = 2

PUBLIC_BIT = 0b1000_0000
PROTECTED_BIT = 0b0100_0000
NO_PREVIEW_BIT = 0b0010_0000


class Flags(namedtuple("Flags", ["public", "protected", "no_preview"],
                       defaults=(False, False, False))):
    """Independent boolean attributes of a stored object."""


def encode_flags(flags: Flags) -> int:
    """Pack `flags` into a single byte, most significant bit first."""
    value = 0
    if flags.public:
        value |= PUBLIC_BIT
    if flags.protected:
        value |= PROTECTED_BIT
    if flags.no_preview:
        value |= NO_PREVIEW_BIT
    return value


def decode_flags(value: int) -> Flags:
    """Unpack a flags byte. The five low bits are reserved and ignored."""
    return Flags(public=bool(value & PUBLIC_BIT),
                 protected=bool(value & PROTECTED_BIT),
                 no_preview=bool(value & NO_PREVIEW_BIT))


@dataclass(frozen=True)
class Text(object):
    """Plain text content."""


@dataclass(frozen=True)
class Binary(object):
    """Binary content, optionally previewable inline by a browser."""
    previewable: bool = True


@dataclass(frozen=True)
class Code(object):
    """Source code highlighted as the language identified by
    `language_id` (see :mod:`sharefs.languages`).
    """
    language_id: int


Kind = Union[Text, Binary, Code]


def encode_kind(kind: Kind) -> bytes:
    """Return the 4 byte type tag for `kind`."""
    if isinstance(kind, Text):
        return bytes([TEXT_TAG, 0, 0, 0])

    if isinstance(kind, Binary):
        return bytes([BINARY_TAG, 0, 0, 0 if kind.previewable else 1])

    if isinstance(kind, Code):
        if not 0 <= kind.language_id <= LANGUAGE_ID_MAX:
            raise ValueError(
                "Language id {0!r} does not fit in 24 bits".format(
                    kind.language_id))
        return bytes([CODE_TAG]) + kind.language_id.to_bytes(3, "little")

    raise TypeError("Unknown content kind: {0!r}".format(kind))


def decode_kind(tag: bytes) -> Kind:
    """Return the content kind for a 4 byte type tag. Unknown discriminators
    decode as :class:`Text`.
    """
    major = tag[0]

    if major == BINARY_TAG:
        return Binary(previewable=tag[3] == 0)

    if major == CODE_TAG:
        return Code(int.from_bytes(tag[1:4], "little"))

    # TEXT_TAG and anything written by a newer format version.
    return Text()


class Header(namedtuple("Header", ["name", "kind", "secret", "flags"])):
    """Decoded container header.

    Attributes:
        name (str): Display filename.
        kind (Kind): Content kind.
        secret (str|None): Protection token or ``None``.
        flags (Flags): Visibility and preview flags.
    """


def encode_secret(secret: Optional[str]) -> bytes:
    if secret is None:
        return _NO_SECRET

    data = secret.encode("utf-8")
    if len(data) != SECRET_SIZE:
        raise ValueError("Secret must be exactly {0} bytes, got {1}".format(
            SECRET_SIZE, len(data)))
    if data == _NO_SECRET:
        raise ValueError("Secret must not be all zero bytes")
    return data


def decode_secret(data: bytes) -> Optional[str]:
    if data == _NO_SECRET:
        return None

    try:
        return data.decode("utf-8")
    except UnicodeDecodeError:
        logger.warning("Discarding secret that is not valid UTF-8")
        return None


def encode_header(header: Header) -> bytes:
    """Serialize `header` into its on-disk byte layout."""
    name = header.name.encode("utf-8")
    if len(name) > NAME_MAX:
        raise ValueError("Name is {0} bytes long, the limit is {1}".format(
            len(name), NAME_MAX))

    return b"".join([
        MAGIC,
        _NAME_LENGTH.pack(len(name)),
        name,
        encode_kind(header.kind),
        encode_secret(header.secret),
        bytes([encode_flags(header.flags)]),
    ])


def verify_magic(data: bytes) -> bool:
    """Return whether `data` starts with the container magic bytes."""
    return data[:len(MAGIC)] == MAGIC


def read_header(stream) -> Header:
    """Read and decode a header from the readable binary `stream`, leaving
    it positioned at the first payload byte.

    Raises:
        FormatError: If the magic bytes are wrong or the header is cut short.
    """
    if not verify_magic(_read_exact(stream, len(MAGIC))):
        raise FormatError("Not a sharefs container: bad magic bytes")

    (name_length,) = _NAME_LENGTH.unpack(_read_exact(stream, 2))
    raw_name = _read_exact(stream, name_length)
    try:
        name = raw_name.decode("utf-8")
    except UnicodeDecodeError:
        logger.warning("Container name is not valid UTF-8, using empty name")
        name = ""

    kind = decode_kind(_read_exact(stream, 4))
    secret = decode_secret(_read_exact(stream, SECRET_SIZE))
    flags = decode_flags(_read_exact(stream, 1)[0])

    return Header(name, kind, secret, flags)


def _read_exact(stream, size: int) -> bytes:
    data = stream.read(size)
    if len(data) != size:
        raise FormatError("Container header is truncated")
    return data
