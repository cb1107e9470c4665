"""In-memory representation of one stored object."""

import enum
import io
import logging
from typing import Optional

from . import utils as u
from .container import Flags, Header, Kind, Text, SECRET_SIZE
from .errors import StateError

logger = logging.getLogger(__name__)


class State(enum.Enum):
    """Lifecycle states of a :class:`StoredObject`."""
    BUILDING = "building"
    FINALIZING = "finalizing"
    PERSISTED = "persisted"
    MERGED = "merged"


class StoredObject(object):
    """A container being built, or one read back from storage.

    New objects are made by :meth:`sharefs.ShareFS.create`; payload bytes are
    appended with :meth:`write` and the object is finalized with
    :meth:`flush`, after which :attr:`address` is set. Objects read back from
    storage start out compressed and are decompressed on demand.

    Attributes:
        name (str): Display filename.
        kind (Kind): Content kind.
        flags (Flags): Visibility and preview flags.
        secret (str|None): Protection token.
        address (str): Content address, empty until finalized.
        state (State): Lifecycle state.
    """

    def __init__(self,
                 name: str = "",
                 kind: Kind = None,
                 flags: Flags = None,
                 secret: Optional[str] = None,
                 store=None):
        self.name = name
        self.kind = kind if kind is not None else Text()
        self.flags = flags if flags is not None else Flags()
        self.secret = secret
        self.address = ""
        self.state = State.BUILDING
        self.compressed = False
        self._buf = io.BytesIO()
        self._store = store

        if self.flags.protected and self.secret is None:
            self.set_secret()

    @classmethod
    def from_header(cls, header: Header, address: str, payload: bytes = b"",
                    store=None) -> "StoredObject":
        """Return an object for a header read back from `address`. The
        payload, when given, is the compressed on-disk bytes.
        """
        obj = cls(header.name, header.kind, header.flags, header.secret,
                  store=store)
        obj.address = address
        obj.state = State.PERSISTED
        obj.compressed = True
        obj._buf = io.BytesIO(payload)
        return obj

    @property
    def header(self) -> Header:
        return Header(self.name, self.kind, self.secret, self.flags)

    @property
    def payload(self) -> bytes:
        """Current buffer contents, compressed or not per :attr:`compressed`.
        """
        return self._buf.getvalue()

    @property
    def finalized(self) -> bool:
        return bool(self.address)

    def set_secret(self) -> bool:
        """Generate a secret unless one is set. Return whether one was made.
        """
        if self.secret is not None:
            return False
        self.secret = u.generate_secret(SECRET_SIZE)
        return True

    def write(self, data) -> int:
        """Append `data` to the payload buffer."""
        if self.state is not State.BUILDING:
            raise StateError("Cannot write to an object that is {0}".format(
                self.state.value))
        return self._buf.write(u.to_bytes(data))

    def clear(self) -> None:
        """Drop any payload written so far."""
        if self.state is not State.BUILDING:
            raise StateError("Cannot clear an object that is {0}".format(
                self.state.value))
        self._buf = io.BytesIO()

    def read(self) -> bytes:
        """Return the uncompressed payload.

        Raises:
            StateError: If the payload has not been decompressed.
        """
        if self.compressed:
            raise StateError("Payload is compressed, decompress it first")
        return self._buf.getvalue()

    def compress(self) -> int:
        """Compress the payload buffer in place and return its new size."""
        if self.compressed:
            raise StateError("Payload is already compressed")
        data = u.compress(self._buf.getvalue())
        self._buf = io.BytesIO(data)
        self.compressed = True
        return len(data)

    def decompress(self) -> int:
        """Decompress the payload buffer in place and return its new size."""
        if not self.compressed:
            raise StateError("Payload is not compressed")
        data = u.decompress(self._buf.getvalue())
        self._buf = io.BytesIO(data)
        self.compressed = False
        return len(data)

    def flush(self) -> str:
        """Finalize the object in its store and return its address."""
        if self._store is None:
            raise StateError("Object is not attached to a store")
        return self._store.flush(self)

    def __eq__(self, other):
        if not isinstance(other, StoredObject):
            return NotImplemented
        return (self.header == other.header
                and self.address == other.address
                and self.compressed == other.compressed
                and self.payload == other.payload)

    __hash__ = None

    def __repr__(self):
        return ("StoredObject(name={0!r}, address={1!r}, kind={2!r}, "
                "flags={3!r}, protected={4}, compressed={5})").format(
                    self.name, self.address, self.kind, self.flags,
                    self.secret is not None, self.compressed)
