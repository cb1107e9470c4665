"""Module for ShareFS class."""

import logging
import re
import threading
import uuid
from contextlib import closing
from typing import Iterable, Optional, Union

import fs as pyfs
import fs.errors
import fs.tools

import sharefs.utils as u
from .container import Flags, Header, Kind, encode_header, read_header
from .errors import FormatError, IntegrityError, ObjectNotFound, StateError
from .stored import State, StoredObject

logger = logging.getLogger(__name__)

_ADDRESS_PATTERN = re.compile(r"^[0-9A-Za-z]+$")
_LOCK_STRIPES = 64


def merge_headers(existing: Header, new: Header) -> Header:
    """Reconcile the header of a new upload with the header already stored
    under the same address.

    Visibility only widens, protection and preview suppression are kept only
    when both sides ask for them, and the stored secret always wins over the
    new one.
    """
    protected = existing.flags.protected and new.flags.protected
    flags = Flags(public=existing.flags.public or new.flags.public,
                  protected=protected,
                  no_preview=existing.flags.no_preview and new.flags.no_preview)
    secret = existing.secret if protected else None
    return new._replace(flags=flags, secret=secret)


class ShareFS(object):
    """Content addressable store of small shared files.

    Each object lives in a single container file named by its address
    directly under the root of the backing filesystem. Identical payloads
    share one container; uploading one again merges the new metadata into
    the stored header instead of writing a second copy.

    Attributes:
        fs: PyFilesystem2 filesystem used as root of storage space.

    Args:
        root: Filesystem instance, directory path or FS URL. Directories are
            created when missing.
    """

    def __init__(self, root: Union[pyfs.base.FS, str]):
        self.fs = u.load_fs(root)
        self._locks = [threading.Lock() for _ in range(_LOCK_STRIPES)]
        logger.debug("ShareFS initialized with root=%r", self.fs)

    def create(self,
               name: str = "",
               public: bool = False,
               protected: bool = False,
               no_preview: bool = False,
               kind: Optional[Kind] = None) -> StoredObject:
        """Return a new, empty object bound to this store. A secret is
        generated right away when `protected` is set.
        """
        flags = Flags(public=public, protected=protected,
                      no_preview=no_preview)
        return StoredObject(name, kind, flags, store=self)

    def put(self, content, name: str = "", **options) -> StoredObject:
        """Store `content` and return the finalized object.

        Args:
            content: Bytes, readable object or path to file.
            name: Display filename.
            **options: Flags and kind, as accepted by :meth:`create`.

        Returns:
            The finalized object; its secret may come from an earlier upload
            of the same content.
        """
        obj = self.create(name, **options)
        with closing(u.Stream(content)) as stream:
            for data in stream:
                obj.write(data)
        obj.flush()
        return obj

    def flush(self, obj: StoredObject) -> str:
        """Finalize `obj`: compress its payload, compute its address and
        persist it, merging with a container already stored there.

        Returns:
            The object's address.

        Raises:
            StateError: If `obj` was already finalized or compressed.
            IntegrityError: If the address is taken by a foreign file.
            ValueError: If the name or secret cannot be encoded.
        """
        if obj.state is not State.BUILDING:
            raise StateError("Object is already {0}".format(obj.state.value))

        # Rejects oversized names and malformed secrets while obj is intact.
        header = encode_header(obj.header)

        obj.state = State.FINALIZING
        raw = obj.read()
        obj.compress()
        address = u.computehash(raw)

        with self._lock_for(address):
            self._persist(obj, address, header)

        return obj.address

    def open(self, address: str, header_only: bool = False) -> StoredObject:
        """Return the stored object at `address`. The payload is left
        compressed; call :meth:`StoredObject.decompress` before reading it.

        Args:
            address: Object address.
            header_only: Skip reading the payload.

        Raises:
            ObjectNotFound: If nothing is stored at `address`.
            FormatError: If the stored file is not a valid container.
        """
        path = self._fs_path(address)

        try:
            with self.fs.openbin(path, "r") as fileobj:
                header = read_header(fileobj)
                payload = b"" if header_only else fileobj.read()
        except (pyfs.errors.ResourceNotFound, pyfs.errors.FileExpected):
            raise ObjectNotFound("Could not locate object: {0}".format(address),
                                 address)
        except FormatError as exc:
            logger.warning("Refusing to serve %s: %s", address, exc)
            exc.address = address
            raise

        return StoredObject.from_header(header, address, payload, store=self)

    def get(self, address: str) -> Optional[StoredObject]:
        """Return the header-only object at `address`, or ``None`` when there
        is no valid container there.
        """
        try:
            return self.open(address, header_only=True)
        except ObjectNotFound:
            return None

    def exists(self, address: str) -> bool:
        """Check whether a file is stored under `address`."""
        if not _ADDRESS_PATTERN.match(address or ""):
            return False
        return self.fs.isfile(address)

    def files(self) -> Iterable[str]:
        """Return generator that yields the address of every stored file."""
        for info in self.fs.scandir("/"):
            if info.is_file and _ADDRESS_PATTERN.match(info.name):
                yield info.name

    def count(self) -> int:
        """Return count of the number of files in the backing :attr:`fs`."""
        return sum(1 for _ in self.files())

    def size(self) -> int:
        """Return the total size in bytes of all stored files."""
        return sum(self.fs.getsize(address) for address in self.files())

    def __contains__(self, address: str) -> bool:
        return self.exists(address)

    def __iter__(self) -> Iterable[str]:
        """Iterate over the addresses of all stored files."""
        return self.files()

    def __len__(self) -> int:
        return self.count()

    def _persist(self, obj: StoredObject, address: str, header: bytes) -> None:
        try:
            fileobj = self.fs.openbin(address, "x")
        except pyfs.errors.FileExists:
            self._merge(obj, address)
            return

        try:
            with fileobj:
                fileobj.write(header)
                fileobj.write(obj.payload)
        except Exception:
            self._discard(address)
            raise

        obj.address = address
        obj.state = State.PERSISTED
        logger.debug("Stored %s (%d compressed bytes)", address,
                     len(obj.payload))

    def _merge(self, obj: StoredObject, address: str) -> None:
        """Merge `obj` into the container already stored at `address` and
        rewrite that container's header. The stored payload bytes are copied
        over unchanged.
        """
        tmp_path = ".{0}.{1}.tmp".format(address, uuid.uuid4().hex)

        message = ("Address {0} is taken by a file that is not a sharefs "
                   "container".format(address))
        try:
            existing_file = self.fs.openbin(address, "r")
        except pyfs.errors.FileExpected as exc:
            raise IntegrityError(message, address) from exc

        with existing_file:
            try:
                existing = read_header(existing_file)
            except FormatError as exc:
                raise IntegrityError(message, address) from exc

            merged = merge_headers(existing, obj.header)
            try:
                with self.fs.openbin(tmp_path, "x") as tmp_file:
                    tmp_file.write(encode_header(merged))
                    pyfs.tools.copy_file_data(existing_file, tmp_file)
            except Exception:
                self._discard(tmp_path)
                raise

        try:
            self.fs.move(tmp_path, address, overwrite=True)
        except Exception:
            self._discard(tmp_path)
            raise

        obj.flags = merged.flags
        obj.secret = merged.secret
        obj.address = address
        obj.state = State.MERGED
        logger.debug("Merged upload into existing %s (public=%s, protected=%s,"
                     " no_preview=%s)", address, merged.flags.public,
                     merged.flags.protected, merged.flags.no_preview)

    def _discard(self, path: str) -> None:
        try:
            self.fs.remove(path)
        except pyfs.errors.ResourceNotFound:
            pass

    def _lock_for(self, address: str) -> threading.Lock:
        return self._locks[hash(address) % _LOCK_STRIPES]

    def _fs_path(self, address: str) -> str:
        """Return the path for `address`, rejecting anything that is not a
        plain address.
        """
        if not _ADDRESS_PATTERN.match(address or ""):
            raise ObjectNotFound("Invalid address: {0!r}".format(address),
                                 address)
        return address
