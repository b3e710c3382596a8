"""Module for HashLink class."""

import hashlib
import logging
from collections import namedtuple
from typing import Optional, Union

import fs as pyfs
from fs.base import FS

import hashlink.utils as u
from .classify import classify
from .exceptions import InternalError, NotFound, PayloadTooLarge, UnsupportedMediaType
from .ids import DEFAULT_ALPHABET, DEFAULT_LENGTH, generate
from .kvstore import KVStore, open_store

logger = logging.getLogger(__name__)

DEFAULT_MAX_SIZE = 10000000
FALLBACK_MIME = "application/octet-stream"

IO_ERRORS = (pyfs.errors.FSError, OSError)

# Longest file name most filesystems accept, in bytes.
MAX_NAME_BYTES = 255


def safe_filename(filename: Optional[str]) -> str:
    """Return the last component of a client supplied `filename`, or an empty
    string if nothing usable is left.
    """
    name = pyfs.path.basename((filename or "").replace("\\", "/")).strip()
    if name in (".", ".."):
        return ""
    return name


def fit_filename(name: str, limit: int = MAX_NAME_BYTES) -> str:
    """Shorten `name` to at most `limit` UTF-8 bytes, keeping its extension
    when there is room for it.
    """
    encoded = u.to_bytes(name)
    if len(encoded) <= limit:
        return name

    stem, ext = pyfs.path.splitext(name)
    ext_bytes = u.to_bytes(ext)
    if len(ext_bytes) >= limit:
        stem, ext_bytes = name, b""

    room = limit - len(ext_bytes)
    stem = u.to_bytes(stem)[:room].decode("utf8", errors="ignore")
    return stem + ext_bytes.decode("utf8")


class LinkAddress(namedtuple("LinkAddress", ["id", "path", "is_duplicate"])):
    """Short identifier of an upload, the path of its file in the upload
    filesystem, and whether the content had already been stored.
    """

    def __new__(cls, id, path, is_duplicate=False):
        return super(LinkAddress, cls).__new__(cls, id, path, is_duplicate)


class Resolved(namedtuple("Resolved", ["id", "path", "content", "mime"])):
    """Stored bytes of an identifier and the MIME type detected from them."""


class HashLink(object):
    """Content addressable image store handing out short identifiers.

    Uploads are fingerprinted with :attr:`algorithm`. The first upload of some
    content gets a fresh identifier, its file in :attr:`fs` and two records in
    :attr:`store`: ``fingerprint -> id`` and ``id -> path``. Later uploads of
    the same bytes return the existing identifier without writing anything.

    Attributes:
        store: Key-value store holding both record kinds in one key space.
            Accepts a :class:`KVStore`, a filesystem or a connection string.
        root: Upload directory, a pyfilesystem2 FS or a path/URL to one.
        alphabet (str, optional): Characters identifiers are drawn from.
        length (int, optional): Length of generated identifiers.
        max_size (int, optional): Largest accepted payload, in bytes.
        algorithm (str): Hash algorithm to fingerprint uploads with. Should be
            a member of ``hashlib.algorithms_available``. Defaults to
            ``'sha256'``.
    """

    def __init__(self,
                 store: Union[KVStore, FS, str],
                 root: Union[FS, str],
                 alphabet: str = DEFAULT_ALPHABET,
                 length: int = DEFAULT_LENGTH,
                 max_size: int = DEFAULT_MAX_SIZE,
                 algorithm: hashlib.algorithms_available = "sha256"):
        self.store = open_store(store)
        self.fs = u.load_fs(root)
        self.alphabet = alphabet
        self.length = length
        self.max_size = max_size
        self.algorithm = algorithm

    def put(self, data: bytes, filename: str) -> LinkAddress:
        """Store `data` uploaded as `filename` and return its address.

        Args:
            data: Raw uploaded bytes.
            filename: Name the client uploaded the file under.

        Returns:
            The address of the stored upload. ``is_duplicate`` is set when the
            bytes were already known, in which case ``path`` is the path of
            the original upload.

        Raises:
            PayloadTooLarge: If `data` is empty or larger than
                :attr:`max_size`.
            UnsupportedMediaType: If `data` is not a recognized image.
            InternalError: If the store or the filesystem fails.
        """
        size = len(data)
        if size <= 0 or size > self.max_size:
            logger.info("Rejected upload %r of %d bytes (max %d)",
                        filename, size, self.max_size)
            raise PayloadTooLarge()

        fingerprint = self._computehash(data)

        existing = self._lookup(fingerprint)
        if existing is not None:
            logger.debug("Upload %r matches existing link %s", filename, existing)
            return LinkAddress(existing, self._lookup(existing), True)

        kind = classify(data)
        if not kind.accepted:
            logger.info("Rejected upload %r: not a recognized image (%s)",
                        filename, kind.mime)
            raise UnsupportedMediaType()

        try:
            id = generate(self.alphabet, self.length)
        except (NotImplementedError, OSError) as exc:
            logger.error("Could not generate identifier: %s", exc)
            raise InternalError(str(exc))

        path = self._write(data, filename, id)

        try:
            self.store.put_many([(fingerprint, id), (id, path)])
        except IO_ERRORS as exc:
            logger.error("Could not record link %s for %s: %s", id, path, exc)
            raise InternalError(str(exc))

        logger.info("Stored %s (%s, %d bytes) as %s", path, kind.mime, size, id)
        return LinkAddress(id, path)

    def get(self, id: str) -> Optional[LinkAddress]:
        """Return the :class:`LinkAddress` recorded for `id`, or ``None`` if
        the identifier was never issued.
        """
        if not id:
            return None

        path = self._lookup(id)
        # Fingerprints share the key space but map to identifiers, not paths.
        if path is None or not path.startswith("/"):
            return None

        return LinkAddress(id, path, True)

    def resolve(self, id: str) -> Resolved:
        """Return the stored bytes of `id` and their MIME type. The type is
        detected again from the bytes on every call.

        Raises:
            NotFound: If `id` is unknown or its file can't be read.
            InternalError: If the store fails.
        """
        address = self.get(id)
        if address is None:
            logger.info("Unknown link %r", id)
            raise NotFound()

        try:
            content = self.fs.readbytes(address.path)
        except IO_ERRORS as exc:
            logger.warning("Link %s points to unreadable file %s: %s",
                           id, address.path, exc)
            raise NotFound()

        mime = classify(content).mime or FALLBACK_MIME

        return Resolved(id, address.path, content, mime)

    def exists(self, id: str) -> bool:
        """Check whether `id` has been issued."""
        return self.get(id) is not None

    def count(self) -> int:
        """Return the number of keys in :attr:`store`. Both record kinds are
        counted.
        """
        try:
            return self.store.count()
        except IO_ERRORS as exc:
            raise InternalError(str(exc))

    def close(self) -> None:
        self.store.close()
        self.fs.close()

    def __contains__(self, id: str) -> bool:
        return self.exists(id)

    def __len__(self) -> int:
        return self.count()

    def _computehash(self, data: bytes) -> str:
        """Compute hash of `data` using :attr:`algorithm`."""
        return u.computehash(data, self.algorithm)

    def _lookup(self, key: str) -> Optional[str]:
        try:
            return self.store.get(key)
        except IO_ERRORS as exc:
            logger.error("Link store lookup failed: %s", exc)
            raise InternalError(str(exc))

    def _write(self, data: bytes, filename: str, id: str) -> str:
        """Write `data` under `filename` in :attr:`fs` and return the path.
        When the name is taken the file is saved as ``{id}-{filename}``
        instead. Both names are created exclusively, so a concurrent upload
        can never overwrite another one's file.
        """
        name = safe_filename(filename) or id
        path = pyfs.path.join("/", fit_filename(name))

        try:
            try:
                self._create(path, data)
            except pyfs.errors.FileExists:
                prefix = "{0}-".format(id)
                limit = MAX_NAME_BYTES - len(u.to_bytes(prefix))
                path = pyfs.path.join("/", prefix + fit_filename(name, limit))
                self._create(path, data)
        except IO_ERRORS as exc:
            logger.error("Could not write %s: %s", path, exc)
            raise InternalError(str(exc))

        return path

    def _create(self, path: str, data: bytes) -> None:
        """Write `data` to a new file at `path`. Raises ``FileExists`` if the
        path is taken.
        """
        with self.fs.openbin(path, "x") as fileobj:
            fileobj.write(data)
