"""Module for the key-value stores backing the link records."""

import logging
import secrets
from typing import Iterable, Optional, Tuple, Union

import fs as pyfs
from fs.base import FS
from fs.permissions import Permissions

import hashlink.utils as u

logger = logging.getLogger(__name__)

TMP_SUFFIX = ".tmp"


class KVStore(object):
    """Durable mapping of string keys to string values.

    Subclasses implement :meth:`get`, :meth:`put` and :meth:`count`. Single
    key operations must be atomic; nothing else is guaranteed.
    """

    def get(self, key: str) -> Optional[str]:
        """Return the value stored under `key` or ``None``."""
        raise NotImplementedError

    def put(self, key: str, value: str) -> None:
        """Store `value` under `key`, replacing any previous value. The write
        is durable once this returns.
        """
        raise NotImplementedError

    def count(self) -> int:
        """Return the number of keys in the store."""
        raise NotImplementedError

    def put_many(self, items: Iterable[Tuple[str, str]]) -> None:
        """Write `items` in order. Backends with transactions should override
        this to commit the batch atomically; the default is sequential, so a
        failure part way leaves the earlier writes in place.
        """
        for key, value in items:
            self.put(key, value)

    def close(self) -> None:
        pass

    def __contains__(self, key: str) -> bool:
        return self.get(key) is not None

    def __len__(self) -> int:
        return self.count()


class FSStore(KVStore):
    """Key-value store laid out as files in a pyfilesystem2 filesystem.

    Each key becomes one file whose path is the sharded SHA-256 of the key
    and whose contents are the UTF-8 encoded value.

    Attributes:
        fs: Backing filesystem.
        depth (int, optional): Depth of subfolders to create for a key.
        width (int, optional): Width of each subfolder.
        dmode (int, optional): Directory mode permission to set for
            subdirectories. Defaults to ``0o755``.
    """

    def __init__(self,
                 root: Union[FS, str],
                 depth: int = 2,
                 width: int = 2,
                 dmode: int = 0o755):
        self.fs = u.load_fs(root)
        self.depth = depth
        self.width = width
        self.dmode = dmode

    def get(self, key: str) -> Optional[str]:
        path = self._key_to_path(key)
        try:
            return self.fs.readtext(path, encoding="utf-8")
        except pyfs.errors.ResourceNotFound:
            return None

    def put(self, key: str, value: str) -> None:
        path = self._key_to_path(key)
        self._makedirs(pyfs.path.dirname(path))

        # Write beside the destination, then rename over it.
        tmp = "{0}.{1}{2}".format(path, secrets.token_hex(4), TMP_SUFFIX)
        try:
            self.fs.writetext(tmp, value, encoding="utf-8")
            self.fs.move(tmp, path, overwrite=True)
        except pyfs.errors.FSError:
            if self.fs.exists(tmp):
                self.fs.remove(tmp)
            raise

    def count(self) -> int:
        return sum(1 for _ in self.fs.walk.files(exclude=["*" + TMP_SUFFIX]))

    def close(self) -> None:
        self.fs.close()

    def _key_to_path(self, key: str) -> str:
        """Build the file path holding `key`."""
        digest = u.computehash(key)
        return pyfs.path.join("/", *u.shard(digest, self.depth, self.width))

    def _makedirs(self, dir_path: str) -> None:
        perms = Permissions.create(self.dmode)
        self.fs.makedirs(dir_path, permissions=perms, recreate=True)


def open_store(store: Union[KVStore, FS, str]) -> KVStore:
    """Return `store` if it already is a :class:`KVStore`, otherwise wrap the
    filesystem or connection string (``osfs://data``, ``mem://`` or a plain
    directory path) in an :class:`FSStore`.
    """
    if isinstance(store, KVStore):
        return store

    logger.debug("Opening link store %r", store)
    return FSStore(store)
