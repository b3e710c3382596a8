# -*- coding: utf-8 -*-


"""
common utils for hashlink
"""


import hashlib
from typing import List, Union

import fs as pyfs
from fs.base import FS


def compact(items):
    """Return only truthy elements of `items`."""
    return [item for item in items if item]


def to_bytes(text) -> bytes:
    if not isinstance(text, bytes):
        text = bytes(text, "utf8")
    return text


def shard(digest, depth, width) -> List[str]:
    # This creates a list of `depth` number of tokens with width
    # `width` from the first part of the id plus the remainder.
    return compact(
        [digest[i * width : width * (i + 1)] for i in range(depth)]
        + [digest[depth * width :]]
    )


def computehash(data, algorithm: str = "sha256") -> str:
    """Return the hex digest of `data` using `algorithm` from ``hashlib``."""
    return hashlib.new(algorithm, to_bytes(data)).hexdigest()


def load_fs(root: Union[FS, str], create: bool = True) -> FS:
    """Return `root` if it is already a filesystem, otherwise open it as a
    pyfilesystem2 URL or plain directory path.
    """
    if isinstance(root, FS):
        return root

    return pyfs.open_fs(root, create=create)
