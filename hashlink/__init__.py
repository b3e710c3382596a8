# -*- coding: utf-8 -*-
"""HashLink stores uploaded images once per distinct content and hands out
short, stable identifiers that resolve back to them.

- Uploads are fingerprinted with SHA-256; re-uploading the same bytes under
  any name returns the identifier issued the first time.
- Identifiers are random tokens from a configurable alphabet and length.
- Only payloads whose magic bytes identify an image are accepted.
- Link records live in a small key-value store, image files in an upload
  directory, both on top of pyfilesystem2.
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

from .exceptions import (
    HashLinkError,
    BadRequest,
    NotFound,
    PayloadTooLarge,
    UnsupportedMediaType,
    InternalError,
)
from .hashlink import HashLink, LinkAddress, Resolved
from .kvstore import KVStore, FSStore, open_store


__all__ = (
    "HashLink",
    "LinkAddress",
    "Resolved",
    "KVStore",
    "FSStore",
    "open_store",
    "HashLinkError",
    "BadRequest",
    "NotFound",
    "PayloadTooLarge",
    "UnsupportedMediaType",
    "InternalError",
)
