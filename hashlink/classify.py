# -*- coding: utf-8 -*-
"""Image detection from magic bytes."""

from collections import namedtuple

import filetype


class Classification(namedtuple("Classification", ["is_image", "mime"])):
    """Result of inspecting a payload. `mime` is ``None`` when the signature
    is not recognized.
    """

    @property
    def accepted(self) -> bool:
        return bool(self.is_image and self.mime)


def classify(data: bytes) -> Classification:
    """Inspect the leading bytes of `data` and report whether it is an image
    and which MIME type it carries. Filenames and client headers are not
    consulted.
    """
    if not data:
        return Classification(False, None)

    kind = filetype.guess(data)
    mime = kind.mime if kind is not None else None

    return Classification(filetype.is_image(data), mime)
