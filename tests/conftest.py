# -*- coding: utf-8 -*-

import pytest
from fs.memoryfs import MemoryFS

from hashlink import FSStore, HashLink


PNG_HEADER = b"\x89PNG\r\n\x1a\n\x00\x00\x00\rIHDR\x00\x00\x00\x01\x00\x00\x00\x01"
GIF_HEADER = b"GIF89a\x01\x00\x01\x00\x80\x00\x00"
JPEG_HEADER = b"\xff\xd8\xff\xe0\x00\x10JFIF\x00"


def make_png(tag=b""):
    return PNG_HEADER + b"\x08\x02\x00\x00\x00" + tag


@pytest.fixture
def png():
    return make_png(b"cat")


@pytest.fixture
def gif():
    return GIF_HEADER + b"dog"


@pytest.fixture
def jpeg():
    return JPEG_HEADER + b"bird"


@pytest.fixture
def text():
    return b"hello, world\n"


@pytest.fixture
def testpath(tmpdir):
    return tmpdir.mkdir("upload")


@pytest.fixture
def store():
    return FSStore(MemoryFS())


@pytest.fixture
def links(store, testpath):
    return HashLink(store, str(testpath))
