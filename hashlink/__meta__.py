# -*- coding: utf-8 -*-
"""Define project metadata
"""

__title__ = "hashlink"
__summary__ = "A content-addressable image store with short, stable links."
__url__ = "https://github.com/dgilland/hashlink"

__version__ = "0.1.0"

__install_requires__ = [
    "fs>=2.4",
    # fs resolves its openers through pkg_resources.
    "setuptools<81",
    "filetype>=1.2",
    "fastapi>=0.100",
    "python-multipart",
    "pydantic-settings>=2.0",
    "uvicorn",
]
__tests_require__ = ["pytest", "httpx"]

__author__ = "Derrick Gilland"
__email__ = "dgilland@gmail.com"

__license__ = "MIT License"
