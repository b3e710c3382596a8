# -*- coding: utf-8 -*-
"""Errors raised while storing or resolving links. Each carries the HTTP
status the web layer answers with.
"""


class HashLinkError(Exception):
    """Base class for hashlink errors."""

    status = 500
    default_message = "Internal Server Error"

    def __init__(self, message=None):
        super().__init__(message or self.default_message)


class BadRequest(HashLinkError):
    status = 400
    default_message = "Bad Request"


class NotFound(HashLinkError):
    """Unknown identifier, or a known identifier whose file is gone."""

    status = 404
    default_message = "Not Found"


class PayloadTooLarge(HashLinkError):
    """Payload is empty or exceeds the configured size ceiling."""

    status = 413
    default_message = "Request Entity Too Large"


class UnsupportedMediaType(HashLinkError):
    """Payload is not a recognized image."""

    status = 415
    default_message = "Unsupported Media Type"


class InternalError(HashLinkError):
    """Store, filesystem or entropy source failure."""
