from __future__ import annotations


class SerializationError(ValueError):
    """Document could not be encoded to, or decoded from, its JSON wire form."""


class TransportError(Exception):
    """Network or I/O failure while sending a request."""
