"""Exceptions raised by the client and registry."""

from __future__ import annotations


class ApiError(Exception):
    """The API answered, but the envelope was empty or carried errors."""


class UnknownSportError(KeyError):
    """No registry entry for the requested sport."""


class UnknownResourceKind(KeyError):
    """The store or client has no table for the requested resource kind."""
