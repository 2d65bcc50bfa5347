"""Exception hierarchy shared by the query and reload paths."""

from __future__ import annotations


class ArmoryError(Exception):
    """Base class for all application errors."""


class ValidationError(ArmoryError, ValueError):
    """A request parameter is outside its allowed values."""


class NotFoundError(ArmoryError, LookupError):
    """A referenced collection (or its text index) does not exist."""


class IngestError(ArmoryError):
    """A source file could not be read, parsed or converted."""


class ConnectivityError(ArmoryError):
    """The document store cannot be reached."""
