"""Custom exception classes"""

from __future__ import annotations

from enum import Enum
from typing import Any, NoReturn


class Errors(str, Enum):
    """Error kinds raised by the workflow"""

    InvalidFilePath = "InvalidFilePath"
    SchemaValidation = "SchemaValidation"
    UnknownKey = "UnknownKey"
    Migration = "Migration"


class AlfredError(Exception):
    """Base exception for the workflow"""

    kind: Errors = Errors.SchemaValidation

    def __init__(self, message: str, kind: Errors | None = None) -> None:
        super().__init__(message)
        if kind is not None:
            self.kind = kind
        self.message = message

    def __str__(self) -> str:
        return f"{self.kind.value}: {self.message}"


class InvalidFilePathError(AlfredError):
    """No usable storage directory"""

    kind = Errors.InvalidFilePath


class SchemaValidationError(AlfredError):
    """A value does not satisfy its setting's rule"""

    kind = Errors.SchemaValidation

    def __init__(self, message: str, key: str | None = None, value: Any = None) -> None:
        super().__init__(message)
        self.key = key
        self.value = value


class UnknownKeyError(AlfredError):
    """Key outside the fixed set of settings"""

    kind = Errors.UnknownKey

    def __init__(self, message: str, key: str | None = None) -> None:
        super().__init__(message)
        self.key = key


class MigrationError(AlfredError):
    """A settings migration failed"""

    kind = Errors.Migration


_ERROR_TYPES: dict[Errors, type[AlfredError]] = {
    Errors.InvalidFilePath: InvalidFilePathError,
    Errors.SchemaValidation: SchemaValidationError,
    Errors.UnknownKey: UnknownKeyError,
    Errors.Migration: MigrationError,
}


def raise_error(kind: Errors | str, message: str) -> NoReturn:
    """Raise the exception matching ``kind`` with ``message``."""
    kind = Errors(kind)
    raise _ERROR_TYPES[kind](message)
