from __future__ import annotations


class ListingDoctorError(Exception):
    """Base class for listing-doctor failures."""


class StructuralError(ListingDoctorError, ValueError):
    """The source is empty or unreadable; no partial result is possible."""


class UnsupportedInputError(StructuralError):
    """Content type does not match what the filename promises."""


class CliError(ListingDoctorError):
    def __init__(self, message: str, code: int = 1) -> None:
        super().__init__(message)
        self.code = code
