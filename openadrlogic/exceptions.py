from __future__ import annotations

from typing import Sequence


class OpenADRError(Exception): ...


class DecodeError(OpenADRError):
    """A wire document could not be turned into a value."""

    def __init__(self, message: str, *, field: str | None = None):
        super().__init__(message)
        self.field = field


class EmptyIdentifierError(DecodeError, ValueError):
    def __init__(self, what: str = "identifier"):
        super().__init__(f"The given {what} must not be empty or whitespace.")
        self.what = what


class MissingFieldError(DecodeError):
    def __init__(self, field: str):
        super().__init__(f"Missing mandatory field '{field}'.", field=field)


class InvalidFieldError(DecodeError):
    def __init__(self, field: str, reason: str):
        super().__init__(f"Invalid field '{field}': {reason}", field=field)
        self.reason = reason


class InvalidElementError(DecodeError):
    def __init__(self, field: str, index: int, reason: str):
        super().__init__(
            f"Invalid element {index} of field '{field}': {reason}", field=field
        )
        self.index = index
        self.reason = reason


class UnknownObjectTypeError(DecodeError):
    def __init__(
        self,
        discriminator: str,
        *,
        field: str | None = None,
        index: int | None = None,
    ):
        where = ""
        if field is not None:
            where = f" in field '{field}'"
            if index is not None:
                where = f" in element {index} of field '{field}'"
        super().__init__(f"Unknown object type '{discriminator}'{where}.", field=field)
        self.discriminator = discriminator
        self.index = index


class MalformedDocumentError(DecodeError):
    def __init__(self, detail: str):
        super().__init__(f"Malformed document: {detail}")
        self.detail = detail


class DecodeErrors(DecodeError):
    """Every field error of one document, collected when fail-fast is off."""

    def __init__(self, errors: Sequence[DecodeError]):
        self.errors = list(errors)
        super().__init__("; ".join(str(e) for e in self.errors))


def require(condition: bool, message: str, exc: type[Exception] = ValueError):
    """Raise the given exception if condition is False."""
    if not condition:
        raise exc(message)
